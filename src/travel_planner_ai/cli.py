"""Command-line interface for the travel planner AI core."""

import asyncio
import datetime
from pathlib import Path
from uuid import uuid4

import typer
from rich.console import Console
from rich.table import Table

from travel_planner_ai.application.decoding import NdjsonStreamDecoder
from travel_planner_ai.application.events import EventRouter
from travel_planner_ai.application.services import AgentRegistry, GenerationService, PromptTemplateService
from travel_planner_ai.config import DecodeErrorPolicy, settings
from travel_planner_ai.domain.exceptions import TravelPlannerError
from travel_planner_ai.domain.models import (
    AgentStatus,
    AgentType,
    ChatMessageGenerated,
    ChatRequested,
    DailyPlan,
    DailyPlanGenerated,
    DecodeFailure,
    DomainEvent,
    GenerationCancelled,
    GenerationCompleted,
    GenerationFailed,
    ItineraryRequested,
    StreamEnd,
    StreamUnit,
    StreamUnitRejected,
    Transportation,
)
from travel_planner_ai.infrastructure.di.container import build_container
from travel_planner_ai.observability import setup_logging

# Initialize Typer app
app = typer.Typer(
    name="travel-planner",
    help="Travel planner AI - agent dispatch, prompt composition and streamed itinerary generation",
    add_completion=False,
)

# Rich console for pretty output
console = Console()

AGENT_DESCRIPTIONS = {
    AgentType.CHAT: "Answers free-form questions about the trip",
    AgentType.ITINERARY: "Streams a day-by-day itinerary as NDJSON",
    AgentType.PLACE_SUMMARY: "Rewrites raw place data into a plain-text description",
}


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")):
    """Configure logging for every command."""
    setup_logging("DEBUG" if verbose or settings.app.debug else settings.app.log_level, settings.app.log_file)


@app.command()
def info():
    """Display configuration information."""
    table = Table(title="Travel Planner AI Info")

    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Environment", settings.app.environment.value)
    table.add_row("Debug Mode", str(settings.app.debug))
    table.add_row("Template Store", str(settings.app.template_store_path))
    table.add_row("Azure Endpoint", settings.model.endpoint or "(not set)")
    table.add_row("Chat Deployment", settings.model.chat_deployment_name or "(not set)")
    table.add_row("Azure API Version", settings.model.api_version)
    table.add_row("Authentication", "API key" if settings.model.api_key else "DefaultAzureCredential")
    table.add_row("Stall Timeout", f"{settings.generation.stall_timeout}s")
    table.add_row("Decode Error Policy", settings.generation.decode_error_policy.value)
    table.add_row("Memory Window", str(settings.generation.memory_window))
    table.add_row("Retries", str(settings.resilience.enable_retries))
    table.add_row("OTEL Enabled", str(settings.observability.enable_otel))

    console.print(table)


@app.command()
def list_agents():
    """List registered agents."""
    registry = build_container().get(AgentRegistry)

    table = Table(title="Registered Agents")
    table.add_column("Agent Type", style="cyan")
    table.add_column("Name", style="yellow")
    table.add_column("Description", style="green")

    for agent_type in registry.supported_types():
        table.add_row(agent_type.value, registry.get(agent_type).name, AGENT_DESCRIPTIONS.get(agent_type, ""))

    console.print(table)


@app.command()
def templates(
    agent_type: AgentType | None = typer.Option(None, "--agent", "-a", help="Filter by agent type"),
):
    """List stored prompt templates."""

    async def run_list():
        service = build_container().get(PromptTemplateService)
        stored = await service.list_templates(agent_type=agent_type)
        if not stored:
            console.print("[yellow]No templates found. Run 'seed-templates' to install the defaults.[/yellow]")
            return

        table = Table(title="Prompt Templates")
        table.add_column("ID", style="cyan")
        table.add_column("Agent Type", style="yellow")
        table.add_column("Role")
        table.add_column("Active")
        table.add_column("Description")
        table.add_column("Body", style="dim")
        for template in stored:
            preview = template.body.replace("\n", " ")
            table.add_row(
                str(template.id),
                template.agent_type.value,
                template.role.value,
                "[green]yes[/green]" if template.active else "no",
                template.description or "",
                preview[:60] + ("..." if len(preview) > 60 else ""),
            )
        console.print(table)

    asyncio.run(run_list())


@app.command()
def seed_templates():
    """Install the built-in prompts as active templates."""

    async def run_seed():
        service = build_container().get(PromptTemplateService)
        created = await service.seed_defaults()
        if created:
            console.print(f"[green]Installed {len(created)} template(s)[/green]")
        else:
            console.print("[dim]Every agent already has active templates[/dim]")

    asyncio.run(run_seed())


@app.command()
def decode(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="NDJSON file of daily plans"),
    chunk_size: int = typer.Option(0, "--chunk-size", "-c", help="Feed the file in chunks of this many bytes"),
    policy: DecodeErrorPolicy = typer.Option(DecodeErrorPolicy.SKIP, help="What to do with a malformed line"),
):
    """Decode an NDJSON itinerary file and show its daily plans."""
    data = file.read_bytes()
    chunks = [data[i : i + chunk_size] for i in range(0, len(data), chunk_size)] if chunk_size > 0 else [data]

    decoder = NdjsonStreamDecoder(DailyPlan, policy)
    try:
        items = decoder.decode_all(chunks)
    except TravelPlannerError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1) from e

    table = Table(title=f"Decoded {file.name}")
    table.add_column("Seq", style="cyan")
    table.add_column("Line", style="dim")
    table.add_column("Day", style="yellow")
    table.add_column("Date")
    table.add_column("Title / Reason")
    table.add_column("Places")

    for item in items:
        if isinstance(item, StreamUnit):
            plan: DailyPlan = item.value
            table.add_row(
                str(item.sequence),
                str(item.line_number),
                str(plan.day_number),
                plan.date.isoformat(),
                plan.title,
                str(len(plan.places)),
            )
        elif isinstance(item, DecodeFailure):
            table.add_row("-", str(item.line_number), "-", "-", f"[red]{item.reason}[/red]", "-")
        elif isinstance(item, StreamEnd):
            console.print(table)
            console.print(f"[green]{item.unit_count} unit(s)[/green], [red]{item.failure_count} rejected[/red]")


def _print_event(event: DomainEvent) -> None:
    if isinstance(event, DailyPlanGenerated):
        console.print(f"[green]Day {event.day_number}[/green] {event.unit.title} ({event.unit.date})")
        for place in event.unit.places:
            console.print(
                f"  [dim]{place.visit_order}. {place.category.value} "
                f"{place.start_time:%H:%M}-{place.end_time:%H:%M} "
                f"place {place.place_id} via {place.transportation.value}[/dim]"
            )
    elif isinstance(event, ChatMessageGenerated):
        console.print("[green]Response:[/green]")
        console.print(f"  {event.text}")
    elif isinstance(event, StreamUnitRejected):
        console.print(f"[yellow]Rejected line {event.line_number}:[/yellow] {event.reason}")
    elif isinstance(event, GenerationCompleted):
        console.print(f"[green]Completed[/green] [dim]({event.unit_count} unit(s))[/dim]")
    elif isinstance(event, GenerationFailed):
        console.print(f"[red]Failed:[/red] {event.reason} [dim]({event.error_code})[/dim]")
    elif isinstance(event, GenerationCancelled):
        console.print("[yellow]Cancelled[/yellow]")


async def _run_generation(request) -> AgentStatus:
    container = build_container()
    router = container.get(EventRouter)

    async def print_event(event: DomainEvent) -> None:
        _print_event(event)

    await container.get(PromptTemplateService).seed_defaults()
    router.subscribe(DomainEvent, print_event, name="console")
    await router.start()
    service = container.get(GenerationService)
    await service.start()
    try:
        return await service.run(request)
    finally:
        await router.drain()
        await service.cleanup()
        await router.cleanup()


@app.command()
def plan(
    region: str = typer.Option(..., help="Destination region"),
    start_date: datetime.datetime = typer.Option(..., formats=["%Y-%m-%d"], help="First day of the trip"),
    days: int = typer.Option(3, min=1, help="Number of days"),
    theme: list[str] | None = typer.Option(None, "--theme", help="Preferred theme, repeatable"),
    party_size: int = typer.Option(1, min=1, help="Number of travellers"),
    transport: Transportation = typer.Option(Transportation.PUBLIC_TRANSIT, help="Transportation mode"),
    trip_id: int | None = typer.Option(None, help="Existing trip to extend"),
    user_id: str = typer.Option("cli-user", help="User the plan belongs to"),
):
    """Generate an itinerary with the configured model and print each day as it arrives."""
    request = ItineraryRequested(
        conversation_id=str(uuid4()),
        trip_id=trip_id,
        user_id=user_id,
        region=region,
        start_date=start_date.date(),
        duration_days=days,
        themes=theme or [],
        party_size=party_size,
        transport_mode=transport,
    )
    console.print(f"[cyan]Planning {days} day(s) in {region} from {request.start_date}[/cyan]")

    try:
        status = asyncio.run(_run_generation(request))
    except TravelPlannerError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1) from e
    if status != AgentStatus.COMPLETED:
        raise typer.Exit(1)


@app.command()
def chat(
    message: str = typer.Argument(..., help="Message to send to the chat agent"),
    conversation_id: str | None = typer.Option(None, "--conversation", "-c", help="Conversation ID"),
    trip_id: int | None = typer.Option(None, help="Trip the conversation is about"),
    user_id: str = typer.Option("cli-user", help="User sending the message"),
):
    """Send one message to the chat agent."""
    request = ChatRequested(
        conversation_id=conversation_id or str(uuid4()),
        trip_id=trip_id,
        user_id=user_id,
        message=message,
    )
    console.print(f"[cyan]Sending: {message}[/cyan]")

    try:
        status = asyncio.run(_run_generation(request))
    except TravelPlannerError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1) from e
    if status != AgentStatus.COMPLETED:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
