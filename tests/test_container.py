"""Tests for dependency wiring."""

import datetime
from unittest.mock import AsyncMock

import pytest
from helpers import FakeModelClient, daily_plan_record, ndjson

from travel_planner_ai.application.events import EventRouter
from travel_planner_ai.application.services import AgentRegistry, GenerationService, PromptTemplateService
from travel_planner_ai.domain.exceptions import ConfigurationError
from travel_planner_ai.domain.interfaces import (
    IEventPublisher,
    IGenerationSink,
    ILiveConnectionHub,
    IModelClient,
    IPlaceSearch,
)
from travel_planner_ai.domain.models import AgentStatus, AgentType, ItineraryRequested
from travel_planner_ai.infrastructure.di.container import DIContainer, build_container
from travel_planner_ai.infrastructure.repositories.in_memory_prompt_template_repository import (
    InMemoryPromptTemplateRepository,
)


class TestDIContainer:
    """Test cases for DIContainer."""

    def test_singleton(self):
        """Test that singletons are returned as registered."""
        container = DIContainer()
        instance = object()
        container.register_singleton(object, instance)

        assert container.get(object) is instance

    def test_lazy_singleton_is_built_once(self):
        """Test that lazy singletons are built on first use only."""
        container = DIContainer()
        calls = []
        container.register_lazy_singleton(list, lambda: calls.append(1) or ["built"])

        assert container.get(list) is container.get(list)
        assert calls == [1]

    def test_transient(self):
        """Test that transient factories build a new instance every time."""
        container = DIContainer()
        container.register_transient(dict, dict)

        assert container.get(dict) is not container.get(dict)
        assert container.is_registered(dict)

    def test_unregistered_service(self):
        """Test that asking for an unknown service fails."""
        with pytest.raises(ConfigurationError):
            DIContainer().get(int)


class TestBuildContainer:
    """Test cases for build_container."""

    def test_wires_all_agents(self):
        """Test that the registry holds one agent per type."""
        container = build_container(
            model_client=FakeModelClient(), template_repository=InMemoryPromptTemplateRepository()
        )

        registry = container.get(AgentRegistry)

        assert set(registry.supported_types()) == set(AgentType)
        assert container.get(IEventPublisher) is container.get(EventRouter)
        assert container.get(GenerationService) is container.get(GenerationService)

    def test_default_template_store_path(self, tmp_path):
        """Test that the file template store is used by default."""
        container = build_container(model_client=FakeModelClient(), template_store_path=tmp_path / "store.json")

        repository = container.get(PromptTemplateService)._repository

        assert repository.path == tmp_path / "store.json"

    def test_handlers_subscribed_only_when_given(self):
        """Test that delivery handlers are wired for a hub and a sink."""
        bare = build_container(model_client=FakeModelClient())
        wired = build_container(
            model_client=FakeModelClient(),
            live_hub=AsyncMock(spec=ILiveConnectionHub),
            sink=AsyncMock(spec=IGenerationSink),
        )

        assert bare.get(EventRouter).subscriptions == []
        assert len(wired.get(EventRouter).subscriptions) == 4

    @pytest.mark.asyncio
    async def test_place_search_feeds_itinerary_prompt(self, place_search):
        """Test that a supplied place search is used for the itinerary candidates."""
        client = FakeModelClient(chunks=[ndjson([daily_plan_record(1, datetime.date(2025, 4, 1))])])
        container = build_container(
            model_client=client, template_repository=InMemoryPromptTemplateRepository(), place_search=place_search
        )
        await container.get(PromptTemplateService).seed_defaults()

        await container.get(GenerationService).run(
            ItineraryRequested(
                conversation_id="c-8",
                user_id="u-8",
                region="Jeju",
                start_date=datetime.date(2025, 4, 1),
                duration_days=1,
            )
        )

        assert container.get(IPlaceSearch) is place_search
        assert any("[Place ID: 101]" in message.content for message in client.prompts[0])

    @pytest.mark.asyncio
    async def test_itinerary_end_to_end_integration(self):
        """Test a streamed itinerary through the wired pipeline to the live hub."""
        records = [daily_plan_record(day, datetime.date(2025, 4, day)) for day in (1, 2)]
        hub = AsyncMock(spec=ILiveConnectionHub)
        container = build_container(
            model_client=FakeModelClient(chunks=[ndjson(records)]),
            template_repository=InMemoryPromptTemplateRepository(),
            live_hub=hub,
        )
        await container.get(PromptTemplateService).seed_defaults()
        router = container.get(EventRouter)
        await router.start()

        status = await container.get(GenerationService).run(
            ItineraryRequested(
                conversation_id="c-9",
                trip_id=11,
                user_id="u-3",
                region="Jeju",
                start_date=datetime.date(2025, 4, 1),
                duration_days=2,
            )
        )
        await router.drain()
        await router.cleanup()

        assert status == AgentStatus.COMPLETED
        sent = [(call.args[1], call.args[2]["type"]) for call in hub.send.await_args_list]
        assert sent == [
            ("/sub/schedule/11", "DAILY_PLAN"),
            ("/sub/schedule/11", "DAILY_PLAN"),
            ("/sub/chat/c-9", "COMPLETED"),
            ("/sub/schedule/11", "COMPLETED"),
        ]
        assert isinstance(container.get(IModelClient), FakeModelClient)
