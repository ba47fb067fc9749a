"""Providers describing the existing trip plan and the requested trip conditions."""

import logging

from travel_planner_ai.application.context.base_provider import BaseContextProvider
from travel_planner_ai.domain.interfaces import ITripPlanReader
from travel_planner_ai.domain.models import (
    ItineraryCommandContext,
    ItineraryQueryContext,
    MetadataEntry,
    TripPlanSnapshot,
    system_entries,
)

logger = logging.getLogger(__name__)


class ItineraryQueryProvider(BaseContextProvider[ItineraryQueryContext]):
    """Summarizes the current state of an existing trip plan.

    Returns nothing when the payload has no trip ID or the trip has no plan.
    """

    payload_type = ItineraryQueryContext
    default_priority = 20

    def __init__(self, plan_reader: ITripPlanReader):
        self._plan_reader = plan_reader

    async def build(self, payload: ItineraryQueryContext) -> list[MetadataEntry]:
        if payload.trip_id is None:
            logger.debug("No trip ID, skipping trip plan context")
            return []

        plan = await self._plan_reader.find_plan(payload.trip_id, payload.user_id)
        if plan is None:
            logger.debug(f"Trip {payload.trip_id} has no plan yet")
            return []

        summary = self.summarize(plan)
        return system_entries(
            "## Trip Plan Context\n\n"
            "The user's current trip plan.\n"
            "Never schedule the same place twice and never repeat a day title.\n\n"
            f"{summary}\n"
        )

    @staticmethod
    def summarize(plan: TripPlanSnapshot) -> str:
        """Render a plan snapshot as markdown."""
        lines = [
            "### Overview",
            f"- **Title**: {plan.title}",
            f"- **Period**: {plan.start_date} ~ {plan.end_date}",
        ]
        if not plan.daily_plans:
            lines.append("No days have been planned yet.")
            return "\n".join(lines)

        lines += ["### Days", ""]
        for day in plan.daily_plans:
            lines.append(f"#### Day {day.day_number}: {day.title} ({day.date})")
            if not day.place_names:
                lines.append("- *(nothing scheduled)*")
            for order, place_name in enumerate(day.place_names, start=1):
                lines.append(f"- **[{order}]** {place_name}")
            lines.append("")
        return "\n".join(lines)


class ItineraryCommandProvider(BaseContextProvider[ItineraryCommandContext]):
    """Formats the conditions of the requested trip."""

    payload_type = ItineraryCommandContext
    default_priority = 21

    async def build(self, payload: ItineraryCommandContext) -> list[MetadataEntry]:
        themes = "\n".join(f"- {theme}" for theme in payload.themes) or "- none"
        return system_entries(
            "## Requirements Context\n\n"
            "Conditions of the trip the user wants. Use them to build the itinerary.\n\n"
            "### Trip Conditions\n"
            "| Item | Value |\n"
            "|------|-------|\n"
            f"| Region | {payload.region} |\n"
            f"| Duration | {payload.duration_days} day(s) |\n"
            f"| Start date | {payload.start_date} |\n"
            f"| End date | {payload.end_date} |\n"
            f"| Party size | {payload.party_size} |\n"
            f"| Transportation | {payload.transport_mode.value} |\n\n"
            "### Preferred Themes\n"
            f"{themes}\n"
        )
