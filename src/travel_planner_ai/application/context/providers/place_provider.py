"""Providers of place facts: one place to summarize, or candidate places for an itinerary."""

import logging

from travel_planner_ai.application.context.base_provider import BaseContextProvider
from travel_planner_ai.domain.interfaces import IPlaceSearch
from travel_planner_ai.domain.models import (
    MetadataEntry,
    PlaceCandidate,
    PlaceQueryContext,
    PlaceVectorQueryContext,
    system_entries,
    user_entries,
)

logger = logging.getLogger(__name__)


class PlaceQueryProvider(BaseContextProvider[PlaceQueryContext]):
    payload_type = PlaceQueryContext
    default_priority = 30

    async def build(self, payload: PlaceQueryContext) -> list[MetadataEntry]:
        logger.debug(f"Place context - name: {payload.name}, address: {payload.address}")
        return system_entries(
            "## Place Context\n\n"
            "Use the following place information in your answer.\n\n"
            f"- Name: {payload.name}\n"
            f"- Address: {payload.address or 'unknown'}\n"
            f"- Description: {payload.description or 'unknown'}\n"
            f"- Operating hours: {payload.operating_hours or 'unknown'}\n"
            f"- Closing days: {payload.holiday_info or 'unknown'}\n"
            f"- Themes: {', '.join(payload.themes) or 'none'}\n"
        )


class PlaceSearchProvider(BaseContextProvider[PlaceVectorQueryContext]):
    """Lists stored places and restaurants the itinerary may schedule.

    Places are searched once per theme and merged by place ID in search order.
    Returns nothing when the search finds neither places nor restaurants.
    """

    payload_type = PlaceVectorQueryContext
    default_priority = 22

    def __init__(self, place_search: IPlaceSearch):
        self._place_search = place_search

    async def build(self, payload: PlaceVectorQueryContext) -> list[MetadataEntry]:
        logger.debug(
            f"Place search - region: {payload.region}, themes: {payload.themes}, "
            f"top_k: {payload.top_k}, similarity_threshold: {payload.similarity_threshold}"
        )
        places = await self._find_places(payload)
        restaurants = await self._place_search.find_restaurants(
            payload.region, payload.top_k, payload.similarity_threshold
        )
        if not places and not restaurants:
            logger.debug(f"No stored places found for {payload.region}")
            return []

        return user_entries(
            "## Place Context\n\n"
            "Schedule only the places listed below and copy their place IDs exactly.\n\n"
            "### Recommended Places\n"
            f"{self._render(places)}\n\n"
            "### Recommended Restaurants\n"
            f"{self._render(restaurants)}\n"
        )

    async def _find_places(self, payload: PlaceVectorQueryContext) -> list[PlaceCandidate]:
        themes: list[str | None] = list(payload.themes) or [None]
        found: dict[int, PlaceCandidate] = {}
        for theme in themes:
            for place in await self._place_search.find_places(
                payload.region, theme, payload.top_k, payload.similarity_threshold
            ):
                found.setdefault(place.place_id, place)
        return list(found.values())

    @staticmethod
    def _render(places: list[PlaceCandidate]) -> str:
        if not places:
            return "- none"
        return "\n\n".join(
            f"[Place ID: {place.place_id}]\n"
            f"Name: {place.name}\n"
            f"Address: {place.address or 'unknown'}\n"
            f"Themes: {', '.join(place.themes) or 'none'}\n"
            f"Description: {place.description or 'none'}"
            for place in places
        )
