"""Keyword-scored place search over an in-memory catalogue."""

import logging

from travel_planner_ai.domain.interfaces import IPlaceSearch
from travel_planner_ai.domain.models import PlaceCandidate

logger = logging.getLogger(__name__)


class InMemoryPlaceSearch(IPlaceSearch):
    """Scores places by the share of query terms found in their text or themes.

    The query terms are the region and, for places, the theme. A place scores
    1.0 when every term matches and 0.0 when none does.
    """

    def __init__(self, places: list[PlaceCandidate] | None = None, restaurants: list[PlaceCandidate] | None = None):
        self._places = list(places or [])
        self._restaurants = list(restaurants or [])

    async def find_places(
        self, region: str, theme: str | None, top_k: int, similarity_threshold: float
    ) -> list[PlaceCandidate]:
        terms = [region] if theme is None else [region, theme]
        return self._search(self._places, terms, top_k, similarity_threshold)

    async def find_restaurants(self, region: str, top_k: int, similarity_threshold: float) -> list[PlaceCandidate]:
        return self._search(self._restaurants, [region], top_k, similarity_threshold)

    def _search(
        self, catalogue: list[PlaceCandidate], terms: list[str], top_k: int, similarity_threshold: float
    ) -> list[PlaceCandidate]:
        scored = [(self.score(place, terms), place) for place in catalogue]
        matches = sorted(
            ((score, place) for score, place in scored if score >= similarity_threshold),
            key=lambda item: (-item[0], item[1].place_id),
        )
        logger.debug(f"Place search for {terms}: {len(matches)} match(es), returning at most {top_k}")
        return [place.model_copy(update={"score": score}) for score, place in matches[:top_k]]

    @staticmethod
    def score(place: PlaceCandidate, terms: list[str]) -> float:
        if not terms:
            return 0.0
        text = " ".join(filter(None, [place.name, place.address, place.description])).lower()
        themes = {theme.lower() for theme in place.themes}
        matched = sum(1 for term in terms if term.lower() in text or term.lower() in themes)
        return matched / len(terms)
