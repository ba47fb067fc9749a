"""Concrete context providers."""

from .itinerary_providers import ItineraryCommandProvider, ItineraryQueryProvider
from .output_format_provider import OutputFormatProvider
from .place_provider import PlaceQueryProvider, PlaceSearchProvider
from .session_provider import SessionContextProvider
from .template_providers import SystemTemplateProvider, UserTemplateProvider

__all__ = [
    "ItineraryCommandProvider",
    "ItineraryQueryProvider",
    "OutputFormatProvider",
    "PlaceQueryProvider",
    "PlaceSearchProvider",
    "SessionContextProvider",
    "SystemTemplateProvider",
    "UserTemplateProvider",
]
