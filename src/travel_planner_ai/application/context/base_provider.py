"""Shared behaviour of context providers."""

import logging
from abc import abstractmethod
from typing import Generic, TypeVar

from travel_planner_ai.domain.interfaces import IContextProvider
from travel_planner_ai.domain.models import MetadataEntry

logger = logging.getLogger(__name__)

P = TypeVar("P")


class BaseContextProvider(IContextProvider[P], Generic[P]):
    """Context provider bound to a single payload type.

    Subclasses set ``payload_type`` and ``default_priority`` and implement ``build``.
    """

    async def produce(self, payload: P) -> list[MetadataEntry]:
        if not isinstance(payload, self.payload_type):
            raise TypeError(f"{self.name} expects {self.payload_type.__name__}, got {type(payload).__name__}")
        entries = await self.build(payload)
        logger.debug(f"{self.name} produced {len(entries)} fragment(s)")
        return entries

    @abstractmethod
    async def build(self, payload: P) -> list[MetadataEntry]:
        """Build the fragments for a payload of the bound type."""
        pass
