"""Context provider interface."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from ..models.agent_models import MetadataEntry

P = TypeVar("P")


class IContextProvider(ABC, Generic[P]):
    """Produces prompt fragments from one payload type.

    A provider is bound to exactly one payload type through ``payload_type``.
    ``produce`` must not mutate the payload and returns an empty list when it has
    nothing to contribute.
    """

    payload_type: type[P]
    default_priority: int = 0

    @property
    def name(self) -> str:
        return type(self).__name__

    def supports(self, payload_type: type) -> bool:
        return payload_type is self.payload_type

    @abstractmethod
    async def produce(self, payload: P) -> list[MetadataEntry]:
        """Build the fragments for a payload, in the order they should appear."""
        pass
