"""Language model client port."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from ..models.agent_models import Message


class IModelClient(ABC):
    """Chat completion backend used by agents."""

    @abstractmethod
    async def complete(self, messages: list[Message], temperature: float | None = None) -> str:
        """Run a blocking completion and return the full response text."""
        pass

    @abstractmethod
    def stream(self, messages: list[Message], temperature: float | None = None) -> AsyncIterator[str]:
        """
        Start a streaming completion.

        Returns an async iterator of text chunks. Callers close it with
        ``aclose()`` when they stop early.
        """
        pass
