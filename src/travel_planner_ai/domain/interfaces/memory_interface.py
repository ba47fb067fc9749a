"""Conversation memory interface."""

from abc import ABC, abstractmethod

from ..models.agent_models import Message, MessageRole


class IChatMemory(ABC):
    """Stores the recent turns of each conversation."""

    @abstractmethod
    async def append_turn(self, conversation_id: str, role: MessageRole, text: str) -> None:
        """Append one turn to a conversation."""
        pass

    @abstractmethod
    async def load_recent_turns(self, conversation_id: str, limit: int | None = None) -> list[Message]:
        """Load the most recent turns, oldest first."""
        pass

    @abstractmethod
    async def clear(self, conversation_id: str) -> None:
        """Forget every turn of a conversation."""
        pass
