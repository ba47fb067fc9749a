"""In-memory conversation memory."""

from collections import defaultdict, deque

from travel_planner_ai.domain.interfaces import IChatMemory
from travel_planner_ai.domain.models import Message, MessageRole


class InMemoryChatMemory(IChatMemory):
    """Keeps the last ``window`` turns of every conversation."""

    def __init__(self, window: int = 10):
        if window < 1:
            raise ValueError("window must be at least 1")
        self.window = window
        self._turns: dict[str, deque[Message]] = defaultdict(lambda: deque(maxlen=self.window))

    async def append_turn(self, conversation_id: str, role: MessageRole, text: str) -> None:
        self._turns[conversation_id].append(Message(role=role, content=text))

    async def load_recent_turns(self, conversation_id: str, limit: int | None = None) -> list[Message]:
        turns = list(self._turns.get(conversation_id, ()))
        if limit is not None:
            turns = turns[-limit:] if limit > 0 else []
        return turns

    async def clear(self, conversation_id: str) -> None:
        self._turns.pop(conversation_id, None)
