"""Outbound delivery ports consumed by event handlers."""

from abc import ABC, abstractmethod
from typing import Any

from ..models.events import ChatMessageGenerated, DailyPlanGenerated, DomainEvent, SummaryGenerated


class IEventPublisher(ABC):
    """Accepts domain events for asynchronous delivery."""

    @abstractmethod
    def publish(self, event: DomainEvent) -> None:
        """Hand an event over for delivery without waiting for consumers."""
        pass


class ILiveConnectionHub(ABC):
    """Pushes payloads to live client connections subscribed to a destination."""

    @abstractmethod
    async def send(self, user_id: str, destination: str, payload: dict[str, Any]) -> None:
        """Send a payload to one user's connections subscribed to the destination."""
        pass


class IGenerationSink(ABC):
    """Persists generated results."""

    @abstractmethod
    async def save_chat_message(self, event: ChatMessageGenerated) -> None:
        pass

    @abstractmethod
    async def save_daily_plan(self, event: DailyPlanGenerated) -> None:
        pass

    @abstractmethod
    async def save_summary(self, event: SummaryGenerated) -> None:
        pass
