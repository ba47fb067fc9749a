"""Consumers that forward domain events to live connections and persistence."""

import logging
from typing import Any

from travel_planner_ai.application.events.event_router import EventRouter
from travel_planner_ai.domain.interfaces import IGenerationSink, ILiveConnectionHub
from travel_planner_ai.domain.models import (
    ChatMessageGenerated,
    DailyPlanGenerated,
    DomainEvent,
    GenerationCancelled,
    GenerationCompleted,
    GenerationFailed,
    SummaryGenerated,
    TerminalEvent,
)

logger = logging.getLogger(__name__)


def chat_destination(conversation_id: str) -> str:
    return f"/sub/chat/{conversation_id}"


def schedule_destination(trip_id: int) -> str:
    return f"/sub/schedule/{trip_id}"


class LiveDeliveryHandler:
    """Pushes events to the user's live connections.

    Chat messages go to the conversation channel and daily plans to the trip's
    schedule channel. Terminal events go to the conversation channel and, when
    the generation belongs to a trip, to the schedule channel as well. Events
    without a user are not delivered.
    """

    def __init__(self, hub: ILiveConnectionHub):
        self._hub = hub

    def register(self, router: EventRouter) -> None:
        router.subscribe(DomainEvent, self.handle, name="live-delivery")

    async def handle(self, event: DomainEvent) -> None:
        user_id = getattr(event, "user_id", None)
        if user_id is None:
            logger.debug(f"Skipping live delivery of {type(event).__name__}: no user")
            return

        for destination, payload in self.route(event):
            try:
                await self._hub.send(user_id, destination, payload)
                logger.debug(f"Sent {payload['type']} to {destination}")
            except Exception as e:
                logger.error(f"Live delivery to {destination} failed for user {user_id}: {e}")

    @staticmethod
    def route(event: DomainEvent) -> list[tuple[str, dict[str, Any]]]:
        """Map an event to its (destination, payload) pairs."""
        if isinstance(event, ChatMessageGenerated):
            return [
                (
                    chat_destination(event.conversation_id),
                    {"type": "CHAT", "conversationId": event.conversation_id, "content": event.text},
                )
            ]

        if isinstance(event, DailyPlanGenerated):
            destination = (
                schedule_destination(event.trip_id)
                if event.trip_id is not None
                else chat_destination(event.conversation_id)
            )
            return [
                (
                    destination,
                    {
                        "type": "DAILY_PLAN",
                        "conversationId": event.conversation_id,
                        "tripId": event.trip_id,
                        "sequence": event.sequence,
                        "dailyPlan": event.unit.model_dump(mode="json", by_alias=True),
                    },
                )
            ]

        if isinstance(event, TerminalEvent):
            payload: dict[str, Any] = {
                "type": _TERMINAL_TYPES[type(event)],
                "conversationId": event.conversation_id,
                "tripId": event.trip_id,
            }
            if isinstance(event, GenerationFailed):
                payload["reason"] = event.reason
                payload["errorCode"] = event.error_code
            routes = [(chat_destination(event.conversation_id), payload)]
            if event.trip_id is not None:
                routes.append((schedule_destination(event.trip_id), payload))
            return routes

        return []


_TERMINAL_TYPES = {
    GenerationCompleted: "COMPLETED",
    GenerationFailed: "ERROR",
    GenerationCancelled: "CANCELLED",
}


class PersistenceHandler:
    """Forwards generated results to the persistence sink."""

    def __init__(self, sink: IGenerationSink):
        self._sink = sink

    def register(self, router: EventRouter) -> None:
        router.subscribe(ChatMessageGenerated, self.save_chat_message, name="persist-chat")
        router.subscribe(DailyPlanGenerated, self.save_daily_plan, name="persist-daily-plan")
        router.subscribe(SummaryGenerated, self.save_summary, name="persist-summary")

    async def save_chat_message(self, event: ChatMessageGenerated) -> None:
        try:
            await self._sink.save_chat_message(event)
        except Exception as e:
            logger.error(f"Saving chat message for conversation {event.conversation_id} failed: {e}")

    async def save_daily_plan(self, event: DailyPlanGenerated) -> None:
        try:
            await self._sink.save_daily_plan(event)
            logger.info(f"Saved day {event.day_number} of trip {event.trip_id}")
        except Exception as e:
            logger.error(f"Saving day {event.day_number} of trip {event.trip_id} failed: {e}")

    async def save_summary(self, event: SummaryGenerated) -> None:
        try:
            await self._sink.save_summary(event)
        except Exception as e:
            logger.error(f"Saving summary of place {event.place_id} failed: {e}")
