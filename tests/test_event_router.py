"""Tests for event routing and the delivery handlers."""

import asyncio
import datetime
from unittest.mock import AsyncMock

import pytest
from helpers import daily_plan_record

from travel_planner_ai.application.events import EventRouter, LiveDeliveryHandler, PersistenceHandler
from travel_planner_ai.domain.interfaces import IGenerationSink, ILiveConnectionHub
from travel_planner_ai.domain.models import (
    ChatMessageGenerated,
    DailyPlan,
    DailyPlanGenerated,
    DomainEvent,
    GenerationCancelled,
    GenerationCompleted,
    GenerationFailed,
    StreamUnitRejected,
    SummaryGenerated,
    TerminalEvent,
)


def chat_event(text: str = "hello", trip_id: int | None = 7) -> ChatMessageGenerated:
    return ChatMessageGenerated(conversation_id="c-1", trip_id=trip_id, user_id="u-1", text=text)


def plan_event(day: int = 1, trip_id: int | None = 7) -> DailyPlanGenerated:
    plan = DailyPlan.model_validate(daily_plan_record(day, datetime.date(2025, 4, day)))
    return DailyPlanGenerated(
        conversation_id="c-1", trip_id=trip_id, user_id="u-1", sequence=day, day_number=day, unit=plan
    )


class TestEventRouter:
    """Test cases for EventRouter."""

    @pytest.mark.asyncio
    async def test_events_are_delivered_in_publish_order(self):
        """Test that a subscriber sees events in the order they were published."""
        router = EventRouter()
        received = []

        async def handler(event):
            received.append(event.text)

        router.subscribe(ChatMessageGenerated, handler)
        await router.start()
        for text in ["one", "two", "three"]:
            router.publish(chat_event(text))
        await router.drain()
        await router.cleanup()

        assert received == ["one", "two", "three"]

    @pytest.mark.asyncio
    async def test_subscription_matches_subclasses(self):
        """Test that subscribing to a base class receives its subclasses."""
        router = EventRouter()
        terminals, everything = [], []
        router.subscribe(TerminalEvent, AsyncMock(side_effect=terminals.append))
        router.subscribe(DomainEvent, AsyncMock(side_effect=everything.append))
        await router.start()

        router.publish(chat_event())
        router.publish(GenerationCompleted(conversation_id="c-1"))
        router.publish(GenerationCancelled(conversation_id="c-2"))
        await router.drain()
        await router.cleanup()

        assert [type(e) for e in terminals] == [GenerationCompleted, GenerationCancelled]
        assert len(everything) == 3

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_stop_delivery(self):
        """Test that handler errors are counted and later events still arrive."""
        router = EventRouter()
        received = []

        async def flaky(event):
            if event.text == "bad":
                raise RuntimeError("boom")
            received.append(event.text)

        subscription = router.subscribe(ChatMessageGenerated, flaky, name="flaky")
        await router.start()
        for text in ["good", "bad", "later"]:
            router.publish(chat_event(text))
        await router.drain()
        await router.cleanup()

        assert received == ["good", "later"]
        assert subscription.delivered == 2
        assert subscription.failed == 1

    @pytest.mark.asyncio
    async def test_slow_consumer_does_not_block_others(self):
        """Test that one slow subscriber does not hold back another."""
        router = EventRouter()
        gate = asyncio.Event()
        fast = []

        async def slow(event):
            await gate.wait()

        async def quick(event):
            fast.append(event)

        router.subscribe(ChatMessageGenerated, slow, name="slow")
        router.subscribe(ChatMessageGenerated, quick, name="quick")
        await router.start()
        router.publish(chat_event("a"))
        router.publish(chat_event("b"))
        for _ in range(10):
            await asyncio.sleep(0)

        assert len(fast) == 2
        gate.set()
        await router.drain()
        await router.cleanup()

    @pytest.mark.asyncio
    async def test_publish_before_start_is_queued(self):
        """Test that events published before the workers start are not lost."""
        router = EventRouter()
        handler = AsyncMock()
        router.subscribe(ChatMessageGenerated, handler)

        router.publish(chat_event())
        await router.start()
        await router.drain()
        await router.cleanup()

        handler.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_subscribe_after_start(self):
        """Test that late subscribers get a running worker."""
        router = EventRouter()
        await router.start()
        handler = AsyncMock()

        subscription = router.subscribe(ChatMessageGenerated, handler)
        router.publish(chat_event())
        await router.drain()
        await router.cleanup()

        assert subscription.delivered == 1
        assert router.is_running is False

    @pytest.mark.asyncio
    async def test_drain_before_start_raises(self):
        """Test that draining a router that was never started is an error."""
        router = EventRouter()
        router.publish(chat_event())

        with pytest.raises(RuntimeError, match="not running"):
            await router.drain()


class TestLiveDeliveryHandler:
    """Test cases for LiveDeliveryHandler."""

    def test_chat_route(self):
        """Test that chat messages go to the conversation channel."""
        routes = LiveDeliveryHandler.route(chat_event("Hi there"))

        assert routes == [("/sub/chat/c-1", {"type": "CHAT", "conversationId": "c-1", "content": "Hi there"})]

    def test_daily_plan_route(self):
        """Test that daily plans go to the trip schedule channel with camelCase fields."""
        [(destination, payload)] = LiveDeliveryHandler.route(plan_event(2))

        assert destination == "/sub/schedule/7"
        assert payload["type"] == "DAILY_PLAN"
        assert payload["sequence"] == 2
        assert payload["dailyPlan"]["dayNumber"] == 2
        assert payload["dailyPlan"]["date"] == "2025-04-02"
        assert payload["dailyPlan"]["places"][0]["startTime"] == "09:00:00"

    def test_daily_plan_without_trip_goes_to_chat(self):
        """Test the fallback destination of a plan without a trip."""
        [(destination, _)] = LiveDeliveryHandler.route(plan_event(1, trip_id=None))

        assert destination == "/sub/chat/c-1"

    def test_terminal_routes(self):
        """Test that terminal events reach both channels of a trip."""
        failed = GenerationFailed(conversation_id="c-1", trip_id=7, user_id="u-1", reason="stalled", error_code="AI008")

        routes = LiveDeliveryHandler.route(failed)

        assert [destination for destination, _ in routes] == ["/sub/chat/c-1", "/sub/schedule/7"]
        assert routes[0][1] == {
            "type": "ERROR",
            "conversationId": "c-1",
            "tripId": 7,
            "reason": "stalled",
            "errorCode": "AI008",
        }

    def test_terminal_without_trip(self):
        """Test that a terminal event without a trip only reaches the chat channel."""
        routes = LiveDeliveryHandler.route(GenerationCancelled(conversation_id="c-1", user_id="u-1"))

        assert routes == [("/sub/chat/c-1", {"type": "CANCELLED", "conversationId": "c-1", "tripId": None})]

    def test_events_not_delivered_live(self):
        """Test that rejected lines and summaries have no live route."""
        rejected = StreamUnitRejected(conversation_id="c-1", line_number=2, line="{", reason="invalid JSON")
        summary = SummaryGenerated(conversation_id="p-1", place_id=1, name="Cave", content="A cave.")

        assert LiveDeliveryHandler.route(rejected) == []
        assert LiveDeliveryHandler.route(summary) == []

    @pytest.mark.asyncio
    async def test_handle_sends_to_user(self):
        """Test that handle sends each route to the event's user."""
        hub = AsyncMock(spec=ILiveConnectionHub)

        await LiveDeliveryHandler(hub).handle(GenerationCompleted(conversation_id="c-1", trip_id=7, user_id="u-1"))

        assert hub.send.await_count == 2
        assert hub.send.await_args_list[0].args[:2] == ("u-1", "/sub/chat/c-1")

    @pytest.mark.asyncio
    async def test_handle_skips_events_without_user(self):
        """Test that events without a user are not sent."""
        hub = AsyncMock(spec=ILiveConnectionHub)

        await LiveDeliveryHandler(hub).handle(GenerationCompleted(conversation_id="c-1"))

        hub.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_send_failure_is_contained(self):
        """Test that a failed send does not stop the other destinations."""
        hub = AsyncMock(spec=ILiveConnectionHub)
        hub.send.side_effect = [ConnectionError("closed"), None]

        await LiveDeliveryHandler(hub).handle(GenerationCompleted(conversation_id="c-1", trip_id=7, user_id="u-1"))

        assert hub.send.await_count == 2

    @pytest.mark.asyncio
    async def test_registered_through_router(self):
        """Test the handler wired to a running router."""
        hub = AsyncMock(spec=ILiveConnectionHub)
        router = EventRouter()
        LiveDeliveryHandler(hub).register(router)
        await router.start()

        router.publish(plan_event(1))
        router.publish(GenerationCompleted(conversation_id="c-1", trip_id=7, user_id="u-1", unit_count=1))
        await router.drain()
        await router.cleanup()

        destinations = [call.args[1] for call in hub.send.await_args_list]
        assert destinations == ["/sub/schedule/7", "/sub/chat/c-1", "/sub/schedule/7"]


class TestPersistenceHandler:
    """Test cases for PersistenceHandler."""

    @pytest.mark.asyncio
    async def test_results_are_saved(self):
        """Test that each result type reaches its sink method."""
        sink = AsyncMock(spec=IGenerationSink)
        router = EventRouter()
        PersistenceHandler(sink).register(router)
        await router.start()

        chat, plan = chat_event(), plan_event(1)
        summary = SummaryGenerated(conversation_id="p-1", place_id=3, name="Cave", content="A cave.")
        for event in [chat, plan, summary, GenerationCompleted(conversation_id="c-1")]:
            router.publish(event)
        await router.drain()
        await router.cleanup()

        sink.save_chat_message.assert_awaited_once_with(chat)
        sink.save_daily_plan.assert_awaited_once_with(plan)
        sink.save_summary.assert_awaited_once_with(summary)

    @pytest.mark.asyncio
    async def test_sink_failure_is_logged(self, caplog):
        """Test that a sink error is logged instead of propagated."""
        sink = AsyncMock(spec=IGenerationSink)
        sink.save_daily_plan.side_effect = OSError("disk full")

        await PersistenceHandler(sink).save_daily_plan(plan_event(1))

        assert "disk full" in caplog.text
