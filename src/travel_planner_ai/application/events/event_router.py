"""Typed in-process delivery of domain events to their consumers."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from travel_planner_ai.domain.interfaces import IEventPublisher, IService
from travel_planner_ai.domain.models import DomainEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[DomainEvent], Awaitable[None]]


@dataclass(eq=False)
class Subscription:
    """One consumer of one event channel, with its own FIFO queue and worker."""

    event_type: type[DomainEvent]
    handler: EventHandler
    name: str
    queue: asyncio.Queue = field(default_factory=asyncio.Queue)
    worker: asyncio.Task | None = None
    delivered: int = 0
    failed: int = 0


class EventRouter(IEventPublisher, IService):
    """Routes events to subscribers by event class.

    A subscription to a class also receives its subclasses. Each subscription
    has its own queue and worker. A slow or failing consumer does not block
    the producer or other consumers. Each consumer sees events in publish
    order. ``publish`` only enqueues and never waits.
    """

    def __init__(self):
        self._subscriptions: list[Subscription] = []
        self._is_running = False

    @property
    def is_running(self) -> bool:
        """Check if the workers are running."""
        return self._is_running

    @property
    def subscriptions(self) -> list[Subscription]:
        return list(self._subscriptions)

    def subscribe(
        self, event_type: type[DomainEvent], handler: EventHandler, name: str | None = None
    ) -> Subscription:
        """
        Register a consumer for an event class.

        Subscribing after ``start`` starts the consumer's worker immediately.
        """
        subscription = Subscription(
            event_type=event_type,
            handler=handler,
            name=name or getattr(handler, "__qualname__", repr(handler)),
        )
        self._subscriptions.append(subscription)
        if self._is_running:
            self._start_worker(subscription)
        logger.debug(f"Subscribed {subscription.name} to {event_type.__name__}")
        return subscription

    def publish(self, event: DomainEvent) -> None:
        for subscription in self._subscriptions:
            if isinstance(event, subscription.event_type):
                subscription.queue.put_nowait(event)

    async def start(self) -> None:
        """Start one worker per subscription."""
        if self._is_running:
            return
        for subscription in self._subscriptions:
            self._start_worker(subscription)
        self._is_running = True

    async def drain(self) -> None:
        """
        Wait until every published event has been handled.

        Raises:
            RuntimeError: If the workers have not been started
        """
        if not self._is_running:
            raise RuntimeError("Cannot drain an event router that is not running")
        await asyncio.gather(*(subscription.queue.join() for subscription in self._subscriptions))

    async def cleanup(self) -> None:
        """Stop the workers; events still queued wait for the next ``start``."""
        workers = [s.worker for s in self._subscriptions if s.worker is not None]
        for worker in workers:
            worker.cancel()
        await asyncio.gather(*workers, return_exceptions=True)
        for subscription in self._subscriptions:
            subscription.worker = None
        self._is_running = False

    def _start_worker(self, subscription: Subscription) -> None:
        subscription.worker = asyncio.create_task(
            self._consume(subscription), name=f"event-router:{subscription.name}"
        )

    async def _consume(self, subscription: Subscription) -> None:
        while True:
            event = await subscription.queue.get()
            try:
                await subscription.handler(event)
                subscription.delivered += 1
            except Exception as e:
                subscription.failed += 1
                logger.error(f"Event handler {subscription.name} failed on {type(event).__name__}: {e}")
            finally:
                subscription.queue.task_done()
