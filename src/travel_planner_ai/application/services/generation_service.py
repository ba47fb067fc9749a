"""Runs generations concurrently, one task per conversation."""

import asyncio
import logging
from functools import partial

from travel_planner_ai.application.services.agent_registry import AgentRegistry
from travel_planner_ai.domain.exceptions import GenerationInProgressError
from travel_planner_ai.domain.interfaces import IService
from travel_planner_ai.domain.models import AgentStatus, GenerationRequest

logger = logging.getLogger(__name__)


class GenerationService(IService):
    """Service for submitting, tracking and cancelling generations.

    Every request runs on its own asyncio task. A conversation has at most one
    generation in flight; cancelling it cancels the agent's model call and
    stream decoding, and the agent publishes the cancelled event.
    """

    def __init__(self, registry: AgentRegistry):
        self._registry = registry
        self._tasks: dict[str, asyncio.Task[AgentStatus]] = {}
        self._is_running = False

    @property
    def is_running(self) -> bool:
        return self._is_running

    async def start(self) -> None:
        self._is_running = True

    async def cleanup(self) -> None:
        """Cancel every generation in flight and wait for them to finish."""
        tasks = list(self._tasks.values())
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()
        self._is_running = False

    def submit(self, request: GenerationRequest) -> asyncio.Task[AgentStatus]:
        """
        Start a generation on its own task.

        Raises:
            AgentNotFoundError: If no agent handles the request's type
            GenerationInProgressError: If the conversation already has a generation running
        """
        conversation_id = request.conversation_id
        running = self._tasks.get(conversation_id)
        if running is not None and not running.done():
            raise GenerationInProgressError(
                f"Conversation '{conversation_id}' already has a generation in progress",
                details={"conversation_id": conversation_id},
            )

        agent = self._registry.get(request.agent_type)
        task = asyncio.create_task(agent.execute(request), name=f"generation:{conversation_id}")
        self._tasks[conversation_id] = task
        task.add_done_callback(partial(self._on_done, conversation_id))
        logger.info(f"Submitted {request.agent_type.value} generation for conversation {conversation_id}")
        return task

    async def run(self, request: GenerationRequest) -> AgentStatus:
        """Submit a generation and wait for its final status."""
        return await self.submit(request)

    async def cancel(self, conversation_id: str) -> bool:
        """
        Cancel the generation of a conversation and wait until it has stopped.

        Returns:
            True if a running generation was cancelled
        """
        task = self._tasks.get(conversation_id)
        if task is None or task.done():
            return False

        task.cancel()
        await asyncio.wait({task})
        logger.info(f"Cancelled generation for conversation {conversation_id}")
        return True

    def active_conversations(self) -> list[str]:
        return [conversation_id for conversation_id, task in self._tasks.items() if not task.done()]

    async def drain(self) -> None:
        """Wait for every generation in flight."""
        await asyncio.gather(*self._tasks.values(), return_exceptions=True)

    def _on_done(self, conversation_id: str, task: asyncio.Task) -> None:
        if self._tasks.get(conversation_id) is task:
            del self._tasks[conversation_id]
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"Generation for conversation {conversation_id} raised: {task.exception()}")
