"""Common prompt assembly and lifecycle handling for generation agents."""

import asyncio
import logging
import time
from abc import abstractmethod
from functools import partial
from typing import Any

from travel_planner_ai.application.context.composer import ContextComposer
from travel_planner_ai.config import GenerationConfig, ResilienceConfig, settings
from travel_planner_ai.domain.exceptions import (
    AgentExecutionError,
    ModelStallError,
    TravelPlannerError,
    ValidationError,
)
from travel_planner_ai.domain.interfaces import IAgent, IChatMemory, IEventPublisher, IModelClient
from travel_planner_ai.domain.models import (
    AgentConfig,
    AgentStatus,
    DomainEvent,
    GenerationCancelled,
    GenerationCompleted,
    GenerationFailed,
    GenerationRequest,
    Message,
    MessageRole,
)
from travel_planner_ai.domain.retry import NO_RETRY_POLICY, LoggingRetryListener, RetryPolicy, call_with_retry

logger = logging.getLogger(__name__)


class BaseGenerationAgent(IAgent):
    """Base class of the chat, itinerary and place summary agents.

    A prompt is the agent's instruction header, then the composed context, then
    the recent conversation memory, then the current user turn. ``execute``
    publishes exactly one terminal event per call.
    """

    request_type: type[GenerationRequest] = GenerationRequest
    uses_memory: bool = True

    def __init__(
        self,
        config: AgentConfig,
        model_client: IModelClient,
        composer: ContextComposer,
        memory: IChatMemory,
        publisher: IEventPublisher,
        generation_config: GenerationConfig | None = None,
        retry_policy: RetryPolicy | None = None,
    ):
        self._config = config
        self._model_client = model_client
        self._composer = composer
        self._memory = memory
        self._publisher = publisher
        self._generation_config = generation_config or settings.generation
        self._retry_policy = retry_policy or self._create_retry_policy(settings.resilience)
        self._retry_listener = LoggingRetryListener(f"{__name__}.{type(self).__name__}")

    @staticmethod
    def _create_retry_policy(resilience: ResilienceConfig) -> RetryPolicy:
        if not resilience.enable_retries:
            return NO_RETRY_POLICY
        return RetryPolicy(
            max_attempts=resilience.model_max_attempts,
            base_delay=resilience.model_base_delay,
            max_delay=resilience.model_max_delay,
            backoff_multiplier=resilience.model_backoff_multiplier,
        )

    @property
    def name(self) -> str:
        """Get the agent's name."""
        return self._config.name

    @property
    def config(self) -> AgentConfig:
        """Get the agent's configuration."""
        return self._config

    async def execute(self, request: GenerationRequest) -> AgentStatus:
        identity = self._identity(request)
        start_time = time.time()
        logger.info(f"{self.name} started for conversation {request.conversation_id}")

        try:
            if not isinstance(request, self.request_type):
                raise ValidationError(
                    f"{self.name} expects {self.request_type.__name__}, got {type(request).__name__}"
                )
            unit_count = await self._generate(request)

        except asyncio.CancelledError:
            logger.info(f"{self.name} cancelled for conversation {request.conversation_id}")
            self._publish(GenerationCancelled(**identity))
            raise

        except Exception as e:
            error = self._wrap_error(e, time.time() - start_time)
            logger.error(f"{self.name} failed for conversation {request.conversation_id}: {error.message}")
            self._publish(GenerationFailed(reason=error.message, error_code=error.error_code, **identity))
            return AgentStatus.ERROR

        self._publish(GenerationCompleted(unit_count=unit_count, **identity))
        logger.info(
            f"{self.name} completed for conversation {request.conversation_id} "
            f"in {time.time() - start_time:.2f}s ({unit_count} unit(s))"
        )
        return AgentStatus.COMPLETED

    @abstractmethod
    async def _generate(self, request: Any) -> int:
        """Run the model call and publish result events; returns the number of units produced."""
        pass

    async def build_prompt(self, conversation_id: str, user_turn: str, *payloads: Any) -> list[Message]:
        """
        Assemble the full prompt for one model call.

        Raises:
            ValidationError: If the user turn is empty
        """
        if not user_turn or not user_turn.strip():
            raise ValidationError("Cannot send an empty prompt")

        entries = await self._composer.compose(*payloads)
        prompt = self._composer.inject(
            [
                Message(role=MessageRole.SYSTEM, content=self._config.instructions),
                Message(role=MessageRole.USER, content=user_turn),
            ],
            entries,
        )

        history = await self._load_history(conversation_id)
        return prompt[:-1] + history + prompt[-1:]

    async def _load_history(self, conversation_id: str) -> list[Message]:
        window = self._generation_config.memory_window
        if not self.uses_memory or window <= 0:
            return []
        return await self._memory.load_recent_turns(conversation_id, limit=window)

    async def _complete(self, messages: list[Message]) -> str:
        """Blocking model call with a per-attempt timeout and transport-error retries."""
        return await call_with_retry(partial(self._complete_once, messages), self._retry_policy, self._retry_listener)

    async def _complete_once(self, messages: list[Message]) -> str:
        timeout = self._generation_config.request_timeout
        try:
            return await asyncio.wait_for(self._model_client.complete(messages, self._config.temperature), timeout)
        except TimeoutError as e:
            raise ModelStallError(
                f"No response from the model within {timeout} seconds", timeout_duration=timeout
            ) from e

    def _publish(self, event: DomainEvent) -> None:
        self._publisher.publish(event)

    @staticmethod
    def _identity(request: GenerationRequest) -> dict[str, Any]:
        return {
            "conversation_id": request.conversation_id,
            "trip_id": getattr(request, "trip_id", None),
            "user_id": getattr(request, "user_id", None),
        }

    def _wrap_error(self, error: Exception, execution_time: float) -> TravelPlannerError:
        if isinstance(error, TravelPlannerError):
            return error
        return AgentExecutionError(
            f"{self.name} execution failed: {error}",
            agent_name=self.name,
            execution_time=execution_time,
        )
