"""Retry of blocking model calls on transport failures.

Only errors flagged ``is_retryable`` (and raw network errors from the model
client) are retried. A ``retry_after`` hint on the error takes precedence over
the computed backoff.
"""

import asyncio
import logging
import random
import time
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from travel_planner_ai.domain.exceptions import TravelPlannerError

logger = logging.getLogger(__name__)

T = TypeVar("T")

TRANSIENT_ERRORS: tuple[type[Exception], ...] = (TimeoutError, ConnectionError)


class BackoffStrategy(str, Enum):
    """How the delay grows between attempts."""

    FIXED = "fixed"
    LINEAR = "linear"
    EXPONENTIAL = "exponential"


@dataclass(frozen=True)
class RetryPolicy:
    """Limits and backoff of a retried model call.

    ``max_attempts`` counts the first call, so 1 disables retries.
    """

    max_attempts: int = 3
    base_delay: float = 1.0
    max_delay: float = 30.0
    strategy: BackoffStrategy = BackoffStrategy.EXPONENTIAL
    backoff_multiplier: float = 2.0
    jitter: bool = True

    def is_retryable(self, error: Exception) -> bool:
        if isinstance(error, TravelPlannerError):
            return error.is_retryable
        return isinstance(error, TRANSIENT_ERRORS)

    def should_retry(self, error: Exception, attempt: int) -> bool:
        """
        Decide whether a failed attempt is tried again.

        Args:
            error: Error raised by the attempt
            attempt: 1-based number of the attempt that failed
        """
        return attempt < self.max_attempts and self.is_retryable(error)

    def delay_for(self, attempt: int, error: Exception | None = None) -> float:
        """
        Seconds to wait after the given failed attempt.

        Args:
            attempt: 1-based number of the attempt that failed
            error: Error raised by the attempt; its ``retry_after`` wins when set
        """
        retry_after = getattr(error, "retry_after", None)
        if retry_after is not None:
            return min(float(retry_after), self.max_delay)

        if self.strategy == BackoffStrategy.FIXED:
            delay = self.base_delay
        elif self.strategy == BackoffStrategy.LINEAR:
            delay = self.base_delay * attempt
        else:
            delay = self.base_delay * self.backoff_multiplier ** (attempt - 1)

        delay = min(delay, self.max_delay)
        if self.jitter:
            delay *= random.uniform(0.5, 1.0)
        return delay


@dataclass(frozen=True)
class RetryAttempt:
    """A failed attempt, as reported to a ``RetryListener``."""

    attempt: int
    error: Exception
    elapsed: float
    next_delay: float | None = None


class RetryListener(ABC):
    @abstractmethod
    async def on_retry(self, attempt: RetryAttempt) -> None:
        """Called after a failed attempt, before sleeping."""
        pass

    @abstractmethod
    async def on_give_up(self, attempt: RetryAttempt) -> None:
        """Called when the last error is about to be raised."""
        pass


class LoggingRetryListener(RetryListener):
    """Logs retries as warnings and the final failure as an error."""

    def __init__(self, logger_name: str | None = None):
        self.logger = logging.getLogger(logger_name or __name__)

    async def on_retry(self, attempt: RetryAttempt) -> None:
        self.logger.warning(
            f"Model call attempt {attempt.attempt} failed after {attempt.elapsed:.2f}s: {attempt.error}. "
            f"Retrying in {attempt.next_delay:.2f}s"
        )

    async def on_give_up(self, attempt: RetryAttempt) -> None:
        self.logger.error(
            f"Model call failed after {attempt.attempt} attempt(s) and {attempt.elapsed:.2f}s: {attempt.error}"
        )


async def call_with_retry(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    listener: RetryListener | None = None,
) -> T:
    """
    Await ``operation`` until it succeeds or the policy gives up.

    Raises:
        The error of the last attempt
    """
    listener = listener or LoggingRetryListener()
    started = time.monotonic()
    attempt = 1

    while True:
        try:
            result = await operation()
        except Exception as e:
            elapsed = time.monotonic() - started
            if not policy.should_retry(e, attempt):
                await listener.on_give_up(RetryAttempt(attempt, e, elapsed))
                raise

            delay = policy.delay_for(attempt, e)
            await listener.on_retry(RetryAttempt(attempt, e, elapsed, delay))
            await asyncio.sleep(delay)
            attempt += 1
            continue

        if attempt > 1:
            logger.info(f"Model call succeeded on attempt {attempt}")
        return result


NO_RETRY_POLICY = RetryPolicy(max_attempts=1, jitter=False)
