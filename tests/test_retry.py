"""Tests for retry logic around model calls."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from travel_planner_ai.domain.exceptions import (
    ContextProviderError,
    ModelConnectionError,
    ModelStallError,
    StreamDecodeError,
    TemplateNotFoundError,
    ValidationError,
)
from travel_planner_ai.domain.retry import (
    NO_RETRY_POLICY,
    BackoffStrategy,
    LoggingRetryListener,
    RetryAttempt,
    RetryPolicy,
    call_with_retry,
)


class TestRetryPolicy:
    """Test cases for RetryPolicy."""

    def test_transport_errors_are_retried(self):
        """Test that retryable transport errors are tried again."""
        policy = RetryPolicy(max_attempts=3)

        assert policy.should_retry(ModelConnectionError("Connection reset"), 1)
        assert policy.should_retry(ModelStallError("No output"), 2)
        assert policy.should_retry(TimeoutError("Timeout"), 1)
        assert policy.should_retry(ConnectionResetError("reset"), 1)

    def test_last_attempt_is_not_retried(self):
        """Test that the policy gives up after max attempts."""
        assert not RetryPolicy(max_attempts=3).should_retry(ModelConnectionError("Connection reset"), 3)

    def test_deterministic_errors_are_not_retried(self):
        """Test that errors not flagged retryable fail immediately."""
        policy = RetryPolicy(max_attempts=3)

        for error in [
            TemplateNotFoundError("No template"),
            ContextProviderError("Provider failed"),
            StreamDecodeError("Bad line"),
            ValidationError("Empty prompt"),
            ValueError("Invalid value"),
            KeyError("missing"),
        ]:
            assert not policy.should_retry(error, 1)

    def test_fixed_backoff(self):
        """Test delay calculation with fixed backoff."""
        policy = RetryPolicy(base_delay=2.0, strategy=BackoffStrategy.FIXED, jitter=False)

        assert policy.delay_for(1) == 2.0
        assert policy.delay_for(5) == 2.0

    def test_linear_backoff(self):
        """Test delay calculation with linear backoff."""
        policy = RetryPolicy(base_delay=1.0, strategy=BackoffStrategy.LINEAR, jitter=False)

        assert [policy.delay_for(attempt) for attempt in (1, 2, 3)] == [1.0, 2.0, 3.0]

    def test_exponential_backoff_is_capped(self):
        """Test that exponential delays are capped at max delay."""
        policy = RetryPolicy(base_delay=1.0, max_delay=5.0, backoff_multiplier=2.0, jitter=False)

        assert [policy.delay_for(attempt) for attempt in range(1, 6)] == [1.0, 2.0, 4.0, 5.0, 5.0]

    def test_jitter(self):
        """Test that jitter keeps delays between half and all of the computed delay."""
        policy = RetryPolicy(base_delay=4.0, strategy=BackoffStrategy.FIXED, jitter=True)

        for _ in range(100):
            assert 2.0 <= policy.delay_for(1) <= 4.0

    def test_retry_after_hint_wins(self):
        """Test that a retry-after hint replaces the computed delay, within max delay."""
        policy = RetryPolicy(base_delay=1.0, max_delay=10.0)

        assert policy.delay_for(1, ModelConnectionError("throttled", retry_after=7.0)) == 7.0
        assert policy.delay_for(1, ModelConnectionError("throttled", retry_after=60.0)) == 10.0

    def test_no_retry_policy(self):
        """Test that the no-retry policy never retries, even retryable errors."""
        assert not NO_RETRY_POLICY.should_retry(ModelConnectionError("down"), 1)
        assert RetryPolicy().strategy == BackoffStrategy.EXPONENTIAL


class TestLoggingRetryListener:
    """Test cases for LoggingRetryListener."""

    @pytest.mark.asyncio
    async def test_retries_and_failures_are_logged(self, caplog):
        """Test that retries and the final failure are logged."""
        listener = LoggingRetryListener("test_logger")

        await listener.on_retry(RetryAttempt(1, ModelConnectionError("Test error"), elapsed=2.5, next_delay=4.0))
        await listener.on_give_up(RetryAttempt(3, ModelStallError("Final error"), elapsed=10.0))

        assert "attempt 1 failed" in caplog.text
        assert "Retrying in 4.00s" in caplog.text
        assert "failed after 3 attempt(s)" in caplog.text


class TestCallWithRetry:
    """Test cases for call_with_retry."""

    @pytest.mark.asyncio
    async def test_success_without_retry(self):
        """Test successful execution without retries."""
        operation = AsyncMock(return_value="success")

        assert await call_with_retry(operation, RetryPolicy()) == "success"
        assert operation.await_count == 1

    @pytest.mark.asyncio
    async def test_success_after_retries(self):
        """Test successful execution after some retries."""
        operation = AsyncMock(side_effect=[ModelConnectionError("First failure"), TimeoutError("Second"), "success"])

        result = await call_with_retry(operation, RetryPolicy(max_attempts=3, base_delay=0.01))

        assert result == "success"
        assert operation.await_count == 3

    @pytest.mark.asyncio
    async def test_failure_after_max_attempts(self):
        """Test that the last error is raised once attempts are exhausted."""
        operation = AsyncMock(side_effect=ModelConnectionError("Persistent failure"))

        with pytest.raises(ModelConnectionError, match="Persistent failure"):
            await call_with_retry(operation, RetryPolicy(max_attempts=2, base_delay=0.01))

        assert operation.await_count == 2

    @pytest.mark.asyncio
    async def test_non_retryable_error(self):
        """Test immediate failure with a non-retryable error."""
        operation = AsyncMock(side_effect=TemplateNotFoundError("No template"))

        with pytest.raises(TemplateNotFoundError):
            await call_with_retry(operation, RetryPolicy(max_attempts=3))

        assert operation.await_count == 1

    @pytest.mark.asyncio
    async def test_listener_is_notified(self):
        """Test that the listener sees each failed attempt."""
        operation = AsyncMock(side_effect=[ModelConnectionError("Failure"), "success"])
        listener = MagicMock()
        listener.on_retry = AsyncMock()
        listener.on_give_up = AsyncMock()

        result = await call_with_retry(operation, RetryPolicy(max_attempts=2, base_delay=0.01), listener)

        assert result == "success"
        listener.on_give_up.assert_not_awaited()
        reported = listener.on_retry.await_args.args[0]
        assert reported.attempt == 1
        assert isinstance(reported.error, ModelConnectionError)
