"""Domain exceptions and error handling."""

import time
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes surfaced in failure events."""

    AGENT_NOT_FOUND = "AI001"
    GENERATION_FAILED = "AI002"
    TEMPLATE_NOT_FOUND = "AI003"
    DUPLICATE_AGENT = "AI004"
    CONTEXT_PROVIDER_FAILED = "AI005"
    STREAM_DECODE_ERROR = "AI006"
    MODEL_UNAVAILABLE = "AI007"
    MODEL_STALLED = "AI008"
    GENERATION_IN_PROGRESS = "AI009"
    INVALID_REQUEST = "AI010"
    ENTITY_NOT_FOUND = "AI011"
    CONFIGURATION_ERROR = "AI012"


class TravelPlannerError(Exception):
    """Base exception for all travel planner errors."""

    default_error_code: ErrorCode | None = None

    def __init__(
        self,
        message: str,
        error_code: ErrorCode | str | None = None,
        details: dict[str, Any] | None = None,
        is_retryable: bool = False,
        retry_after: float | None = None,
    ):
        super().__init__(message)
        self.message = message
        code = error_code or self.default_error_code
        self.error_code = code.value if isinstance(code, ErrorCode) else code
        self.details = details or {}
        self.is_retryable = is_retryable
        self.retry_after = retry_after
        self.timestamp = time.time()

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
            "is_retryable": self.is_retryable,
            "retry_after": self.retry_after,
            "timestamp": self.timestamp,
        }


class ConfigurationError(TravelPlannerError):
    """Raised when the system is wired or configured incorrectly. Never retried."""

    default_error_code = ErrorCode.CONFIGURATION_ERROR


class TemplateNotFoundError(ConfigurationError):
    """Raised when no active prompt template exists for a role and agent type."""

    default_error_code = ErrorCode.TEMPLATE_NOT_FOUND

    def __init__(self, message: str, role: str | None = None, agent_type: str | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.role = role
        self.agent_type = agent_type
        if role:
            self.details["role"] = role
        if agent_type:
            self.details["agent_type"] = agent_type


class DuplicateAgentError(ConfigurationError):
    """Raised when two agents are registered for the same agent type."""

    default_error_code = ErrorCode.DUPLICATE_AGENT


class AgentError(TravelPlannerError):
    """Base exception for agent-related errors."""

    pass


class AgentNotFoundError(AgentError, ConfigurationError):
    """Raised when no agent is registered for the requested agent type."""

    default_error_code = ErrorCode.AGENT_NOT_FOUND


class AgentExecutionError(AgentError):
    """Raised when agent execution fails."""

    default_error_code = ErrorCode.GENERATION_FAILED

    def __init__(
        self,
        message: str,
        agent_name: str | None = None,
        execution_time: float | None = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.agent_name = agent_name
        self.execution_time = execution_time


class GenerationInProgressError(AgentError):
    """Raised when a conversation already has a generation running."""

    default_error_code = ErrorCode.GENERATION_IN_PROGRESS


class DependencyError(TravelPlannerError):
    """Raised when a downstream collaborator needed to build a prompt fails."""

    pass


class ContextProviderError(DependencyError):
    """Raised when a context provider fails to produce its fragments."""

    default_error_code = ErrorCode.CONTEXT_PROVIDER_FAILED

    def __init__(self, message: str, provider_name: str | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.provider_name = provider_name
        if provider_name:
            self.details["provider_name"] = provider_name


class StreamDecodeError(TravelPlannerError):
    """Raised for a stream record that is not valid JSON or fails schema validation."""

    default_error_code = ErrorCode.STREAM_DECODE_ERROR

    def __init__(self, message: str, line_number: int | None = None, line: str | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            self.details["line_number"] = line_number


class ModelError(TravelPlannerError):
    """Base exception for language model transport errors."""

    default_error_code = ErrorCode.MODEL_UNAVAILABLE


class ModelConnectionError(ModelError):
    """Raised when the model endpoint cannot be reached or rejects the call."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, is_retryable=True, **kwargs)


class ModelStallError(ModelError):
    """Raised when the model sends nothing within the stall or request timeout."""

    default_error_code = ErrorCode.MODEL_STALLED

    def __init__(self, message: str, timeout_duration: float | None = None, **kwargs):
        super().__init__(message, is_retryable=True, **kwargs)
        self.timeout_duration = timeout_duration
        if timeout_duration:
            self.details["timeout_duration"] = timeout_duration


class ValidationError(TravelPlannerError):
    """Raised when a request or prompt fails validation."""

    default_error_code = ErrorCode.INVALID_REQUEST


class RepositoryError(TravelPlannerError):
    """Base exception for repository-related errors."""

    pass


class EntityNotFoundError(RepositoryError):
    """Raised when an entity is not found in the repository."""

    default_error_code = ErrorCode.ENTITY_NOT_FOUND
