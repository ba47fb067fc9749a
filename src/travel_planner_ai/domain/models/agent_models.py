"""Domain models for agents, prompts and messages."""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class AgentType(Enum):
    """Types of agents in the system."""

    CHAT = "chat"
    ITINERARY = "itinerary"
    PLACE_SUMMARY = "place_summary"


class PromptType(Enum):
    """Role of a prompt fragment or stored template."""

    SYSTEM = "system"
    USER = "user"


class MessageRole(Enum):
    """Message roles in conversations."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class AgentStatus(Enum):
    """Final status of one agent invocation."""

    COMPLETED = "completed"
    ERROR = "error"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Message:
    """Immutable message value object."""

    role: MessageRole
    content: str
    timestamp: datetime = None
    metadata: dict[str, Any] | None = None

    def __post_init__(self):
        if self.timestamp is None:
            object.__setattr__(self, "timestamp", datetime.now(UTC))
        if self.metadata is None:
            object.__setattr__(self, "metadata", {})


@dataclass(frozen=True)
class MetadataEntry:
    """A single prompt fragment contributed by a context provider."""

    role: PromptType
    content: str

    def to_message(self) -> Message:
        """Convert the fragment into a prompt message of the matching role."""
        if self.role == PromptType.SYSTEM:
            return Message(role=MessageRole.SYSTEM, content=self.content)
        return Message(role=MessageRole.USER, content=self.content)


def system_entries(*contents: str) -> list[MetadataEntry]:
    """Build SYSTEM fragments, one per content string."""
    return [MetadataEntry(PromptType.SYSTEM, content) for content in contents]


def user_entries(*contents: str) -> list[MetadataEntry]:
    """Build USER fragments, one per content string."""
    return [MetadataEntry(PromptType.USER, content) for content in contents]


class AgentConfig(BaseModel):
    """Static configuration for an agent."""

    model_config = ConfigDict(frozen=True)

    name: str
    agent_type: AgentType
    instructions: str
    temperature: float | None = None
