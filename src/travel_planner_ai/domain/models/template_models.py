"""Prompt template entity."""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field

from .agent_models import AgentType, PromptType


class PromptTemplate(BaseModel):
    """A stored prompt body for one (role, agent type) pair.

    At most one template per pair is active; agents only ever read the active one.
    """

    id: int | None = None
    role: PromptType
    agent_type: AgentType
    body: str = Field(min_length=1)
    active: bool = False
    description: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def serialize(self) -> dict[str, Any]:
        """Serialize the template to a dictionary for persistence."""
        return {
            "id": self.id,
            "role": self.role.value,
            "agent_type": self.agent_type.value,
            "body": self.body,
            "active": self.active,
            "description": self.description,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def deserialize(cls, data: dict[str, Any]) -> "PromptTemplate":
        """Deserialize a template from a dictionary."""
        return cls(
            id=data["id"],
            role=PromptType(data["role"]),
            agent_type=AgentType(data["agent_type"]),
            body=data["body"],
            active=data.get("active", False),
            description=data.get("description"),
            created_at=datetime.fromisoformat(data["created_at"]),
            updated_at=datetime.fromisoformat(data["updated_at"]),
        )
