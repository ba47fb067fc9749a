"""Agent interface definitions."""

from abc import ABC, abstractmethod

from ..models.agent_models import AgentConfig, AgentStatus, AgentType
from ..models.events import GenerationRequest


class IAgent(ABC):
    """Interface for all agent implementations."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the agent's name."""
        pass

    @property
    @abstractmethod
    def config(self) -> AgentConfig:
        """Get the agent's configuration."""
        pass

    @property
    def agent_type(self) -> AgentType:
        """The single agent type this agent is registered for."""
        return self.config.agent_type

    def supports(self, agent_type: AgentType) -> bool:
        """Check whether this agent handles the given agent type."""
        return agent_type == self.agent_type

    @abstractmethod
    async def execute(self, request: GenerationRequest) -> AgentStatus:
        """
        Run one generation for the request.

        Every call publishes exactly one terminal event (completed, failed or
        cancelled). Cancellation is re-raised after the cancelled event is published.

        Args:
            request: Inbound request naming this agent's type

        Returns:
            Final status of the generation
        """
        pass
