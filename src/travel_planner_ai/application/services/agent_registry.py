"""Registry mapping agent types to the single agent that handles each."""

import logging

from travel_planner_ai.domain.exceptions import AgentNotFoundError, ConfigurationError, DuplicateAgentError
from travel_planner_ai.domain.interfaces import IAgent
from travel_planner_ai.domain.models import AgentStatus, AgentType, GenerationRequest

logger = logging.getLogger(__name__)


class AgentRegistry:
    """Closed set of agents keyed by ``AgentType``.

    The registry is validated once when it is built: every agent must support
    exactly the type it declares, and no type may be registered twice.
    """

    def __init__(self, agents: list[IAgent]):
        self._agents: dict[AgentType, IAgent] = {}
        for agent in agents:
            agent_type = agent.agent_type
            if not agent.supports(agent_type):
                raise ConfigurationError(
                    f"Agent '{agent.name}' declares type '{agent_type.value}' but does not support it"
                )
            if agent_type in self._agents:
                raise DuplicateAgentError(
                    f"Agent type '{agent_type.value}' is already handled by '{self._agents[agent_type].name}'",
                    details={"agent_type": agent_type.value, "agent_name": agent.name},
                )
            self._agents[agent_type] = agent

        logger.info(
            f"Agent registry initialized with {len(self._agents)} agent(s): "
            f"{', '.join(t.value for t in self._agents)}"
        )

    def get(self, agent_type: AgentType) -> IAgent:
        """
        Get the agent for a type.

        Raises:
            AgentNotFoundError: If no agent handles the type
        """
        agent = self._agents.get(agent_type)
        if agent is None:
            raise AgentNotFoundError(
                f"No agent registered for type '{agent_type.value}'",
                details={"agent_type": agent_type.value},
            )
        return agent

    def supported_types(self) -> list[AgentType]:
        return list(self._agents)

    def __contains__(self, agent_type: AgentType) -> bool:
        return agent_type in self._agents

    async def dispatch(self, request: GenerationRequest, agent_type: AgentType | None = None) -> AgentStatus:
        """
        Run the agent that handles the request.

        Args:
            request: Inbound request
            agent_type: Overrides the type named by the request

        Raises:
            AgentNotFoundError: If no agent handles the type; no agent is invoked
        """
        agent = self.get(agent_type or request.agent_type)
        logger.debug(f"Dispatching conversation {request.conversation_id} to {agent.name}")
        return await agent.execute(request)
