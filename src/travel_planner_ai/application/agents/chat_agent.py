"""Conversational agent answering free-form user messages."""

import logging

from travel_planner_ai.application.agents.base_agent import BaseGenerationAgent
from travel_planner_ai.domain.exceptions import AgentExecutionError
from travel_planner_ai.domain.models import (
    AgentConfig,
    AgentType,
    ChatMessageGenerated,
    ChatRequested,
    ItineraryQueryContext,
    MessageRole,
    SessionContext,
)
from travel_planner_ai.domain.prompts.chat_prompt import CHAT_PROMPT

logger = logging.getLogger(__name__)


class ChatAgent(BaseGenerationAgent):
    """Answers a chat message with one blocking model call."""

    request_type = ChatRequested

    async def _generate(self, request: ChatRequested) -> int:
        messages = await self.build_prompt(
            request.conversation_id,
            request.message,
            AgentType.CHAT,
            SessionContext(
                conversation_id=request.conversation_id,
                trip_id=request.trip_id,
                user_id=request.user_id,
            ),
            ItineraryQueryContext(trip_id=request.trip_id, user_id=request.user_id),
        )

        text = (await self._complete(messages)).strip()
        if not text:
            raise AgentExecutionError("Model returned an empty chat response", agent_name=self.name)

        await self._memory.append_turn(request.conversation_id, MessageRole.USER, request.message)
        await self._memory.append_turn(request.conversation_id, MessageRole.ASSISTANT, text)

        self._publish(
            ChatMessageGenerated(
                conversation_id=request.conversation_id,
                trip_id=request.trip_id,
                user_id=request.user_id,
                text=text,
            )
        )
        logger.debug(f"Chat response for conversation {request.conversation_id}: {len(text)} characters")
        return 1


def default_chat_config() -> AgentConfig:
    return AgentConfig(name="Chat Agent", agent_type=AgentType.CHAT, instructions=CHAT_PROMPT.strip())
