"""Agent that rewrites raw place data into a searchable plain-text description."""

import logging

from travel_planner_ai.application.agents.base_agent import BaseGenerationAgent
from travel_planner_ai.domain.exceptions import AgentExecutionError
from travel_planner_ai.domain.models import (
    AgentConfig,
    AgentType,
    PlaceQueryContext,
    PlaceSummaryRequested,
    SummaryGenerated,
)
from travel_planner_ai.domain.prompts.place_summary_prompt import PLACE_SUMMARY_PROMPT

logger = logging.getLogger(__name__)


class PlaceSummaryAgent(BaseGenerationAgent):
    request_type = PlaceSummaryRequested
    uses_memory = False

    async def _generate(self, request: PlaceSummaryRequested) -> int:
        logger.info(f"Summarizing place {request.place_id}")
        messages = await self.build_prompt(
            request.conversation_id,
            f"Summarize the place '{request.name}'.",
            AgentType.PLACE_SUMMARY,
            PlaceQueryContext(
                name=request.name,
                address=request.address,
                description=request.description,
                operating_hours=request.operating_hours,
                holiday_info=request.holiday_info,
                themes=request.themes,
            ),
        )

        content = (await self._complete(messages)).strip()
        if not content:
            raise AgentExecutionError(
                f"Model returned an empty summary for place {request.place_id}", agent_name=self.name
            )

        self._publish(
            SummaryGenerated(
                conversation_id=request.conversation_id,
                place_id=request.place_id,
                name=request.name,
                address=request.address,
                themes=request.themes,
                content=content,
            )
        )
        return 1


def default_place_summary_config() -> AgentConfig:
    return AgentConfig(
        name="Place Summary Agent",
        agent_type=AgentType.PLACE_SUMMARY,
        instructions=PLACE_SUMMARY_PROMPT.strip(),
        temperature=0.3,
    )
