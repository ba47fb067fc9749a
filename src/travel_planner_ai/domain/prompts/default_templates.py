"""Built-in prompt templates installed by ``PromptTemplateService.seed_defaults``."""

from travel_planner_ai.domain.models.agent_models import AgentType, PromptType
from travel_planner_ai.domain.prompts.chat_prompt import CHAT_SYSTEM_TEMPLATE, CHAT_USER_TEMPLATE
from travel_planner_ai.domain.prompts.itinerary_prompt import ITINERARY_SYSTEM_TEMPLATE, ITINERARY_USER_TEMPLATE
from travel_planner_ai.domain.prompts.place_summary_prompt import (
    PLACE_SUMMARY_SYSTEM_TEMPLATE,
    PLACE_SUMMARY_USER_TEMPLATE,
)

DEFAULT_TEMPLATES: dict[tuple[PromptType, AgentType], str] = {
    (PromptType.SYSTEM, AgentType.CHAT): CHAT_SYSTEM_TEMPLATE,
    (PromptType.USER, AgentType.CHAT): CHAT_USER_TEMPLATE,
    (PromptType.SYSTEM, AgentType.ITINERARY): ITINERARY_SYSTEM_TEMPLATE,
    (PromptType.USER, AgentType.ITINERARY): ITINERARY_USER_TEMPLATE,
    (PromptType.SYSTEM, AgentType.PLACE_SUMMARY): PLACE_SUMMARY_SYSTEM_TEMPLATE,
    (PromptType.USER, AgentType.PLACE_SUMMARY): PLACE_SUMMARY_USER_TEMPLATE,
}
