"""Providers that inject the active stored prompt templates of an agent."""

import logging

from travel_planner_ai.application.context.base_provider import BaseContextProvider
from travel_planner_ai.application.services.prompt_template_service import PromptTemplateService
from travel_planner_ai.domain.models import AgentType, MetadataEntry, PromptType

logger = logging.getLogger(__name__)


class _TemplateProvider(BaseContextProvider[AgentType]):
    payload_type = AgentType
    role: PromptType

    def __init__(self, template_service: PromptTemplateService):
        self._template_service = template_service

    async def build(self, payload: AgentType) -> list[MetadataEntry]:
        template = await self._template_service.find_active_template(self.role, payload)
        logger.debug(f"Using {self.role.value} template {template.id} for {payload.value}")
        return [MetadataEntry(self.role, template.body)]


class SystemTemplateProvider(_TemplateProvider):
    """Active SYSTEM template of the agent type."""

    role = PromptType.SYSTEM
    default_priority = 0


class UserTemplateProvider(_TemplateProvider):
    """Active USER template of the agent type."""

    role = PromptType.USER
    default_priority = 1
