"""Administrative access to stored prompt templates."""

import logging
from datetime import UTC, datetime

from travel_planner_ai.domain.exceptions import EntityNotFoundError, TemplateNotFoundError
from travel_planner_ai.domain.interfaces import IPromptTemplateRepository
from travel_planner_ai.domain.models import AgentType, PromptTemplate, PromptType
from travel_planner_ai.domain.prompts.default_templates import DEFAULT_TEMPLATES

logger = logging.getLogger(__name__)


class PromptTemplateService:
    """Service for reading and managing prompt templates."""

    def __init__(self, repository: IPromptTemplateRepository):
        self._repository = repository

    async def find_active_template(self, role: PromptType, agent_type: AgentType) -> PromptTemplate:
        """
        Get the active template for a role and agent type.

        Raises:
            TemplateNotFoundError: If no template is active for the pair
        """
        template = await self._repository.find_active(role, agent_type)
        if template is None:
            raise TemplateNotFoundError(
                f"No active {role.value} template for agent type '{agent_type.value}'",
                role=role.value,
                agent_type=agent_type.value,
            )
        return template

    async def get_template(self, template_id: int) -> PromptTemplate:
        template = await self._repository.get_by_id(template_id)
        if template is None:
            raise EntityNotFoundError(f"Prompt template {template_id} not found", details={"id": template_id})
        return template

    async def list_templates(
        self, agent_type: AgentType | None = None, role: PromptType | None = None
    ) -> list[PromptTemplate]:
        templates = await self._repository.get_all()
        if agent_type is not None:
            templates = [t for t in templates if t.agent_type == agent_type]
        if role is not None:
            templates = [t for t in templates if t.role == role]
        return templates

    async def create_template(
        self,
        role: PromptType,
        agent_type: AgentType,
        body: str,
        active: bool = False,
        description: str | None = None,
    ) -> PromptTemplate:
        """
        Create a template.

        Creating an active template deactivates the current active template of
        the same role and agent type.
        """
        template = await self._repository.save(
            PromptTemplate(role=role, agent_type=agent_type, body=body, active=active, description=description)
        )
        logger.info(
            f"Created {role.value} template {template.id} for {agent_type.value}"
            + (" (active)" if active else "")
        )
        return template

    async def update_template(
        self,
        template_id: int,
        body: str | None = None,
        active: bool | None = None,
        description: str | None = None,
    ) -> PromptTemplate:
        """Update the given fields of a template; omitted fields are kept."""
        template = await self.get_template(template_id)

        changes: dict = {"updated_at": datetime.now(UTC)}
        if body is not None:
            changes["body"] = body
        if active is not None:
            changes["active"] = active
        if description is not None:
            changes["description"] = description

        updated = PromptTemplate.model_validate({**template.model_dump(), **changes})
        saved = await self._repository.save(updated)
        logger.info(f"Updated prompt template {template_id}")
        return saved

    async def delete_template(self, template_id: int) -> None:
        if not await self._repository.delete(template_id):
            raise EntityNotFoundError(f"Prompt template {template_id} not found", details={"id": template_id})
        logger.info(f"Deleted prompt template {template_id}")

    async def seed_defaults(self) -> list[PromptTemplate]:
        """
        Install the built-in prompts as active templates.

        Pairs that already have an active template are left untouched.

        Returns:
            The templates that were created
        """
        created = []
        for (role, agent_type), body in DEFAULT_TEMPLATES.items():
            if await self._repository.find_active(role, agent_type) is not None:
                continue
            created.append(
                await self.create_template(
                    role, agent_type, body.strip(), active=True, description="Built-in default"
                )
            )
        return created
