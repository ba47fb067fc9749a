"""In-memory implementation of the prompt template repository."""

import asyncio
from datetime import UTC, datetime

from travel_planner_ai.domain.interfaces import IPromptTemplateRepository
from travel_planner_ai.domain.models import AgentType, PromptTemplate, PromptType


class InMemoryPromptTemplateRepository(IPromptTemplateRepository):
    """Prompt template repository backed by a dictionary.

    Writes are serialized by a lock, and activating a template deactivates the
    previous active template of the same pair within the same write, so readers
    never observe two active templates or none in between.
    """

    def __init__(self, templates: list[PromptTemplate] | None = None):
        self._templates: dict[int, PromptTemplate] = {}
        self._lock = asyncio.Lock()
        for template in templates or []:
            self._store(template)

    async def get_by_id(self, template_id: int) -> PromptTemplate | None:
        return self._templates.get(template_id)

    async def get_all(self) -> list[PromptTemplate]:
        return [self._templates[key] for key in sorted(self._templates)]

    async def find_active(self, role: PromptType, agent_type: AgentType) -> PromptTemplate | None:
        for template in self._templates.values():
            if template.active and template.role == role and template.agent_type == agent_type:
                return template
        return None

    async def save(self, template: PromptTemplate) -> PromptTemplate:
        async with self._lock:
            saved = self._store(template)
            self._persist()
            return saved

    async def delete(self, template_id: int) -> bool:
        async with self._lock:
            if template_id not in self._templates:
                return False
            del self._templates[template_id]
            self._persist()
            return True

    def _store(self, template: PromptTemplate) -> PromptTemplate:
        if template.id is None:
            template = template.model_copy(update={"id": max(self._templates, default=0) + 1})

        if template.active:
            now = datetime.now(UTC)
            for key, other in self._templates.items():
                if (
                    other.id != template.id
                    and other.active
                    and other.role == template.role
                    and other.agent_type == template.agent_type
                ):
                    self._templates[key] = other.model_copy(update={"active": False, "updated_at": now})

        self._templates[template.id] = template
        return template

    def _persist(self) -> None:
        """Hook called after every write while the lock is held."""
        pass
