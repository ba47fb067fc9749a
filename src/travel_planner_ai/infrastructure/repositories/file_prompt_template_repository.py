"""File-based implementation of the prompt template repository."""

import json
import logging
from pathlib import Path

from travel_planner_ai.domain.exceptions import RepositoryError
from travel_planner_ai.domain.models import PromptTemplate
from travel_planner_ai.infrastructure.repositories.in_memory_prompt_template_repository import (
    InMemoryPromptTemplateRepository,
)

logger = logging.getLogger(__name__)


class FilePromptTemplateRepository(InMemoryPromptTemplateRepository):
    """Prompt template repository persisted to a single JSON file.

    The whole store is rewritten on every change through a temporary file that
    replaces the original, so the file always holds a complete snapshot.
    """

    def __init__(self, path: str | Path = "prompt_templates.json"):
        """Initialize with the store path, loading existing templates."""
        self.path = Path(path)
        super().__init__(self._load())

    def _load(self) -> list[PromptTemplate]:
        if not self.path.exists():
            return []

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
            return [PromptTemplate.deserialize(item) for item in data.get("templates", [])]
        except (json.JSONDecodeError, KeyError, ValueError) as e:
            raise RepositoryError(f"Prompt template store '{self.path}' is corrupted: {e}") from e

    def _persist(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        serialized = {"templates": [self._templates[key].serialize() for key in sorted(self._templates)]}

        with open(temp_path, "w", encoding="utf-8") as f:
            json.dump(serialized, f, indent=2, ensure_ascii=False)
        temp_path.replace(self.path)
        logger.debug(f"Saved {len(self._templates)} prompt template(s) to {self.path}")
