"""Application services."""

from .agent_registry import AgentRegistry
from .generation_service import GenerationService
from .prompt_template_service import PromptTemplateService

__all__ = ["AgentRegistry", "GenerationService", "PromptTemplateService"]
