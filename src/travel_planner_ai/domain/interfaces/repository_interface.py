"""Repository interface definitions."""

from abc import ABC, abstractmethod

from ..models.agent_models import AgentType, PromptType
from ..models.itinerary_models import PlaceCandidate, TripPlanSnapshot
from ..models.template_models import PromptTemplate


class IPromptTemplateRepository(ABC):
    """Interface for prompt template persistence."""

    @abstractmethod
    async def get_by_id(self, template_id: int) -> PromptTemplate | None:
        """Get a template by ID."""
        pass

    @abstractmethod
    async def get_all(self) -> list[PromptTemplate]:
        """Get all templates ordered by ID."""
        pass

    @abstractmethod
    async def find_active(self, role: PromptType, agent_type: AgentType) -> PromptTemplate | None:
        """Get the active template for a role and agent type, if any."""
        pass

    @abstractmethod
    async def save(self, template: PromptTemplate) -> PromptTemplate:
        """
        Insert or replace a template.

        A template without an ID receives the next free ID. Saving an active
        template deactivates the previously active template of the same role and
        agent type in the same atomic step.
        """
        pass

    @abstractmethod
    async def delete(self, template_id: int) -> bool:
        """Delete a template by ID."""
        pass


class ITripPlanReader(ABC):
    """Read-only access to stored trip plans."""

    @abstractmethod
    async def find_plan(self, trip_id: int, user_id: str | None = None) -> TripPlanSnapshot | None:
        """Get the plan of a trip, or None when the trip has no plan."""
        pass


class IPlaceSearch(ABC):
    """Similarity search over stored places and restaurants."""

    @abstractmethod
    async def find_places(
        self, region: str, theme: str | None, top_k: int, similarity_threshold: float
    ) -> list[PlaceCandidate]:
        """Get up to ``top_k`` places of a region matching a theme, best match first."""
        pass

    @abstractmethod
    async def find_restaurants(self, region: str, top_k: int, similarity_threshold: float) -> list[PlaceCandidate]:
        """Get up to ``top_k`` restaurants of a region, best match first."""
        pass
