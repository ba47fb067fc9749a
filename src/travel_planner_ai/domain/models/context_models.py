"""Typed payloads consumed by context providers.

Payloads are request-scoped and frozen: providers read them, never change them.
``AgentType`` itself is also used as a payload, selecting the stored prompt
templates of an agent.
"""

import datetime

from pydantic import BaseModel, ConfigDict, Field

from .itinerary_models import Transportation


class ContextPayload(BaseModel):
    """Base class of every context payload."""

    model_config = ConfigDict(frozen=True)


class SessionContext(ContextPayload):
    """Identifiers of the conversation the prompt is built for."""

    conversation_id: str
    trip_id: int | None = None
    user_id: str


class ItineraryCommandContext(ContextPayload):
    """Conditions of the itinerary the user wants generated."""

    region: str
    start_date: datetime.date
    duration_days: int = Field(ge=1)
    themes: list[str] = Field(default_factory=list)
    party_size: int = Field(default=1, ge=1)
    transport_mode: Transportation = Transportation.PUBLIC_TRANSIT

    @property
    def end_date(self) -> datetime.date:
        return self.start_date + datetime.timedelta(days=self.duration_days - 1)


class ItineraryQueryContext(ContextPayload):
    """Reference to an existing plan whose state should be summarized."""

    trip_id: int | None = None
    user_id: str | None = None


class OutputSchemaContext(ContextPayload):
    """JSON schema every streamed record must satisfy."""

    json_schema: str


class PlaceQueryContext(ContextPayload):
    """Raw facts about a place to be summarized."""

    name: str
    address: str | None = None
    description: str | None = None
    operating_hours: str | None = None
    holiday_info: str | None = None
    themes: list[str] = Field(default_factory=list)


class PlaceVectorQueryContext(ContextPayload):
    """Search conditions for the candidate places offered to the itinerary model."""

    region: str
    themes: list[str] = Field(default_factory=list)
    top_k: int = Field(default=10, ge=1)
    similarity_threshold: float = Field(default=0.4, ge=0.0, le=1.0)
