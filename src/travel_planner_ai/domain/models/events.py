"""Inbound generation requests and outbound domain events."""

import datetime
from datetime import UTC
from typing import ClassVar
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from .agent_models import AgentType
from .itinerary_models import DailyPlan, Transportation


class GenerationRequest(BaseModel):
    """Base class of every inbound request; names the agent type that handles it."""

    model_config = ConfigDict(frozen=True)

    agent_type: ClassVar[AgentType]

    conversation_id: str


class ChatRequested(GenerationRequest):
    agent_type: ClassVar[AgentType] = AgentType.CHAT

    trip_id: int | None = None
    user_id: str
    message: str


class ItineraryRequested(GenerationRequest):
    agent_type: ClassVar[AgentType] = AgentType.ITINERARY

    trip_id: int | None = None
    user_id: str
    region: str
    start_date: datetime.date
    duration_days: int = Field(ge=1)
    themes: list[str] = Field(default_factory=list)
    party_size: int = Field(default=1, ge=1)
    transport_mode: Transportation = Transportation.PUBLIC_TRANSIT
    message: str | None = None


class PlaceSummaryRequested(GenerationRequest):
    agent_type: ClassVar[AgentType] = AgentType.PLACE_SUMMARY

    conversation_id: str = Field(default_factory=lambda: str(uuid4()))
    place_id: int
    name: str
    address: str | None = None
    description: str | None = None
    operating_hours: str | None = None
    holiday_info: str | None = None
    themes: list[str] = Field(default_factory=list)


class DomainEvent(BaseModel):
    """Immutable event published by an agent."""

    model_config = ConfigDict(frozen=True)

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    occurred_at: datetime.datetime = Field(default_factory=lambda: datetime.datetime.now(UTC))
    conversation_id: str


class ChatMessageGenerated(DomainEvent):
    trip_id: int | None = None
    user_id: str
    text: str


class DailyPlanGenerated(DomainEvent):
    trip_id: int | None = None
    user_id: str | None = None
    sequence: int
    day_number: int
    unit: DailyPlan


class SummaryGenerated(DomainEvent):
    place_id: int
    name: str
    address: str | None = None
    themes: list[str] = Field(default_factory=list)
    content: str


class StreamUnitRejected(DomainEvent):
    """A streamed line that was skipped because it could not be decoded."""

    trip_id: int | None = None
    line_number: int
    line: str
    reason: str


class TerminalEvent(DomainEvent):
    """Base class of the single event that ends a generation."""

    trip_id: int | None = None
    user_id: str | None = None


class GenerationCompleted(TerminalEvent):
    unit_count: int = 0


class GenerationFailed(TerminalEvent):
    reason: str
    error_code: str | None = None


class GenerationCancelled(TerminalEvent):
    pass
