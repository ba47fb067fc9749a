"""Domain models."""

from .agent_models import (
    AgentConfig,
    AgentStatus,
    AgentType,
    Message,
    MessageRole,
    MetadataEntry,
    PromptType,
    system_entries,
    user_entries,
)
from .context_models import (
    ContextPayload,
    ItineraryCommandContext,
    ItineraryQueryContext,
    OutputSchemaContext,
    PlaceQueryContext,
    PlaceVectorQueryContext,
    SessionContext,
)
from .events import (
    ChatMessageGenerated,
    ChatRequested,
    DailyPlanGenerated,
    DomainEvent,
    GenerationCancelled,
    GenerationCompleted,
    GenerationFailed,
    GenerationRequest,
    ItineraryRequested,
    PlaceSummaryRequested,
    StreamUnitRejected,
    SummaryGenerated,
    TerminalEvent,
)
from .itinerary_models import (
    DailyPlan,
    DailyPlanSnapshot,
    PlaceCandidate,
    ScheduledCategory,
    ScheduledPlace,
    Transportation,
    TripPlanSnapshot,
)
from .stream_models import DecodeFailure, StreamEnd, StreamUnit
from .template_models import PromptTemplate

__all__ = [
    "AgentConfig",
    "AgentStatus",
    "AgentType",
    "Message",
    "MessageRole",
    "MetadataEntry",
    "PromptType",
    "system_entries",
    "user_entries",
    "ContextPayload",
    "ItineraryCommandContext",
    "ItineraryQueryContext",
    "OutputSchemaContext",
    "PlaceQueryContext",
    "PlaceVectorQueryContext",
    "SessionContext",
    "ChatMessageGenerated",
    "ChatRequested",
    "DailyPlanGenerated",
    "DomainEvent",
    "GenerationCancelled",
    "GenerationCompleted",
    "GenerationFailed",
    "GenerationRequest",
    "ItineraryRequested",
    "PlaceSummaryRequested",
    "StreamUnitRejected",
    "SummaryGenerated",
    "TerminalEvent",
    "DailyPlan",
    "DailyPlanSnapshot",
    "PlaceCandidate",
    "ScheduledCategory",
    "ScheduledPlace",
    "Transportation",
    "TripPlanSnapshot",
    "DecodeFailure",
    "StreamEnd",
    "StreamUnit",
    "PromptTemplate",
]
