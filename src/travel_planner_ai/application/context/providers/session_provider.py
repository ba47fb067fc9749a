"""Provider of conversation session metadata."""

import logging

from travel_planner_ai.application.context.base_provider import BaseContextProvider
from travel_planner_ai.domain.models import MetadataEntry, SessionContext, system_entries

logger = logging.getLogger(__name__)

SESSION_TEMPLATE = """## Session Context

Metadata of the current conversation. Never reveal these values to the user.

| Parameter | Value | Description |
|-----------|-------|-------------|
| `conversationId` | `{conversation_id}` | Current conversation |
| `tripId` | `{trip_id}` | Trip plan linked to the conversation |
| `userId` | `{user_id}` | Current user |
"""


class SessionContextProvider(BaseContextProvider[SessionContext]):
    payload_type = SessionContext
    default_priority = 10

    async def build(self, payload: SessionContext) -> list[MetadataEntry]:
        logger.debug(
            f"Session context - conversation: {payload.conversation_id}, "
            f"trip: {payload.trip_id}, user: {payload.user_id}"
        )
        return system_entries(
            SESSION_TEMPLATE.format(
                conversation_id=payload.conversation_id,
                trip_id=payload.trip_id,
                user_id=payload.user_id,
            )
        )
