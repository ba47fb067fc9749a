"""Test doubles and data builders shared by the test modules."""

import asyncio
import datetime
import json
from collections.abc import AsyncIterator

from travel_planner_ai.domain.interfaces import IEventPublisher, IModelClient
from travel_planner_ai.domain.models import DomainEvent, Message


def daily_plan_record(day_number: int, date: datetime.date, title: str | None = None) -> dict:
    """Build one valid daily plan record as the model would emit it."""
    return {
        "dayNumber": day_number,
        "date": date.isoformat(),
        "title": title or f"Day {day_number} in Jeju",
        "description": f"**Day {day_number} - coast**\n- MORNING: beach\n- AFTERNOON: 'black pork' lunch",
        "places": [
            {
                "placeId": 100 + day_number,
                "visitOrder": 1,
                "category": "MORNING",
                "startTime": "09:00",
                "endTime": "11:30",
                "travelTime": 0,
                "transportation": "CAR",
            },
            {
                "placeId": 200 + day_number,
                "visitOrder": 2,
                "category": "AFTERNOON",
                "startTime": "12:30",
                "endTime": "14:00",
                "travelTime": 25,
                "transportation": "CAR",
            },
        ],
    }


def ndjson(records: list[dict]) -> str:
    return "".join(json.dumps(record, ensure_ascii=False) + "\n" for record in records)


class FakeModelClient(IModelClient):
    """Scripted model client that records every prompt it receives."""

    def __init__(
        self,
        responses: list[str | Exception] | None = None,
        chunks: list[str] | None = None,
        chunk_delay: float = 0.0,
        hang_after: int | None = None,
        hang_on_complete: bool = False,
    ):
        self.responses = list(responses or [])
        self.chunks = list(chunks or [])
        self.chunk_delay = chunk_delay
        self.hang_after = hang_after
        self.hang_on_complete = hang_on_complete
        self.prompts: list[list[Message]] = []
        self.stream_closed = False
        self.chunks_sent = 0

    async def complete(self, messages: list[Message], temperature: float | None = None) -> str:
        self.prompts.append(messages)
        if self.hang_on_complete:
            await asyncio.Event().wait()
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def stream(self, messages: list[Message], temperature: float | None = None) -> AsyncIterator[str]:
        self.prompts.append(messages)
        try:
            for index, chunk in enumerate(self.chunks):
                if self.hang_after is not None and index >= self.hang_after:
                    await asyncio.Event().wait()
                if self.chunk_delay:
                    await asyncio.sleep(self.chunk_delay)
                self.chunks_sent += 1
                yield chunk
        finally:
            self.stream_closed = True


class RecordingPublisher(IEventPublisher):
    def __init__(self):
        self.events: list[DomainEvent] = []

    def publish(self, event: DomainEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: type) -> list:
        return [event for event in self.events if isinstance(event, event_type)]
