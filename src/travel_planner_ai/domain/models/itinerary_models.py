"""Itinerary schema produced by the model and read-only snapshots of stored plans."""

import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Transportation(str, Enum):
    """Ways of getting from one scheduled place to the next."""

    WALK = "WALK"
    PUBLIC_TRANSIT = "PUBLIC_TRANSIT"
    CAR = "CAR"
    BICYCLE = "BICYCLE"
    TAXI = "TAXI"


class ScheduledCategory(str, Enum):
    """Time-of-day slot of a scheduled place."""

    MORNING = "MORNING"
    AFTERNOON = "AFTERNOON"
    EVENING = "EVENING"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ScheduledPlace(_CamelModel):
    """One visit inside a daily plan."""

    place_id: int = Field(description="Identifier of a stored place, never null")
    visit_order: int = Field(ge=1, description="Visit order within the day, starting at 1")
    category: ScheduledCategory = Field(
        description="MORNING (until lunch), AFTERNOON (lunch until dinner) or EVENING (dinner onwards)"
    )
    start_time: datetime.time = Field(description="Start time in HH:mm, e.g. 09:00")
    end_time: datetime.time = Field(description="End time in HH:mm, e.g. 11:30")
    travel_time: int = Field(ge=0, description="Minutes of travel from the previous place")
    transportation: Transportation = Field(description="Transportation used to reach this place")


class DailyPlan(_CamelModel):
    """One day of an itinerary; exactly one of these per NDJSON line."""

    day_number: int = Field(ge=1, description="Day number, increasing from 1 to N")
    date: datetime.date = Field(description="Calendar date in yyyy-MM-dd")
    title: str = Field(min_length=1, description="Short title of the day")
    description: str = Field(
        description=(
            "Markdown summary of the day. Use single quotes instead of double quotes. "
            "Start with '**Day n - title**' followed by one bullet per slot."
        )
    )
    places: list[ScheduledPlace] = Field(description="Places visited this day in visit order")


class DailyPlanSnapshot(BaseModel):
    """A stored day of an existing trip plan."""

    model_config = ConfigDict(frozen=True)

    day_number: int
    date: datetime.date
    title: str
    place_names: list[str] = Field(default_factory=list)


class TripPlanSnapshot(BaseModel):
    """Read-only view of an existing trip plan."""

    model_config = ConfigDict(frozen=True)

    trip_id: int
    title: str
    start_date: datetime.date
    end_date: datetime.date
    daily_plans: list[DailyPlanSnapshot] = Field(default_factory=list)


class PlaceCandidate(BaseModel):
    """A stored place returned by a place search, with its similarity score."""

    model_config = ConfigDict(frozen=True)

    place_id: int
    name: str
    address: str | None = None
    themes: list[str] = Field(default_factory=list)
    description: str | None = None
    score: float = Field(default=1.0, ge=0.0, le=1.0)
