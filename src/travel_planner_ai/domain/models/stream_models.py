"""Items produced by the NDJSON stream decoder."""

from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


@dataclass(frozen=True)
class StreamUnit(Generic[T]):
    """One decoded and validated record.

    ``sequence`` starts at 1 and increases by one per emitted unit.
    ``line_number`` is the 1-based line of the source stream where the record starts.
    """

    sequence: int
    line_number: int
    value: T


@dataclass(frozen=True)
class DecodeFailure:
    """A non-blank line that could not be parsed or validated."""

    line_number: int
    line: str
    reason: str


@dataclass(frozen=True)
class StreamEnd:
    """Terminal marker, emitted exactly once after the last unit."""

    unit_count: int
    failure_count: int
