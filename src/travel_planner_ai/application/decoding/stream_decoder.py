"""Incremental decoder for newline-delimited JSON model output.

Chunks may split a record anywhere, including inside a string literal or a
multi-byte UTF-8 sequence. A record ends at a literal newline that is outside
any JSON string; newlines inside strings are kept as part of the record.

The output contract forbids literal newlines inside strings, so a newline
seen inside a string is also remembered as a possible line break. When the
line before such a newline parses as a JSON object on its own, the record
before it is closed as malformed and scanning restarts after that line. A
record that spans several lines and fails to parse as a whole is decoded
line by line. An unbalanced quote in one line therefore costs that line only.
"""

import codecs
import json
import logging
from collections.abc import AsyncIterable, AsyncIterator, Iterable
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from travel_planner_ai.config import DecodeErrorPolicy
from travel_planner_ai.domain.exceptions import StreamDecodeError
from travel_planner_ai.domain.models import DecodeFailure, StreamEnd, StreamUnit

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

DecodedItem = StreamUnit | DecodeFailure | StreamEnd

MAX_LOGGED_LINE = 200


class ScanState(Enum):
    """Position of the scanner relative to JSON string literals."""

    OUTSIDE = "outside"
    IN_STRING = "in_string"
    ESCAPE = "escape"


class NdjsonStreamDecoder(Generic[T]):
    """Turns a chunked NDJSON stream into validated units of one schema.

    Use ``feed`` for every chunk and ``close`` once at the end of the stream,
    or iterate ``decode`` over an async chunk source. Every non-blank line
    yields either a ``StreamUnit`` or a ``DecodeFailure``; ``close`` ends with
    exactly one ``StreamEnd``.

    With ``DecodeErrorPolicy.ABORT`` a bad line raises ``StreamDecodeError``
    instead of producing a ``DecodeFailure``. Lines longer than
    ``max_line_length`` characters are rejected without being parsed.
    """

    def __init__(
        self,
        schema: type[T],
        policy: DecodeErrorPolicy = DecodeErrorPolicy.SKIP,
        max_line_length: int | None = None,
    ):
        self.schema = schema
        self.policy = policy
        self.max_line_length = max_line_length
        self._buffer = ""
        self._scan_pos = 0
        self._state = ScanState.OUTSIDE
        self._string_breaks: list[int] = []
        self._utf8 = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._line_number = 0
        self._sequence = 0
        self._failures = 0
        self._closed = False

    @property
    def unit_count(self) -> int:
        return self._sequence

    @property
    def failure_count(self) -> int:
        return self._failures

    @property
    def closed(self) -> bool:
        return self._closed

    def feed(self, chunk: str | bytes) -> list[DecodedItem]:
        """
        Consume one chunk and return the items for every line it completed.

        Raises:
            StreamDecodeError: On a bad line when the policy is ABORT
        """
        if self._closed:
            raise RuntimeError("Cannot feed a closed decoder")

        if isinstance(chunk, bytes):
            chunk = self._utf8.decode(chunk)
        if not chunk:
            return []

        self._buffer += chunk
        return [item for record in self._scan() for item in self._decode_record(record)]

    def close(self) -> list[DecodedItem]:
        """
        Flush the unterminated last line and emit the end marker.

        Calling ``close`` again returns an empty list.
        """
        if self._closed:
            return []
        self._closed = True

        self._buffer += self._utf8.decode(b"", final=True)
        remainder = self._split_lines(self._buffer, 0, self._string_breaks, len(self._buffer))
        self._buffer, self._scan_pos, self._string_breaks = "", 0, []
        items = self._decode_record(remainder) if any(remainder) else []

        items.append(StreamEnd(unit_count=self._sequence, failure_count=self._failures))
        logger.debug(
            f"Stream closed after {self._line_number} line(s): "
            f"{self._sequence} unit(s), {self._failures} rejected"
        )
        return items

    async def decode(self, chunks: AsyncIterable[str | bytes]) -> AsyncIterator[DecodedItem]:
        """Decode an async chunk source, ending with the ``StreamEnd`` marker."""
        async for chunk in chunks:
            for item in self.feed(chunk):
                yield item
        for item in self.close():
            yield item

    def decode_all(self, chunks: Iterable[str | bytes]) -> list[DecodedItem]:
        """Decode a complete synchronous chunk source."""
        items: list[DecodedItem] = []
        for chunk in chunks:
            items.extend(self.feed(chunk))
        items.extend(self.close())
        return items

    def _scan(self) -> list[list[str]]:
        """Split completed records off the buffer, resuming where the last scan stopped.

        Each record is returned as its physical lines.
        """
        buffer = self._buffer
        state = self._state
        breaks = self._string_breaks
        start = 0
        records: list[list[str]] = []

        for pos in range(self._scan_pos, len(buffer)):
            char = buffer[pos]
            if state is ScanState.ESCAPE:
                state = ScanState.IN_STRING
            elif state is ScanState.IN_STRING:
                if char == "\\":
                    state = ScanState.ESCAPE
                elif char == '"':
                    state = ScanState.OUTSIDE
                elif char == "\n":
                    line_start = breaks[-1] + 1 if breaks else start
                    if not self._parses_as_object(buffer[line_start:pos]):
                        breaks.append(pos)
                        continue
                    if breaks:
                        records.append(self._split_lines(buffer, start, breaks[:-1], breaks[-1]))
                    records.append([buffer[line_start:pos]])
                    start, breaks, state = pos + 1, [], ScanState.OUTSIDE
            elif char == '"':
                state = ScanState.IN_STRING
            elif char == "\n":
                records.append(self._split_lines(buffer, start, breaks, pos))
                start, breaks = pos + 1, []

        self._buffer = buffer[start:]
        self._scan_pos = len(self._buffer)
        self._state = state
        self._string_breaks = [position - start for position in breaks]
        return records

    @staticmethod
    def _split_lines(buffer: str, start: int, breaks: list[int], end: int) -> list[str]:
        bounds = [start - 1, *breaks, end]
        return [buffer[bounds[i] + 1 : bounds[i + 1]] for i in range(len(bounds) - 1)]

    def _parses_as_object(self, line: str) -> bool:
        line = line.strip()
        if not line.startswith("{") or self._too_long(line):
            return False
        try:
            return isinstance(json.loads(line), dict)
        except (ValueError, RecursionError):
            return False

    def _too_long(self, line: str) -> bool:
        return self.max_line_length is not None and len(line) > self.max_line_length

    def _decode_record(self, lines: list[str]) -> list[DecodedItem]:
        first_line = self._line_number + 1
        self._line_number += len(lines)

        if len(lines) > 1:
            record = "\n".join(lines).strip()
            try:
                return [self._accept(self._parse(record), first_line)]
            except (ValueError, RecursionError):
                logger.debug(
                    f"Record on lines {first_line}-{self._line_number} does not parse as a whole, "
                    "decoding its lines separately"
                )

        items: list[DecodedItem] = []
        for offset, line in enumerate(lines):
            item = self._decode_line(line, first_line + offset)
            if item is not None:
                items.append(item)
        return items

    def _decode_line(self, raw_line: str, line_number: int) -> StreamUnit[T] | DecodeFailure | None:
        line = raw_line.strip()
        if not line:
            return None
        if self._too_long(line):
            return self._reject(line, line_number, f"line exceeds {self.max_line_length} characters")

        try:
            value = self._parse(line)
        except SchemaValidationError as e:
            return self._reject(line, line_number, f"schema validation failed: {self._summarize(e)}")
        except RecursionError:
            return self._reject(line, line_number, "invalid JSON: nested too deeply")
        except ValueError as e:
            return self._reject(line, line_number, f"invalid JSON: {e}")

        return self._accept(value, line_number)

    def _parse(self, line: str) -> T:
        value: Any = json.loads(line, strict=False)
        if not isinstance(value, dict):
            raise ValueError(f"expected a JSON object, got {type(value).__name__}")
        return self.schema.model_validate(value)

    def _accept(self, value: T, line_number: int) -> StreamUnit[T]:
        self._sequence += 1
        return StreamUnit(sequence=self._sequence, line_number=line_number, value=value)

    def _reject(self, line: str, line_number: int, reason: str) -> DecodeFailure:
        shown = line if len(line) <= MAX_LOGGED_LINE else line[:MAX_LOGGED_LINE] + "..."
        if self.policy == DecodeErrorPolicy.ABORT:
            logger.error(f"Aborting stream at line {line_number}: {reason} - {shown}")
            raise StreamDecodeError(reason, line_number=line_number, line=line)

        self._failures += 1
        logger.warning(f"Skipping line {line_number}: {reason} - {shown}")
        return DecodeFailure(line_number=line_number, line=line, reason=reason)

    @staticmethod
    def _summarize(error: SchemaValidationError) -> str:
        return "; ".join(
            f"{'.'.join(str(part) for part in detail['loc']) or '<root>'}: {detail['msg']}"
            for detail in error.errors()
        )
