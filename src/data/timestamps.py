"""ISO-8601 timestamp parsing for MBTA prediction times."""

from __future__ import annotations

from datetime import datetime, timezone
import re

_CALENDAR_RE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})T([0-9]{2}):([0-9]{2}):([0-9]{2})")
_FRACTION_RE = re.compile(r"\.[0-9]*")
_OFFSET_RE = re.compile(r"([0-9]{2}):([0-9]{2})")

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class MalformedTimestamp(ValueError):
    """Raised when a timestamp string cannot be converted to an instant."""


def parse_timestamp(text: str) -> int:
    """Parse ``YYYY-MM-DDTHH:MM:SS[.fff](Z|+HH:MM|-HH:MM)`` into UTC epoch seconds.

    The calendar fields are read as UTC wall-clock values and the explicit
    offset is then removed (``utc = local - offset``). A missing marker is
    treated as UTC.
    """
    if not isinstance(text, str):
        raise MalformedTimestamp(f"Timestamp must be a string, got {type(text).__name__}")

    match = _CALENDAR_RE.match(text)
    if match is None:
        raise MalformedTimestamp(f"Missing calendar fields in {text!r}")
    year, month, day, hour, minute, second = (int(group) for group in match.groups())
    pos = match.end()

    fraction = _FRACTION_RE.match(text, pos)
    if fraction is not None:
        pos = fraction.end()

    offset_seconds = _parse_offset(text, pos)

    try:
        wall_clock = datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)
    except ValueError as exc:
        raise MalformedTimestamp(f"Invalid calendar date in {text!r}: {exc}") from exc

    base = int((wall_clock - _EPOCH).total_seconds())
    return base - offset_seconds


def _parse_offset(text: str, pos: int) -> int:
    marker = text[pos:pos + 1]
    if marker == "":
        return 0
    if marker == "Z":
        if pos + 1 != len(text):
            raise MalformedTimestamp(f"Unexpected trailing characters in {text!r}")
        return 0
    if marker not in ("+", "-"):
        raise MalformedTimestamp(f"Unrecognized offset marker {marker!r} in {text!r}")

    match = _OFFSET_RE.fullmatch(text, pos + 1)
    if match is None:
        raise MalformedTimestamp(f"Offset must be HH:MM in {text!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    sign = -1 if marker == "-" else 1
    return sign * (hours * 3600 + minutes * 60)


__all__ = ["MalformedTimestamp", "parse_timestamp"]
