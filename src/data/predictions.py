"""Extraction of upcoming arrival times from MBTA v3 prediction payloads."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Callable

from src.data.fetcher import BoundedFetcher, TransportError
from src.data.payload import UnparsableResponse, decode_json
from src.data.timestamps import MalformedTimestamp, parse_timestamp

_logger = logging.getLogger(__name__)

MAX_PREDICTIONS = 8
MAX_ARRIVALS = 3
STALE_GRACE_SECONDS = 30
TRANSIT_BUFFER_BYTES = 16 * 1024


@dataclass(frozen=True)
class ArrivalsOutcome:
    """Result of one prediction fetch: ``ok`` with minutes, or a failure reason."""

    ok: bool
    minutes: tuple[int, ...] = ()
    error: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.ok and not self.minutes


def _prediction_time_text(item: Any) -> str | None:
    if not isinstance(item, dict):
        return None
    attributes = item.get("attributes")
    if not isinstance(attributes, dict):
        return None
    for key in ("arrival_time", "departure_time"):
        value = attributes.get(key)
        if isinstance(value, str):
            return value
    return None


def extract_prediction_times(body: bytes | str, now: int) -> tuple[int, ...]:
    """Return future prediction instants, ascending and capped at MAX_PREDICTIONS.

    An empty tuple means the service answered with no usable predictions.
    Invalid JSON or a missing ``data`` array raises UnparsableResponse.
    """
    payload = decode_json(body)
    if not isinstance(payload, dict):
        raise UnparsableResponse("Response JSON must be an object")
    data = payload.get("data")
    if not isinstance(data, list):
        raise UnparsableResponse("Response JSON has no 'data' array")

    cutoff = now - STALE_GRACE_SECONDS
    instants: set[int] = set()
    for item in data:
        text = _prediction_time_text(item)
        if text is None:
            continue
        try:
            instant = parse_timestamp(text)
        except MalformedTimestamp as exc:
            _logger.debug("Skipping prediction: %s", exc)
            continue
        if instant < cutoff:
            continue
        instants.add(instant)

    return tuple(sorted(instants)[:MAX_PREDICTIONS])


def arrival_minutes(times: tuple[int, ...], now: int, limit: int = MAX_ARRIVALS) -> tuple[int, ...]:
    """Convert instants to whole minutes away, rounding up and dropping negatives."""
    minutes: list[int] = []
    for instant in times:
        if len(minutes) >= limit:
            break
        delta = instant - now
        value = -(-delta // 60)
        if value < 0:
            continue
        minutes.append(value)
    return tuple(minutes)


def fetch_arrivals(
    fetcher: BoundedFetcher,
    url: str,
    now_fn: Callable[[], float],
) -> ArrivalsOutcome:
    """Fetch one prediction URL and reduce it to minutes until arrival."""
    try:
        result = fetcher.fetch(url)
    except TransportError as exc:
        _logger.warning("Prediction fetch failed: %s", exc)
        return ArrivalsOutcome(ok=False, error=str(exc))

    if not result.ok:
        _logger.warning("Prediction fetch failed: HTTP %d", result.status_code)
        return ArrivalsOutcome(ok=False, error=f"HTTP {result.status_code}")

    now = int(now_fn())
    try:
        times = extract_prediction_times(result.body, now)
    except UnparsableResponse as exc:
        return ArrivalsOutcome(ok=False, error=str(exc))

    return ArrivalsOutcome(ok=True, minutes=arrival_minutes(times, now))


__all__ = [
    "MAX_ARRIVALS",
    "MAX_PREDICTIONS",
    "STALE_GRACE_SECONDS",
    "TRANSIT_BUFFER_BYTES",
    "ArrivalsOutcome",
    "arrival_minutes",
    "extract_prediction_times",
    "fetch_arrivals",
]
