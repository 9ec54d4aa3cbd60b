"""Deciding whether a poll cycle may fetch, based on connectivity and display hours."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from zoneinfo import ZoneInfo

from src.data.clock import is_clock_sane


class GateDecision(str, Enum):
    FETCH = "FETCH"
    SLEEP = "SLEEP"
    OFFLINE = "OFFLINE"


@dataclass(frozen=True)
class DisplayWindow:
    """Hours during which the transit display is shown, as [start_hour, end_hour)."""

    start_hour: int
    end_hour: int
    timezone: str

    def local_hour(self, now: float) -> int:
        return datetime.fromtimestamp(now, tz=timezone.utc).astimezone(ZoneInfo(self.timezone)).hour

    def contains(self, now: float) -> bool:
        return in_display_hours(self.local_hour(now), self.start_hour, self.end_hour)


def in_display_hours(hour: int, start_hour: int, end_hour: int) -> bool:
    """Return True when ``hour`` falls in [start_hour, end_hour).

    A window whose start is after its end wraps past midnight; equal bounds
    mean the display is always on.
    """
    if start_hour == end_hour:
        return True
    if start_hour < end_hour:
        return start_hour <= hour < end_hour
    return hour >= start_hour or hour < end_hour


def evaluate_gate(connected: bool, now: float, window: DisplayWindow) -> GateDecision:
    """Allow a fetch when connected and either in hours or the clock is unsynced.

    The window is ignored until the clock is sane; the first fetch cycle is
    the one that synchronizes it.
    """
    if not connected:
        return GateDecision.OFFLINE
    if not is_clock_sane(now) or window.contains(now):
        return GateDecision.FETCH
    return GateDecision.SLEEP


__all__ = ["DisplayWindow", "GateDecision", "evaluate_gate", "in_display_hours"]
