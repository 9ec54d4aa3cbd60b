from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.logic.schedule import DisplayWindow, GateDecision, evaluate_gate, in_display_hours

WINDOW = DisplayWindow(start_hour=6, end_hour=22, timezone="UTC")


def _at(hour: int) -> float:
    return datetime(2024, 3, 1, hour, 30, tzinfo=timezone.utc).timestamp()


def test_inside_window_with_sane_clock_fetches() -> None:
    assert evaluate_gate(True, _at(8), WINDOW) is GateDecision.FETCH


def test_outside_window_with_sane_clock_sleeps() -> None:
    assert evaluate_gate(True, _at(23), WINDOW) is GateDecision.SLEEP


def test_outside_window_with_unsynced_clock_fetches() -> None:
    # 1970-01-01T02:00Z: before the sanity threshold and outside 6-22.
    assert evaluate_gate(True, 2 * 3600, WINDOW) is GateDecision.FETCH


def test_disconnected_never_fetches() -> None:
    assert evaluate_gate(False, _at(8), WINDOW) is GateDecision.OFFLINE
    assert evaluate_gate(False, 2 * 3600, WINDOW) is GateDecision.OFFLINE


@pytest.mark.parametrize(
    ("hour", "expected"),
    [(5, False), (6, True), (21, True), (22, False)],
)
def test_in_display_hours_half_open(hour: int, expected: bool) -> None:
    assert in_display_hours(hour, 6, 22) is expected


@pytest.mark.parametrize(
    ("hour", "expected"),
    [(21, False), (22, True), (23, True), (0, True), (5, True), (6, False)],
)
def test_in_display_hours_wraps_midnight(hour: int, expected: bool) -> None:
    assert in_display_hours(hour, 22, 6) is expected


def test_equal_bounds_always_on() -> None:
    assert all(in_display_hours(hour, 0, 0) for hour in range(24))


def test_window_uses_configured_timezone() -> None:
    window = DisplayWindow(start_hour=6, end_hour=22, timezone="America/New_York")
    # 03:30 UTC in March is 22:30 the previous evening in New York (EST).
    now = datetime(2024, 3, 1, 3, 30, tzinfo=timezone.utc).timestamp()

    assert window.local_hour(now) == 22
    assert not window.contains(now)
    assert evaluate_gate(True, now, window) is GateDecision.SLEEP
