from __future__ import annotations

from unittest.mock import MagicMock

from src.data.clock import SANE_EPOCH_SECONDS, ClockSync, is_clock_sane


def test_is_clock_sane_threshold() -> None:
    assert is_clock_sane(SANE_EPOCH_SECONDS)
    assert not is_clock_sane(SANE_EPOCH_SECONDS - 1)
    assert not is_clock_sane(0)


def test_sane_clock_skips_sync() -> None:
    trigger = MagicMock()
    sleep = MagicMock()
    sync = ClockSync(trigger=trigger, clock=lambda: SANE_EPOCH_SECONDS + 10.0, sleep=sleep)

    assert sync.ensure_synced()
    trigger.assert_not_called()
    sleep.assert_not_called()


def test_sync_waits_until_clock_is_set() -> None:
    readings = iter([0.0, 0.0, 0.0, SANE_EPOCH_SECONDS + 1.0])
    trigger = MagicMock()
    sleep = MagicMock()
    sync = ClockSync(trigger=trigger, clock=lambda: next(readings), sleep=sleep)

    assert sync.ensure_synced()
    trigger.assert_called_once()
    assert sleep.call_count == 2


def test_sync_gives_up_after_bounded_wait() -> None:
    sleep = MagicMock()
    sync = ClockSync(clock=lambda: 0.0, sleep=sleep, attempts=20, interval_seconds=0.5)

    assert not sync.ensure_synced()
    assert sleep.call_count == 20
    sleep.assert_called_with(0.5)
