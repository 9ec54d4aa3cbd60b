"""Wall-clock sanity checks and a bounded wait for time synchronization."""

from __future__ import annotations

import logging
import time
from typing import Callable

_logger = logging.getLogger(__name__)

# 2020-01-01T00:00:00Z; anything earlier means the clock was never set.
SANE_EPOCH_SECONDS = 1577836800
SYNC_ATTEMPTS = 20
SYNC_INTERVAL_SECONDS = 0.5


def is_clock_sane(now: float) -> bool:
    return now >= SANE_EPOCH_SECONDS


class ClockSync:
    """Waits for the process clock to become sane after triggering a sync.

    The time service itself is owned elsewhere; ``trigger`` only asks it to
    start. Once the clock is sane, ``ensure_synced`` returns immediately.
    """

    def __init__(
        self,
        trigger: Callable[[], None] | None = None,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep,
        attempts: int = SYNC_ATTEMPTS,
        interval_seconds: float = SYNC_INTERVAL_SECONDS,
    ) -> None:
        self._trigger = trigger
        self._clock = clock
        self._sleep = sleep
        self._attempts = attempts
        self._interval_seconds = interval_seconds

    def ensure_synced(self) -> bool:
        """Return True once the clock is sane, waiting up to attempts * interval."""
        if is_clock_sane(self._clock()):
            return True

        if self._trigger is not None:
            self._trigger()

        for _ in range(self._attempts):
            if is_clock_sane(self._clock()):
                _logger.info("Time synced")
                return True
            self._sleep(self._interval_seconds)

        _logger.warning("Time not synced (TLS may fail)")
        return False


__all__ = ["SANE_EPOCH_SECONDS", "ClockSync", "is_clock_sane"]
