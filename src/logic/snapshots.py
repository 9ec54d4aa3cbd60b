"""Versioned snapshots shared between the pollers and the display."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
import threading
from typing import Generic, TypeVar

READ_TIMEOUT_SECONDS = 0.01


class TransitMode(str, Enum):
    BUS = "BUS"
    RAIL = "RAIL"


@dataclass(frozen=True)
class TransitSnapshot:
    """Latest transit state published for the display."""

    mode: TransitMode = TransitMode.BUS
    banner_active: bool = False
    arrivals: tuple[int, ...] = ()  # up to 3 arrivals, minutes away
    title: str = ""
    has_data: bool = False
    is_fetching: bool = False
    display_off: bool = False
    version: int = 1


@dataclass(frozen=True)
class WeatherSnapshot:
    """Latest weather state published for the display."""

    temperature_c: int = 0
    high_c: int = 0
    low_c: int = 0
    condition: str = "unknown"
    has_data: bool = False
    is_fetching: bool = False
    version: int = 1


SnapshotT = TypeVar("SnapshotT", TransitSnapshot, WeatherSnapshot)


class SnapshotStore(Generic[SnapshotT]):
    """Holds one domain's latest snapshot behind a lock.

    The lock only guards swapping the reference; snapshots are frozen so a
    reader can never observe a half-written value.
    """

    def __init__(self, seed: SnapshotT) -> None:
        self._lock = threading.Lock()
        self._snapshot = replace(seed, version=1)

    def publish(self, snapshot: SnapshotT) -> SnapshotT:
        """Store ``snapshot`` with the next version number and return it."""
        with self._lock:
            published = replace(snapshot, version=self._snapshot.version + 1)
            self._snapshot = published
        return published

    def publish_changes(self, **changes: object) -> SnapshotT:
        """Republish the current snapshot with ``changes`` applied."""
        with self._lock:
            published = replace(self._snapshot, version=self._snapshot.version + 1, **changes)
            self._snapshot = published
        return published

    def read(self, timeout: float = READ_TIMEOUT_SECONDS) -> SnapshotT | None:
        """Return the latest snapshot, or None if the lock was not acquired in time."""
        if not self._lock.acquire(timeout=timeout):
            return None
        try:
            return self._snapshot
        finally:
            self._lock.release()


class SnapshotReader(Generic[SnapshotT]):
    """Display-side view that keeps the last good copy across busy reads."""

    def __init__(self, store: SnapshotStore[SnapshotT], timeout: float = READ_TIMEOUT_SECONDS) -> None:
        self._store = store
        self._timeout = timeout
        self._current: SnapshotT | None = None
        self._rendered_version: int | None = None

    @property
    def current(self) -> SnapshotT | None:
        return self._current

    def poll(self) -> tuple[SnapshotT | None, bool]:
        """Return (snapshot, changed); changed is True when the version moved."""
        latest = self._store.read(timeout=self._timeout)
        if latest is not None:
            self._current = latest
        if self._current is None:
            return None, False
        changed = self._current.version != self._rendered_version
        self._rendered_version = self._current.version
        return self._current, changed


__all__ = [
    "READ_TIMEOUT_SECONDS",
    "SnapshotReader",
    "SnapshotStore",
    "TransitMode",
    "TransitSnapshot",
    "WeatherSnapshot",
]
