"""Choosing between the bus and rail prediction sources each cycle."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable

from src.data.predictions import ArrivalsOutcome
from src.logic.snapshots import TransitMode, TransitSnapshot

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransitTitles:
    bus: str
    rail: str


def build_transit_snapshot(
    bus: ArrivalsOutcome,
    rail: ArrivalsOutcome | None,
    titles: TransitTitles,
) -> TransitSnapshot:
    """Build the cycle's transit snapshot from the two fetch outcomes.

    A failed bus fetch shows no data and never falls back. Only a bus stop
    that answered with no predictions switches to the rail source, with the
    no-bus-service banner on whatever the rail result was.
    """
    if not bus.ok:
        return TransitSnapshot(mode=TransitMode.BUS, title=titles.bus)

    if bus.minutes:
        return TransitSnapshot(
            mode=TransitMode.BUS,
            arrivals=bus.minutes,
            title=titles.bus,
            has_data=True,
        )

    rail_ok = rail is not None and rail.ok
    return TransitSnapshot(
        mode=TransitMode.RAIL,
        banner_active=True,
        arrivals=rail.minutes if rail_ok else (),
        title=titles.rail,
        has_data=rail_ok,
    )


def resolve_transit(
    fetch_bus: Callable[[], ArrivalsOutcome],
    fetch_rail: Callable[[], ArrivalsOutcome],
    titles: TransitTitles,
) -> TransitSnapshot:
    """Fetch the bus source, and the rail source only when the bus stop is empty."""
    bus = fetch_bus()
    _logger.info("bus_ok=%s count=%d", bus.ok, len(bus.minutes))

    rail: ArrivalsOutcome | None = None
    if bus.is_empty:
        rail = fetch_rail()
        _logger.info("rail_ok=%s count=%d", rail.ok, len(rail.minutes))

    return build_transit_snapshot(bus, rail, titles)


__all__ = ["TransitTitles", "build_transit_snapshot", "resolve_transit"]
