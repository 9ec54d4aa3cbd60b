"""Threaded pollers that refresh the transit and weather snapshots."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

from src.config import TransitConfig, WeatherConfig
from src.data.clock import ClockSync
from src.data.fetcher import BoundedFetcher, TransportError
from src.data.payload import UnparsableResponse
from src.data.predictions import fetch_arrivals
from src.data.weather import build_forecast_url, parse_weather
from src.logic.fallback import TransitTitles, resolve_transit
from src.logic.schedule import DisplayWindow, GateDecision, evaluate_gate
from src.logic.snapshots import SnapshotStore, TransitSnapshot, WeatherSnapshot

_logger = logging.getLogger(__name__)

SLEEP_TITLE = "Sleep Mode"
NO_WIFI_CONDITION = "No WiFi"
NO_DATA_CONDITION = "No data"
FETCHING_CONDITION = "Weather"
WEATHER_OFFLINE_RETRY_SECONDS = 0.5


class PollingLoop:
    """Background thread running one domain's poll cycle on a fixed period.

    Cycles run strictly one after another. ``stop`` takes effect between
    cycles; a cycle already in progress always finishes.
    """

    name = "poller"

    def __init__(self, poll_interval_seconds: float) -> None:
        self._poll_interval_seconds = poll_interval_seconds
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        """Start the background polling thread."""
        if self._thread and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run_loop, name=self.name, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Signal the polling thread to stop."""
        self._stop_event.set()

    def run_cycle(self) -> float:
        """Run one cycle and return how long to wait before the next one."""
        try:
            return self._cycle()
        except Exception:
            _logger.exception("%s cycle failed", self.name)
            self._publish_failure()
            return self._poll_interval_seconds

    def _run_loop(self) -> None:
        _logger.info("%s started", self.name)
        while not self._stop_event.is_set():
            delay = self.run_cycle()
            self._stop_event.wait(timeout=delay)

    def _cycle(self) -> float:
        raise NotImplementedError

    def _publish_failure(self) -> None:
        raise NotImplementedError


class TransitPoller(PollingLoop):
    """Polls the bus stop, falling back to the rail stop when the bus stop is empty."""

    name = "transit"

    def __init__(
        self,
        store: SnapshotStore[TransitSnapshot],
        config: TransitConfig,
        window: DisplayWindow,
        fetcher: BoundedFetcher,
        connected: Callable[[], bool],
        clock_sync: ClockSync,
        clock: Callable[[], float] = time.time,
    ) -> None:
        super().__init__(config.poll_interval_seconds)
        self._store = store
        self._config = config
        self._window = window
        self._fetcher = fetcher
        self._connected = connected
        self._clock_sync = clock_sync
        self._clock = clock
        self._titles = TransitTitles(bus=config.bus_title, rail=config.rail_title)

    def _cycle(self) -> float:
        now = self._clock()
        decision = evaluate_gate(self._connected(), now, self._window)
        _logger.debug("transit gate=%s", decision.value)

        if decision is GateDecision.OFFLINE:
            self._store.publish(
                TransitSnapshot(title=self._titles.bus, display_off=not self._window.contains(now))
            )
            return self._poll_interval_seconds

        if decision is GateDecision.SLEEP:
            self._store.publish(TransitSnapshot(title=SLEEP_TITLE, display_off=True))
            return self._poll_interval_seconds

        self._store.publish_changes(is_fetching=True, display_off=False)
        self._clock_sync.ensure_synced()

        snapshot = resolve_transit(
            lambda: fetch_arrivals(self._fetcher, self._config.bus_url, self._clock),
            lambda: fetch_arrivals(self._fetcher, self._config.rail_url, self._clock),
            self._titles,
        )
        self._store.publish(snapshot)
        return self._poll_interval_seconds

    def _publish_failure(self) -> None:
        self._store.publish(TransitSnapshot(title=self._titles.bus))


class WeatherPoller(PollingLoop):
    """Polls Open-Meteo for current conditions and today's high/low."""

    name = "weather"

    def __init__(
        self,
        store: SnapshotStore[WeatherSnapshot],
        config: WeatherConfig,
        fetcher: BoundedFetcher,
        connected: Callable[[], bool],
        clock_sync: ClockSync,
    ) -> None:
        super().__init__(config.poll_interval_seconds)
        self._store = store
        self._fetcher = fetcher
        self._connected = connected
        self._clock_sync = clock_sync
        self._url = build_forecast_url(config.latitude, config.longitude)
        self._sync_attempted = False

    @property
    def url(self) -> str:
        return self._url

    def _cycle(self) -> float:
        if not self._connected():
            self._store.publish(WeatherSnapshot(condition=NO_WIFI_CONDITION))
            return WEATHER_OFFLINE_RETRY_SECONDS

        self._store.publish_changes(is_fetching=True)
        if not self._sync_attempted:
            self._sync_attempted = True
            self._clock_sync.ensure_synced()

        self._store.publish(self._fetch_snapshot())
        return self._poll_interval_seconds

    def _fetch_snapshot(self) -> WeatherSnapshot:
        try:
            result = self._fetcher.fetch(self._url)
        except TransportError as exc:
            _logger.warning("Weather fetch failed: %s", exc)
            return WeatherSnapshot(condition=NO_DATA_CONDITION)

        if result.status_code != 200:
            _logger.warning("Weather fetch failed: HTTP %d", result.status_code)
            return WeatherSnapshot(condition=NO_DATA_CONDITION)

        try:
            reading = parse_weather(result.body)
        except UnparsableResponse as exc:
            _logger.warning("Weather response unusable: %s", exc)
            return WeatherSnapshot(condition=NO_DATA_CONDITION)

        return WeatherSnapshot(
            temperature_c=reading.temperature_c,
            high_c=reading.high_c,
            low_c=reading.low_c,
            condition=reading.condition,
            has_data=True,
        )

    def _publish_failure(self) -> None:
        self._store.publish(WeatherSnapshot(condition=NO_DATA_CONDITION))


__all__ = ["PollingLoop", "TransitPoller", "WeatherPoller"]
