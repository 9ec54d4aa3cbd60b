"""Process entry point: start both pollers and render frames as snapshots change."""

from __future__ import annotations

import argparse
from functools import partial
import logging
import threading

from src.config import AppConfig, load_config
from src.data.clock import ClockSync
from src.data.connectivity import host_reachable
from src.data.fetcher import BoundedFetcher
from src.data.poller import TransitPoller, WeatherPoller
from src.data.predictions import TRANSIT_BUFFER_BYTES
from src.data.weather import WEATHER_BUFFER_BYTES
from src.logging_setup import configure_logging
from src.logic.schedule import DisplayWindow
from src.logic.snapshots import (
    SnapshotReader,
    SnapshotStore,
    TransitMode,
    TransitSnapshot,
    WeatherSnapshot,
)
from src.rendering import build_frame_data, compose_frame, save_frame

_logger = logging.getLogger(__name__)


class App:
    """Owns the per-domain snapshot stores and the pollers that feed them."""

    def __init__(self, config: AppConfig) -> None:
        self._config = config
        self.transit_store: SnapshotStore[TransitSnapshot] = SnapshotStore(
            TransitSnapshot(mode=TransitMode.BUS, title=config.transit.bus_title)
        )
        self.weather_store: SnapshotStore[WeatherSnapshot] = SnapshotStore(WeatherSnapshot())

        connected = partial(
            host_reachable,
            config.connectivity.host,
            config.connectivity.port,
            config.connectivity.timeout_seconds,
        )
        headers = {"x-api-key": config.transit.api_key} if config.transit.api_key else None
        window = DisplayWindow(
            start_hour=config.schedule.start_hour,
            end_hour=config.schedule.end_hour,
            timezone=config.schedule.timezone,
        )

        self.transit_poller = TransitPoller(
            store=self.transit_store,
            config=config.transit,
            window=window,
            fetcher=BoundedFetcher(TRANSIT_BUFFER_BYTES, config.transit.http_timeout_seconds, headers),
            connected=connected,
            clock_sync=ClockSync(),
        )
        self.weather_poller = WeatherPoller(
            store=self.weather_store,
            config=config.weather,
            fetcher=BoundedFetcher(WEATHER_BUFFER_BYTES, config.weather.http_timeout_seconds),
            connected=connected,
            clock_sync=ClockSync(),
        )
        self._transit_reader = SnapshotReader(self.transit_store)
        self._weather_reader = SnapshotReader(self.weather_store)
        self._stop_event = threading.Event()

    def get_transit_snapshot(self) -> tuple[TransitSnapshot | None, bool]:
        snapshot = self.transit_store.read()
        return snapshot, snapshot is not None

    def get_weather_snapshot(self) -> tuple[WeatherSnapshot | None, bool]:
        snapshot = self.weather_store.read()
        return snapshot, snapshot is not None

    def render_once(self) -> bool:
        """Render a frame if either snapshot changed; return True when a frame was written."""
        transit, transit_changed = self._transit_reader.poll()
        weather, weather_changed = self._weather_reader.poll()
        if transit is None or weather is None:
            return False
        if not (transit_changed or weather_changed):
            return False

        display = self._config.display
        image = compose_frame(build_frame_data(transit, weather), display.width, display.height)
        save_frame(image, display.output_path)
        _logger.debug("Rendered transit v%d weather v%d", transit.version, weather.version)
        return True

    def run(self) -> None:
        self.weather_poller.start()
        self.transit_poller.start()
        try:
            while not self._stop_event.is_set():
                self.render_once()
                self._stop_event.wait(timeout=self._config.display.refresh_seconds)
        finally:
            self.transit_poller.stop()
            self.weather_poller.stop()

    def stop(self) -> None:
        self._stop_event.set()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Transit arrivals and weather display")
    parser.add_argument("--config", default="config/config.yaml", help="Path to config YAML")
    args = parser.parse_args(argv)

    config = load_config(args.config)
    configure_logging(config.log)
    _logger.info("Starting display (bus=%s, rail=%s)", config.transit.bus_title, config.transit.rail_title)

    app = App(config)
    try:
        app.run()
    except KeyboardInterrupt:
        _logger.info("Stopped by user")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
