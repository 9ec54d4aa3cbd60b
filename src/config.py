"""Configuration loader for the transit and weather display."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
import yaml


@dataclass(frozen=True)
class TransitConfig:
    """MBTA prediction sources for the primary (bus) and fallback (rail) stops."""

    api_key: str
    bus_url: str
    bus_title: str
    rail_url: str
    rail_title: str
    poll_interval_seconds: float
    http_timeout_seconds: float


@dataclass(frozen=True)
class WeatherConfig:
    """Open-Meteo location and polling settings."""

    latitude: float
    longitude: float
    poll_interval_seconds: float
    http_timeout_seconds: float


@dataclass(frozen=True)
class ScheduleConfig:
    """Display hours window, evaluated in ``timezone``."""

    start_hour: int
    end_hour: int
    timezone: str


@dataclass(frozen=True)
class ConnectivityConfig:
    host: str
    port: int
    timeout_seconds: float


@dataclass(frozen=True)
class DisplayConfig:
    """Display configuration for the frame renderer."""

    width: int
    height: int
    refresh_seconds: float
    output_path: str


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str
    log_dir: str


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""

    transit: TransitConfig
    weather: WeatherConfig
    schedule: ScheduleConfig
    connectivity: ConnectivityConfig
    display: DisplayConfig
    log: LoggingConfig


def _require_key(mapping: dict[str, Any], key: str, context: str) -> Any:
    if key not in mapping:
        raise ValueError(f"Missing required key '{key}' in {context} config")
    return mapping[key]


def _require_section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = _require_key(data, name, name)
    if not isinstance(section, dict):
        raise ValueError(f"'{name}' config must be a mapping")
    return section


def _positive(value: Any, key: str, context: str) -> float:
    number = float(value)
    if number <= 0:
        raise ValueError(f"'{context}.{key}' must be > 0")
    return number


def _hour(value: Any, key: str) -> int:
    hour = int(value)
    if not 0 <= hour <= 24:
        raise ValueError(f"'schedule.{key}' must be between 0 and 24")
    return hour


def load_config(path: str = "config/config.yaml") -> AppConfig:
    """Load application configuration from a YAML file."""
    load_dotenv()
    api_key = os.environ.get("MBTA_API_KEY", "")
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError as exc:
        raise ValueError(f"Config file not found: {path}") from exc

    if not isinstance(data, dict):
        raise ValueError("Config file must contain a mapping at the top level")

    transit_section = _require_section(data, "transit")
    weather_section = _require_section(data, "weather")
    schedule_section = _require_section(data, "schedule")
    display_section = _require_section(data, "display")
    logging_section = _require_section(data, "logging")
    connectivity_section = data.get("connectivity") or {}
    if not isinstance(connectivity_section, dict):
        raise ValueError("'connectivity' config must be a mapping")

    transit = TransitConfig(
        api_key=api_key,
        bus_url=_require_key(transit_section, "bus_url", "transit"),
        bus_title=_require_key(transit_section, "bus_title", "transit"),
        rail_url=_require_key(transit_section, "rail_url", "transit"),
        rail_title=_require_key(transit_section, "rail_title", "transit"),
        poll_interval_seconds=_positive(
            _require_key(transit_section, "poll_interval_seconds", "transit"),
            "poll_interval_seconds",
            "transit",
        ),
        http_timeout_seconds=_positive(
            transit_section.get("http_timeout_seconds", 8), "http_timeout_seconds", "transit"
        ),
    )

    weather = WeatherConfig(
        latitude=float(_require_key(weather_section, "latitude", "weather")),
        longitude=float(_require_key(weather_section, "longitude", "weather")),
        poll_interval_seconds=_positive(
            weather_section.get("poll_interval_seconds", 600), "poll_interval_seconds", "weather"
        ),
        http_timeout_seconds=_positive(
            weather_section.get("http_timeout_seconds", 8), "http_timeout_seconds", "weather"
        ),
    )

    timezone_name = _require_key(schedule_section, "timezone", "schedule")
    try:
        ZoneInfo(timezone_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown timezone '{timezone_name}' in schedule config") from exc

    schedule = ScheduleConfig(
        start_hour=_hour(_require_key(schedule_section, "start_hour", "schedule"), "start_hour"),
        end_hour=_hour(_require_key(schedule_section, "end_hour", "schedule"), "end_hour"),
        timezone=timezone_name,
    )

    connectivity = ConnectivityConfig(
        host=connectivity_section.get("host", "api-v3.mbta.com"),
        port=int(connectivity_section.get("port", 443)),
        timeout_seconds=float(connectivity_section.get("timeout_seconds", 3)),
    )

    display = DisplayConfig(
        width=_require_key(display_section, "width", "display"),
        height=_require_key(display_section, "height", "display"),
        refresh_seconds=float(display_section.get("refresh_seconds", 1.0)),
        output_path=display_section.get("output_path", "emulator_output/frame.png"),
    )

    logging = LoggingConfig(
        level=_require_key(logging_section, "level", "logging"),
        log_dir=_require_key(logging_section, "log_dir", "logging"),
    )

    return AppConfig(
        transit=transit,
        weather=weather,
        schedule=schedule,
        connectivity=connectivity,
        display=display,
        log=logging,
    )
