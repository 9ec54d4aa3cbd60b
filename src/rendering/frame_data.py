"""Data structures for rendering frames."""

from __future__ import annotations

from dataclasses import dataclass

from src.logic.snapshots import TransitSnapshot, WeatherSnapshot

PLACEHOLDER = "--"
NO_BUS_BANNER = "No bus service"


@dataclass(frozen=True)
class FrameData:
    """Text content for one rendered frame."""

    title: str
    banner: str | None
    next_arrival: str  # large "minutes" figure
    following: list[str]  # up to 2 smaller rows
    weather_line: str
    fetching: bool = False
    weather_screen: bool = False


def _format_minutes(minutes: int) -> str:
    return "0" if minutes <= 0 else str(minutes)


def _weather_line(weather: WeatherSnapshot) -> str:
    if not weather.has_data:
        return weather.condition
    return f"{weather.temperature_c}C {weather.condition}  H {weather.high_c}C  L {weather.low_c}C"


def build_frame_data(transit: TransitSnapshot, weather: WeatherSnapshot) -> FrameData:
    """Turn the latest snapshots into display text."""
    arrivals = list(transit.arrivals) if transit.has_data else []
    next_arrival = _format_minutes(arrivals[0]) if arrivals else PLACEHOLDER
    following = [f"{_format_minutes(m)} min" for m in arrivals[1:3]]
    while len(following) < 2:
        following.append(PLACEHOLDER)

    return FrameData(
        title=transit.title,
        banner=NO_BUS_BANNER if transit.banner_active else None,
        next_arrival=next_arrival,
        following=following,
        weather_line=_weather_line(weather),
        fetching=transit.is_fetching or weather.is_fetching,
        weather_screen=transit.display_off,
    )


__all__ = ["FrameData", "NO_BUS_BANNER", "PLACEHOLDER", "build_frame_data"]
