"""Open-Meteo forecast parsing for the weather display."""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Any

from src.data.payload import UnparsableResponse, decode_json

OPEN_METEO_FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
WEATHER_BUFFER_BYTES = 4 * 1024

SNOWING = "Snowing"
RAINING = "Raining"


@dataclass(frozen=True)
class WeatherReading:
    """Parsed current conditions and today's range, in whole degrees Celsius."""

    temperature_c: int
    high_c: int
    low_c: int
    condition: str


def build_forecast_url(latitude: float, longitude: float) -> str:
    """Build the forecast URL for the current conditions and today's high/low."""
    return (
        f"{OPEN_METEO_FORECAST_URL}?latitude={latitude:.6f}&longitude={longitude:.6f}"
        "&current=temperature_2m,weather_code,precipitation,rain,snowfall"
        "&daily=temperature_2m_max,temperature_2m_min"
        "&temperature_unit=celsius&timezone=auto"
    )


def condition_for_code(code: int) -> str:
    """Map a WMO weather code to a short condition label."""
    if code == 0:
        return "Clear"
    if 1 <= code <= 3:
        return "Cloudy"
    if code in (45, 48):
        return "Fog"
    if 51 <= code <= 57 or 61 <= code <= 67 or 80 <= code <= 82:
        return "Rain"
    if 71 <= code <= 77 or 85 <= code <= 86:
        return "Snow"
    if 95 <= code <= 99:
        return "Storm"
    return "Weather"


def _is_number(value: Any) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    # json.loads accepts NaN, Infinity and out-of-range literals.
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def _require_number(mapping: dict[str, Any], key: str, context: str) -> float:
    value = mapping.get(key)
    if not _is_number(value):
        raise UnparsableResponse(f"Missing numeric '{key}' in {context}")
    return float(value)


def _first_number(mapping: dict[str, Any], key: str) -> float:
    values = mapping.get(key)
    if not isinstance(values, list) or not values or not _is_number(values[0]):
        raise UnparsableResponse(f"Missing numeric '{key}[0]' in daily")
    return float(values[0])


def _optional_number(mapping: dict[str, Any], key: str) -> float:
    value = mapping.get(key)
    return float(value) if _is_number(value) else 0.0


def _round_celsius(value: float) -> int:
    # Halves round away from zero.
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def parse_weather(body: bytes | str) -> WeatherReading:
    """Parse an Open-Meteo forecast body into a WeatherReading.

    Measured snowfall or rain takes priority over the weather code, so a
    "Cloudy" code with rain falling reads as "Raining".
    """
    payload = decode_json(body)
    if not isinstance(payload, dict):
        raise UnparsableResponse("Weather JSON must be an object")
    current = payload.get("current")
    daily = payload.get("daily")
    if not isinstance(current, dict) or not isinstance(daily, dict):
        raise UnparsableResponse("Weather JSON needs 'current' and 'daily' objects")

    temperature = _require_number(current, "temperature_2m", "current")
    code = _require_number(current, "weather_code", "current")
    high = _first_number(daily, "temperature_2m_max")
    low = _first_number(daily, "temperature_2m_min")

    snowfall = _optional_number(current, "snowfall")
    rain = _optional_number(current, "rain")
    precipitation = _optional_number(current, "precipitation")

    if snowfall > 0.0:
        condition = SNOWING
    elif rain > 0.0 or precipitation > 0.0:
        condition = RAINING
    else:
        condition = condition_for_code(int(code))

    return WeatherReading(
        temperature_c=_round_celsius(temperature),
        high_c=_round_celsius(high),
        low_c=_round_celsius(low),
        condition=condition,
    )


__all__ = [
    "OPEN_METEO_FORECAST_URL",
    "WEATHER_BUFFER_BYTES",
    "WeatherReading",
    "build_forecast_url",
    "condition_for_code",
    "parse_weather",
]
