from __future__ import annotations

from PIL import Image
import pytest

from src.logic.snapshots import TransitMode, TransitSnapshot, WeatherSnapshot
from src.rendering.composer import (
    BANNER_HEIGHT,
    COLOR_BACKGROUND,
    COLOR_BANNER,
    COLOR_FETCH_DOT,
    COLOR_WEATHER_STRIP,
    FETCH_DOT_DIAMETER,
    MARGIN,
    WEATHER_STRIP_HEIGHT,
    compose_frame,
)
from src.rendering.emulator import save_frame
from src.rendering.frame_data import NO_BUS_BANNER, PLACEHOLDER, build_frame_data

WEATHER = WeatherSnapshot(temperature_c=4, high_c=7, low_c=-2, condition="Cloudy", has_data=True)


def test_frame_data_for_bus_arrivals() -> None:
    transit = TransitSnapshot(arrivals=(0, 6, 14), title="109 Bus", has_data=True)

    data = build_frame_data(transit, WEATHER)

    assert data.title == "109 Bus"
    assert data.banner is None
    assert data.next_arrival == "0"
    assert data.following == ["6 min", "14 min"]
    assert data.weather_line.startswith("4C Cloudy")


def test_frame_data_placeholders_without_data() -> None:
    transit = TransitSnapshot(mode=TransitMode.RAIL, banner_active=True, title="Orange Line")

    data = build_frame_data(transit, WeatherSnapshot(condition="No data"))

    assert data.banner == NO_BUS_BANNER
    assert data.next_arrival == PLACEHOLDER
    assert data.following == [PLACEHOLDER, PLACEHOLDER]
    assert data.weather_line == "No data"


def test_compose_frame_size_and_mode() -> None:
    data = build_frame_data(TransitSnapshot(title="109 Bus"), WEATHER)
    image = compose_frame(data)
    assert isinstance(image, Image.Image)
    assert image.size == (320, 240)
    assert image.mode == "RGB"


def test_compose_frame_draws_banner_and_weather_strip() -> None:
    transit = TransitSnapshot(mode=TransitMode.RAIL, banner_active=True, arrivals=(4,), title="Orange Line", has_data=True)
    image = compose_frame(build_frame_data(transit, WEATHER))
    pixels = image.load()

    assert pixels[image.width - 30, BANNER_HEIGHT - 2] == COLOR_BANNER
    assert pixels[image.width - 2, image.height - WEATHER_STRIP_HEIGHT + 1] == COLOR_WEATHER_STRIP


def test_compose_frame_without_banner_leaves_top_dark() -> None:
    transit = TransitSnapshot(arrivals=(4,), title="109 Bus", has_data=True)
    image = compose_frame(build_frame_data(transit, WEATHER))
    pixels = image.load()

    assert pixels[image.width - 30, BANNER_HEIGHT - 2] == COLOR_BACKGROUND


def test_compose_frame_fetch_indicator() -> None:
    transit = TransitSnapshot(title="109 Bus", is_fetching=True)
    image = compose_frame(build_frame_data(transit, WEATHER))
    pixels = image.load()

    center = (image.width - MARGIN - FETCH_DOT_DIAMETER // 2, MARGIN + FETCH_DOT_DIAMETER // 2)
    assert pixels[center] == COLOR_FETCH_DOT


def test_compose_frame_weather_screen_when_display_off() -> None:
    transit = TransitSnapshot(title="Sleep Mode", display_off=True)
    image = compose_frame(build_frame_data(transit, WEATHER))
    pixels = image.load()

    assert pixels[image.width - 2, image.height - WEATHER_STRIP_HEIGHT + 1] == COLOR_BACKGROUND


def test_compose_frame_rejects_tiny_size() -> None:
    data = build_frame_data(TransitSnapshot(), WEATHER)

    with pytest.raises(ValueError):
        compose_frame(data, width=64, height=32)


def test_save_frame_writes_png(tmp_path) -> None:
    image = compose_frame(build_frame_data(TransitSnapshot(), WEATHER))

    path = save_frame(image, str(tmp_path / "out" / "frame.png"))

    assert path.exists()
    with Image.open(path) as saved:
        assert saved.size == (320, 240)
