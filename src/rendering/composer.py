"""Frame composer for the arrivals display."""

from __future__ import annotations

from PIL import Image, ImageDraw, ImageFont

from src.rendering.frame_data import FrameData

DISPLAY_WIDTH = 320
DISPLAY_HEIGHT = 240
MIN_WIDTH = 160
MIN_HEIGHT = 120

BANNER_HEIGHT = 18
TITLE_TOP = 4
WEATHER_STRIP_HEIGHT = 20
MARGIN = 8
BIG_SCALE = 4
FETCH_DOT_DIAMETER = 6

COLOR_BACKGROUND = (0, 0, 0)
COLOR_TEXT = (255, 255, 255)
COLOR_DIM_TEXT = (136, 136, 136)
COLOR_BANNER = (200, 0, 0)
COLOR_WEATHER_STRIP = (20, 40, 80)
COLOR_FETCH_DOT = (220, 180, 0)

FONT = ImageFont.load_default()


def _draw_big_text(image: Image.Image, text: str, origin: tuple[int, int]) -> None:
    # The default bitmap font has one size; scale a rendered patch instead.
    draw = ImageDraw.Draw(image)
    bbox = draw.textbbox((0, 0), text, font=FONT)
    patch = Image.new("RGB", (bbox[2] + 1, bbox[3] + 1), COLOR_BACKGROUND)
    ImageDraw.Draw(patch).text((0, 0), text, font=FONT, fill=COLOR_TEXT)
    patch = patch.resize((patch.width * BIG_SCALE, patch.height * BIG_SCALE), Image.Resampling.NEAREST)
    image.paste(patch, origin)


def _draw_fetch_dot(draw: ImageDraw.ImageDraw, width: int) -> None:
    right = width - MARGIN
    draw.ellipse(
        [right - FETCH_DOT_DIAMETER, MARGIN, right, MARGIN + FETCH_DOT_DIAMETER],
        fill=COLOR_FETCH_DOT,
    )


def _compose_weather_screen(image: Image.Image, data: FrameData) -> None:
    draw = ImageDraw.Draw(image)
    draw.text((MARGIN, TITLE_TOP), "Weather", font=FONT, fill=COLOR_DIM_TEXT)
    _draw_big_text(image, data.weather_line.split("  ")[0], (MARGIN, image.height // 3))
    draw.text((MARGIN, image.height - WEATHER_STRIP_HEIGHT), data.weather_line, font=FONT, fill=COLOR_TEXT)


def _compose_arrivals_screen(image: Image.Image, data: FrameData) -> None:
    draw = ImageDraw.Draw(image)
    width, height = image.size
    top = 0
    if data.banner:
        draw.rectangle((0, 0, width - 1, BANNER_HEIGHT - 1), fill=COLOR_BANNER)
        draw.text((MARGIN, 3), data.banner, font=FONT, fill=COLOR_TEXT)
        top = BANNER_HEIGHT

    draw.text((MARGIN, top + TITLE_TOP), data.title, font=FONT, fill=COLOR_DIM_TEXT)

    big_top = top + TITLE_TOP + 16
    _draw_big_text(image, data.next_arrival, (MARGIN, big_top))
    if data.next_arrival.isdigit():
        bbox = draw.textbbox((0, 0), data.next_arrival, font=FONT)
        suffix_x = MARGIN + (bbox[2] + 1) * BIG_SCALE + 4
        draw.text((suffix_x, big_top + (bbox[3] + 1) * BIG_SCALE - 12), "min", font=FONT, fill=COLOR_TEXT)

    row_top = big_top + 16 * BIG_SCALE
    for idx, row in enumerate(data.following):
        draw.text((MARGIN, row_top + idx * 14), row, font=FONT, fill=COLOR_TEXT)

    strip_top = height - WEATHER_STRIP_HEIGHT
    draw.rectangle((0, strip_top, width - 1, height - 1), fill=COLOR_WEATHER_STRIP)
    draw.text((MARGIN, strip_top + 4), data.weather_line, font=FONT, fill=COLOR_TEXT)


def compose_frame(data: FrameData, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT) -> Image.Image:
    """Compose an RGB frame showing arrivals, or the weather screen while the display sleeps."""
    if width < MIN_WIDTH or height < MIN_HEIGHT:
        raise ValueError(f"Frame must be at least {MIN_WIDTH}x{MIN_HEIGHT}, got {width}x{height}.")

    image = Image.new("RGB", (width, height), COLOR_BACKGROUND)
    if data.weather_screen:
        _compose_weather_screen(image, data)
    else:
        _compose_arrivals_screen(image, data)

    if data.fetching:
        _draw_fetch_dot(ImageDraw.Draw(image), width)
    return image


__all__ = ["compose_frame"]
