"""Frame output for running the display without panel hardware."""

from __future__ import annotations

import os
from pathlib import Path

from PIL import Image


def save_frame(image: Image.Image, path: str = "emulator_output/frame.png") -> Path:
    """Write a frame as PNG, replacing the previous frame in one step."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = output_path.with_name(f".{output_path.name}.tmp")
    image.save(tmp_path, format="PNG")
    os.replace(tmp_path, output_path)
    return output_path


__all__ = ["save_frame"]
