"""Rendering of published snapshots into display frames."""

from src.rendering.composer import compose_frame
from src.rendering.emulator import save_frame
from src.rendering.frame_data import FrameData, build_frame_data

__all__ = ["FrameData", "build_frame_data", "compose_frame", "save_frame"]
