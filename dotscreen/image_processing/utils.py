"""Utility functions for canvas sizing and value clamping.

AIDEV-NOTE: These helpers stand in for the draw-to-canvas step of an
interactive viewer: fit the source into a display area, then resample the
frame so one source pixel maps to one canvas pixel.
"""

import math

import numpy as np
from PIL import Image

MIN_CANVAS_DIMENSION = 200  # px


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def clamp_brightness(values):
    """Clip brightness values (scalar or array) into [0, 255]."""
    return np.clip(values, 0.0, 255.0)


def fit_canvas_size(
    source_width: int,
    source_height: int,
    max_width: int,
    max_height: int,
    min_dimension: int = MIN_CANVAS_DIMENSION,
) -> "tuple[int, int]":
    """Fit a source frame into a display area, preserving aspect ratio.

    Args:
        source_width: Frame width in pixels
        source_height: Frame height in pixels
        max_width: Available width in pixels
        max_height: Available height in pixels
        min_dimension: Smallest allowed canvas side

    Returns:
        (width, height) of the canvas

    AIDEV-NOTE: The frame is scaled up or down to fill the area. If the
    result has a side shorter than min_dimension, it is scaled again so that
    the shorter side reaches min_dimension, even if that overflows the area.
    """
    if source_width < 1 or source_height < 1:
        raise ValueError(f"Invalid source size {source_width}x{source_height}")
    if max_width < 1 or max_height < 1:
        raise ValueError(f"Invalid display area {max_width}x{max_height}")

    scale = min(max_width / source_width, max_height / source_height)
    new_width = max(1, _round_half_up(source_width * scale))
    new_height = max(1, _round_half_up(source_height * scale))

    if new_width < min_dimension or new_height < min_dimension:
        min_scale = min_dimension / min(new_width, new_height)
        new_width = _round_half_up(new_width * min_scale)
        new_height = _round_half_up(new_height * min_scale)

    return new_width, new_height


def resample_image(image: Image.Image, width: int, height: int) -> Image.Image:
    """Resize a frame to the canvas size in RGBA mode."""
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    if image.size == (width, height):
        return image
    return image.resize((width, height), Image.Resampling.LANCZOS)
