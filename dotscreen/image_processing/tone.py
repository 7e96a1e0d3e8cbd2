"""Tone mapping from RGBA frames to a single-channel brightness field.

AIDEV-NOTE: Order of operations is fixed: per-channel gamma, luminance
weighting, contrast around the 128 midpoint, brightness offset, clamp,
then alpha weighting. Transparent pixels therefore read as black.
"""

import numpy as np

from dotscreen.models import InvalidConfigurationError, PixelBuffer

# ITU-R BT.601 luma weights
LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114])


def contrast_factor(contrast: float) -> float:
    """Standard contrast correction factor for an adjustment in [-255, 255].

    Contrast close to 255 drives the factor toward large values (about 129.5
    at 255); the clamp in tone_map absorbs that.
    """
    denominator = 255 * (259 - contrast)
    if denominator == 0:
        raise InvalidConfigurationError("contrast of 259 has no contrast factor")
    return 259 * (contrast + 255) / denominator


def tone_map(
    buffer: PixelBuffer,
    gamma: float = 1.0,
    contrast: float = 0,
    brightness: float = 0,
) -> np.ndarray:
    """Convert an RGBA buffer into a brightness field.

    Args:
        buffer: Decoded RGBA frame
        gamma: Exponent applied to each normalized color channel (> 0)
        contrast: Contrast adjustment (-255..255)
        brightness: Brightness offset added after contrast (-255..255)

    Returns:
        Float array of shape (height, width) with values in [0, 255]
    """
    if gamma <= 0:
        raise InvalidConfigurationError(f"gamma must be > 0, got {gamma}")

    k = contrast_factor(contrast)
    rgba = buffer.pixels.astype(np.float64) / 255.0

    gray = np.power(rgba[..., :3], gamma) @ LUMA_WEIGHTS
    with np.errstate(over="ignore", invalid="ignore"):
        value = ((gray * 255.0 - 128.0) * k + 128.0 + brightness) / 255.0
    value = np.nan_to_num(value, nan=0.0, posinf=1.0, neginf=0.0)
    value = np.clip(value, 0.0, 1.0)
    value *= rgba[..., 3]

    return value * 255.0
