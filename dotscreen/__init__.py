"""dotscreen - halftone dot renderer for still images and video frames."""

from dotscreen.image_processing import HalftoneProcessor
from dotscreen.models import (
    CellGrid,
    DitherType,
    Dot,
    HalftoneConfig,
    HalftoneResult,
    InvalidConfigurationError,
    PixelBuffer,
)

__version__ = "0.1.0"

__all__ = [
    "CellGrid",
    "DitherType",
    "Dot",
    "HalftoneConfig",
    "HalftoneProcessor",
    "HalftoneResult",
    "InvalidConfigurationError",
    "PixelBuffer",
]
