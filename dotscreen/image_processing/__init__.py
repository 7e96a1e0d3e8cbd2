"""Image processing pipeline for frame-to-halftone conversion.

AIDEV-NOTE: This package handles the complete pipeline from a decoded
frame to halftone dots. Organized into modular components:
- processor: Main HalftoneProcessor orchestrator
- tone: RGBA to brightness field (gamma, contrast, brightness, alpha)
- cells: Edge-softened cell aggregation
- smoothing: Multi-pass kernel smoothing with fractional blend
- dithering: Floyd-Steinberg, ordered (Bayer) and noise dithering
- rendering: Dot layout and raster painting
- svg_export: SVG document output
- utils: Canvas sizing and clamping helpers
"""

from .processor import HalftoneProcessor
from .svg_export import dots_to_svg, grid_to_svg

__all__ = ["HalftoneProcessor", "dots_to_svg", "grid_to_svg"]
