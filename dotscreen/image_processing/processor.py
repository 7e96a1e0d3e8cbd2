"""Main halftone processor orchestrating the complete pipeline.

AIDEV-NOTE: One call to compute() is one pipeline invocation. The config is
snapshotted at the start so every stage sees the same grid size, and no
state is carried over between invocations. Live sources call compute()
once per displayed frame.
"""

import logging
from pathlib import Path

import numpy as np
from PIL import Image

from dotscreen.models import (
    DitherType,
    HalftoneConfig,
    HalftoneResult,
    PixelBuffer,
)

from .cells import aggregate_cells
from .dithering import apply_dither
from .rendering import layout_dots, render_raster
from .smoothing import smooth_cells
from .svg_export import grid_to_svg
from .tone import tone_map
from .utils import fit_canvas_size, resample_image

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_SCALE = 2


class HalftoneProcessor:
    """Turns decoded frames into halftone dot renderings."""

    def __init__(self, config: HalftoneConfig | None = None):
        self.config = config or HalftoneConfig()

    def load_image(self, file_path: str | Path) -> Image.Image:
        """Load and validate an image file.

        Args:
            file_path: Path to image file (PNG, JPG, etc.)

        Returns:
            PIL Image in RGBA mode

        Raises:
            ValueError: If file cannot be loaded or is invalid
        """
        try:
            image = Image.open(file_path)
            image.load()
            # AIDEV-NOTE: Always convert to RGBA for consistent processing
            if image.mode != "RGBA":
                image = image.convert("RGBA")
            return image
        except Exception as e:
            raise ValueError(f"Failed to load image: {e}") from e

    def prepare_frame(self, image: Image.Image, width: int, height: int) -> PixelBuffer:
        """Resample an image to the canvas size and wrap it as a pixel buffer."""
        return PixelBuffer.from_image(resample_image(image, width, height))

    def compute(
        self,
        buffer: PixelBuffer,
        rng: np.random.Generator | None = None,
    ) -> HalftoneResult:
        """Run tone mapping, aggregation, smoothing and dithering on one frame.

        Args:
            buffer: Decoded RGBA frame at target resolution
            rng: Generator for noise dithering; overrides config.noise_seed

        Returns:
            HalftoneResult with the final grid and the dots to draw

        Raises:
            InvalidConfigurationError: If the config is invalid. Nothing is
                computed in that case.
        """
        config = self.config.snapshot()

        logger.debug("Tone mapping %dx%d frame", buffer.width, buffer.height)
        field = tone_map(
            buffer,
            gamma=config.gamma,
            contrast=config.contrast,
            brightness=config.brightness,
        )

        grid = aggregate_cells(field, config.grid_size)
        logger.debug(
            "Aggregated %dx%d cells at grid size %d",
            grid.rows,
            grid.cols,
            config.grid_size,
        )

        if config.smoothing > 0:
            logger.debug("Smoothing with strength %.2f", config.smoothing)
            grid = smooth_cells(grid, config.smoothing)

        if config.dither_type != DitherType.NONE:
            if rng is None and config.noise_seed is not None:
                rng = np.random.default_rng(config.noise_seed)
            logger.debug("Dithering with %s", config.dither_type.value)
            grid = apply_dither(grid, config.dither_type, rng)

        dots = layout_dots(grid)
        logger.debug("Laid out %d dots", len(dots))

        return HalftoneResult(grid=grid, dots=dots, config=config)

    def render(self, buffer: PixelBuffer, rng: np.random.Generator | None = None) -> Image.Image:
        """Compute and paint a frame as a raster image."""
        result = self.compute(buffer, rng)
        return render_raster(result.grid, result.dots)

    def to_svg(self, buffer: PixelBuffer, rng: np.random.Generator | None = None) -> str:
        """Compute a frame and return it as an SVG document."""
        result = self.compute(buffer, rng)
        return grid_to_svg(result.grid, result.dots)

    def render_scaled(
        self,
        image: Image.Image,
        width: int,
        height: int,
        scale: int = DEFAULT_EXPORT_SCALE,
        rng: np.random.Generator | None = None,
    ) -> Image.Image:
        """Render at an integer multiple of the canvas size.

        AIDEV-NOTE: The whole pipeline is recomputed at the scaled size with
        the grid size scaled by the same factor. The dot pattern matches the
        unscaled render but is drawn with more pixels, rather than being an
        upscaled bitmap.
        """
        scaled_config = self.config.scaled(scale)
        scaled_processor = HalftoneProcessor(scaled_config)
        buffer = scaled_processor.prepare_frame(image, width * scale, height * scale)
        return scaled_processor.render(buffer, rng)

    def export_png(
        self,
        image: Image.Image,
        output_path: str | Path,
        width: int,
        height: int,
        scale: int = DEFAULT_EXPORT_SCALE,
    ) -> Path:
        """Render a frame at `scale` times the canvas size and save it as PNG."""
        output_path = Path(output_path)
        rendered = self.render_scaled(image, width, height, scale)
        rendered.save(output_path, format="PNG")
        logger.info("Saved %dx%d PNG to %s", rendered.width, rendered.height, output_path)
        return output_path

    def export_svg(
        self,
        image: Image.Image,
        output_path: str | Path,
        width: int,
        height: int,
    ) -> Path:
        """Render a frame at canvas size and save it as SVG."""
        output_path = Path(output_path)
        document = self.to_svg(self.prepare_frame(image, width, height))
        output_path.write_text(document, encoding="utf-8")
        logger.info("Saved %dx%d SVG to %s", width, height, output_path)
        return output_path

    def process(
        self,
        file_path: str | Path,
        max_width: int,
        max_height: int,
    ) -> HalftoneResult:
        """Execute the complete pipeline for an image file.

        Args:
            file_path: Path to input image
            max_width: Display area width in pixels
            max_height: Display area height in pixels

        Returns:
            HalftoneResult for the fitted canvas
        """
        image = self.load_image(file_path)
        orig_width, orig_height = image.size
        logger.info("Loaded image with size: %dx%d pixels", orig_width, orig_height)

        width, height = fit_canvas_size(orig_width, orig_height, max_width, max_height)
        logger.info("Fitted canvas to %dx%d pixels", width, height)

        result = self.compute(self.prepare_frame(image, width, height))
        logger.info(
            "Halftone complete: %dx%d cells, %d dots",
            result.grid.rows,
            result.grid.cols,
            result.dot_count,
        )
        return result
