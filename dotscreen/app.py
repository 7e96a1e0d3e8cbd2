"""dotscreen - Main entry point."""

import argparse
import logging
import sys
from pathlib import Path

from dotscreen.image_processing import HalftoneProcessor
from dotscreen.image_processing.processor import DEFAULT_EXPORT_SCALE
from dotscreen.image_processing.utils import fit_canvas_size
from dotscreen.models import (
    DEFAULT_BRIGHTNESS,
    DEFAULT_CONTRAST,
    DEFAULT_GAMMA,
    DEFAULT_GRID_SIZE,
    DEFAULT_SMOOTHING,
    DitherType,
    HalftoneConfig,
    InvalidConfigurationError,
)

logger = logging.getLogger("dotscreen")

# Initial canvas area of the original viewer
DEFAULT_MAX_WIDTH = 800
DEFAULT_MAX_HEIGHT = 600


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dotscreen",
        description="Convert an image into a halftone dot rendering (PNG or SVG).",
    )
    parser.add_argument("input", type=Path, help="Input image file")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output file; .svg writes vector output, anything else PNG "
        "(default: halftone.png next to the input)",
    )
    parser.add_argument("--grid-size", type=int, default=DEFAULT_GRID_SIZE)
    parser.add_argument("--brightness", type=int, default=DEFAULT_BRIGHTNESS)
    parser.add_argument("--contrast", type=int, default=DEFAULT_CONTRAST)
    parser.add_argument("--gamma", type=float, default=DEFAULT_GAMMA)
    parser.add_argument("--smoothing", type=float, default=DEFAULT_SMOOTHING)
    parser.add_argument(
        "--dither",
        choices=[member.value for member in DitherType],
        default=DitherType.NONE.value,
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for Noise dithering")
    parser.add_argument(
        "--scale",
        type=int,
        default=DEFAULT_EXPORT_SCALE,
        help="Upscale factor for PNG export",
    )
    parser.add_argument("--max-width", type=int, default=DEFAULT_MAX_WIDTH)
    parser.add_argument("--max-height", type=int, default=DEFAULT_MAX_HEIGHT)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def run(args: argparse.Namespace) -> Path:
    """Render the input image to the requested output file."""
    config = HalftoneConfig(
        grid_size=args.grid_size,
        brightness=args.brightness,
        contrast=args.contrast,
        gamma=args.gamma,
        smoothing=args.smoothing,
        dither_type=DitherType.parse(args.dither),
        noise_seed=args.seed,
    )
    config.validate()

    processor = HalftoneProcessor(config)
    image = processor.load_image(args.input)
    width, height = fit_canvas_size(*image.size, args.max_width, args.max_height)
    logger.info("Rendering %s on a %dx%d canvas", args.input, width, height)

    output = args.output or args.input.with_name("halftone.png")
    if output.suffix.lower() == ".svg":
        return processor.export_svg(image, output, width, height)
    return processor.export_png(image, output, width, height, scale=args.scale)


def main(argv: "list[str] | None" = None) -> int:
    """Launch the dotscreen command line tool."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        output = run(args)
    except InvalidConfigurationError as e:
        print(f"error: invalid configuration: {e}", file=sys.stderr)
        return 2
    except (ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(f"✓ Saved halftone to {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
