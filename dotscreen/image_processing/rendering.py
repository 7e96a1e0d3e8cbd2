"""Dot rendering for the finalized cell grid.

AIDEV-NOTE: layout_dots is the single source of dot geometry. The raster
renderer here and the SVG exporter both draw its output, which keeps the
two targets identical for the same grid and canvas size.
"""

from PIL import Image, ImageDraw

from dotscreen.models import CellGrid, Dot

from .utils import clamp_brightness

# Dots grow faster than linearly as cells get darker
RADIUS_EXPONENT = 1.2

# Dots at or below this radius are not drawn
MIN_VISIBLE_RADIUS = 0.5

BACKGROUND = 255  # White
INK = 0  # Black


def dot_radius(value: float, grid_size: float) -> float:
    """Radius of the dot for one cell.

    Args:
        value: Cell brightness; clamped to [0, 255] first
        grid_size: Cell edge length in pixels

    Returns:
        (grid_size / 2) * (1 - value / 255) ** 1.2
    """
    norm = float(clamp_brightness(value)) / 255.0
    return (grid_size / 2) * (1.0 - norm) ** RADIUS_EXPONENT


def layout_dots(grid: CellGrid) -> "list[Dot]":
    """Compute the visible dots of a grid in raster order.

    Returns:
        One Dot per cell whose radius exceeds 0.5 px, centered on the cell
    """
    dots = []
    append_dot = dots.append
    half = grid.grid_size / 2

    for row in range(grid.rows):
        cy = row * grid.grid_size + half
        for col in range(grid.cols):
            radius = dot_radius(grid.values[row, col], grid.grid_size)
            if radius > MIN_VISIBLE_RADIUS:
                append_dot(Dot(cx=col * grid.grid_size + half, cy=cy, radius=radius))

    return dots


def draw_dots(image: Image.Image, dots: "list[Dot]") -> Image.Image:
    """Paint filled black circles onto an image in place.

    AIDEV-NOTE: Pillow treats the right/bottom bbox edge as inclusive, so the
    far corner is pulled in by one pixel. Pixel i then spans [i, i + 1) in
    canvas units and the painted disc matches the SVG circle of the same dot.
    """
    draw = ImageDraw.Draw(image)
    for dot in dots:
        r = dot.radius
        draw.ellipse((dot.cx - r, dot.cy - r, dot.cx + r - 1, dot.cy + r - 1), fill=INK)
    return image


def render_raster(grid: CellGrid, dots: "list[Dot] | None" = None) -> Image.Image:
    """Render the grid as a white grayscale canvas with black dots.

    Args:
        grid: Finalized cell grid
        dots: Precomputed layout for this grid, computed when omitted

    Returns:
        PIL Image in mode 'L' sized to the grid's width and height
    """
    if dots is None:
        dots = layout_dots(grid)
    canvas = Image.new("L", (grid.width, grid.height), BACKGROUND)
    return draw_dots(canvas, dots)
