"""SVG document generation for halftone dots."""

import svg

from dotscreen.models import CellGrid, Dot

from .rendering import layout_dots

COORDINATE_PRECISION = 2  # Decimal digits kept for cx, cy and r


def dots_to_svg(dots: "list[Dot]", width: int, height: int) -> str:
    """Convert dots to an SVG string.

    Args:
        dots: Circles in canvas pixel coordinates
        width: Canvas width in pixels
        height: Canvas height in pixels

    Returns:
        SVG content as string: white background rect, then one black
        circle per dot in the given order
    """
    elements: list[svg.Element] = [
        svg.Rect(x=0, y=0, width=width, height=height, fill="white"),
    ]

    for dot in dots:
        elements.append(
            svg.Circle(
                cx=round(dot.cx, COORDINATE_PRECISION),
                cy=round(dot.cy, COORDINATE_PRECISION),
                r=round(dot.radius, COORDINATE_PRECISION),
                fill="black",
            )
        )

    document = svg.SVG(
        width=width,
        height=height,
        viewBox=svg.ViewBoxSpec(0, 0, width, height),
        elements=elements,
    )
    return document.as_str()


def grid_to_svg(grid: CellGrid, dots: "list[Dot] | None" = None) -> str:
    """Render a finalized cell grid as an SVG document sized to the grid."""
    if dots is None:
        dots = layout_dots(grid)
    return dots_to_svg(dots, grid.width, grid.height)
