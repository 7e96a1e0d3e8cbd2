"""Dithering variants operating on the cell grid.

AIDEV-NOTE: All variants return a new CellGrid and leave the input alone.
Floyd-Steinberg is order dependent and must stay a sequential raster scan;
ordered and noise dithering are per-cell and vectorized with numpy.
"""

import numpy as np

from dotscreen.models import CellGrid, DitherType

THRESHOLD = 128
NOISE_AMPLITUDE = 25.0  # Noise is drawn from [-25, 25)

BAYER_2X2 = np.array([[0, 2], [3, 1]])

# (row offset, col offset, weight) in the order error is pushed
FLOYD_STEINBERG_WEIGHTS = (
    (0, 1, 7 / 16),
    (1, -1, 3 / 16),
    (1, 0, 5 / 16),
    (1, 1, 1 / 16),
)


def _quantize(values: np.ndarray, threshold) -> np.ndarray:
    return np.where(values < threshold, 0.0, 255.0)


def floyd_steinberg(grid: CellGrid) -> CellGrid:
    """Error-diffusion dithering to {0, 255}.

    Quantization error goes right (7/16), lower-left (3/16), lower (5/16)
    and lower-right (1/16). Neighbours outside the grid are skipped and
    their share of the error is dropped.
    """
    result = grid.copy()
    values = result.values
    rows, cols = values.shape

    for row in range(rows):
        for col in range(cols):
            old_value = values[row, col]
            new_value = 0.0 if old_value < THRESHOLD else 255.0
            error = old_value - new_value
            values[row, col] = new_value

            for d_row, d_col, weight in FLOYD_STEINBERG_WEIGHTS:
                r, c = row + d_row, col + d_col
                if 0 <= r < rows and 0 <= c < cols:
                    values[r, c] += error * weight

    return result


def bayer_thresholds(rows: int, cols: int) -> np.ndarray:
    """Tile the 2x2 Bayer matrix into per-cell thresholds."""
    n = BAYER_2X2.shape[0]
    row_idx, col_idx = np.indices((rows, cols))
    return (BAYER_2X2[row_idx % n, col_idx % n] + 0.5) * (255 / (n * n))


def ordered(grid: CellGrid) -> CellGrid:
    """Ordered dithering against the tiled 2x2 Bayer matrix."""
    thresholds = bayer_thresholds(grid.rows, grid.cols)
    return grid.with_values(_quantize(grid.values, thresholds))


def noise(grid: CellGrid, rng: np.random.Generator | None = None) -> CellGrid:
    """Add uniform noise in [-25, 25) then threshold at 128.

    Args:
        grid: Cell grid to dither
        rng: Random generator; a fresh unseeded one is used when omitted,
            so output differs between calls unless a generator is injected
    """
    if rng is None:
        rng = np.random.default_rng()
    jitter = rng.uniform(-NOISE_AMPLITUDE, NOISE_AMPLITUDE, size=grid.shape)
    return grid.with_values(_quantize(grid.values + jitter, THRESHOLD))


def apply_dither(
    grid: CellGrid,
    dither_type: DitherType | str,
    rng: np.random.Generator | None = None,
) -> CellGrid:
    """Dispatch to the selected dithering variant.

    Args:
        grid: Cell grid to dither
        dither_type: Variant to apply; DitherType.NONE passes the grid through
        rng: Random generator used by the noise variant only

    Returns:
        New CellGrid with the same shape
    """
    dither_type = DitherType.parse(dither_type)

    if dither_type == DitherType.FLOYD_STEINBERG:
        return floyd_steinberg(grid)
    elif dither_type == DitherType.ORDERED:
        return ordered(grid)
    elif dither_type == DitherType.NOISE:
        return noise(grid, rng)
    return grid.copy()
