"""Multi-pass cell smoothing with a fractional final blend."""

import math

import numpy as np

from dotscreen.models import CellGrid, InvalidConfigurationError

# 3x3 binomial kernel, [[1,2,1],[2,4,2],[1,2,1]] / 16
SMOOTHING_KERNEL = np.array(
    [
        [1.0, 2.0, 1.0],
        [2.0, 4.0, 2.0],
        [1.0, 2.0, 1.0],
    ]
) / 16.0


def convolve_once(values: np.ndarray) -> np.ndarray:
    """One kernel pass; border cells are normalized by their in-bounds weights.

    AIDEV-NOTE: Values and an all-ones mask are zero-padded and convolved
    with the same weights, so dividing by the mask response removes the
    padding bias instead of darkening the borders.
    """
    rows, cols = values.shape
    padded = np.pad(values, 1)
    mask = np.pad(np.ones_like(values), 1)

    total = np.zeros_like(values)
    weight_sum = np.zeros_like(values)
    for dy in range(3):
        for dx in range(3):
            weight = SMOOTHING_KERNEL[dy, dx]
            total += weight * padded[dy:dy + rows, dx:dx + cols]
            weight_sum += weight * mask[dy:dy + rows, dx:dx + cols]

    return total / weight_sum


def smooth_cells(grid: CellGrid, strength: float) -> CellGrid:
    """Low-pass filter the cell grid.

    Args:
        grid: Cell grid to smooth (not modified)
        strength: floor(strength) full passes, then the remainder blends
            the smoothed result with the original values

    Returns:
        New CellGrid with the same shape
    """
    if not math.isfinite(strength) or strength < 0:
        raise InvalidConfigurationError(
            f"smoothing strength must be a finite value >= 0, got {strength}"
        )
    if strength == 0:
        return grid.copy()

    passes = math.floor(strength)
    original = grid.values
    smoothed = original.copy()
    for _ in range(passes):
        smoothed = convolve_once(smoothed)

    frac = strength - passes
    if frac > 0:
        smoothed = original * (1 - frac) + smoothed * frac

    return grid.with_values(smoothed)
