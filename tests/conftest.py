"""Shared fixtures for dotscreen tests."""

import numpy as np
import pytest
from PIL import Image

from dotscreen.models import CellGrid, HalftoneConfig, PixelBuffer


@pytest.fixture
def solid_buffer():
    """Factory for single-color RGBA frames."""

    def make(width, height, rgba=(0, 0, 0, 255)):
        pixels = np.empty((height, width, 4), dtype=np.uint8)
        pixels[...] = rgba
        return PixelBuffer(width, height, pixels)

    return make


@pytest.fixture
def make_grid():
    """Factory for cell grids from a 2D list of values."""

    def make(values, grid_size=4):
        values = np.asarray(values, dtype=np.float64)
        rows, cols = values.shape
        return CellGrid(values, grid_size, cols * grid_size, rows * grid_size)

    return make


@pytest.fixture
def neutral_config():
    """No brightness/contrast/gamma adjustment, no smoothing, no dithering."""
    return HalftoneConfig(grid_size=4, brightness=0, contrast=0, gamma=1.0)


@pytest.fixture
def gradient_image():
    """64x48 horizontal black-to-white RGB gradient."""
    ramp = np.linspace(0, 255, 64).astype(np.uint8)
    pixels = np.repeat(np.tile(ramp, (48, 1))[..., None], 3, axis=2)
    return Image.fromarray(pixels)
