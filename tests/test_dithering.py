"""Tests for the dithering variants.

Run:
    pytest tests/test_dithering.py -v
"""

import numpy as np
import pytest

from dotscreen.image_processing.dithering import (
    apply_dither,
    bayer_thresholds,
    floyd_steinberg,
    noise,
    ordered,
)
from dotscreen.models import DitherType, InvalidConfigurationError


@pytest.fixture
def random_grid(make_grid):
    rng = np.random.default_rng(1234)
    return make_grid(rng.uniform(0, 255, size=(12, 15)))


def _is_binary(values):
    return np.isin(values, (0.0, 255.0)).all()


def test_floyd_steinberg_outputs_binary(random_grid):
    result = floyd_steinberg(random_grid)
    assert _is_binary(result.values)
    assert result.shape == random_grid.shape


def test_floyd_steinberg_roughly_conserves_brightness(random_grid):
    result = floyd_steinberg(random_grid)
    rows, cols = random_grid.shape
    # Only error pushed past the last row or the side columns is lost
    bound = 255 * (2 * rows + 2 * cols)
    assert abs(result.values.sum() - random_grid.values.sum()) <= bound


def test_floyd_steinberg_error_propagation(make_grid):
    grid = make_grid([[100.0, 0.0], [0.0, 0.0]])
    result = floyd_steinberg(grid)
    # 100 -> 0, error 100: right gets 43.75, below 31.25, below-right 6.25
    # all stay under 128
    np.testing.assert_array_equal(result.values, [[0, 0], [0, 0]])

    grid = make_grid([[100.0, 90.0]])
    result = floyd_steinberg(grid)
    # 90 + 100 * 7/16 = 133.75 -> 255
    np.testing.assert_array_equal(result.values, [[0, 255]])


def test_floyd_steinberg_threshold_is_inclusive(make_grid):
    result = floyd_steinberg(make_grid([[128.0, 127.9]]))
    assert result[0, 0] == 255
    # 127.9 - 127 * 7/16 falls well below the threshold
    assert result[0, 1] == 0


def test_floyd_steinberg_does_not_mutate_input(random_grid):
    before = random_grid.values.copy()
    floyd_steinberg(random_grid)
    np.testing.assert_array_equal(random_grid.values, before)


def test_bayer_thresholds_tile():
    thresholds = bayer_thresholds(3, 3)
    step = 255 / 4
    expected = np.array(
        [
            [0.5, 2.5, 0.5],
            [3.5, 1.5, 3.5],
            [0.5, 2.5, 0.5],
        ]
    ) * step
    np.testing.assert_allclose(thresholds, expected)
    assert thresholds[0, 0] == pytest.approx(31.875)


def test_ordered_is_deterministic(random_grid):
    first = ordered(random_grid)
    second = ordered(random_grid)
    assert _is_binary(first.values)
    np.testing.assert_array_equal(first.values, second.values)


def test_ordered_depends_on_position(make_grid):
    grid = make_grid(np.full((2, 2), 100.0))
    result = ordered(grid)
    # thresholds 31.875, 159.375 / 223.125, 95.625
    np.testing.assert_array_equal(result.values, [[255, 0], [0, 255]])


def test_noise_is_reproducible_with_seed(random_grid):
    first = noise(random_grid, np.random.default_rng(42))
    second = noise(random_grid, np.random.default_rng(42))
    assert _is_binary(first.values)
    np.testing.assert_array_equal(first.values, second.values)


def test_noise_cannot_flip_far_values(make_grid):
    grid = make_grid([[50.0, 200.0], [102.0, 154.0]])
    for seed in range(20):
        result = noise(grid, np.random.default_rng(seed))
        np.testing.assert_array_equal(result.values, [[0, 255], [0, 255]])


def test_noise_without_generator_still_binary(random_grid):
    assert _is_binary(noise(random_grid).values)


def test_none_passes_through(random_grid):
    result = apply_dither(random_grid, DitherType.NONE)
    np.testing.assert_array_equal(result.values, random_grid.values)


@pytest.mark.parametrize(
    "dither_type",
    [DitherType.FLOYD_STEINBERG, DitherType.ORDERED, DitherType.NOISE],
)
def test_apply_dither_dispatch_keeps_shape(random_grid, dither_type):
    result = apply_dither(random_grid, dither_type, np.random.default_rng(0))
    assert result.shape == random_grid.shape
    assert _is_binary(result.values)


def test_apply_dither_accepts_option_strings(random_grid):
    np.testing.assert_array_equal(
        apply_dither(random_grid, "Ordered").values, ordered(random_grid).values
    )


def test_apply_dither_rejects_unknown(random_grid):
    with pytest.raises(InvalidConfigurationError):
        apply_dither(random_grid, "Sierra")
