"""Data models and constants for the dotscreen halftone pipeline."""

import math
import numbers
from dataclasses import dataclass, field, replace
from enum import Enum

import numpy as np
from PIL import Image

# AIDEV-NOTE: Defaults mirror the original browser tool's reset values
DEFAULT_GRID_SIZE = 20  # px per cell edge
DEFAULT_BRIGHTNESS = 20
DEFAULT_CONTRAST = 0
DEFAULT_GAMMA = 1.0
DEFAULT_SMOOTHING = 0.0

ADJUSTMENT_LIMIT = 255  # brightness/contrast are in [-255, 255]


class InvalidConfigurationError(ValueError):
    """Raised when the pipeline is asked to run with unusable inputs.

    AIDEV-NOTE: Covers buffer/size mismatches as well as bad option values.
    The pipeline refuses to run rather than produce wrong geometry.
    """


class DitherType(Enum):
    """Dithering variants applied to the cell grid.

    AIDEV-NOTE: Values match the option strings of the original tool so
    presets and CLI flags can be parsed directly.
    """

    NONE = "None"
    FLOYD_STEINBERG = "FloydSteinberg"
    ORDERED = "Ordered"
    NOISE = "Noise"

    @classmethod
    def parse(cls, value: "DitherType | str | None") -> "DitherType":
        """Resolve an enum member from a member, its value or its name."""
        if value is None:
            return cls.NONE
        if isinstance(value, cls):
            return value
        for member in cls:
            if value == member.value or str(value).upper() == member.name:
                return member
        raise InvalidConfigurationError(f"Unknown dither type: {value!r}")


@dataclass
class HalftoneConfig:
    """Configuration for one halftone pipeline invocation."""

    grid_size: int = DEFAULT_GRID_SIZE  # Cell edge length in source pixels
    brightness: int = DEFAULT_BRIGHTNESS  # Added after contrast (-255..255)
    contrast: int = DEFAULT_CONTRAST  # -255..255
    gamma: float = DEFAULT_GAMMA  # Per-channel exponent, > 0
    smoothing: float = DEFAULT_SMOOTHING  # Passes + fractional blend, >= 0
    dither_type: DitherType = DitherType.NONE

    # Seed for Noise dithering; None keeps it non-reproducible
    noise_seed: int | None = None

    def __post_init__(self):
        if not isinstance(self.dither_type, DitherType):
            self.dither_type = DitherType.parse(self.dither_type)

    def validate(self) -> None:
        """Check every option, raising InvalidConfigurationError on the first bad one."""
        grid_size = self.grid_size
        if (
            isinstance(grid_size, bool)
            or not isinstance(grid_size, numbers.Real)
            or not math.isfinite(grid_size)
            or int(grid_size) != grid_size
        ):
            raise InvalidConfigurationError(
                f"grid_size must be an integer, got {self.grid_size!r}"
            )
        if self.grid_size < 1:
            raise InvalidConfigurationError(
                f"grid_size must be >= 1, got {self.grid_size}"
            )
        for name in ("gamma", "brightness", "contrast", "smoothing"):
            value = getattr(self, name)
            if not (isinstance(value, numbers.Real) and math.isfinite(value)):
                raise InvalidConfigurationError(
                    f"{name} must be a finite number, got {value!r}"
                )
        if self.gamma <= 0:
            raise InvalidConfigurationError(f"gamma must be > 0, got {self.gamma}")
        for name in ("brightness", "contrast"):
            value = getattr(self, name)
            if not -ADJUSTMENT_LIMIT <= value <= ADJUSTMENT_LIMIT:
                raise InvalidConfigurationError(
                    f"{name} must be within [-255, 255], got {value}"
                )
        if self.smoothing < 0:
            raise InvalidConfigurationError(
                f"smoothing must be >= 0, got {self.smoothing}"
            )

    def snapshot(self) -> "HalftoneConfig":
        """Validated copy used for the duration of one invocation."""
        self.validate()
        return replace(self, grid_size=int(self.grid_size))

    def scaled(self, factor: int) -> "HalftoneConfig":
        """Copy with the cell size scaled for an upscaled render target."""
        if int(factor) != factor or factor < 1:
            raise InvalidConfigurationError(f"scale must be an integer >= 1, got {factor}")
        return replace(self, grid_size=int(self.grid_size * factor))


# --- Pipeline data ---


@dataclass(frozen=True)
class PixelBuffer:
    """Decoded RGBA frame handed to the tone mapper.

    AIDEV-NOTE: ``pixels`` has shape (height, width, 4) and dtype uint8.
    The array is marked read-only; stages never mutate caller input.
    """

    width: int
    height: int
    pixels: np.ndarray

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise InvalidConfigurationError(
                f"Frame must be at least 1x1, got {self.width}x{self.height}"
            )
        expected = (self.height, self.width, 4)
        if self.pixels.shape != expected:
            raise InvalidConfigurationError(
                f"Pixel array shape {self.pixels.shape} does not match {expected}"
            )
        if self.pixels.dtype != np.uint8 and self.pixels.size:
            if not np.isfinite(self.pixels).all() or (
                self.pixels.min() < 0 or self.pixels.max() > 255
            ):
                raise InvalidConfigurationError("Channel values must be within [0, 255]")
        pixels = np.array(self.pixels, dtype=np.uint8, copy=True)
        pixels.setflags(write=False)
        object.__setattr__(self, "pixels", pixels)

    @classmethod
    def from_bytes(cls, width: int, height: int, data) -> "PixelBuffer":
        """Build from a flat RGBA byte string or sequence of W*H*4 channel values."""
        if isinstance(data, (bytes, bytearray, memoryview)):
            flat = np.frombuffer(data, dtype=np.uint8)
        else:
            flat = np.asarray(data).ravel()
        if flat.size != width * height * 4:
            raise InvalidConfigurationError(
                f"Buffer holds {flat.size} values, expected {width}x{height}x4 = "
                f"{width * height * 4}"
            )
        return cls(width, height, flat.reshape(height, width, 4))

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelBuffer":
        """Build from a Pillow image of any mode."""
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        width, height = image.size
        return cls(width, height, np.asarray(image, dtype=np.uint8))

    @property
    def size(self) -> "tuple[int, int]":
        return self.width, self.height


@dataclass
class CellGrid:
    """Row-major grid of cell brightness values with the source geometry.

    AIDEV-NOTE: Index with ``grid[row, col]``. Unlike raw numpy indexing,
    negative and out-of-range indices raise IndexError instead of wrapping,
    which keeps partial edge cells from being addressed by accident.
    """

    values: np.ndarray  # (rows, cols) float64
    grid_size: int  # Cell edge length in pixels
    width: int  # Source/target width in pixels
    height: int  # Source/target height in pixels

    def __post_init__(self):
        self.values = np.asarray(self.values, dtype=np.float64)
        expected = (
            math.ceil(self.height / self.grid_size),
            math.ceil(self.width / self.grid_size),
        )
        if self.values.shape != expected:
            raise InvalidConfigurationError(
                f"Cell values shape {self.values.shape} does not match {expected} "
                f"for {self.width}x{self.height} at grid size {self.grid_size}"
            )

    @property
    def rows(self) -> int:
        return self.values.shape[0]

    @property
    def cols(self) -> int:
        return self.values.shape[1]

    @property
    def shape(self) -> "tuple[int, int]":
        return self.rows, self.cols

    def _check(self, key) -> "tuple[int, int]":
        row, col = key
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(
                f"Cell ({row}, {col}) outside {self.rows}x{self.cols} grid"
            )
        return row, col

    def __getitem__(self, key) -> float:
        return float(self.values[self._check(key)])

    def __setitem__(self, key, value: float) -> None:
        self.values[self._check(key)] = value

    def cell_center(self, row: int, col: int) -> "tuple[float, float]":
        """Center of a cell in pixel coordinates."""
        self._check((row, col))
        half = self.grid_size / 2
        return col * self.grid_size + half, row * self.grid_size + half

    def copy(self) -> "CellGrid":
        return CellGrid(self.values.copy(), self.grid_size, self.width, self.height)

    def with_values(self, values: np.ndarray) -> "CellGrid":
        """New grid with the same geometry and different values."""
        return CellGrid(values, self.grid_size, self.width, self.height)


@dataclass(frozen=True)
class Dot:
    """A single filled circle of the halftone, in target pixel units."""

    cx: float
    cy: float
    radius: float


@dataclass
class HalftoneResult:
    """Result of one pipeline invocation."""

    # Finalized (smoothed/dithered) cell grid
    grid: CellGrid

    # Dots that both the raster and vector sinks draw
    dots: "list[Dot]"

    # Config snapshot the invocation ran with
    config: HalftoneConfig = field(default_factory=HalftoneConfig)

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def dot_count(self) -> int:
        return len(self.dots)
