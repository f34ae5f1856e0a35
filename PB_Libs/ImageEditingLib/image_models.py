"""
Image data models for Photo Blur.

This module defines the core data structures shared by every redaction
strategy.

Classes:
    Color: Unclamped RGBA accumulator for weighted color sums
    PixelBuffer: Mutable RGBA pixel grid backed by a NumPy array

Type Aliases:
    RgbaColor: A tuple of 4 integers representing RGBA color values (0-255)
"""

from dataclasses import dataclass
from typing import Any, Tuple

import numpy as np
from PIL import Image

RgbaColor = Tuple[int, int, int, int]


def _clamp_channel(value: float) -> int:
    return int(min(255, max(0, round(value))))


@dataclass
class Color:
    """
    RGBA color accumulator.

    Components are plain floats and are never clamped while accumulating;
    rounding and clamping to 0-255 only happens in to_rgba().
    """
    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0
    alpha: float = 0.0

    @classmethod
    def from_rgba(cls, rgba) -> "Color":
        red, green, blue, alpha = rgba
        return cls(float(red), float(green), float(blue), float(alpha))

    def __add__(self, other: "Color") -> "Color":
        return Color(
            self.red + other.red,
            self.green + other.green,
            self.blue + other.blue,
            self.alpha + other.alpha,
        )

    def __mul__(self, factor: float) -> "Color":
        return Color(
            self.red * factor,
            self.green * factor,
            self.blue * factor,
            self.alpha * factor,
        )

    __rmul__ = __mul__

    def to_rgba(self) -> RgbaColor:
        """Round and clamp every component to the 0-255 storage range."""
        return (
            _clamp_channel(self.red),
            _clamp_channel(self.green),
            _clamp_channel(self.blue),
            _clamp_channel(self.alpha),
        )


class PixelBuffer:
    """
    Rectangular grid of RGBA samples.

    The buffer owns an (height, width, 4) uint8 array. Strategies read and
    write it in place through `array`, or pixel by pixel through
    get_pixel()/set_pixel(). Buffers are never shared between images; use
    copy() before mutating a buffer somebody else owns.

    Example:
        >>> buffer = PixelBuffer.new(4, 3, (255, 0, 0, 255))
        >>> buffer.get_pixel(0, 0)
        (255, 0, 0, 255)
    """

    def __init__(self, array: Any):
        pixels = np.asarray(array)
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(
                f"PixelBuffer expects an (height, width, 4) array, got shape {pixels.shape}"
            )
        self._pixels = np.ascontiguousarray(pixels, dtype=np.uint8)

    @classmethod
    def new(cls, width: int, height: int, color: RgbaColor = (0, 0, 0, 0)) -> "PixelBuffer":
        if width < 1 or height < 1:
            raise ValueError(f"Buffer size must be positive, got {width}x{height}")
        pixels = np.empty((height, width, 4), dtype=np.uint8)
        pixels[:, :] = color
        return cls(pixels)

    @classmethod
    def from_image(cls, image: Any) -> "PixelBuffer":
        """Build a buffer from a PIL Image (converted to RGBA)."""
        if not hasattr(image, "convert"):
            raise TypeError(f"Expected PIL Image, got {type(image)}")
        return cls(np.array(image.convert("RGBA"), dtype=np.uint8))

    def to_image(self) -> Image.Image:
        # (h, w, 4) uint8 arrays map to RGBA
        return Image.fromarray(self._pixels.copy())

    @property
    def array(self) -> np.ndarray:
        return self._pixels

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_pixel(self, x: int, y: int) -> RgbaColor:
        if not self.contains(x, y):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} buffer")
        return tuple(int(value) for value in self._pixels[y, x])

    def set_pixel(self, x: int, y: int, color) -> None:
        if not self.contains(x, y):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} buffer")
        if isinstance(color, Color):
            color = color.to_rgba()
        self._pixels[y, x] = color

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self._pixels.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self.size == other.size and bool(np.array_equal(self._pixels, other._pixels))

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"
