"""
Convolution kernel construction.

Kernels are square weight matrices built from a radial falloff and
normalized so that all weights sum to 1, which keeps the average image
brightness unchanged under convolution.
"""

from typing import Tuple

import numpy as np


def falloff(distance):
    """Smoothstep-like falloff: 1 at the center, 0 at distance 1."""
    return 1.0 - (3.0 * distance - distance ** 3) / 2.0


def build_kernel(size: int) -> np.ndarray:
    """
    Build a normalized size x size convolution kernel.

    Cell (i, j) is mapped to x = (2i - size + 1) / size and
    y = (2j - size + 1) / size, so the origin sits on the middle of the
    grid for both odd and even sizes.

    Args:
        size: Kernel side length (>= 1)

    Returns:
        float64 array of shape (size, size) whose values sum to 1

    Raises:
        ValueError: If size < 1
    """
    size = int(size)
    if size < 1:
        raise ValueError(f"Kernel size must be >= 1, got {size}")

    coords = (2.0 * np.arange(size) - size + 1) / size
    x, y = np.meshgrid(coords, coords, indexing="ij")
    distance = np.sqrt(x * x + y * y)

    weights = falloff(distance)
    return weights / weights.sum()


def kernel_offsets(size: int) -> Tuple[int, int]:
    """
    Pixel offsets covered by a kernel of the given size.

    Returns:
        (first, last) inclusive offset relative to the center pixel;
        even sizes reach one pixel further on the negative side.
    """
    first = -(size // 2)
    return first, first + size - 1
