"""
Convolution Blur Strategy.

Blurs each active region by convolving it with a radial kernel built from
scratch (see kernel.build_kernel). The border of every region and a band
around it are convolved with a half-strength kernel so the blurred area
blends into its surroundings instead of ending in a hard seam. Pixels of
inactive regions are never modified.

Performance:
    O(region_area * radius^2) per region. The per-kernel-cell work is
    vectorized with NumPy, so the Python-level loop only runs radius^2
    times per region. Radii above MAX_BLUR_RADIUS are clamped.

Example:
    >>> strategy = ConvolutionBlurStrategy()
    >>> blurred = strategy.apply(buffer, rects, radius=12)
"""

import logging
from typing import Iterable, Optional, Tuple

import numpy as np

from PB_Libs.ImageEditingLib.image_editing_ops import copy_area
from PB_Libs.ImageEditingLib.image_models import PixelBuffer
from PB_Libs.RedactionLib.kernel import build_kernel, kernel_offsets
from PB_Libs.RegionLib.rect_region import Rect
from PB_Libs.constants import MAX_BLUR_RADIUS, SMOOTHING_MARGIN_DIVISOR

logger = logging.getLogger(__name__)

# (top, bottom, left, right)
Margins = Tuple[int, int, int, int]


def normalize_radius(radius) -> int:
    """Coerce a radius to int and clamp it to MAX_BLUR_RADIUS."""
    radius = int(radius)
    if radius > MAX_BLUR_RADIUS:
        logger.warning(f"Blur radius {radius} clamped to {MAX_BLUR_RADIUS}")
        return MAX_BLUR_RADIUS
    return radius


def smoothing_radius(radius: int) -> int:
    """Size of the half-strength kernel used in the smoothing band."""
    return max(1, radius // 2)


def smoothing_margins(rect_area: Tuple[int, int, int, int], image_width: int, image_height: int) -> Margins:
    """
    Width of the smoothing band on each side of a region.

    Each margin is the distance from the region edge to the image edge,
    capped at 1/7 of the region dimension along that axis.

    Args:
        rect_area: (left, top, right, bottom) with exclusive right/bottom
    """
    x0, y0, x1, y1 = rect_area
    vertical = (y1 - y0) // SMOOTHING_MARGIN_DIVISOR
    horizontal = (x1 - x0) // SMOOTHING_MARGIN_DIVISOR

    return (
        max(0, min(y0, vertical)),
        max(0, min(image_height - y1, vertical)),
        max(0, min(x0, horizontal)),
        max(0, min(image_width - x1, horizontal)),
    )


def convolve_window(window: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """
    Convolve a float (h, w, 4) window with a square kernel.

    Samples falling outside the window are replaced by the color of the
    pixel being computed, so window edges never pick up a black fringe.
    Kernel index i runs along x and j along y.
    """
    height, width = window.shape[:2]
    size = kernel.shape[0]
    first, _ = kernel_offsets(size)

    accumulated = np.zeros_like(window)
    for i in range(size):
        dx = first + i
        dst_x0, dst_x1 = max(0, -dx), min(width, width - dx)
        for j in range(size):
            dy = first + j
            dst_y0, dst_y1 = max(0, -dy), min(height, height - dy)

            sample = window.copy()
            if dst_x0 < dst_x1 and dst_y0 < dst_y1:
                sample[dst_y0:dst_y1, dst_x0:dst_x1] = window[
                    dst_y0 + dy:dst_y1 + dy,
                    dst_x0 + dx:dst_x1 + dx,
                ]
            accumulated += kernel[i, j] * sample

    return accumulated


class ConvolutionBlurStrategy:
    """
    Per-region convolution blur with edge smoothing.

    Stateless; a single instance can be shared between engines.
    """

    name = "convolution"

    def apply(self, image: PixelBuffer, regions: Iterable[Rect], radius) -> PixelBuffer:
        """
        Blur every active region of an image.

        Args:
            image: Source buffer (left unmodified)
            regions: Regions to redact; inactive ones are left untouched
            radius: Kernel size; <= 0 disables blurring, > 31 is clamped

        Returns:
            New PixelBuffer with the active regions blurred

        Raises:
            TypeError: If image is not a PixelBuffer
        """
        if not isinstance(image, PixelBuffer):
            raise TypeError(f"Expected PixelBuffer, got {type(image)}")

        regions = list(regions)
        result = image.copy()
        radius = normalize_radius(radius)
        if radius <= 0:
            return result

        active = [rect for rect in regions if rect.to_be_blurred]
        if not active:
            return result

        full_kernel = build_kernel(radius)
        half_kernel = build_kernel(smoothing_radius(radius))
        source = image.array.astype(np.float64)

        for rect in active:
            blurred = self._blur_region(source, rect, full_kernel, half_kernel)
            if blurred is None:
                continue
            (wy0, wy1, wx0, wx1), pixels = blurred
            result.array[wy0:wy1, wx0:wx1] = np.clip(np.rint(pixels), 0, 255).astype(np.uint8)

        # Inactive regions keep their original pixels, even under a smoothing band
        for rect in regions:
            if not rect.to_be_blurred:
                copy_area(result, image, rect.left_x, rect.top_y, rect.width, rect.height)

        logger.debug(f"Convolution blur applied to {len(active)} region(s) at radius {radius}")
        return result

    def _blur_region(
        self,
        source: np.ndarray,
        rect: Rect,
        full_kernel: np.ndarray,
        half_kernel: np.ndarray,
    ) -> Optional[Tuple[Tuple[int, int, int, int], np.ndarray]]:
        image_height, image_width = source.shape[:2]

        # Regions may reach one pixel past the image edge
        x0 = max(0, rect.left_x)
        y0 = max(0, rect.top_y)
        x1 = min(image_width, rect.left_x + rect.width)
        y1 = min(image_height, rect.top_y + rect.height)
        if x0 >= x1 or y0 >= y1:
            return None

        top, bottom, left, right = smoothing_margins((x0, y0, x1, y1), image_width, image_height)
        wx0, wx1 = x0 - left, x1 + right
        wy0, wy1 = y0 - top, y1 + bottom
        window = source[wy0:wy1, wx0:wx1]

        # Full kernel only strictly inside the rectangle; its border row and
        # column belong to the margin band
        inside = np.zeros(window.shape[:2], dtype=bool)
        ix0 = max(rect.left_x + 1, wx0) - wx0
        ix1 = min(rect.left_x + rect.width - 1, wx1) - wx0
        iy0 = max(rect.top_y + 1, wy0) - wy0
        iy1 = min(rect.top_y + rect.height - 1, wy1) - wy0
        if ix0 < ix1 and iy0 < iy1:
            inside[iy0:iy1, ix0:ix1] = True

        pixels = convolve_window(window, half_kernel)
        if inside.any():
            full = convolve_window(window, full_kernel)
            pixels = np.where(inside[:, :, np.newaxis], full, pixels)

        return (wy0, wy1, wx0, wx1), pixels
