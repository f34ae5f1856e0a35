"""
Core image editing operations for Photo Blur.

This module provides the low-level pixel helpers shared by the redaction
strategies and the photo cache.

Functions:
    extract_dominant_color: Quantize an image and return its most common color
    fill_area: Overwrite a rectangular area of a buffer with one color
    copy_area: Copy a rectangular area from one buffer into another
    clip_area: Intersect a rectangular area with the buffer bounds
    buffer_to_data_url: Serialize a buffer as a base64 PNG data URL
"""

import base64
import io
from typing import Optional, Tuple

from PIL import Image

from PB_Libs.ImageEditingLib.image_models import PixelBuffer, RgbaColor
from PB_Libs.constants import (
    DEFAULT_OUTPUT_FORMAT,
    DOMINANT_COLOR_PALETTE_SIZE,
    DOMINANT_COLOR_SAMPLE_SIZE,
)

# (left, top, right_exclusive, bottom_exclusive)
Area = Tuple[int, int, int, int]


def extract_dominant_color(
    buffer: PixelBuffer,
    palette_size: int = DOMINANT_COLOR_PALETTE_SIZE,
) -> RgbaColor:
    """
    Extract the dominant color of an image.

    The image is downsampled, quantized to a small palette with median cut,
    and the palette entry covering the most pixels wins. Alpha is ignored
    and the returned color is always opaque.

    Args:
        buffer: Source PixelBuffer
        palette_size: Number of palette colors to quantize to (>= 1)

    Returns:
        RGBA tuple of the dominant color

    Raises:
        ValueError: If palette_size < 1
        TypeError: If buffer is not a PixelBuffer
    """
    if not isinstance(buffer, PixelBuffer):
        raise TypeError(f"Expected PixelBuffer, got {type(buffer)}")

    if palette_size < 1:
        raise ValueError(f"palette_size must be >= 1, got {palette_size}")

    sample = buffer.to_image().convert("RGB")
    sample.thumbnail(DOMINANT_COLOR_SAMPLE_SIZE)

    quantized = sample.quantize(colors=palette_size, method=Image.Quantize.MEDIANCUT)
    palette = quantized.getpalette()
    counts = quantized.getcolors()

    # Most pixels first, lowest palette index on ties
    _, index = max(counts, key=lambda item: (item[0], -item[1]))
    red, green, blue = palette[index * 3:index * 3 + 3]
    return (red, green, blue, 255)


def clip_area(buffer: PixelBuffer, left: int, top: int, width: int, height: int) -> Optional[Area]:
    """
    Clip a rectangle to the buffer.

    Returns:
        (left, top, right, bottom) with exclusive right/bottom, or None
        if the rectangle does not overlap the buffer at all
    """
    x0 = max(0, left)
    y0 = max(0, top)
    x1 = min(buffer.width, left + width)
    y1 = min(buffer.height, top + height)

    if x0 >= x1 or y0 >= y1:
        return None
    return x0, y0, x1, y1


def fill_area(
    buffer: PixelBuffer,
    left: int,
    top: int,
    width: int,
    height: int,
    color: RgbaColor,
) -> bool:
    """
    Fill a rectangle of the buffer in place with a flat color.

    Returns:
        True if any pixel was written
    """
    area = clip_area(buffer, left, top, width, height)
    if area is None:
        return False

    x0, y0, x1, y1 = area
    buffer.array[y0:y1, x0:x1] = color
    return True


def copy_area(
    target: PixelBuffer,
    source: PixelBuffer,
    left: int,
    top: int,
    width: int,
    height: int,
) -> bool:
    """
    Copy a rectangle from source into target in place.

    Both buffers must have the same size.

    Returns:
        True if any pixel was written
    """
    if target.size != source.size:
        raise ValueError(f"Buffer sizes differ: {target.size} vs {source.size}")

    area = clip_area(target, left, top, width, height)
    if area is None:
        return False

    x0, y0, x1, y1 = area
    target.array[y0:y1, x0:x1] = source.array[y0:y1, x0:x1]
    return True


def buffer_to_data_url(buffer: PixelBuffer, image_format: str = DEFAULT_OUTPUT_FORMAT) -> str:
    """Encode a buffer into a `data:image/...;base64,` URL."""
    stream = io.BytesIO()
    buffer.to_image().save(stream, format=image_format)
    encoded = base64.b64encode(stream.getvalue()).decode("ascii")
    return f"data:image/{image_format.lower()};base64,{encoded}"
