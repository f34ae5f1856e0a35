"""
ImageEditingLib - Core pixel buffer functionality

This module provides the pixel buffer abstraction, the color accumulator
and the low-level pixel operations used by every redaction strategy.
"""

from PB_Libs.ImageEditingLib.image_models import Color, PixelBuffer, RgbaColor
from PB_Libs.ImageEditingLib.image_editing_ops import (
    extract_dominant_color,
    clip_area,
    fill_area,
    copy_area,
    buffer_to_data_url,
)

__all__ = [
    "Color",
    "PixelBuffer",
    "RgbaColor",
    "extract_dominant_color",
    "clip_area",
    "fill_area",
    "copy_area",
    "buffer_to_data_url",
]
