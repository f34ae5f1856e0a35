"""
RegionLib - Region validation

Turns untrusted four-point region descriptors into axis-aligned
rectangles with an activation flag.
"""

from PB_Libs.RegionLib.rect_region import (
    Rect,
    RectError,
    RectErrorKind,
    RectResult,
    make_rect,
    parse_regions,
    default_blur_radius,
)

__all__ = [
    "Rect",
    "RectError",
    "RectErrorKind",
    "RectResult",
    "make_rect",
    "parse_regions",
    "default_blur_radius",
]
