"""
Fill Strategy.

Redacts regions by painting them with the dominant color of the whole
image. One color-extraction pass, then one flat fill per active region.
"""

import logging
from typing import Iterable, Optional

from PB_Libs.ImageEditingLib.image_editing_ops import copy_area, extract_dominant_color, fill_area
from PB_Libs.ImageEditingLib.image_models import PixelBuffer, RgbaColor
from PB_Libs.RegionLib.rect_region import Rect

logger = logging.getLogger(__name__)


class FillStrategy:
    """
    Flat-fill redaction.

    Args:
        color: Fixed fill color; when None the dominant image color is used
    """

    name = "fill"

    def __init__(self, color: Optional[RgbaColor] = None):
        self.color = color

    def apply(self, image: PixelBuffer, regions: Iterable[Rect], radius=None) -> PixelBuffer:
        """Fill every active region; `radius` is accepted and ignored."""
        if not isinstance(image, PixelBuffer):
            raise TypeError(f"Expected PixelBuffer, got {type(image)}")

        regions = list(regions)
        result = image.copy()
        active = [rect for rect in regions if rect.to_be_blurred]
        if not active:
            return result

        color = self.color if self.color is not None else extract_dominant_color(image)
        for rect in active:
            fill_area(result, rect.left_x, rect.top_y, rect.width, rect.height, color)

        # Inactive regions overlapping a filled one keep their original pixels
        for rect in regions:
            if not rect.to_be_blurred:
                copy_area(result, image, rect.left_x, rect.top_y, rect.width, rect.height)

        logger.debug(f"Filled {len(active)} region(s) with {color}")
        return result
