"""
Composite Blur Strategy.

Cheaper alternative to the convolution strategy built from whole-image
Pillow operations:

1. Blur the whole image with a Gaussian filter at `radius`.
2. Draw a matte that is opaque everywhere except the active regions and
   soften it with a Gaussian filter at `radius / 2` so the holes get
   feathered edges.
3. Composite the sharp original over the blurred image through the matte.

Inside the active regions the blurred background shows through; outside
them, and everywhere inside inactive regions, the original stays sharp.
"""

import logging
from typing import Iterable

from PIL import Image, ImageDraw, ImageFilter

from PB_Libs.ImageEditingLib.image_editing_ops import clip_area
from PB_Libs.ImageEditingLib.image_models import PixelBuffer
from PB_Libs.RedactionLib.convolution_blur import normalize_radius, smoothing_radius
from PB_Libs.RegionLib.rect_region import Rect

logger = logging.getLogger(__name__)


def _draw_regions(draw: ImageDraw.ImageDraw, image: PixelBuffer, regions: Iterable[Rect], fill: int) -> None:
    for rect in regions:
        area = clip_area(image, rect.left_x, rect.top_y, rect.width, rect.height)
        if area is None:
            continue
        x0, y0, x1, y1 = area
        # ImageDraw rectangles are inclusive of the end coordinate
        draw.rectangle((x0, y0, x1 - 1, y1 - 1), fill=fill)


def build_cutout_matte(image: PixelBuffer, regions: Iterable[Rect], feather_radius: int) -> Image.Image:
    """
    Build an "L" matte: 255 keeps the original, 0 shows the blurred image.

    Active regions are cut out and feathered. Inactive regions are painted
    back to 255 after feathering so none of the blur reaches them.

    Args:
        image: Buffer the matte is sized for
        regions: Regions to cut out; inactive ones are kept sharp
        feather_radius: Gaussian radius used to soften the cutout edges
    """
    regions = list(regions)
    matte = Image.new("L", image.size, 255)
    _draw_regions(ImageDraw.Draw(matte), image, [r for r in regions if r.to_be_blurred], 0)

    if feather_radius > 0:
        matte = matte.filter(ImageFilter.GaussianBlur(radius=feather_radius))

    _draw_regions(ImageDraw.Draw(matte), image, [r for r in regions if not r.to_be_blurred], 255)
    return matte


class CompositeBlurStrategy:
    """Two-render blur composited through a feathered cutout matte."""

    name = "composite"

    def apply(self, image: PixelBuffer, regions: Iterable[Rect], radius) -> PixelBuffer:
        """
        Blur every active region of an image.

        Args:
            image: Source buffer (left unmodified)
            regions: Regions to redact; inactive ones are left untouched
            radius: Gaussian radius; <= 0 disables blurring, > 31 is clamped

        Returns:
            New PixelBuffer with the active regions blurred

        Raises:
            TypeError: If image is not a PixelBuffer
        """
        if not isinstance(image, PixelBuffer):
            raise TypeError(f"Expected PixelBuffer, got {type(image)}")

        regions = list(regions)
        radius = normalize_radius(radius)
        active = [rect for rect in regions if rect.to_be_blurred]
        if radius <= 0 or not active:
            return image.copy()

        original = image.to_image()
        blurred = original.filter(ImageFilter.GaussianBlur(radius=radius))
        matte = build_cutout_matte(image, regions, smoothing_radius(radius))

        result = Image.composite(original, blurred, matte)
        logger.debug(f"Composite blur applied to {len(active)} region(s) at radius {radius}")
        return PixelBuffer.from_image(result)
