"""
Redaction Engine.

Orchestrates one redaction strategy over the regions of one image and lets
the user switch individual regions on and off by clicking on them.

Example:
    >>> engine = RedactionEngine.from_raw_regions(buffer, detector_response)
    >>> redacted = engine.render(radius=12)
    >>> if engine.toggle_region_at((120, 80), (600, 400)):
    ...     redacted = engine.render(radius=12)
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from PB_Libs.ImageEditingLib.image_models import PixelBuffer
from PB_Libs.RedactionLib.strategy_registry import (
    StrategyKind,
    get_default_registry,
    resolve_strategy_kind,
)
from PB_Libs.RegionLib.rect_region import Rect, default_blur_radius, parse_regions
from PB_Libs.constants import FIELD_RADIUS, FIELD_STRATEGY

logger = logging.getLogger(__name__)


@dataclass
class RedactionConfig:
    """Configuration for a redaction pass.

    Attributes:
        strategy: Strategy kind ('convolution', 'composite' or 'fill')
        radius: Blur radius, or None to derive it from the region sizes
    """
    strategy: StrategyKind = StrategyKind.CONVOLUTION
    radius: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            FIELD_STRATEGY: self.strategy.value,
            FIELD_RADIUS: self.radius,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RedactionConfig":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items()
                    if k in cls.__dataclass_fields__}
        if FIELD_STRATEGY in filtered:
            filtered[FIELD_STRATEGY] = resolve_strategy_kind(filtered[FIELD_STRATEGY])
        if filtered.get(FIELD_RADIUS) is not None:
            filtered[FIELD_RADIUS] = int(filtered[FIELD_RADIUS])
        return cls(**filtered)


class RedactionEngine:
    """
    Facade holding the current strategy, the image and its regions.

    Args:
        image: Image to redact; never mutated by render()
        regions: Validated regions (see RegionLib.parse_regions)
        strategy: StrategyKind, its name/value, or a strategy object;
                  defaults to the convolution blur
        radius: Blur radius used when render() gets none; None derives one
                from the active region sizes
    """

    def __init__(
        self,
        image: PixelBuffer,
        regions: Iterable[Rect] = (),
        strategy: Union[StrategyKind, str, Any, None] = None,
        radius: Optional[int] = None,
    ):
        if not isinstance(image, PixelBuffer):
            raise TypeError(f"Expected PixelBuffer, got {type(image)}")

        self.image = image
        self._regions: List[Rect] = list(regions)
        self.radius = radius
        self.strategy = None
        self.set_strategy(strategy if strategy is not None else StrategyKind.CONVOLUTION)

    @classmethod
    def from_raw_regions(
        cls,
        image: PixelBuffer,
        raw_regions: Iterable[Any],
        strategy: Union[StrategyKind, str, Any, None] = None,
    ) -> "RedactionEngine":
        """Build an engine from untrusted detector output, dropping invalid regions."""
        regions = parse_regions(raw_regions, image.width, image.height)
        return cls(image, regions, strategy)

    @classmethod
    def from_config(cls, image: PixelBuffer, regions: Iterable[Rect], config: RedactionConfig) -> "RedactionEngine":
        return cls(image, regions, config.strategy, config.radius)

    def set_strategy(self, strategy: Union[StrategyKind, str, Any]) -> None:
        """
        Switch the active strategy.

        Raises:
            KeyError: If a kind name is unknown
            TypeError: If an object without apply() is passed
        """
        if isinstance(strategy, (StrategyKind, str)):
            strategy = get_default_registry().get_strategy(strategy)
        elif not callable(getattr(strategy, "apply", None)):
            raise TypeError(f"Strategy must provide apply(), got {type(strategy)}")

        self.strategy = strategy
        logger.debug(f"Redaction strategy set to {getattr(strategy, 'name', type(strategy).__name__)}")

    @property
    def regions(self) -> List[Rect]:
        return self._regions

    @property
    def active_regions(self) -> List[Rect]:
        return [rect for rect in self._regions if rect.to_be_blurred]

    def render(self, radius: Optional[int] = None) -> PixelBuffer:
        """
        Redact the image with the current strategy.

        Each call starts again from the original image.

        Args:
            radius: Blur radius; None falls back to the engine radius, then to
                one derived from the active region sizes

        Returns:
            New PixelBuffer the same size as the image
        """
        if radius is None:
            radius = self.radius
        if radius is None:
            radius = default_blur_radius(self.active_regions)
        return self.strategy.apply(self.image, list(self._regions), radius)

    def toggle_region_at(
        self,
        point: Tuple[float, float],
        display_size: Sequence[float],
    ) -> bool:
        """
        Flip the activation of every region under a click.

        Args:
            point: (x, y) click position in display coordinates
            display_size: (width, height) of the displayed image

        Returns:
            True if at least one region was hit

        Raises:
            ValueError: If a display dimension is not positive
        """
        display_width, display_height = display_size
        if display_width <= 0 or display_height <= 0:
            raise ValueError(
                f"Display size must be positive, got {display_width}x{display_height}"
            )

        x = point[0] * self.image.width / display_width
        y = point[1] * self.image.height / display_height

        hit = False
        for rect in self._regions:
            if rect.contains_point(x, y):
                rect.toggle()
                hit = True

        if hit:
            logger.debug(f"Toggled region(s) at image point ({x:.1f}, {y:.1f})")
        return hit
