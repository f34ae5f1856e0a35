"""
Region validation and normalization.

Region descriptors arrive from an untrusted detection service as lists of
four corner points ({"x": int, "y": int}). make_rect() turns one descriptor
into an axis-aligned Rect, or explains why it cannot by returning a
RectError. Malformed input is expected here, so nothing in this module
raises for bad descriptors.

Example:
    >>> result = make_rect(
    ...     [{"x": 0, "y": 0}, {"x": 9, "y": 0}, {"x": 9, "y": 4}, {"x": 0, "y": 4}],
    ...     image_width=100,
    ...     image_height=100,
    ... )
    >>> (result.left_x, result.top_y, result.width, result.height)
    (0, 0, 10, 5)
"""

import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from numbers import Integral, Real
from typing import Any, Dict, Iterable, List, Union

from PB_Libs.constants import (
    FIELD_POINT_X,
    FIELD_POINT_Y,
    MAX_BLUR_RADIUS,
    MIN_BLUR_RADIUS,
    RECT_POINT_COUNT,
    SAMPLE_AREA_SIZE,
    SAMPLE_BEST_BLUR_RADIUS,
)

logger = logging.getLogger(__name__)


class RectErrorKind(Enum):
    WRONG_POINT_COUNT = "WrongPointCount"
    MISSING_COORDINATE = "MissingCoordinate"
    DUPLICATE_POINTS = "DuplicatePoints"
    NOT_AXIS_ALIGNED = "NotAxisAligned"
    DEGENERATE_GEOMETRY = "DegenerateGeometry"
    NEGATIVE_COORDINATE = "NegativeCoordinate"
    OUT_OF_BOUNDS = "OutOfBounds"


@dataclass(frozen=True)
class RectError:
    """Why a region descriptor was rejected."""
    kind: RectErrorKind
    message: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


@dataclass
class Rect:
    """
    Axis-aligned rectangle to redact.

    Attributes:
        left_x: Minimum x of the original corner points
        top_y: Minimum y of the original corner points
        width: right_x - left_x + 1
        height: bottom_y - top_y + 1
        to_be_blurred: Activation flag, flipped by hit-testing
    """
    left_x: int
    top_y: int
    width: int
    height: int
    to_be_blurred: bool = True

    @property
    def right_x(self) -> int:
        return self.left_x + self.width - 1

    @property
    def bottom_y(self) -> int:
        return self.top_y + self.height - 1

    @property
    def area(self) -> int:
        return self.width * self.height

    def contains_point(self, x: float, y: float) -> bool:
        """Inclusive bounding-box test."""
        return self.left_x <= x <= self.right_x and self.top_y <= y <= self.bottom_y

    def toggle(self) -> None:
        self.to_be_blurred = not self.to_be_blurred

    def to_dict(self) -> Dict[str, Any]:
        return {
            "left_x": self.left_x,
            "top_y": self.top_y,
            "width": self.width,
            "height": self.height,
            "to_be_blurred": self.to_be_blurred,
        }


RectResult = Union[Rect, RectError]


def _coordinate(point: Any, field: str):
    if not isinstance(point, Mapping) or field not in point:
        return None
    value = point[field]
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    if isinstance(value, Integral):
        return int(value)
    # Points are whole pixels
    if not float(value).is_integer():
        return None
    return int(value)


def make_rect(points: Any, image_width: int, image_height: int) -> RectResult:
    """
    Validate four corner points and normalize them into a Rect.

    Checks run in a fixed order and the first failure is returned:
    point count, missing coordinates, duplicates, axis alignment,
    degenerate geometry, negative coordinates, image bounds.

    Args:
        points: Sequence of 4 mappings with "x" and "y" keys
        image_width: Width of the original (not display-scaled) image
        image_height: Height of the original image

    Returns:
        Rect on success, RectError describing the first failed check otherwise
    """
    if isinstance(points, (str, bytes)) or not isinstance(points, Sequence):
        return RectError(
            RectErrorKind.WRONG_POINT_COUNT,
            f"Expected a sequence of points, got {type(points).__name__}",
        )

    if len(points) != RECT_POINT_COUNT:
        return RectError(
            RectErrorKind.WRONG_POINT_COUNT,
            f"Rectangle must contain exactly {RECT_POINT_COUNT} corner points, got {len(points)}",
        )

    coords = []
    for point in points:
        x = _coordinate(point, FIELD_POINT_X)
        y = _coordinate(point, FIELD_POINT_Y)
        if x is None or y is None:
            return RectError(
                RectErrorKind.MISSING_COORDINATE,
                f"Point {point!r} does not have integer 'x' and 'y' properties",
            )
        coords.append((x, y))

    for i in range(len(coords)):
        for j in range(i):
            if coords[i] == coords[j]:
                return RectError(
                    RectErrorKind.DUPLICATE_POINTS,
                    f"Duplicate points: point {i} = point {j} = {coords[i]}",
                )

    xs = [x for x, _ in coords]
    ys = [y for _, y in coords]
    left_x, right_x = min(xs), max(xs)
    top_y, bottom_y = min(ys), max(ys)

    # 4 distinct points with x in {left, right} and y in {top, bottom}
    # can only be the 4 corners of an axis-aligned rectangle.
    for x, y in coords:
        if x not in (left_x, right_x) or y not in (top_y, bottom_y):
            return RectError(
                RectErrorKind.NOT_AXIS_ALIGNED,
                f"Point ({x}, {y}) is not a corner of the bounding box "
                f"x=[{left_x}, {right_x}], y=[{top_y}, {bottom_y}]",
            )

    if left_x == right_x or top_y == bottom_y:
        return RectError(
            RectErrorKind.DEGENERATE_GEOMETRY,
            f"Rectangle has zero width or height: x=[{left_x}, {right_x}], y=[{top_y}, {bottom_y}]",
        )

    if left_x < 0 or top_y < 0:
        return RectError(
            RectErrorKind.NEGATIVE_COORDINATE,
            f"Rectangle has negative coordinates: left_x={left_x}, top_y={top_y}",
        )

    if right_x > image_width or bottom_y > image_height:
        return RectError(
            RectErrorKind.OUT_OF_BOUNDS,
            f"Rectangle corner ({right_x}, {bottom_y}) lies outside "
            f"{image_width}x{image_height} image",
        )

    return Rect(
        left_x=int(left_x),
        top_y=int(top_y),
        width=int(right_x - left_x + 1),
        height=int(bottom_y - top_y + 1),
    )


def parse_regions(raw_regions: Iterable[Any], image_width: int, image_height: int) -> List[Rect]:
    """
    Validate a batch of untrusted region descriptors.

    Invalid descriptors are dropped one by one; the remaining ones are kept
    in input order. A batch where everything fails yields an empty list.
    """
    if raw_regions is None:
        return []

    rects: List[Rect] = []
    for index, raw in enumerate(raw_regions):
        result = make_rect(raw, image_width, image_height)
        if isinstance(result, RectError):
            logger.debug(f"Dropping region {index}: {result}")
            continue
        rects.append(result)

    logger.debug(f"Accepted {len(rects)} region(s) for {image_width}x{image_height} image")
    return rects


def default_blur_radius(rects: Iterable[Rect]) -> int:
    """
    Estimate a blur radius from the average region area.

    A 100x100 region looks best at radius 12; the radius scales linearly
    with area and is clamped to [MIN_BLUR_RADIUS, MAX_BLUR_RADIUS].
    """
    areas = [rect.area for rect in rects]
    if not areas:
        return MIN_BLUR_RADIUS

    average_area = sum(areas) / len(areas)
    radius = math.ceil(average_area / SAMPLE_AREA_SIZE * SAMPLE_BEST_BLUR_RADIUS)
    return max(MIN_BLUR_RADIUS, min(MAX_BLUR_RADIUS, radius))
