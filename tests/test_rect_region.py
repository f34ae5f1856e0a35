"""
Unit tests for rect_region module.

Tests region descriptor validation, batch parsing with invalid
descriptors dropped, hit-testing and default radius estimation.
"""

import pytest

from conftest import corners
from PB_Libs.RegionLib.rect_region import (
    Rect,
    RectError,
    RectErrorKind,
    make_rect,
    parse_regions,
    default_blur_radius,
)
from PB_Libs.constants import MAX_BLUR_RADIUS


class TestMakeRect:
    """Tests for make_rect function."""

    def test_normalizes_rectangle(self):
        """Should return min corner and inclusive width/height."""
        result = make_rect(corners(10, 20, 59, 39), 100, 100)

        assert isinstance(result, Rect)
        assert (result.left_x, result.top_y) == (10, 20)
        assert (result.width, result.height) == (50, 20)
        assert result.to_be_blurred is True

    def test_point_order_does_not_matter(self):
        points = [{"x": 5, "y": 9}, {"x": 0, "y": 0}, {"x": 0, "y": 9}, {"x": 5, "y": 0}]

        result = make_rect(points, 10, 10)

        assert result == Rect(left_x=0, top_y=0, width=6, height=10)

    def test_accepts_corner_on_image_edge(self):
        """right_x may equal the image width."""
        result = make_rect(corners(0, 0, 100, 50), 100, 50)

        assert isinstance(result, Rect)
        assert result.width == 101

    @pytest.mark.parametrize("points", [
        corners(0, 0, 5, 5)[:3],
        corners(0, 0, 5, 5) + [{"x": 2, "y": 2}],
        [],
        "abcd",
        None,
    ])
    def test_rejects_wrong_point_count(self, points):
        result = make_rect(points, 10, 10)

        assert isinstance(result, RectError)
        assert result.kind == RectErrorKind.WRONG_POINT_COUNT

    @pytest.mark.parametrize("bad_point", [
        {"x": 5},
        {"y": 5},
        {"x": "5", "y": 5},
        {"x": True, "y": 5},
        (5, 5),
    ])
    def test_rejects_missing_coordinate(self, bad_point):
        points = corners(0, 0, 5, 5)
        points[2] = bad_point

        result = make_rect(points, 10, 10)

        assert result.kind == RectErrorKind.MISSING_COORDINATE

    @pytest.mark.parametrize("value", [0.5, 4.25, float("nan"), float("inf")])
    def test_rejects_non_integral_coordinate(self, value):
        points = corners(0, 0, 5, 5)
        points[0] = {"x": value, "y": 0}

        result = make_rect(points, 10, 10)

        assert result.kind == RectErrorKind.MISSING_COORDINATE

    def test_accepts_integral_float_coordinates(self):
        points = [{"x": float(p["x"]), "y": float(p["y"])} for p in corners(2, 3, 6, 8)]

        result = make_rect(points, 10, 10)

        assert result == Rect(left_x=2, top_y=3, width=5, height=6)
        assert isinstance(result.left_x, int)

    def test_rejects_duplicate_points(self):
        points = [{"x": 0, "y": 0}, {"x": 5, "y": 0}, {"x": 5, "y": 0}, {"x": 0, "y": 5}]

        result = make_rect(points, 10, 10)

        assert result.kind == RectErrorKind.DUPLICATE_POINTS

    def test_rejects_non_axis_aligned_quadrilateral(self):
        points = [{"x": 0, "y": 0}, {"x": 5, "y": 1}, {"x": 5, "y": 5}, {"x": 0, "y": 5}]

        result = make_rect(points, 10, 10)

        assert result.kind == RectErrorKind.NOT_AXIS_ALIGNED

    def test_rejects_points_on_one_vertical_line(self):
        """Four distinct collinear points never reach the bounds checks."""
        points = [{"x": 3, "y": 0}, {"x": 3, "y": 1}, {"x": 3, "y": 2}, {"x": 3, "y": 3}]

        result = make_rect(points, 10, 10)

        # Middle y values are not extremes, so alignment fails first
        assert result.kind == RectErrorKind.NOT_AXIS_ALIGNED

    def test_rejects_zero_height_when_only_extremes_used(self):
        points = [{"x": 0, "y": 4}, {"x": 1, "y": 4}, {"x": 5, "y": 4}, {"x": 6, "y": 4}]

        result = make_rect(points, 10, 10)

        assert result.kind in (RectErrorKind.NOT_AXIS_ALIGNED, RectErrorKind.DEGENERATE_GEOMETRY)

    def test_collinear_points_rejected_before_bounds(self):
        """A zero-width shape is rejected for its geometry, not its size."""
        points = [{"x": 3, "y": 0}, {"x": 3, "y": 500}, {"x": 3, "y": 1}, {"x": 3, "y": 499}]

        result = make_rect(points, 10, 10)

        assert result.kind == RectErrorKind.NOT_AXIS_ALIGNED

    def test_rejects_negative_coordinate(self):
        result = make_rect(corners(-1, 0, 5, 5), 10, 10)

        assert result.kind == RectErrorKind.NEGATIVE_COORDINATE

    def test_rejects_negative_y(self):
        result = make_rect(corners(0, -3, 5, 5), 10, 10)

        assert result.kind == RectErrorKind.NEGATIVE_COORDINATE

    def test_rejects_beyond_width(self):
        result = make_rect(corners(0, 0, 11, 5), 10, 10)

        assert result.kind == RectErrorKind.OUT_OF_BOUNDS

    def test_rejects_beyond_height(self):
        result = make_rect(corners(0, 0, 5, 11), 10, 10)

        assert result.kind == RectErrorKind.OUT_OF_BOUNDS

    def test_error_has_readable_message(self):
        result = make_rect(corners(0, 0, 5, 11), 10, 10)

        assert "OutOfBounds" in str(result)


class TestParseRegions:
    """Tests for parse_regions function."""

    def test_drops_only_invalid_regions(self):
        raw = [
            corners(0, 0, 9, 9),
            corners(-5, 0, 9, 9),
            [{"x": 1}],
            corners(20, 20, 29, 29),
        ]

        rects = parse_regions(raw, 50, 50)

        assert [(r.left_x, r.top_y) for r in rects] == [(0, 0), (20, 20)]

    def test_all_invalid_gives_empty_list(self):
        raw = [corners(-1, -1, 5, 5), "nonsense", corners(0, 0, 100, 100)]

        assert parse_regions(raw, 50, 50) == []

    def test_none_gives_empty_list(self):
        assert parse_regions(None, 50, 50) == []


class TestRect:
    """Tests for Rect helpers."""

    def test_contains_point_is_inclusive(self):
        rect = Rect(left_x=10, top_y=10, width=5, height=5)

        assert rect.contains_point(10, 10)
        assert rect.contains_point(14, 14)
        assert not rect.contains_point(15, 14)
        assert not rect.contains_point(9.9, 12)

    def test_toggle_flips_flag(self):
        rect = Rect(left_x=0, top_y=0, width=2, height=2)

        rect.toggle()
        assert rect.to_be_blurred is False
        rect.toggle()
        assert rect.to_be_blurred is True

    def test_right_and_bottom(self):
        rect = Rect(left_x=3, top_y=4, width=10, height=20)

        assert (rect.right_x, rect.bottom_y) == (12, 23)


class TestDefaultBlurRadius:
    """Tests for default_blur_radius function."""

    def test_sample_area_gives_sample_radius(self):
        assert default_blur_radius([Rect(0, 0, 100, 100)]) == 12

    def test_rounds_up(self):
        # 50x50 -> 2500 / 10000 * 12 = 3
        assert default_blur_radius([Rect(0, 0, 50, 50)]) == 3
        # 51x50 -> 3.06 -> 4
        assert default_blur_radius([Rect(0, 0, 51, 50)]) == 4

    def test_uses_average_area(self):
        rects = [Rect(0, 0, 100, 100), Rect(0, 0, 100, 300)]

        assert default_blur_radius(rects) == 24

    def test_clamped_to_maximum(self):
        assert default_blur_radius([Rect(0, 0, 1000, 1000)]) == MAX_BLUR_RADIUS

    def test_empty_gives_minimum(self):
        assert default_blur_radius([]) == 1
