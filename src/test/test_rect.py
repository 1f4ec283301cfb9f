"""
Test Rect geometry, splitting and anchoring.
"""

import pytest
import numpy as np
from pathlib import Path

# Add src to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from geomkit.errors import InvalidShapeError
from geomkit.geometry import (
    Align,
    Div,
    GROW,
    Point,
    Rect,
    RectLocation,
    RectPosition,
    Size,
    Vector,
)


def trbl(top, right, bottom, left):
    return Rect.from_top_right_bottom_left(top, right, bottom, left)


class TestRectBasics:
    """Test construction and measurements."""

    def test_constructor_argument_order(self):
        r = trbl(1, 2, 3, 4)
        assert (r.top, r.right, r.bottom, r.left) == (1, 2, 3, 4)

    def test_from_top_left(self):
        r = Rect.from_top_left(Point(1.0, 2.0), Size(10.0, 5.0))
        assert r == trbl(2.0, 11.0, 7.0, 1.0)
        assert r.size() == Size(10.0, 5.0)
        assert r.area() == 50.0

    def test_from_center(self):
        r = Rect.from_center(Point(5.0, 5.0), Size(4.0, 2.0))
        assert r == trbl(4.0, 7.0, 6.0, 3.0)
        assert r.center() == Point(5.0, 5.0)

    def test_from_points_normalises(self):
        assert Rect.from_points(Point(10, 0), Point(0, 10)) == trbl(0, 10, 10, 0)

    def test_from_points_iter(self):
        r = Rect.from_points_iter([Point(1, 5), Point(-2, 3), Point(4, -1)])
        assert r == trbl(-1, 4, 5, -2)

    def test_from_points_iter_empty(self):
        with pytest.raises(InvalidShapeError):
            Rect.from_points_iter([])

    def test_anchor_points(self):
        r = trbl(0, 10, 20, 0)
        assert r.top_left() == Point(0, 0)
        assert r.top_center() == Point(5, 0)
        assert r.center_right() == Point(10, 10)
        assert r.bottom_left() == Point(0, 20)
        assert r.bottom_right() == Point(10, 20)
        assert r.corners() == (Point(0, 0), Point(10, 0), Point(10, 20), Point(0, 20))

    @pytest.mark.parametrize("rect,expected", [
        (trbl(0, 10, 10, 0), True),
        (trbl(0, 0, 10, 0), False),
        (trbl(0, 10, 0, 0), False),
        (trbl(10, 10, 0, 0), False),
        (trbl(0, -1, 10, 0), False),
    ])
    def test_has_area(self, rect, expected):
        assert rect.has_area() == expected

    def test_contains_is_half_open(self):
        r = trbl(0, 10, 10, 0)
        assert r.contains(Point(0, 0))
        assert r.contains(Point(9.99, 9.99))
        assert not r.contains(Point(10, 5))
        assert not r.contains(Point(5, 10))
        assert not r.contains(Point(-0.1, 5))

    def test_translate_pad_inset_scale(self):
        r = trbl(0, 10, 10, 0)
        assert r.translate(Vector(1, 2)) == trbl(2, 11, 12, 1)
        assert r.pad(1) == trbl(-1, 11, 11, -1)
        assert r.inset(1) == trbl(1, 9, 9, 1)
        assert r.scale(2, 3) == trbl(0, 20, 30, 0)

    def test_union(self):
        assert trbl(0, 10, 10, 0).union(trbl(5, 15, 15, 5)) == trbl(0, 15, 15, 0)


class TestIntersection:
    """Test overlap of rects."""

    def test_overlapping(self):
        a = trbl(0, 10, 10, 0)
        b = trbl(5, 15, 15, 5)
        assert a.intersection(b) == trbl(5, 10, 10, 5)
        assert a.intersects(b)

    def test_symmetric(self):
        a = trbl(0, 10, 10, 0)
        b = trbl(5, 15, 15, 5)
        assert a.intersection(b) == b.intersection(a)

    def test_inverted_edges_have_no_overlap(self):
        # bottom < top in a y-down system: no area at all
        a = trbl(10, 10, 0, 0)
        b = trbl(15, 15, 5, 5)
        assert not a.has_area()
        assert a.intersection(b) == Rect.zero()

    def test_disjoint_returns_empty(self):
        a = trbl(0, 10, 10, 0)
        b = trbl(20, 30, 30, 20)
        assert a.intersection(b) == Rect.zero()
        assert not a.intersects(b)
        assert not a.intersection(b).has_area()

    def test_touching_edges_do_not_intersect(self):
        a = trbl(0, 10, 10, 0)
        b = trbl(0, 20, 10, 10)
        assert not a.intersects(b)

    def test_contained(self):
        outer = trbl(0, 10, 10, 0)
        inner = trbl(2, 8, 8, 2)
        assert outer.intersection(inner) == inner


class TestSplitting:
    """Test ratio and div based splits."""

    def test_split_width_half(self):
        r = trbl(0, 10, 4, 0)
        left, right = r.split_at_ratio_width(0.5)
        assert left == trbl(0, 5, 4, 0)
        assert right == trbl(0, 10, 4, 5)
        assert left.width() == 5
        assert right.width() == 5
        assert left.right == right.left
        assert left.area() + right.area() == r.area()

    def test_split_height(self):
        top, bottom = trbl(0, 4, 10, 0).split_at_ratio_height(0.3)
        assert top.bottom == pytest.approx(3.0)
        assert bottom.top == top.bottom
        assert top.area() + bottom.area() == pytest.approx(40.0)

    @pytest.mark.parametrize("ratio", [-0.1, 1.5])
    def test_split_ratio_out_of_range(self, ratio):
        with pytest.raises(InvalidShapeError):
            trbl(0, 10, 10, 0).split_at_ratio_width(ratio)

    def test_split_row_mixed_divs(self):
        parts = trbl(0, 10, 4, 0).split_row([Div.px(2), GROW, Div.ratio(0.5)])
        assert [(p.left, p.right) for p in parts] == [(0, 2), (2, 5), (5, 10)]
        assert all(p.top == 0 and p.bottom == 4 for p in parts)

    def test_split_row_grow_weights(self):
        parts = trbl(0, 12, 1, 0).split_row([Div.grow(1), Div.grow(2)])
        assert [p.width() for p in parts] == [4, 8]

    def test_split_row_no_leftover(self):
        parts = trbl(0, 10, 1, 0).split_row([Div.px(8), Div.px(4), GROW])
        assert parts[2].width() == 0

    @pytest.mark.parametrize("align,lefts", [
        (Align.START, [0, 2]),
        (Align.CENTER, [3, 5]),
        (Align.END, [6, 8]),
    ])
    def test_split_row_align(self, align, lefts):
        parts = trbl(0, 10, 1, 0).split_row([Div.px(2), Div.px(2)], align)
        assert [p.left for p in parts] == lefts

    def test_split_column(self):
        parts = trbl(0, 3, 10, 0).split_column([Div.px(4), GROW])
        assert [(p.top, p.bottom) for p in parts] == [(0, 4), (4, 10)]


class TestRectLocation:
    """Test anchors and positioned rects."""

    def test_negation_mirrors(self):
        assert -RectLocation.TOP_LEFT == RectLocation.BOTTOM_RIGHT
        assert -RectLocation.CENTER_LEFT == RectLocation.CENTER_RIGHT
        assert -RectLocation.CENTER == RectLocation.CENTER

    def test_point_from_rect(self):
        r = trbl(0, 10, 20, 0)
        assert RectLocation.BOTTOM_CENTER.point_from_rect(r) == Point(5, 20)

    def test_from_position(self):
        position = RectPosition(RectLocation.CENTER, Point(5.0, 5.0))
        assert Rect.from_position(position, Size(4.0, 2.0)) == trbl(4.0, 7.0, 6.0, 3.0)

    def test_from_position_bottom_right(self):
        position = RectPosition(RectLocation.BOTTOM_RIGHT, Point(10, 10))
        assert Rect.from_position(position, Size(4, 2)) == trbl(8, 10, 10, 6)

    def test_position_round_trip(self):
        r = trbl(2, 9, 7, 1)
        position = RectPosition.from_rect(RectLocation.TOP_RIGHT, r)
        assert Rect.from_position(position, r.size()) == r

    def test_negative_extent_rejected(self):
        position = RectPosition(RectLocation.TOP_LEFT, Point(0, 0))
        with pytest.raises(InvalidShapeError):
            position.left_with_width(-1)


class TestRectCasting:

    def test_cast_truncates(self):
        r = trbl(0.9, 10.7, 10.2, -0.5).to_i32()
        assert r == trbl(0, 10, 10, 0)
        assert isinstance(r.left, np.int32)

    def test_round(self):
        assert trbl(0.5, 10.7, 10.2, -0.5).round() == trbl(1.0, 11.0, 10.0, -1.0)

    def test_approx_eq(self):
        assert trbl(0.1 + 0.2, 1, 1, 0).approx_eq(trbl(0.3, 1, 1, 0))
