"""
Axis-aligned rectangles in a top-left origin, y-down coordinate system.

A Rect is stored as its four edges. Edges are kept exactly as given, so a
rect may be inverted (right < left or bottom < top); such rects have no area.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from ..errors import InvalidShapeError
from .primitives import Point, Size, Vector
from .scalar import CastMixin, Scalar, approx_eq, EPSILON


@dataclass(frozen=True)
class Rect(CastMixin):
    """Rectangle defined by its edges (argument order: top, right, bottom, left)."""
    top: Scalar
    right: Scalar
    bottom: Scalar
    left: Scalar

    @classmethod
    def from_top_right_bottom_left(cls, top: Scalar, right: Scalar,
                                   bottom: Scalar, left: Scalar) -> Rect:
        return cls(top, right, bottom, left)

    @classmethod
    def from_top_left(cls, top_left: Point, size: Size) -> Rect:
        return cls(
            top_left.y,
            top_left.x + size.width,
            top_left.y + size.height,
            top_left.x,
        )

    @classmethod
    def from_center(cls, center: Point, size: Size) -> Rect:
        half_w = size.width / 2
        half_h = size.height / 2
        return cls(center.y - half_h, center.x + half_w, center.y + half_h, center.x - half_w)

    @classmethod
    def from_points(cls, a: Point, b: Point) -> Rect:
        """Rect spanned by two opposite corners, in any order."""
        return cls(min(a.y, b.y), max(a.x, b.x), max(a.y, b.y), min(a.x, b.x))

    @classmethod
    def from_points_iter(cls, points: Iterable[Point]) -> Rect:
        """Bounding box of a non-empty collection of points."""
        points = list(points)
        if not points:
            raise InvalidShapeError("Cannot bound an empty set of points")
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return cls(min(ys), max(xs), max(ys), min(xs))

    @classmethod
    def from_position(cls, position: RectPosition, size: Size) -> Rect:
        """Rect of ``size`` whose anchor ``position.location`` sits on ``position.point``."""
        return cls(
            position.top_with_height(size.height),
            position.right_with_width(size.width),
            position.bottom_with_height(size.height),
            position.left_with_width(size.width),
        )

    @classmethod
    def zero(cls) -> Rect:
        return cls(0, 0, 0, 0)

    def map(self, f: Callable[[Scalar], Scalar]) -> Rect:
        return Rect(f(self.top), f(self.right), f(self.bottom), f(self.left))

    def width(self) -> Scalar:
        return self.right - self.left

    def height(self) -> Scalar:
        return self.bottom - self.top

    def size(self) -> Size:
        """Raises InvalidShapeError for inverted rects."""
        return Size(self.width(), self.height())

    def area(self) -> Scalar:
        return self.width() * self.height()

    def has_area(self) -> bool:
        return self.right > self.left and self.bottom > self.top

    def center_x(self) -> Scalar:
        return (self.left + self.right) / 2

    def center_y(self) -> Scalar:
        return (self.top + self.bottom) / 2

    def top_left(self) -> Point:
        return Point(self.left, self.top)

    def top_center(self) -> Point:
        return Point(self.center_x(), self.top)

    def top_right(self) -> Point:
        return Point(self.right, self.top)

    def center_left(self) -> Point:
        return Point(self.left, self.center_y())

    def center(self) -> Point:
        return Point(self.center_x(), self.center_y())

    def center_right(self) -> Point:
        return Point(self.right, self.center_y())

    def bottom_left(self) -> Point:
        return Point(self.left, self.bottom)

    def bottom_center(self) -> Point:
        return Point(self.center_x(), self.bottom)

    def bottom_right(self) -> Point:
        return Point(self.right, self.bottom)

    def corners(self) -> Tuple[Point, Point, Point, Point]:
        """Clockwise on screen, starting top-left."""
        return (self.top_left(), self.top_right(), self.bottom_right(), self.bottom_left())

    def contains(self, point: Point) -> bool:
        """Half-open test: left/top edges inside, right/bottom edges outside."""
        return self.left <= point.x < self.right and self.top <= point.y < self.bottom

    def intersection(self, other: Rect) -> Rect:
        """
        Overlap of two rects.

        Returns:
            The overlapping rect, or ``Rect.zero()`` when the overlap has no
            area (disjoint or only touching).
        """
        result = Rect(
            max(self.top, other.top),
            min(self.right, other.right),
            min(self.bottom, other.bottom),
            max(self.left, other.left),
        )
        if not result.has_area():
            return Rect.zero()
        return result

    def intersects(self, other: Rect) -> bool:
        return self.intersection(other).has_area()

    def union(self, other: Rect) -> Rect:
        """Smallest rect covering both."""
        return Rect(
            min(self.top, other.top),
            max(self.right, other.right),
            max(self.bottom, other.bottom),
            min(self.left, other.left),
        )

    def translate(self, offset: Vector) -> Rect:
        return Rect(
            self.top + offset.dy,
            self.right + offset.dx,
            self.bottom + offset.dy,
            self.left + offset.dx,
        )

    def pad(self, amount: Scalar) -> Rect:
        """Move every edge outward by ``amount``."""
        return Rect(self.top - amount, self.right + amount, self.bottom + amount, self.left - amount)

    def inset(self, amount: Scalar) -> Rect:
        return self.pad(-amount)

    def scale(self, x: Scalar, y: Scalar) -> Rect:
        """Scale every edge about the origin."""
        return Rect(self.top * y, self.right * x, self.bottom * y, self.left * x)

    def split_at_ratio_width(self, ratio: Scalar) -> Tuple[Rect, Rect]:
        """
        Split into a left and a right part.

        Args:
            ratio: Fraction of the width given to the left part, in [0, 1]

        Returns:
            (left part, right part); both share the split edge.
        """
        _check_ratio(ratio)
        split_x = self.left + self.width() * ratio
        return (
            Rect(self.top, split_x, self.bottom, self.left),
            Rect(self.top, self.right, self.bottom, split_x),
        )

    def split_at_ratio_height(self, ratio: Scalar) -> Tuple[Rect, Rect]:
        """
        Split into a top and a bottom part.

        Args:
            ratio: Fraction of the height given to the top part, in [0, 1]

        Returns:
            (top part, bottom part); both share the split edge.
        """
        _check_ratio(ratio)
        split_y = self.top + self.height() * ratio
        return (
            Rect(self.top, self.right, split_y, self.left),
            Rect(split_y, self.right, self.bottom, self.left),
        )

    def split_row(self, divs: Sequence[Div], align: Optional[Align] = None) -> List[Rect]:
        """Split horizontally into consecutive columns sized by ``divs``."""
        align = align or Align.START
        widths = _map_to_px(divs, self.width())
        running_left = self.left + align.offset(self.width(), sum(widths))
        rects = []
        for width in widths:
            right = running_left + width
            rects.append(Rect(self.top, right, self.bottom, running_left))
            running_left = right
        return rects

    def split_column(self, divs: Sequence[Div], align: Optional[Align] = None) -> List[Rect]:
        """Split vertically into consecutive rows sized by ``divs``."""
        align = align or Align.START
        heights = _map_to_px(divs, self.height())
        running_top = self.top + align.offset(self.height(), sum(heights))
        rects = []
        for height in heights:
            bottom = running_top + height
            rects.append(Rect(running_top, self.right, bottom, self.left))
            running_top = bottom
        return rects

    def approx_eq(self, other: Rect, epsilon: float = EPSILON) -> bool:
        return all(
            approx_eq(a, b, epsilon)
            for a, b in zip((self.top, self.right, self.bottom, self.left),
                            (other.top, other.right, other.bottom, other.left))
        )


def _check_ratio(ratio: Scalar) -> None:
    if not 0 <= ratio <= 1:
        raise InvalidShapeError(f"Split ratio must be in [0, 1], got {ratio}")


class DivKind(str, Enum):
    PX = "px"
    RATIO = "ratio"
    GROW = "grow"


@dataclass(frozen=True)
class Div:
    """
    One division of a rect split.

    ``px`` takes a fixed length, ``ratio`` a fraction of the total, and
    ``grow`` a weighted share of whatever space the others leave over.
    """
    kind: DivKind
    value: float

    @classmethod
    def px(cls, value: float) -> Div:
        return cls(DivKind.PX, value)

    @classmethod
    def ratio(cls, value: float) -> Div:
        return cls(DivKind.RATIO, value)

    @classmethod
    def grow(cls, weight: float = 1.0) -> Div:
        return cls(DivKind.GROW, weight)

    def fixed_px(self, total_px: float) -> float:
        if self.kind is DivKind.PX:
            return self.value
        if self.kind is DivKind.RATIO:
            return total_px * self.value
        return 0.0

    def grow_weight(self) -> float:
        return self.value if self.kind is DivKind.GROW else 0.0

    def final_px(self, total_px: float, leftover: float, flex_total: float) -> float:
        if self.kind is not DivKind.GROW:
            return self.fixed_px(total_px)
        if leftover > 0 and flex_total > 0:
            return leftover * self.value / flex_total
        return 0.0


GROW = Div.grow(1.0)


class Align(str, Enum):
    START = "start"
    CENTER = "center"
    END = "end"

    def offset(self, available: float, used: float) -> float:
        if self is Align.START:
            return 0
        if self is Align.CENTER:
            return (available - used) / 2
        return available - used


def _map_to_px(divs: Sequence[Div], total_px: float) -> List[float]:
    leftover = total_px - sum(div.fixed_px(total_px) for div in divs)
    flex_total = sum(div.grow_weight() for div in divs)
    return [div.final_px(total_px, leftover, flex_total) for div in divs]


class HorizontalLocation(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"

    def __neg__(self) -> HorizontalLocation:
        return _MIRROR_H[self]


class VerticalLocation(Enum):
    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"

    def __neg__(self) -> VerticalLocation:
        return _MIRROR_V[self]


_MIRROR_H = {
    HorizontalLocation.LEFT: HorizontalLocation.RIGHT,
    HorizontalLocation.CENTER: HorizontalLocation.CENTER,
    HorizontalLocation.RIGHT: HorizontalLocation.LEFT,
}
_MIRROR_V = {
    VerticalLocation.TOP: VerticalLocation.BOTTOM,
    VerticalLocation.CENTER: VerticalLocation.CENTER,
    VerticalLocation.BOTTOM: VerticalLocation.TOP,
}


@dataclass(frozen=True)
class RectLocation:
    """One of the nine anchor locations of a rect."""
    horizontal: HorizontalLocation
    vertical: VerticalLocation

    def __neg__(self) -> RectLocation:
        """The diametrically opposite anchor."""
        return RectLocation(-self.horizontal, -self.vertical)

    def point_from_rect(self, rect: Rect) -> Point:
        x = {
            HorizontalLocation.LEFT: rect.left,
            HorizontalLocation.CENTER: rect.center_x(),
            HorizontalLocation.RIGHT: rect.right,
        }[self.horizontal]
        y = {
            VerticalLocation.TOP: rect.top,
            VerticalLocation.CENTER: rect.center_y(),
            VerticalLocation.BOTTOM: rect.bottom,
        }[self.vertical]
        return Point(x, y)


RectLocation.TOP_LEFT = RectLocation(HorizontalLocation.LEFT, VerticalLocation.TOP)
RectLocation.TOP_CENTER = RectLocation(HorizontalLocation.CENTER, VerticalLocation.TOP)
RectLocation.TOP_RIGHT = RectLocation(HorizontalLocation.RIGHT, VerticalLocation.TOP)
RectLocation.CENTER_LEFT = RectLocation(HorizontalLocation.LEFT, VerticalLocation.CENTER)
RectLocation.CENTER = RectLocation(HorizontalLocation.CENTER, VerticalLocation.CENTER)
RectLocation.CENTER_RIGHT = RectLocation(HorizontalLocation.RIGHT, VerticalLocation.CENTER)
RectLocation.BOTTOM_LEFT = RectLocation(HorizontalLocation.LEFT, VerticalLocation.BOTTOM)
RectLocation.BOTTOM_CENTER = RectLocation(HorizontalLocation.CENTER, VerticalLocation.BOTTOM)
RectLocation.BOTTOM_RIGHT = RectLocation(HorizontalLocation.RIGHT, VerticalLocation.BOTTOM)


@dataclass(frozen=True)
class RectPosition:
    """A point together with the rect anchor it marks."""
    location: RectLocation
    point: Point

    @classmethod
    def from_rect(cls, location: RectLocation, rect: Rect) -> RectPosition:
        return cls(location, location.point_from_rect(rect))

    def left_with_width(self, width: Scalar) -> Scalar:
        _check_extent("width", width)
        return {
            HorizontalLocation.LEFT: self.point.x,
            HorizontalLocation.CENTER: self.point.x - width / 2,
            HorizontalLocation.RIGHT: self.point.x - width,
        }[self.location.horizontal]

    def center_x_with_width(self, width: Scalar) -> Scalar:
        _check_extent("width", width)
        return {
            HorizontalLocation.LEFT: self.point.x + width / 2,
            HorizontalLocation.CENTER: self.point.x,
            HorizontalLocation.RIGHT: self.point.x - width / 2,
        }[self.location.horizontal]

    def right_with_width(self, width: Scalar) -> Scalar:
        _check_extent("width", width)
        return {
            HorizontalLocation.LEFT: self.point.x + width,
            HorizontalLocation.CENTER: self.point.x + width / 2,
            HorizontalLocation.RIGHT: self.point.x,
        }[self.location.horizontal]

    def top_with_height(self, height: Scalar) -> Scalar:
        _check_extent("height", height)
        return {
            VerticalLocation.TOP: self.point.y,
            VerticalLocation.CENTER: self.point.y - height / 2,
            VerticalLocation.BOTTOM: self.point.y - height,
        }[self.location.vertical]

    def center_y_with_height(self, height: Scalar) -> Scalar:
        _check_extent("height", height)
        return {
            VerticalLocation.TOP: self.point.y + height / 2,
            VerticalLocation.CENTER: self.point.y,
            VerticalLocation.BOTTOM: self.point.y - height / 2,
        }[self.location.vertical]

    def bottom_with_height(self, height: Scalar) -> Scalar:
        _check_extent("height", height)
        return {
            VerticalLocation.TOP: self.point.y + height,
            VerticalLocation.CENTER: self.point.y + height / 2,
            VerticalLocation.BOTTOM: self.point.y,
        }[self.location.vertical]


def _check_extent(name: str, value: Scalar) -> None:
    if value < 0:
        raise InvalidShapeError(f"invalid value for {name}: {value}")
