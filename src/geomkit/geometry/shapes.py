"""
Round shapes and point sets: Circle, Ellipse, Quad, LineSegment, Ray.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
import math
from typing import Callable, Iterator, Optional, Tuple

from ..errors import InvalidShapeError
from .angle import Angle
from .primitives import Point, Size, Vector
from .rect import Rect
from .scalar import CastMixin, Scalar, EPSILON


@dataclass(frozen=True)
class Circle(CastMixin):
    """Circle with a non-negative radius."""
    center: Point
    radius: Scalar

    def __post_init__(self):
        if self.radius < 0:
            raise InvalidShapeError(f"radius must be >= 0, got {self.radius}")

    @classmethod
    def unit(cls) -> Circle:
        return cls(Point.zero(), 1.0)

    def map(self, f: Callable[[Scalar], Scalar]) -> Circle:
        """Apply ``f`` to every scalar (center coordinates and radius)."""
        return Circle(self.center.map(f), f(self.radius))

    def diameter(self) -> Scalar:
        return self.radius * 2

    def area(self) -> float:
        return math.pi * self.radius ** 2

    def circumference(self) -> float:
        return math.tau * self.radius

    def contains(self, point: Point) -> bool:
        """Boundary points count as inside."""
        return self.center.distance_squared_to(point) <= self.radius ** 2

    def bounding_rect(self) -> Rect:
        return Rect.from_center(self.center, Size.square(self.diameter()))

    def translate(self, offset: Vector) -> Circle:
        return replace(self, center=self.center + offset)

    def scale_radius(self, coeff: Scalar) -> Circle:
        return replace(self, radius=self.radius * coeff)

    def arc_points(self, steps: int, start: Angle, end: Angle) -> Iterator[Point]:
        """``steps`` points from ``start`` toward ``end`` (end excluded)."""
        return Ellipse(self.center, Size.square(self.radius)).arc_points(steps, start, end)

    def circle_points(self, steps: int, start: Optional[Angle] = None) -> Iterator[Point]:
        return Ellipse(self.center, Size.square(self.radius)).ellipse_points(steps, start)


@dataclass(frozen=True)
class Ellipse:
    """Axis-aligned ellipse; ``radius`` holds the two semi-axes."""
    center: Point
    radius: Size

    @classmethod
    def unit(cls) -> Ellipse:
        return cls(Point.zero(), Size.square(1.0))

    def with_center(self, center: Point) -> Ellipse:
        return replace(self, center=center)

    def with_radius(self, radius: Size) -> Ellipse:
        return replace(self, radius=radius)

    def translate(self, offset: Vector) -> Ellipse:
        return replace(self, center=self.center + offset)

    def contains(self, point: Point, epsilon: float = EPSILON) -> bool:
        offset = point - self.center
        rx, ry = self.radius.width, self.radius.height
        if rx == 0 or ry == 0:
            return False
        return (offset.dx / rx) ** 2 + (offset.dy / ry) ** 2 <= 1.0 + epsilon

    def bounding_rect(self) -> Rect:
        return Rect.from_center(self.center, self.radius.scale_uniform(2))

    def arc_points(self, steps: int, start: Angle, end: Angle) -> Iterator[Point]:
        increment = (end - start) / steps
        for index in range(steps):
            unit = (increment * index + start).unit_vector()
            yield self.center + unit.scaled(self.radius)

    def ellipse_points(self, steps: int, start: Optional[Angle] = None) -> Iterator[Point]:
        start = start if start is not None else Angle.zero()
        return self.arc_points(steps, start, start + Angle.tau())


@dataclass(frozen=True)
class Quad:
    """
    Four points with no guaranteed relationship.

    Produced by transforming a Rect through an arbitrary transform, where the
    image need not be a rect any more.
    """
    a: Point
    b: Point
    c: Point
    d: Point

    def points(self) -> Tuple[Point, Point, Point, Point]:
        return (self.a, self.b, self.c, self.d)

    def bounding_rect(self) -> Rect:
        return Rect.from_points_iter(self.points())


@dataclass(frozen=True)
class LineSegment:
    start: Point
    end: Point

    def vector(self) -> Vector:
        return self.end - self.start

    def length(self) -> float:
        return self.vector().magnitude()

    def midpoint(self) -> Point:
        return self.start.midpoint(self.end)

    def ray(self) -> Ray:
        return Ray(self.start, self.vector().angle())


@dataclass(frozen=True)
class Ray:
    """Half-line from ``point`` in direction ``angle``."""
    point: Point
    angle: Angle

    def unit_vector(self) -> Vector:
        return self.angle.unit_vector()

    def point_at(self, distance: Scalar) -> Point:
        return self.point + self.unit_vector() * distance

    def _parameters(self, other: Ray) -> Optional[Tuple[float, float]]:
        d = other.point - self.point
        u = self.unit_vector()
        v = other.unit_vector()
        det = u.cross(v)
        if abs(det) < EPSILON:
            return None
        return d.cross(v) / det, d.cross(u) / det

    def intersection(self, other: Ray) -> Optional[Point]:
        """Crossing point of two rays; None when parallel or behind either origin."""
        params = self._parameters(other)
        if params is None:
            return None
        t, s = params
        if t >= 0 and s >= 0:
            return self.point_at(t)
        return None

    def line_segment_intersection(self, segment: LineSegment) -> Optional[Point]:
        """Crossing point with a segment, if the ray reaches it."""
        if segment.length() == 0:
            return None
        params = self._parameters(segment.ray())
        if params is None:
            return None
        t, s = params
        if t >= 0 and 0 <= s <= segment.length():
            return self.point_at(t)
        return None
