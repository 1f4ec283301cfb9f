"""Geometry value types, rects, shapes and transforms."""

from .scalar import (
    Scalar,
    DEFAULT_DTYPE,
    EPSILON,
    CastMixin,
    cast_scalar,
    round_scalar,
    floor_scalar,
    ceil_scalar,
    approx_eq,
    lerp,
    lerp_half,
)
from .angle import Angle
from .direction import Cardinal, Direction
from .primitives import Vector, Point, Size, Vector3d, Point3d
from .rect import (
    Rect,
    Div,
    DivKind,
    GROW,
    Align,
    HorizontalLocation,
    VerticalLocation,
    RectLocation,
    RectPosition,
)
from .shapes import Circle, Ellipse, Quad, LineSegment, Ray
from .transform import Transform, Decomposition
from .transform3d import Transform3d, Decomposition3d

__all__ = [
    "Scalar",
    "DEFAULT_DTYPE",
    "EPSILON",
    "CastMixin",
    "cast_scalar",
    "round_scalar",
    "floor_scalar",
    "ceil_scalar",
    "approx_eq",
    "lerp",
    "lerp_half",
    "Angle",
    "Cardinal",
    "Direction",
    "Vector",
    "Point",
    "Size",
    "Vector3d",
    "Point3d",
    "Rect",
    "Div",
    "DivKind",
    "GROW",
    "Align",
    "HorizontalLocation",
    "VerticalLocation",
    "RectLocation",
    "RectPosition",
    "Circle",
    "Ellipse",
    "Quad",
    "LineSegment",
    "Ray",
    "Transform",
    "Decomposition",
    "Transform3d",
    "Decomposition3d",
]
