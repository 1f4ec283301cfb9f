"""
geomkit: geometry value types and 2D/3D affine transforms.
"""

import logging

from .errors import (
    GeometryError,
    SingularMatrixError,
    CastError,
    DecompositionError,
    InvalidShapeError,
    DegenerateGeometryError,
)
from .geometry import (
    Angle,
    Cardinal,
    Direction,
    Vector,
    Point,
    Size,
    Vector3d,
    Point3d,
    Rect,
    Div,
    Align,
    RectLocation,
    RectPosition,
    Circle,
    Ellipse,
    Quad,
    LineSegment,
    Ray,
    Transform,
    Decomposition,
    Transform3d,
    Decomposition3d,
)

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "GeometryError",
    "SingularMatrixError",
    "CastError",
    "DecompositionError",
    "InvalidShapeError",
    "DegenerateGeometryError",
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
    "Align",
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
