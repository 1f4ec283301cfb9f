"""
Geometric primitives: Vector, Point, Size and their 3D counterparts.

Point and Vector are distinct types: Point + Vector = Point,
Point - Point = Vector, Vector + Vector = Vector. Adding two points is
rejected.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
import math
from typing import Callable, Optional, Tuple, Union, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ..errors import DegenerateGeometryError, InvalidShapeError
from .scalar import CastMixin, Scalar, approx_eq, EPSILON, lerp

if TYPE_CHECKING:
    from .angle import Angle


def _check_shape(arr: NDArray, shape: Tuple[int, ...]) -> NDArray:
    arr = np.asarray(arr)
    if arr.shape != shape:
        raise InvalidShapeError(f"Expected array of shape {shape}, got {arr.shape}")
    return arr


@dataclass(frozen=True)
class Vector(CastMixin):
    """2D displacement."""
    dx: Scalar
    dy: Scalar

    @classmethod
    def zero(cls) -> Vector:
        return cls(0, 0)

    @classmethod
    def from_angle(cls, angle: Angle) -> Vector:
        """Unit vector along ``angle``."""
        return cls(math.cos(angle.radians), math.sin(angle.radians))

    @classmethod
    def from_array(cls, arr: NDArray) -> Vector:
        """Create from NumPy array (2,)."""
        arr = _check_shape(arr, (2,))
        return cls(arr[0].item(), arr[1].item())

    def to_array(self) -> NDArray:
        """Convert to NumPy array (2,)."""
        return np.array([self.dx, self.dy])

    def to_tuple(self) -> Tuple[Scalar, Scalar]:
        return (self.dx, self.dy)

    def to_point(self) -> Point:
        return Point(self.dx, self.dy)

    def to_size(self) -> Size:
        return Size(self.dx, self.dy)

    def with_dx(self, dx: Scalar) -> Vector:
        return replace(self, dx=dx)

    def with_dy(self, dy: Scalar) -> Vector:
        return replace(self, dy=dy)

    def map(self, f: Callable[[Scalar], Scalar]) -> Vector:
        return Vector(f(self.dx), f(self.dy))

    def dot(self, other: Vector) -> Scalar:
        return self.dx * other.dx + self.dy * other.dy

    def cross(self, other: Vector) -> Scalar:
        """z component of the 3D cross product."""
        return self.dx * other.dy - self.dy * other.dx

    def magnitude_squared(self) -> Scalar:
        return self.dot(self)

    def magnitude(self) -> float:
        return math.hypot(self.dx, self.dy)

    def normalized(self) -> Vector:
        """Return unit vector in same direction."""
        mag = self.magnitude()
        if mag == 0.0:
            raise DegenerateGeometryError("Cannot normalize zero vector")
        return Vector(self.dx / mag, self.dy / mag)

    def angle(self) -> Angle:
        """Direction measured from +x, in (-pi, pi]."""
        from .angle import Angle
        return Angle(math.atan2(self.dy, self.dx))

    def angle_to(self, other: Vector) -> Angle:
        """Signed angle turning this vector onto ``other``."""
        from .angle import Angle
        return Angle(math.atan2(self.cross(other), self.dot(other)))

    def perpendicular(self) -> Vector:
        """This vector turned by +90 degrees."""
        return Vector(-self.dy, self.dx)

    def scaled(self, factors: Union[Vector, Size]) -> Vector:
        """Component-wise product with another vector or size."""
        if isinstance(factors, Size):
            return Vector(self.dx * factors.width, self.dy * factors.height)
        return Vector(self.dx * factors.dx, self.dy * factors.dy)

    def lerp(self, other: Vector, f: Scalar) -> Vector:
        return Vector(lerp(self.dx, other.dx, f), lerp(self.dy, other.dy, f))

    def approx_eq(self, other: Vector, epsilon: float = EPSILON) -> bool:
        return approx_eq(self.dx, other.dx, epsilon) and approx_eq(self.dy, other.dy, epsilon)

    def __add__(self, other: Vector) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.dx + other.dx, self.dy + other.dy)

    def __sub__(self, other: Vector) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.dx - other.dx, self.dy - other.dy)

    def __mul__(self, scalar: Scalar) -> Vector:
        if isinstance(scalar, (Vector, Point, Size)):
            return NotImplemented
        return Vector(self.dx * scalar, self.dy * scalar)

    def __rmul__(self, scalar: Scalar) -> Vector:
        return self.__mul__(scalar)

    def __truediv__(self, scalar: Scalar) -> Vector:
        return Vector(self.dx / scalar, self.dy / scalar)

    def __mod__(self, scalar: Scalar) -> Vector:
        return Vector(self.dx % scalar, self.dy % scalar)

    def __neg__(self) -> Vector:
        return Vector(-self.dx, -self.dy)


@dataclass(frozen=True)
class Point(CastMixin):
    """2D position."""
    x: Scalar
    y: Scalar

    @classmethod
    def zero(cls) -> Point:
        return cls(0, 0)

    @classmethod
    def from_array(cls, arr: NDArray) -> Point:
        """Create from NumPy array (2,)."""
        arr = _check_shape(arr, (2,))
        return cls(arr[0].item(), arr[1].item())

    def to_array(self) -> NDArray:
        """Convert to NumPy array (2,)."""
        return np.array([self.x, self.y])

    def to_tuple(self) -> Tuple[Scalar, Scalar]:
        return (self.x, self.y)

    def to_vector(self) -> Vector:
        return Vector(self.x, self.y)

    def with_x(self, x: Scalar) -> Point:
        return replace(self, x=x)

    def with_y(self, y: Scalar) -> Point:
        return replace(self, y=y)

    def map(self, f: Callable[[Scalar], Scalar]) -> Point:
        return Point(f(self.x), f(self.y))

    def distance_squared_to(self, other: Point) -> Scalar:
        return (self - other).magnitude_squared()

    def distance_to(self, other: Point) -> float:
        """Euclidean distance to another point."""
        return (self - other).magnitude()

    def midpoint(self, other: Point) -> Point:
        return self.lerp(other, 0.5)

    def lerp(self, other: Point, f: Scalar) -> Point:
        return Point(lerp(self.x, other.x, f), lerp(self.y, other.y, f))

    def move_to_by(self, to: Point, by: Scalar) -> Point:
        """Step ``by`` units from this point toward ``to``."""
        return self + (to - self).normalized() * by

    def approx_eq(self, other: Point, epsilon: float = EPSILON) -> bool:
        return approx_eq(self.x, other.x, epsilon) and approx_eq(self.y, other.y, epsilon)

    def __add__(self, vector: Vector) -> Point:
        """Point + Vector = Point."""
        if not isinstance(vector, Vector):
            return NotImplemented
        return Point(self.x + vector.dx, self.y + vector.dy)

    def __sub__(self, other):
        """Point - Point = Vector; Point - Vector = Point."""
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y)
        if isinstance(other, Vector):
            return Point(self.x - other.dx, self.y - other.dy)
        return NotImplemented

    def __mul__(self, scalar: Scalar) -> Point:
        if isinstance(scalar, (Vector, Point, Size)):
            return NotImplemented
        return Point(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: Scalar) -> Point:
        return self.__mul__(scalar)

    def __truediv__(self, scalar: Scalar) -> Point:
        return Point(self.x / scalar, self.y / scalar)

    def __mod__(self, scalar: Scalar) -> Point:
        return Point(self.x % scalar, self.y % scalar)


@dataclass(frozen=True)
class Size(CastMixin):
    """Non-negative 2D extent."""
    width: Scalar
    height: Scalar

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise InvalidShapeError(
                f"width or height is less than 0: ({self.width}, {self.height})"
            )

    @classmethod
    def try_new(cls, width: Scalar, height: Scalar) -> Optional[Size]:
        """Like the constructor, but returns None for negative dimensions."""
        if width >= 0 and height >= 0:
            return cls(width, height)
        return None

    @classmethod
    def square(cls, dim: Scalar) -> Size:
        return cls(dim, dim)

    @classmethod
    def zero(cls) -> Size:
        return cls(0, 0)

    @classmethod
    def from_vector(cls, vector: Vector) -> Size:
        return cls(vector.dx, vector.dy)

    def to_vector(self) -> Vector:
        return Vector(self.width, self.height)

    def to_array(self) -> NDArray:
        return np.array([self.width, self.height])

    def to_tuple(self) -> Tuple[Scalar, Scalar]:
        return (self.width, self.height)

    def map(self, f: Callable[[Scalar], Scalar]) -> Size:
        return Size(f(self.width), f(self.height))

    def area(self) -> Scalar:
        return self.width * self.height

    def aspect_ratio(self) -> float:
        return self.width / self.height

    def is_landscape(self) -> bool:
        return self.width > self.height

    def is_portrait(self) -> bool:
        return self.width < self.height

    def is_square(self) -> bool:
        return self.width == self.height

    def min_dim(self) -> Scalar:
        return min(self.width, self.height)

    def max_dim(self) -> Scalar:
        return max(self.width, self.height)

    def resize_width(self, width: Scalar) -> Size:
        return Size(width, self.height)

    def resize_height(self, height: Scalar) -> Size:
        return Size(self.width, height)

    def scale(self, factors: Vector) -> Size:
        return self.scale_width(factors.dx).scale_height(factors.dy)

    def scale_width(self, coeff: Scalar) -> Size:
        return self.resize_width(self.width * coeff)

    def scale_height(self, coeff: Scalar) -> Size:
        return self.resize_height(self.height * coeff)

    def scale_uniform(self, coeff: Scalar) -> Size:
        return self * coeff

    def fit_width(self, width_to_fit: Scalar) -> Size:
        """Same aspect ratio, given width."""
        return Size(width_to_fit, self.height * width_to_fit / self.width)

    def fit_height(self, height_to_fit: Scalar) -> Size:
        """Same aspect ratio, given height."""
        return Size(self.width * height_to_fit / self.height, height_to_fit)

    def fill(self, other: Size) -> Size:
        """Smallest uniform scaling of this size that covers ``other``."""
        return self.scale_uniform(max(other.width / self.width, other.height / self.height))

    def fit(self, other: Size) -> Size:
        """Downscale (never upscale) to fit within ``other`` keeping aspect ratio."""
        return self.fill_and_fit(
            Size(min(self.width, other.width), min(self.height, other.height))
        )

    def fill_and_fit(self, other: Size) -> Size:
        """Largest size with this aspect ratio that fits within ``other``."""
        aspect_ratio = self.aspect_ratio()
        width = min(other.width, other.height * aspect_ratio)
        height = min(other.height, other.width / aspect_ratio)
        return Size(width, height)

    def approx_eq(self, other: Size, epsilon: float = EPSILON) -> bool:
        return (approx_eq(self.width, other.width, epsilon)
                and approx_eq(self.height, other.height, epsilon))

    def __add__(self, other: Size) -> Size:
        if not isinstance(other, Size):
            return NotImplemented
        return Size(self.width + other.width, self.height + other.height)

    def __mul__(self, scalar: Scalar) -> Size:
        if isinstance(scalar, (Vector, Point, Size)):
            return NotImplemented
        return Size(self.width * scalar, self.height * scalar)

    def __rmul__(self, scalar: Scalar) -> Size:
        return self.__mul__(scalar)

    def __truediv__(self, scalar: Scalar) -> Size:
        return Size(self.width / scalar, self.height / scalar)

    def __mod__(self, scalar: Scalar) -> Size:
        return Size(self.width % scalar, self.height % scalar)


@dataclass(frozen=True)
class Vector3d(CastMixin):
    """3D displacement."""
    dx: Scalar
    dy: Scalar
    dz: Scalar = 0.0

    @classmethod
    def zero(cls) -> Vector3d:
        return cls(0, 0, 0)

    @classmethod
    def from_array(cls, arr: NDArray) -> Vector3d:
        """Create from NumPy array (3,)."""
        arr = _check_shape(arr, (3,))
        return cls(arr[0].item(), arr[1].item(), arr[2].item())

    def to_array(self) -> NDArray:
        """Convert to NumPy array (3,)."""
        return np.array([self.dx, self.dy, self.dz])

    def to_tuple(self) -> Tuple[Scalar, Scalar, Scalar]:
        return (self.dx, self.dy, self.dz)

    def map(self, f: Callable[[Scalar], Scalar]) -> Vector3d:
        return Vector3d(f(self.dx), f(self.dy), f(self.dz))

    def magnitude(self) -> float:
        """Vector magnitude (L2 norm)."""
        return math.sqrt(self.dot(self))

    def normalized(self) -> Vector3d:
        mag = self.magnitude()
        if mag == 0.0:
            raise DegenerateGeometryError("Cannot normalize zero vector")
        return self / mag

    def dot(self, other: Vector3d) -> Scalar:
        return self.dx * other.dx + self.dy * other.dy + self.dz * other.dz

    def cross(self, other: Vector3d) -> Vector3d:
        return Vector3d(
            self.dy * other.dz - self.dz * other.dy,
            self.dz * other.dx - self.dx * other.dz,
            self.dx * other.dy - self.dy * other.dx,
        )

    def approx_eq(self, other: Vector3d, epsilon: float = EPSILON) -> bool:
        return all(approx_eq(a, b, epsilon) for a, b in zip(self.to_tuple(), other.to_tuple()))

    def __add__(self, other: Vector3d) -> Vector3d:
        if not isinstance(other, Vector3d):
            return NotImplemented
        return Vector3d(self.dx + other.dx, self.dy + other.dy, self.dz + other.dz)

    def __sub__(self, other: Vector3d) -> Vector3d:
        if not isinstance(other, Vector3d):
            return NotImplemented
        return Vector3d(self.dx - other.dx, self.dy - other.dy, self.dz - other.dz)

    def __mul__(self, scalar: Scalar) -> Vector3d:
        if isinstance(scalar, (Vector3d, Point3d)):
            return NotImplemented
        return Vector3d(self.dx * scalar, self.dy * scalar, self.dz * scalar)

    def __rmul__(self, scalar: Scalar) -> Vector3d:
        return self.__mul__(scalar)

    def __truediv__(self, scalar: Scalar) -> Vector3d:
        return Vector3d(self.dx / scalar, self.dy / scalar, self.dz / scalar)

    def __neg__(self) -> Vector3d:
        return Vector3d(-self.dx, -self.dy, -self.dz)


@dataclass(frozen=True)
class Point3d(CastMixin):
    """3D position."""
    x: Scalar
    y: Scalar
    z: Scalar = 0.0

    @classmethod
    def zero(cls) -> Point3d:
        return cls(0, 0, 0)

    @classmethod
    def from_point(cls, point: Point, z: Scalar = 0.0) -> Point3d:
        return cls(point.x, point.y, z)

    @classmethod
    def from_array(cls, arr: NDArray) -> Point3d:
        """Create from NumPy array (3,)."""
        arr = _check_shape(arr, (3,))
        return cls(arr[0].item(), arr[1].item(), arr[2].item())

    def to_array(self) -> NDArray:
        """Convert to NumPy array (3,)."""
        return np.array([self.x, self.y, self.z])

    def to_tuple(self) -> Tuple[Scalar, Scalar, Scalar]:
        return (self.x, self.y, self.z)

    def to_point(self) -> Point:
        """Drop the z component."""
        return Point(self.x, self.y)

    def map(self, f: Callable[[Scalar], Scalar]) -> Point3d:
        return Point3d(f(self.x), f(self.y), f(self.z))

    def distance_to(self, other: Point3d) -> float:
        return (self - other).magnitude()

    def approx_eq(self, other: Point3d, epsilon: float = EPSILON) -> bool:
        return all(approx_eq(a, b, epsilon) for a, b in zip(self.to_tuple(), other.to_tuple()))

    def __add__(self, vector: Vector3d) -> Point3d:
        """Point + Vector = Point."""
        if not isinstance(vector, Vector3d):
            return NotImplemented
        return Point3d(self.x + vector.dx, self.y + vector.dy, self.z + vector.dz)

    def __sub__(self, other):
        """Point - Point = Vector; Point - Vector = Point."""
        if isinstance(other, Point3d):
            return Vector3d(self.x - other.x, self.y - other.y, self.z - other.z)
        if isinstance(other, Vector3d):
            return Point3d(self.x - other.dx, self.y - other.dy, self.z - other.dz)
        return NotImplemented
