"""
Angle value type.

Angles are stored in radians. Positive angles turn +x toward +y; with the
top-left origin and y pointing down this reads clockwise on screen.
"""

from __future__ import annotations
from dataclasses import dataclass
import math
from typing import Callable, Tuple, TYPE_CHECKING

from .scalar import CastMixin, Scalar, approx_eq, EPSILON

if TYPE_CHECKING:
    from .primitives import Vector


@dataclass(frozen=True, order=True)
class Angle(CastMixin):
    """Angle wrapper around a radian value."""
    radians: Scalar

    @classmethod
    def from_radians(cls, radians: Scalar) -> Angle:
        return cls(radians)

    @classmethod
    def from_degrees(cls, degrees: Scalar) -> Angle:
        return cls(degrees * math.pi / 180.0)

    @classmethod
    def zero(cls) -> Angle:
        return cls(0.0)

    @classmethod
    def pi(cls) -> Angle:
        return cls(math.pi)

    @classmethod
    def tau(cls) -> Angle:
        return cls(math.tau)

    @property
    def degrees(self) -> Scalar:
        return self.radians * 180.0 / math.pi

    def map(self, f: Callable[[Scalar], Scalar]) -> Angle:
        return Angle(f(self.radians))

    def map_radians(self, f: Callable[[Scalar], Scalar]) -> Angle:
        """Apply ``f`` to the radian value and re-wrap the result."""
        return Angle.from_radians(f(self.radians))

    def map_degrees(self, f: Callable[[Scalar], Scalar]) -> Angle:
        """Apply ``f`` to the degree value and re-wrap the result."""
        return Angle.from_degrees(f(self.degrees))

    def sin(self) -> float:
        return math.sin(self.radians)

    def cos(self) -> float:
        return math.cos(self.radians)

    def tan(self) -> float:
        return math.tan(self.radians)

    def sin_cos(self) -> Tuple[float, float]:
        return math.sin(self.radians), math.cos(self.radians)

    def unit_vector(self) -> Vector:
        """Unit vector pointing along this angle (measured from +x)."""
        from .primitives import Vector
        return Vector(math.cos(self.radians), math.sin(self.radians))

    def normalized(self) -> Angle:
        """Equivalent angle wrapped into [0, tau)."""
        return Angle(math.fmod(math.fmod(self.radians, math.tau) + math.tau, math.tau))

    def approx_eq(self, other: Angle, epsilon: float = EPSILON) -> bool:
        return approx_eq(self.radians, other.radians, epsilon)

    def __add__(self, other: Angle) -> Angle:
        if not isinstance(other, Angle):
            return NotImplemented
        return Angle(self.radians + other.radians)

    def __sub__(self, other: Angle) -> Angle:
        if not isinstance(other, Angle):
            return NotImplemented
        return Angle(self.radians - other.radians)

    def __mul__(self, scalar: Scalar) -> Angle:
        if isinstance(scalar, Angle):
            return NotImplemented
        return Angle(self.radians * scalar)

    def __rmul__(self, scalar: Scalar) -> Angle:
        return self.__mul__(scalar)

    def __truediv__(self, other):
        """Angle / scalar -> Angle; Angle / Angle -> ratio."""
        if isinstance(other, Angle):
            return self.radians / other.radians
        return Angle(self.radians / other)

    def __neg__(self) -> Angle:
        return Angle(-self.radians)
