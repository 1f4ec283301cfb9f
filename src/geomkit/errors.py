"""Typed errors raised by geomkit."""

from __future__ import annotations


class GeometryError(Exception):
    """Base error for the package."""


class SingularMatrixError(GeometryError, ArithmeticError):
    """Transform has no inverse (determinant is zero or not finite)."""


class CastError(GeometryError, ValueError):
    """Value cannot be represented in the requested numeric type."""


class DecompositionError(GeometryError, ValueError):
    """Transform cannot be split into translation/rotation/scale/shear."""


class InvalidShapeError(GeometryError, ValueError):
    """Shape parameters violate their invariants (negative size, bad ratio, bad array shape)."""


class DegenerateGeometryError(GeometryError, ValueError):
    """Operation undefined for degenerate input (zero-length vector, point at infinity)."""
