"""
Scalar abstraction shared by every geometric type.

Components may be Python ``int``/``float`` or numpy scalars; value types never
coerce them. Conversions between element types go through ``cast_scalar`` so
truncation and overflow behave the same everywhere:

- integer targets truncate toward zero and reject NaN, infinities and values
  outside the target range with ``CastError`` (no wrap-around);
- float targets follow IEEE conversion (round to nearest, overflow to inf).
"""

from __future__ import annotations
import logging
import math
from typing import Any, Callable, Union

import numpy as np
from numpy.typing import DTypeLike

from ..errors import CastError

logger = logging.getLogger(__name__)

Scalar = Union[int, float, np.integer, np.floating]

# Transforms store float64 unless asked otherwise
DEFAULT_DTYPE = np.float64

EPSILON = 1e-9


def is_integral(value: Any) -> bool:
    """True for Python/numpy integers (bool excluded)."""
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


def cast_scalar(value: Scalar, dtype: DTypeLike) -> Scalar:
    """
    Convert a scalar to a numpy scalar of ``dtype``.

    Args:
        value: Source value
        dtype: Target numpy dtype (e.g. np.int32, "float32")

    Returns:
        numpy scalar of the target type

    Raises:
        CastError: If the value is not representable in an integer target,
            or the target is not a real numeric type.
    """
    target = np.dtype(dtype)

    if target.kind in "iu":
        if is_integral(value):
            whole = int(value)
        else:
            as_float = float(value)
            if not math.isfinite(as_float):
                logger.debug("Rejected cast of %r to %s", value, target)
                raise CastError(f"Cannot cast non-finite value {value!r} to {target}")
            whole = math.trunc(as_float)

        info = np.iinfo(target)
        if whole < info.min or whole > info.max:
            logger.debug("Rejected cast of %r to %s (out of range)", value, target)
            raise CastError(
                f"Value {value!r} out of range for {target} [{info.min}, {info.max}]"
            )
        return target.type(whole)

    if target.kind == "f":
        with np.errstate(over="ignore"):
            return target.type(value)

    raise CastError(f"Unsupported cast target {target}")


def round_scalar(value: Scalar) -> Scalar:
    """Round half away from zero, keeping the value's type. Integers pass through."""
    if is_integral(value):
        return value
    return type(value)(np.copysign(np.floor(np.abs(value) + 0.5), value))


def floor_scalar(value: Scalar) -> Scalar:
    if is_integral(value):
        return value
    return type(value)(np.floor(value))


def ceil_scalar(value: Scalar) -> Scalar:
    if is_integral(value):
        return value
    return type(value)(np.ceil(value))


def approx_eq(a: Scalar, b: Scalar, epsilon: float = EPSILON) -> bool:
    """Relative/absolute closeness test used by the ``approx_eq`` methods."""
    return math.isclose(float(a), float(b), rel_tol=epsilon, abs_tol=epsilon)


def lerp(a: Scalar, b: Scalar, f: Scalar) -> Scalar:
    """Linear interpolation: ``a`` at f=0, ``b`` at f=1."""
    return (b - a) * f + a


def lerp_half(a: Scalar, b: Scalar) -> Scalar:
    return (a + b) / 2


class CastMixin:
    """
    Element-type conversions derived from ``map``.

    Subclasses implement ``map(f)`` returning the same kind of value with
    ``f`` applied to every component.
    """

    def map(self, f: Callable[[Scalar], Scalar]):
        raise NotImplementedError

    def cast(self, dtype: DTypeLike):
        """Convert every component with ``cast_scalar``."""
        return self.map(lambda value: cast_scalar(value, dtype))

    def round(self):
        return self.map(round_scalar)

    def floor(self):
        return self.map(floor_scalar)

    def ceil(self):
        return self.map(ceil_scalar)

    def to_i8(self):
        return self.cast(np.int8)

    def to_i16(self):
        return self.cast(np.int16)

    def to_i32(self):
        return self.cast(np.int32)

    def to_i64(self):
        return self.cast(np.int64)

    def to_u8(self):
        return self.cast(np.uint8)

    def to_u16(self):
        return self.cast(np.uint16)

    def to_u32(self):
        return self.cast(np.uint32)

    def to_u64(self):
        return self.cast(np.uint64)

    def to_f32(self):
        return self.cast(np.float32)

    def to_f64(self):
        return self.cast(np.float64)
