"""
Pydantic schemas for transform and settings configuration.
"""

import logging

from pydantic import BaseModel, Field, field_validator
from typing import Tuple, Optional, Literal

import numpy as np

from ..geometry.angle import Angle
from ..geometry.primitives import Point
from ..geometry.transform import Transform
from ..geometry.scalar import approx_eq
from ..geometry.transform3d import Transform3d
from ..logging_config import setup_logging


class TransformConfig(BaseModel):
    """2D placement: skew, scale, rotation about a center, translation."""
    translation: Tuple[float, float] = Field(
        default=(0.0, 0.0),
        description="Translation vector (x, y)"
    )
    rotation_deg: float = Field(
        default=0.0,
        description="Rotation angle in degrees (+x toward +y)"
    )
    center: Tuple[float, float] = Field(
        default=(0.0, 0.0),
        description="Fixed point of the rotation (x, y)"
    )
    scale: Tuple[float, float] = Field(
        default=(1.0, 1.0),
        description="Scale factors (x, y)"
    )
    skew_deg: Tuple[float, float] = Field(
        default=(0.0, 0.0),
        description="Skew angles (x, y) in degrees"
    )

    @field_validator('rotation_deg')
    @classmethod
    def normalize_angle(cls, v):
        """Normalize angle to [0, 360)."""
        return v % 360.0

    @field_validator('skew_deg')
    @classmethod
    def validate_skew(cls, v):
        """Reject skews whose tangent is unbounded."""
        for angle in v:
            if abs(angle) % 180.0 == 90.0:
                raise ValueError(f"Skew angle {angle} has no finite tangent")
        return v

    def to_transform(self) -> Transform:
        """Build the Transform described by this config."""
        skew_x, skew_y = self.skew_deg
        return (
            Transform.from_skew(Angle.from_degrees(skew_x), Angle.from_degrees(skew_y))
            .post_scale(*self.scale)
            .post_rotate(Angle.from_degrees(self.rotation_deg), Point(*self.center))
            .post_translate(*self.translation)
        )


class Transform3dConfig(BaseModel):
    """3D placement: scale, rotation, translation."""
    translation: Tuple[float, float, float] = Field(
        default=(0.0, 0.0, 0.0),
        description="Translation vector (x, y, z)"
    )
    rotation_xyz_deg: Optional[Tuple[float, float, float]] = Field(
        default=None,
        description="Extrinsic rotation angles (rx, ry, rz) in degrees"
    )
    scale: Tuple[float, float, float] = Field(
        default=(1.0, 1.0, 1.0),
        description="Scale factors (x, y, z)"
    )

    def to_transform3d(self) -> Transform3d:
        """Build the Transform3d described by this config."""
        transform = Transform3d.from_scale(*self.scale)
        if self.rotation_xyz_deg is not None:
            angles = [Angle.from_degrees(value) for value in self.rotation_xyz_deg]
            transform = transform.post_mul(Transform3d.from_euler("xyz", angles))
        return transform.post_translate(*self.translation)


class GeometrySettings(BaseModel):
    """Numeric settings for code built on geomkit."""
    epsilon: float = Field(
        default=1e-9,
        gt=0,
        description="Tolerance for approximate comparisons"
    )
    dtype: Literal["float32", "float64"] = Field(
        default="float64",
        description="Element type for transform matrices"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Level passed to setup_logging"
    )

    @field_validator('log_level', mode='before')
    @classmethod
    def upper_level(cls, v):
        """Accept level names in any case."""
        return v.upper() if isinstance(v, str) else v

    @property
    def numpy_dtype(self) -> np.dtype:
        return np.dtype(self.dtype)

    def apply(self) -> logging.Logger:
        """Configure the package logger at ``log_level``."""
        return setup_logging(logging.getLevelName(self.log_level))

    def cast(self, value):
        """Convert a transform or value type to ``dtype``."""
        return value.cast(self.numpy_dtype)

    def approx_eq(self, a, b) -> bool:
        """Compare two values (or scalars) within ``epsilon``."""
        if hasattr(a, "approx_eq"):
            return a.approx_eq(b, self.epsilon)
        return approx_eq(a, b, self.epsilon)
