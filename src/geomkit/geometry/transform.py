"""
2D affine transform.

Points are row vectors: ``[x', y', 1] = [x, y, 1] @ M`` with

    M = | m11 m12 0 |
        | m21 m22 0 |
        | m31 m32 1 |

so ``(m31, m32)`` is the translation and ``a.post_mul(b)`` (also ``a @ b``)
applies ``a`` first, then ``b``.

Rotation by a positive angle turns +x toward +y (clockwise on a y-down
screen).
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import math
from typing import Callable, Optional, TYPE_CHECKING

import numpy as np
from numpy.typing import DTypeLike, NDArray

from ..errors import InvalidShapeError, SingularMatrixError
from .angle import Angle
from .primitives import Point, Vector
from .rect import Rect
from .scalar import CastMixin, DEFAULT_DTYPE, EPSILON, Scalar

if TYPE_CHECKING:
    from .transform3d import Transform3d

logger = logging.getLogger(__name__)


def _affine_3x3(m11, m12, m21, m22, m31, m32, dtype: DTypeLike = None) -> NDArray:
    if dtype is None:
        dtype = np.result_type(m11, m12, m21, m22, m31, m32)
    return np.array([
        [m11, m12, 0],
        [m21, m22, 0],
        [m31, m32, 1],
    ], dtype=dtype)


@dataclass(frozen=True, eq=False)
class Transform(CastMixin):
    """
    2D affine transformation (rotation, scale, skew, translation).

    Attributes:
        matrix: Read-only 3x3 homogeneous matrix (row-vector convention)
    """

    matrix: NDArray = field(default_factory=lambda: np.eye(3, dtype=DEFAULT_DTYPE))

    def __post_init__(self):
        """Validate and freeze the matrix."""
        matrix = np.array(self.matrix)
        if matrix.shape != (3, 3):
            raise InvalidShapeError(f"matrix must have shape (3, 3), got {matrix.shape}")
        if matrix[0, 2] != 0 or matrix[1, 2] != 0 or matrix[2, 2] != 1:
            raise InvalidShapeError("last column of an affine matrix must be (0, 0, 1)")
        matrix.setflags(write=False)
        object.__setattr__(self, "matrix", matrix)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def row_major(cls, m11: Scalar, m12: Scalar, m21: Scalar, m22: Scalar,
                  m31: Scalar, m32: Scalar, dtype: DTypeLike = None) -> Transform:
        """
        Create from the six affine entries, row by row.

        Args:
            m11, m12: Image of the x unit vector
            m21, m22: Image of the y unit vector
            m31, m32: Translation
            dtype: Matrix dtype (inferred from the entries when None)

        Returns:
            Transform with a read-only 3x3 matrix
        """
        return cls(_affine_3x3(m11, m12, m21, m22, m31, m32, dtype))

    @classmethod
    def identity(cls, dtype: DTypeLike = DEFAULT_DTYPE) -> Transform:
        return cls(np.eye(3, dtype=dtype))

    @classmethod
    def from_mat3(cls, matrix: NDArray) -> Transform:
        """Create from a 3x3 homogeneous matrix in row-vector convention."""
        return cls(np.asarray(matrix))

    @classmethod
    def from_scale(cls, x: Scalar, y: Scalar) -> Transform:
        """
        Create scale transform.

        Args:
            x: Scale factor along x
            y: Scale factor along y
        """
        return cls.row_major(x, 0, 0, y, 0, 0)

    @classmethod
    def from_translation(cls, x: Scalar, y: Scalar) -> Transform:
        """
        Create translation transform.

        Args:
            x: Offset along x
            y: Offset along y
        """
        return cls.row_major(1, 0, 0, 1, x, y)

    @classmethod
    def from_rotation(cls, angle: Angle, center: Optional[Point] = None) -> Transform:
        """
        Rotation by ``angle`` around ``center`` (the origin when omitted).

        Around a center the result is translate(-center), rotate,
        translate(center).
        """
        sin, cos = angle.sin_cos()
        rotation = cls.row_major(cos, sin, -sin, cos, 0.0, 0.0)
        if center is None:
            return rotation
        return (
            cls.from_translation(-center.x, -center.y)
            .post_mul(rotation)
            .post_mul(cls.from_translation(center.x, center.y))
        )

    @classmethod
    def rotation(cls, center: Point, angle: Angle) -> Transform:
        """Rotation around a fixed point; ``Point.zero()`` gives the origin rotation."""
        return cls.from_rotation(angle, center)

    @classmethod
    def from_skew(cls, x_angle: Angle, y_angle: Angle) -> Transform:
        """
        Shear: ``x' = x + tan(x_angle) * y`` and ``y' = y + tan(y_angle) * x``.
        """
        return cls.row_major(1.0, y_angle.tan(), x_angle.tan(), 1.0, 0.0, 0.0)

    @classmethod
    def from_decomposition(cls, decomposition: Decomposition) -> Transform:
        return decomposition.recompose()

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------

    @property
    def m11(self) -> Scalar:
        return self.matrix[0, 0]

    @property
    def m12(self) -> Scalar:
        return self.matrix[0, 1]

    @property
    def m21(self) -> Scalar:
        return self.matrix[1, 0]

    @property
    def m22(self) -> Scalar:
        return self.matrix[1, 1]

    @property
    def m31(self) -> Scalar:
        return self.matrix[2, 0]

    @property
    def m32(self) -> Scalar:
        return self.matrix[2, 1]

    @property
    def dtype(self) -> np.dtype:
        return self.matrix.dtype

    @property
    def translation(self) -> Vector:
        return Vector(self.m31, self.m32)

    def map(self, f: Callable[[Scalar], Scalar]) -> Transform:
        """Apply ``f`` to the six affine entries."""
        return Transform.row_major(
            f(self.m11), f(self.m12),
            f(self.m21), f(self.m22),
            f(self.m31), f(self.m32),
        )

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    def post_mul(self, other: Transform) -> Transform:
        """Transform that applies ``self`` first, then ``other``."""
        return Transform(self.matrix @ other.matrix)

    def pre_mul(self, other: Transform) -> Transform:
        """Transform that applies ``other`` first, then ``self``."""
        return other.post_mul(self)

    def __matmul__(self, other: Transform) -> Transform:
        if not isinstance(other, Transform):
            return NotImplemented
        return self.post_mul(other)

    def post_translate(self, x: Scalar, y: Scalar) -> Transform:
        return self.post_mul(Transform.from_translation(x, y))

    def pre_translate(self, x: Scalar, y: Scalar) -> Transform:
        return self.pre_mul(Transform.from_translation(x, y))

    def post_scale(self, x: Scalar, y: Scalar) -> Transform:
        return self.post_mul(Transform.from_scale(x, y))

    def pre_scale(self, x: Scalar, y: Scalar) -> Transform:
        return self.pre_mul(Transform.from_scale(x, y))

    def post_rotate(self, angle: Angle, center: Optional[Point] = None) -> Transform:
        return self.post_mul(Transform.from_rotation(angle, center))

    def pre_rotate(self, angle: Angle, center: Optional[Point] = None) -> Transform:
        return self.pre_mul(Transform.from_rotation(angle, center))

    def post_skew(self, x_angle: Angle, y_angle: Angle) -> Transform:
        return self.post_mul(Transform.from_skew(x_angle, y_angle))

    def pre_skew(self, x_angle: Angle, y_angle: Angle) -> Transform:
        return self.pre_mul(Transform.from_skew(x_angle, y_angle))

    # ------------------------------------------------------------------
    # Inversion
    # ------------------------------------------------------------------

    def determinant(self) -> Scalar:
        return self.m11 * self.m22 - self.m12 * self.m21

    def is_identity(self) -> bool:
        return bool(np.array_equal(self.matrix, np.eye(3)))

    def inverse(self) -> Transform:
        """
        Inverse transform.

        Raises:
            SingularMatrixError: If the linear part has a zero (or non-finite)
                determinant.
        """
        det = self.determinant()
        if det == 0 or not np.isfinite(det):
            logger.debug("No inverse for transform with determinant %r", det)
            raise SingularMatrixError(f"Transform is not invertible (determinant {det})")

        inv_det = 1.0 / det
        return Transform.row_major(
            inv_det * self.m22,
            -inv_det * self.m12,
            -inv_det * self.m21,
            inv_det * self.m11,
            inv_det * (self.m21 * self.m32 - self.m22 * self.m31),
            inv_det * (self.m31 * self.m12 - self.m11 * self.m32),
        )

    def try_inverse(self) -> Optional[Transform]:
        """Inverse transform, or None when singular."""
        try:
            return self.inverse()
        except SingularMatrixError:
            return None

    # ------------------------------------------------------------------
    # Application
    # ------------------------------------------------------------------

    def transform_point(self, point: Point) -> Point:
        """Apply the full transform (including translation) to a point."""
        return Point(
            point.x * self.m11 + point.y * self.m21 + self.m31,
            point.x * self.m12 + point.y * self.m22 + self.m32,
        )

    def transform_vector(self, vector: Vector) -> Vector:
        """Apply the linear part only; displacements ignore translation."""
        return Vector(
            vector.dx * self.m11 + vector.dy * self.m21,
            vector.dx * self.m12 + vector.dy * self.m22,
        )

    def transform_points(self, points: NDArray) -> NDArray:
        """
        Apply transform to point coordinates.

        Args:
            points: Point coordinates (2,) or (N, 2)

        Returns:
            Transformed point(s), same shape
        """
        points = np.asarray(points)
        if points.shape[-1:] != (2,) or points.ndim > 2:
            raise InvalidShapeError(f"points must have shape (2,) or (N, 2), got {points.shape}")
        return points @ self.matrix[:2, :2] + self.matrix[2, :2]

    def transform_rect(self, rect: Rect) -> Rect:
        """Axis-aligned bounding rect of the transformed corners."""
        return Rect.from_points_iter(self.transform_point(corner) for corner in rect.corners())

    # ------------------------------------------------------------------
    # Decomposition
    # ------------------------------------------------------------------

    def decompose(self) -> Decomposition:
        """
        Split into translation, rotation, scale and skew.

        The canonical order, as applied to a point, is skew, scale, rotate,
        translate (column form ``M = T * R * S * K``). With ``(a, b)`` and
        ``(c, d)`` the images of the x and y unit vectors:

        - rotation = atan2(b, a), scale.dx = |(a, b)|
        - scale.dy = det / scale.dx (negative for reflections)
        - tan(skew) = ((a, b) . (c, d)) / scale.dx**2

        A zero first column gives scale.dx = 0, skew = 0 and takes the
        rotation from the second column, so every affine transform
        decomposes.
        """
        a, b = float(self.m11), float(self.m12)
        c, d = float(self.m21), float(self.m22)
        translation = Vector(float(self.m31), float(self.m32))

        sx = math.hypot(a, b)
        if sx == 0.0:
            logger.debug("Decomposing transform with zero x basis vector")
            return Decomposition(
                translation=translation,
                rotation=Angle(math.atan2(-c, d)),
                scale=Vector(0.0, math.hypot(c, d)),
                skew=Angle.zero(),
            )

        return Decomposition(
            translation=translation,
            rotation=Angle(math.atan2(b, a)),
            scale=Vector(sx, (a * d - b * c) / sx),
            skew=Angle(math.atan((a * c + b * d) / (sx * sx))),
        )

    # ------------------------------------------------------------------
    # Interop
    # ------------------------------------------------------------------

    def to_array(self) -> NDArray:
        """The six affine entries as a (3, 2) array."""
        return self.matrix[:, :2].copy()

    def to_mat3(self) -> NDArray:
        return self.matrix.copy()

    def to_mat4(self) -> NDArray:
        """Embed into a 4x4 matrix that leaves z untouched."""
        mat = np.eye(4, dtype=self.dtype)
        mat[:2, :2] = self.matrix[:2, :2]
        mat[3, :2] = self.matrix[2, :2]
        return mat

    def to_transform3d(self) -> Transform3d:
        from .transform3d import Transform3d
        return Transform3d.from_transform(self)

    def approx_eq(self, other: Transform, epsilon: float = EPSILON) -> bool:
        return bool(np.allclose(self.matrix, other.matrix, rtol=epsilon, atol=epsilon))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Transform):
            return NotImplemented
        return bool(np.array_equal(self.matrix, other.matrix))

    def __hash__(self) -> int:
        return hash(tuple(self.matrix.ravel().tolist()))

    def __repr__(self) -> str:
        return (
            f"Transform(m11={self.m11}, m12={self.m12}, "
            f"m21={self.m21}, m22={self.m22}, "
            f"m31={self.m31}, m32={self.m32})"
        )


@dataclass(frozen=True)
class Decomposition:
    """
    Components of a 2D affine transform.

    Recomposed in the order skew, scale, rotate, translate.
    """
    translation: Vector
    rotation: Angle
    scale: Vector
    skew: Angle

    def recompose(self) -> Transform:
        return (
            Transform.from_skew(self.skew, Angle.zero())
            .post_scale(self.scale.dx, self.scale.dy)
            .post_rotate(self.rotation)
            .post_translate(self.translation.dx, self.translation.dy)
        )
