"""
3D transform stored as a 4x4 homogeneous matrix.

Same row-vector convention as the 2D Transform:
``[x', y', z', w'] = [x, y, z, w] @ M``, translation in ``m41..m43`` and the
perspective column in ``m14..m44``. Rotations are built and extracted with
``scipy.spatial.transform.Rotation`` (right-handed: +x turns toward +y about
+z, matching the 2D rotation).
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import math
from typing import Callable, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import DTypeLike, NDArray
from scipy.spatial.transform import Rotation

from ..errors import (
    DecompositionError,
    DegenerateGeometryError,
    InvalidShapeError,
    SingularMatrixError,
)
from .angle import Angle
from .primitives import Point, Point3d, Size, Vector, Vector3d
from .rect import Rect
from .scalar import CastMixin, DEFAULT_DTYPE, EPSILON, Scalar
from .shapes import Quad
from .transform import Transform

logger = logging.getLogger(__name__)

# Relative threshold below which a basis column counts as collapsed
_DEGENERATE_TOLERANCE = 1e-12


def _entry(row: int, col: int) -> property:
    return property(lambda self: self.matrix[row, col])


def _from_linear(linear: NDArray) -> NDArray:
    """Embed a 3x3 column-vector linear map into a row-vector 4x4 matrix."""
    mat = np.eye(4, dtype=np.float64)
    mat[:3, :3] = np.asarray(linear).T
    return mat


@dataclass(frozen=True, eq=False)
class Transform3d(CastMixin):
    """
    3D affine/projective transformation.

    Attributes:
        matrix: Read-only 4x4 homogeneous matrix (row-vector convention)
    """

    matrix: NDArray = field(default_factory=lambda: np.eye(4, dtype=DEFAULT_DTYPE))

    def __post_init__(self):
        """Validate and freeze the matrix."""
        matrix = np.array(self.matrix)
        if matrix.shape != (4, 4):
            raise InvalidShapeError(f"matrix must have shape (4, 4), got {matrix.shape}")
        matrix.setflags(write=False)
        object.__setattr__(self, "matrix", matrix)

    m11, m12, m13, m14 = (_entry(0, c) for c in range(4))
    m21, m22, m23, m24 = (_entry(1, c) for c in range(4))
    m31, m32, m33, m34 = (_entry(2, c) for c in range(4))
    m41, m42, m43, m44 = (_entry(3, c) for c in range(4))

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def row_major(cls, *values: Scalar, dtype: DTypeLike = None) -> Transform3d:
        """Create from 16 entries, row by row."""
        if len(values) != 16:
            raise InvalidShapeError(f"row_major expects 16 values, got {len(values)}")
        if dtype is None:
            dtype = np.result_type(*values)
        return cls(np.array(values, dtype=dtype).reshape(4, 4))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Scalar]]) -> Transform3d:
        return cls(np.asarray(rows))

    @classmethod
    def identity(cls, dtype: DTypeLike = DEFAULT_DTYPE) -> Transform3d:
        return cls(np.eye(4, dtype=dtype))

    @classmethod
    def from_scale(cls, x: Scalar, y: Scalar, z: Scalar) -> Transform3d:
        mat = np.eye(4, dtype=np.result_type(x, y, z, 1))
        mat[0, 0], mat[1, 1], mat[2, 2] = x, y, z
        return cls(mat)

    @classmethod
    def from_translation(cls, x: Scalar, y: Scalar, z: Scalar) -> Transform3d:
        mat = np.eye(4, dtype=np.result_type(x, y, z, 1))
        mat[3, :3] = (x, y, z)
        return cls(mat)

    @classmethod
    def from_rotation(cls, axis: Vector3d, angle: Angle) -> Transform3d:
        """
        Right-handed rotation of ``angle`` about ``axis``.

        Raises:
            DegenerateGeometryError: If ``axis`` is the zero vector.
        """
        unit = axis.normalized().to_array().astype(np.float64)
        return cls.from_scipy_rotation(Rotation.from_rotvec(unit * angle.radians))

    @classmethod
    def from_rotation_x(cls, angle: Angle) -> Transform3d:
        return cls.from_rotation(Vector3d(1.0, 0.0, 0.0), angle)

    @classmethod
    def from_rotation_y(cls, angle: Angle) -> Transform3d:
        return cls.from_rotation(Vector3d(0.0, 1.0, 0.0), angle)

    @classmethod
    def from_rotation_z(cls, angle: Angle) -> Transform3d:
        return cls.from_rotation(Vector3d(0.0, 0.0, 1.0), angle)

    @classmethod
    def from_euler(cls, seq: str, angles: Sequence[Angle]) -> Transform3d:
        """Rotation from Euler angles in scipy's ``seq`` notation (e.g. "xyz", "ZYX")."""
        radians = [angle.radians for angle in angles]
        if len(seq) != len(radians):
            raise InvalidShapeError(f"Euler sequence {seq!r} needs {len(seq)} angles, got {len(radians)}")
        # A one-axis sequence with a list would build a stack of rotations
        return cls.from_scipy_rotation(
            Rotation.from_euler(seq, radians[0] if len(radians) == 1 else radians)
        )

    @classmethod
    def from_quaternion(cls, x: float, y: float, z: float, w: float) -> Transform3d:
        """Rotation from a (scalar-last) quaternion; normalised on input."""
        return cls.from_scipy_rotation(Rotation.from_quat([x, y, z, w]))

    @classmethod
    def from_scipy_rotation(cls, rotation: Rotation) -> Transform3d:
        return cls(_from_linear(rotation.as_matrix()))

    @classmethod
    def from_shear(cls, xy: Scalar, xz: Scalar, yz: Scalar) -> Transform3d:
        """
        Shear: ``x' = x + xy*y + xz*z``, ``y' = y + yz*z``, ``z' = z``.
        """
        return cls(_from_linear([
            [1.0, xy, xz],
            [0.0, 1.0, yz],
            [0.0, 0.0, 1.0],
        ]))

    @classmethod
    def from_transform(cls, transform: Transform) -> Transform3d:
        """Embed a 2D transform; z passes through unchanged."""
        return cls(transform.to_mat4())

    @classmethod
    def ortho(cls, left: float, right: float, bottom: float, top: float,
              near: float, far: float) -> Transform3d:
        """
        Orthographic projection of the given box onto the [-1, 1] cube.

        ``left``/``right`` map to x = -1/+1, ``top``/``bottom`` to y = -1/+1
        (y-down: the top edge lands at -1), ``near``/``far`` to z = -1/+1.
        """
        return cls.from_scale(
            2.0 / (right - left),
            2.0 / (bottom - top),
            -2.0 / (far - near),
        ).post_mul(cls.from_translation(
            -(right + left) / (right - left),
            -(bottom + top) / (bottom - top),
            -(far + near) / (far - near),
        ))

    @classmethod
    def ortho_from_rect(cls, rect: Rect) -> Transform3d:
        """
        Orthographic projection of a y-down rect.

        The top edge lands at y = -1 and the bottom edge at y = +1; z is unchanged.
        """
        return cls.ortho(rect.left, rect.right, rect.bottom, rect.top, 1.0, -1.0)

    @classmethod
    def persp(cls, size: Size, fov: Angle, near: float, far: float) -> Transform3d:
        """Perspective projection with vertical field of view ``fov``."""
        f = 1.0 / math.tan(fov.radians / 2.0)
        depth = near - far
        return cls.row_major(
            f / size.aspect_ratio(), 0.0, 0.0, 0.0,
            0.0, f, 0.0, 0.0,
            0.0, 0.0, far / depth, -1.0,
            0.0, 0.0, near * far / depth, 0.0,
        )

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------

    @property
    def dtype(self) -> np.dtype:
        return self.matrix.dtype

    @property
    def translation(self) -> Vector3d:
        return Vector3d(self.m41, self.m42, self.m43)

    def map(self, f: Callable[[Scalar], Scalar]) -> Transform3d:
        """Apply ``f`` to all sixteen entries."""
        return Transform3d.row_major(*(f(value) for value in self.matrix.ravel()))

    def is_affine(self, epsilon: float = 0.0) -> bool:
        """True when the perspective column is (0, 0, 0, 1)."""
        return bool(np.allclose(self.matrix[:, 3], (0, 0, 0, 1), rtol=0.0, atol=epsilon))

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    def post_mul(self, other: Transform3d) -> Transform3d:
        """Transform that applies ``self`` first, then ``other``."""
        return Transform3d(self.matrix @ other.matrix)

    def pre_mul(self, other: Transform3d) -> Transform3d:
        """Transform that applies ``other`` first, then ``self``."""
        return other.post_mul(self)

    def __matmul__(self, other: Transform3d) -> Transform3d:
        if not isinstance(other, Transform3d):
            return NotImplemented
        return self.post_mul(other)

    def post_translate(self, x: Scalar, y: Scalar, z: Scalar) -> Transform3d:
        return self.post_mul(Transform3d.from_translation(x, y, z))

    def pre_translate(self, x: Scalar, y: Scalar, z: Scalar) -> Transform3d:
        return self.pre_mul(Transform3d.from_translation(x, y, z))

    def post_scale(self, x: Scalar, y: Scalar, z: Scalar) -> Transform3d:
        return self.post_mul(Transform3d.from_scale(x, y, z))

    def pre_scale(self, x: Scalar, y: Scalar, z: Scalar) -> Transform3d:
        return self.pre_mul(Transform3d.from_scale(x, y, z))

    def post_rotate(self, axis: Vector3d, angle: Angle) -> Transform3d:
        return self.post_mul(Transform3d.from_rotation(axis, angle))

    def pre_rotate(self, axis: Vector3d, angle: Angle) -> Transform3d:
        return self.pre_mul(Transform3d.from_rotation(axis, angle))

    # ------------------------------------------------------------------
    # Inversion
    # ------------------------------------------------------------------

    def determinant(self) -> float:
        return float(np.linalg.det(self.matrix.astype(np.float64)))

    def inverse(self) -> Transform3d:
        """
        Inverse transform.

        Raises:
            SingularMatrixError: If the matrix is singular or numerically so.
        """
        mat = self.matrix.astype(np.float64)
        det = np.linalg.det(mat)
        if det == 0 or not np.isfinite(det) or np.linalg.cond(mat) * np.finfo(np.float64).eps >= 1.0:
            logger.debug("No inverse for 4x4 transform with determinant %r", det)
            raise SingularMatrixError(f"Transform3d is not invertible (determinant {det})")
        return Transform3d(np.linalg.inv(mat))

    def try_inverse(self) -> Optional[Transform3d]:
        try:
            return self.inverse()
        except SingularMatrixError:
            return None

    # ------------------------------------------------------------------
    # Application
    # ------------------------------------------------------------------

    def transform_vector4d(self, vector: NDArray) -> NDArray:
        return np.asarray(vector) @ self.matrix

    def _project(self, homogeneous: NDArray) -> NDArray:
        w = homogeneous[..., 3:]
        if np.any(w == 0):
            raise DegenerateGeometryError("Point maps to infinity (w = 0)")
        if np.all(w == 1):
            return homogeneous[..., :3]
        return homogeneous[..., :3] / w

    def transform_point3d(self, point: Point3d) -> Point3d:
        """Apply the transform, dividing by w for projective matrices."""
        x, y, z = self._project(self.transform_vector4d([point.x, point.y, point.z, 1]))
        return Point3d(x, y, z)

    def transform_vector3d(self, vector: Vector3d) -> Vector3d:
        """Apply the linear part only (w = 0, no translation)."""
        x, y, z, _ = self.transform_vector4d([vector.dx, vector.dy, vector.dz, 0])
        return Vector3d(x, y, z)

    def transform_point(self, point: Point) -> Point:
        """Apply to a 2D point lying in the z = 0 plane; the result's z is dropped."""
        return self.transform_point3d(Point3d.from_point(point)).to_point()

    def transform_vector(self, vector: Vector) -> Vector:
        result = self.transform_vector3d(Vector3d(vector.dx, vector.dy, 0))
        return Vector(result.dx, result.dy)

    def transform_points(self, points: NDArray) -> NDArray:
        """
        Apply transform to point coordinates.

        Args:
            points: Point coordinates (3,) or (N, 3)

        Returns:
            Transformed point(s), same shape
        """
        points = np.asarray(points)
        if points.shape[-1:] != (3,) or points.ndim > 2:
            raise InvalidShapeError(f"points must have shape (3,) or (N, 3), got {points.shape}")
        ones = np.ones(points.shape[:-1] + (1,), dtype=points.dtype)
        return self._project(np.concatenate([points, ones], axis=-1) @ self.matrix)

    def transform_rect(self, rect: Rect) -> Quad:
        """Corners in order top-left, top-right, bottom-right, bottom-left."""
        return Quad(*(self.transform_point(corner) for corner in rect.corners()))

    # ------------------------------------------------------------------
    # Decomposition
    # ------------------------------------------------------------------

    def decompose(self) -> Decomposition3d:
        """
        Split into translation, rotation, scale and shear.

        Convention (column form ``M = T * R * S * H``):

        - translation is the last row;
        - the linear part's basis columns are orthonormalised with
          Gram-Schmidt in x, y, z order; their residual lengths are the scale
          and the projections onto earlier axes are the shear
          (``H`` unit upper triangular, entries xy, xz, yz);
        - a reflection is folded into a negative z scale so that the rotation
          is proper.

        Raises:
            DecompositionError: For projective matrices or a singular linear
                part.
        """
        mat = self.matrix.astype(np.float64)
        if not np.allclose(mat[:3, 3], 0.0, rtol=0.0, atol=EPSILON) or mat[3, 3] == 0:
            raise DecompositionError("Cannot decompose a transform with perspective terms")
        mat = mat / mat[3, 3]

        translation = Vector3d.from_array(mat[3, :3])
        linear = mat[:3, :3].T
        c0, c1, c2 = linear[:, 0], linear[:, 1], linear[:, 2]
        tolerance = _DEGENERATE_TOLERANCE * max(1.0, float(np.abs(linear).max()))

        sx = np.linalg.norm(c0)
        if sx <= tolerance:
            raise DecompositionError("x basis vector collapsed; linear part is singular")
        e0 = c0 / sx

        r01 = e0 @ c1
        w1 = c1 - r01 * e0
        sy = np.linalg.norm(w1)
        if sy <= tolerance:
            raise DecompositionError("y basis vector collapsed; linear part is singular")
        e1 = w1 / sy

        r02 = e0 @ c2
        r12 = e1 @ c2
        w2 = c2 - r02 * e0 - r12 * e1
        sz = np.linalg.norm(w2)
        if sz <= tolerance:
            raise DecompositionError("z basis vector collapsed; linear part is singular")
        e2 = w2 / sz

        # Keep the rotation proper; the reflection moves into the z scale
        if np.linalg.det(np.column_stack([e0, e1, e2])) < 0:
            logger.debug("Folding reflection into negative z scale")
            e2 = -e2
            sz = -sz

        return Decomposition3d(
            translation=translation,
            rotation=Rotation.from_matrix(np.column_stack([e0, e1, e2])),
            scale=Vector3d(float(sx), float(sy), float(sz)),
            shear=Vector3d(float(r01 / sx), float(r02 / sx), float(r12 / sy)),
        )

    # ------------------------------------------------------------------
    # Interop
    # ------------------------------------------------------------------

    def to_array(self) -> NDArray:
        return self.matrix.copy()

    def approx_eq(self, other: Transform3d, epsilon: float = EPSILON) -> bool:
        return bool(np.allclose(self.matrix, other.matrix, rtol=epsilon, atol=epsilon))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Transform3d):
            return NotImplemented
        return bool(np.array_equal(self.matrix, other.matrix))

    def __hash__(self) -> int:
        return hash(tuple(self.matrix.ravel().tolist()))

    def __repr__(self) -> str:
        return f"Transform3d(\n{self.matrix})"


@dataclass(frozen=True)
class Decomposition3d:
    """
    Components of a 3D affine transform.

    Recomposed in the order shear, scale, rotate, translate.

    Attributes:
        translation: Offset applied last
        rotation: Proper rotation (scipy Rotation)
        scale: Per-axis scale; z is negative for reflections
        shear: Shear factors (xy, xz, yz) as in ``Transform3d.from_shear``
    """
    translation: Vector3d
    rotation: Rotation
    scale: Vector3d
    shear: Vector3d

    def quaternion(self) -> Tuple[float, float, float, float]:
        """Rotation as a scalar-last quaternion (x, y, z, w) with w >= 0."""
        quat = self.rotation.as_quat()
        if quat[3] < 0:
            quat = -quat
        x, y, z, w = quat
        return float(x), float(y), float(z), float(w)

    def euler_angles(self, seq: str = "xyz") -> Tuple[Angle, Angle, Angle]:
        """Rotation as Euler angles in scipy's ``seq`` notation."""
        a, b, c = self.rotation.as_euler(seq)
        return Angle(float(a)), Angle(float(b)), Angle(float(c))

    def recompose(self) -> Transform3d:
        return (
            Transform3d.from_shear(self.shear.dx, self.shear.dy, self.shear.dz)
            .post_scale(self.scale.dx, self.scale.dy, self.scale.dz)
            .post_mul(Transform3d.from_scipy_rotation(self.rotation))
            .post_translate(self.translation.dx, self.translation.dy, self.translation.dz)
        )
