"""
Test Vector, Point, Size and the 3D primitives.
"""

import math

import pytest
import numpy as np
from pathlib import Path

# Add src to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from geomkit.errors import CastError, DegenerateGeometryError, InvalidShapeError
from geomkit.geometry import Angle, Vector, Point, Size, Vector3d, Point3d


class TestVector:
    """Test Vector algebra."""

    def test_arithmetic(self):
        v = Vector(1.0, 2.0) + Vector(3.0, -1.0)
        assert v == Vector(4.0, 1.0)
        assert Vector(4.0, 1.0) - Vector(1.0, 1.0) == Vector(3.0, 0.0)
        assert Vector(1.0, 2.0) * 3 == Vector(3.0, 6.0)
        assert 3 * Vector(1.0, 2.0) == Vector(3.0, 6.0)
        assert Vector(3.0, 6.0) / 3 == Vector(1.0, 2.0)
        assert Vector(7, 5) % 3 == Vector(1, 2)
        assert -Vector(1.0, -2.0) == Vector(-1.0, 2.0)

    def test_dot_cross(self):
        v1 = Vector(1.0, 0.0)
        v2 = Vector(0.0, 1.0)
        assert v1.dot(v2) == 0.0
        assert v1.cross(v2) == 1.0
        assert v2.cross(v1) == -1.0

    def test_magnitude_and_normalize(self):
        v = Vector(3.0, 4.0)
        assert v.magnitude() == 5.0
        assert v.magnitude_squared() == 25.0
        n = v.normalized()
        assert n.approx_eq(Vector(0.6, 0.8))
        assert abs(n.magnitude() - 1.0) < 1e-12

    def test_normalize_zero_vector(self):
        with pytest.raises(DegenerateGeometryError):
            Vector.zero().normalized()

    def test_angles(self):
        assert Vector(0.0, 1.0).angle().radians == pytest.approx(math.pi / 2)
        assert Vector(1.0, 0.0).angle_to(Vector(0.0, 1.0)).radians == pytest.approx(math.pi / 2)
        assert Vector(0.0, 1.0).angle_to(Vector(1.0, 0.0)).radians == pytest.approx(-math.pi / 2)
        assert Vector.from_angle(Angle.pi()).approx_eq(Vector(-1.0, 0.0))

    def test_perpendicular(self):
        assert Vector(1.0, 0.0).perpendicular() == Vector(-0.0, 1.0)

    def test_scaled(self):
        assert Vector(2.0, 3.0).scaled(Vector(2.0, 0.5)) == Vector(4.0, 1.5)
        assert Vector(2.0, 3.0).scaled(Size(3.0, 2.0)) == Vector(6.0, 6.0)

    def test_conversions(self):
        v = Vector(1.5, 2.5)
        np.testing.assert_array_almost_equal(v.to_array(), [1.5, 2.5])
        assert Vector.from_array(np.array([1.5, 2.5])) == v
        assert v.to_point() == Point(1.5, 2.5)
        assert v.to_size() == Size(1.5, 2.5)
        assert v.to_tuple() == (1.5, 2.5)
        assert v.with_dx(0.0) == Vector(0.0, 2.5)

    def test_from_array_bad_shape(self):
        with pytest.raises(InvalidShapeError):
            Vector.from_array(np.zeros(3))

    def test_lerp(self):
        assert Vector(0.0, 0.0).lerp(Vector(10.0, 20.0), 0.5) == Vector(5.0, 10.0)


class TestPoint:
    """Test Point/Vector interaction."""

    def test_point_vector_algebra(self):
        p = Point(1.0, 2.0)
        assert p + Vector(1.0, 1.0) == Point(2.0, 3.0)
        assert p - Vector(1.0, 1.0) == Point(0.0, 1.0)
        assert Point(4.0, 6.0) - p == Vector(3.0, 4.0)

    def test_point_plus_point_rejected(self):
        with pytest.raises(TypeError):
            Point(1.0, 2.0) + Point(3.0, 4.0)

    def test_distances(self):
        p1 = Point(0.0, 0.0)
        p2 = Point(3.0, 4.0)
        assert p1.distance_to(p2) == 5.0
        assert p1.distance_squared_to(p2) == 25.0
        assert p1.midpoint(p2) == Point(1.5, 2.0)

    def test_move_to_by(self):
        assert Point(0.0, 0.0).move_to_by(Point(10.0, 0.0), 3.0) == Point(3.0, 0.0)

    def test_with_fields(self):
        p = Point(1, 2)
        assert p.with_x(5) == Point(5, 2)
        assert p.with_y(5) == Point(1, 5)
        assert p == Point(1, 2)

    def test_immutable(self):
        p = Point(1.0, 2.0)
        with pytest.raises(AttributeError):
            p.x = 3.0

    def test_cast(self):
        p = Point(1.7, -2.2).to_i32()
        assert p == Point(1, -2)
        assert isinstance(p.x, np.int32)

    def test_cast_out_of_range(self):
        with pytest.raises(CastError):
            Point(1e10, 0.0).to_i8()

    def test_round(self):
        assert Point(3.5, -2.5).round() == Point(4.0, -3.0)
        assert Point(3.5, -2.5).floor() == Point(3.0, -3.0)
        assert Point(3.5, -2.5).ceil() == Point(4.0, -2.0)

    def test_to_f32(self):
        p = Point(1, 2).to_f32()
        assert isinstance(p.y, np.float32)


class TestSize:
    """Test Size invariants and fitting."""

    def test_negative_rejected(self):
        with pytest.raises(InvalidShapeError):
            Size(-1.0, 2.0)
        assert Size.try_new(-1.0, 2.0) is None
        assert Size.try_new(1.0, 2.0) == Size(1.0, 2.0)

    def test_measures(self):
        s = Size(4.0, 2.0)
        assert s.area() == 8.0
        assert s.aspect_ratio() == 2.0
        assert s.is_landscape()
        assert not s.is_portrait()
        assert Size.square(3.0).is_square()
        assert s.min_dim() == 2.0
        assert s.max_dim() == 4.0

    def test_scaling(self):
        s = Size(4.0, 2.0)
        assert s.scale(Vector(0.5, 2.0)) == Size(2.0, 4.0)
        assert s.scale_uniform(2) == Size(8.0, 4.0)
        assert s.resize_width(1.0) == Size(1.0, 2.0)
        assert s + Size(1.0, 1.0) == Size(5.0, 3.0)

    def test_fit_and_fill(self):
        s = Size(4.0, 2.0)
        assert s.fit_width(8.0) == Size(8.0, 4.0)
        assert s.fit_height(1.0) == Size(2.0, 1.0)
        assert s.fill(Size(10.0, 10.0)) == Size(20.0, 10.0)
        assert s.fill_and_fit(Size(10.0, 10.0)) == Size(10.0, 5.0)
        # fit never upscales
        assert s.fit(Size(10.0, 10.0)) == Size(4.0, 2.0)
        assert Size(40.0, 20.0).fit(Size(10.0, 10.0)) == Size(10.0, 5.0)

    def test_vector_round_trip(self):
        assert Size.from_vector(Vector(1.0, 2.0)).to_vector() == Vector(1.0, 2.0)


class TestPrimitives3d:
    """Test Vector3d and Point3d."""

    def test_vector_operations(self):
        v1 = Vector3d(1.0, 0.0, 0.0)
        v2 = Vector3d(0.0, 1.0, 0.0)

        assert v1.dot(v2) == 0.0
        np.testing.assert_array_almost_equal(v1.cross(v2).to_array(), [0.0, 0.0, 1.0])
        assert Vector3d(2.0, 3.0, 6.0).magnitude() == 7.0
        assert abs(Vector3d(3.0, 4.0, 12.0).normalized().magnitude() - 1.0) < 1e-12

    def test_normalize_zero(self):
        with pytest.raises(DegenerateGeometryError):
            Vector3d.zero().normalized()

    def test_point_algebra(self):
        p = Point3d(1.0, 2.0, 3.0)
        assert p + Vector3d(1.0, 1.0, 1.0) == Point3d(2.0, 3.0, 4.0)
        assert Point3d(4.0, 6.0, 3.0) - p == Vector3d(3.0, 4.0, 0.0)
        assert p.distance_to(Point3d(1.0, 2.0, 5.0)) == 2.0
        assert p.to_point() == Point(1.0, 2.0)
        assert Point3d.from_point(Point(1.0, 2.0)) == Point3d(1.0, 2.0, 0.0)

    def test_array_round_trip(self):
        p = Point3d.from_array(np.array([1.0, 2.0, 3.0]))
        np.testing.assert_array_almost_equal(p.to_array(), [1.0, 2.0, 3.0])
