"""
Test the Angle value type.
"""

import math

import pytest
from pathlib import Path

# Add src to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from geomkit.geometry import Angle, Vector


class TestAngle:
    """Test construction, conversion and arithmetic."""

    def test_degrees_radians(self):
        assert Angle.from_degrees(180.0).radians == pytest.approx(math.pi)
        assert Angle.pi().degrees == pytest.approx(180.0)
        assert Angle.tau().radians == math.tau
        assert Angle.zero().radians == 0.0

    def test_map_units(self):
        a = Angle.zero().map_degrees(lambda d: d + 90.0)
        assert a.radians == pytest.approx(math.pi / 2)
        b = Angle.pi().map_radians(lambda r: r / 2)
        assert b.degrees == pytest.approx(90.0)

    def test_trig(self):
        a = Angle.from_degrees(30.0)
        assert a.sin() == pytest.approx(0.5)
        sin, cos = a.sin_cos()
        assert sin == pytest.approx(0.5)
        assert cos == pytest.approx(math.sqrt(3) / 2)
        assert Angle.from_degrees(45.0).tan() == pytest.approx(1.0)

    def test_unit_vector(self):
        assert Angle.from_degrees(90.0).unit_vector().approx_eq(Vector(0.0, 1.0))

    @pytest.mark.parametrize("radians,expected", [
        (-math.pi / 2, 3 * math.pi / 2),
        (3 * math.pi, math.pi),
        (0.5, 0.5),
    ])
    def test_normalized(self, radians, expected):
        assert Angle(radians).normalized().radians == pytest.approx(expected)

    def test_arithmetic(self):
        a = Angle(1.0)
        b = Angle(0.5)
        assert a + b == Angle(1.5)
        assert a - b == Angle(0.5)
        assert a * 2 == Angle(2.0)
        assert 2 * a == Angle(2.0)
        assert a / 2 == Angle(0.5)
        assert a / b == 2.0
        assert -a == Angle(-1.0)

    def test_ordering(self):
        assert Angle(1.0) < Angle(2.0)
        assert max(Angle(1.0), Angle(3.0), Angle(2.0)) == Angle(3.0)

    def test_round(self):
        assert Angle(1.6).round() == Angle(2.0)
