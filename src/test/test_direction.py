"""
Test compass directions.
"""

import math

import pytest
from pathlib import Path

# Add src to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from geomkit.geometry import Angle, Cardinal, Direction, Vector


class TestCardinal:
    """Test the four-way enum."""

    @pytest.mark.parametrize("cardinal,radians", [
        (Cardinal.NORTH, math.pi / 2),
        (Cardinal.EAST, 0.0),
        (Cardinal.SOUTH, 3 * math.pi / 2),
        (Cardinal.WEST, math.pi),
    ])
    def test_angle(self, cardinal, radians):
        assert cardinal.angle() == Angle(radians)

    def test_negation(self):
        assert -Cardinal.NORTH == Cardinal.SOUTH
        assert -Cardinal.EAST == Cardinal.WEST
        assert all(-(-c) == c for c in Cardinal)

    def test_iteration_order(self):
        assert list(Cardinal) == [Cardinal.NORTH, Cardinal.EAST, Cardinal.SOUTH, Cardinal.WEST]

    def test_to_direction(self):
        assert Cardinal.WEST.to_direction() == Direction.WEST


class TestDirection:
    """Test the eight-way enum."""

    def test_angles(self):
        assert Direction.NORTH.angle().radians == pytest.approx(math.pi / 2)
        assert Direction.NORTHEAST.angle().radians == pytest.approx(math.pi / 4)
        assert Direction.SOUTHEAST.angle().radians == pytest.approx(7 * math.pi / 4)
        assert Direction.SOUTHWEST.angle().radians == pytest.approx(5 * math.pi / 4)
        assert Direction.NORTHWEST.angle().radians == pytest.approx(3 * math.pi / 4)

    def test_unit_vectors(self):
        assert Direction.NORTH.angle().unit_vector().approx_eq(Vector(0.0, 1.0))
        assert Direction.WEST.angle().unit_vector().approx_eq(Vector(-1.0, 0.0))

    def test_negation_is_half_turn(self):
        for direction in Direction:
            turned = (direction.angle() + Angle.pi()).normalized()
            assert turned.approx_eq((-direction).angle())

    def test_iteration(self):
        directions = list(Direction)
        assert len(directions) == 8
        assert directions[0] == Direction.NORTH
        assert directions[3] == Direction.SOUTHEAST

    def test_to_cardinal(self):
        assert Direction.SOUTH.to_cardinal() == Cardinal.SOUTH
        assert Direction.NORTHWEST.to_cardinal() is None
