"""
Unit tests for grid positions, offsets and diagonals.
"""

import pytest

from autotile.core.offsets import (
    Vector2,
    Vector2Diagonal,
    Vector2Offset,
    Vector3,
    Vector3Diagonal,
    Vector3Offset,
    bit_pos,
)


# =============================================================================
# 2D
# =============================================================================

class TestVector2Offset:
    """Tests for the four 2D offsets."""

    def test_displacements(self):
        assert (Vector2Offset.LEFT.dx, Vector2Offset.LEFT.dy) == (-1, 0)
        assert (Vector2Offset.DOWN.dx, Vector2Offset.DOWN.dy) == (0, -1)
        assert (Vector2Offset.UP.dx, Vector2Offset.UP.dy) == (0, 1)
        assert (Vector2Offset.RIGHT.dx, Vector2Offset.RIGHT.dy) == (1, 0)

    def test_negation(self):
        assert -Vector2Offset.LEFT == Vector2Offset.RIGHT
        assert -Vector2Offset.DOWN == Vector2Offset.UP

    def test_double_negation_is_identity(self):
        for offset in Vector2Offset:
            assert -(-offset) == offset

    def test_negation_reverses_displacement(self):
        for offset in Vector2Offset:
            assert (-offset).dx == -offset.dx
            assert (-offset).dy == -offset.dy

    def test_peering_bits(self):
        assert Vector2Offset.LEFT.peering_bits() == (0, 3, 6)
        assert Vector2Offset.DOWN.peering_bits() == (0, 1, 2)
        assert Vector2Offset.UP.peering_bits() == (6, 7, 8)
        assert Vector2Offset.RIGHT.peering_bits() == (2, 5, 8)


class TestVector2Diagonal:
    """Tests for the four 2D diagonals."""

    def test_displacements(self):
        assert (Vector2Diagonal.LEFT_DOWN.dx, Vector2Diagonal.LEFT_DOWN.dy) == (-1, -1)
        assert (Vector2Diagonal.RIGHT_DOWN.dx, Vector2Diagonal.RIGHT_DOWN.dy) == (1, -1)
        assert (Vector2Diagonal.LEFT_UP.dx, Vector2Diagonal.LEFT_UP.dy) == (-1, 1)
        assert (Vector2Diagonal.RIGHT_UP.dx, Vector2Diagonal.RIGHT_UP.dy) == (1, 1)

    def test_negation(self):
        assert -Vector2Diagonal.LEFT_DOWN == Vector2Diagonal.RIGHT_UP
        assert -Vector2Diagonal.RIGHT_DOWN == Vector2Diagonal.LEFT_UP

    def test_peering_bit(self):
        assert Vector2Diagonal.LEFT_DOWN.peering_bit() == 0
        assert Vector2Diagonal.RIGHT_DOWN.peering_bit() == 2
        assert Vector2Diagonal.LEFT_UP.peering_bit() == 6
        assert Vector2Diagonal.RIGHT_UP.peering_bit() == 8


class TestVector2:
    """Tests for Vector2 positions."""

    def test_add_offset(self):
        assert Vector2(3, 4) + Vector2Offset.LEFT == Vector2(2, 4)
        assert Vector2(3, 4) + Vector2Offset.UP == Vector2(3, 5)

    def test_add_diagonal(self):
        assert Vector2(3, 4) + Vector2Diagonal.RIGHT_DOWN == Vector2(4, 3)

    def test_add_vector(self):
        assert Vector2(1, 2) + Vector2(10, 20) == Vector2(11, 22)

    def test_add_unsupported_raises(self):
        with pytest.raises(TypeError):
            Vector2(1, 2) + 5

    def test_all_offsets_and_diagonals(self):
        assert len(list(Vector2.all_offsets())) == 4
        assert len(list(Vector2.all_diagonals())) == 4

    def test_hashable(self):
        cells = {Vector2(0, 0): "a", Vector2(0, 0) + Vector2Offset.UP: "b"}
        assert cells[Vector2(0, 1)] == "b"

    def test_ordering_is_by_x_then_y(self):
        assert sorted([Vector2(1, 0), Vector2(0, 5), Vector2(0, 1)]) == [
            Vector2(0, 1),
            Vector2(0, 5),
            Vector2(1, 0),
        ]

    def test_repr(self):
        assert repr(Vector2(-1, 2)) == "(-1,2)"


def test_bit_pos():
    assert bit_pos(0, 0) == 0
    assert bit_pos(2, 0) == 2
    assert bit_pos(1, 1) == 4
    assert bit_pos(0, 2) == 6
    assert bit_pos(2, 2) == 8


# =============================================================================
# 3D
# =============================================================================

class TestVector3:
    """Tests for Vector3 positions and their neighborhoods."""

    def test_six_offsets(self):
        displacements = {(o.dx, o.dy, o.dz) for o in Vector3.all_offsets()}
        assert len(displacements) == 6
        for d in displacements:
            assert sum(abs(c) for c in d) == 1

    def test_twenty_diagonals(self):
        displacements = {d.value for d in Vector3.all_diagonals()}
        assert len(displacements) == 20
        for d in displacements:
            assert sum(abs(c) for c in d) in (2, 3)

    def test_offsets_closed_under_negation(self):
        for offset in Vector3Offset:
            negated = -offset
            assert (negated.dx, negated.dy, negated.dz) == (-offset.dx, -offset.dy, -offset.dz)

    def test_diagonals_closed_under_negation(self):
        for diagonal in Vector3Diagonal:
            assert (-diagonal).value == tuple(-c for c in diagonal.value)
            assert -(-diagonal) == diagonal

    def test_add(self):
        assert Vector3(0, 0, 0) + Vector3Offset.POS_Z == Vector3(0, 0, 1)
        assert Vector3(1, 1, 1) + Vector3Diagonal.C0 == Vector3(0, 0, 0)
        assert Vector3(1, 2, 3) + Vector3(1, 1, 1) == Vector3(2, 3, 4)
