"""
Unit tests for PatternBits: construction, ordering and legality.
"""

import numpy as np
import pytest

from autotile.core.offsets import Vector2Diagonal, Vector2Offset
from autotile.core.pattern import PatternBits


class TestConstruction:
    """Tests for building and reading patterns."""

    def test_default_is_all_zero(self):
        assert PatternBits.default().bits == (0,) * 9

    def test_wrong_size_raises(self):
        with pytest.raises(ValueError, match="9 bits"):
            PatternBits([1, 2, 3])

    def test_out_of_range_raises(self):
        with pytest.raises(ValueError, match="out of range"):
            PatternBits([0, 0, 0, 0, 128, 0, 0, 0, 0])
        with pytest.raises(ValueError, match="out of range"):
            PatternBits([-129, 0, 0, 0, 0, 0, 0, 0, 0])

    @pytest.mark.parametrize("bit", [1.9, 1.0, True, "1", None])
    def test_non_integer_bit_raises(self, bit):
        with pytest.raises(ValueError, match="must be an integer"):
            PatternBits([bit] * 9)

    def test_numpy_integers_become_ints(self):
        p = PatternBits(np.arange(9, dtype=np.int8))
        assert p.bits == tuple(range(9))
        assert all(type(b) is int for b in p.bits)

    def test_accepts_byte_limits(self):
        p = PatternBits([-128, 0, 0, 0, 0, 0, 0, 0, 127])
        assert p.bits[0] == -128
        assert p.bits[8] == 127

    def test_center(self):
        assert PatternBits([0, 0, 0, 0, 7, 0, 0, 0, 0]).center() == 7

    def test_getitem_by_coordinates(self):
        p = PatternBits([0, 1, 2, 3, 4, 5, 6, 7, 8])
        assert p[0, 0] == 0
        assert p[2, 0] == 2
        assert p[0, 2] == 6
        assert p[1, 1] == 4

    def test_getitem_outside_grid_raises(self):
        with pytest.raises(IndexError):
            PatternBits.default()[3, 0]
        with pytest.raises(IndexError):
            PatternBits.default()[0, -1]

    def test_replace_returns_copy(self):
        p = PatternBits.default()
        q = p.replace((2, 2), 5)
        assert q.bits[8] == 5
        assert p.bits[8] == 0

    def test_equal_patterns_hash_equal(self):
        a = PatternBits([1] * 9)
        b = PatternBits((1,) * 9)
        assert a == b
        assert len({a, b}) == 1

    def test_repr(self):
        p = PatternBits([0, 1, 2, 3, 4, 5, 6, 7, 8])
        assert repr(p) == "PatternBits[0,1,2|3,4,5|6,7,8]"


class TestCounts:
    """Tests for the counts that drive ordering."""

    def test_center_terrain_count_includes_center(self):
        assert PatternBits([1] * 9).center_terrain_count() == 9
        assert PatternBits([1, 1, 1, 1, 2, 1, 1, 1, 1]).center_terrain_count() == 1

    def test_unique_terrain_count(self):
        assert PatternBits([1] * 9).unique_terrain_count() == 1
        assert PatternBits([1, 2, 3, 1, 2, 3, 1, 2, 3]).unique_terrain_count() == 3


class TestOrdering:
    """Tests for pattern priority ordering."""

    def test_more_center_bits_first(self):
        a = PatternBits([0, 0, 0, 0, 0, 0, 0, 0, 0])
        b = PatternBits([1, 0, 0, 0, 0, 0, 0, 0, 0])
        assert a < b

    def test_identical_are_equal(self):
        a = PatternBits([0, 1, 0, 0, 0, 0, 0, 0, 0])
        b = PatternBits([0, 1, 0, 0, 0, 0, 0, 0, 0])
        assert a == b
        assert not a < b
        assert not b < a

    def test_center_count_beats_raw_bits(self):
        a = PatternBits([0, 1, 0, 0, 0, 0, 0, 0, 0])
        b = PatternBits([1, 0, 1, 1, 0, 0, 0, 0, 0])
        assert a < b

    def test_fewer_center_bits_sorts_later(self):
        a = PatternBits([0, 1, 0, 1, 0, 1, 2, 0, 0])
        b = PatternBits([1, 0, 1, 1, 0, 0, 0, 0, 0])
        assert a > b

    def test_different_bits_never_equal(self):
        a = PatternBits([0, 1, 0, 1, 0, 1, 0, 0, 0])
        b = PatternBits([1, 0, 1, 1, 0, 0, 0, 0, 0])
        assert a != b
        assert (a < b) != (b < a)

    def test_fewer_unique_values_first(self):
        two = PatternBits([1, 2, 2, 2, 1, 1, 1, 1, 1])
        three = PatternBits([2, 3, 2, 1, 1, 1, 1, 1, 1])
        assert two.center_terrain_count() == three.center_terrain_count()
        assert two < three

    def test_sorting(self):
        uniform = PatternBits([1] * 9)
        edge = PatternBits([1, 1, 1, 1, 1, 1, 2, 2, 2])
        island = PatternBits([2, 2, 2, 2, 1, 2, 2, 2, 2])
        assert sorted([island, edge, uniform]) == [uniform, edge, island]


class TestEdgeLegality:
    """Tests for is_legal across each edge."""

    def test_up(self):
        a = PatternBits([-1, -2, -3, -4, -5, -6, 1, 2, 3])
        b = PatternBits([1, 2, 3, 4, 5, 6, 7, 8, 9])
        assert b.is_legal(Vector2Offset.DOWN, a)

    def test_down(self):
        a = PatternBits([-1, -2, -3, -4, -5, -6, 1, 2, 3])
        b = PatternBits([1, 2, 3, 4, 5, 6, 7, 8, 9])
        assert a.is_legal(Vector2Offset.UP, b)

    def test_right(self):
        a = PatternBits([1, 2, 1, 4, 5, 2, 7, 8, 3])
        b = PatternBits([1, -2, -3, 2, -5, -6, 3, -2, -3])
        assert a.is_legal(Vector2Offset.RIGHT, b)

    def test_right_against_empty(self):
        a = PatternBits([3, 3, 0, 3, 3, 0, 3, 3, 0])
        assert a.is_legal(Vector2Offset.RIGHT, PatternBits.default())

    def test_left(self):
        a = PatternBits([1, 2, 3, 2, 3, 4, 3, 8, 5])
        b = PatternBits([-1, -2, 1, -2, -5, 2, -3, -2, 3])
        assert a.is_legal(Vector2Offset.LEFT, b)

    def test_left_against_empty(self):
        a = PatternBits([0, 3, 3, 0, 3, 3, 0, 3, 3])
        assert a.is_legal(Vector2Offset.LEFT, PatternBits.default())

    def test_mismatch_is_illegal(self):
        a = PatternBits([1] * 9)
        b = PatternBits([2] * 9)
        for offset in Vector2Offset:
            assert not a.is_legal(offset, b)

    def test_symmetric(self):
        a = PatternBits([1, 1, 1, 2, 2, 2, 2, 2, 2])
        b = PatternBits([1] * 9)
        for offset in Vector2Offset:
            assert a.is_legal(offset, b) == b.is_legal(-offset, a)


class TestDiagonalLegality:
    """Tests for is_legal_diagonal at each corner."""

    def test_left_up(self):
        a = PatternBits([1, 2, 1, 2, 1, 4, 3, 8, 5])
        b = PatternBits([-1, -2, 3, -2, -5, -2, -3, -2, -1])
        assert a.is_legal_diagonal(Vector2Diagonal.LEFT_UP, b)

    def test_right_up(self):
        a = PatternBits([1, 2, 1, 2, 1, 4, 1, 8, 3])
        b = PatternBits([3, -2, -1, -2, -5, -2, -3, -2, -1])
        assert a.is_legal_diagonal(Vector2Diagonal.RIGHT_UP, b)

    def test_left_down(self):
        a = PatternBits([3, 2, 1, 2, 1, 4, 1, 8, 5])
        b = PatternBits([-1, -2, -3, -2, -5, -2, -3, -2, 3])
        assert a.is_legal_diagonal(Vector2Diagonal.LEFT_DOWN, b)

    def test_right_down(self):
        a = PatternBits([1, 2, 3, 2, 1, 4, 1, 8, 1])
        b = PatternBits([-3, -2, -1, -2, -5, -2, 3, -2, -1])
        assert a.is_legal_diagonal(Vector2Diagonal.RIGHT_DOWN, b)

    def test_symmetric(self):
        a = PatternBits([1, 2, 3, 4, 5, 6, 7, 8, 9])
        b = PatternBits([9, 7, 3, 4, 5, 6, 7, 2, 1])
        for diagonal in Vector2Diagonal:
            assert a.is_legal_diagonal(diagonal, b) == b.is_legal_diagonal(-diagonal, a)

    def test_corner_mismatch_is_illegal(self):
        a = PatternBits([1] * 9)
        b = PatternBits([2, 1, 1, 1, 1, 1, 1, 1, 1])
        assert not a.is_legal_diagonal(Vector2Diagonal.RIGHT_UP, b)
        assert a.is_legal_diagonal(Vector2Diagonal.LEFT_DOWN, b)
