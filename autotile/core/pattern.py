"""
Terrain Autotile - Tile Patterns

The autotiler places patterns, not tiles. A pattern carries the data that
decides which patterns may sit next to it; turning a pattern into a tile
is a separate, later step.
"""

from __future__ import annotations

import numbers
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import total_ordering
from typing import Iterable

from .offsets import Vector2Diagonal, Vector2Offset, bit_pos

PATTERN_SIZE = 9
BIT_MIN = -128
BIT_MAX = 127


class TilePattern(ABC):
    """
    Base class for patterns the autotiler can place.

    A pattern answers two questions about a neighboring pattern ``to``:
    may it sit at ``offset`` from this one, and may it sit at ``diagonal``
    from this one.
    """

    @abstractmethod
    def is_legal(self, offset, to) -> bool:
        pass

    @abstractmethod
    def is_legal_diagonal(self, diagonal, to) -> bool:
        pass


@total_ordering
@dataclass(frozen=True, eq=True)
class PatternBits(TilePattern):
    """
    A tile pattern for 2D grids stored as a 3x3 grid of small integers.

    The center value is the pattern's terrain. The eight values around it
    are peering bits: two patterns may be adjacent only when the three bits
    along their shared edge match, and diagonal only when their facing
    corner bits match.

    Layout, by flat index (row y = 0 faces down, y = 2 faces up):

        6 7 8
        3 4 5
        0 1 2

    Patterns sort so that the most uniform, simplest patterns come first:
    more bits equal to the center, then fewer distinct values, then the
    raw bits.
    """

    bits: tuple[int, ...]

    def __init__(self, bits: Iterable[int]):
        bits = tuple(bits)
        if len(bits) != PATTERN_SIZE:
            raise ValueError(
                f"Pattern needs {PATTERN_SIZE} bits, got {len(bits)}: {bits}"
            )
        for b in bits:
            if isinstance(b, bool) or not isinstance(b, numbers.Integral):
                raise ValueError(f"Pattern bit must be an integer: {b!r}")
            if not BIT_MIN <= b <= BIT_MAX:
                raise ValueError(f"Pattern bit out of range {BIT_MIN}..{BIT_MAX}: {b}")
        object.__setattr__(self, "bits", tuple(int(b) for b in bits))

    @classmethod
    def default(cls) -> PatternBits:
        """The all-zero pattern, used for empty cells."""
        return cls((0,) * PATTERN_SIZE)

    def center(self) -> int:
        """The pattern's terrain id."""
        return self.bits[bit_pos(1, 1)]

    def center_terrain_count(self) -> int:
        """Number of bits equal to the center, including the center itself."""
        center = self.center()
        return sum(1 for b in self.bits if b == center)

    def unique_terrain_count(self) -> int:
        """Number of distinct values in the pattern."""
        return len(set(self.bits))

    def sort_key(self) -> tuple:
        return (-self.center_terrain_count(), self.unique_terrain_count(), self.bits)

    def __lt__(self, other):
        if not isinstance(other, PatternBits):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __getitem__(self, position: tuple[int, int]) -> int:
        x, y = position
        if not (0 <= x <= 2 and 0 <= y <= 2):
            raise IndexError(f"Illegal pattern bit position: ({x}, {y})")
        return self.bits[bit_pos(x, y)]

    def replace(self, position: tuple[int, int], value: int) -> PatternBits:
        """Copy of this pattern with the bit at (x, y) set to value."""
        x, y = position
        if not (0 <= x <= 2 and 0 <= y <= 2):
            raise IndexError(f"Illegal pattern bit position: ({x}, {y})")
        bits = list(self.bits)
        bits[bit_pos(x, y)] = value
        return PatternBits(bits)

    def is_legal(self, offset: Vector2Offset, to: PatternBits) -> bool:
        return all(
            self.bits[a] == to.bits[b]
            for a, b in zip(offset.peering_bits(), (-offset).peering_bits())
        )

    def is_legal_diagonal(self, diagonal: Vector2Diagonal, to: PatternBits) -> bool:
        return self.bits[diagonal.peering_bit()] == to.bits[(-diagonal).peering_bit()]

    def __repr__(self) -> str:
        b = self.bits
        return (
            f"PatternBits[{b[0]},{b[1]},{b[2]}|{b[3]},{b[4]},{b[5]}"
            f"|{b[6]},{b[7]},{b[8]}]"
        )
