"""
Terrain Autotile - Grid Positions and Offsets

Positions know how to reach their neighbors. The solver only ever asks a
position type for its offsets and diagonals and adds them to positions, so
2D and 3D grids (or anything else implementing OffsetPosition) plug in
without changes to the solver.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterator


class OffsetPosition(ABC):
    """
    Base class for positions that can enumerate their neighborhood.

    Subclasses must be hashable values and support ``position + offset`` and
    ``position + diagonal`` for every value returned by ``all_offsets()`` and
    ``all_diagonals()``. Both sets must be closed under negation.
    """

    @classmethod
    @abstractmethod
    def all_offsets(cls) -> Iterator:
        """Iterate the offsets to every adjacent position."""
        pass

    @classmethod
    @abstractmethod
    def all_diagonals(cls) -> Iterator:
        """Iterate the offsets to every nearby but non-adjacent position."""
        pass

    @abstractmethod
    def __add__(self, other):
        pass


# =============================================================================
# 2D
# =============================================================================

def bit_pos(x: int, y: int) -> int:
    """Flat index of (x, y) within a 3x3 pattern grid."""
    return x + y * 3


class Vector2Offset(Enum):
    """Offset from a Vector2 to one of its four adjacent cells."""

    LEFT = 0
    DOWN = 1
    UP = 2
    RIGHT = 3

    def __neg__(self) -> Vector2Offset:
        return Vector2Offset(3 - self.value)

    @property
    def dx(self) -> int:
        return _OFFSETS2[self.value][0]

    @property
    def dy(self) -> int:
        return _OFFSETS2[self.value][1]

    def peering_bits(self) -> tuple[int, int, int]:
        """The three pattern bits along the edge facing this offset."""
        return _OFFSET_PEERING_BITS[self.value]

    def __repr__(self) -> str:
        return f"Vector2Offset({self.dx}, {self.dy})"


class Vector2Diagonal(Enum):
    """Offset from a Vector2 to one of its four corner-touching cells."""

    LEFT_DOWN = 0
    RIGHT_DOWN = 1
    LEFT_UP = 2
    RIGHT_UP = 3

    def __neg__(self) -> Vector2Diagonal:
        return Vector2Diagonal(3 - self.value)

    @property
    def dx(self) -> int:
        return _DIAG2[self.value][0]

    @property
    def dy(self) -> int:
        return _DIAG2[self.value][1]

    def peering_bit(self) -> int:
        """The corner pattern bit facing this diagonal."""
        return _DIAGONAL_PEERING_BITS[self.value]

    def __repr__(self) -> str:
        return f"Vector2Diagonal({self.dx}, {self.dy})"


_OFFSETS2 = ((-1, 0), (0, -1), (0, 1), (1, 0))

_DIAG2 = ((-1, -1), (1, -1), (-1, 1), (1, 1))

_OFFSET_PEERING_BITS = (
    (bit_pos(0, 0), bit_pos(0, 1), bit_pos(0, 2)),
    (bit_pos(0, 0), bit_pos(1, 0), bit_pos(2, 0)),
    (bit_pos(0, 2), bit_pos(1, 2), bit_pos(2, 2)),
    (bit_pos(2, 0), bit_pos(2, 1), bit_pos(2, 2)),
)

_DIAGONAL_PEERING_BITS = (
    bit_pos(0, 0),
    bit_pos(2, 0),
    bit_pos(0, 2),
    bit_pos(2, 2),
)


@dataclass(frozen=True, order=True)
class Vector2(OffsetPosition):
    """Integer 2D grid position. The y axis points up."""

    x: int
    y: int

    @classmethod
    def all_offsets(cls) -> Iterator[Vector2Offset]:
        return iter(Vector2Offset)

    @classmethod
    def all_diagonals(cls) -> Iterator[Vector2Diagonal]:
        return iter(Vector2Diagonal)

    def __add__(self, other):
        if isinstance(other, (Vector2Offset, Vector2Diagonal)):
            return Vector2(self.x + other.dx, self.y + other.dy)
        if isinstance(other, Vector2):
            return Vector2(self.x + other.x, self.y + other.y)
        return NotImplemented

    def __repr__(self) -> str:
        return f"({self.x},{self.y})"


# =============================================================================
# 3D
# =============================================================================

_OFFSETS3 = (
    (-1, 0, 0),
    (0, -1, 0),
    (0, 0, -1),
    (0, 0, 1),
    (0, 1, 0),
    (1, 0, 0),
)


class Vector3Offset(Enum):
    """Offset from a Vector3 to one of its six adjacent cells."""

    NEG_X = 0
    NEG_Y = 1
    NEG_Z = 2
    POS_Z = 3
    POS_Y = 4
    POS_X = 5

    def __neg__(self) -> Vector3Offset:
        return Vector3Offset(5 - self.value)

    @property
    def dx(self) -> int:
        return _OFFSETS3[self.value][0]

    @property
    def dy(self) -> int:
        return _OFFSETS3[self.value][1]

    @property
    def dz(self) -> int:
        return _OFFSETS3[self.value][2]

    def __repr__(self) -> str:
        return f"Vector3Offset({self.dx}, {self.dy}, {self.dz})"


class Vector3Diagonal(Enum):
    """
    Offset from a Vector3 to a cell touching it along an edge or a corner.

    The value is the (dx, dy, dz) displacement itself.
    """

    # Corners, z = -1
    C0 = (-1, -1, -1)
    C1 = (1, -1, -1)
    C2 = (-1, 1, -1)
    C3 = (1, 1, -1)
    # Edges in the z = 0 plane
    E0 = (-1, -1, 0)
    E1 = (1, -1, 0)
    E2 = (-1, 1, 0)
    E3 = (1, 1, 0)
    # Corners, z = 1
    C4 = (-1, -1, 1)
    C5 = (1, -1, 1)
    C6 = (-1, 1, 1)
    C7 = (1, 1, 1)
    # Edges leaving the z = 0 plane
    E4 = (-1, 0, -1)
    E5 = (0, -1, -1)
    E6 = (1, 0, -1)
    E7 = (0, 1, -1)
    E8 = (-1, 0, 1)
    E9 = (0, -1, 1)
    E10 = (1, 0, 1)
    E11 = (0, 1, 1)

    def __neg__(self) -> Vector3Diagonal:
        return Vector3Diagonal(tuple(-c for c in self.value))

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def dz(self) -> int:
        return self.value[2]

    def __repr__(self) -> str:
        return f"Vector3Diagonal({self.dx}, {self.dy}, {self.dz})"


@dataclass(frozen=True, order=True)
class Vector3(OffsetPosition):
    """Integer 3D grid position."""

    x: int
    y: int
    z: int

    @classmethod
    def all_offsets(cls) -> Iterator[Vector3Offset]:
        return iter(Vector3Offset)

    @classmethod
    def all_diagonals(cls) -> Iterator[Vector3Diagonal]:
        return iter(Vector3Diagonal)

    def __add__(self, other):
        if isinstance(other, (Vector3Offset, Vector3Diagonal)):
            return Vector3(self.x + other.dx, self.y + other.dy, self.z + other.dz)
        if isinstance(other, Vector3):
            return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)
        return NotImplemented

    def __repr__(self) -> str:
        return f"({self.x},{self.y},{self.z})"
