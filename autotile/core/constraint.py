"""
Terrain Autotile - Cell Constraints

Describes what is known about each cell before autotiling: nothing (outside
the problem), a terrain (the autotiler must choose one of its patterns), or
a pattern (already decided, read-only).

HashConstraintMap turns a sparse paint request plus the surrounding tiles
into that per-cell description, and fixes the order in which cells are
solved.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Iterator, TypeVar

logger = logging.getLogger(__name__)

Pos = TypeVar("Pos")
Ter = TypeVar("Ter")
Pat = TypeVar("Pat")


class ConstraintKind(Enum):
    NONE = 0
    TERRAIN = 1
    PATTERN = 2


@dataclass(frozen=True)
class TileConstraint:
    """
    The ways in which a cell's choice of pattern can be constrained.

    - NONE: the cell is outside the area being considered, such as past the
      edge of the world. It puts no limit on its neighbors.
    - terrain(t): any pattern of terrain t may be chosen for the cell.
    - pattern(p): the cell's pattern is already chosen and may not change.
    """

    kind: ConstraintKind
    value: Any = None

    NONE = None  # set below

    @classmethod
    def terrain(cls, terrain) -> TileConstraint:
        return cls(ConstraintKind.TERRAIN, terrain)

    @classmethod
    def pattern(cls, pattern) -> TileConstraint:
        return cls(ConstraintKind.PATTERN, pattern)

    def is_none(self) -> bool:
        return self.kind is ConstraintKind.NONE

    def is_some(self) -> bool:
        return self.kind is not ConstraintKind.NONE

    def is_terrain(self) -> bool:
        return self.kind is ConstraintKind.TERRAIN

    def is_pattern(self) -> bool:
        return self.kind is ConstraintKind.PATTERN

    def all_patterns(self) -> Iterator:
        """
        Iterate the patterns this constraint permits.

        For a terrain constraint the value must be a TileTerrain and its
        patterns come out in priority order. NONE permits anything, but
        that cannot be listed, so it yields nothing; check is_some() first.
        """
        if self.kind is ConstraintKind.TERRAIN:
            yield from self.value.all_patterns()
        elif self.kind is ConstraintKind.PATTERN:
            yield self.value

    def __repr__(self) -> str:
        if self.kind is ConstraintKind.NONE:
            return "TileConstraint.NONE"
        return f"TileConstraint.{self.kind.name.lower()}({self.value!r})"


TileConstraint.NONE = TileConstraint(ConstraintKind.NONE)


@dataclass(frozen=True)
class ConstraintFillRules:
    """
    Whether the cells around a painted cell may be re-tiled to blend with it.

    Cells added this way keep their current terrain but may get a new pattern.
    """

    include_adjacent: bool = False
    include_diagonal: bool = False


@dataclass(frozen=True)
class NeededTerrain(Generic[Pos, Ter]):
    """A cell that needs a tile: where, which terrain, and what to do around it."""

    position: Pos
    terrain: Ter
    fill: ConstraintFillRules = field(default_factory=ConstraintFillRules)


class TerrainSource(ABC, Generic[Pos, Ter]):
    """
    The autotiling problem: the cells that need tiles and their terrains.

    Iterating yields NeededTerrain entries; ``position in source`` is True
    for every position the source asks to be tiled.
    """

    @abstractmethod
    def __iter__(self) -> Iterator[NeededTerrain[Pos, Ter]]:
        pass

    @abstractmethod
    def __contains__(self, position) -> bool:
        pass

    def contains_position(self, position: Pos) -> bool:
        return position in self


class PatternSource(ABC, Generic[Pos, Ter, Pat]):
    """
    The environment around the problem: what is already at any position.
    """

    @abstractmethod
    def get(self, position: Pos) -> TileConstraint:
        """The constraint for the cell at the given position."""
        pass

    @abstractmethod
    def get_terrain(self, position: Pos) -> Ter | None:
        """The terrain of the pattern at the given position, if any."""
        pass


class HashConstraintMap(Generic[Pos, Ter, Pat]):
    """
    Constraints for one autotiling run, stored by position.

    Positions given a terrain constraint are also recorded in insertion
    order; that list is what the autotiler solves, in that order. Any
    position never inserted is unconstrained.
    """

    def __init__(self):
        self._constraints: dict[Pos, TileConstraint] = {}
        self._terrain_cells: list[Pos] = []
        self._terrain_set: set[Pos] = set()

    def __len__(self) -> int:
        return len(self._constraints)

    def __contains__(self, position) -> bool:
        return position in self._constraints

    def __iter__(self) -> Iterator[Pos]:
        return iter(self._constraints)

    def items(self):
        return self._constraints.items()

    def __repr__(self) -> str:
        lines = ["HashConstraintMap:"]
        for pos, constraint in self._constraints.items():
            lines.append(f" {pos!r}->{constraint!r}")
        lines.append(f"terrain_cells: {self._terrain_cells!r}")
        return "\n".join(lines)

    def clear(self) -> None:
        """Make every cell unconstrained."""
        self._constraints.clear()
        self._terrain_cells.clear()
        self._terrain_set.clear()

    def insert(self, position: Pos, constraint: TileConstraint) -> None:
        """Set the constraint for a position, replacing any earlier one."""
        if constraint.is_terrain():
            self._terrain_cells.append(position)
            self._terrain_set.add(position)
        self._constraints[position] = constraint

    def get(self, position: Pos) -> TileConstraint:
        return self._constraints.get(position, TileConstraint.NONE)

    def all_positions(self) -> Iterator[Pos]:
        """Iterate the terrain cells in the order they should be tiled."""
        return iter(self._terrain_cells)

    def is_terrain_cell(self, position: Pos) -> bool:
        return position in self._terrain_set

    def fill_from(
        self,
        terrains: TerrainSource[Pos, Ter],
        patterns: PatternSource[Pos, Ter, Pat],
    ) -> None:
        """
        Replace the content of this map from a paint request and its surroundings.

        Cells around a painted cell are queued first, with their current
        terrain, when the cell's fill rules ask for it. The painted cells
        follow with their requested terrains, so an explicit request always
        wins over a surrounding one. Finally every adjacent cell that is not
        being tiled is pinned to whatever the pattern source has there.

        Args:
            terrains: The cells that need tiles
            patterns: The current content of the world
        """
        self.clear()

        for needed in terrains:
            rules = needed.fill
            if rules.include_diagonal:
                for diagonal in type(needed.position).all_diagonals():
                    self._add_surrounding(needed.position + diagonal, terrains, patterns)
            if rules.include_adjacent:
                for offset in type(needed.position).all_offsets():
                    self._add_surrounding(needed.position + offset, terrains, patterns)

        surrounding = len(self._terrain_cells)

        for needed in terrains:
            self.insert(needed.position, TileConstraint.terrain(needed.terrain))

        for position in list(self._terrain_cells):
            for offset in type(position).all_offsets():
                neighbor = position + offset
                if neighbor not in self._terrain_set:
                    self.insert(neighbor, patterns.get(neighbor))

        logger.debug(
            "Constraint map filled: %d terrain cells (%d surrounding), %d constrained cells",
            len(self._terrain_cells),
            surrounding,
            len(self._constraints),
        )

    def _add_surrounding(self, position, terrains, patterns) -> None:
        if position in self._terrain_set or position in terrains:
            return
        terrain = patterns.get_terrain(position)
        if terrain is not None:
            self.insert(position, TileConstraint.terrain(terrain))
