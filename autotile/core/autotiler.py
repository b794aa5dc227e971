"""
Terrain Autotile - Deterministic Autotiler

Chooses a pattern for every terrain cell of a constraint map, one cell at a
time in the map's order. For each cell the terrain's patterns are tried in
priority order and the first legal one is kept.

A pattern is legal when it agrees with every neighbor that is already
decided, and when every undecided but constrained neighbor still has at
least one pattern it could agree with. There is no backtracking: a cell
whose candidates all fail is left without a pattern.
"""

from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from collections.abc import MutableMapping
from typing import TYPE_CHECKING, Generic, Iterator, Sequence, TypeVar

from .constraint import ConstraintKind, HashConstraintMap, TileConstraint

if TYPE_CHECKING:
    from .context import AutoTileContext

logger = logging.getLogger(__name__)

Pos = TypeVar("Pos")
Ter = TypeVar("Ter")
Pat = TypeVar("Pat")


class TileTerrain(ABC, Generic[Pat]):
    """A set of patterns that may fill a cell, in the order they should be tried."""

    @abstractmethod
    def all_patterns(self) -> Iterator[Pat]:
        pass


class ListTerrain(TileTerrain[Pat]):
    """A terrain backed by a sequence of patterns."""

    def __init__(self, patterns: Sequence[Pat]):
        self.patterns = patterns

    def all_patterns(self) -> Iterator[Pat]:
        return iter(self.patterns)

    def __repr__(self) -> str:
        return f"ListTerrain({list(self.patterns)!r})"


class AutoConstrain(ABC, Generic[Pos, Pat]):
    """
    Everything the autotiler needs to know about one problem.

    Terrain constraints returned by ``constraint_at`` must hold a
    TileTerrain so that their patterns can be listed.
    """

    @abstractmethod
    def all_positions(self) -> Iterator[Pos]:
        """The positions to tile, in the order they should be tiled."""
        pass

    @abstractmethod
    def constraint_at(self, position: Pos) -> TileConstraint:
        pass

    @abstractmethod
    def is_legal(self, from_pattern: Pat, offset, to_pattern: Pat) -> bool:
        """True if ``to_pattern`` may be placed at ``offset`` from ``from_pattern``."""
        pass

    @abstractmethod
    def is_legal_diagonal(self, from_pattern: Pat, diagonal, to_pattern: Pat) -> bool:
        """True if ``to_pattern`` may be placed at ``diagonal`` from ``from_pattern``."""
        pass


class AutoPatternConstraint(AutoConstrain[Pos, Pat]):
    """
    A constraint map paired with a terrain-to-patterns map.

    The constraint map is the specific problem: which cells are undecided,
    their terrains, the fixed cells around them and the solving order. The
    pattern map is shared background: the patterns of each terrain in
    priority order, usually AutoTileContext.patterns.
    """

    def __init__(
        self,
        position_constraints: HashConstraintMap,
        pattern_constraints: dict[Ter, list[Pat]],
    ):
        self.position_constraints = position_constraints
        self.pattern_constraints = pattern_constraints

    def all_positions(self) -> Iterator[Pos]:
        return self.position_constraints.all_positions()

    def constraint_at(self, position: Pos) -> TileConstraint:
        constraint = self.position_constraints.get(position)
        if constraint.kind is ConstraintKind.TERRAIN:
            pattern_list = self.pattern_constraints.get(constraint.value)
            if pattern_list is None:
                return TileConstraint.NONE
            return TileConstraint.terrain(ListTerrain(pattern_list))
        return constraint

    def is_legal(self, from_pattern, offset, to_pattern) -> bool:
        return from_pattern.is_legal(offset, to_pattern)

    def is_legal_diagonal(self, from_pattern, diagonal, to_pattern) -> bool:
        return from_pattern.is_legal_diagonal(diagonal, to_pattern)


class AutoTiler(MutableMapping, Generic[Pos, Pat]):
    """
    Runs the autotiler and holds the result as a position -> pattern mapping.

    The mapping is never cleared by ``autotile``, so several calls with
    different constraints can build up one solution. Cells that already
    have a pattern are never revisited.
    """

    def __init__(self):
        self.patterns: dict[Pos, Pat] = {}

    def __getitem__(self, position: Pos) -> Pat:
        return self.patterns[position]

    def __setitem__(self, position: Pos, pattern: Pat) -> None:
        self.patterns[position] = pattern

    def __delitem__(self, position: Pos) -> None:
        del self.patterns[position]

    def __iter__(self) -> Iterator[Pos]:
        return iter(self.patterns)

    def __len__(self) -> int:
        return len(self.patterns)

    def __repr__(self) -> str:
        return f"AutoTiler({self.patterns!r})"

    def autotile(self, constraint: AutoConstrain) -> list[Pos]:
        """
        Fill in a pattern for every unsolved position of the constraint.

        Args:
            constraint: The problem to solve

        Returns:
            Positions that were visited but had no legal pattern. They are
            left out of the mapping.
        """
        skipped = []
        solved = 0
        for position in constraint.all_positions():
            if position in self.patterns:
                continue
            pattern = self.find_pattern(position, constraint)
            if pattern is None:
                logger.debug("No legal pattern at %r", position)
                skipped.append(position)
            else:
                self.patterns[position] = pattern
                solved += 1
        logger.info("Autotile solved %d positions, skipped %d", solved, len(skipped))
        return skipped

    def find_pattern(self, position: Pos, constraint: AutoConstrain) -> Pat | None:
        """The first pattern of the position's terrain that is legal there."""
        for pattern in constraint.constraint_at(position).all_patterns():
            if self.is_pattern_legal(position, pattern, constraint):
                return pattern
        return None

    def is_pattern_legal(self, position: Pos, pattern: Pat, constraint: AutoConstrain) -> bool:
        """
        Check a pattern against every neighbor of a position.

        Solved neighbors must accept the pattern. Unsolved neighbors with a
        constraint must have at least one pattern that would accept it.
        Unconstrained neighbors accept anything.
        """
        position_type = type(position)

        for diagonal in position_type.all_diagonals():
            neighbor = position + diagonal
            placed = self.patterns.get(neighbor)
            if placed is not None:
                if not constraint.is_legal_diagonal(pattern, diagonal, placed):
                    return False
                continue
            cell_constraint = constraint.constraint_at(neighbor)
            if cell_constraint.is_some() and not any(
                constraint.is_legal_diagonal(pattern, diagonal, other)
                for other in cell_constraint.all_patterns()
            ):
                return False

        for offset in position_type.all_offsets():
            neighbor = position + offset
            placed = self.patterns.get(neighbor)
            if placed is not None:
                if not constraint.is_legal(pattern, offset, placed):
                    return False
                continue
            cell_constraint = constraint.constraint_at(neighbor)
            if cell_constraint.is_some() and not any(
                constraint.is_legal(pattern, offset, other)
                for other in cell_constraint.all_patterns()
            ):
                return False

        return True

    def resolve_tiles(
        self,
        context: AutoTileContext,
        rng: random.Random | None = None,
    ) -> dict[Pos, object]:
        """
        Pick a concrete tile for every solved position.

        Positions whose pattern has no tile in the context are left out.
        """
        tiles = {}
        for position, pattern in self.patterns.items():
            tile = context.get_random_value(pattern, rng)
            if tile is not None:
                tiles[position] = tile
        return tiles
