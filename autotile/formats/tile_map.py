"""
Terrain Autotile - Tile Map Data Model

Sparse 2D tile storage, pending tile updates, and the adapters that let the
autotiler read a tile map (PatternSource) and a paint request
(TerrainSource).

File format:

    {"name": "meadow", "tiles": [[x, y, tile_id], ...]}
"""

import logging
import random
from typing import Dict, Iterator, Optional

import numpy as np

from ..core.autotiler import AutoTiler
from ..core.constraint import (
    ConstraintFillRules,
    NeededTerrain,
    PatternSource,
    TerrainSource,
    TileConstraint,
)
from ..core.offsets import Vector2
from ..core.pattern import BIT_MAX, BIT_MIN, PatternBits
from ..core.probability import ProbabilitySet
from . import compact_json as json
from .tile_set import EMPTY_TILE, TileSetData, TileSetError

logger = logging.getLogger(__name__)

# Pending changes to a tile map. None erases the cell.
TilesUpdate = Dict[Vector2, Optional[int]]


class TileMapData:
    """Manages a sparse tile map: Vector2 position -> tile id."""

    def __init__(self, name: str = ""):
        self.name = name
        self.tiles: Dict[Vector2, int] = {}
        self.filepath: Optional[str] = None
        self.modified: bool = False

    def __len__(self) -> int:
        return len(self.tiles)

    def __contains__(self, position) -> bool:
        return position in self.tiles

    def tile_at(self, position: Vector2) -> Optional[int]:
        return self.tiles.get(position)

    def set_tile(self, position: Vector2, tile_id: Optional[int]):
        """Set a tile, or erase it when tile_id is None."""
        if tile_id is None:
            self.tiles.pop(position, None)
        else:
            self.tiles[position] = tile_id
        self.modified = True

    def apply_update(self, update: TilesUpdate):
        """Commit every pending change in an update."""
        for position, tile_id in update.items():
            self.set_tile(position, tile_id)

    def bounds(self) -> Optional[tuple]:
        """(min_x, min_y, max_x, max_y) over all stored tiles, or None if empty."""
        if not self.tiles:
            return None
        xs = [p.x for p in self.tiles]
        ys = [p.y for p in self.tiles]
        return min(xs), min(ys), max(xs), max(ys)

    def load(self, path: str):
        """
        Load a tile map from a JSON file.

        Raises:
            ValueError: If the file is not a JSON object or a tile row is not
                [x, y, tile_id]
        """
        with open(path, "r") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Tile map must be a JSON object: {path}")
        rows = data.get("tiles", [])
        if not isinstance(rows, list):
            raise ValueError(f"Tile map tiles must be a list: {path}")

        self.name = data.get("name", "")
        self.tiles = {}
        for row in rows:
            if (
                not isinstance(row, list)
                or len(row) != 3
                or not all(isinstance(v, int) and not isinstance(v, bool) for v in row)
            ):
                raise ValueError(f"Tile map row must be [x, y, tile_id]: {row!r}")
            x, y, tile_id = row
            self.tiles[Vector2(x, y)] = tile_id

        self.filepath = path
        self.modified = False

    def save(self, path: Optional[str] = None):
        """Save the tile map to a JSON file, rows sorted by position."""
        if path is None:
            path = self.filepath
        if path is None:
            raise ValueError("No save path specified")

        data = {
            "name": self.name,
            "tiles": [[p.x, p.y, tile_id] for p, tile_id in sorted(self.tiles.items())],
        }

        with open(path, "w") as f:
            json.dump(data, f, indent=2)

        self.filepath = path
        self.modified = False


class TileMapPatternSource(PatternSource):
    """
    Reads patterns from a tile map through a tile set.

    A cell's tile is looked up in the pending update first and then in the
    map. Empty cells have the empty pattern. Tiles the tile set does not
    know are logged and treated as unconstrained.
    """

    def __init__(
        self,
        tile_map: TileMapData,
        tile_set: TileSetData,
        update: Optional[TilesUpdate] = None,
    ):
        self.tile_map = tile_map
        self.tile_set = tile_set
        self.update = update if update is not None else {}

    def pattern_at(self, position: Vector2) -> PatternBits:
        """
        Raises:
            TileSetError: If the tile at the position is not in the tile set
        """
        if position in self.update:
            tile_id = self.update[position]
        else:
            tile_id = self.tile_map.tile_at(position)
        if tile_id is None or tile_id == EMPTY_TILE:
            return PatternBits.default()
        return self.tile_set.pattern_of(tile_id)

    def get_terrain(self, position: Vector2) -> Optional[int]:
        try:
            return self.pattern_at(position).center()
        except TileSetError as e:
            logger.error("%s (at %r)", e, position)
            return None

    def get(self, position: Vector2) -> TileConstraint:
        try:
            return TileConstraint.pattern(self.pattern_at(position))
        except TileSetError as e:
            logger.error("%s (at %r)", e, position)
            return TileConstraint.NONE


class BrushTerrainSource(TerrainSource):
    """
    A paint request: which cells need which terrain.

    Cells are visited in the order they were painted.
    """

    def __init__(self):
        self.cells: Dict[Vector2, NeededTerrain] = {}

    def __iter__(self) -> Iterator[NeededTerrain]:
        return iter(self.cells.values())

    def __contains__(self, position) -> bool:
        return position in self.cells

    def __len__(self) -> int:
        return len(self.cells)

    def paint(
        self,
        position: Vector2,
        terrain: int,
        fill: Optional[ConstraintFillRules] = None,
    ):
        """Request a terrain at a position, replacing any earlier request there."""
        if fill is None:
            fill = ConstraintFillRules()
        self.cells[position] = NeededTerrain(position, terrain, fill)

    @classmethod
    def from_array(
        cls,
        terrain_grid,
        origin: Vector2 = Vector2(0, 0),
        fill: Optional[ConstraintFillRules] = None,
    ) -> "BrushTerrainSource":
        """
        Build a paint request from a 2D grid of terrain ids.

        Grid row r, column c paints Vector2(origin.x + c, origin.y + r).
        Cells holding the empty terrain (0) are not painted.

        Raises:
            ValueError: If the grid is not two-dimensional or holds anything
                but integer terrain ids
        """
        grid = np.asarray(terrain_grid)
        if grid.ndim != 2:
            raise ValueError(f"Terrain grid must be 2D, got shape {grid.shape}")
        if grid.size and not np.issubdtype(grid.dtype, np.integer):
            raise ValueError(f"Terrain grid must hold integers, got {grid.dtype}")
        if grid.size and (grid.min() < BIT_MIN or grid.max() > BIT_MAX):
            raise ValueError(f"Terrain ids must be in {BIT_MIN}..{BIT_MAX}")

        source = cls()
        for row, col in np.argwhere(grid != 0):
            position = Vector2(origin.x + int(col), origin.y + int(row))
            source.paint(position, int(grid[row, col]), fill)
        return source


def apply_autotile_to_update(
    autotiler: AutoTiler,
    rng: Optional[random.Random],
    values: Dict[PatternBits, ProbabilitySet],
    update: TilesUpdate,
) -> int:
    """
    Write the autotiler's result into a tiles update.

    Each solved pattern is turned into a random tile with that pattern.
    Patterns with no tile leave the update alone; EMPTY_TILE erases the cell.

    Returns:
        Number of cells written to the update
    """
    written = 0
    for position, pattern in autotiler.items():
        tiles = values.get(pattern)
        if tiles is None:
            continue
        tile_id = tiles.get_random(rng)
        if tile_id is None:
            continue
        update[position] = None if tile_id == EMPTY_TILE else tile_id
        written += 1
    return written
