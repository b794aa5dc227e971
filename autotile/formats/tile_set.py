"""
Terrain Autotile - Tile Set Data Model

A tile set lists every tile with its pattern and selection frequency.
Handles loading from and saving to JSON files, and building an
AutoTileContext from the tiles.

File format:

    {
      "name": "grass-and-water",
      "tiles": [
        {"id": 1, "pattern": [1, 1, 1, 1, 1, 1, 1, 1, 1], "frequency": 1.0},
        ...
      ]
    }

Pattern bits are listed by flat index x + 3*y, starting from the bottom
row (see PatternBits).
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..core.context import AutoTileContext
from ..core.pattern import PatternBits
from . import compact_json as json

logger = logging.getLogger(__name__)

# Tile id registered for the empty pattern; resolving to it erases a cell.
EMPTY_TILE = -1

# Terrain id reserved for empty cells. Tiles whose center is this value are
# never offered to the autotiler.
EMPTY_TERRAIN = 0


class TileSetError(Exception):
    """Raised when a tile set definition is malformed."""

    pass


@dataclass(frozen=True)
class TileDefinition:
    """One tile: its id, pattern and how often it should be chosen."""

    tile_id: int
    pattern: PatternBits
    frequency: float = 1.0

    @property
    def terrain(self) -> int:
        return self.pattern.center()


class TileSetData:
    """Manages a tile set: tile ids, their patterns and frequencies."""

    def __init__(self, name: str = ""):
        self.name = name
        self.tiles: Dict[int, TileDefinition] = {}
        self.filepath: Optional[str] = None

    def __len__(self) -> int:
        return len(self.tiles)

    def __contains__(self, tile_id) -> bool:
        return tile_id in self.tiles

    def add_tile(self, tile_id: int, pattern, frequency: float = 1.0) -> TileDefinition:
        """Add or replace a tile. ``pattern`` may be a PatternBits or 9 ints."""
        if not isinstance(pattern, PatternBits):
            pattern = PatternBits(pattern)
        tile = TileDefinition(tile_id, pattern, float(frequency))
        self.tiles[tile_id] = tile
        return tile

    def pattern_of(self, tile_id: int) -> PatternBits:
        """
        The pattern of a tile.

        Raises:
            TileSetError: If the tile is not part of this tile set
        """
        tile = self.tiles.get(tile_id)
        if tile is None:
            raise TileSetError(f"Tile {tile_id} is not in tile set '{self.name}'")
        return tile.pattern

    def terrains(self) -> List[int]:
        """All non-empty terrain ids used by the tiles, ascending."""
        return sorted({t.terrain for t in self.tiles.values()} - {EMPTY_TERRAIN})

    def load(self, path):
        """
        Load a tile set from a JSON file.

        Raises:
            FileNotFoundError: If the file does not exist
            TileSetError: If the file is not valid JSON or a tile entry is malformed
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Tile set file not found: {path}")

        try:
            with open(path) as f:
                data = json.load(f)
        except ValueError as e:
            raise TileSetError(f"Tile set is not valid JSON: {path}: {e}") from e

        if not isinstance(data, dict):
            raise TileSetError(f"Tile set must be a JSON object: {path}")
        entries = data.get("tiles", [])
        if not isinstance(entries, list):
            raise TileSetError(f"Tile set tiles must be a list: {path}")

        self.name = data.get("name", path.stem)
        self.tiles = {}
        for entry in entries:
            tile = _parse_tile(entry)
            self.tiles[tile.tile_id] = tile

        self.filepath = str(path)
        logger.debug("Loaded tile set '%s' with %d tiles from %s", self.name, len(self.tiles), path)

    def save(self, path=None):
        """Save the tile set to a JSON file."""
        if path is None:
            path = self.filepath
        if path is None:
            raise ValueError("No save path specified")

        data: Dict[str, Any] = {
            "name": self.name,
            "tiles": [
                {
                    "id": tile.tile_id,
                    "pattern": list(tile.pattern.bits),
                    "frequency": tile.frequency,
                }
                for tile in sorted(self.tiles.values(), key=lambda t: t.tile_id)
            ],
        }

        with open(path, "w") as f:
            json.dump(data, f, indent=2)

        self.filepath = str(path)


def _parse_tile(entry: Dict[str, Any]) -> TileDefinition:
    if not isinstance(entry, dict) or "id" not in entry:
        raise TileSetError(f"Tile entry has no id: {entry!r}")
    tile_id = entry["id"]
    if not isinstance(tile_id, int) or isinstance(tile_id, bool):
        raise TileSetError(f"Tile id must be an integer: {tile_id!r}")

    if "pattern" not in entry:
        raise TileSetError(f"Tile {tile_id} has no pattern")
    raw_pattern = entry["pattern"]
    if not isinstance(raw_pattern, list) or not all(
        isinstance(b, int) and not isinstance(b, bool) for b in raw_pattern
    ):
        raise TileSetError(f"Tile {tile_id} pattern must be a list of 9 integers")
    try:
        pattern = PatternBits(raw_pattern)
    except ValueError as e:
        raise TileSetError(f"Tile {tile_id} has an invalid pattern: {e}") from e

    frequency = entry.get("frequency", 1.0)
    if not isinstance(frequency, (int, float)) or isinstance(frequency, bool):
        raise TileSetError(f"Tile {tile_id} frequency must be a number: {frequency!r}")

    return TileDefinition(tile_id, pattern, float(frequency))


def fill_pattern_map(context: AutoTileContext, tile_set: TileSetData) -> None:
    """
    Rebuild an autotile context from a tile set.

    The context always gets the empty pattern on the empty terrain, mapped
    to EMPTY_TILE. Every tile with a positive frequency and a non-empty
    center is then registered under the terrain given by its center, and
    the pattern lists are sorted into priority order.
    """
    context.clear()
    context.add(EMPTY_TERRAIN, PatternBits.default(), 1.0, EMPTY_TILE)
    skipped = 0
    for tile in tile_set.tiles.values():
        if tile.frequency <= 0.0 or tile.terrain == EMPTY_TERRAIN:
            skipped += 1
            continue
        context.add(tile.terrain, tile.pattern, tile.frequency, tile.tile_id)
    context.sort()
    logger.debug(
        "Pattern map for '%s': %d terrains, %d patterns, %d tiles skipped",
        tile_set.name,
        len(context.patterns),
        len(context.values),
        skipped,
    )
