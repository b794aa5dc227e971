"""Shared pytest fixtures for autotile tests."""

import random
from pathlib import Path

import pytest

from autotile.core.context import AutoTileContext
from autotile.formats.tile_map import TileMapData
from autotile.formats.tile_set import TileSetData, fill_pattern_map

DATA_DIR = Path(__file__).parent.parent / "data"
FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def meadow_tileset_path():
    """Path to the grass-and-water sample tile set."""
    return DATA_DIR / "tilesets" / "meadow.json"


@pytest.fixture
def meadow_map_path():
    """Path to the 7x7 all-grass sample map."""
    return DATA_DIR / "maps" / "meadow.json"


@pytest.fixture
def pond_paint_path():
    """Path to the 3x3 pond paint request."""
    return DATA_DIR / "paint" / "pond.json"


@pytest.fixture
def broken_tileset_path():
    return FIXTURES_DIR / "broken_tileset.json"


@pytest.fixture
def island_map_path():
    return FIXTURES_DIR / "island_map.json"


@pytest.fixture
def meadow_tileset(meadow_tileset_path):
    """Load the sample tile set."""
    tile_set = TileSetData()
    tile_set.load(meadow_tileset_path)
    return tile_set


@pytest.fixture
def meadow_context(meadow_tileset):
    """Autotile context built from the sample tile set."""
    context = AutoTileContext()
    fill_pattern_map(context, meadow_tileset)
    return context


@pytest.fixture
def meadow_map(meadow_map_path):
    """Load the sample grass map."""
    tile_map = TileMapData()
    tile_map.load(str(meadow_map_path))
    return tile_map


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(1234)
