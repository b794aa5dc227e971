"""
Terrain Autotile - PIL Renderer

PIL-based preview images of autotile results and tile maps. Every cell is
drawn as its 3x3 pattern, one colored square per bit, so seams between
mismatched patterns are easy to spot. Used by the visualize and autotile
tools.
"""

from typing import Mapping

import numpy as np

try:
    from PIL import Image
except ImportError:
    raise ImportError("Pillow library required. Install with: pip install Pillow")

from ..core.offsets import Vector2
from ..core.pattern import PatternBits
from ..formats.tile_map import TileMapData
from ..formats.tile_set import TileSetData, TileSetError

# Colors for terrain ids 0..7; other ids wrap around.
TERRAIN_COLORS = (
    (0, 0, 0),  # empty
    (88, 160, 64),  # grass
    (48, 96, 200),  # water
    (200, 180, 120),  # sand
    (120, 120, 120),  # stone
    (40, 90, 40),  # forest
    (230, 230, 240),  # snow
    (150, 60, 40),  # dirt
)
MISSING_COLOR = (255, 0, 255)
NEGATIVE_COLOR = (255, 255, 0)

DEFAULT_CELL_SIZE = 12


def terrain_color(value: int) -> tuple:
    """Preview color for a pattern bit."""
    if value < 0:
        return NEGATIVE_COLOR
    return TERRAIN_COLORS[value % len(TERRAIN_COLORS)]


def render_patterns_to_image(
    patterns: Mapping[Vector2, PatternBits],
    cell_size: int = DEFAULT_CELL_SIZE,
    missing: frozenset = frozenset(),
) -> Image.Image:
    """
    Render a position -> pattern mapping to a PIL Image.

    Args:
        patterns: Patterns to draw, e.g. an AutoTiler
        cell_size: Size in pixels of one cell; rounded down to a multiple of 3
        missing: Positions to mark as unsolved

    Returns:
        PIL Image object. The top row of the image is the highest y.
    """
    positions = set(patterns) | set(missing)
    if not positions:
        return Image.new("RGB", (1, 1))

    bit_size = max(1, cell_size // 3)
    cell = bit_size * 3

    min_x = min(p.x for p in positions)
    max_x = max(p.x for p in positions)
    min_y = min(p.y for p in positions)
    max_y = max(p.y for p in positions)

    width = (max_x - min_x + 1) * cell
    height = (max_y - min_y + 1) * cell
    pixels = np.zeros((height, width, 3), dtype=np.uint8)

    for position in missing:
        top = (max_y - position.y) * cell
        left = (position.x - min_x) * cell
        pixels[top:top + cell, left:left + cell] = MISSING_COLOR

    for position, pattern in patterns.items():
        top = (max_y - position.y) * cell
        left = (position.x - min_x) * cell
        for bx in range(3):
            for by in range(3):
                # Pattern row y = 2 is the top of the cell
                y0 = top + (2 - by) * bit_size
                x0 = left + bx * bit_size
                pixels[y0:y0 + bit_size, x0:x0 + bit_size] = terrain_color(pattern[bx, by])

    return Image.fromarray(pixels)


def render_tile_map_to_image(
    tile_map: TileMapData,
    tile_set: TileSetData,
    cell_size: int = DEFAULT_CELL_SIZE,
) -> Image.Image:
    """
    Render a stored tile map through its tile set's patterns.

    Tiles missing from the tile set are drawn in MISSING_COLOR.
    """
    patterns = {}
    missing = set()
    for position, tile_id in tile_map.tiles.items():
        try:
            patterns[position] = tile_set.pattern_of(tile_id)
        except TileSetError:
            missing.add(position)
    return render_patterns_to_image(patterns, cell_size, frozenset(missing))
