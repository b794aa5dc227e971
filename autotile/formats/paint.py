"""
Terrain Autotile - Paint Requests

A paint request is a terrain grid placed at an origin, plus the fill rules
for the cells around it. This module loads requests from JSON and runs the
whole paint -> constrain -> autotile -> resolve flow on a tile map.

File format:

    {
      "origin": [x, y],
      "fill": {"adjacent": true, "diagonal": false},
      "terrain": [
        [0, 2, 2],
        [2, 2, 2]
      ]
    }

Terrain row r, column c paints (x + c, y + r); 0 leaves the cell alone.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

from ..core.autotiler import AutoPatternConstraint, AutoTiler
from ..core.constraint import ConstraintFillRules, HashConstraintMap
from ..core.context import AutoTileContext
from ..core.offsets import Vector2
from . import compact_json as json
from .tile_map import (
    BrushTerrainSource,
    TileMapData,
    TileMapPatternSource,
    TilesUpdate,
    apply_autotile_to_update,
)
from .tile_set import TileSetData, fill_pattern_map

logger = logging.getLogger(__name__)


@dataclass
class PaintResult:
    """Outcome of painting a tile map."""

    update: TilesUpdate
    autotiler: AutoTiler
    skipped: List[Vector2] = field(default_factory=list)


def load_paint_request(path: str, fill: Optional[ConstraintFillRules] = None) -> BrushTerrainSource:
    """
    Load a paint request from a JSON file.

    Args:
        path: Paint request file
        fill: Fill rules overriding the file's "fill" entry

    Raises:
        ValueError: If the request is not a JSON object, has no terrain grid,
            or has a bad origin or fill entry
    """
    with open(path) as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Paint request must be a JSON object: {path}")
    if "terrain" not in data:
        raise ValueError(f"Paint request has no terrain grid: {path}")

    origin = data.get("origin", [0, 0])
    if (
        not isinstance(origin, list)
        or len(origin) != 2
        or not all(isinstance(v, int) and not isinstance(v, bool) for v in origin)
    ):
        raise ValueError(f"Paint request origin must be [x, y]: {origin!r}")

    if fill is None:
        rules = data.get("fill", {})
        if not isinstance(rules, dict):
            raise ValueError(f"Paint request fill must be an object: {rules!r}")
        fill = ConstraintFillRules(
            include_adjacent=bool(rules.get("adjacent", False)),
            include_diagonal=bool(rules.get("diagonal", False)),
        )

    return BrushTerrainSource.from_array(data["terrain"], Vector2(*origin), fill)


def paint_tile_map(
    tile_map: TileMapData,
    tile_set: TileSetData,
    terrains: BrushTerrainSource,
    rng: Optional[random.Random] = None,
    context: Optional[AutoTileContext] = None,
) -> PaintResult:
    """
    Autotile a paint request against a tile map and apply the result.

    Args:
        tile_map: Map to paint; modified in place
        tile_set: Tiles available for the map
        terrains: Cells to paint
        rng: Random source for choosing between tiles with the same pattern
        context: Prebuilt context for tile_set; built here when omitted

    Returns:
        PaintResult with the applied update and the unsolved positions
    """
    if context is None:
        context = AutoTileContext()
        fill_pattern_map(context, tile_set)

    update: TilesUpdate = {}
    patterns = TileMapPatternSource(tile_map, tile_set, update)

    constraints = HashConstraintMap()
    constraints.fill_from(terrains, patterns)

    autotiler = AutoTiler()
    skipped = autotiler.autotile(
        AutoPatternConstraint(constraints, context.patterns)
    )

    written = apply_autotile_to_update(autotiler, rng, context.values, update)
    tile_map.apply_update(update)

    if skipped:
        logger.warning("%d painted cells have no legal pattern", len(skipped))
    logger.info("Painted %d cells of '%s'", written, tile_map.name)

    return PaintResult(update=update, autotiler=autotiler, skipped=skipped)
