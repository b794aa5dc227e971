"""
Core autotiling engine.

This package contains grid positions and offsets, tile patterns, the
constraint map, the deterministic autotiler and the terrain/pattern/tile
registry.
"""

from .autotiler import (
    AutoConstrain,
    AutoPatternConstraint,
    AutoTiler,
    ListTerrain,
    TileTerrain,
)
from .constraint import (
    ConstraintFillRules,
    ConstraintKind,
    HashConstraintMap,
    NeededTerrain,
    PatternSource,
    TerrainSource,
    TileConstraint,
)
from .context import AutoTileContext
from .offsets import (
    OffsetPosition,
    Vector2,
    Vector2Diagonal,
    Vector2Offset,
    Vector3,
    Vector3Diagonal,
    Vector3Offset,
)
from .pattern import PatternBits, TilePattern
from .probability import ProbabilitySet

__all__ = [
    "AutoConstrain",
    "AutoPatternConstraint",
    "AutoTileContext",
    "AutoTiler",
    "ConstraintFillRules",
    "ConstraintKind",
    "HashConstraintMap",
    "ListTerrain",
    "NeededTerrain",
    "OffsetPosition",
    "PatternBits",
    "PatternSource",
    "ProbabilitySet",
    "TerrainSource",
    "TileConstraint",
    "TilePattern",
    "TileTerrain",
    "Vector2",
    "Vector2Diagonal",
    "Vector2Offset",
    "Vector3",
    "Vector3Diagonal",
    "Vector3Offset",
]
