"""
Terrain Autotile - Autotile Context

The background knowledge shared by many autotiling runs: which patterns
each terrain may use, in priority order, and which tiles carry each pattern.
"""

from __future__ import annotations

import random
from typing import Generic, TypeVar

from .probability import ProbabilitySet

Ter = TypeVar("Ter")
Pat = TypeVar("Pat")
Tile = TypeVar("Tile")


class AutoTileContext(Generic[Ter, Pat, Tile]):
    """
    Terrain -> pattern list and pattern -> tile registry.

    Attributes:
        patterns: For each terrain, its patterns in the order the autotiler
                  should try them. Only ordered after ``sort()``.
        values: For each pattern, the tiles that have it, weighted by
                frequency.
    """

    def __init__(self):
        self.patterns: dict[Ter, list[Pat]] = {}
        self.values: dict[Pat, ProbabilitySet[Tile]] = {}

    def __repr__(self) -> str:
        lines = ["AutoTileContext", "patterns:"]
        for terrain, pattern_list in self.patterns.items():
            lines.append(f"{terrain!r} -> {pattern_list!r}")
        lines.append("values:")
        for pattern, tiles in self.values.items():
            lines.append(f"{pattern!r} -> {tiles!r}")
        return "\n".join(lines)

    def is_empty(self) -> bool:
        return not self.patterns

    def clear(self) -> None:
        self.patterns.clear()
        self.values.clear()

    def add(self, terrain: Ter, pattern: Pat, frequency: float, tile: Tile) -> None:
        """
        Register a tile with its terrain, pattern and frequency.

        The higher the frequency, the more likely this tile is chosen over
        other tiles with the same pattern. Call ``sort()`` once all tiles
        have been added.
        """
        self.patterns.setdefault(terrain, []).append(pattern)
        self.values.setdefault(pattern, ProbabilitySet()).add(frequency, tile)

    def sort(self) -> None:
        """Put every terrain's patterns in priority order and drop duplicates."""
        for terrain, pattern_list in self.patterns.items():
            self.patterns[terrain] = sorted(set(pattern_list))

    def get_random_value(self, pattern: Pat, rng: random.Random | None = None) -> Tile | None:
        """A random tile with the given pattern, or None if there is none."""
        tiles = self.values.get(pattern)
        if tiles is None:
            return None
        return tiles.get_random(rng)
