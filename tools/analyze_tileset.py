#!/usr/bin/env python3
"""
Terrain Autotile - Tile Set Analyzer

Shows, for every terrain of a tile set, the patterns in the order the
autotiler will try them, the tiles behind each pattern, and frequency
statistics.

Usage: python tools/analyze_tileset.py <tileset.json> [more tilesets...]
"""

import sys

import numpy as np

from autotile.core.context import AutoTileContext
from autotile.formats.tile_set import EMPTY_TERRAIN, TileSetData, TileSetError, fill_pattern_map


def percentile_stats(values):
    """Return min/25th/50th/75th/max statistics."""
    if not values:
        raise ValueError("values cannot be empty in percentile_stats call")
    arr = np.array(values, dtype=float)
    return {
        "min": float(np.min(arr)),
        "25th": float(np.percentile(arr, 25)),
        "50th": float(np.percentile(arr, 50)),
        "75th": float(np.percentile(arr, 75)),
        "max": float(np.max(arr)),
        "count": len(values),
    }


def analyze_tile_set(path):
    tile_set = TileSetData()
    tile_set.load(path)

    context = AutoTileContext()
    fill_pattern_map(context, tile_set)

    print(f"Tile set '{tile_set.name}': {len(tile_set)} tiles, {len(context.values) - 1} patterns")

    ignored = [
        t.tile_id for t in tile_set.tiles.values()
        if t.frequency <= 0.0 or t.terrain == EMPTY_TERRAIN
    ]
    if ignored:
        print(f"Ignored tiles (empty terrain or no frequency): {ignored}")

    for terrain in sorted(context.patterns):
        if terrain == EMPTY_TERRAIN:
            continue
        pattern_list = context.patterns[terrain]
        print(f"\nTerrain {terrain}: {len(pattern_list)} patterns (solve order)")
        for rank, pattern in enumerate(pattern_list):
            tiles = context.values[pattern]
            variants = ", ".join(f"{tile}@{freq:g}" for freq, tile in tiles)
            print(f"  {rank:3d}. {pattern!r}  tiles: {variants}")

        frequencies = [freq for pattern in pattern_list for freq, _ in context.values[pattern]]
        stats = percentile_stats(frequencies)
        print(
            f"  Frequencies: min={stats['min']:g} 25th={stats['25th']:g} "
            f"median={stats['50th']:g} 75th={stats['75th']:g} max={stats['max']:g}"
        )

        variants_per_pattern = [len(context.values[p]) for p in pattern_list]
        stats = percentile_stats(variants_per_pattern)
        print(f"  Variants per pattern: median={stats['50th']:g} max={stats['max']:g}")


def main():
    if len(sys.argv) < 2:
        print("Usage: python tools/analyze_tileset.py <tileset.json> [more tilesets...]")
        sys.exit(1)

    for path in sys.argv[1:]:
        try:
            analyze_tile_set(path)
        except (FileNotFoundError, TileSetError) as e:
            print(f"Error: {e}")
            sys.exit(1)
        print()


if __name__ == "__main__":
    main()
