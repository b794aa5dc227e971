#!/usr/bin/env python3
"""
Terrain Autotile - Paint Tool

Paints a terrain grid onto a tile map, autotiles the painted cells (and,
optionally, the cells around them), and writes the resulting map.

Usage:
    python tools/paint.py TILESET MAP PAINT -o OUT [--seed N]
        [--adjacent] [--diagonal] [--preview PNG]
"""

import argparse
import random
import sys
from pathlib import Path

from autotile.core.constraint import ConstraintFillRules
from autotile.formats.paint import load_paint_request, paint_tile_map
from autotile.formats.tile_map import TileMapData
from autotile.formats.tile_set import TileSetData, TileSetError
from autotile.logging_config import setup_logging


def main():
    parser = argparse.ArgumentParser(
        description="Paint terrain onto a tile map and autotile it"
    )
    parser.add_argument("tileset", help="Tile set JSON file")
    parser.add_argument("map", help="Tile map JSON file (use a missing path for a new map)")
    parser.add_argument("paint", help="Paint request JSON file")
    parser.add_argument("-o", "--output", required=True, help="Output tile map JSON file")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for tile variants")
    parser.add_argument(
        "--adjacent",
        action="store_true",
        help="Also re-tile cells adjacent to painted cells (overrides the request file)",
    )
    parser.add_argument(
        "--diagonal",
        action="store_true",
        help="Also re-tile cells diagonal to painted cells (overrides the request file)",
    )
    parser.add_argument("--preview", help="Write a PNG preview of the autotile result")
    parser.add_argument("--cell-size", type=int, default=12, help="Preview cell size in pixels")
    parser.add_argument("--log-dir", help="Directory for a debug log file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show progress messages")

    args = parser.parse_args()
    setup_logging(args.log_dir, verbose=args.verbose)

    tile_set = TileSetData()
    try:
        tile_set.load(args.tileset)
    except (FileNotFoundError, TileSetError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    tile_map = TileMapData(name=Path(args.output).stem)
    if Path(args.map).exists():
        try:
            tile_map.load(args.map)
        except ValueError as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        print(f"Map {args.map} not found, starting from an empty map")

    fill = None
    if args.adjacent or args.diagonal:
        fill = ConstraintFillRules(
            include_adjacent=args.adjacent,
            include_diagonal=args.diagonal,
        )

    try:
        terrains = load_paint_request(args.paint, fill)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    rng = random.Random(args.seed)
    result = paint_tile_map(tile_map, tile_set, terrains, rng)

    tile_map.save(args.output)
    print(f"Painted {len(terrains)} cells, {len(result.update)} tiles changed")
    if result.skipped:
        print(f"Warning: {len(result.skipped)} cells have no legal pattern:")
        for position in result.skipped:
            print(f"  {position!r}")
    print(f"Saved: {args.output}")

    if args.preview:
        from autotile.rendering.pil_renderer import render_patterns_to_image

        img = render_patterns_to_image(
            result.autotiler, args.cell_size, frozenset(result.skipped)
        )
        img.save(args.preview)
        print(f"Saved: {args.preview} ({img.width}x{img.height})")


if __name__ == "__main__":
    main()
