#!/usr/bin/env python3
"""
Terrain Autotile - Tile Map Visualizer

Renders tile maps as PNG images, drawing every tile as its 3x3 pattern.
"""

import argparse
import sys
from pathlib import Path

from autotile.formats.tile_map import TileMapData
from autotile.formats.tile_set import TileSetData, TileSetError
from autotile.rendering.pil_renderer import render_tile_map_to_image


def render_map(map_path: str, tile_set: TileSetData, output_path: str, cell_size: int):
    """Render a single tile map to PNG."""
    tile_map = TileMapData()
    try:
        tile_map.load(map_path)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    img = render_tile_map_to_image(tile_map, tile_set, cell_size)
    img.save(output_path)
    print(f"Saved: {output_path} ({img.width}x{img.height})")


def main():
    parser = argparse.ArgumentParser(
        description="Render tile maps as PNG pattern previews"
    )
    parser.add_argument("tileset", help="Tile set JSON file")
    parser.add_argument("maps", nargs="+", help="Tile map JSON files")
    parser.add_argument(
        "-o", "--output", help="Output PNG (single map) or directory (several maps)"
    )
    parser.add_argument("--cell-size", type=int, default=12, help="Cell size in pixels")

    args = parser.parse_args()

    tile_set = TileSetData()
    try:
        tile_set.load(args.tileset)
    except (FileNotFoundError, TileSetError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    if len(args.maps) == 1:
        output = args.output or str(Path(args.maps[0]).with_suffix(".png"))
        render_map(args.maps[0], tile_set, output, args.cell_size)
        return

    output_dir = Path(args.output or ".")
    output_dir.mkdir(parents=True, exist_ok=True)
    for map_path in args.maps:
        out_file = output_dir / f"{Path(map_path).stem}.png"
        render_map(map_path, tile_set, str(out_file), args.cell_size)


if __name__ == "__main__":
    main()
