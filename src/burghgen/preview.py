"""Render a generated map to a flat-colored preview image."""

from pathlib import Path
from typing import Iterable

import numpy as np
from PIL import Image

from .state import TileRecord
from .terrain_types import TerrainType
from .types import RoadStyle

# Colors for each terrain type (RGB)
TERRAIN_COLORS: dict[TerrainType, tuple[int, int, int]] = {
    TerrainType.WATER: (60, 130, 180),   # Light blue
    TerrainType.SAND: (230, 210, 140),   # Sandy yellow
    TerrainType.GRASS: (60, 150, 60),    # Green
    TerrainType.DIRT: (140, 100, 60),    # Brown
}

# Road overlay colors per style (RGB)
ROAD_COLORS: dict[RoadStyle, tuple[int, int, int]] = {
    RoadStyle.FIELD_TAN: (205, 175, 120),
    RoadStyle.COBBLE_LIGHTGRAY: (185, 185, 185),
    RoadStyle.COBBLE_GRAY: (120, 120, 120),
}

UNKNOWN_COLOR = (255, 0, 255)  # Magenta


def tile_color(tile: TileRecord) -> tuple[int, int, int]:
    """Color of one tile, roads drawn over the terrain."""
    if tile.has_road and tile.road_tile_id is not None and tile.road_style is not None:
        return ROAD_COLORS.get(tile.road_style, UNKNOWN_COLOR)
    return TERRAIN_COLORS.get(tile.terrain, UNKNOWN_COLOR)


def render_preview(
    tiles: Iterable[TileRecord],
    width: int,
    height: int,
    tile_px: int = 1,
) -> Image.Image:
    """Generate an image with one flat block per tile.

    Args:
        tiles: Tile records; positions come from each tile's x and y.
        width: Map width in tiles.
        height: Map height in tiles.
        tile_px: Block size in pixels.

    Returns:
        RGB image of size (width * tile_px, height * tile_px).

    Raises:
        ValueError: If tile_px is not positive.
    """
    if tile_px <= 0:
        raise ValueError(f"tile_px must be positive, got {tile_px}")

    pixels = np.zeros((height, width, 3), dtype=np.uint8)
    pixels[:, :] = UNKNOWN_COLOR
    for tile in tiles:
        if 0 <= tile.x < width and 0 <= tile.y < height:
            pixels[tile.y, tile.x] = tile_color(tile)

    img = Image.fromarray(pixels)
    if tile_px > 1:
        img = img.resize((width * tile_px, height * tile_px), Image.Resampling.NEAREST)
    return img


def save_preview(
    tiles: Iterable[TileRecord],
    width: int,
    height: int,
    path: Path,
    tile_px: int = 1,
) -> None:
    """Render a preview and write it as PNG."""
    path.parent.mkdir(parents=True, exist_ok=True)
    render_preview(tiles, width, height, tile_px).save(path, format="PNG")
