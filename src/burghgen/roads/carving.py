"""Road carving: stamp square road brushes along Bresenham lines."""

from typing import Iterator, Sequence

import numpy as np

from ..state import TileMap
from ..types import MapSize, RoadStyle
from .nodes import Point, RoadNode

# Road width per connection: base + randInt(spread)
ROAD_WIDTHS: dict[MapSize, tuple[int, int]] = {
    MapSize.SMALL: (2, 1),
    MapSize.MEDIUM: (2, 2),
    MapSize.LARGE: (3, 2),
}


def bresenham(x0: int, y0: int, x1: int, y1: int) -> Iterator[Point]:
    """Yield every cell on the line from (x0, y0) to (x1, y1), both ends included."""
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx - dy

    x, y = x0, y0
    while True:
        yield (x, y)
        if x == x1 and y == y1:
            return
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy


def draw_road_at(tiles: TileMap, x: int, y: int, width: int, style: RoadStyle) -> int:
    """Pave the square of half-size ``width // 2`` centered on (x, y).

    Cells outside the map and WATER cells are skipped.

    Returns:
        Number of tiles paved.
    """
    half = width // 2
    paved = 0
    for dx in range(-half, half + 1):
        for dy in range(-half, half + 1):
            nx, ny = x + dx, y + dy
            if tiles.in_bounds(nx, ny) and tiles.at(nx, ny).pave(style):
                paved += 1
    return paved


def road_width(size: MapSize, rng: np.random.Generator) -> int:
    base, spread = ROAD_WIDTHS[size]
    return base + int(rng.integers(spread))


def carve_road_path(
    tiles: TileMap,
    path: Sequence[RoadNode],
    rng: np.random.Generator,
    style: RoadStyle,
    size: MapSize,
) -> int:
    """Pave a straight road between the two nodes of a connection.

    Paths with other than two nodes are ignored and draw nothing from the
    random stream.

    Returns:
        Number of paving operations performed (overlaps counted again).
    """
    if len(path) != 2:
        return 0

    a, b = path
    width = road_width(size, rng)
    paved = 0
    for x, y in bresenham(a.x, a.y, b.x, b.y):
        paved += draw_road_at(tiles, x, y, width, style)
    return paved
