"""Carving primitives shared by the hydrology generators.

Points are ``(x, y)`` tuples. Every write goes through the grid's bounds
checks or an explicit clip, so stamps near the border are simply cropped.
"""

import math

import numpy as np
import structlog
from numpy.typing import NDArray
from scipy import ndimage

from ..state import TerrainGrid
from ..terrain_types import SAND, WATER

logger = structlog.get_logger()

Point = tuple[int, int]

# Walk step budget per tile of map perimeter
WALK_STEP_FACTOR = 100


def river_thickness(
    width: int,
    height: int,
    min_thickness: int = 1,
    max_thickness: int = 3,
    divisor: int = 32,
) -> int:
    """Stamp radius for rivers on a map of this size (1 to 3 by default)."""
    return max(min_thickness, min(max_thickness, min(width, height) // divisor))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return math.floor(value + 0.5)


def carve_circle(
    grid: TerrainGrid,
    cx: int,
    cy: int,
    radius: int,
    code: int = WATER,
) -> NDArray[np.bool_]:
    """Write a filled disc of cells with dx^2 + dy^2 <= radius^2.

    Returns:
        Boolean (height, width) mask of the cells written.
    """
    written = np.zeros((grid.height, grid.width), dtype=bool)
    x0, x1 = max(0, cx - radius), min(grid.width - 1, cx + radius)
    y0, y1 = max(0, cy - radius), min(grid.height - 1, cy + radius)
    if x0 > x1 or y0 > y1:
        return written

    ys, xs = np.ogrid[y0:y1 + 1, x0:x1 + 1]
    inside = (xs - cx) ** 2 + (ys - cy) ** 2 <= radius * radius
    grid.cells[y0:y1 + 1, x0:x1 + 1][inside] = code
    written[y0:y1 + 1, x0:x1 + 1] = inside
    return written


def random_edge_point(width: int, height: int, rng: np.random.Generator) -> Point:
    """Random cell on the map border.

    The side is drawn first (0 top, 1 right, 2 bottom, 3 left), then the
    coordinate along it.
    """
    side = int(rng.integers(4))
    match side:
        case 0:
            return (int(rng.integers(width)), 0)
        case 1:
            return (width - 1, int(rng.integers(height)))
        case 2:
            return (int(rng.integers(width)), height - 1)
        case _:
            return (0, int(rng.integers(height)))


def same_edge(a: Point, b: Point, width: int, height: int) -> bool:
    """Whether both points lie on a common map edge."""
    return (
        (a[0] == 0 and b[0] == 0)
        or (a[0] == width - 1 and b[0] == width - 1)
        or (a[1] == 0 and b[1] == 0)
        or (a[1] == height - 1 and b[1] == height - 1)
    )


def is_far_enough(a: Point, b: Point, width: int, height: int) -> bool:
    """Whether the Manhattan distance is at least half the map perimeter sum."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) >= (width + height) // 2


def carve_walk(
    grid: TerrainGrid,
    start: Point,
    end: Point,
    rng: np.random.Generator,
    thickness: int,
    axis_bias: float = 0.6,
    jitter_chance: float = 0.2,
) -> list[Point]:
    """Carve a meandering water path from start to end.

    Each step stamps a disc, then moves one cell toward the end on the x
    axis (with probability ``axis_bias``) or the y axis, and occasionally
    wobbles by -1..1 on both axes. The position is clamped to the grid.

    Args:
        grid: Grid to carve into.
        start: Starting cell.
        end: Target cell; the walk stops on reaching it (not stamped).
        rng: Stage random stream.
        thickness: Disc radius; values below 1 are raised to 1.

    Returns:
        Visited cells in order, excluding the end cell.
    """
    radius = max(1, thickness)
    x, y = start
    end_x, end_y = end
    max_steps = WALK_STEP_FACTOR * (grid.width + grid.height)
    path: list[Point] = []

    while (x, y) != (end_x, end_y):
        if len(path) >= max_steps:
            logger.debug("walk_step_cap_reached", start=start, end=end, steps=len(path))
            break

        carve_circle(grid, x, y, radius)
        path.append((x, y))

        if rng.random() < axis_bias:
            x += (end_x > x) - (end_x < x)
        else:
            y += (end_y > y) - (end_y < y)

        if rng.random() < jitter_chance:
            x += int(rng.integers(3)) - 1
            y += int(rng.integers(3)) - 1

        x = max(0, min(grid.width - 1, x))
        y = max(0, min(grid.height - 1, y))

    return path


def carve_feature(
    grid: TerrainGrid,
    start: Point,
    direction: Point,
    rng: np.random.Generator,
    code: int,
    min_steps: int,
    step_range: int,
    max_radius: int,
    drift: float,
    pad_with_sand: bool = False,
) -> NDArray[np.bool_]:
    """Carve a curving blob trail of one terrain code.

    The heading starts along ``direction``, is rotated by up to
    ``drift / 2`` either way after every step, and the trail ends early when
    it leaves the grid.

    Args:
        grid: Grid to carve into.
        start: First cell of the trail.
        direction: Initial (dx, dy) heading, not necessarily unit length.
        rng: Stage random stream.
        code: Terrain code to write.
        min_steps: Minimum trail length.
        step_range: Random extra steps (inclusive).
        max_radius: Disc radius per step is 1 + randInt(max_radius).
        drift: Full angular range of the per-step rotation, in radians.
        pad_with_sand: Surround the carved cells with SAND where they are
            neither WATER nor SAND.

    Returns:
        Boolean mask of carved cells.
    """
    carved = np.zeros((grid.height, grid.width), dtype=bool)

    length = math.hypot(direction[0], direction[1])
    dir_x = direction[0] / length
    dir_y = direction[1] / length

    steps = min_steps + int(rng.integers(step_range + 1))
    x, y = start

    for _ in range(steps):
        if grid.set(x, y, code):
            carved[y, x] = True

        radius = 1 + int(rng.integers(max_radius))
        carved |= carve_circle(grid, x, y, radius, code)

        angle = (rng.random() - 0.5) * drift
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        dir_x, dir_y = dir_x * cos_a - dir_y * sin_a, dir_x * sin_a + dir_y * cos_a

        x += round_half_up(dir_x)
        y += round_half_up(dir_y)
        if not grid.in_bounds(x, y):
            break

    if pad_with_sand and carved.any():
        pad_with_sand_border(grid, carved)

    return carved


def pad_with_sand_border(grid: TerrainGrid, carved: NDArray[np.bool_]) -> None:
    """Turn the 8-neighborhood of carved cells into SAND unless WATER or SAND."""
    ring = ndimage.binary_dilation(carved, structure=np.ones((3, 3), dtype=bool))
    cells = grid.cells
    cells[ring & (cells != WATER) & (cells != SAND)] = SAND
