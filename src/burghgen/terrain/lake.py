"""Lake hydrology: a central flood-filled lake with ponds, islands and an outflow."""

from collections import deque

import numpy as np
import structlog

from ..config import LakeConfig, RiverConfig
from ..state import HydrologyResult, TerrainGrid
from ..terrain_types import GRASS, WATER
from ..types import make_rng
from .carving import Point, carve_circle, carve_walk, is_far_enough, random_edge_point
from .coastal import lake_edge

logger = structlog.get_logger()

# 8-neighborhood in scan order (dy outer, dx inner)
NEIGHBOR_OFFSETS = [
    (dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dx, dy) != (0, 0)
]


def flood_fill_lake(
    grid: TerrainGrid,
    center: Point,
    target_size: int,
    rng: np.random.Generator,
    config: LakeConfig,
) -> int:
    """Grow a ragged water body outward from a center cell.

    Breadth-first over a queue with a visited set. Each 8-neighbor is
    queued with a randomized probability, and now and then a nearby cell is
    queued too so the shape gets satellite lobes. Out-of-bounds cells may be
    queued but are skipped when popped.

    Returns:
        Number of cells turned into water.
    """
    queue: deque[Point] = deque([center])
    visited: set[Point] = {center}
    added = 0

    while queue and added < target_size:
        x, y = queue.popleft()
        if not grid.in_bounds(x, y) or grid.get(x, y) == WATER:
            continue

        grid.set(x, y, WATER)
        added += 1

        for dx, dy in NEIGHBOR_OFFSETS:
            neighbor = (x + dx, y + dy)
            if neighbor in visited:
                continue
            if rng.random() < config.expand_base + rng.random() * config.expand_spread:
                queue.append(neighbor)
                visited.add(neighbor)

        if rng.random() < config.jump_chance:
            span = 2 * config.jump_radius + 1
            jump = (
                x + int(rng.integers(span)) - config.jump_radius,
                y + int(rng.integers(span)) - config.jump_radius,
            )
            if jump not in visited:
                queue.append(jump)
                visited.add(jump)

    return added


def add_offshoot_ponds(
    grid: TerrainGrid,
    center: Point,
    rng: np.random.Generator,
    max_ponds: int,
) -> int:
    """Scatter small round ponds within an eighth of the map around the center."""
    width, height = grid.width, grid.height
    ponds = int(rng.integers(max_ponds + 1))
    for _ in range(ponds):
        px = center[0] + int(rng.integers(max(1, width // 4))) - width // 8
        py = center[1] + int(rng.integers(max(1, height // 4))) - height // 8
        radius = 1 + int(rng.integers(2))
        carve_circle(grid, px, py, radius, WATER)
    return ponds


def add_islands(
    grid: TerrainGrid,
    rng: np.random.Generator,
    max_islands: int,
    attempts: int,
) -> list[Point]:
    """Turn single fully-submerged cells into grass islands."""
    islands: list[Point] = []
    for _ in range(max_islands):
        for _ in range(attempts):
            ix = int(rng.integers(grid.width))
            iy = int(rng.integers(grid.height))
            if grid.is_surrounded_by(ix, iy, WATER):
                grid.set(ix, iy, GRASS)
                islands.append((ix, iy))
                break
    return islands


def carve_outflow(grid: TerrainGrid, rng: np.random.Generator, river: RiverConfig) -> bool:
    """Carve a thin river from a random lake-edge cell to a map edge.

    Returns:
        True if the outflow was carved.
    """
    edge = lake_edge(grid)
    if not edge:
        return False

    start = edge[int(rng.integers(len(edge)))]
    end = random_edge_point(grid.width, grid.height, rng)
    if not is_far_enough(start, end, grid.width, grid.height):
        return False

    carve_walk(grid, start, end, rng, 1, river.axis_bias, river.jitter_chance)
    return True


def generate_lake(
    grid: TerrainGrid,
    seed: int,
    config: LakeConfig | None = None,
    river: RiverConfig | None = None,
) -> HydrologyResult:
    """Fill a lake covering roughly 5-10% of the map around its center.

    Args:
        grid: Unassigned grid to carve into.
        seed: Run seed; the generator uses its own stream.
        config: Lake parameters.
        river: Walk parameters for the outflow river.

    Returns:
        HydrologyResult with empty coastal lists.
    """
    config = config or LakeConfig()
    river = river or RiverConfig()
    rng = make_rng(seed)
    width, height = grid.width, grid.height
    center = (width // 2, height // 2)

    divisor = config.size_divisor_min + int(rng.integers(config.size_divisor_range))
    target_size = (width * height) // divisor
    added = flood_fill_lake(grid, center, target_size, rng, config)

    ponds = add_offshoot_ponds(grid, center, rng, config.max_offshoots)
    islands = add_islands(grid, rng, config.max_islands, config.island_attempts)

    outflow = False
    if rng.random() < config.outflow_chance:
        outflow = carve_outflow(grid, rng, river)

    logger.debug(
        "lake_filled",
        target=target_size,
        added=added,
        ponds=ponds,
        islands=len(islands),
        outflow=outflow,
    )
    return HydrologyResult()
