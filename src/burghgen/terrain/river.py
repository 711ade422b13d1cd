"""River hydrology: an edge-to-edge meandering river with optional branches."""

import numpy as np
import structlog

from ..config import RiverConfig
from ..state import HydrologyResult, TerrainGrid
from ..types import make_rng
from .carving import (
    Point,
    carve_walk,
    is_far_enough,
    random_edge_point,
    river_thickness,
    same_edge,
)

logger = structlog.get_logger()


def pick_river_endpoints(
    width: int,
    height: int,
    rng: np.random.Generator,
    max_attempts: int,
) -> tuple[Point, Point] | None:
    """Pick start and end points on different edges, far enough apart.

    The start is fixed after the first draw; only the end is redrawn.

    Returns:
        (start, end), or None when no valid end was found in time.
    """
    start = random_edge_point(width, height, rng)
    end = random_edge_point(width, height, rng)
    attempts = 0
    while same_edge(start, end, width, height) or not is_far_enough(start, end, width, height):
        if attempts >= max_attempts:
            return None
        end = random_edge_point(width, height, rng)
        attempts += 1
    return start, end


def carve_loop_branch(
    grid: TerrainGrid,
    path: list[Point],
    rng: np.random.Generator,
    thickness: int,
    config: RiverConfig,
) -> bool:
    """Carve a branch leaving the first half of the path and rejoining the second.

    Returns:
        True if a loop was carved.
    """
    n = len(path)
    for _ in range(config.loop_attempts):
        i1 = int(rng.integers(n // 2))
        i2 = n // 2 + int(rng.integers(n // 2))
        if abs(i1 - i2) < n // 4:
            continue
        carve_walk(
            grid, path[i1], path[i2], rng, thickness - 1,
            config.axis_bias, config.jitter_chance,
        )
        return True
    return False


def carve_diverging_branch(
    grid: TerrainGrid,
    path: list[Point],
    rng: np.random.Generator,
    thickness: int,
    config: RiverConfig,
) -> bool:
    """Carve a branch from the second half of the path out to another edge.

    Returns:
        True if a branch was carved.
    """
    n = len(path)
    source = path[n // 2 + int(rng.integers(n // 2))]
    exit_point = random_edge_point(grid.width, grid.height, rng)

    attempts = 0
    while same_edge(source, exit_point, grid.width, grid.height):
        if attempts >= config.endpoint_attempts:
            logger.debug("river_branch_skipped", source=source)
            return False
        exit_point = random_edge_point(grid.width, grid.height, rng)
        attempts += 1

    carve_walk(
        grid, source, exit_point, rng, thickness - 1,
        config.axis_bias, config.jitter_chance,
    )
    return True


def generate_river(
    grid: TerrainGrid,
    seed: int,
    config: RiverConfig | None = None,
) -> HydrologyResult:
    """Carve a river crossing the map between two different edges.

    Args:
        grid: Unassigned grid to carve WATER into.
        seed: Run seed; the generator uses its own stream.
        config: River parameters.

    Returns:
        HydrologyResult with empty coastal lists.
    """
    config = config or RiverConfig()
    rng = make_rng(seed)
    width, height = grid.width, grid.height

    thickness = river_thickness(
        width, height, config.min_thickness, config.max_thickness, config.thickness_divisor
    )

    endpoints = pick_river_endpoints(width, height, rng, config.endpoint_attempts)
    if endpoints is None:
        logger.debug("river_skipped", width=width, height=height)
        return HydrologyResult()

    start, end = endpoints
    path = carve_walk(grid, start, end, rng, thickness, config.axis_bias, config.jitter_chance)

    # Both checks always draw, even when the path is too short
    if rng.random() < config.loop_chance and len(path) > config.min_branch_path:
        carve_loop_branch(grid, path, rng, thickness, config)

    if rng.random() < config.branch_chance and len(path) > config.min_branch_path:
        carve_diverging_branch(grid, path, rng, thickness, config)

    logger.debug("river_carved", start=start, end=end, length=len(path), thickness=thickness)
    return HydrologyResult()
