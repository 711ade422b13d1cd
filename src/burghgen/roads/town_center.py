"""Town center selection heuristics, one per map type.

Each heuristic scores land cells by their distance to the relevant water
and picks one at random. Candidates are enumerated column by column
(x outer, y inner), which fixes the order the random pick indexes into.
"""

import numpy as np
import structlog
from numpy.typing import NDArray
from scipy import ndimage

from ..config import RoadConfig
from ..state import TerrainGrid
from ..terrain.coastal import coastline_mask
from ..terrain_types import DIRT, GRASS, WATER
from ..types import MapType
from .nodes import Point

logger = structlog.get_logger()


def map_center(grid: TerrainGrid) -> Point:
    return (grid.width // 2, grid.height // 2)


def buildable_mask(grid: TerrainGrid) -> NDArray[np.bool_]:
    """GRASS or DIRT cells."""
    return (grid.cells == GRASS) | (grid.cells == DIRT)


def interior_mask(grid: TerrainGrid, margin: int) -> NDArray[np.bool_]:
    """Cells in [margin, width - margin) x [margin, height - margin)."""
    mask = np.zeros(grid.cells.shape, dtype=bool)
    mask[margin:grid.height - margin, margin:grid.width - margin] = True
    return mask


def distance_to(mask: NDArray[np.bool_]) -> NDArray[np.float64]:
    """Euclidean distance from every cell to the nearest True cell (inf if none)."""
    if not mask.any():
        return np.full(mask.shape, np.inf)
    return ndimage.distance_transform_edt(~mask)


def column_major_points(mask: NDArray[np.bool_]) -> list[Point]:
    """Cells of a mask as (x, y) points ordered by x, then y."""
    xs, ys = np.nonzero(mask.T)
    return list(zip(xs.tolist(), ys.tolist()))


def river_town_center(
    grid: TerrainGrid,
    rng: np.random.Generator,
    config: RoadConfig,
) -> Point | None:
    """Pick a dry cell a short walk from the river, biased across its flow.

    For a river running top to bottom, candidates are ranked away from the
    side the river touches (or toward the vertical center line when it
    touches both or neither side), and likewise for left-to-right rivers.
    The pick is uniform among the best ``river_shortlist`` candidates.
    """
    water = grid.cells == WATER
    if not water.any():
        return None

    dist = distance_to(water)
    candidates_mask = (
        buildable_mask(grid)
        & interior_mask(grid, config.river_margin)
        & (dist >= config.river_min_distance)
        & (dist <= config.river_max_distance)
    )
    candidates = column_major_points(candidates_mask)
    if not candidates:
        return None

    width, height = grid.width, grid.height
    touches_top = bool(water[0, :].any())
    touches_bottom = bool(water[height - 1, :].any())
    touches_left = bool(water[:, 0].any())
    touches_right = bool(water[:, width - 1].any())

    if touches_top and touches_bottom:
        if touches_left and not touches_right:
            candidates.sort(key=lambda p: p[0])
        elif touches_right and not touches_left:
            candidates.sort(key=lambda p: -p[0])
        else:
            candidates.sort(key=lambda p: abs(p[0] - width // 2))
    else:
        if touches_top and not touches_bottom:
            candidates.sort(key=lambda p: p[1])
        elif touches_bottom and not touches_top:
            candidates.sort(key=lambda p: -p[1])
        else:
            candidates.sort(key=lambda p: abs(p[1] - height // 2))

    return candidates[int(rng.integers(min(config.river_shortlist, len(candidates))))]


def lake_center_region(grid: TerrainGrid) -> NDArray[np.bool_]:
    """WATER cells inside the central half of the map on both axes."""
    width, height = grid.width, grid.height
    region = np.zeros(grid.cells.shape, dtype=bool)
    x0, y0 = width // 4, height // 4
    region[y0:height - y0, x0:width - x0] = True
    return region & (grid.cells == WATER)


def lake_town_center(
    grid: TerrainGrid,
    rng: np.random.Generator,
    config: RoadConfig,
) -> Point | None:
    """Pick a dry cell at least ``lake_buffer`` away from the central lake."""
    buffer = config.lake_buffer
    dist = distance_to(lake_center_region(grid))
    candidates = column_major_points(
        buildable_mask(grid) & interior_mask(grid, buffer) & (dist >= buffer)
    )
    if not candidates:
        return None
    return candidates[int(rng.integers(len(candidates)))]


def seaside_town_center(
    grid: TerrainGrid,
    rng: np.random.Generator,
    config: RoadConfig,
) -> Point | None:
    """Pick a dry cell inland but within reach of the coastline."""
    coastline = coastline_mask(grid.cells)
    if not coastline.any():
        return None

    dist = distance_to(coastline)
    margin = int(config.seaside_min_distance)
    candidates = column_major_points(
        buildable_mask(grid)
        & interior_mask(grid, margin)
        & (dist >= config.seaside_min_distance)
        & (dist <= config.seaside_max_distance)
    )
    if not candidates:
        return None
    return candidates[int(rng.integers(len(candidates)))]


def choose_town_center(
    grid: TerrainGrid,
    map_type: MapType | None,
    rng: np.random.Generator,
    config: RoadConfig | None = None,
) -> Point:
    """Choose the town center for a map, falling back to the map center.

    Unrecognized map types use the seaside heuristic.
    """
    config = config or RoadConfig()

    match map_type:
        case MapType.RIVER:
            center = river_town_center(grid, rng, config)
        case MapType.LAKE:
            center = lake_town_center(grid, rng, config)
        case _:
            center = seaside_town_center(grid, rng, config)

    if center is None:
        center = map_center(grid)
        logger.debug(
            "town_center_fallback",
            map_type=map_type.value if map_type else None,
            x=center[0],
            y=center[1],
        )
    return center
