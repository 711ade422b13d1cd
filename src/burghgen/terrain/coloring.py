"""Land colorer: fill unassigned cells with sand, dirt or grass from noise."""

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

from ..config import ColoringConfig
from ..state import TerrainGrid
from ..terrain_types import DIRT, GRASS, SAND
from .carving import Point
from .noise import NoiseField


def coastal_sand_distance(
    width: int,
    height: int,
    coastal_sand: list[Point],
) -> NDArray[np.float64]:
    """Floored Euclidean distance from each cell to the nearest coastal sand cell.

    Returns:
        (height, width) array; all ``inf`` when the list is empty.
    """
    if not coastal_sand:
        return np.full((height, width), np.inf)

    sources = np.ones((height, width), dtype=bool)
    xs, ys = zip(*coastal_sand)
    sources[list(ys), list(xs)] = False
    return np.floor(ndimage.distance_transform_edt(sources))


def color_land(
    grid: TerrainGrid,
    seed: int,
    coastal_sand: list[Point],
    config: ColoringConfig | None = None,
) -> int:
    """Assign a land type to every unassigned cell.

    Near coastal sand the sand threshold rises linearly, so beaches widen
    into patchy dunes; elsewhere low noise gives dirt and the rest is grass.

    Args:
        grid: Grid after hydrology.
        seed: Run seed for the noise permutation.
        coastal_sand: Coastal sand cells reported by hydrology.
        config: Coloring thresholds.

    Returns:
        Number of cells colored.
    """
    config = config or ColoringConfig()
    unassigned = grid.unassigned_mask()
    if not unassigned.any():
        return 0

    noise = NoiseField(seed).sample_grid(grid.width, grid.height, config.noise.scale)
    dist = coastal_sand_distance(grid.width, grid.height, coastal_sand)

    reach = config.coastal_reach
    bias = np.maximum(0.0, (reach - dist) / reach)
    sand_threshold = config.sand_threshold_far + bias * config.sand_threshold_gain

    land = np.full(grid.cells.shape, GRASS, dtype=np.uint8)
    land[noise < config.dirt_threshold] = DIRT
    land[(bias > 0) & (noise < sand_threshold)] = SAND

    grid.cells[unassigned] = land[unassigned]
    return int(np.count_nonzero(unassigned))
