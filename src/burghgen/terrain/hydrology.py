"""Hydrology dispatch: run the water generator matching the map type."""

import structlog

from ..config import GenerationConfig
from ..state import HydrologyResult, TerrainGrid
from ..terrain_types import WATER
from ..types import MapType
from .lake import generate_lake
from .river import generate_river
from .seaside import generate_seaside

logger = structlog.get_logger()


def generate_hydrology(
    grid: TerrainGrid,
    map_type: MapType | None,
    seed: int,
    config: GenerationConfig | None = None,
) -> HydrologyResult:
    """Carve the water features for one map.

    Args:
        grid: Freshly allocated, fully unassigned grid.
        map_type: Hydrology mode; None leaves the grid untouched.
        seed: Run seed.
        config: Generation parameters.

    Returns:
        HydrologyResult for the land colorer and road stage.
    """
    config = config or GenerationConfig()

    match map_type:
        case MapType.RIVER:
            result = generate_river(grid, seed, config.river)
        case MapType.LAKE:
            result = generate_lake(grid, seed, config.lake, config.river)
        case MapType.SEASIDE:
            result = generate_seaside(grid, seed, config.seaside, config.river)
        case _:
            logger.debug("hydrology_skipped", map_type=map_type)
            result = HydrologyResult()

    logger.debug(
        "hydrology_complete",
        map_type=map_type.value if map_type else None,
        water_tiles=grid.count(WATER),
        coastal_sand=len(result.coastal_sand),
    )
    return result
