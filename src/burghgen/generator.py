"""Main map generation orchestration."""

import numpy as np
import structlog

from .config import GenerationConfig
from .exceptions import InvalidDimensionsError
from .roads.generator import RoadNetwork, generate_road_network
from .state import HydrologyResult, TerrainGrid, TileMap, TileRecord
from .terrain.coloring import color_land
from .terrain.hydrology import generate_hydrology
from .terrain_types import TerrainType
from .types import MapType

logger = structlog.get_logger()


class GenerationResult:
    """Result of map generation with the intermediate terrain."""

    def __init__(
        self,
        map_type: MapType | None,
        seed: int,
        tiles: TileMap,
        grid: TerrainGrid,
        hydrology: HydrologyResult,
        roads: RoadNetwork,
    ):
        self.map_type = map_type
        self.seed = seed
        self.tiles = tiles
        self.grid = grid
        self.hydrology = hydrology
        self.roads = roads

    @property
    def width(self) -> int:
        return self.tiles.width

    @property
    def height(self) -> int:
        return self.tiles.height


def generate_map(
    map_type: str | MapType | None,
    seed: int,
    width: int,
    height: int,
    config: GenerationConfig | None = None,
) -> GenerationResult:
    """Generate a complete town map.

    Stages run in a fixed order on one grid: hydrology, land coloring,
    tile wrapping, then road carving on the tile records. Each stage seeds
    its own random stream from ``seed``, so equal inputs give equal maps.

    Args:
        map_type: "river", "lake" or "seaside" (any case); anything else
            runs without water.
        seed: Run seed.
        width: Map width in tiles.
        height: Map height in tiles.
        config: Generation parameters; its own type, seed and size are ignored.

    Returns:
        GenerationResult with tiles in row-major order.

    Raises:
        InvalidDimensionsError: If width or height is not positive.
    """
    if width <= 0 or height <= 0:
        raise InvalidDimensionsError(f"Map dimensions must be positive, got {width}x{height}")

    config = config or GenerationConfig()
    parsed_type = MapType.parse(map_type)

    logger.info(
        "generating_map",
        map_type=parsed_type.value if parsed_type else map_type,
        seed=seed,
        width=width,
        height=height,
    )

    grid = TerrainGrid(width, height)
    hydrology = generate_hydrology(grid, parsed_type, seed, config)
    color_land(grid, seed, hydrology.coastal_sand, config.coloring)

    tiles = TileMap.from_grid(grid)
    roads = generate_road_network(tiles, grid, parsed_type, seed, config.roads)

    _log_terrain_stats(tiles)

    return GenerationResult(
        map_type=parsed_type,
        seed=seed,
        tiles=tiles,
        grid=grid,
        hydrology=hydrology,
        roads=roads,
    )


def generate_grid(map_type: str, seed: int, width: int, height: int) -> list[TileRecord]:
    """Generate a map and return its tile records in row-major order."""
    return generate_map(map_type, seed, width, height).tiles.tiles


def generate_from_config(config: GenerationConfig) -> GenerationResult:
    """Generate a map using the type, seed and size stored in a config."""
    return generate_map(config.map_type, config.seed, config.width, config.height, config)


def _log_terrain_stats(tiles: TileMap) -> None:
    """Log final terrain statistics."""
    total = len(tiles)
    types = np.array([tile.terrain.code for tile in tiles], dtype=np.uint8)
    roads = sum(1 for tile in tiles if tile.has_road)

    counts = {
        terrain.value.lower(): int(np.count_nonzero(types == terrain.code))
        for terrain in TerrainType
    }
    logger.debug(
        "terrain_stats",
        total=total,
        road_tiles=roads,
        **counts,
        **{f"{name}_pct": round(count / total * 100, 1) for name, count in counts.items()},
    )
    logger.info("map_generated", tiles=total, road_tiles=roads)
