"""Procedural medieval town map generation."""

from .config import GenerationConfig, load_config
from .exceptions import (
    BurghgenError,
    ConfigError,
    InvalidDimensionsError,
    RoadStyleLookupError,
)
from .generator import GenerationResult, generate_from_config, generate_grid, generate_map
from .state import HydrologyResult, TerrainGrid, TileMap, TileRecord, tiles_to_payload
from .terrain_types import TerrainType
from .types import MapSize, MapType, RoadStyle, road_tile_id
from .validation import ValidationResult, validate_map

__all__ = [
    # Types
    "TerrainType",
    "MapType",
    "MapSize",
    "RoadStyle",
    "road_tile_id",
    # State
    "TerrainGrid",
    "TileRecord",
    "TileMap",
    "HydrologyResult",
    "tiles_to_payload",
    # Generation
    "GenerationConfig",
    "GenerationResult",
    "generate_map",
    "generate_grid",
    "generate_from_config",
    "load_config",
    # Validation
    "ValidationResult",
    "validate_map",
    # Exceptions
    "BurghgenError",
    "InvalidDimensionsError",
    "RoadStyleLookupError",
    "ConfigError",
]
