"""Map generation configuration models and TOML loading."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigError


class NoiseConfig(BaseModel):
    """Land coloring noise sampling."""

    scale: float = Field(default=0.05, description="Tile-to-noise coordinate scale (lower = larger patches)")


class RiverConfig(BaseModel):
    """River generator parameters."""

    min_thickness: int = Field(default=1, description="Smallest river stamp radius")
    max_thickness: int = Field(default=3, description="Largest river stamp radius")
    thickness_divisor: int = Field(
        default=32, description="Map side length per unit of river radius"
    )
    axis_bias: float = Field(
        default=0.6, description="Probability of stepping on the x axis toward the target"
    )
    jitter_chance: float = Field(default=0.2, description="Probability of a +-1 wobble per step")
    loop_chance: float = Field(default=0.5, description="Probability of a rejoining loop branch")
    loop_attempts: int = Field(default=10, description="Attempts to find loop endpoints")
    branch_chance: float = Field(default=0.5, description="Probability of a diverging branch")
    min_branch_path: int = Field(
        default=20, description="Main path must be longer than this for branches"
    )
    endpoint_attempts: int = Field(
        default=1000, description="Max redraws when searching for valid endpoints"
    )


class LakeConfig(BaseModel):
    """Lake generator parameters."""

    size_divisor_min: int = Field(
        default=10, description="Smallest area divisor (largest lake, 10% of area)"
    )
    size_divisor_range: int = Field(default=10, description="Random range added to the divisor")
    expand_base: float = Field(default=0.65, description="Base neighbor expansion probability")
    expand_spread: float = Field(
        default=0.25, description="Random extra expansion probability per decision"
    )
    jump_chance: float = Field(default=0.1, description="Probability of a nearby jump per step")
    jump_radius: int = Field(default=3, description="Max jump offset on each axis")
    max_offshoots: int = Field(default=2, description="Maximum number of offshoot ponds")
    max_islands: int = Field(default=2, description="Maximum number of grass islands")
    island_attempts: int = Field(default=20, description="Random cells tried per island")
    outflow_chance: float = Field(default=0.5, description="Probability of an outflow river")


class SeasideConfig(BaseModel):
    """Seaside coastline parameters."""

    depth_min: float = Field(default=0.20, description="Minimum coast depth as map fraction")
    depth_range: float = Field(default=0.20, description="Random extra coast depth fraction")
    wave_base: float = Field(default=0.7, description="Constant part of the depth profile")
    wave_amplitude: float = Field(default=0.3, description="Sine part of the depth profile")
    second_edge_phase: float = Field(
        default=1.0, description="Phase offset for the second edge of a corner coast"
    )
    river_chance: float = Field(default=0.4, description="Probability of a river into the sea")
    second_river_chance: float = Field(
        default=0.25, description="Probability of a second sea river"
    )
    river_start_attempts: int = Field(
        default=200, description="Max redraws when searching for a dry river source"
    )
    harbor_chance: float = Field(default=1.0, description="Probability of carving a harbor")
    harbor_min_radius: int = Field(default=3, description="Smallest harbor radius")
    harbor_size_divisor: int = Field(
        default=20, description="Map side length per unit of harbor radius"
    )


class ColoringConfig(BaseModel):
    """Land colorer thresholds."""

    noise: NoiseConfig = Field(default_factory=NoiseConfig)
    coastal_reach: int = Field(
        default=6, description="Distance from coastal sand where the sand bias fades out"
    )
    sand_threshold_far: float = Field(
        default=-0.5, description="Sand noise threshold at the edge of the coastal reach"
    )
    sand_threshold_gain: float = Field(
        default=0.4, description="Threshold increase at full coastal bias"
    )
    dirt_threshold: float = Field(default=-0.2, description="Noise below this becomes dirt")


class RoadConfig(BaseModel):
    """Road network parameters."""

    river_min_distance: float = Field(default=3, description="Town center min distance to river")
    river_max_distance: float = Field(default=10, description="Town center max distance to river")
    river_margin: int = Field(default=4, description="Town center border margin on river maps")
    river_shortlist: int = Field(
        default=20, description="Best-ranked river candidates to choose from"
    )
    lake_buffer: int = Field(default=8, description="Town center distance from the lake")
    seaside_min_distance: float = Field(default=6, description="Town center min distance to coast")
    seaside_max_distance: float = Field(default=20, description="Town center max distance to coast")
    district_min_radius: float = Field(
        default=0.15, description="District distance from center as width fraction"
    )
    district_radius_range: float = Field(
        default=0.2, description="Random extra district distance fraction"
    )
    max_extra_edges: int = Field(default=2, description="Maximum cross-link roads beyond the MST")
    extra_edge_attempts: int = Field(default=20, description="Attempts to place cross-links")


class GenerationConfig(BaseModel):
    """Complete map generation configuration."""

    map_type: str = Field(default="seaside", description="river, lake or seaside")
    seed: int = Field(default=1234, description="Random seed for reproducibility")
    width: int = Field(default=256, description="Map width in tiles")
    height: int = Field(default=256, description="Map height in tiles")

    river: RiverConfig = Field(default_factory=RiverConfig)
    lake: LakeConfig = Field(default_factory=LakeConfig)
    seaside: SeasideConfig = Field(default_factory=SeasideConfig)
    coloring: ColoringConfig = Field(default_factory=ColoringConfig)
    roads: RoadConfig = Field(default_factory=RoadConfig)


def load_config(config_path: Path) -> GenerationConfig:
    """Load generation configuration from a TOML file.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed GenerationConfig.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
        ConfigError: If the values fail validation.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    try:
        return GenerationConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {config_path}: {e}") from e
