"""Seaside hydrology: a wavy sea along one or two map edges.

The sea is filled from the edge inward with a sine-modulated depth, then
shaped with a sand shoreline, capes and inlets, optional rivers running
into it, and a harbor pocket at the deepest point of the coast.
"""

import math
from dataclasses import dataclass
from enum import Enum

import numpy as np
import structlog
from numpy.typing import NDArray

from ..config import RiverConfig, SeasideConfig
from ..state import HydrologyResult, TerrainGrid
from ..terrain_types import SAND, WATER
from ..types import make_rng
from .carving import Point, carve_feature, carve_walk, random_edge_point, river_thickness
from .coastal import (
    add_sand_buffer,
    detect_coastal_sand,
    detect_coastal_water,
    water_touching_sand,
)

logger = structlog.get_logger()


class CoastDirection(str, Enum):
    """Map edge a sea is filled from."""

    TOP = "TOP"
    RIGHT = "RIGHT"
    BOTTOM = "BOTTOM"
    LEFT = "LEFT"

    @property
    def is_horizontal(self) -> bool:
        """Whether the edge runs along x (its tangent coordinate is x)."""
        return self in (CoastDirection.TOP, CoastDirection.BOTTOM)


# Direction class -> edges to fill, the second one phase-shifted
COAST_LAYOUTS: dict[int, tuple[CoastDirection, ...]] = {
    0: (CoastDirection.TOP,),
    1: (CoastDirection.RIGHT,),
    2: (CoastDirection.BOTTOM,),
    3: (CoastDirection.LEFT,),
    4: (CoastDirection.TOP, CoastDirection.LEFT),
    5: (CoastDirection.TOP, CoastDirection.RIGHT),
    6: (CoastDirection.BOTTOM, CoastDirection.RIGHT),
    7: (CoastDirection.BOTTOM, CoastDirection.LEFT),
}

# E, W, S, N, SE, NW, SW, NE
FEATURE_DIRECTIONS: list[Point] = [
    (1, 0), (-1, 0), (0, 1), (0, -1),
    (1, 1), (-1, -1), (-1, 1), (1, -1),
]

# Exclusive upper bound of the minor feature count, by map width
MINOR_FEATURE_BOUNDS = {64: 4, 128: 9}
DEFAULT_MINOR_FEATURE_BOUND = 21


@dataclass
class HarborTarget:
    """Deepest point seen so far while filling the coast."""

    wave: float = 0.0
    axis: int = -1
    direction: CoastDirection | None = None

    def offer(self, wave: float, axis: int, direction: CoastDirection) -> None:
        """Keep the point if its wave magnitude strictly beats the current best."""
        if abs(wave) > abs(self.wave):
            self.wave = wave
            self.axis = axis
            self.direction = direction


def fill_coast(
    water: NDArray[np.bool_],
    direction: CoastDirection,
    depth: int,
    freq: float,
    phase: float,
    target: HarborTarget,
    config: SeasideConfig,
) -> None:
    """Mark sea cells reaching inward from one edge.

    At tangent coordinate c the sea penetrates
    ``int(depth * (base + amplitude * sin(freq * c + phase)))`` cells.
    """
    height, width = water.shape
    span = width if direction.is_horizontal else height

    for c in range(span):
        wave = math.sin(freq * c + phase)
        d = int(depth * (config.wave_base + config.wave_amplitude * wave))
        if d > 0:
            match direction:
                case CoastDirection.TOP:
                    water[:d, c] = True
                case CoastDirection.BOTTOM:
                    water[max(0, height - d):, c] = True
                case CoastDirection.LEFT:
                    water[c, :d] = True
                case CoastDirection.RIGHT:
                    water[c, max(0, width - d):] = True
        target.offer(wave, c, direction)


def direction_away_from_land(grid: TerrainGrid, x: int, y: int) -> Point | None:
    """First heading whose neighbor is open water out of sight of land."""
    for dx, dy in FEATURE_DIRECTIONS:
        nx, ny = x + dx, y + dy
        if grid.in_bounds(nx, ny) and grid.get(nx, ny) == WATER and not grid.touches_land(nx, ny):
            return (dx, dy)
    return None


def direction_away_from_water(grid: TerrainGrid, x: int, y: int) -> Point | None:
    """First heading whose neighbor is not water."""
    for dx, dy in FEATURE_DIRECTIONS:
        nx, ny = x + dx, y + dy
        if grid.in_bounds(nx, ny) and grid.get(nx, ny) != WATER:
            return (dx, dy)
    return None


def minor_feature_count(width: int, rng: np.random.Generator) -> int:
    return int(rng.integers(MINOR_FEATURE_BOUNDS.get(width, DEFAULT_MINOR_FEATURE_BOUND)))


def add_capes(
    grid: TerrainGrid,
    coastal_water: list[Point],
    rng: np.random.Generator,
    count: int,
) -> int:
    """Grow sand spits out to sea from shuffled coastal water cells.

    Shuffles ``coastal_water`` in place.

    Returns:
        Number of capes carved.
    """
    rng.shuffle(coastal_water)
    carved = 0
    for x, y in coastal_water[:count]:
        heading = direction_away_from_land(grid, x, y)
        if heading is None:
            continue

        match grid.width:
            case 64:
                min_steps, step_range, max_radius = 4, 2, 1
            case 128:
                min_steps, step_range, max_radius = 6, 3, 2
            case _:
                min_steps, step_range = 9, 4
                max_radius = 2 + int(rng.integers(2))

        carve_feature(
            grid, (x, y), heading, rng, SAND,
            min_steps, step_range, max_radius, math.pi / 6,
        )
        carved += 1
    return carved


def add_inlets(
    grid: TerrainGrid,
    coastal_sand: list[Point],
    rng: np.random.Generator,
    count: int,
) -> int:
    """Cut sand-lined water channels inland from shuffled coastal sand cells.

    Shuffles ``coastal_sand`` in place.

    Returns:
        Number of inlets carved.
    """
    rng.shuffle(coastal_sand)
    carved = 0
    for x, y in coastal_sand[:count]:
        heading = direction_away_from_water(grid, x, y)
        if heading is None:
            continue

        match grid.width:
            case 64:
                min_steps, step_range, max_radius = 6, 4, 1
            case 128:
                min_steps, step_range, max_radius = 10, 4, 2
            case _:
                min_steps, step_range, max_radius = 14, 6, 3

        carve_feature(
            grid, (x, y), heading, rng, WATER,
            min_steps, step_range, max_radius, math.pi / 4,
            pad_with_sand=True,
        )
        carved += 1
    return carved


def carve_seaside_river(
    grid: TerrainGrid,
    rng: np.random.Generator,
    river: RiverConfig,
    max_attempts: int,
) -> bool:
    """Carve a river from a dry edge cell to a water cell beside the sand.

    Returns:
        True if a river was carved.
    """
    width, height = grid.width, grid.height
    start = random_edge_point(width, height, rng)
    attempts = 0
    while grid.get(*start) == WATER:
        if attempts >= max_attempts:
            logger.debug("seaside_river_skipped", reason="no_dry_edge")
            return False
        start = random_edge_point(width, height, rng)
        attempts += 1

    mouths = water_touching_sand(grid)
    if not mouths:
        return False

    end = mouths[int(rng.integers(len(mouths)))]
    thickness = river_thickness(
        width, height, river.min_thickness, river.max_thickness, river.thickness_divisor
    )
    carve_walk(grid, start, end, rng, thickness, river.axis_bias, river.jitter_chance)
    return True


def find_harbor_anchor(
    coastal_sand: list[Point],
    target: HarborTarget,
    width: int,
    height: int,
) -> Point | None:
    """Coastal sand cell closest to the deepest point of the coast.

    Candidates are ranked by distance from the tracked axis along the
    edge, then by closeness to that edge. Earlier cells win full ties.
    """
    direction = target.direction
    if direction is None or not coastal_sand:
        return None

    def rank(tile: Point) -> tuple[int, int]:
        x, y = tile
        match direction:
            case CoastDirection.TOP:
                return abs(x - target.axis), y
            case CoastDirection.BOTTOM:
                return abs(x - target.axis), height - 1 - y
            case CoastDirection.LEFT:
                return abs(y - target.axis), x
            case _:
                return abs(y - target.axis), width - 1 - x

    return min(coastal_sand, key=rank)


def carve_harbor(
    grid: TerrainGrid,
    anchor: Point,
    direction: CoastDirection,
    rng: np.random.Generator,
    config: SeasideConfig,
) -> int:
    """Carve a half-disc of water on the landward side of the anchor.

    The flat side of the half-disc runs along the shore through the anchor.

    Returns:
        Harbor radius.
    """
    width, height = grid.width, grid.height
    size = max(config.harbor_min_radius, min(width, height) // config.harbor_size_divisor)
    radius = size + int(rng.integers(2))
    cx, cy = anchor

    x0, x1 = max(0, cx - radius), min(width - 1, cx + radius)
    y0, y1 = max(0, cy - radius), min(height - 1, cy + radius)
    ys, xs = np.ogrid[y0:y1 + 1, x0:x1 + 1]
    dx, dy = xs - cx, ys - cy
    pocket = dx * dx + dy * dy <= radius * radius

    match direction:
        case CoastDirection.TOP:
            pocket = pocket & (dy >= 0)
        case CoastDirection.BOTTOM:
            pocket = pocket & (dy <= 0)
        case CoastDirection.LEFT:
            pocket = pocket & (dx >= 0)
        case CoastDirection.RIGHT:
            pocket = pocket & (dx <= 0)

    grid.cells[y0:y1 + 1, x0:x1 + 1][pocket] = WATER
    logger.debug(
        "harbor_carved", x=cx, y=cy, direction=direction.value, radius=radius
    )
    return radius


def generate_seaside(
    grid: TerrainGrid,
    seed: int,
    config: SeasideConfig | None = None,
    river: RiverConfig | None = None,
) -> HydrologyResult:
    """Fill a sea along one edge or a corner and shape its coastline.

    Args:
        grid: Unassigned grid to carve into.
        seed: Run seed; the generator uses its own stream.
        config: Seaside parameters.
        river: Walk parameters for rivers flowing into the sea.

    Returns:
        HydrologyResult holding the coastal water and coastal sand cells
        found right after the shoreline was laid, plus the harbor site.
    """
    config = config or SeasideConfig()
    river = river or RiverConfig()
    rng = make_rng(seed)
    width, height = grid.width, grid.height
    result = HydrologyResult()

    coast_class = int(rng.integers(8))
    layout = COAST_LAYOUTS[coast_class]
    depth_x = int(width * (config.depth_min + rng.random() * config.depth_range))
    depth_y = int(height * (config.depth_min + rng.random() * config.depth_range))

    # One wavelength per map side, picked by class parity for both edges
    freq = 2 * math.pi / (width if coast_class % 2 == 0 else height)
    phase = rng.random() * 2 * math.pi

    water = np.zeros((height, width), dtype=bool)
    target = HarborTarget()
    for i, direction in enumerate(layout):
        depth = depth_y if direction.is_horizontal else depth_x
        edge_phase = phase + config.second_edge_phase * i
        fill_coast(water, direction, depth, freq, edge_phase, target, config)

    feature_count = minor_feature_count(width, rng)
    capes = int(rng.integers(feature_count + 1))
    inlets = feature_count - capes

    grid.cells[water] = WATER
    add_sand_buffer(grid)
    result.coastal_water = detect_coastal_water(grid)
    result.coastal_sand = detect_coastal_sand(grid)
    add_capes(grid, result.coastal_water, rng, capes)
    add_inlets(grid, result.coastal_sand, rng, inlets)

    rivers = 0
    if rng.random() < config.river_chance:
        rivers += carve_seaside_river(grid, rng, river, config.river_start_attempts)
        if rng.random() < config.second_river_chance:
            rivers += carve_seaside_river(grid, rng, river, config.river_start_attempts)

    if rng.random() < config.harbor_chance and target.direction is not None:
        anchor = find_harbor_anchor(result.coastal_sand, target, width, height)
        if anchor is not None:
            carve_harbor(grid, anchor, target.direction, rng, config)
            result.harbor_anchor = anchor
            result.harbor_direction = target.direction.value

    logger.debug(
        "seaside_shaped",
        edges=[d.value for d in layout],
        capes=capes,
        inlets=inlets,
        rivers=rivers,
        harbor=result.harbor_anchor,
    )
    return result
