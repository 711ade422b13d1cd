"""Post-generation validation of a finished map."""

import structlog

from .generator import GenerationResult
from .roads.graph import is_connected
from .roads.nodes import NodeType
from .state import TileMap
from .terrain_types import TerrainType
from .types import road_tile_id

logger = structlog.get_logger()


class ValidationResult:
    """Result of map validation."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.passed = True

    def add_error(self, message: str) -> None:
        """Add validation error."""
        self.errors.append(message)
        self.passed = False

    def add_warning(self, message: str) -> None:
        """Add validation warning."""
        self.warnings.append(message)


def validate_map(result: GenerationResult) -> ValidationResult:
    """Validate a generated map against its structural invariants.

    Args:
        result: Output of generate_map.

    Returns:
        ValidationResult with any errors/warnings.
    """
    validation = ValidationResult()

    # Check 1: One tile per cell, in row-major order
    _check_tile_layout(result.tiles, validation)

    # Check 2: Roads never on water, ids match styles
    _check_road_tiles(result.tiles, validation)

    # Check 3: Nodes inside the map, gates on the inner border ring
    _check_node_bounds(result, validation)

    # Check 4: Every node reachable over the road graph
    if not is_connected(result.roads.nodes, result.roads.connections):
        validation.add_error("Road graph is not connected")

    # Check 5: Water present when a hydrology mode ran
    if result.map_type is not None and not any(
        tile.terrain == TerrainType.WATER for tile in result.tiles
    ):
        validation.add_warning(f"No water on a {result.map_type.value} map")

    if validation.passed:
        logger.info("map_validation_passed", warnings=len(validation.warnings))
    else:
        logger.warning("map_validation_failed", errors=validation.errors)

    for warning in validation.warnings:
        logger.warning("map_validation_warning", message=warning)

    return validation


def _check_tile_layout(tiles: TileMap, result: ValidationResult) -> None:
    """Check completeness, uniqueness and ordering of tiles."""
    width, height = tiles.width, tiles.height
    expected = width * height
    if len(tiles) != expected:
        result.add_error(f"Expected {expected} tiles, found {len(tiles)}")

    seen: set[tuple[int, int]] = set()
    out_of_order = 0
    for index, tile in enumerate(tiles):
        position = (tile.x, tile.y)
        if not tiles.in_bounds(tile.x, tile.y):
            result.add_error(f"Tile {position} is outside the map")
        elif position in seen:
            result.add_error(f"Duplicate tile {position}")
        seen.add(position)

        if position != (index % width, index // width):
            out_of_order += 1

    if out_of_order > 0:
        result.add_error(f"{out_of_order} tiles out of row-major order")


def _check_road_tiles(tiles: TileMap, result: ValidationResult) -> None:
    """Check road tiles are paved dirt with a consistent style and tile id."""
    on_water = 0
    inconsistent = 0

    for tile in tiles:
        if not tile.has_road:
            if tile.road_style is not None or tile.road_tile_id is not None:
                inconsistent += 1
            continue

        if tile.terrain == TerrainType.WATER:
            on_water += 1
        elif tile.terrain != TerrainType.DIRT:
            inconsistent += 1

        if tile.road_style is None or tile.road_tile_id != road_tile_id(tile.road_style):
            inconsistent += 1

    if on_water > 0:
        result.add_error(f"{on_water} road tiles on water")
    if inconsistent > 0:
        result.add_error(f"{inconsistent} tiles with inconsistent road fields")


def _check_node_bounds(gen: GenerationResult, result: ValidationResult) -> None:
    """Check node positions against the map bounds."""
    width, height = gen.width, gen.height

    for node in gen.roads.nodes:
        if not gen.tiles.in_bounds(node.x, node.y):
            result.add_error(f"Node {node} is outside the map")
            continue

        # Too narrow for an inner ring
        if width < 3 or height < 3:
            continue

        if node.node_type == NodeType.GATE:
            on_ring = node.x in (1, width - 2) or node.y in (1, height - 2)
            inside = 1 <= node.x <= width - 2 and 1 <= node.y <= height - 2
            if not (on_ring and inside):
                result.add_error(f"Gate {node} is not on the inner border ring")
