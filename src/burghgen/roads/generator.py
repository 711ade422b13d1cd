"""Road network synthesis over a colored map."""

import structlog

from ..config import RoadConfig
from ..state import TerrainGrid, TileMap
from ..types import MapSize, MapType, RoadStyle, make_rng
from .carving import carve_road_path
from .graph import Connection, connect_nodes
from .nodes import Point, RoadNode, place_road_nodes
from .town_center import choose_town_center

logger = structlog.get_logger()


class RoadNetwork:
    """Nodes and connections of a generated road network."""

    def __init__(
        self,
        town_center: Point,
        nodes: list[RoadNode],
        connections: list[Connection],
        style: RoadStyle,
        size: MapSize,
    ):
        self.town_center = town_center
        self.nodes = nodes
        self.connections = connections
        self.style = style
        self.size = size


def generate_road_network(
    tiles: TileMap,
    grid: TerrainGrid,
    map_type: MapType | None,
    seed: int,
    config: RoadConfig | None = None,
) -> RoadNetwork:
    """Place, connect and carve the major roads of a town.

    The stage draws from a single stream in a fixed order: town center,
    node placement, connection, carving. Only the tile records change;
    ``grid`` is read for the town center heuristics.

    Args:
        tiles: Tile records to pave.
        grid: Terrain after coloring.
        map_type: Hydrology mode the map was built with.
        seed: Run seed.
        config: Road parameters.

    Returns:
        RoadNetwork describing what was carved.
    """
    config = config or RoadConfig()
    rng = make_rng(seed)
    width, height = tiles.width, tiles.height
    size = MapSize.from_dimensions(width, height)

    town_center = choose_town_center(grid, map_type, rng, config)
    style = RoadStyle.for_width(width)

    nodes = place_road_nodes(
        town_center, width, height, rng, size,
        config.district_min_radius, config.district_radius_range,
    )
    connections = connect_nodes(
        nodes, rng, config.max_extra_edges, config.extra_edge_attempts
    )

    paved = 0
    for path in connections:
        paved += carve_road_path(tiles, path, rng, style, size)

    logger.debug(
        "road_network_built",
        town_center=town_center,
        nodes=len(nodes),
        connections=len(connections),
        style=style.value,
        paved=paved,
    )
    return RoadNetwork(town_center, nodes, connections, style, size)
