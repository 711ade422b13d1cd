"""Road network synthesis: node placement, spanning tree, carving."""

from .carving import bresenham, carve_road_path, draw_road_at
from .generator import RoadNetwork, generate_road_network
from .graph import RoadEdge, connect_nodes, is_connected
from .nodes import NodeType, RoadNode, place_road_nodes
from .town_center import choose_town_center

__all__ = [
    "NodeType",
    "RoadEdge",
    "RoadNetwork",
    "RoadNode",
    "bresenham",
    "carve_road_path",
    "choose_town_center",
    "connect_nodes",
    "draw_road_at",
    "generate_road_network",
    "is_connected",
    "place_road_nodes",
]
