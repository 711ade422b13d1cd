"""Road network nodes and their placement."""

import math
from enum import Enum

import numpy as np
from pydantic import BaseModel

from ..types import MapSize

Point = tuple[int, int]


class NodeType(str, Enum):
    """Role of a road node in the town layout."""

    TOWN_CENTER = "TOWN_CENTER"
    GATE = "GATE"
    DISTRICT_CENTER = "DISTRICT_CENTER"
    LANDMARK = "LANDMARK"
    RANDOM = "RANDOM"


# Number of districts: base + randInt(spread)
DISTRICT_COUNTS: dict[MapSize, tuple[int, int]] = {
    MapSize.SMALL: (2, 2),
    MapSize.MEDIUM: (3, 3),
    MapSize.LARGE: (5, 4),
}

GATE_COUNTS: dict[MapSize, int] = {
    MapSize.SMALL: 2,
    MapSize.MEDIUM: 3,
    MapSize.LARGE: 4,
}


class RoadNode(BaseModel, frozen=True):
    """Immutable road graph node; equal when position and type match."""

    x: int
    y: int
    node_type: NodeType

    @property
    def point(self) -> Point:
        return (self.x, self.y)

    def distance_to(self, other: "RoadNode") -> float:
        """Euclidean distance between the two node positions."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def __hash__(self) -> int:
        return hash((self.x, self.y, self.node_type))

    def __str__(self) -> str:
        return f"{self.node_type.value}({self.x}, {self.y})"


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def place_road_nodes(
    town_center: Point,
    width: int,
    height: int,
    rng: np.random.Generator,
    size: MapSize,
    district_min_radius: float = 0.15,
    district_radius_range: float = 0.2,
) -> list[RoadNode]:
    """Lay out the major nodes: town center, districts, then gates.

    Districts sit at a random angle and distance from the town center and
    are kept two cells off the border. Gates sit on a random edge, pulled
    one cell inward. A node landing on an already used position is dropped.

    Args:
        town_center: Town center position; always the first node.
        width: Map width.
        height: Map height.
        rng: Road stage random stream.
        size: Map size class.

    Returns:
        Nodes in placement order.
    """
    nodes = [RoadNode(x=town_center[0], y=town_center[1], node_type=NodeType.TOWN_CENTER)]
    used: set[Point] = {town_center}

    def add(x: int, y: int, node_type: NodeType) -> None:
        # Tiny maps can push the interior bounds outside the grid
        x = clamp(x, 0, width - 1)
        y = clamp(y, 0, height - 1)
        if (x, y) not in used:
            used.add((x, y))
            nodes.append(RoadNode(x=x, y=y, node_type=node_type))

    base, spread = DISTRICT_COUNTS[size]
    district_count = base + int(rng.integers(spread))
    for _ in range(district_count):
        angle = rng.random() * 2 * math.pi
        distance = int(width * district_min_radius + rng.random() * width * district_radius_range)
        x = clamp(int(town_center[0] + math.cos(angle) * distance), 2, width - 3)
        y = clamp(int(town_center[1] + math.sin(angle) * distance), 2, height - 3)
        add(x, y, NodeType.DISTRICT_CENTER)

    for _ in range(GATE_COUNTS[size]):
        edge = int(rng.integers(4))
        match edge:
            case 0:
                x, y = int(rng.integers(width)), 0
            case 1:
                x, y = width - 1, int(rng.integers(height))
            case 2:
                x, y = int(rng.integers(width)), height - 1
            case _:
                x, y = 0, int(rng.integers(height))
        add(clamp(x, 1, width - 2), clamp(y, 1, height - 2), NodeType.GATE)

    return nodes
