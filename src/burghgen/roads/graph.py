"""Road graph construction: minimum spanning tree plus a few cross links."""

import heapq
from collections import deque
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .nodes import RoadNode

Connection = tuple[RoadNode, RoadNode]


@dataclass
class RoadEdge:
    """Candidate edge during spanning tree construction."""

    source: RoadNode
    target: RoadNode
    cost: float

    @classmethod
    def between(cls, source: RoadNode, target: RoadNode) -> "RoadEdge":
        return cls(source, target, source.distance_to(target))


def minimum_spanning_tree(nodes: list[RoadNode]) -> list[Connection]:
    """Prim's algorithm rooted at the first node.

    Equal-cost edges are taken in the order they were queued.

    Returns:
        Tree connections as (connected node, newly joined node) pairs.
    """
    if not nodes:
        return []

    start = nodes[0]
    connected: set[RoadNode] = {start}
    connections: list[Connection] = []

    # Priority queue: (cost, insertion order, edge)
    pq: list[tuple[float, int, RoadEdge]] = []
    seq = 0
    for node in nodes:
        if node != start:
            heapq.heappush(pq, (start.distance_to(node), seq, RoadEdge.between(start, node)))
            seq += 1

    while len(connected) < len(nodes) and pq:
        _, _, edge = heapq.heappop(pq)
        if edge.target in connected:
            continue

        connected.add(edge.target)
        connections.append((edge.source, edge.target))

        for node in nodes:
            if node not in connected:
                new_edge = RoadEdge.between(edge.target, node)
                heapq.heappush(pq, (new_edge.cost, seq, new_edge))
                seq += 1

    return connections


def directly_connected(connections: Sequence[Sequence[RoadNode]], a: RoadNode, b: RoadNode) -> bool:
    """Whether a connection joins a and b in either direction."""
    return any(
        (c[0] == a and c[1] == b) or (c[0] == b and c[1] == a)
        for c in connections
    )


def add_cross_links(
    nodes: list[RoadNode],
    connections: list[Connection],
    rng: np.random.Generator,
    max_extra: int = 2,
    max_attempts: int = 20,
) -> int:
    """Append 1..max_extra random links between distinct, unlinked nodes.

    Returns:
        Number of links added.
    """
    wanted = 1 + int(rng.integers(max_extra))
    added = 0
    attempts = 0
    while added < wanted and attempts < max_attempts:
        a = nodes[int(rng.integers(len(nodes)))]
        b = nodes[int(rng.integers(len(nodes)))]
        if a != b and not directly_connected(connections, a, b):
            connections.append((a, b))
            added += 1
        attempts += 1
    return added


def connect_nodes(
    nodes: list[RoadNode],
    rng: np.random.Generator,
    max_extra: int = 2,
    max_attempts: int = 20,
) -> list[Connection]:
    """Connect all nodes with a spanning tree, then add a few loops.

    Args:
        nodes: Road nodes; the first is the tree root.
        rng: Road stage random stream.
        max_extra: Maximum number of cross links beyond the tree.
        max_attempts: Random node pairs tried for cross links.

    Returns:
        Connections in creation order, tree edges first.
    """
    connections = minimum_spanning_tree(nodes)
    if nodes:
        add_cross_links(nodes, connections, rng, max_extra, max_attempts)
    return connections


def is_connected(nodes: Sequence[RoadNode], connections: Sequence[Sequence[RoadNode]]) -> bool:
    """Whether the connections join every node into one component."""
    if len(nodes) <= 1:
        return True

    adjacency: dict[RoadNode, set[RoadNode]] = {node: set() for node in nodes}
    for connection in connections:
        if len(connection) != 2:
            continue
        a, b = connection
        adjacency.setdefault(a, set()).add(b)
        adjacency.setdefault(b, set()).add(a)

    seen = {nodes[0]}
    queue = deque([nodes[0]])
    while queue:
        node = queue.popleft()
        for neighbor in adjacency[node]:
            if neighbor not in seen:
                seen.add(neighbor)
                queue.append(neighbor)

    return all(node in seen for node in nodes)
