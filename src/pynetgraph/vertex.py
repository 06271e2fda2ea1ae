"""
Graph vertices and their construction from a link map.

A vertex only knows the ids of its neighbors. The component owning it
resolves those ids, so vertices never hold references to each other.
"""

from __future__ import annotations

from typing import Iterable, Mapping
import logging

from sortedcontainers import SortedSet

from .errors import PlacementError, SelfLoopError
from .geom import Vector2D


logger = logging.getLogger(__name__)


class Vertex:
    """
    Vertex of an undirected graph.

    Two vertices are equal if their ids are equal.

    Attributes:
        id: Identifier, unique within the whole input
        position: Cartesian coordinates, set by the placement pass
        neighbors: Ids of the directly linked vertices, in ascending order
        placed: Whether the placement pass has positioned this vertex
        cycle_neighbors: Neighbors whose edge closes a cycle through this vertex
        tree_neighbors: The remaining neighbors
        next_child_angle: Direction (degrees) of the next child to place
    """

    def __init__(self, id: int):
        self.id = id
        self.position = Vector2D()
        self.neighbors: SortedSet = SortedSet()
        self.placed: bool = False
        self.cycle_neighbors: list[int] = []
        self.tree_neighbors: list[int] = []
        self.next_child_angle: float = 0.0

    @property
    def degree(self) -> int:
        """Number of neighbors."""
        return len(self.neighbors)

    def angle_step(self, two_neighbor_reduction: float = 45.0) -> float:
        """
        Angle between two consecutive children of this vertex.

        Children are spread over the vertices of a regular polygon centered
        on this vertex. A vertex with two neighbors gets a narrower step so
        that a chain bends instead of running straight.
        """
        if self.degree == 0:
            return 0.0
        step = 360.0 / self.degree
        if self.degree == 2:
            step -= two_neighbor_reduction
        return step

    def place_at(self, position: Vector2D) -> None:
        """Set the position computed by the placement pass."""
        if self.placed:
            raise PlacementError(f"vertex {self.id} is already placed")
        self.position = position
        self.placed = True

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Vertex) and other.id == self.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Vertex({self.id}, {self.position})"

    def __str__(self) -> str:
        return f"{self.id} {self.position}"


def _check_id(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"vertex ids must be integers, got {value!r}")
    return value


def build_vertices(
    links: Mapping[int, Iterable[int]],
    reject_self_loops: bool = False
) -> dict[int, Vertex]:
    """
    Build vertices from a map of links.

    Links are bi-directional, so a vertex may appear only as a target.
    Repeated links, in either direction, produce a single adjacency.

    Args:
        links: Map each vertex id to the ids of the vertices it links to
        reject_self_loops: Raise SelfLoopError on A -> A instead of dropping it

    Returns:
        Vertices keyed by id, in ascending id order
    """
    vertices: dict[int, Vertex] = {}

    def get(vertex_id: int) -> Vertex:
        vertex = vertices.get(_check_id(vertex_id))
        if vertex is None:
            vertex = vertices[vertex_id] = Vertex(vertex_id)
        return vertex

    for source_id, target_ids in links.items():
        source = get(source_id)
        for target_id in target_ids:
            target = get(target_id)
            if target is source:
                if reject_self_loops:
                    raise SelfLoopError(f"vertex {source_id} links to itself")
                logger.debug("Dropping self-loop on vertex %d", source_id)
                continue
            source.neighbors.add(target.id)
            target.neighbors.add(source.id)

    return {vertex_id: vertices[vertex_id] for vertex_id in sorted(vertices)}
