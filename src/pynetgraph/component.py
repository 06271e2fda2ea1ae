"""
Connected components and their single-component placement.

A Component owns the vertices of one connected subgraph. Placing it
assigns every vertex a position around a root at the origin, spreading
the children of each vertex over the vertices of a polygon centered on it
and fanning out the edges that close cycles. Once placed, a component is
only moved rigidly.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Iterable, Iterator, Mapping, Optional
import logging

import numpy as np
from sortedcontainers import SortedSet

from .config import LayoutConfig
from .errors import EmptyComponentError, PlacementError
from .geom import BoundingBox, Vector2D, bounding_box, edges_intersect
from .vertex import Vertex


logger = logging.getLogger(__name__)


def points_to(vertices: Mapping[int, Vertex], start: int, target: int) -> bool:
    """
    Test whether start leads back to target without the direct edge.

    Args:
        vertices: Vertices of the component, keyed by id
        start: A neighbor of target
        target: The vertex to reach

    Returns:
        True if a path of at least two edges joins start to target, that is
        the edge start-target lies on a cycle
    """
    visited = {start}
    frontier = deque(n for n in vertices[start].neighbors if n != target)
    visited.update(frontier)

    while frontier:
        current = frontier.popleft()
        for n in vertices[current].neighbors:
            if n == target:
                return True
            if n not in visited:
                visited.add(n)
                frontier.append(n)

    return False


def _angle_difference(a: float, b: float) -> float:
    """Absolute difference of two angles, in [0, 180]."""
    return abs((a - b + 180.0) % 360.0 - 180.0)


class _PlacementFrame:
    """Placement state of a vertex whose children are being placed."""

    def __init__(self, vertex: Vertex, step: float, via_cycle: bool = False):
        self.vertex = vertex
        self.step = step
        self.via_cycle = via_cycle
        self.sign = 1.0
        self.pending = iter(
            [(n, True) for n in vertex.cycle_neighbors] +
            [(n, False) for n in vertex.tree_neighbors]
        )

    def advance(self, after_cycle: bool) -> None:
        """Move the cursor once the subtree of a child is placed."""
        v = self.vertex
        if after_cycle:
            # Cycle neighbors zig-zag around the outward direction
            v.next_child_angle += self.sign * self.step
            self.sign = -self.sign
        else:
            v.next_child_angle += self.step if v.next_child_angle >= 0.0 else -self.step


class Component:
    """
    Connected subgraph placed as a unit.

    Attributes:
        vertices: Vertices keyed by id, in ascending id order
        edges: Canonical (lower id, higher id) pairs, in ascending order
        center: Current position of the component origin; starts at (0, 0)
            and follows every translation
        root: Vertex placed at the component origin, once placed
    """

    def __init__(self, vertices: Iterable[Vertex]):
        self.vertices: dict[int, Vertex] = {v.id: v for v in sorted(vertices, key=lambda v: v.id)}
        if not self.vertices:
            raise EmptyComponentError("a component needs at least one vertex")

        self.edges: SortedSet = SortedSet(
            (min(v.id, n), max(v.id, n))
            for v in self.vertices.values()
            for n in v.neighbors
            if n in self.vertices
        )
        self.center = Vector2D()
        self.root: Optional[Vertex] = None

    @property
    def placed(self) -> bool:
        """Whether place() has run."""
        return self.root is not None

    @property
    def radius(self) -> float:
        """Maximum distance between the center and a vertex."""
        return max(v.position.distance_to(self.center) for v in self.vertices.values())

    @property
    def min_id(self) -> int:
        return next(iter(self.vertices))

    def __len__(self) -> int:
        return len(self.vertices)

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self.vertices.values())

    def __contains__(self, vertex_id: object) -> bool:
        return vertex_id in self.vertices

    def __repr__(self) -> str:
        return f"Component({list(self.vertices)}, center={self.center})"

    def place(self, config: Optional[LayoutConfig] = None) -> Component:
        """
        Compute the position of every vertex.

        Vertices are ranked by neighbor count (ties by ascending id). The
        neighbors of each vertex are split into cycle and tree neighbors,
        then positions are assigned depth-first from the top ranked vertex,
        which becomes the root at the origin.

        Args:
            config: Heuristic parameters (defaults if None)

        Returns:
            self for method chaining
        """
        if self.placed:
            raise PlacementError("component is already placed")

        config = config or LayoutConfig()
        ranked = sorted(self.vertices.values(), key=lambda v: (-v.degree, v.id))

        for v in ranked:
            self._classify_neighbors(v)

        self.root = ranked[0]
        self._place_vertices(self.root, config)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Placed component rooted at %d: vertices=%d edges=%d radius=%.1f",
                self.root.id, len(self), len(self.edges), self.radius
            )
        return self

    def _classify_neighbors(self, v: Vertex) -> None:
        """Split the neighbors of v in cycle and tree neighbors."""
        v.cycle_neighbors = []
        v.tree_neighbors = []
        for n in v.neighbors:
            if points_to(self.vertices, n, v.id):
                v.cycle_neighbors.append(n)
            else:
                v.tree_neighbors.append(n)

    def _closes_back(self, v: Vertex, parent: Vertex, threshold: float) -> bool:
        """Whether a placed cycle neighbor of v lies in the direction of parent."""
        parent_angle = parent.position.angle
        for n in v.cycle_neighbors:
            other = self.vertices[n]
            if other is parent or not other.placed:
                continue
            if _angle_difference(other.position.angle, parent_angle) < threshold:
                return True
        return False

    def _place_vertices(self, root: Vertex, config: LayoutConfig) -> None:
        """
        Position root at the origin, then every vertex reachable from it.

        Children are visited depth-first, cycle neighbors before tree
        neighbors. Once the subtree of a child is placed, the cursor of its
        parent advances. It swings back and forth after cycle neighbors and
        moves away from zero after tree neighbors.
        """
        root.place_at(Vector2D())
        stack = [_PlacementFrame(root, root.angle_step(config.two_neighbor_angle_reduction))]

        while stack:
            frame = stack[-1]
            for child_id, via_cycle in frame.pending:
                child = self.vertices[child_id]
                if not child.placed:
                    stack.append(self._place_child(child, frame.vertex, via_cycle, config))
                    break
            else:
                stack.pop()
                if stack:
                    stack[-1].advance(frame.via_cycle)

    def _place_child(
        self,
        v: Vertex,
        parent: Vertex,
        via_cycle: bool,
        config: LayoutConfig
    ) -> _PlacementFrame:
        """Position v relative to parent."""
        step = v.angle_step(config.two_neighbor_angle_reduction)
        v.next_child_angle = parent.next_child_angle + 180.0 + step

        if self._closes_back(v, parent, config.angle_snap_threshold):
            parent.next_child_angle += config.angle_snap_nudge

        distance = config.base_distance * max(1, v.degree - 2)
        v.place_at(parent.position.move(parent.next_child_angle, distance))
        return _PlacementFrame(v, step, via_cycle)

    def translate(self, delta: Vector2D) -> None:
        """Move every vertex, and the center, by delta."""
        for v in self.vertices.values():
            v.position = v.position + delta
        self.center = self.center + delta

    def move_to(self, point: Vector2D) -> None:
        """Translate the component so that its center lies on point."""
        self.translate(point - self.center)

    def segments(self) -> np.ndarray:
        """Edge segments as an array of shape (edges, 2, 2)."""
        if not self.edges:
            return np.empty((0, 2, 2))
        return np.array([
            [self.vertices[a].position.to_tuple(), self.vertices[b].position.to_tuple()]
            for a, b in self.edges
        ])

    def overlaps(self, other: Component) -> bool:
        """Test whether an edge of this component intersects an edge of other."""
        return edges_intersect(self.segments(), other.segments())

    def bounding_box(self) -> BoundingBox:
        return bounding_box(v.position for v in self.vertices.values())

    def positions(self) -> dict[int, tuple[float, float]]:
        """Position of every vertex, keyed by id."""
        return {vid: v.position.to_tuple() for vid, v in self.vertices.items()}

    def edge_list(self) -> list[tuple[int, int]]:
        return list(self.edges)

    def to_dict(self) -> dict[str, Any]:
        """Plain representation for renderers."""
        return {
            'center': [self.center.x, self.center.y],
            'radius': self.radius,
            'vertices': [
                {'id': v.id, 'x': v.position.x, 'y': v.position.y}
                for v in self.vertices.values()
            ],
            'edges': [[a, b] for a, b in self.edges],
        }
