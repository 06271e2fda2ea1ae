"""
Handle disconnected graph components.

This module provides utilities for separating disconnected components
and arranging them around the origin without overlapping edges: components
are first placed on concentric hexagonal rings, then pulled one by one
towards the origin until they would collide with those already settled.
"""

from __future__ import annotations

from typing import Callable, Mapping, Optional
import logging
import math
import random
import warnings

import numpy as np

from .component import Component
from .config import LayoutConfig
from .errors import OverlapWarning
from .geom import BoundingBox, Vector2D, bounding_box, edges_intersect
from .vertex import Vertex


logger = logging.getLogger(__name__)

SettledListener = Callable[[Component, int], None]


def separate_graphs(vertices: Mapping[int, Vertex]) -> list[Component]:
    """
    Find connected components in a graph.

    Args:
        vertices: Vertices keyed by id, with symmetric neighbors

    Returns:
        One component per maximal connected subset, ordered by their
        lowest vertex id
    """
    marks: set[int] = set()
    groups: dict[int, list[int]] = {}

    # Depth-first exploration with an explicit stack
    def explore(start: int) -> list[int]:
        found = [start]
        marks.add(start)
        stack = [start]
        while stack:
            current = stack.pop()
            for adj in vertices[current].neighbors:
                if adj not in marks:
                    marks.add(adj)
                    found.append(adj)
                    stack.append(adj)
        return found

    for vertex_id in sorted(vertices):
        if vertex_id not in marks:
            group = explore(vertex_id)
            groups.setdefault(min(group), group)

    return [Component(vertices[i] for i in groups[key]) for key in sorted(groups)]


def apply_ring_placement(components: list[Component], config: Optional[LayoutConfig] = None) -> None:
    """
    Place components on the vertices of concentric hexagons.

    The component with the largest radius stays at the origin. The others,
    by descending radius, fill rings of group_size components, each ring
    sized to the largest component it holds.

    Args:
        components: Placed components
        config: Heuristic parameters (defaults if None)
    """
    if len(components) == 0:
        return

    config = config or LayoutConfig()
    ordered = sorted(components, key=lambda c: (-c.radius, c.min_id))

    ordered[0].move_to(Vector2D())
    radius = ordered[0].radius

    for start in range(1, len(ordered), config.group_size):
        group = ordered[start:start + config.group_size]
        group_radius = group[0].radius

        radius += group_radius
        angle = 0.0
        for component in group:
            component.move_to(Vector2D.by_polar(angle, radius))
            angle += config.ring_angle_step
        radius += group_radius


def _collapse(
    component: Component,
    blocked: Callable[[Component], bool],
    step_length: float,
    max_iterations: int,
    backoff_steps: int
) -> tuple[int, bool]:
    """
    Move a component towards the origin until blocked.

    Returns:
        Tuple of (steps taken, whether the component was blocked)
    """
    steps = 0
    while steps < max_iterations:
        if component.center.length < step_length:
            break

        direction = component.center.angle + 180.0
        component.translate(Vector2D.by_polar(direction, step_length))
        steps += 1

        if blocked(component):
            component.translate(Vector2D.by_polar(direction, -step_length * backoff_steps))
            return steps, True

    return steps, False


def collapse_components(
    components: list[Component],
    config: Optional[LayoutConfig] = None,
    on_settled: Optional[SettledListener] = None
) -> list[Component]:
    """
    Pull components with edges towards the origin, one at a time.

    The component closest to the origin is settled first. Each of the
    others moves inwards by step_length until one of its edges would
    intersect an edge of a settled component, then backs off.

    Args:
        components: Components already placed on rings
        config: Heuristic parameters (defaults if None)
        on_settled: Called with each settled component and its step count

    Returns:
        The settled components, in settling order
    """
    config = config or LayoutConfig()
    ordered = sorted(
        (c for c in components if len(c) > 1),
        key=lambda c: (c.center.length, c.min_id)
    )
    if not ordered:
        return []

    settled = [ordered[0]]
    if on_settled is not None:
        on_settled(ordered[0], 0)

    for component in ordered[1:]:
        # Settled components do not move while this one collapses
        obstacles = np.concatenate([c.segments() for c in settled])

        def blocked(c: Component) -> bool:
            return edges_intersect(c.segments(), obstacles)

        steps, was_blocked = _collapse(
            component, blocked, config.step_length, config.max_iterations, config.backoff_steps
        )

        if was_blocked and config.warn_on_overlap and blocked(component):
            warnings.warn(
                f"Component {component.min_id} still overlaps after backing off",
                OverlapWarning,
                stacklevel=2
            )

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Collapsed component %d: steps=%d blocked=%s center=%s",
                component.min_id, steps, was_blocked, component.center
            )

        settled.append(component)
        if on_settled is not None:
            on_settled(component, steps)

    return settled


def recenter(components: list[Component]) -> Optional[BoundingBox]:
    """
    Translate components together so their bounding box is centered on the origin.

    Returns:
        The bounding box after translation, or None without components
    """
    box = bounding_box(v.position for c in components for v in c)
    if box is None:
        return None

    delta = -box.center
    for c in components:
        c.translate(delta)

    return BoundingBox(
        box.min_x + delta.x, box.min_y + delta.y,
        box.max_x + delta.x, box.max_y + delta.y
    )


def collapse_single_vertices(
    components: list[Component],
    box: Optional[BoundingBox],
    config: Optional[LayoutConfig] = None
) -> None:
    """
    Pull single-vertex components towards the origin.

    A single vertex has no edges to intersect, so it stops as soon as its
    center enters the bounding box of the other components, then backs off.

    Args:
        components: Single-vertex components
        box: Bounding box of the components with edges (nothing moves if None)
        config: Heuristic parameters (defaults if None)
    """
    if box is None:
        return

    config = config or LayoutConfig()
    for component in components:
        _collapse(
            component,
            lambda c: box.contains(c.center),
            config.step_length,
            config.max_iterations,
            config.single_backoff_steps
        )


def apply_jitter(
    components: list[Component],
    config: Optional[LayoutConfig] = None,
    rng: Optional[random.Random] = None
) -> None:
    """
    Move each component by a small random offset.

    The offset is bounded by jitter_steps step lengths on each axis.
    """
    config = config or LayoutConfig()
    rng = rng or random.Random(config.seed)
    bound = config.jitter_steps * config.step_length

    for component in components:
        component.translate(Vector2D(rng.uniform(-bound, bound), rng.uniform(-bound, bound)))


def find_overlaps(components: list[Component]) -> list[tuple[Component, Component]]:
    """
    Find the pairs of components whose edges intersect.

    Returns:
        Pairs (a, b) with a listed before b in components
    """
    segments = [c.segments() for c in components]
    overlaps = []
    for i in range(len(components) - 1):
        for j in range(i + 1, len(components)):
            if edges_intersect(segments[i], segments[j]):
                overlaps.append((components[i], components[j]))
    return overlaps


def get_entire_radius(components: list[Component]) -> float:
    """Distance from the origin to the farthest vertex."""
    if len(components) == 0:
        return 0.0
    return max(math.hypot(*v.position) for c in components for v in c)
