"""
Network layout engine.

This module implements the Layout class which provides:
- Vertex and component construction from a link map
- Per-component placement
- Ring placement and collapse of disconnected components
- Event system (start/tick/end events)
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Optional, TypedDict, Union
from enum import IntEnum
import logging
import random

from .component import Component
from .config import LayoutConfig
from .errors import PlacementError
from .handledisconnected import (
    apply_jitter,
    apply_ring_placement,
    collapse_components,
    collapse_single_vertices,
    find_overlaps,
    get_entire_radius,
    recenter,
    separate_graphs,
)
from .vertex import Vertex, build_vertices


logger = logging.getLogger(__name__)

LinkMap = Mapping[int, Iterable[int]]


class EventType(IntEnum):
    """
    The layout process fires three events:
    - start: layout started, before any vertex is placed
    - tick: fired once per component settled by the collapse
    - end: every component has its final position
    """
    start = 0
    tick = 1
    end = 2


class Event(TypedDict, total=False):
    """Event dictionary passed to event listeners."""
    type: EventType
    component: Optional[Component]
    steps: int
    components: list[Component]


class Layout:
    """
    Main interface to the network layout.

    Getter/setter methods return the current value when called without
    argument, and self for chaining otherwise.
    """

    def __init__(self, links: Optional[LinkMap] = None, config: Optional[LayoutConfig] = None):
        self._links: LinkMap = links if links is not None else {}
        self._config: LayoutConfig = config or LayoutConfig()
        self._vertices: dict[int, Vertex] = {}
        self._components: Optional[list[Component]] = None

        # Event system - can be overridden by subclasses
        self.event: Optional[dict] = None

    def on(self, e: Union[EventType, str], listener: Callable[[Event], None]) -> Layout:
        """
        Subscribe a listener to an event.

        Args:
            e: Event type (EventType enum or string name)
            listener: Function to call when event fires

        Returns:
            self for method chaining
        """
        if self.event is None:
            self.event = {}

        if isinstance(e, str):
            self.event[EventType[e]] = listener
        else:
            self.event[e] = listener

        return self

    def trigger(self, e: Event) -> None:
        """Trigger an event by calling the registered listener."""
        if self.event and e['type'] in self.event:
            self.event[e['type']](e)

    def links(self, x: Optional[LinkMap] = None) -> Union[LinkMap, Layout]:
        """
        Get or set the link map.

        Each key is a vertex id, each value the ids it links to. Links
        are undirected and targets need not appear as keys.
        """
        if x is None:
            return self._links

        self._links = x
        self._components = None
        return self

    def config(self, x: Optional[LayoutConfig] = None) -> Union[LayoutConfig, Layout]:
        """Get or set all heuristic parameters at once."""
        if x is None:
            return self._config

        self._config = x
        return self

    def base_distance(self, x: Optional[float] = None) -> Union[float, Layout]:
        """Get or set the distance between a vertex and its parent."""
        if x is None:
            return self._config.base_distance

        self._config = self._config.replace(base_distance=x)
        return self

    def step_length(self, x: Optional[float] = None) -> Union[float, Layout]:
        """Get or set the length of one collapse step."""
        if x is None:
            return self._config.step_length

        self._config = self._config.replace(step_length=x)
        return self

    def max_iterations(self, x: Optional[int] = None) -> Union[int, Layout]:
        """Get or set the collapse step budget of each component."""
        if x is None:
            return self._config.max_iterations

        self._config = self._config.replace(max_iterations=x)
        return self

    def seed(self, x: Optional[int] = None) -> Union[Optional[int], Layout]:
        """Get or set the seed of the single-vertex jitter."""
        if x is None:
            return self._config.seed

        self._config = self._config.replace(seed=x)
        return self

    def start(self) -> Layout:
        """
        Compute the layout.

        Builds vertices and components from the links, places every
        component, then arranges them around the origin when there is more
        than one.

        Returns:
            self for method chaining
        """
        config = self._config
        self.trigger({'type': EventType.start})

        self._vertices = build_vertices(self._links, config.reject_self_loops)
        components = separate_graphs(self._vertices)

        for component in components:
            component.place(config)

        if len(components) > 1:
            self._arrange(components)

        logger.debug(
            "Layout complete: vertices=%d components=%d",
            len(self._vertices), len(components)
        )

        self._components = components
        self.trigger({'type': EventType.end, 'components': components})
        return self

    def _arrange(self, components: list[Component]) -> None:
        """Ring, collapse and recenter the components."""
        config = self._config

        apply_ring_placement(components, config)

        def settled(component: Component, steps: int) -> None:
            self.trigger({'type': EventType.tick, 'component': component, 'steps': steps})

        multi = collapse_components(components, config, on_settled=settled)
        box = recenter(multi)

        singles = [c for c in components if len(c) == 1]
        collapse_single_vertices(singles, box, config)
        apply_jitter(singles, config, random.Random(config.seed))

    def _require_started(self) -> list[Component]:
        if self._components is None:
            raise PlacementError("call start() before reading the layout")
        return self._components

    def components(self) -> list[Component]:
        """Components of the computed layout."""
        return self._require_started()

    def vertex(self, vertex_id: int) -> Vertex:
        """Vertex with the given id."""
        self._require_started()
        return self._vertices[vertex_id]

    def positions(self) -> dict[int, tuple[float, float]]:
        """Position of every vertex, keyed by id."""
        result: dict[int, tuple[float, float]] = {}
        for component in self._require_started():
            result.update(component.positions())
        return dict(sorted(result.items()))

    def radius(self) -> float:
        """Distance from the origin to the farthest vertex."""
        return get_entire_radius(self._require_started())

    def find_overlaps(self) -> list[tuple[Component, Component]]:
        """Pairs of components whose edges still intersect."""
        return find_overlaps(self._require_started())

    def to_dict(self) -> dict[str, Any]:
        """Plain representation for renderers."""
        return {'components': [c.to_dict() for c in self._require_started()]}


def layout_links(links: LinkMap, config: Optional[LayoutConfig] = None) -> list[Component]:
    """
    Lay out the graphs described by a link map.

    Args:
        links: Map each vertex id to the ids of the vertices it links to
        config: Heuristic parameters (defaults if None)

    Returns:
        The placed components
    """
    return Layout(links, config).start().components()
