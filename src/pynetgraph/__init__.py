"""
PyNetGraph: deterministic 2D layout of undirected network graphs.

Vertices are placed component by component on concentric polygons, and
disconnected components are arranged around the origin without crossing
each other's edges.
"""

__version__ = "0.1.0"

from .config import LayoutConfig
from .errors import (
    EmptyComponentError,
    LayoutError,
    OverlapWarning,
    PlacementError,
    SelfLoopError,
)
from .geom import BoundingBox, Vector2D, segments_intersect
from .vertex import Vertex, build_vertices
from .component import Component
from .handledisconnected import separate_graphs
from .layout import EventType, Layout, layout_links

__all__ = [
    "BoundingBox",
    "Component",
    "EmptyComponentError",
    "EventType",
    "Layout",
    "LayoutConfig",
    "LayoutError",
    "OverlapWarning",
    "PlacementError",
    "SelfLoopError",
    "Vector2D",
    "Vertex",
    "build_vertices",
    "layout_links",
    "segments_intersect",
    "separate_graphs",
]
