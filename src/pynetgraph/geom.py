"""
Geometric utilities for network layout.

This module provides the 2D vector value type used for vertex positions,
orientation and segment intersection tests, and bounding boxes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional
import math

import numpy as np


RAD_TO_DEG = 180.0 / math.pi

# Distance to a line, relative to the segment length, under which a point lies on it
COLLINEAR_EPSILON = 1e-9

# Absolute tolerance of bounding box containment
CONTAINS_EPSILON = 1e-6


@dataclass(frozen=True)
class Vector2D:
    """2D point, or displacement, in the Cartesian plane."""

    x: float = 0.0
    y: float = 0.0

    @classmethod
    def by_polar(cls, angle: float, distance: float) -> Vector2D:
        """
        Build a point from polar coordinates.

        Args:
            angle: Polar angle, in degrees
            distance: Distance from the origin

        Returns:
            The point at the given polar coordinates
        """
        return cls(
            distance * math.cos(angle / RAD_TO_DEG),
            distance * math.sin(angle / RAD_TO_DEG)
        )

    @property
    def angle(self) -> float:
        """
        Angle between the x axis and the line from the origin, in degrees.

        The result lies in [-180, 180]. The origin itself has angle 0,
        whatever the sign of its zero coordinates.
        """
        if self.x == 0 and self.y == 0:
            return 0.0
        return RAD_TO_DEG * math.atan2(self.y, self.x)

    @property
    def length(self) -> float:
        """Distance from the origin."""
        return math.hypot(self.x, self.y)

    def __add__(self, other: Vector2D) -> Vector2D:
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2D) -> Vector2D:
        return Vector2D(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Vector2D:
        return Vector2D(-self.x, -self.y)

    def __mul__(self, k: float) -> Vector2D:
        return Vector2D(self.x * k, self.y * k)

    __rmul__ = __mul__

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def move(self, angle: float, distance: float) -> Vector2D:
        """
        Move this point by a delta given in polar coordinates.

        Args:
            angle: Direction of the movement, in degrees
            distance: Length of the movement

        Returns:
            A new point
        """
        return self + Vector2D.by_polar(angle, distance)

    def distance_to(self, other: Vector2D) -> float:
        """Euclidean distance to another point."""
        return (self - other).length

    def to_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


def is_left(P0: Vector2D, P1: Vector2D, P2: Vector2D) -> float:
    """
    Test if a point is Left|On|Right of an infinite line.

    Args:
        P0, P1: Define the line
        P2: Point to test

    Returns:
        >0 for P2 left of the line through P0 and P1
        =0 for P2 on the line
        <0 for P2 right of the line
    """
    return (P1.x - P0.x) * (P2.y - P0.y) - (P2.x - P0.x) * (P1.y - P0.y)


def orientation(P0: Vector2D, P1: Vector2D, P2: Vector2D) -> int:
    """
    Rotation of the triple P0, P1, P2.

    Returns:
        1 for counter-clockwise, -1 for clockwise, 0 when the points are
        collinear up to COLLINEAR_EPSILON
    """
    cross = is_left(P0, P1, P2)
    scale = (P1 - P0).length ** 2
    if abs(cross) <= COLLINEAR_EPSILON * scale:
        return 0
    return 1 if cross > 0 else -1


def segments_intersect(p0: Vector2D, p1: Vector2D, p2: Vector2D, p3: Vector2D) -> bool:
    """
    Test whether segment p0-p1 intersects segment p2-p3.

    Touching segments intersect, and so do collinear segments sharing at
    least one point. Collinear but disjoint segments do not: all four
    orientations are then zero, yet two components ringed along one axis,
    such as two single edges on the x axis, must not count as overlapping
    while a gap separates them.
    """
    segments_a = np.array([[[p0.x, p0.y], [p1.x, p1.y]]])
    segments_b = np.array([[[p2.x, p2.y], [p3.x, p3.y]]])
    return edges_intersect(segments_a, segments_b)


def _orientations(p: np.ndarray, q: np.ndarray, r: np.ndarray) -> np.ndarray:
    """Vectorised orientation() over broadcastable (..., 2) arrays."""
    pq = q - p
    pr = r - p
    cross = pq[..., 0] * pr[..., 1] - pr[..., 0] * pq[..., 1]
    scale = pq[..., 0] * pq[..., 0] + pq[..., 1] * pq[..., 1]
    return np.where(np.abs(cross) <= COLLINEAR_EPSILON * scale, 0.0, np.sign(cross))


def _collinear_overlap(p0: np.ndarray, p1: np.ndarray, p2: np.ndarray, p3: np.ndarray) -> np.ndarray:
    """For collinear segments, whether p2-p3 shares a point with p0-p1."""
    d = p1 - p0
    dd = d[..., 0] * d[..., 0] + d[..., 1] * d[..., 1]
    safe_dd = np.where(dd > 0, dd, 1.0)
    t2 = ((p2 - p0) * d).sum(axis=-1) / safe_dd
    t3 = ((p3 - p0) * d).sum(axis=-1) / safe_dd
    lo = np.minimum(t2, t3)
    hi = np.maximum(t2, t3)
    return (hi >= -COLLINEAR_EPSILON) & (lo <= 1 + COLLINEAR_EPSILON)


def edges_intersect(a: np.ndarray, b: np.ndarray) -> bool:
    """
    Test whether any segment of a intersects any segment of b.

    The segments of each set are compared pairwise with the orientation
    test: two segments intersect when the endpoints of each one lie on
    opposite sides of the other, or on it.

    Args:
        a: Array of shape (m, 2, 2), one row of two endpoints per segment
        b: Array of shape (n, 2, 2)

    Returns:
        True if at least one pair of segments intersects
    """
    if len(a) == 0 or len(b) == 0:
        return False

    p0 = a[:, np.newaxis, 0, :]  # (m, 1, 2)
    p1 = a[:, np.newaxis, 1, :]
    p2 = b[np.newaxis, :, 0, :]  # (1, n, 2)
    p3 = b[np.newaxis, :, 1, :]

    o1 = _orientations(p0, p1, p2)  # (m, n)
    o2 = _orientations(p0, p1, p3)
    o3 = _orientations(p2, p3, p0)
    o4 = _orientations(p2, p3, p1)

    crossing = (o1 * o2 <= 0) & (o3 * o4 <= 0)

    # All four points on one line: only overlapping spans intersect
    collinear = (o1 == 0) & (o2 == 0) & (o3 == 0) & (o4 == 0)
    if np.any(collinear):
        p0b, p1b, p2b, p3b = np.broadcast_arrays(p0, p1, p2, p3)
        spans = _collinear_overlap(p0b, p1b, p2b, p3b) | _collinear_overlap(p2b, p3b, p0b, p1b)
        crossing &= ~collinear | spans

    return bool(np.any(crossing))


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned bounding box."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> Vector2D:
        """Midpoint of the box."""
        return Vector2D((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    def contains(self, p: Vector2D, tolerance: float = CONTAINS_EPSILON) -> bool:
        """Test if p lies inside the box or on its border."""
        return (self.min_x - tolerance <= p.x <= self.max_x + tolerance and
                self.min_y - tolerance <= p.y <= self.max_y + tolerance)


def bounding_box(points: Iterable[Vector2D]) -> Optional[BoundingBox]:
    """
    Calculate the bounding box of a set of points.

    Returns:
        The bounding box, or None when there are no points
    """
    xy = np.array([(p.x, p.y) for p in points], dtype=float)
    if len(xy) == 0:
        return None

    min_x, min_y = xy.min(axis=0)
    max_x, max_y = xy.max(axis=0)
    return BoundingBox(float(min_x), float(min_y), float(max_x), float(max_y))
