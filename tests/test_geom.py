"""Tests for geometry utilities."""

import dataclasses
import math

import numpy as np
import pytest
from pynetgraph.geom import (
    Vector2D, BoundingBox,
    is_left, orientation,
    segments_intersect, edges_intersect, bounding_box
)


class TestVector2D:
    """Test Vector2D class."""

    def test_create_vector(self):
        """Test vector creation."""
        p = Vector2D(3.5, 4.2)
        assert p.x == 3.5
        assert p.y == 4.2

    def test_default_vector(self):
        """Test default vector at origin."""
        p = Vector2D()
        assert p.x == 0.0
        assert p.y == 0.0

    def test_immutable(self):
        """Test that coordinates cannot be reassigned."""
        p = Vector2D(1, 2)
        with pytest.raises(dataclasses.FrozenInstanceError):
            p.x = 5

    def test_equality(self):
        """Test value equality."""
        assert Vector2D(1, 2) == Vector2D(1, 2)
        assert Vector2D(1, 2) != Vector2D(2, 1)

    def test_by_polar(self):
        """Test construction from polar coordinates."""
        p = Vector2D.by_polar(90, 2)
        assert p.x == pytest.approx(0, abs=1e-12)
        assert p.y == pytest.approx(2)

        q = Vector2D.by_polar(135, 250)
        assert q.x == pytest.approx(-250 / math.sqrt(2))
        assert q.y == pytest.approx(250 / math.sqrt(2))

    def test_angle(self):
        """Test polar angle in degrees."""
        assert Vector2D(1, 1).angle == pytest.approx(45)
        assert Vector2D(0, 1).angle == pytest.approx(90)
        assert Vector2D(-1, 0).angle == pytest.approx(180)
        assert Vector2D(0, -1).angle == pytest.approx(-90)

    def test_angle_at_origin(self):
        """Test that the origin has angle 0 whatever the zero signs."""
        assert Vector2D(0.0, 0.0).angle == 0.0
        assert Vector2D(-0.0, 0.0).angle == 0.0
        assert Vector2D(-0.0, -0.0).angle == 0.0

    def test_length(self):
        """Test Euclidean length."""
        assert Vector2D(3, 4).length == pytest.approx(5)
        assert Vector2D(-3, -4).length == pytest.approx(5)
        assert Vector2D().length == 0

    def test_arithmetic(self):
        """Test addition, subtraction, negation and scaling."""
        a = Vector2D(1, 2)
        b = Vector2D(3, 5)
        assert a + b == Vector2D(4, 7)
        assert b - a == Vector2D(2, 3)
        assert -a == Vector2D(-1, -2)
        assert a * 3 == Vector2D(3, 6)
        assert 3 * a == Vector2D(3, 6)

    def test_move(self):
        """Test moving by a polar delta."""
        p = Vector2D(10, 10).move(0, 5)
        assert p.x == pytest.approx(15)
        assert p.y == pytest.approx(10)

        q = Vector2D(10, 10).move(angle=270, distance=10)
        assert q.x == pytest.approx(10)
        assert q.y == pytest.approx(0, abs=1e-12)

    def test_angle_and_length_roundtrip(self):
        """Test that by_polar agrees with angle and length."""
        p = Vector2D.by_polar(-60, 42)
        assert p.angle == pytest.approx(-60)
        assert p.length == pytest.approx(42)

    def test_str(self):
        """Test string representation."""
        assert str(Vector2D(1.5, -2.0)) == "(1.5, -2.0)"

    def test_unpack(self):
        """Test unpacking into coordinates."""
        x, y = Vector2D(7, 8)
        assert (x, y) == (7, 8)
        assert Vector2D(7, 8).to_tuple() == (7, 8)


class TestOrientation:
    """Test orientation functions."""

    def test_is_left_basic(self):
        """Test basic is_left orientation."""
        result = is_left(Vector2D(0, 0), Vector2D(1, 0), Vector2D(0.5, 1))
        assert result > 0

    def test_is_left_right(self):
        """Test is_left when point is right of line."""
        result = is_left(Vector2D(0, 0), Vector2D(1, 0), Vector2D(0.5, -1))
        assert result < 0

    def test_orientation_signs(self):
        """Test orientation indicator values."""
        assert orientation(Vector2D(0, 0), Vector2D(1, 0), Vector2D(0.5, 1)) == 1
        assert orientation(Vector2D(0, 0), Vector2D(1, 0), Vector2D(0.5, -1)) == -1
        assert orientation(Vector2D(0, 0), Vector2D(1, 1), Vector2D(2, 2)) == 0

    def test_orientation_tolerates_rounding(self):
        """Test that nearly collinear points count as collinear."""
        drift = Vector2D.by_polar(180, 50).y  # tiny, not zero
        assert orientation(Vector2D(0, 0), Vector2D(250, 0), Vector2D(500, drift)) == 0


class TestSegmentsIntersect:
    """Test segment intersection."""

    def test_crossing(self):
        """Test two crossing segments."""
        assert segments_intersect(Vector2D(0, 0), Vector2D(2, 2), Vector2D(0, 2), Vector2D(2, 0))

    def test_disjoint(self):
        """Test two separate segments."""
        assert not segments_intersect(Vector2D(0, 0), Vector2D(1, 0), Vector2D(0, 1), Vector2D(1, 1))

    def test_touching_endpoint(self):
        """Test that sharing an endpoint counts as intersecting."""
        assert segments_intersect(Vector2D(0, 0), Vector2D(1, 0), Vector2D(1, 0), Vector2D(1, 1))

    def test_t_junction(self):
        """Test an endpoint lying inside the other segment."""
        assert segments_intersect(Vector2D(0, 0), Vector2D(2, 0), Vector2D(1, 0), Vector2D(1, 3))

    def test_near_miss(self):
        """Test segments whose lines cross outside the segments."""
        assert not segments_intersect(Vector2D(0, 0), Vector2D(1, 0), Vector2D(2, -1), Vector2D(2, 1))

    def test_collinear_overlapping(self):
        """Test collinear segments sharing a span."""
        assert segments_intersect(Vector2D(0, 0), Vector2D(2, 0), Vector2D(1, 0), Vector2D(3, 0))

    def test_collinear_disjoint(self):
        """Test collinear segments far from each other."""
        assert not segments_intersect(Vector2D(0, 0), Vector2D(1, 0), Vector2D(2, 0), Vector2D(3, 0))

    def test_collinear_edges_on_one_axis(self):
        """Test two single edges ringed along the x axis, apart then touching."""
        assert not segments_intersect(Vector2D(0, 0), Vector2D(250, 0), Vector2D(500, 0), Vector2D(750, 0))
        assert not segments_intersect(Vector2D(0, 0), Vector2D(250, 0), Vector2D(300, 0), Vector2D(550, 0))
        assert segments_intersect(Vector2D(0, 0), Vector2D(250, 0), Vector2D(250, 0), Vector2D(500, 0))

    def test_symmetric(self):
        """Test that argument order does not matter."""
        cases = [
            (Vector2D(0, 0), Vector2D(2, 2), Vector2D(0, 2), Vector2D(2, 0)),
            (Vector2D(0, 0), Vector2D(1, 0), Vector2D(2, 0), Vector2D(3, 0)),
            (Vector2D(0, 0), Vector2D(1, 0), Vector2D(1, 0), Vector2D(1, 1)),
        ]
        for p0, p1, p2, p3 in cases:
            assert segments_intersect(p0, p1, p2, p3) == segments_intersect(p2, p3, p0, p1)


class TestEdgesIntersect:
    """Test vectorised segment set intersection."""

    def test_empty_sets(self):
        """Test that an empty set intersects nothing."""
        segments = np.array([[[0, 0], [1, 1]]], dtype=float)
        assert not edges_intersect(np.empty((0, 2, 2)), segments)
        assert not edges_intersect(segments, np.empty((0, 2, 2)))

    def test_one_pair_crossing(self):
        """Test that a single crossing pair is enough."""
        a = np.array([[[0, 0], [1, 0]], [[0, 0], [2, 2]]], dtype=float)
        b = np.array([[[5, 5], [6, 6]], [[0, 2], [2, 0]]], dtype=float)
        assert edges_intersect(a, b)
        assert edges_intersect(b, a)

    def test_no_pair_crossing(self):
        """Test sets far apart."""
        a = np.array([[[0, 0], [1, 0]], [[0, 0], [0, 1]]], dtype=float)
        b = np.array([[[5, 5], [6, 6]], [[5, 0], [6, 0]]], dtype=float)
        assert not edges_intersect(a, b)


class TestBoundingBox:
    """Test bounding boxes."""

    def test_no_points(self):
        """Test that there is no box without points."""
        assert bounding_box([]) is None

    def test_points(self):
        """Test box of a few points."""
        box = bounding_box([Vector2D(1, 5), Vector2D(-3, 2), Vector2D(4, -1)])
        assert box == BoundingBox(-3, -1, 4, 5)
        assert box.width == 7
        assert box.height == 6
        assert box.center == Vector2D(0.5, 2)

    def test_contains(self):
        """Test containment, border included."""
        box = BoundingBox(0, 0, 10, 10)
        assert box.contains(Vector2D(5, 5))
        assert box.contains(Vector2D(10, 0))
        assert not box.contains(Vector2D(11, 5))

    def test_contains_flat_box(self):
        """Test containment in a box with no height."""
        box = BoundingBox(-100, 0, 100, 0)
        assert box.contains(Vector2D(50, 1e-12))
        assert not box.contains(Vector2D(50, 1))
