"""Tests for segment-distance geometry helpers."""

import math

import pytest
from wiredraw.models.geometry import (
    Point,
    closest_point_on_segment,
    coerce_number,
    distance_sq_to_segment,
    point_from_any,
    polyline_hit,
    rotate_about,
    snap_to_grid,
)


class TestClosestPointOnSegment:
    def test_projection_inside_segment(self):
        closest = closest_point_on_segment(3, 3, Point(0, 0), Point(10, 0))
        assert closest == Point(3, 0)

    def test_projection_before_start_clamps_to_start(self):
        closest = closest_point_on_segment(-5, 4, Point(0, 0), Point(10, 0))
        assert closest == Point(0, 0)

    def test_projection_past_end_clamps_to_end(self):
        closest = closest_point_on_segment(25, -1, Point(0, 0), Point(10, 0))
        assert closest == Point(10, 0)

    def test_zero_length_segment_returns_its_point(self):
        closest = closest_point_on_segment(8, 9, Point(2, 2), Point(2, 2))
        assert closest == Point(2, 2)

    def test_diagonal_segment(self):
        closest = closest_point_on_segment(0, 10, Point(0, 0), Point(10, 10))
        assert closest.x == pytest.approx(5)
        assert closest.y == pytest.approx(5)


class TestDistanceToSegment:
    def test_point_on_segment_has_zero_distance(self):
        assert distance_sq_to_segment(4, 0, Point(0, 0), Point(10, 0)) == 0

    def test_distance_is_to_segment_not_line(self):
        # Collinear with the segment but 20 units past its end
        assert distance_sq_to_segment(30, 0, Point(0, 0), Point(10, 0)) == 400

    def test_perpendicular_distance(self):
        assert distance_sq_to_segment(5, 3, Point(0, 0), Point(10, 0)) == 9


class TestPolylineHit:
    def test_fewer_than_two_points_never_hit(self):
        assert not polyline_hit([], 0, 0, 100)
        assert not polyline_hit([Point(0, 0)], 0, 0, 100)

    def test_hits_second_segment(self):
        points = [Point(0, 0), Point(10, 0), Point(10, 10)]
        assert polyline_hit(points, 12, 5, 3)

    def test_boundary_is_inclusive(self):
        assert polyline_hit([Point(0, 0), Point(10, 0)], 5, 7, 7)
        assert not polyline_hit([Point(0, 0), Point(10, 0)], 5, 7.01, 7)


class TestHelpers:
    def test_coerce_number(self):
        assert coerce_number("2.5") == 2.5
        assert coerce_number(None) == 0.0
        assert coerce_number("abc", 1.0) == 1.0
        assert coerce_number(float("inf")) == 0.0

    def test_point_from_any(self):
        assert point_from_any({"x": 1, "y": 2}) == Point(1, 2)
        assert point_from_any((3, 4)) == Point(3, 4)
        assert point_from_any(Point(5, 6)) == Point(5, 6)
        assert point_from_any({"x": 1}) is None
        assert point_from_any((1, "2")) is None
        assert point_from_any((True, 1)) is None
        assert point_from_any("1,2") is None

    def test_point_from_any_copies(self):
        original = Point(1, 1)
        copy = point_from_any(original)
        copy.x = 99
        assert original.x == 1

    def test_snap_to_grid(self):
        assert snap_to_grid(14, 10) == 10
        assert snap_to_grid(16, 10) == 20
        assert snap_to_grid(7.3, 0) == 7.3

    def test_rotate_about(self):
        rotated = rotate_about(Point(10, 0), Point(0, 0), 90)
        assert rotated.x == pytest.approx(0, abs=1e-9)
        assert rotated.y == pytest.approx(10)

    def test_point_translated_is_new(self):
        p = Point(1, 2)
        q = p.translated(3, 4)
        assert q == Point(4, 6)
        assert p == Point(1, 2)
        assert math.isclose(q.to_dict()["x"], 4)
