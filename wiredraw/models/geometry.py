"""
Planar geometry helpers for the drawing model.

This module contains no Qt dependencies. Points are small value objects;
segment distance uses the clamped-projection method so that hit-testing
measures distance to the segment rather than to its infinite line.
"""

import math
from dataclasses import dataclass
from typing import Optional


@dataclass
class Point:
    """A 2D point in surface-local coordinates."""

    x: float = 0.0
    y: float = 0.0

    def translated(self, dx: float, dy: float) -> "Point":
        """Return a new point shifted by (dx, dy)."""
        return Point(self.x + dx, self.y + dy)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


def coerce_number(value, default: float = 0.0) -> float:
    """
    Convert a loosely-typed coordinate to float.

    Non-numeric or non-finite values fall back to ``default``.
    """
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return number


def is_real_number(value) -> bool:
    """Return True for int/float values (bool excluded) that are finite."""
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def point_from_any(value) -> Optional[Point]:
    """
    Build a Point from a Point, an {x, y} mapping or an (x, y) sequence.

    Returns:
        The Point, or None if the value is not a structurally valid point.
    """
    if isinstance(value, Point):
        return Point(value.x, value.y)
    if isinstance(value, dict):
        x, y = value.get("x"), value.get("y")
    elif isinstance(value, (list, tuple)) and len(value) == 2:
        x, y = value
    else:
        return None
    if not (is_real_number(x) and is_real_number(y)):
        return None
    return Point(float(x), float(y))


def distance_sq(ax: float, ay: float, bx: float, by: float) -> float:
    """Squared Euclidean distance between (ax, ay) and (bx, by)."""
    return (ax - bx) ** 2 + (ay - by) ** 2


def closest_point_on_segment(px: float, py: float, start: Point, end: Point) -> Point:
    """
    Return the point on segment start-end closest to (px, py).

    The projection parameter t is computed against the infinite line and then
    clamped: t <= 0 yields the start point, t >= 1 the end point, anything in
    between the interpolated point. A zero-length segment yields its start.
    """
    delta_x = end.x - start.x
    delta_y = end.y - start.y
    length_sq = delta_x * delta_x + delta_y * delta_y
    if length_sq == 0:
        return Point(start.x, start.y)

    t = ((px - start.x) * delta_x + (py - start.y) * delta_y) / length_sq
    if t <= 0:
        return Point(start.x, start.y)
    if t >= 1:
        return Point(end.x, end.y)
    return Point(start.x + t * delta_x, start.y + t * delta_y)


def distance_sq_to_segment(px: float, py: float, start: Point, end: Point) -> float:
    """Squared distance from (px, py) to the segment start-end."""
    closest = closest_point_on_segment(px, py, start, end)
    return distance_sq(px, py, closest.x, closest.y)


def polyline_hit(points: list[Point], px: float, py: float, tolerance: float) -> bool:
    """
    Check whether (px, py) lies within ``tolerance`` of any polyline segment.

    Segments are visited in traversal order and the first hit returns True.
    Fewer than two points never hit.
    """
    if len(points) < 2:
        return False
    tolerance_sq = tolerance * tolerance
    for p1, p2 in zip(points, points[1:]):
        if distance_sq_to_segment(px, py, p1, p2) <= tolerance_sq:
            return True
    return False


def snap_to_grid(value: float, grid_size: float) -> float:
    """Round a coordinate to the nearest multiple of grid_size (no-op if grid_size <= 0)."""
    if grid_size <= 0:
        return value
    return round(value / grid_size) * grid_size


def rotate_about(point: Point, center: Point, degrees: float) -> Point:
    """Rotate point around center by the given angle in degrees."""
    theta = math.radians(degrees)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    vx = point.x - center.x
    vy = point.y - center.y
    return Point(center.x + vx * cos_t - vy * sin_t, center.y + vx * sin_t + vy * cos_t)
