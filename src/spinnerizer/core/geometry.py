"""Geometric operations shared by the pipeline stages.

This module provides core mathematical utilities for:
- Point-to-segment distance (polyline simplification)
- Vector helpers (length, unit direction, polar coordinates)
- Circle construction from cubic Bezier arcs

All functions are pure, stateless, and designed for use in parallel processing.
"""

import math

from spinnerizer.domain import PathBuilder, Point, VectorPath

# Control-point distance for approximating a quarter circle with one cubic
CIRCLE_KAPPA = 4.0 * (math.sqrt(2.0) - 1.0) / 3.0


def segment_distance(point: Point, seg_start: Point, seg_end: Point) -> float:
    """Distance from a point to a line segment.

    Projects the point onto the infinite line, then clamps to the segment
    endpoints. A zero-length segment degrades to point-to-point distance.

    Args:
        point: The point to measure
        seg_start: Start point of line segment
        seg_end: End point of line segment

    Returns:
        Euclidean distance from point to the nearest point on the segment

    Examples:
        >>> segment_distance(Point(1.0, 1.0), Point(0.0, 0.0), Point(2.0, 0.0))
        1.0
        >>> segment_distance(Point(3.0, 0.0), Point(0.0, 0.0), Point(2.0, 0.0))
        1.0
    """
    dx = seg_end.x - seg_start.x
    dy = seg_end.y - seg_start.y

    segment_length_sq = dx * dx + dy * dy
    if segment_length_sq == 0:
        return math.hypot(point.x - seg_start.x, point.y - seg_start.y)

    t = ((point.x - seg_start.x) * dx + (point.y - seg_start.y) * dy) / segment_length_sq
    t = max(0.0, min(1.0, t))

    nearest_x = seg_start.x + t * dx
    nearest_y = seg_start.y + t * dy
    return math.hypot(point.x - nearest_x, point.y - nearest_y)


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def unit_vector(p1: Point, p2: Point) -> tuple[float, float]:
    """Unit direction vector from p1 to p2.

    Raises:
        ValueError: If p1 and p2 coincide
    """
    length = distance(p1, p2)
    if length == 0:
        raise ValueError("Cannot calculate direction of zero-length segment")
    return ((p2.x - p1.x) / length, (p2.y - p1.y) / length)


def polar(radius: float, angle: float) -> Point:
    """Point at a radius and angle (radians) from the origin."""
    return Point(math.cos(angle) * radius, math.sin(angle) * radius)


def circle_path(cx: float, cy: float, radius: float) -> VectorPath:
    """Closed circle made of four cubic Bezier quarter arcs.

    The path starts at the rightmost point and runs in the direction of
    increasing angle.

    Args:
        cx: Center x
        cy: Center y
        radius: Circle radius

    Returns:
        VectorPath with one move, four cubic curves and a close
    """
    k = CIRCLE_KAPPA * radius
    builder = PathBuilder().move_to(cx + radius, cy)
    builder.curve_to(cx + radius, cy + k, cx + k, cy + radius, cx, cy + radius)
    builder.curve_to(cx - k, cy + radius, cx - radius, cy + k, cx - radius, cy)
    builder.curve_to(cx - radius, cy - k, cx - k, cy - radius, cx, cy - radius)
    builder.curve_to(cx + k, cy - radius, cx + radius, cy - k, cx + radius, cy)
    return builder.close().build()
