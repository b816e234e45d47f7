"""Polyline simplification (Ramer-Douglas-Peucker).

Reduces the number of points of a contour while keeping every removed point
within `tolerance` of the simplified polyline. A tolerance of 0 returns the
contour unchanged.
"""

from spinnerizer.core.geometry import segment_distance
from spinnerizer.domain import Contour, Point


def simplify_points(points: list[Point], tolerance: float) -> list[Point]:
    """Simplify an open polyline.

    The split point is the one farthest from the chord joining the first
    and last points; ties go to the earliest point.

    Args:
        points: Polyline points
        tolerance: Maximum allowed deviation

    Returns:
        Simplified list of points, always keeping both endpoints
    """
    if len(points) <= 2:
        return list(points)

    # Pending inclusive index ranges, processed depth-first
    keep = [False] * len(points)
    keep[0] = keep[-1] = True
    stack = [(0, len(points) - 1)]

    while stack:
        first, last = stack.pop()
        if last - first < 2:
            continue

        start, end = points[first], points[last]
        max_dist = -1.0
        split = first
        for i in range(first + 1, last):
            dist = segment_distance(points[i], start, end)
            if dist > max_dist:
                max_dist = dist
                split = i

        if max_dist > tolerance:
            keep[split] = True
            stack.append((split, last))
            stack.append((first, split))

    return [p for p, kept in zip(points, keep) if kept]


class PathSimplifier:
    """Simplifies traced contours within a fixed tolerance.

    Attributes:
        tolerance: Maximum perpendicular deviation (>= 0)
    """

    def __init__(self, tolerance: float) -> None:
        if tolerance < 0:
            raise ValueError(f"Tolerance must be >= 0, got {tolerance}")
        self.tolerance = tolerance

    def simplify(self, contour: Contour) -> Contour:
        """Simplify a contour.

        Args:
            contour: Contour to simplify

        Returns:
            Contour with at most as many points; the same object when the
            tolerance is 0 or the contour has 2 points or fewer
        """
        if self.tolerance == 0 or len(contour) <= 2:
            return contour
        return Contour(points=tuple(simplify_points(list(contour.points), self.tolerance)))
