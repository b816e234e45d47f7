"""Curve fitting through simplified contours.

Converts a contour into a closed VectorPath:
- Strength 0: straight segments between consecutive points
- Corner rounding: each interior corner becomes a line to a rounding point
  followed by a quadratic curve around the corner
- Spline: a closed cubic curve through every point with Catmull-Rom style
  tangents, treating the point list as cyclic
"""

from spinnerizer.core.geometry import distance, unit_vector
from spinnerizer.domain import Contour, PathBuilder, Point, VectorPath

# Corner radius per unit of smoothing strength
CORNER_RADIUS_FACTOR = 0.5

# Edges shorter than this are not rounded
MIN_EDGE_LENGTH = 1.0

# Spline tension = BASE + strength * STEP
TENSION_BASE = 0.2
TENSION_STEP = 0.05


def spline_tension(strength: float) -> float:
    """Tangent scale for the cubic spline at a smoothing strength."""
    return TENSION_BASE + strength * TENSION_STEP


class PathSmoother:
    """Fits a closed path through a contour.

    Attributes:
        strength: Smoothing strength (0 = straight lines)
        use_spline: Fit cubic splines instead of rounding corners
    """

    def __init__(self, strength: float, use_spline: bool = False) -> None:
        if strength < 0:
            raise ValueError(f"Smoothing strength must be >= 0, got {strength}")
        self.strength = strength
        self.use_spline = use_spline

    def smooth(self, contour: Contour) -> VectorPath:
        """Convert a contour to a closed vector path.

        Args:
            contour: Simplified contour

        Returns:
            VectorPath starting with a move to the first point and ending with
            a close; empty for an empty contour
        """
        points = list(contour.points)
        if not points:
            return VectorPath()

        if self.strength == 0 or len(points) <= 2:
            return self._polygon(points)
        if self.use_spline:
            return self._spline(points)
        return self._rounded(points)

    @staticmethod
    def _polygon(points: list[Point]) -> VectorPath:
        builder = PathBuilder().move_to(points[0].x, points[0].y)
        for p in points[1:]:
            builder.line_to(p.x, p.y)
        return builder.close().build()

    def _rounded(self, points: list[Point]) -> VectorPath:
        n = len(points)
        radius = self.strength * CORNER_RADIUS_FACTOR
        builder = PathBuilder().move_to(points[0].x, points[0].y)

        for i in range(1, n):
            prev_pt = points[i - 1]
            corner = points[i]
            next_pt = points[(i + 1) % n]

            in_len = distance(prev_pt, corner)
            out_len = distance(corner, next_pt)
            if in_len < MIN_EDGE_LENGTH or out_len < MIN_EDGE_LENGTH:
                builder.line_to(corner.x, corner.y)
                continue

            # Rounding points may not pass the middle of either edge
            r = min(radius, in_len / 2, out_len / 2)
            in_x, in_y = unit_vector(prev_pt, corner)
            out_x, out_y = unit_vector(corner, next_pt)

            builder.line_to(corner.x - in_x * r, corner.y - in_y * r)
            builder.quad_to(corner.x, corner.y, corner.x + out_x * r, corner.y + out_y * r)

        return builder.close().build()

    def _spline(self, points: list[Point]) -> VectorPath:
        n = len(points)
        tension = spline_tension(self.strength)
        builder = PathBuilder().move_to(points[0].x, points[0].y)

        for i in range(n):
            p0 = points[(i - 1) % n]
            p1 = points[i]
            p2 = points[(i + 1) % n]
            p3 = points[(i + 2) % n]

            builder.curve_to(
                p1.x + (p2.x - p0.x) * tension,
                p1.y + (p2.y - p0.y) * tension,
                p2.x - (p3.x - p1.x) * tension,
                p2.y - (p3.y - p1.y) * tension,
                p2.x,
                p2.y,
            )

        return builder.close().build()
