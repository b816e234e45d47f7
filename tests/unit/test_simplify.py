"""Unit tests for polyline simplification."""

import pytest

from spinnerizer.core.geometry import segment_distance
from spinnerizer.core.simplify import PathSimplifier, simplify_points
from spinnerizer.domain import Contour, Point


@pytest.fixture
def wobbly_contour() -> Contour:
    """Closed outline with small wobbles along its edges."""
    return Contour.from_tuples(
        [
            (0, 0), (5, 0.4), (10, 0), (15, -0.3), (20, 0),
            (20.2, 5), (20, 10), (19.7, 15), (20, 20),
            (15, 20.5), (10, 20), (5, 19.6), (0, 20),
            (0.3, 15), (0, 10), (-0.2, 5),
        ]
    )


class TestSegmentDistance:
    """Tests for point-to-segment distance."""

    def test_perpendicular(self):
        """Test a point beside the segment."""
        assert segment_distance(Point(1, 1), Point(0, 0), Point(2, 0)) == pytest.approx(1.0)

    def test_beyond_endpoint(self):
        """Test that distance is clamped to the nearest endpoint."""
        assert segment_distance(Point(3, 0), Point(0, 0), Point(2, 0)) == pytest.approx(1.0)

    def test_zero_length_segment(self):
        """Test a degenerate segment."""
        assert segment_distance(Point(3, 4), Point(0, 0), Point(0, 0)) == pytest.approx(5.0)


class TestSimplifyPoints:
    """Tests for the Ramer-Douglas-Peucker routine."""

    def test_drops_collinear_points(self):
        """Test that points on a straight run are removed."""
        points = [Point(0, 0), Point(1, 0), Point(2, 0), Point(2, 2), Point(0, 2)]
        assert simplify_points(points, 0.5) == [
            Point(0, 0),
            Point(2, 0),
            Point(2, 2),
            Point(0, 2),
        ]

    def test_large_tolerance_keeps_endpoints(self):
        """Test that everything between the endpoints can go."""
        points = [Point(0, 0), Point(1, 1), Point(2, -1), Point(3, 0)]
        assert simplify_points(points, 100.0) == [Point(0, 0), Point(3, 0)]

    def test_short_input_unchanged(self):
        """Test polylines with two points or fewer."""
        assert simplify_points([Point(0, 0), Point(1, 1)], 1.0) == [Point(0, 0), Point(1, 1)]
        assert simplify_points([], 1.0) == []


class TestPathSimplifier:
    """Tests for PathSimplifier class."""

    def test_zero_tolerance_is_identity(self, wobbly_contour: Contour):
        """Test that tolerance 0 returns the contour unchanged."""
        assert PathSimplifier(0.0).simplify(wobbly_contour) is wobbly_contour

    def test_negative_tolerance_rejected(self):
        """Test tolerance validation."""
        with pytest.raises(ValueError):
            PathSimplifier(-1.0)

    def test_removes_wobble(self, wobbly_contour: Contour):
        """Test that sub-tolerance wobbles are flattened."""
        simplified = PathSimplifier(1.0).simplify(wobbly_contour)

        assert len(simplified) < len(wobbly_contour)
        assert simplified.points[0] == wobbly_contour.points[0]
        assert simplified.points[-1] == wobbly_contour.points[-1]
        for corner in (Point(20, 0), Point(20, 20), Point(0, 20)):
            assert corner in simplified.points

    def test_point_count_never_grows(self, wobbly_contour: Contour):
        """Test that larger tolerances never keep more points."""
        counts = [
            len(PathSimplifier(tolerance).simplify(wobbly_contour))
            for tolerance in (0.0, 0.1, 0.5, 1.0, 2.5, 10.0)
        ]
        assert counts == sorted(counts, reverse=True)
        assert all(count <= len(wobbly_contour) for count in counts)

    def test_removed_points_within_tolerance(self, wobbly_contour: Contour):
        """Test that every removed point lies near the simplified outline."""
        tolerance = 1.0
        simplified = PathSimplifier(tolerance).simplify(wobbly_contour)
        kept = list(simplified.points)

        for point in wobbly_contour.points:
            nearest = min(
                segment_distance(point, kept[i], kept[i + 1]) for i in range(len(kept) - 1)
            )
            assert nearest <= tolerance
