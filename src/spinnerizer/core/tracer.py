"""Contour tracing on occupancy grids.

This module extracts boundary polylines from the foreground regions of a grid
using a boundary-following walk over the four compass directions:

1. Scan the grid in row-major order for an unclaimed foreground pixel (seed)
2. Walk from the seed, at each step trying the current direction first and
   rotating through all four; after each move turn left so the walk hugs the
   region's edge
3. Stop when the walk returns to the seed (after at least 3 points), when
   no unvisited neighbor remains, or when the step budget runs out
4. If the walk closed on its seed, claim the whole region so its interior
   never seeds another contour. An open walk only marks the pixels it
   visited, so the rest of the region can seed further contours

Contours with fewer than 3 points are discarded. A walk that exceeds its
budget is dropped and tracing continues with the next seed.
"""

from dataclasses import dataclass, field

import structlog

from spinnerizer.domain import Contour, OccupancyGrid, Point
from spinnerizer.exceptions import TraceBudgetExceeded

logger = structlog.get_logger(__name__)

# Direction vectors in order: right, down, left, up
DIRECTION_X = (1, 0, -1, 0)
DIRECTION_Y = (0, 1, 0, -1)

MIN_CONTOUR_POINTS = 3


@dataclass
class TraceResult:
    """Outcome of tracing one grid.

    Attributes:
        contours: Retained contours in seed discovery order
        dropped: Walks abandoned because they exceeded the step budget
        discarded: Walks discarded for having fewer than 3 points
    """

    contours: list[Contour] = field(default_factory=list)
    dropped: int = 0
    discarded: int = 0


class ContourTracer:
    """Traces the boundaries of foreground regions in an occupancy grid.

    Output is deterministic: contours appear in row-major order of their
    seed pixel and points appear in walk order starting at the seed.

    Attributes:
        step_budget: Maximum steps per walk (defaults to width x height)
    """

    def __init__(self, step_budget: int | None = None) -> None:
        self.step_budget = step_budget

    def trace(self, grid: OccupancyGrid) -> TraceResult:
        """Trace every connected foreground region of a grid.

        Args:
            grid: Binary occupancy grid

        Returns:
            TraceResult with the retained contours and drop counters
        """
        result = TraceResult()
        if grid.width == 0 or grid.height == 0:
            return result

        budget = self.step_budget if self.step_budget is not None else grid.width * grid.height
        visited = bytearray(grid.width * grid.height)
        cells = grid.cells

        for y in range(grid.height):
            for x in range(grid.width):
                idx = y * grid.width + x
                if cells[idx] != 1 or visited[idx]:
                    continue

                try:
                    points, closed = self._walk(grid, x, y, visited, budget)
                except TraceBudgetExceeded as e:
                    logger.debug("Contour dropped", seed=e.seed, budget=e.budget)
                    result.dropped += 1
                    self._claim_region(grid, x, y, visited)
                    continue

                if closed:
                    self._claim_region(grid, x, y, visited)

                if len(points) < MIN_CONTOUR_POINTS:
                    result.discarded += 1
                    continue
                result.contours.append(Contour(points=tuple(points)))

        return result

    def trace_contours(self, grid: OccupancyGrid) -> list[Contour]:
        """Trace a grid and return only the retained contours."""
        return self.trace(grid).contours

    @staticmethod
    def _walk(
        grid: OccupancyGrid,
        start_x: int,
        start_y: int,
        visited: bytearray,
        budget: int,
    ) -> tuple[list[Point], bool]:
        """Follow the boundary from a seed pixel.

        Returns:
            The walked points and whether the walk closed on its seed

        Raises:
            TraceBudgetExceeded: If the walk takes more than `budget` steps
        """
        width = grid.width
        points = [Point(start_x, start_y)]
        visited[start_y * width + start_x] = 1

        cx, cy = start_x, start_y
        direction = 0
        steps = 0

        while True:
            if steps >= budget:
                raise TraceBudgetExceeded((start_x, start_y), budget)

            found = False
            for _ in range(4):
                nx = cx + DIRECTION_X[direction]
                ny = cy + DIRECTION_Y[direction]
                if grid.is_foreground(nx, ny):
                    if nx == start_x and ny == start_y and len(points) >= MIN_CONTOUR_POINTS:
                        return points, True
                    if not visited[ny * width + nx]:
                        found = True
                        break
                direction = (direction + 1) % 4

            if not found:
                return points, False

            cx, cy = nx, ny
            visited[cy * width + cx] = 1
            points.append(Point(cx, cy))

            # Turn left so the next step prefers hugging the edge
            direction = (direction + 3) % 4
            steps += 1

    @staticmethod
    def _claim_region(grid: OccupancyGrid, x: int, y: int, visited: bytearray) -> None:
        """Mark every pixel 4-connected to (x, y) as visited."""
        width = grid.width
        stack = [(x, y)]
        while stack:
            px, py = stack.pop()
            for d in range(4):
                nx = px + DIRECTION_X[d]
                ny = py + DIRECTION_Y[d]
                if grid.is_foreground(nx, ny) and not visited[ny * width + nx]:
                    visited[ny * width + nx] = 1
                    stack.append((nx, ny))
