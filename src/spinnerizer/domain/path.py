"""Vector path representation.

A VectorPath is an immutable sequence of drawing commands (move, line,
quadratic curve, cubic curve, close). Paths follow the fontTools pen
protocol so they can be replayed into any pen (SVG path data, recording,
transformation, bounds).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from fontTools.misc.transform import Transform
from fontTools.pens.svgPathPen import SVGPathPen

from spinnerizer.domain.contour import Point


class PathOp(Enum):
    """Drawing command type."""

    MOVE = "M"
    LINE = "L"
    QUAD = "Q"
    CUBIC = "C"
    CLOSE = "Z"


# Number of points each op carries (control points first, end point last)
_ARITY: dict[PathOp, int] = {
    PathOp.MOVE: 1,
    PathOp.LINE: 1,
    PathOp.QUAD: 2,
    PathOp.CUBIC: 3,
    PathOp.CLOSE: 0,
}


@dataclass(frozen=True, slots=True)
class PathCommand:
    """A single drawing command with absolute coordinates.

    Attributes:
        op: Command type
        points: Control points followed by the end point (empty for CLOSE)
    """

    op: PathOp
    points: tuple[Point, ...] = ()

    def __post_init__(self) -> None:
        if len(self.points) != _ARITY[self.op]:
            raise ValueError(
                f"{self.op.name} takes {_ARITY[self.op]} points, got {len(self.points)}"
            )

    @property
    def end_point(self) -> Point | None:
        """On-curve point this command ends at (None for CLOSE)."""
        return self.points[-1] if self.points else None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"op": self.op.value, "points": [p.to_tuple() for p in self.points]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PathCommand":
        """Deserialize from dictionary."""
        return cls(
            op=PathOp(data["op"]),
            points=tuple(Point(x, y) for x, y in data["points"]),
        )


def format_number(value: float) -> str:
    """Format a coordinate compactly for path data.

    Examples:
        >>> format_number(3.0)
        '3'
        >>> format_number(-0.12345)
        '-0.123'
    """
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


@dataclass(frozen=True)
class VectorPath:
    """Immutable sequence of drawing commands.

    A path may hold several closed subpaths (one per traced contour).

    Attributes:
        commands: Drawing commands in order
    """

    commands: tuple[PathCommand, ...] = ()

    def __len__(self) -> int:
        return len(self.commands)

    def is_empty(self) -> bool:
        """Check whether the path draws nothing."""
        return len(self.commands) == 0

    def ops(self) -> list[PathOp]:
        """List of command types in order."""
        return [command.op for command in self.commands]

    def has_curves(self) -> bool:
        """Check whether any quadratic or cubic command is present."""
        return any(c.op in (PathOp.QUAD, PathOp.CUBIC) for c in self.commands)

    def on_curve_points(self) -> list[Point]:
        """End points of all commands, excluding control points."""
        return [c.end_point for c in self.commands if c.end_point is not None]

    def subpath_count(self) -> int:
        """Number of subpaths (move-to commands)."""
        return sum(1 for c in self.commands if c.op == PathOp.MOVE)

    def bounding_box(self) -> tuple[float, float, float, float] | None:
        """Bounding box of all points including control points.

        Control points bound the curves, so the box may be slightly larger
        than the drawn shape.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y), or None for an empty path
        """
        xs = [p.x for c in self.commands for p in c.points]
        ys = [p.y for c in self.commands for p in c.points]
        if not xs:
            return None
        return (min(xs), min(ys), max(xs), max(ys))

    def transformed(self, transform: Transform) -> "VectorPath":
        """Return a copy with every point mapped through an affine transform."""
        commands = []
        for command in self.commands:
            points = tuple(
                Point(*transform.transformPoint((p.x, p.y))) for p in command.points
            )
            commands.append(PathCommand(command.op, points))
        return VectorPath(commands=tuple(commands))

    def draw(self, pen: Any) -> None:
        """Replay the path into a fontTools pen.

        Args:
            pen: Any object implementing the fontTools pen protocol
        """
        for command in self.commands:
            pts = [p.to_tuple() for p in command.points]
            if command.op == PathOp.MOVE:
                pen.moveTo(pts[0])
            elif command.op == PathOp.LINE:
                pen.lineTo(pts[0])
            elif command.op == PathOp.QUAD:
                pen.qCurveTo(*pts)
            elif command.op == PathOp.CUBIC:
                pen.curveTo(*pts)
            else:
                pen.closePath()

    def to_svg_path(self) -> str:
        """Render the path as SVG path data (the 'd' attribute)."""
        pen = SVGPathPen(None, ntos=format_number)
        self.draw(pen)
        return pen.getCommands()

    @classmethod
    def combine(cls, paths: list["VectorPath"]) -> "VectorPath":
        """Concatenate several paths into one compound path."""
        return cls(commands=tuple(c for path in paths for c in path.commands))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"commands": [c.to_dict() for c in self.commands]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VectorPath":
        """Deserialize from dictionary."""
        return cls(commands=tuple(PathCommand.from_dict(c) for c in data["commands"]))


class PathBuilder:
    """Accumulates drawing commands and produces an immutable VectorPath.

    Example:
        builder = PathBuilder()
        builder.move_to(0, 0)
        builder.line_to(10, 0)
        builder.quad_to(10, 10, 0, 10)
        builder.close()
        path = builder.build()
    """

    def __init__(self) -> None:
        self._commands: list[PathCommand] = []

    def move_to(self, x: float, y: float) -> "PathBuilder":
        self._commands.append(PathCommand(PathOp.MOVE, (Point(x, y),)))
        return self

    def line_to(self, x: float, y: float) -> "PathBuilder":
        self._commands.append(PathCommand(PathOp.LINE, (Point(x, y),)))
        return self

    def quad_to(self, cx: float, cy: float, x: float, y: float) -> "PathBuilder":
        self._commands.append(PathCommand(PathOp.QUAD, (Point(cx, cy), Point(x, y))))
        return self

    def curve_to(
        self, c1x: float, c1y: float, c2x: float, c2y: float, x: float, y: float
    ) -> "PathBuilder":
        self._commands.append(
            PathCommand(PathOp.CUBIC, (Point(c1x, c1y), Point(c2x, c2y), Point(x, y)))
        )
        return self

    def close(self) -> "PathBuilder":
        self._commands.append(PathCommand(PathOp.CLOSE))
        return self

    def build(self) -> VectorPath:
        """Freeze the accumulated commands into a VectorPath."""
        return VectorPath(commands=tuple(self._commands))
