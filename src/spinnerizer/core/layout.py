"""Circular layout engine.

Composes vectorized frames into a radially symmetric spinner design:
- Frame slots at equal angular steps on a placement circle
- A per-slot uniform scale derived from the chord between adjacent slots
- An outline (circular, rounded lobes, or hull-like star)
- A concentric bearing in the center (plain or detailed)

The engine is a pure function of (frames, spec); any spec change means
building a new design.
"""

import math

from fontTools.misc.transform import Transform

from spinnerizer.config import BearingStyle, LayoutSpec, OutlineStyle
from spinnerizer.core.geometry import circle_path, polar
from spinnerizer.domain import (
    Bearing,
    Frame,
    FramePlacement,
    PathBuilder,
    PlacedFrame,
    Point,
    SpinnerDesign,
    VectorPath,
)
from spinnerizer.exceptions import InputError, LayoutError

# Source frame size assumed when no frame reports a size
DEFAULT_NOMINAL_FRAME_SIZE = 50.0

# Outline padding beyond the placement circle
CIRCULAR_PADDING = 10.0
ROUNDED_PADDING = 15.0
HULL_PADDING_RATIO = 0.3
HULL_WAIST_RATIO = 0.6

# Outline styles other than circular need at least this many slots
MIN_SHAPED_OUTLINE_SLOTS = 3

# Bearing proportions, as divisors of the bearing diameter
PLAIN_RING_DIVISORS = (2.0, 4.0)
PLAIN_HOLE_DIVISOR = 8.0
DETAILED_BAND_DIVISORS = (2.0, 2.0 / 0.9, 3.5)
DETAILED_BALL_COUNT = 8
DETAILED_BALL_ORBIT_DIVISOR = 2.5
DETAILED_BALL_RADIUS_DIVISOR = 12.0
DETAILED_HOLE_DIVISOR = 6.0


def placement_radius(spec: LayoutSpec) -> float:
    """Radius of the circle frame centers sit on.

    Examples:
        >>> placement_radius(LayoutSpec(diameter=100, bearing_diameter=22, spacing=5))
        34.0
    """
    return (spec.diameter - spec.bearing_diameter) / 2 - spec.spacing


class LayoutEngine:
    """Builds SpinnerDesigns from frames and a LayoutSpec.

    The engine is stateless and every call produces a fresh design.
    """

    def build(self, frames: list[Frame], spec: LayoutSpec) -> SpinnerDesign:
        """Arrange frames in a circle around a bearing.

        Frames cycle when there are more slots than there are frames.

        Args:
            frames: Vectorized frames in animation order
            spec: Layout parameters

        Returns:
            Complete SpinnerDesign centered on the origin

        Raises:
            InputError: If no frames are given
            LayoutError: If the layout leaves no room for frames
        """
        if not frames:
            raise InputError("frames", 0, "at least one frame is required")

        self.validate(spec)
        placements = self.compute_placements(spec, self._nominal_frame_size(frames))

        placed = tuple(
            self._place_frame(i % len(frames), frames[i % len(frames)], placement)
            for i, placement in enumerate(placements)
        )

        return SpinnerDesign(
            diameter=spec.diameter,
            outline=self.create_outline(placements, spec.outline_style),
            outline_thickness=spec.outline_thickness,
            frames=placed,
            bearing=self.create_bearing(spec.bearing_diameter, spec.bearing_style),
        )

    @staticmethod
    def validate(spec: LayoutSpec) -> float:
        """Check that a spec is geometrically feasible.

        Returns:
            The placement radius

        Raises:
            LayoutError: If the bearing fills the design or the placement
                radius is not positive
        """
        if spec.bearing_diameter >= spec.diameter:
            raise LayoutError(
                "bearing_diameter",
                spec.bearing_diameter,
                f"must be smaller than the diameter ({spec.diameter:g})",
            )
        radius = placement_radius(spec)
        if radius <= 0:
            raise LayoutError(
                "placement_radius",
                radius,
                "(diameter - bearing_diameter) / 2 - spacing must be positive",
            )
        return radius

    def compute_placements(
        self,
        spec: LayoutSpec,
        nominal_frame_size: float = DEFAULT_NOMINAL_FRAME_SIZE,
    ) -> list[FramePlacement]:
        """Slot placements at equal angular steps starting at 0 degrees.

        Args:
            spec: Layout parameters
            nominal_frame_size: Source frame size the scale is relative to

        Returns:
            One FramePlacement per slot
        """
        radius = self.validate(spec)
        count = spec.frame_count
        step = 360.0 / count

        # Adjacent slots are one chord apart; the band between bearing and
        # rim caps the size for small slot counts
        band = (spec.diameter - spec.bearing_diameter) / 2
        if count >= 2:
            slot_size = min(2 * radius * math.sin(math.pi / count), band)
        else:
            slot_size = band
        scale = slot_size / nominal_frame_size

        return [FramePlacement(angle=i * step, radius=radius, scale=scale) for i in range(count)]

    @staticmethod
    def _nominal_frame_size(frames: list[Frame]) -> float:
        size = max(max(frame.width, frame.height) for frame in frames)
        return float(size) if size > 0 else DEFAULT_NOMINAL_FRAME_SIZE

    @staticmethod
    def _place_frame(index: int, frame: Frame, placement: FramePlacement) -> PlacedFrame:
        cx, cy = frame.center()
        transform = (
            Transform()
            .translate(placement.x, placement.y)
            .rotate(math.radians(placement.angle))
            .scale(placement.scale)
            .translate(-cx, -cy)
        )
        return PlacedFrame(
            source_index=index,
            frame=frame,
            placement=placement,
            transform=transform,
        )

    def create_outline(self, placements: list[FramePlacement], style: OutlineStyle) -> VectorPath:
        """Outline path for a set of placements.

        Fewer than three placements always get a circular outline.
        """
        if style == OutlineStyle.CIRCULAR or len(placements) < MIN_SHAPED_OUTLINE_SLOTS:
            return self._circular_outline(placements)
        if style == OutlineStyle.ROUNDED:
            return self._rounded_outline(placements)
        return self._hull_outline(placements)

    @staticmethod
    def _circular_outline(placements: list[FramePlacement]) -> VectorPath:
        max_radius = max(math.hypot(p.x, p.y) for p in placements)
        return circle_path(0.0, 0.0, max_radius + CIRCULAR_PADDING)

    @staticmethod
    def _rounded_outline(placements: list[FramePlacement]) -> VectorPath:
        # Push every slot outward along its own angle
        hull = [
            Point(
                p.x + math.cos(math.radians(p.angle)) * ROUNDED_PADDING,
                p.y + math.sin(math.radians(p.angle)) * ROUNDED_PADDING,
            )
            for p in placements
        ]
        n = len(hull)

        builder = PathBuilder().move_to(hull[0].x, hull[0].y)
        for i in range(n):
            current = hull[i]
            nxt = hull[(i + 1) % n]
            after = hull[(i + 2) % n]
            builder.line_to((current.x + nxt.x) / 2, (current.y + nxt.y) / 2)
            builder.quad_to(nxt.x, nxt.y, (nxt.x + after.x) / 2, (nxt.y + after.y) / 2)
        return builder.close().build()

    @staticmethod
    def _hull_outline(placements: list[FramePlacement]) -> VectorPath:
        n = len(placements)
        center_x = sum(p.x for p in placements) / n
        center_y = sum(p.y for p in placements) / n
        max_radius = max(math.hypot(p.x - center_x, p.y - center_y) for p in placements)
        padding = max_radius * HULL_PADDING_RATIO
        waist_radius = max_radius * HULL_WAIST_RATIO

        builder = PathBuilder()
        for i, p in enumerate(placements):
            nxt = placements[(i + 1) % n]
            angle = math.atan2(p.y - center_y, p.x - center_x)
            next_angle = math.atan2(nxt.y - center_y, nxt.x - center_x)

            tip_x = p.x + math.cos(angle) * padding
            tip_y = p.y + math.sin(angle) * padding
            if i == 0:
                builder.move_to(tip_x, tip_y)
            else:
                builder.line_to(tip_x, tip_y)

            # Midway between adjacent slots, going the short way round
            sweep = (next_angle - angle) % (2 * math.pi)
            waist = polar(waist_radius, angle + sweep / 2)
            builder.line_to(center_x + waist.x, center_y + waist.y)
        return builder.close().build()

    @staticmethod
    def create_bearing(diameter: float, style: BearingStyle) -> Bearing:
        """Concentric bearing paths for a bearing diameter."""
        if style == BearingStyle.PLAIN:
            return Bearing(
                rings=tuple(circle_path(0.0, 0.0, diameter / d) for d in PLAIN_RING_DIVISORS),
                balls=(),
                hole=circle_path(0.0, 0.0, diameter / PLAIN_HOLE_DIVISOR),
            )

        orbit = diameter / DETAILED_BALL_ORBIT_DIVISOR
        ball_radius = diameter / DETAILED_BALL_RADIUS_DIVISOR
        balls = []
        for i in range(DETAILED_BALL_COUNT):
            center = polar(orbit, 2 * math.pi * i / DETAILED_BALL_COUNT)
            balls.append(circle_path(center.x, center.y, ball_radius))

        return Bearing(
            rings=tuple(circle_path(0.0, 0.0, diameter / d) for d in DETAILED_BAND_DIVISORS),
            balls=tuple(balls),
            hole=circle_path(0.0, 0.0, diameter / DETAILED_HOLE_DIVISOR),
        )
