"""Frame and spinner design types.

This module defines the outputs of the pipeline:
- Frame: The vectorized form of one animation frame
- FramePlacement: Angle, radius and scale of one slot in the circle
- PlacedFrame: A frame wrapped in its own local transform
- Bearing: Path groups making up the central bearing
- SpinnerDesign: The complete composite design handed to exporters
"""

import math
from dataclasses import dataclass
from typing import Any

from fontTools.misc.transform import Transform

from spinnerizer.domain.path import VectorPath


@dataclass(frozen=True)
class Frame:
    """One vectorized animation frame.

    Attributes:
        path: Compound path holding every traced shape of the frame
        width: Source frame width in pixels
        height: Source frame height in pixels
    """

    path: VectorPath
    width: int
    height: int

    def is_empty(self) -> bool:
        """Check whether no shape was traced in this frame."""
        return self.path.is_empty()

    def center(self) -> tuple[float, float]:
        """Center of the drawn shape's bounding box.

        Falls back to the center of the pixel area for empty frames.
        """
        bbox = self.path.bounding_box()
        if bbox is None:
            return (self.width / 2, self.height / 2)
        min_x, min_y, max_x, max_y = bbox
        return ((min_x + max_x) / 2, (min_y + max_y) / 2)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"path": self.path.to_dict(), "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Frame":
        """Deserialize from dictionary."""
        return cls(
            path=VectorPath.from_dict(data["path"]),
            width=data["width"],
            height=data["height"],
        )


@dataclass(frozen=True)
class FramePlacement:
    """Position of one frame slot in the circular layout.

    Attributes:
        angle: Slot angle in degrees, measured from the positive x axis
        radius: Distance of the slot center from the design center
        scale: Uniform scale applied to the source frame
    """

    angle: float
    radius: float
    scale: float

    @property
    def x(self) -> float:
        return math.cos(math.radians(self.angle)) * self.radius

    @property
    def y(self) -> float:
        return math.sin(math.radians(self.angle)) * self.radius


@dataclass(frozen=True)
class PlacedFrame:
    """A frame copy positioned in the design.

    Attributes:
        source_index: Index of the source frame this slot shows
        frame: The source frame
        placement: Slot placement
        transform: Local transform from frame coordinates to design coordinates
    """

    source_index: int
    frame: Frame
    placement: FramePlacement
    transform: Transform

    def resolved_path(self) -> VectorPath:
        """The frame's path in absolute design coordinates."""
        return self.frame.path.transformed(self.transform)


@dataclass(frozen=True)
class Bearing:
    """Central bearing rendered as concentric paths.

    Attributes:
        rings: Concentric rings or bands, outermost first
        balls: Rolling-element markers (empty for the plain style)
        hole: Solid center hole
    """

    rings: tuple[VectorPath, ...]
    balls: tuple[VectorPath, ...]
    hole: VectorPath

    def paths(self) -> list[VectorPath]:
        """All bearing paths in drawing order."""
        return [*self.rings, *self.balls, self.hole]


@dataclass(frozen=True)
class SpinnerDesign:
    """Complete spinner design centered on the origin.

    Rebuilt from scratch whenever any layout parameter changes.

    Attributes:
        diameter: Overall diameter
        outline: Outline path
        outline_thickness: Stroke width for the outline
        frames: Placed frame copies, one per slot
        bearing: Central bearing
    """

    diameter: float
    outline: VectorPath
    outline_thickness: float
    frames: tuple[PlacedFrame, ...]
    bearing: Bearing

    def to_dict(self, extrusion_thickness: float | None = None) -> dict[str, Any]:
        """Hand-off payload for export collaborators.

        Every path is resolved to absolute coordinates.

        Args:
            extrusion_thickness: Requested thickness for 3-D export, if any

        Returns:
            Dictionary with outline, frame, and bearing geometry
        """
        payload: dict[str, Any] = {
            "diameter": self.diameter,
            "outline": {
                "path": self.outline.to_dict(),
                "thickness": self.outline_thickness,
            },
            "frames": [
                {
                    "source_index": placed.source_index,
                    "angle": placed.placement.angle,
                    "scale": placed.placement.scale,
                    "transform": list(placed.transform),
                    "path": placed.resolved_path().to_dict(),
                }
                for placed in self.frames
            ],
            "bearing": {
                "rings": [p.to_dict() for p in self.bearing.rings],
                "balls": [p.to_dict() for p in self.bearing.balls],
                "hole": self.bearing.hole.to_dict(),
            },
        }
        if extrusion_thickness is not None:
            payload["extrusion_thickness"] = extrusion_thickness
        return payload
