"""Domain models for spinnerizer.

This module contains the core domain models representing pixel input,
traced contours, vector paths, and the final spinner design. All models are
designed to be:

- Immutable (frozen dataclasses); pipeline stages return new values
- Serializable for inter-process communication (parallel processing)
- Independent of image-decoding and export details

Key classes:
- PixelBuffer: Raw RGBA pixels of one frame
- OccupancyGrid: Binary foreground raster
- Point, Contour: Traced boundary polylines
- PathCommand, VectorPath, PathBuilder: Drawing commands
- Frame: One vectorized animation frame
- FramePlacement, PlacedFrame: Frame slots in the circular layout
- Bearing, SpinnerDesign: The composite design
"""

from spinnerizer.domain.bitmap import OccupancyGrid, PixelBuffer
from spinnerizer.domain.contour import Contour, Point
from spinnerizer.domain.design import (
    Bearing,
    Frame,
    FramePlacement,
    PlacedFrame,
    SpinnerDesign,
)
from spinnerizer.domain.path import PathBuilder, PathCommand, PathOp, VectorPath

__all__: list[str] = [
    # Enums
    "PathOp",
    # Raster types
    "PixelBuffer",
    "OccupancyGrid",
    # Geometry types
    "Point",
    "Contour",
    "PathCommand",
    "VectorPath",
    "PathBuilder",
    # Design types
    "Frame",
    "FramePlacement",
    "PlacedFrame",
    "Bearing",
    "SpinnerDesign",
]
