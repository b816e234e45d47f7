"""Core processing algorithms for spinnerizer.

This module contains the core algorithms for:

- Bitmap preprocessing (luminance thresholding, adaptive windows)
- Contour tracing (boundary following on occupancy grids)
- Path simplification (Ramer-Douglas-Peucker)
- Path smoothing (corner rounding, closed cubic splines)
- Circular layout (frame placement, outline, bearing)

All stages are designed to be:
- Stateless apart from their configuration (safe for worker processes)
- Pure (no side effects)
- Testable in isolation

Key classes:
- BitmapPreprocessor: PixelBuffer -> OccupancyGrid
- ContourTracer: OccupancyGrid -> contours
- PathSimplifier: Contour -> simplified Contour
- PathSmoother: Contour -> VectorPath
- LayoutEngine: frames + LayoutSpec -> SpinnerDesign
- FrameVectorizer: The four raster-to-vector stages for one frame
- FrameProcessor: Batch orchestration with progress and cancellation
"""

from spinnerizer.core.geometry import circle_path, segment_distance
from spinnerizer.core.layout import LayoutEngine, placement_radius
from spinnerizer.core.pipeline import FrameVectorizer, vectorize_frame
from spinnerizer.core.preprocess import BitmapPreprocessor, luminance
from spinnerizer.core.processor import FrameProcessor
from spinnerizer.core.simplify import PathSimplifier, simplify_points
from spinnerizer.core.smooth import PathSmoother
from spinnerizer.core.tracer import ContourTracer, TraceResult

__all__ = [
    # Pipeline stages
    "BitmapPreprocessor",
    "ContourTracer",
    "PathSimplifier",
    "PathSmoother",
    "LayoutEngine",
    # Orchestration
    "FrameProcessor",
    "FrameVectorizer",
    "TraceResult",
    # Functions
    "circle_path",
    "luminance",
    "placement_radius",
    "segment_distance",
    "simplify_points",
    "vectorize_frame",
]
