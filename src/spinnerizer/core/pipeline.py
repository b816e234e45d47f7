"""Per-frame vectorization pipeline.

Chains the four raster-to-vector stages for one frame:
PixelBuffer -> OccupancyGrid -> contours -> simplified contours -> VectorPath.

Key components:
- FrameVectorizer: Runs the stages with one configuration
- vectorize_frame: Top-level picklable function for parallel execution
"""

import time
import traceback
from dataclasses import dataclass
from typing import Any

from spinnerizer.config import ConversionConfig
from spinnerizer.core.preprocess import BitmapPreprocessor
from spinnerizer.core.simplify import PathSimplifier
from spinnerizer.core.smooth import PathSmoother
from spinnerizer.core.tracer import MIN_CONTOUR_POINTS, ContourTracer
from spinnerizer.domain import Frame, PixelBuffer, VectorPath


@dataclass
class VectorizedFrame:
    """A converted frame with tracing counters.

    Attributes:
        frame: The vectorized frame
        contours: Number of contours kept
        dropped: Number of contours dropped for exceeding the step budget
        discarded: Number of contours with fewer than 3 points, either as
            traced or after simplification
    """

    frame: Frame
    contours: int
    dropped: int
    discarded: int = 0


class FrameVectorizer:
    """Converts pixel buffers into vector frames.

    Example:
        vectorizer = FrameVectorizer(ConversionConfig.for_mode(ConversionMode.ADVANCED))
        frame = vectorizer.vectorize(buffer)
    """

    def __init__(self, config: ConversionConfig) -> None:
        self.config = config
        self.preprocessor = BitmapPreprocessor(config)
        self.tracer = ContourTracer()
        self.simplifier = PathSimplifier(config.simplify_tolerance)
        self.smoother = PathSmoother(config.smoothing, use_spline=config.use_spline)

    def vectorize(self, buffer: PixelBuffer) -> Frame:
        """Convert one buffer into a frame."""
        return self.vectorize_detailed(buffer).frame

    def vectorize_detailed(self, buffer: PixelBuffer) -> VectorizedFrame:
        """Convert one buffer and report tracing counters.

        A frame with no traceable shape yields an empty path. Contours that
        simplify to fewer than 3 points enclose no area and are discarded.
        """
        grid = self.preprocessor.process(buffer)
        result = self.tracer.trace(grid)

        paths = []
        discarded = result.discarded
        for contour in result.contours:
            simplified = self.simplifier.simplify(contour)
            if len(simplified) < MIN_CONTOUR_POINTS:
                discarded += 1
                continue
            paths.append(self.smoother.smooth(simplified))

        frame = Frame(
            path=VectorPath.combine(paths),
            width=buffer.width,
            height=buffer.height,
        )
        return VectorizedFrame(
            frame=frame,
            contours=len(paths),
            dropped=result.dropped,
            discarded=discarded,
        )


def vectorize_frame(
    index: int,
    buffer_dict: dict[str, Any],
    config_dict: dict[str, Any],
) -> dict[str, Any]:
    """Vectorize a single frame.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.

    Args:
        index: Position of the frame in the animation
        buffer_dict: Serialized pixel buffer (from PixelBuffer.to_dict())
        config_dict: Serialized conversion configuration

    Returns:
        Dictionary containing either:
        - Success: {"index", "frame", "contours", "dropped", "discarded", "duration_ms"}
        - Error: {"index", "error", "traceback", "duration_ms"}
    """
    start_time = time.time()

    try:
        buffer = PixelBuffer.from_dict(buffer_dict)
        vectorizer = FrameVectorizer(ConversionConfig(**config_dict))
        result = vectorizer.vectorize_detailed(buffer)

        duration_ms = (time.time() - start_time) * 1000
        return {
            "index": index,
            "frame": result.frame.to_dict(),
            "contours": result.contours,
            "dropped": result.dropped,
            "discarded": result.discarded,
            "duration_ms": duration_ms,
        }

    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        return {
            "index": index,
            "error": str(e),
            "traceback": traceback.format_exc(),
            "duration_ms": duration_ms,
        }
