"""Bitmap preprocessing: turn raw RGBA pixels into an occupancy grid.

Two thresholding strategies are supported:
- Global: a pixel is foreground when its luminance is below a fixed threshold
- Adaptive: a pixel is foreground when it is darker than the average of its
  local window by more than a bias, both derived from the detail level

Fully transparent pixels are always background.
"""

import numpy as np

from spinnerizer.config import ConversionConfig
from spinnerizer.domain import OccupancyGrid, PixelBuffer

# Rec. 601 luma weights
LUMA_R = 0.299
LUMA_G = 0.587
LUMA_B = 0.114

# Luminance assigned to transparent pixels when averaging windows (white)
TRANSPARENT_LUMINANCE = 255

# Window half-size is MAX_DETAIL + 1 - detail, bias is MAX_DETAIL - detail
MAX_DETAIL = 10


def luminance(r: int, g: int, b: int) -> float:
    """Weighted luminance of an RGB triple.

    Examples:
        >>> luminance(255, 255, 255)
        255.0
        >>> luminance(0, 0, 0)
        0.0
    """
    return LUMA_R * r + LUMA_G * g + LUMA_B * b


def adaptive_window(detail_level: int) -> tuple[int, int]:
    """Window half-size and bias for an adaptive detail level.

    Higher detail shrinks the window and lowers the bias, so smaller
    local contrasts register as ink.

    Args:
        detail_level: Detail level in 1..10

    Returns:
        Tuple of (half_size, bias)
    """
    return (MAX_DETAIL + 1 - detail_level, MAX_DETAIL - detail_level)


class BitmapPreprocessor:
    """Converts PixelBuffers into OccupancyGrids.

    The preprocessor is stateless apart from its configuration and safe
    for use in parallel processing.
    """

    def __init__(self, config: ConversionConfig) -> None:
        self.config = config

    def process(self, buffer: PixelBuffer) -> OccupancyGrid:
        """Threshold a pixel buffer into an occupancy grid.

        Args:
            buffer: Source pixels

        Returns:
            OccupancyGrid with the same dimensions as the buffer
        """
        rgba = np.frombuffer(buffer.data, dtype=np.uint8).reshape(buffer.height, buffer.width, 4)
        if self.config.adaptive:
            mask = self._threshold_adaptive(rgba, self.config.detail_level)
        else:
            mask = self._threshold_global(rgba, self.config.threshold)
        return OccupancyGrid(
            width=buffer.width,
            height=buffer.height,
            cells=mask.astype(np.uint8).tobytes(),
        )

    @staticmethod
    def _luma(rgba: np.ndarray) -> np.ndarray:
        rgb = rgba[..., :3].astype(np.float64)
        return rgb @ np.array([LUMA_R, LUMA_G, LUMA_B])

    @staticmethod
    def _threshold_global(rgba: np.ndarray, threshold: int) -> np.ndarray:
        opaque = rgba[..., 3] != 0
        return opaque & (BitmapPreprocessor._luma(rgba) < threshold)

    @staticmethod
    def _threshold_adaptive(rgba: np.ndarray, detail_level: int) -> np.ndarray:
        height, width = rgba.shape[:2]
        half, bias = adaptive_window(detail_level)

        opaque = rgba[..., 3] != 0
        gray = np.floor(BitmapPreprocessor._luma(rgba) + 0.5).astype(np.int64)
        gray[~opaque] = TRANSPARENT_LUMINANCE

        # Summed-area table with a zero row and column in front
        integral = np.zeros((height + 1, width + 1), dtype=np.int64)
        integral[1:, 1:] = gray.cumsum(axis=0).cumsum(axis=1)

        ys = np.arange(height)
        xs = np.arange(width)
        y0 = np.clip(ys - half, 0, height)
        y1 = np.clip(ys + half + 1, 0, height)
        x0 = np.clip(xs - half, 0, width)
        x1 = np.clip(xs + half + 1, 0, width)

        window_sum = (
            integral[np.ix_(y1, x1)]
            - integral[np.ix_(y0, x1)]
            - integral[np.ix_(y1, x0)]
            + integral[np.ix_(y0, x0)]
        )
        count = np.outer(y1 - y0, x1 - x0)
        return opaque & (gray < window_sum / count - bias)
