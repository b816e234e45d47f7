"""Animated image reader.

This module provides the ImageReader class for decoding animated images
(GIF, APNG, WebP, or any single-frame format Pillow understands) into one
RGBA PixelBuffer per composited frame.
"""

from collections.abc import Iterator
from pathlib import Path

from PIL import Image, ImageSequence, UnidentifiedImageError

from spinnerizer.domain import PixelBuffer
from spinnerizer.exceptions import ImageLoadError


class ImageReader:
    """Loads animated images and extracts frame pixels.

    Example:
        reader = ImageReader(Path("dancer.gif"))
        reader.load()
        for buffer in reader.iter_buffers():
            print(buffer.width, buffer.height)
        reader.close()
    """

    def __init__(self, image_path: Path) -> None:
        """Initialize the image reader.

        Args:
            image_path: Path to the animated image
        """
        self._image_path = image_path
        self._image: Image.Image | None = None

    def load(self) -> None:
        """Open the image file.

        Raises:
            ImageLoadError: If the file is missing or not a readable image
        """
        if not self._image_path.exists():
            raise ImageLoadError(str(self._image_path), "file not found")

        try:
            self._image = Image.open(self._image_path)
        except (UnidentifiedImageError, OSError) as e:
            raise ImageLoadError(str(self._image_path), str(e)) from e

    def _require_image(self) -> Image.Image:
        if self._image is None:
            raise RuntimeError("Image not loaded. Call load() first.")
        return self._image

    @property
    def format(self) -> str:
        """Image container format reported by Pillow (e.g. 'GIF')."""
        return self._require_image().format or "unknown"

    @property
    def size(self) -> tuple[int, int]:
        """Canvas size as (width, height)."""
        return self._require_image().size

    @property
    def frame_count(self) -> int:
        """Number of frames in the animation (1 for still images)."""
        return getattr(self._require_image(), "n_frames", 1)

    def iter_buffers(self) -> Iterator[PixelBuffer]:
        """Iterate over composited frames as RGBA pixel buffers.

        Yields:
            One PixelBuffer per frame, in animation order

        Raises:
            RuntimeError: If the image has not been loaded
        """
        image = self._require_image()
        for frame in ImageSequence.Iterator(image):
            rgba = frame.convert("RGBA")
            yield PixelBuffer(width=rgba.width, height=rgba.height, data=rgba.tobytes())

    def close(self) -> None:
        """Release the underlying file handle."""
        if self._image is not None:
            self._image.close()
            self._image = None
