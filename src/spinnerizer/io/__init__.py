"""Image and design I/O layer for spinnerizer.

This module handles the collaborators at the edges of the pipeline:
decoding animated images with Pillow and serializing finished designs to
SVG with fontTools pens. It provides a clean abstraction layer between
those libraries and the domain models.

Key classes:
- ImageReader: Load animated images and extract RGBA frames
- SvgWriter: Save spinner designs as SVG
- PayloadWriter: Save the export hand-off payload as JSON
"""

from spinnerizer.io.reader import ImageReader
from spinnerizer.io.writer import PayloadWriter, SvgWriter

__all__ = [
    "ImageReader",
    "PayloadWriter",
    "SvgWriter",
]
