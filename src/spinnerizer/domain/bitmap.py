"""Raster types consumed by the vectorization pipeline.

- PixelBuffer: Raw RGBA pixels of one animation frame
- OccupancyGrid: Binary foreground/background raster derived from a buffer
"""

from dataclasses import dataclass
from typing import Any

from spinnerizer.exceptions import InputError


@dataclass(frozen=True)
class PixelBuffer:
    """Raw pixels of a single frame.

    Attributes:
        width: Width in pixels
        height: Height in pixels
        data: Flat RGBA bytes in row-major order, 4 bytes per pixel
    """

    width: int
    height: int
    data: bytes

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise InputError(
                "pixel_buffer",
                (self.width, self.height),
                "width and height must be positive",
            )
        expected = self.width * self.height * 4
        if len(self.data) != expected:
            raise InputError(
                "pixel_buffer",
                len(self.data),
                f"expected {expected} bytes of RGBA data for "
                f"{self.width}x{self.height}",
            )

    def rgba(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Return the (R, G, B, A) tuple of a pixel."""
        i = (y * self.width + x) * 4
        r, g, b, a = self.data[i : i + 4]
        return (r, g, b, a)

    @classmethod
    def from_pixels(
        cls, width: int, height: int, pixels: list[tuple[int, int, int, int]]
    ) -> "PixelBuffer":
        """Build a buffer from a row-major list of RGBA tuples."""
        return cls(
            width=width,
            height=height,
            data=bytes(channel for pixel in pixels for channel in pixel),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"width": self.width, "height": self.height, "data": self.data}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PixelBuffer":
        """Deserialize from dictionary."""
        return cls(width=data["width"], height=data["height"], data=bytes(data["data"]))


@dataclass(frozen=True)
class OccupancyGrid:
    """Binary raster marking foreground ("ink") pixels.

    Attributes:
        width: Grid width
        height: Grid height
        cells: Row-major bytes, 1 for foreground and 0 for background
    """

    width: int
    height: int
    cells: bytes

    def is_foreground(self, x: int, y: int) -> bool:
        """Check a cell, treating out-of-bounds coordinates as background."""
        if 0 <= x < self.width and 0 <= y < self.height:
            return self.cells[y * self.width + x] == 1
        return False

    def foreground_count(self) -> int:
        """Number of foreground cells."""
        return self.cells.count(1)

    def is_empty(self) -> bool:
        """Check whether the grid has no foreground at all."""
        return 1 not in self.cells

    @classmethod
    def from_rows(cls, rows: list[str]) -> "OccupancyGrid":
        """Build a grid from strings where '#' marks foreground.

        Example:
            >>> grid = OccupancyGrid.from_rows(["##", "#."])
            >>> grid.foreground_count()
            3
        """
        height = len(rows)
        width = len(rows[0]) if rows else 0
        cells = bytes(1 if ch == "#" else 0 for row in rows for ch in row)
        return cls(width=width, height=height, cells=cells)
