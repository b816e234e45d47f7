"""Shared fixtures: synthetic pixel buffers and animated GIFs."""

from pathlib import Path

import pytest
from PIL import Image, ImageDraw

from spinnerizer.domain import PixelBuffer

WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)
CLEAR = (0, 0, 0, 0)


def square_buffer(
    size: int = 12,
    left: int = 3,
    top: int = 3,
    side: int = 5,
    ink: tuple[int, int, int, int] = BLACK,
    paper: tuple[int, int, int, int] = WHITE,
) -> PixelBuffer:
    """Square of ink on a square canvas of paper."""
    pixels = [
        ink if left <= x < left + side and top <= y < top + side else paper
        for y in range(size)
        for x in range(size)
    ]
    return PixelBuffer.from_pixels(size, size, pixels)


def blank_buffer(size: int = 8) -> PixelBuffer:
    return PixelBuffer.from_pixels(size, size, [WHITE] * (size * size))


def write_gif(path: Path, frame_count: int = 3, size: int = 20) -> Path:
    """Write an animated GIF with one black square moving to the right."""
    frames = []
    for i in range(frame_count):
        image = Image.new("RGB", (size, size), "white")
        draw = ImageDraw.Draw(image)
        left = 2 + i * 3
        draw.rectangle([left, 6, left + 5, 11], fill="black")
        frames.append(image)
    frames[0].save(
        path,
        save_all=True,
        append_images=frames[1:],
        duration=80,
        loop=0,
    )
    return path


@pytest.fixture
def animated_gif(tmp_path: Path) -> Path:
    """Three-frame animated GIF."""
    return write_gif(tmp_path / "dancer.gif")


@pytest.fixture
def make_square():
    """Factory for square-on-canvas pixel buffers."""
    return square_buffer


@pytest.fixture
def make_blank():
    """Factory for all-white pixel buffers."""
    return blank_buffer
