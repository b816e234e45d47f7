"""Unit tests for the I/O layer.

Tests for ImageReader, SvgWriter and PayloadWriter.
"""

import json
import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from spinnerizer.config import BearingStyle, ExportConfig, LayoutSpec
from spinnerizer.core.layout import LayoutEngine
from spinnerizer.domain import Frame, PathBuilder, PixelBuffer
from spinnerizer.exceptions import ExportError, ImageLoadError
from spinnerizer.io.reader import ImageReader
from spinnerizer.io.writer import PayloadWriter, SvgWriter

SVG = "{http://www.w3.org/2000/svg}"


@pytest.fixture
def design():
    """Eight-slot design around a plain bearing."""
    path = PathBuilder().move_to(0, 0).line_to(8, 0).line_to(8, 8).line_to(0, 8).close().build()
    frame = Frame(path=path, width=10, height=10)
    return LayoutEngine().build([frame], LayoutSpec())


class TestImageReader:
    """Tests for ImageReader class."""

    def test_init(self):
        """Test ImageReader initialization."""
        path = Path("test.gif")
        reader = ImageReader(path)
        assert reader._image_path == path
        assert reader._image is None

    def test_load_nonexistent_file(self):
        """Test loading a nonexistent file raises ImageLoadError."""
        reader = ImageReader(Path("nonexistent.gif"))
        with pytest.raises(ImageLoadError, match="file not found"):
            reader.load()

    def test_load_not_an_image(self, tmp_path: Path):
        """Test loading a text file raises ImageLoadError."""
        path = tmp_path / "notes.gif"
        path.write_text("not an image", encoding="utf-8")
        with pytest.raises(ImageLoadError):
            ImageReader(path).load()

    def test_format_before_load(self):
        """Test accessing format before loading raises RuntimeError."""
        reader = ImageReader(Path("test.gif"))
        with pytest.raises(RuntimeError, match="Image not loaded"):
            _ = reader.format

    def test_frame_count_before_load(self):
        """Test accessing frame_count before loading raises RuntimeError."""
        reader = ImageReader(Path("test.gif"))
        with pytest.raises(RuntimeError, match="Image not loaded"):
            _ = reader.frame_count

    def test_iter_buffers_before_load(self):
        """Test iterating frames before loading raises RuntimeError."""
        reader = ImageReader(Path("test.gif"))
        with pytest.raises(RuntimeError, match="Image not loaded"):
            list(reader.iter_buffers())

    def test_reads_animation(self, animated_gif: Path):
        """Test decoding every frame of an animated GIF."""
        reader = ImageReader(animated_gif)
        reader.load()
        try:
            assert reader.format == "GIF"
            assert reader.frame_count == 3
            assert reader.size == (20, 20)

            buffers = list(reader.iter_buffers())
            assert len(buffers) == 3
            assert all(isinstance(b, PixelBuffer) for b in buffers)
            assert all((b.width, b.height) == (20, 20) for b in buffers)
            # The square moves three pixels right per frame
            assert buffers[0].rgba(2, 6)[:3] == (0, 0, 0)
            assert buffers[2].rgba(8, 6)[:3] == (0, 0, 0)
            assert buffers[2].rgba(2, 6)[:3] == (255, 255, 255)
        finally:
            reader.close()

    def test_close(self, animated_gif: Path):
        """Test that close releases the image."""
        reader = ImageReader(animated_gif)
        reader.load()
        reader.close()
        assert reader._image is None


class TestSvgWriter:
    """Tests for SvgWriter class."""

    def test_render_structure(self, design):
        """Test the document size and element count."""
        root = ET.fromstring(SvgWriter(design).render())

        assert root.tag == f"{SVG}svg"
        assert root.get("width") == "100"
        assert root.get("viewBox") == "0 0 100 100"
        # Outline, eight frames, two rings and a hole
        assert len(root.findall(f".//{SVG}path")) == 12
        assert root.find(f"{SVG}rect") is None

    def test_frames_keep_transform(self, design):
        """Each frame group carries its placement matrix."""
        root = ET.fromstring(SvgWriter(design).render())
        matrices = [
            g.get("transform")
            for g in root.iter(f"{SVG}g")
            if (g.get("transform") or "").startswith("matrix(")
        ]
        assert len(matrices) == 8

    def test_outline_stroke(self, design):
        """The outline is stroked, not filled."""
        root = ET.fromstring(SvgWriter(design).render())
        outline = root.find(f"{SVG}g/{SVG}path")
        assert outline.get("fill") == "none"
        assert outline.get("stroke-width") == "3"

    def test_detailed_bearing(self):
        """A detailed bearing adds bands and balls."""
        path = PathBuilder().move_to(0, 0).line_to(4, 0).line_to(4, 4).close().build()
        design = LayoutEngine().build(
            [Frame(path=path, width=5, height=5)],
            LayoutSpec(frame_count=3, bearing_style=BearingStyle.DETAILED),
        )
        root = ET.fromstring(SvgWriter(design).render())
        # Outline, three frames, three bands, eight balls and a hole
        assert len(root.findall(f".//{SVG}path")) == 16

    def test_preview(self, design):
        """Preview mode adds a background and colored frames."""
        markup = SvgWriter(design, ExportConfig(preview=True)).render()
        root = ET.fromstring(markup)
        assert root.find(f"{SVG}rect") is not None
        assert "hsl(" in markup

    def test_save(self, design, tmp_path: Path):
        """Test writing the document to disk."""
        output = tmp_path / "spinner.svg"
        SvgWriter(design).save(output)
        assert output.read_text(encoding="utf-8").startswith("<svg")

    def test_save_unwritable(self, design, tmp_path: Path):
        """Test that write failures become ExportError."""
        with pytest.raises(ExportError):
            SvgWriter(design).save(tmp_path / "missing" / "spinner.svg")

    def test_get_output_path(self):
        """Test default output path generation."""
        assert SvgWriter.get_output_path(Path("anim/dancer.gif")) == Path(
            "anim/dancer-spinner.svg"
        )


class TestPayloadWriter:
    """Tests for PayloadWriter class."""

    def test_render_carries_thickness(self, design):
        """The payload records the configured extrusion thickness."""
        payload = json.loads(PayloadWriter(design, ExportConfig(model_thickness=4.5)).render())

        assert payload["extrusion_thickness"] == 4.5
        assert payload["diameter"] == 100
        assert len(payload["frames"]) == 8
        assert payload["frames"][0]["path"]["commands"][0]["op"] == "M"

    def test_default_thickness(self, design):
        """Without export settings the default thickness is used."""
        payload = json.loads(PayloadWriter(design).render())
        assert payload["extrusion_thickness"] == 3.0

    def test_save(self, design, tmp_path: Path):
        """Test writing the payload to disk."""
        output = tmp_path / "spinner.json"
        PayloadWriter(design).save(output)
        assert json.loads(output.read_text(encoding="utf-8"))["bearing"]["hole"]["commands"]

    def test_save_unwritable(self, design, tmp_path: Path):
        """Test that write failures become ExportError."""
        with pytest.raises(ExportError):
            PayloadWriter(design).save(tmp_path / "missing" / "spinner.json")
