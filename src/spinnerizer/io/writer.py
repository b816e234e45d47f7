"""Writers for finished spinner designs.

SvgWriter serializes a SpinnerDesign to standalone SVG markup. Path data is
produced by replaying each VectorPath into a fontTools SVGPathPen.

PayloadWriter writes the resolved geometry and the requested extrusion
thickness as JSON, for model exporters that run outside this package.
"""

import json
import xml.etree.ElementTree as ET
from pathlib import Path

from spinnerizer.config import ExportConfig
from spinnerizer.domain import SpinnerDesign, VectorPath
from spinnerizer.domain.path import format_number
from spinnerizer.exceptions import ExportError

SVG_NAMESPACE = "http://www.w3.org/2000/svg"

# Palette
BACKGROUND_FILL = "#f8f9fa"
OUTLINE_STROKE = "#343a40"
FRAME_FILL = "#000000"
BEARING_FILL = "#e9ecef"
BEARING_INNER_FILL = "#dee2e6"
BEARING_STROKE = "#adb5bd"
BALL_FILL = "#adb5bd"
HOLE_FILL = "#6c757d"


def _path_element(parent: ET.Element, path: VectorPath, **attrs: str) -> ET.Element:
    return ET.SubElement(parent, "path", d=path.to_svg_path(), **attrs)


class SvgWriter:
    """Writes spinner designs as SVG documents.

    Example:
        writer = SvgWriter(design)
        writer.save(Path("spinner.svg"))
    """

    def __init__(self, design: SpinnerDesign, config: ExportConfig | None = None) -> None:
        """Initialize the writer.

        Args:
            design: Design to serialize
            config: Export settings (defaults if None)
        """
        self._design = design
        self._config = config or ExportConfig()

    def render(self) -> str:
        """Render the design as SVG markup.

        The design is centered in a square canvas of the design diameter.
        Each frame keeps its local transform as a matrix on its own group.

        Returns:
            SVG document as a string
        """
        design = self._design
        size = format_number(design.diameter)
        half = format_number(design.diameter / 2)

        svg = ET.Element(
            "svg",
            xmlns=SVG_NAMESPACE,
            width=size,
            height=size,
            viewBox=f"0 0 {size} {size}",
        )

        if self._config.preview:
            ET.SubElement(svg, "rect", width=size, height=size, fill=BACKGROUND_FILL)

        spinner = ET.SubElement(svg, "g", transform=f"translate({half},{half})")

        _path_element(
            spinner,
            design.outline,
            fill="none",
            stroke=OUTLINE_STROKE,
            **{"stroke-width": format_number(design.outline_thickness)},
        )

        frames_group = ET.SubElement(spinner, "g")
        for i, placed in enumerate(design.frames):
            matrix = " ".join(format_number(v) for v in tuple(placed.transform))
            frame_group = ET.SubElement(frames_group, "g", transform=f"matrix({matrix})")
            if self._config.preview:
                hue = round(360 * i / len(design.frames))
                _path_element(frame_group, placed.frame.path, fill=f"hsl({hue}, 70%, 50%)")
            else:
                _path_element(frame_group, placed.frame.path, fill=FRAME_FILL)

        bearing_group = ET.SubElement(spinner, "g")
        for i, ring in enumerate(design.bearing.rings):
            _path_element(
                bearing_group,
                ring,
                fill=BEARING_FILL if i == 0 else BEARING_INNER_FILL,
                stroke=BEARING_STROKE,
                **{"stroke-width": "1"},
            )
        for ball in design.bearing.balls:
            _path_element(bearing_group, ball, fill=BALL_FILL)
        _path_element(bearing_group, design.bearing.hole, fill=HOLE_FILL)

        return ET.tostring(svg, encoding="unicode")

    def save(self, output_path: Path) -> None:
        """Write the SVG document to a file.

        Raises:
            ExportError: If the file cannot be written
        """
        try:
            output_path.write_text(self.render(), encoding="utf-8")
        except OSError as e:
            raise ExportError(str(output_path), str(e)) from e

    @staticmethod
    def get_output_path(input_path: Path) -> Path:
        """Generate the default output path for an input image.

        Converts: dancer.gif -> dancer-spinner.svg

        Args:
            input_path: Source image path

        Returns:
            Path next to the input with a -spinner.svg suffix
        """
        return input_path.parent / f"{input_path.stem}-spinner.svg"


class PayloadWriter:
    """Writes the export hand-off payload of a design as JSON.

    The payload is SpinnerDesign.to_dict() with every path in absolute
    coordinates and the configured model thickness attached.
    """

    def __init__(self, design: SpinnerDesign, config: ExportConfig | None = None) -> None:
        self._design = design
        self._config = config or ExportConfig()

    def render(self) -> str:
        payload = self._design.to_dict(extrusion_thickness=self._config.model_thickness)
        return json.dumps(payload, indent=2)

    def save(self, output_path: Path) -> None:
        """Write the payload to a file.

        Raises:
            ExportError: If the file cannot be written
        """
        try:
            output_path.write_text(self.render(), encoding="utf-8")
        except OSError as e:
            raise ExportError(str(output_path), str(e)) from e
