"""Configuration settings for Spinnerizer."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class ConversionMode(str, Enum):
    """Vectorization preset.

    Both modes run the same pipeline; they only differ in thresholding,
    simplification and the curve family used for smoothing.
    """

    SIMPLE = "simple"
    ADVANCED = "advanced"


class BearingStyle(str, Enum):
    """Rendering of the central bearing."""

    PLAIN = "plain"
    DETAILED = "detailed"


class OutlineStyle(str, Enum):
    """Shape of the spinner outline."""

    CIRCULAR = "circular"
    ROUNDED = "rounded"
    HULL = "hull"


class ConversionConfig(BaseModel):
    """Configuration for raster-to-vector conversion of a single frame."""

    mode: ConversionMode = Field(
        default=ConversionMode.SIMPLE,
        description="Conversion preset",
    )
    threshold: int = Field(
        default=128,
        ge=0,
        le=255,
        description="Global luminance threshold (simple mode)",
    )
    detail_level: int = Field(
        default=5,
        ge=1,
        le=10,
        description="Adaptive threshold detail level (advanced mode)",
    )
    simplify_tolerance: float = Field(
        default=0.0,
        ge=0.0,
        le=10.0,
        description="Maximum perpendicular deviation when simplifying contours",
    )
    smoothing: float = Field(
        default=0.0,
        ge=0.0,
        le=10.0,
        description="Corner rounding / spline tension strength",
    )

    @property
    def adaptive(self) -> bool:
        """Whether thresholding uses a local window average."""
        return self.mode == ConversionMode.ADVANCED

    @property
    def use_spline(self) -> bool:
        """Whether smoothing fits a cubic spline instead of rounding corners."""
        return self.mode == ConversionMode.ADVANCED

    @classmethod
    def for_mode(cls, mode: ConversionMode, **overrides: object) -> "ConversionConfig":
        """Build the preset for a conversion mode.

        Args:
            mode: Conversion preset to build
            **overrides: Field values that replace the preset defaults

        Returns:
            ConversionConfig populated with the preset values
        """
        if mode == ConversionMode.ADVANCED:
            values: dict[str, object] = {
                "mode": mode,
                "detail_level": 5,
                "simplify_tolerance": 2.5,
                "smoothing": 2.0,
            }
        else:
            values = {
                "mode": mode,
                "threshold": 128,
                "simplify_tolerance": 0.0,
                "smoothing": 0.0,
            }
        values.update(overrides)
        return cls(**values)


class LayoutSpec(BaseModel):
    """Parameters of the circular spinner layout.

    Ranges are validated per field. Whether a combination is geometrically
    feasible is decided by the layout engine.
    """

    model_config = ConfigDict(frozen=True)

    diameter: float = Field(
        default=100.0,
        gt=0.0,
        description="Overall spinner diameter",
    )
    frame_count: int = Field(
        default=8,
        ge=1,
        le=64,
        description="Number of frame slots around the circle",
    )
    spacing: float = Field(
        default=5.0,
        ge=0.0,
        description="Gap between frames and the outline",
    )
    bearing_diameter: float = Field(
        default=22.0,
        gt=0.0,
        description="Diameter of the central bearing",
    )
    bearing_style: BearingStyle = Field(
        default=BearingStyle.PLAIN,
        description="Bearing rendering style",
    )
    outline_thickness: float = Field(
        default=3.0,
        ge=0.0,
        description="Stroke width of the outline",
    )
    outline_style: OutlineStyle = Field(
        default=OutlineStyle.CIRCULAR,
        description="Outline shape",
    )


class ExportConfig(BaseModel):
    """Configuration handed to export collaborators."""

    model_thickness: float = Field(
        default=3.0,
        gt=0.0,
        le=20.0,
        description="Extrusion thickness for 3-D export",
    )
    preview: bool = Field(
        default=False,
        description="Add a background and per-frame colors for previewing",
    )


class ProcessingConfig(BaseModel):
    """Configuration for batch frame processing."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto, 1 = in-process)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class SpinnerizerSettings(BaseModel):
    """Main application settings."""

    conversion: ConversionConfig = Field(default_factory=ConversionConfig)
    layout: LayoutSpec = Field(default_factory=LayoutSpec)
    export: ExportConfig = Field(default_factory=ExportConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> SpinnerizerSettings:
    """Get default application settings."""
    return SpinnerizerSettings()
