"""Configuration management for spinnerizer.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults, and every
option is range-validated before it reaches the pipeline.

Key classes:
- ConversionConfig: Per-frame vectorization settings
- LayoutSpec: Circular layout parameters
- ExportConfig: Settings handed to exporters
- ProcessingConfig: Batch processing settings
- LoggingConfig: Logging settings
- SpinnerizerSettings: Main application settings
"""

from spinnerizer.config.settings import (
    BearingStyle,
    ConversionConfig,
    ConversionMode,
    ExportConfig,
    LayoutSpec,
    LoggingConfig,
    OutlineStyle,
    ProcessingConfig,
    SpinnerizerSettings,
    get_default_settings,
)

__all__ = [
    "BearingStyle",
    "ConversionConfig",
    "ConversionMode",
    "ExportConfig",
    "LayoutSpec",
    "LoggingConfig",
    "OutlineStyle",
    "ProcessingConfig",
    "SpinnerizerSettings",
    "get_default_settings",
]
