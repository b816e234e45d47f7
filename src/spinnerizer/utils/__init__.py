"""Utility functions for spinnerizer.

This module provides utility functions including:

- Logging setup and configuration
- Progress and statistics tracking helpers
"""

from spinnerizer.utils.logging import (
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
)

__all__ = [
    "ProcessingLogger",
    "ProcessingStats",
    "configure_logging",
]
