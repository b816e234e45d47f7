"""Command-line interface for spinnerizer.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bar for frame conversion
- Verbose/quiet output modes
- Conversion presets and layout options
- Detailed error reporting
"""

from spinnerizer.cli.app import cli, main

__all__ = ["cli", "main"]
