"""Spinnerizer - Turn animated images into vector spinner designs.

Spinnerizer is a CLI tool that vectorizes every frame of an animated image
(thresholding, contour tracing, path simplification and smoothing) and arranges
the resulting shapes around a central bearing, producing a radially symmetric
design for a physical zoetrope-style spinner.

Example:
    $ spinnerizer dancer.gif

This will create dancer-spinner.svg with one vectorized frame per slot around
the circle.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
