"""Exception hierarchy for Spinnerizer."""

from typing import Any


class SpinnerizerError(Exception):
    """Base exception for all Spinnerizer errors."""

    pass


class InputError(SpinnerizerError):
    """Empty or malformed frame or pixel input."""

    def __init__(self, parameter: str, value: Any, reason: str) -> None:
        self.parameter = parameter
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid input '{parameter}' ({value!r}): {reason}")


class LayoutError(SpinnerizerError):
    """Geometrically infeasible layout specification."""

    def __init__(self, parameter: str, value: float, reason: str) -> None:
        self.parameter = parameter
        self.value = value
        self.reason = reason
        super().__init__(f"Infeasible layout, {parameter}={value:g}: {reason}")


class TraceBudgetExceeded(SpinnerizerError):
    """A single contour trace ran past its step budget.

    Raised and recovered inside the tracer; the contour is dropped.
    """

    def __init__(self, seed: tuple[int, int], budget: int) -> None:
        self.seed = seed
        self.budget = budget
        super().__init__(f"Contour seeded at {seed} exceeded {budget} steps")


class ImageError(SpinnerizerError):
    """Errors related to image loading."""

    pass


class ImageLoadError(ImageError):
    """Error loading an animated image file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load image '{path}': {reason}")


class ExportError(SpinnerizerError):
    """Error writing a finished design."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to export design to '{path}': {reason}")


class ProcessingCancelledError(SpinnerizerError):
    """Frame conversion was cancelled."""

    def __init__(self, processed_count: int, pending_count: int) -> None:
        self.processed_count = processed_count
        self.pending_count = pending_count
        super().__init__(
            f"Processing cancelled: {processed_count} completed, {pending_count} pending"
        )
