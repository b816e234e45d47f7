"""Logging utilities for Spinnerizer."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class ProcessingStats:
    """Statistics from a conversion run."""

    processed_count: int = 0
    error_count: int = 0
    contours_traced: int = 0
    contours_dropped: int = 0
    contours_discarded: int = 0
    errors: list[tuple[int, str]] = field(default_factory=list)
    frame_timings_ms: list[float] = field(default_factory=list)
    was_cancelled: bool = False
    cancelled_count: int = 0
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_frame_time_ms(self) -> float | None:
        """Average per-frame conversion time."""
        if not self.frame_timings_ms:
            return None
        return sum(self.frame_timings_ms) / len(self.frame_timings_ms)

    @property
    def min_frame_time_ms(self) -> float | None:
        """Fastest per-frame conversion time."""
        return min(self.frame_timings_ms) if self.frame_timings_ms else None

    @property
    def max_frame_time_ms(self) -> float | None:
        """Slowest per-frame conversion time."""
        return max(self.frame_timings_ms) if self.frame_timings_ms else None


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Replace handlers from a previous call so repeated setup stays idempotent
    for handler in list(root_logger.handlers):
        if getattr(handler, "_spinnerizer", False):
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        file_handler._spinnerizer = True  # type: ignore[attr-defined]
        root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        console_handler._spinnerizer = True  # type: ignore[attr-defined]
        root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("spinnerizer")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class ProcessingLogger:
    """Logger for tracking conversion progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_frame_start(self, index: int) -> None:
        """Log start of frame conversion."""
        self._logger.debug("Converting frame", frame=index)

    def log_frame_complete(
        self,
        index: int,
        contours: int,
        dropped: int,
        duration_ms: float,
        discarded: int = 0,
    ) -> None:
        """Log successful frame conversion."""
        self._logger.info(
            "Frame converted",
            frame=index,
            contours=contours,
            dropped=dropped,
            discarded=discarded,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_count += 1
        self._stats.contours_traced += contours
        self._stats.contours_dropped += dropped
        self._stats.contours_discarded += discarded
        self._stats.frame_timings_ms.append(duration_ms)

    def log_frame_error(
        self,
        index: int,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log frame conversion error."""
        self._logger.error(
            "Frame conversion failed",
            frame=index,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((index, str(error)))

    def log_cancelled(self, processed: int, pending: int) -> None:
        """Log cancellation of the remaining frames."""
        self._logger.info("Conversion cancelled", processed=processed, pending=pending)
        self._stats.was_cancelled = True
        self._stats.cancelled_count = pending

    def log_layout(self, frame_count: int, source_frames: int, radius: float) -> None:
        """Log layout construction."""
        self._logger.debug(
            "Layout built",
            slots=frame_count,
            source_frames=source_frames,
            radius=round(radius, 3),
        )

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
