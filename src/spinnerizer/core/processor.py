"""Batch processing orchestration for the spinner pipeline.

This module coordinates the full workflow: decoding an animation, converting
frames in parallel (one ProcessPoolExecutor task per frame), building the
layout, and writing the design.

Key components:
- FrameProcessor: Main orchestrator class
"""

import time
import traceback
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ProcessPoolExecutor, as_completed
from pathlib import Path

from spinnerizer.config import SpinnerizerSettings
from spinnerizer.core.layout import LayoutEngine, placement_radius
from spinnerizer.core.pipeline import FrameVectorizer, vectorize_frame
from spinnerizer.domain import Frame, PixelBuffer, SpinnerDesign
from spinnerizer.exceptions import InputError, ProcessingCancelledError
from spinnerizer.io import ImageReader, PayloadWriter, SvgWriter
from spinnerizer.utils import ProcessingLogger, ProcessingStats, configure_logging

ProgressCallback = Callable[[int, int], None]
CancelCheck = Callable[[], bool]


class FrameProcessor:
    """Orchestrates frame conversion and spinner layout.

    Manages the complete workflow:
    1. Load the animated image
    2. Convert frames in parallel (or in-process with one worker)
    3. Report progress as frames completed / total frames
    4. Build the spinner design
    5. Save the design as SVG, plus the JSON export payload on request

    Example:
        settings = SpinnerizerSettings()
        processor = FrameProcessor(settings)
        stats = processor.process(
            input_path=Path("dancer.gif"),
            output_path=Path("dancer-spinner.svg"),
            max_workers=4
        )
    """

    def __init__(self, config: SpinnerizerSettings, quiet: bool = False) -> None:
        """Initialize processor with configuration.

        Args:
            config: Settings for conversion, layout, export and logging
            quiet: Suppress console log output
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=quiet,
        )
        self.processing_logger = ProcessingLogger(self.logger)
        self.layout_engine = LayoutEngine()

    @property
    def stats(self) -> ProcessingStats:
        """Statistics accumulated so far."""
        return self.processing_logger.stats

    def process(
        self,
        input_path: Path,
        output_path: Path | None = None,
        max_workers: int | None = None,
        progress_callback: ProgressCallback | None = None,
        should_cancel: CancelCheck | None = None,
        payload_path: Path | None = None,
    ) -> ProcessingStats:
        """Convert an animated image into a spinner SVG.

        Args:
            input_path: Animated image (GIF or any format Pillow can read)
            output_path: Path for the SVG (auto-generated if None)
            max_workers: Maximum worker processes (None = config default)
            progress_callback: Optional callback(completed, total)
            should_cancel: Optional check run between frames
            payload_path: Optional path for the JSON export payload

        Returns:
            ProcessingStats with counts, timing, and error details

        Raises:
            ImageLoadError: If the image cannot be decoded
            InputError: If no frame could be vectorized
            LayoutError: If the layout spec is infeasible
            ProcessingCancelledError: If should_cancel returned True
        """
        self.stats.start_time = time.time()

        if output_path is None:
            output_path = SvgWriter.get_output_path(input_path)

        self.logger.info(
            "Starting processing",
            input=str(input_path),
            output=str(output_path),
            max_workers=max_workers,
        )

        reader = ImageReader(input_path)
        reader.load()
        try:
            self.logger.info(
                "Image loaded",
                width=reader.size[0],
                height=reader.size[1],
                frame_count=reader.frame_count,
            )
            buffers = list(reader.iter_buffers())
        finally:
            reader.close()

        return self.process_frames(
            buffers,
            output_path,
            max_workers=max_workers,
            progress_callback=progress_callback,
            should_cancel=should_cancel,
            payload_path=payload_path,
        )

    def process_frames(
        self,
        buffers: Sequence[PixelBuffer],
        output_path: Path,
        max_workers: int | None = None,
        progress_callback: ProgressCallback | None = None,
        should_cancel: CancelCheck | None = None,
        payload_path: Path | None = None,
    ) -> ProcessingStats:
        """Convert already decoded frames into a spinner SVG.

        Used when the caller has read the image itself.

        Args:
            buffers: Pixel buffers in animation order
            output_path: Path for the SVG
            max_workers: Maximum worker processes (None = config default)
            progress_callback: Optional callback(completed, total)
            should_cancel: Optional check run between frames
            payload_path: Optional path for the JSON export payload

        Returns:
            ProcessingStats with counts, timing, and error details
        """
        stats = self.stats
        if stats.start_time is None:
            stats.start_time = time.time()

        frames = self.convert(
            buffers,
            max_workers=max_workers,
            progress_callback=progress_callback,
            should_cancel=should_cancel,
        )
        design = self.build_design(frames)

        SvgWriter(design, self.config.export).save(output_path)
        if payload_path is not None:
            PayloadWriter(design, self.config.export).save(payload_path)
            self.logger.info(
                "Export payload written",
                payload=str(payload_path),
                thickness=self.config.export.model_thickness,
            )

        stats.end_time = time.time()
        self.logger.info(
            "Processing complete",
            output=str(output_path),
            processed=stats.processed_count,
            errors=stats.error_count,
            contours=stats.contours_traced,
            dropped=stats.contours_dropped,
            discarded=stats.contours_discarded,
            duration_seconds=round(stats.duration_seconds, 2),
        )
        return stats

    def convert(
        self,
        buffers: Sequence[PixelBuffer],
        max_workers: int | None = None,
        progress_callback: ProgressCallback | None = None,
        should_cancel: CancelCheck | None = None,
    ) -> list[Frame]:
        """Vectorize frames, preserving their order.

        Frames whose conversion fails are logged, counted as errors and
        left out of the result.

        Args:
            buffers: Pixel buffers in animation order
            max_workers: Maximum worker processes; 1 converts in-process
            progress_callback: Optional callback(completed, total)
            should_cancel: Optional check run between frames

        Returns:
            Converted frames in input order

        Raises:
            InputError: If no buffers are given
            ProcessingCancelledError: If should_cancel returned True
        """
        if not buffers:
            raise InputError("frames", 0, "at least one frame is required")

        if max_workers is None:
            max_workers = self.config.processing.max_workers

        if max_workers == 1:
            frames = self._convert_sequential(buffers, progress_callback, should_cancel)
        else:
            frames = self._convert_parallel(
                buffers, max_workers, progress_callback, should_cancel
            )
        return [frames[i] for i in sorted(frames)]

    def build_design(self, frames: list[Frame]) -> SpinnerDesign:
        """Arrange converted frames into a spinner design.

        Raises:
            InputError: If frames is empty
            LayoutError: If the layout spec is infeasible
        """
        spec = self.config.layout
        design = self.layout_engine.build(frames, spec)
        self.processing_logger.log_layout(
            frame_count=spec.frame_count,
            source_frames=len(frames),
            radius=placement_radius(spec),
        )
        return design

    def _convert_sequential(
        self,
        buffers: Sequence[PixelBuffer],
        progress_callback: ProgressCallback | None,
        should_cancel: CancelCheck | None,
    ) -> dict[int, Frame]:
        vectorizer = FrameVectorizer(self.config.conversion)
        frames: dict[int, Frame] = {}
        total = len(buffers)

        for index, buffer in enumerate(buffers):
            if should_cancel is not None and should_cancel():
                self.processing_logger.log_cancelled(index, total - index)
                raise ProcessingCancelledError(index, total - index)

            self.processing_logger.log_frame_start(index)
            start_time = time.time()
            try:
                result = vectorizer.vectorize_detailed(buffer)
            except Exception as e:
                self.processing_logger.log_frame_error(index, e, traceback.format_exc())
            else:
                frames[index] = result.frame
                self.processing_logger.log_frame_complete(
                    index=index,
                    contours=result.contours,
                    dropped=result.dropped,
                    discarded=result.discarded,
                    duration_ms=(time.time() - start_time) * 1000,
                )

            if progress_callback is not None:
                progress_callback(index + 1, total)

        return frames

    def _convert_parallel(
        self,
        buffers: Sequence[PixelBuffer],
        max_workers: int | None,
        progress_callback: ProgressCallback | None,
        should_cancel: CancelCheck | None,
    ) -> dict[int, Frame]:
        frames: dict[int, Frame] = {}
        config_dict = self.config.conversion.model_dump()
        total = len(buffers)
        completed = 0
        pending_futures: dict[Future, int] = {}

        self.logger.info(
            "Starting parallel conversion",
            frame_count=total,
            max_workers=max_workers,
        )

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for index, buffer in enumerate(buffers):
                future = executor.submit(vectorize_frame, index, buffer.to_dict(), config_dict)
                pending_futures[future] = index

            try:
                for future in as_completed(list(pending_futures)):
                    index = pending_futures.pop(future)

                    try:
                        result = future.result()

                        if "error" in result:
                            self.processing_logger.log_frame_error(
                                index=index,
                                error=Exception(result["error"]),
                                traceback=result.get("traceback"),
                            )
                        else:
                            frames[index] = Frame.from_dict(result["frame"])
                            self.processing_logger.log_frame_complete(
                                index=index,
                                contours=result["contours"],
                                dropped=result["dropped"],
                                discarded=result.get("discarded", 0),
                                duration_ms=result.get("duration_ms", 0.0),
                            )

                    except Exception as e:
                        # Executor-level error
                        self.processing_logger.log_frame_error(index, e, traceback.format_exc())

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total)

                    if pending_futures and should_cancel is not None and should_cancel():
                        self._cancel_pending(executor, pending_futures, completed)
                        raise ProcessingCancelledError(completed, len(pending_futures))

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                self._cancel_pending(executor, pending_futures, completed)
                raise

        return frames

    def _cancel_pending(
        self,
        executor: ProcessPoolExecutor,
        pending_futures: dict[Future, int],
        completed: int,
    ) -> None:
        for future in pending_futures:
            future.cancel()
        self.processing_logger.log_cancelled(completed, len(pending_futures))
        executor.shutdown(wait=True, cancel_futures=True)
