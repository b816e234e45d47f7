"""Tests for frame vectorization and processing orchestration."""

import json
from pathlib import Path
from unittest.mock import MagicMock, Mock, patch

import pytest

from spinnerizer.config import (
    ConversionConfig,
    ConversionMode,
    ExportConfig,
    LoggingConfig,
    SpinnerizerSettings,
)
from spinnerizer.core.pipeline import FrameVectorizer, VectorizedFrame, vectorize_frame
from spinnerizer.core.processor import FrameProcessor
from spinnerizer.domain import Frame, PathOp, VectorPath
from spinnerizer.exceptions import InputError, ProcessingCancelledError


@pytest.fixture
def settings(tmp_path: Path) -> SpinnerizerSettings:
    """Create test settings that log to a temporary file."""
    return SpinnerizerSettings(logging=LoggingConfig(log_file=tmp_path / "spinnerizer.log"))


@pytest.fixture
def processor(settings: SpinnerizerSettings) -> FrameProcessor:
    return FrameProcessor(settings, quiet=True)


class TestFrameVectorizer:
    """Tests for FrameVectorizer class."""

    def test_square_becomes_one_subpath(self, make_square):
        """A single ink square turns into one closed subpath."""
        result = FrameVectorizer(ConversionConfig()).vectorize_detailed(make_square())

        assert result.contours == 1
        assert result.dropped == 0
        assert result.frame.path.subpath_count() == 1
        assert result.frame.path.ops()[-1] == PathOp.CLOSE
        assert (result.frame.width, result.frame.height) == (12, 12)

    def test_blank_frame_is_empty(self, make_blank):
        """A frame without ink gives an empty path, not an error."""
        frame = FrameVectorizer(ConversionConfig()).vectorize(make_blank())
        assert frame.is_empty()

    def test_collapsed_contour_is_discarded(self, make_square):
        """A contour that simplifies to two points is not emitted as a sliver."""
        config = ConversionConfig(simplify_tolerance=2.5)
        result = FrameVectorizer(config).vectorize_detailed(make_square(size=12, side=3))

        assert result.contours == 0
        assert result.discarded == 1
        assert result.frame.is_empty()

    def test_advanced_mode_uses_curves(self, make_square):
        """The advanced preset fits cubic splines."""
        config = ConversionConfig.for_mode(ConversionMode.ADVANCED, detail_level=8)
        frame = FrameVectorizer(config).vectorize(make_square(size=16, left=4, top=4, side=8))

        assert not frame.is_empty()
        assert PathOp.CUBIC in frame.path.ops()


class TestVectorizeFrame:
    """Tests for the picklable worker function."""

    def test_success(self, make_square):
        """Test a successful conversion result."""
        config_dict = ConversionConfig().model_dump()
        result = vectorize_frame(4, make_square().to_dict(), config_dict)

        assert "error" not in result
        assert result["index"] == 4
        assert result["contours"] == 1
        assert result["discarded"] == 0
        assert result["duration_ms"] >= 0
        frame = Frame.from_dict(result["frame"])
        assert frame.path.subpath_count() == 1

    def test_handles_error(self):
        """Test that bad input is reported instead of raised."""
        bad_buffer = {"width": 2, "height": 2, "data": b""}
        result = vectorize_frame(1, bad_buffer, ConversionConfig().model_dump())

        assert result["index"] == 1
        assert "error" in result
        assert "traceback" in result


class TestFrameProcessorConvert:
    """Tests for FrameProcessor.convert."""

    def test_init(self, settings: SpinnerizerSettings):
        """Test FrameProcessor initialization."""
        with patch("spinnerizer.core.processor.configure_logging") as mock_logging:
            mock_logging.return_value = Mock()
            processor = FrameProcessor(settings)

            assert processor.config == settings
            mock_logging.assert_called_once()

    def test_no_buffers(self, processor: FrameProcessor):
        """Converting nothing is an input error."""
        with pytest.raises(InputError):
            processor.convert([], max_workers=1)

    def test_sequential_keeps_order(self, processor: FrameProcessor, make_square, make_blank):
        """Frames come back in input order."""
        buffers = [make_square(size=10), make_blank(size=6), make_square(size=14)]
        frames = processor.convert(buffers, max_workers=1)

        assert [f.width for f in frames] == [10, 6, 14]
        assert processor.stats.processed_count == 3
        assert processor.stats.contours_traced == 2
        assert len(processor.stats.frame_timings_ms) == 3

    def test_discarded_contours_counted(self, settings: SpinnerizerSettings, make_square):
        """Contours that collapse during simplification are counted, not traced."""
        settings = settings.model_copy(update={"conversion": ConversionConfig(simplify_tolerance=2.5)})
        processor = FrameProcessor(settings, quiet=True)
        processor.convert([make_square(side=3), make_square()], max_workers=1)

        assert processor.stats.contours_traced == 1
        assert processor.stats.contours_discarded == 1

    def test_progress_reported(self, processor: FrameProcessor, make_square):
        """Progress is reported as (completed, total) after each frame."""
        calls = []
        processor.convert(
            [make_square()] * 3,
            max_workers=1,
            progress_callback=lambda done, total: calls.append((done, total)),
        )
        assert calls == [(1, 3), (2, 3), (3, 3)]

    def test_cancel_before_start(self, processor: FrameProcessor, make_square):
        """Cancelling stops conversion and reports the pending frames."""
        with pytest.raises(ProcessingCancelledError) as exc_info:
            processor.convert([make_square()] * 4, max_workers=1, should_cancel=lambda: True)

        assert exc_info.value.processed_count == 0
        assert exc_info.value.pending_count == 4
        assert processor.stats.was_cancelled
        assert processor.stats.cancelled_count == 4

    def test_cancel_midway(self, processor: FrameProcessor, make_square):
        """Frames converted before cancellation are counted."""
        checks = iter([False, False, True])
        with pytest.raises(ProcessingCancelledError) as exc_info:
            processor.convert(
                [make_square()] * 5,
                max_workers=1,
                should_cancel=lambda: next(checks),
            )

        assert exc_info.value.processed_count == 2
        assert exc_info.value.pending_count == 3
        assert processor.stats.processed_count == 2

    def test_failed_frame_is_skipped(self, processor: FrameProcessor, make_square):
        """A frame that fails is logged and left out."""
        good = VectorizedFrame(
            frame=Frame(path=VectorPath(), width=3, height=3), contours=0, dropped=0
        )
        with patch("spinnerizer.core.processor.FrameVectorizer") as mock_vectorizer_class:
            mock_vectorizer = Mock()
            mock_vectorizer.vectorize_detailed.side_effect = [RuntimeError("boom"), good]
            mock_vectorizer_class.return_value = mock_vectorizer

            frames = processor.convert([make_square()] * 2, max_workers=1)

        assert frames == [good.frame]
        assert processor.stats.error_count == 1
        assert processor.stats.errors == [(0, "boom")]

    @patch("spinnerizer.core.processor.as_completed")
    @patch("spinnerizer.core.processor.ProcessPoolExecutor")
    def test_parallel_results_reordered(
        self,
        mock_executor_class,
        mock_as_completed,
        processor: FrameProcessor,
        make_square,
    ):
        """Out-of-order completions are put back in input order."""
        buffers = [make_square(size=10), make_square(size=12), make_square(size=14)]
        config_dict = processor.config.conversion.model_dump()

        futures = []
        for i, buffer in enumerate(buffers):
            future = MagicMock()
            future.result.return_value = vectorize_frame(i, buffer.to_dict(), config_dict)
            futures.append(future)

        mock_executor = MagicMock()
        mock_executor.submit.side_effect = futures
        mock_executor.__enter__.return_value = mock_executor
        mock_executor.__exit__.return_value = None
        mock_executor_class.return_value = mock_executor
        mock_as_completed.return_value = list(reversed(futures))

        frames = processor.convert(buffers, max_workers=2)

        assert [f.width for f in frames] == [10, 12, 14]
        assert processor.stats.processed_count == 3
        assert mock_executor.submit.call_count == 3

    @patch("spinnerizer.core.processor.as_completed")
    @patch("spinnerizer.core.processor.ProcessPoolExecutor")
    def test_parallel_error_result(
        self,
        mock_executor_class,
        mock_as_completed,
        processor: FrameProcessor,
        make_square,
    ):
        """Worker error dictionaries are counted as frame errors."""
        future = MagicMock()
        future.result.return_value = {"index": 0, "error": "bad frame", "traceback": "tb"}

        mock_executor = MagicMock()
        mock_executor.submit.return_value = future
        mock_executor.__enter__.return_value = mock_executor
        mock_executor.__exit__.return_value = None
        mock_executor_class.return_value = mock_executor
        mock_as_completed.return_value = [future]

        frames = processor.convert([make_square()], max_workers=2)

        assert frames == []
        assert processor.stats.error_count == 1
        assert processor.stats.errors == [(0, "bad frame")]

    @patch("spinnerizer.core.processor.as_completed")
    @patch("spinnerizer.core.processor.ProcessPoolExecutor")
    def test_parallel_cancel(
        self,
        mock_executor_class,
        mock_as_completed,
        processor: FrameProcessor,
        make_square,
    ):
        """Cancelling a parallel run cancels the remaining futures."""
        buffers = [make_square()] * 3
        config_dict = processor.config.conversion.model_dump()
        futures = []
        for i, buffer in enumerate(buffers):
            future = MagicMock()
            future.result.return_value = vectorize_frame(i, buffer.to_dict(), config_dict)
            futures.append(future)

        mock_executor = MagicMock()
        mock_executor.submit.side_effect = futures
        mock_executor.__enter__.return_value = mock_executor
        mock_executor.__exit__.return_value = None
        mock_executor_class.return_value = mock_executor
        mock_as_completed.return_value = list(futures)

        with pytest.raises(ProcessingCancelledError) as exc_info:
            processor.convert(buffers, max_workers=2, should_cancel=lambda: True)

        assert exc_info.value.processed_count == 1
        assert exc_info.value.pending_count == 2
        futures[1].cancel.assert_called_once()
        futures[2].cancel.assert_called_once()
        mock_executor.shutdown.assert_called_once_with(wait=True, cancel_futures=True)


class TestFrameProcessorProcess:
    """Tests for the full FrameProcessor.process workflow."""

    def test_process_writes_svg(self, processor: FrameProcessor, animated_gif: Path, tmp_path: Path):
        """Test converting a GIF into an SVG file."""
        output = tmp_path / "out.svg"
        stats = processor.process(animated_gif, output_path=output, max_workers=1)

        assert output.exists()
        assert output.read_text(encoding="utf-8").startswith("<svg")
        assert stats.processed_count == 3
        assert stats.error_count == 0
        assert stats.contours_traced == 3
        assert stats.duration_seconds >= 0

    def test_default_output_path(self, processor: FrameProcessor, animated_gif: Path):
        """The output lands next to the input by default."""
        processor.process(animated_gif, max_workers=1)
        assert (animated_gif.parent / "dancer-spinner.svg").exists()

    def test_log_file_written(self, settings: SpinnerizerSettings, animated_gif: Path):
        """Structured log lines reach the log file."""
        FrameProcessor(settings, quiet=True).process(animated_gif, max_workers=1)
        log_text = settings.logging.log_file.read_text(encoding="utf-8")
        assert "Frame converted" in log_text

    def test_preview_export(self, tmp_path: Path, animated_gif: Path):
        """Test that export settings reach the writer."""
        settings = SpinnerizerSettings(export=ExportConfig(preview=True))
        output = tmp_path / "preview.svg"
        FrameProcessor(settings, quiet=True).process(animated_gif, output_path=output, max_workers=1)
        assert "<rect" in output.read_text(encoding="utf-8")

    def test_process_frames_skips_reading(
        self, processor: FrameProcessor, make_square, tmp_path: Path
    ):
        """Decoded buffers are converted without opening the image again."""
        output = tmp_path / "frames.svg"
        buffers = [make_square(size=12, left=2 + i) for i in range(3)]

        with patch("spinnerizer.core.processor.ImageReader") as mock_reader_class:
            stats = processor.process_frames(buffers, output, max_workers=1)

        mock_reader_class.assert_not_called()
        assert output.exists()
        assert stats.processed_count == 3
        assert stats.start_time is not None
        assert stats.duration_seconds >= 0

    def test_export_payload(self, tmp_path: Path, make_square):
        """The JSON payload carries the configured model thickness."""
        settings = SpinnerizerSettings(export=ExportConfig(model_thickness=6.0))
        payload_path = tmp_path / "spinner.json"

        FrameProcessor(settings, quiet=True).process_frames(
            [make_square()],
            tmp_path / "spinner.svg",
            max_workers=1,
            payload_path=payload_path,
        )

        payload = json.loads(payload_path.read_text(encoding="utf-8"))
        assert payload["extrusion_thickness"] == 6.0
        assert len(payload["frames"]) == settings.layout.frame_count

    def test_no_payload_by_default(
        self, processor: FrameProcessor, animated_gif: Path, tmp_path: Path
    ):
        """Only the SVG is written unless a payload path is given."""
        processor.process(animated_gif, output_path=tmp_path / "only.svg", max_workers=1)
        assert [p.name for p in tmp_path.glob("*.json")] == []
