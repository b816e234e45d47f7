"""CLI application entry point for spinnerizer.

This module provides the main CLI interface using Typer.
"""

import os
from enum import Enum
from pathlib import Path
from typing import Annotated, TypeVar

import typer
from pydantic import ValidationError

from spinnerizer import __version__
from spinnerizer.cli.output import (
    console,
    create_progress,
    print_cancellation_notice,
    print_cancellation_summary,
    print_error,
    print_header,
    print_image_info,
    print_layout_info,
    print_processing_info,
    print_step,
    print_success,
)
from spinnerizer.config import (
    BearingStyle,
    ConversionConfig,
    ConversionMode,
    ExportConfig,
    LayoutSpec,
    LoggingConfig,
    OutlineStyle,
    ProcessingConfig,
    SpinnerizerSettings,
)
from spinnerizer.core import FrameProcessor, LayoutEngine
from spinnerizer.exceptions import (
    ExportError,
    ImageLoadError,
    LayoutError,
    ProcessingCancelledError,
    SpinnerizerError,
)
from spinnerizer.io import ImageReader, SvgWriter

# LayoutSpec accepts at most this many slots
MAX_SLOTS = 64

E = TypeVar("E", bound=Enum)

# Create the Typer app
app = typer.Typer(
    name="spinnerizer",
    help="Convert animated images into vector spinner designs.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Spinnerizer[/bold blue] v{__version__}")
        raise typer.Exit()


def _parse_choice(enum_cls: type[E], value: str, option: str) -> E:
    """Convert an option string into an enum member or exit with an error."""
    try:
        return enum_cls(value.lower())
    except ValueError:
        valid = ", ".join(member.value for member in enum_cls)
        print_error(f"Invalid {option}: {value}", details=f"Valid values: {valid}")
        raise typer.Exit(code=1)


@app.command()
def spinnerize(
    input_image: Annotated[
        Path,
        typer.Argument(
            help="Path to an animated image (GIF, APNG, WebP)",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-spinner.svg)",
        ),
    ] = None,
    mode: Annotated[
        str,
        typer.Option(
            "--mode",
            "-m",
            help="Conversion preset (simple|advanced)",
        ),
    ] = "simple",
    threshold: Annotated[
        int | None,
        typer.Option(
            "--threshold",
            "-t",
            help="Luminance threshold for simple mode (0-255)",
            min=0,
            max=255,
        ),
    ] = None,
    detail_level: Annotated[
        int | None,
        typer.Option(
            "--detail-level",
            help="Adaptive threshold detail for advanced mode (1-10)",
            min=1,
            max=10,
        ),
    ] = None,
    tolerance: Annotated[
        float | None,
        typer.Option(
            "--tolerance",
            help="Path simplification tolerance (0-10)",
            min=0.0,
            max=10.0,
        ),
    ] = None,
    smoothing: Annotated[
        float | None,
        typer.Option(
            "--smoothing",
            "-s",
            help="Corner smoothing strength (0-10)",
            min=0.0,
            max=10.0,
        ),
    ] = None,
    diameter: Annotated[
        float,
        typer.Option(
            "--diameter",
            "-d",
            help="Spinner diameter",
            min=1.0,
        ),
    ] = 100.0,
    frames: Annotated[
        int | None,
        typer.Option(
            "--frames",
            "-n",
            help="Number of frame slots (default: number of frames in the image)",
            min=1,
            max=MAX_SLOTS,
        ),
    ] = None,
    spacing: Annotated[
        float,
        typer.Option(
            "--spacing",
            help="Gap between frames and the outline",
            min=0.0,
        ),
    ] = 5.0,
    bearing_diameter: Annotated[
        float,
        typer.Option(
            "--bearing-diameter",
            "-b",
            help="Central bearing diameter",
            min=0.1,
        ),
    ] = 22.0,
    bearing_style: Annotated[
        str,
        typer.Option(
            "--bearing-style",
            help="Bearing style (plain|detailed)",
        ),
    ] = "plain",
    outline_style: Annotated[
        str,
        typer.Option(
            "--outline-style",
            help="Outline style (circular|rounded|hull)",
        ),
    ] = "circular",
    outline_thickness: Annotated[
        float,
        typer.Option(
            "--outline-thickness",
            help="Outline stroke width",
            min=0.0,
        ),
    ] = 3.0,
    preview: Annotated[
        bool,
        typer.Option(
            "--preview",
            help="Add a background and per-frame colors to the SVG",
        ),
    ] = False,
    payload: Annotated[
        Path | None,
        typer.Option(
            "--payload",
            help="Also write the resolved geometry as JSON for model export",
        ),
    ] = None,
    thickness: Annotated[
        float,
        typer.Option(
            "--thickness",
            help="Extrusion thickness recorded in the export payload (0-20)",
            min=0.0,
            max=20.0,
        ),
    ] = 3.0,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Convert an animated image into a spinner design.

    Every frame is vectorized (threshold, trace, simplify, smooth) and the
    resulting shapes are arranged around a central bearing.

    Example:
        spinnerizer dancer.gif

    This will create dancer-spinner.svg next to the input.
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if not input_image.exists():
        print_error(
            f"Input file not found: {input_image}",
            details=f"The file '{input_image}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not input_image.is_file():
        print_error(
            f"Input path is not a file: {input_image}",
            details="Please provide a path to an animated image file.",
        )
        raise typer.Exit(code=1)

    conversion_mode = _parse_choice(ConversionMode, mode, "mode")
    bearing = _parse_choice(BearingStyle, bearing_style, "bearing style")
    outline = _parse_choice(OutlineStyle, outline_style, "outline style")

    if not quiet:
        print_header(__version__)

    try:
        if not quiet:
            print_step("Loading image")

        reader = ImageReader(input_image)
        reader.load()
        try:
            image_format = reader.format
            frame_count = reader.frame_count
            size = reader.size
            buffers = list(reader.iter_buffers())
        finally:
            reader.close()

        if not quiet:
            print_image_info(str(input_image), image_format, frame_count, size)

        overrides = {
            key: value
            for key, value in {
                "threshold": threshold,
                "detail_level": detail_level,
                "simplify_tolerance": tolerance,
                "smoothing": smoothing,
            }.items()
            if value is not None
        }

        try:
            settings = SpinnerizerSettings(
                conversion=ConversionConfig.for_mode(conversion_mode, **overrides),
                layout=LayoutSpec(
                    diameter=diameter,
                    frame_count=frames if frames is not None else min(frame_count, MAX_SLOTS),
                    spacing=spacing,
                    bearing_diameter=bearing_diameter,
                    bearing_style=bearing,
                    outline_thickness=outline_thickness,
                    outline_style=outline,
                ),
                export=ExportConfig(model_thickness=thickness, preview=preview),
                processing=ProcessingConfig(max_workers=workers),
                logging=LoggingConfig(
                    log_file=log_file,
                    log_level=log_level if not quiet else "WARNING",
                ),
            )
        except ValidationError as e:
            print_error("Invalid option values", details=str(e))
            raise typer.Exit(code=1)

        # Reject infeasible layouts before spending time on conversion
        LayoutEngine.validate(settings.layout)

        if not quiet:
            print_layout_info(
                slots=settings.layout.frame_count,
                diameter=settings.layout.diameter,
                outline=outline.value,
                bearing=bearing.value,
            )

        actual_output_path = output if output is not None else SvgWriter.get_output_path(input_image)

        if not quiet:
            actual_workers = workers if workers else os.cpu_count() or 1
            print_step("Converting frames")
            print_processing_info(actual_workers, is_auto=(workers is None))

        processor = FrameProcessor(settings, quiet=quiet)

        try:
            if not quiet:
                with create_progress() as progress:
                    task_id = progress.add_task(
                        f"Converting {frame_count} frames",
                        total=frame_count,
                    )

                    def update_progress(completed: int, total: int) -> None:
                        progress.update(task_id, completed=completed, total=total)

                    stats = processor.process_frames(
                        buffers,
                        actual_output_path,
                        max_workers=workers,
                        progress_callback=update_progress,
                        payload_path=payload,
                    )
            else:
                stats = processor.process_frames(
                    buffers,
                    actual_output_path,
                    max_workers=workers,
                    payload_path=payload,
                )
        except (KeyboardInterrupt, ProcessingCancelledError):
            if not quiet:
                print_cancellation_notice()
                print_cancellation_summary(
                    processed=processor.stats.processed_count,
                    cancelled=processor.stats.cancelled_count,
                )
            raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code

        if not quiet:
            print_success(
                output_path=str(actual_output_path),
                total_time_s=stats.duration_seconds,
                processed=stats.processed_count,
                contours=stats.contours_traced,
                dropped=stats.contours_dropped,
                errors=stats.error_count,
                avg_time_ms=stats.avg_frame_time_ms,
                min_time_ms=stats.min_frame_time_ms,
                max_time_ms=stats.max_frame_time_ms,
            )

    except ImageLoadError as e:
        print_error(f"Could not load image: {e.reason}")
        raise typer.Exit(code=1)
    except LayoutError as e:
        print_error(f"Infeasible layout: {e.parameter} = {e.value:g}", details=e.reason)
        raise typer.Exit(code=1)
    except ExportError as e:
        print_error(f"Could not save design: {e.reason}")
        raise typer.Exit(code=1)
    except SpinnerizerError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
