"""CLI application entry point for seamcraft.

This module provides the main CLI interface using Typer.
"""

import time
from pathlib import Path
from typing import Annotated

import typer

from seamcraft import __version__
from seamcraft.cli.output import (
    console,
    print_closest,
    print_error,
    print_header,
    print_offset_table,
    print_piece_info,
    print_ranges,
    print_segment_table,
    print_step,
    print_success,
)
from seamcraft.config import LoggingConfig, SeamcraftSettings
from seamcraft.domain import CornerJoin, Point
from seamcraft.exceptions import PieceLoadError, PieceSaveError, SeamcraftError
from seamcraft.io import PatternPiece, PieceReader, write_offsets
from seamcraft.utils import OffsetLogger, configure_logging

# Create the Typer app
app = typer.Typer(
    name="seamcraft",
    help="Inspect pattern piece contours and compute their seam allowances.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]seamcraft[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_options(
    ctx: typer.Context,
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
    """Inspect pattern piece contours and compute their seam allowances."""
    settings = SeamcraftSettings(
        logging=LoggingConfig(log_file=log_file, log_level=log_level),
    )
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )
    ctx.obj = {"settings": settings, "logger": logger, "quiet": quiet}


def _load_piece(ctx: typer.Context, piece_path: Path) -> PatternPiece:
    """Load a piece file, exiting with an error message on failure."""
    try:
        return PieceReader(piece_path, ctx.obj["settings"]).load()
    except PieceLoadError as e:
        print_error(f"Could not load piece: {e.reason}", details=e.path)
        raise typer.Exit(code=1) from None


@app.command()
def info(
    ctx: typer.Context,
    piece_path: Annotated[
        Path,
        typer.Argument(help="Path to a pattern piece JSON file", show_default=False),
    ],
) -> None:
    """Show the contour segments, their lengths and the seam allowance ranges."""
    piece = _load_piece(ctx, piece_path)
    contour = piece.contour

    if not ctx.obj["quiet"]:
        print_header(__version__)

    print_piece_info(
        name=piece.name,
        vertex_count=contour.vertex_count(),
        closed=contour.closed,
        perimeter=contour.total_length(),
        area=contour.signed_area(),
    )

    print_step("Segments")
    rows = [
        (
            i,
            "curve" if contour.is_segment_curved(i) else "line",
            contour.segment_length(i),
        )
        for i in range(contour.segment_count())
    ]
    print_segment_table(rows)

    print_step("Seam allowance")
    print_ranges(piece.seam_allowance.ranges, piece.seam_allowance.corner_join.value)


@app.command()
def offsets(
    ctx: typer.Context,
    piece_path: Annotated[
        Path,
        typer.Argument(help="Path to a pattern piece JSON file", show_default=False),
    ],
    join: Annotated[
        str | None,
        typer.Option(
            "--join",
            "-j",
            help="Override the corner join (miter|round|bevel)",
        ),
    ] = None,
    width: Annotated[
        float | None,
        typer.Option(
            "--width",
            "-w",
            help="Seam allowance for the whole contour when the piece defines none",
            min=0.0,
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the offset polygons to a JSON file",
        ),
    ] = None,
) -> None:
    """Compute the seam allowance polygon of every range."""
    piece = _load_piece(ctx, piece_path)
    seam = piece.seam_allowance
    quiet = ctx.obj["quiet"]

    if join is not None:
        try:
            seam.set_corner_join(CornerJoin(join.lower()))
        except ValueError:
            print_error(
                f"Invalid corner join: {join}",
                details="Valid values: miter, round, bevel",
            )
            raise typer.Exit(code=1) from None

    if width is not None and seam.range_count() == 0:
        seam.add_full_contour(width)

    if not seam.enabled:
        console.print("Seam allowance is disabled for this piece.")
        raise typer.Exit(code=0)

    if not quiet:
        print_header(__version__)
        print_step(f"Computing offsets for {piece.name}")

    offset_logger = OffsetLogger(ctx.obj["logger"])
    offset_logger.log_piece_loaded(piece.name, piece.contour.vertex_count(), seam.range_count())

    try:
        stats = offset_logger.stats
        stats.start_time = time.perf_counter()
        polygons = []
        rows = []
        for i, seam_range in enumerate(seam.ranges):
            polygon = seam.compute_range_offset(seam_range)
            offset_logger.log_range_offset(i, len(polygon))
            if polygon:
                polygons.append(polygon)
            span = (
                "full contour"
                if seam_range.is_full_contour
                else f"{seam_range.start_vertex_index} → {seam_range.end_vertex_index}"
            )
            rows.append((i, span, seam_range.width, len(polygon)))
        stats.end_time = time.perf_counter()

        if output is not None:
            write_offsets(polygons, output)
    except PieceSaveError as e:
        print_error(f"Could not save offsets: {e.reason}", details=e.path)
        raise typer.Exit(code=1) from None
    except SeamcraftError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    if not rows:
        console.print("  No seam allowance ranges. Use --width to offset the whole contour.")
        raise typer.Exit(code=0)

    print_offset_table(rows)
    if not quiet:
        message = f"{stats.polygon_count} polygons, {stats.point_count} points"
        if output is not None:
            message += f" written to {output}"
        print_success(message, stats.duration_seconds)


@app.command()
def closest(
    ctx: typer.Context,
    piece_path: Annotated[
        Path,
        typer.Argument(help="Path to a pattern piece JSON file", show_default=False),
    ],
    x: Annotated[float, typer.Argument(help="X coordinate of the query point")],
    y: Annotated[float, typer.Argument(help="Y coordinate of the query point")],
) -> None:
    """Find the contour segment closest to a point."""
    piece = _load_piece(ctx, piece_path)
    query = Point(x, y)
    segment_index, point = piece.contour.find_closest_segment(query)
    distance = point.distance_to(query) if point is not None else 0.0
    print_closest(segment_index, point, distance)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
