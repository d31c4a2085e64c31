"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from seamcraft.domain import Point, SeamRange

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]seamcraft[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_piece_info(
    name: str,
    vertex_count: int,
    closed: bool,
    perimeter: float,
    area: float,
) -> None:
    """Print pattern piece summary.

    Args:
        name: Piece name
        vertex_count: Number of contour vertices
        closed: Whether the contour is closed
        perimeter: Total contour length
        area: Signed area of the vertex polygon
    """
    line = Text("  ")
    line.append(name, style="bold")
    line.append(" (closed)" if closed else " (open)")
    console.print(line)
    console.print(
        f"  {vertex_count} vertices {SYM_DOT} perimeter {perimeter:.2f} "
        f"{SYM_DOT} area {area:.2f}"
    )


def print_segment_table(rows: list[tuple[int, str, float]]) -> None:
    """Print one row per contour segment.

    Args:
        rows: (segment index, "line" or "curve", length) tuples
    """
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Segment", justify="right")
    table.add_column("Kind")
    table.add_column("Length", justify="right")
    for index, kind, length in rows:
        table.add_row(str(index), kind, f"{length:.2f}")
    console.print(table)


def print_ranges(ranges: tuple[SeamRange, ...], corner_join: str) -> None:
    """Print the seam allowance ranges.

    Args:
        ranges: Stored seam ranges
        corner_join: Corner join style name
    """
    if not ranges:
        console.print("  No seam allowance ranges")
        return
    console.print(f"  {len(ranges)} ranges {SYM_DOT} {corner_join} corners")
    for i, seam_range in enumerate(ranges):
        if seam_range.is_full_contour:
            span = "full contour"
        else:
            span = f"{seam_range.start_vertex_index} → {seam_range.end_vertex_index}"
        console.print(f"  [{i}] {span} {SYM_DOT} width {seam_range.width:g}")


def print_offset_table(rows: list[tuple[int, str, float, int]]) -> None:
    """Print one row per computed offset polygon.

    Args:
        rows: (range index, span description, width, point count) tuples
    """
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Range", justify="right")
    table.add_column("Span")
    table.add_column("Width", justify="right")
    table.add_column("Points", justify="right")
    for index, span, width, points in rows:
        table.add_row(
            str(index),
            span,
            f"{width:g}",
            str(points),
            style="red" if points == 0 else None,
        )
    console.print(table)


def print_closest(segment_index: int, point: Point | None, distance: float) -> None:
    """Print the result of a closest-segment query."""
    if segment_index < 0 or point is None:
        console.print("  No segment found")
        return
    console.print(
        f"  Segment [bold]{segment_index}[/bold] at ({point.x:.3f}, {point.y:.3f}) "
        f"{SYM_DOT} distance {distance:.3f}"
    )


def print_success(message: str, duration_s: float | None = None) -> None:
    """Print success message.

    Args:
        message: Summary message
        duration_s: Optional elapsed time in seconds
    """
    suffix = f" in {duration_s * 1000:.1f}ms" if duration_s is not None else ""
    console.print(f"\n[bold green]{SYM_OK} {message}[/bold green]{suffix}")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
