"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars and formatted messages.
"""

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.text import Text

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for batch processing."""
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header."""
    console.print(f"\n[bold]Regionmorph[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_shape_info(label: str, subpaths: int, points: int) -> None:
    """Print a parsed shape summary.

    Args:
        label: Which side of the morph ("source" or "destination")
        subpaths: Number of sub-outlines
        points: Total vertex count
    """
    plural = "outline" if subpaths == 1 else "outlines"
    console.print(f"  {label:<12} {subpaths} {plural} {SYM_DOT} {points:,} points")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_morph_summary(total_time_s: float, regions: int, points: int, merges: int) -> None:
    """Print the outcome of a single morph.

    Args:
        total_time_s: Morph time in seconds
        regions: Number of matched region pairs
        points: Points per side
        merges: Coarsening merges performed
    """
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(total_time_s)}")
    console.print(
        f"  {regions} regions {SYM_DOT} {points:,} points {SYM_DOT} {merges} merges"
    )


def print_path(label: str, path: str) -> None:
    """Print a labelled path string without wrapping or markup."""
    console.print(f"\n[bold]{label}[/bold]")
    console.print(Text(path), soft_wrap=True, highlight=False)


def print_batch_summary(
    output_path: str,
    total_time_s: float,
    processed: int,
    errors: int,
    avg_time_ms: float | None = None,
) -> None:
    """Print batch summary.

    Args:
        output_path: Path of the results file
        total_time_s: Total processing time in seconds
        processed: Number of successful morphs
        errors: Number of failed morphs
        avg_time_ms: Average time per morph in milliseconds
    """
    console.print(
        f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(total_time_s)}"
    )

    line = Text("  ")
    line.append(output_path, style="bold")
    console.print(line)

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {processed} morphs {SYM_DOT} [{error_style}]{errors} errors[/{error_style}]"
    )

    if avg_time_ms is not None:
        console.print(f"  {avg_time_ms:.1f}ms avg")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message."""
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_cancellation_summary(processed: int, cancelled: int) -> None:
    """Print cancellation summary."""
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print(f"  {processed} morphs completed {SYM_DOT} {cancelled} tasks cancelled")
    console.print("  No output file created")
