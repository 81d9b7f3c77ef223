"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from routerpath.core import OperationResult

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
    console.print(f"\n[bold]Routerpath[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_job_info(job_path: str, operation_count: int, units: str, bit_line: str) -> None:
    """Print job information.

    Args:
        job_path: Path to the job file
        operation_count: Number of operations in the job
        units: Units of the program
        bit_line: Bit description (diameter in both units)
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(job_path)
    console.print(line)
    console.print(f"  {operation_count} operations {SYM_DOT} {units} {SYM_DOT} {bit_line}")


def print_results_table(results: list[OperationResult]) -> None:
    """Print one row per operation with its outcome.

    Args:
        results: Operation results in job order
    """
    table = Table(show_edge=False, pad_edge=False, box=None)
    table.add_column("", width=1)
    table.add_column("Operation")
    table.add_column("Waypoints", justify="right")
    table.add_column("Passes", justify="right")
    table.add_column("Details")

    for result in results:
        if result.toolpath is not None:
            table.add_row(
                f"[green]{SYM_OK}[/green]",
                result.label,
                str(len(result.toolpath)),
                str(len(result.toolpath.depths())),
                f"{result.duration_ms:.1f}ms",
            )
        else:
            table.add_row(
                f"[red]{SYM_ERR}[/red]",
                result.label,
                "-",
                "-",
                f"[red]{result.error_type}[/red]: {result.error}",
            )

    console.print(table)


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


def print_success(
    output_path: str,
    file_size: str,
    total_time_s: float,
    processed: int,
    waypoints: int,
    errors: int,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        file_size: Human-readable file size string
        total_time_s: Total processing time in seconds
        processed: Number of operations planned
        waypoints: Total number of waypoints written
        errors: Number of failed operations
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({file_size})")
    console.print(line)

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {processed} operations {SYM_DOT} {waypoints} waypoints {SYM_DOT} "
        f"[{error_style}]{errors} errors[/{error_style}]"
    )


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
