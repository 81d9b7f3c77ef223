"""CLI application entry point for routerpath.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from routerpath import __version__
from routerpath.cli.output import (
    SYM_DOT,
    SYM_OK,
    console,
    print_error,
    print_header,
    print_job_info,
    print_results_table,
    print_step,
    print_success,
)
from routerpath.config import LoggingConfig, RouterpathSettings, Units
from routerpath.core import JobProcessor, inch_to_millimeter, millimeter_to_inch
from routerpath.exceptions import GCodeSaveError, JobLoadError, RouterpathError
from routerpath.io import GCodeWriter, JobReader

# Create the Typer app
app = typer.Typer(
    name="routerpath",
    help="Generate CNC router toolpaths (G-code) from JSON job files.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Routerpath[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
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
    """Generate CNC router toolpaths (G-code) from JSON job files."""


def _check_job_path(job_file: Path) -> None:
    if not job_file.exists():
        print_error(
            f"Input file not found: {job_file}",
            details=f"The file '{job_file}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not job_file.is_file():
        print_error(
            f"Input path is not a file: {job_file}",
            details="Please provide a path to a JSON job file.",
        )
        raise typer.Exit(code=1)


def _bit_line(settings: RouterpathSettings) -> str:
    """Describe the bit diameter in both units."""
    diameter = settings.cut.bit_diameter
    if settings.gcode.units == Units.MILLIMETER:
        return f"bit {diameter:.3f}mm ({millimeter_to_inch(diameter):.4f}in)"
    return f"bit {diameter:.4f}in ({inch_to_millimeter(diameter):.3f}mm)"


@app.command()
def generate(
    job_file: Annotated[
        Path,
        typer.Argument(
            help="Path to the JSON job file",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}.nc)",
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
            help="Show the outcome of every operation",
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
) -> None:
    """Generate the G-code program of a job file.

    Every operation is planned in order. Failed operations are reported and
    left out of the program; the command exits with code 2 when any failed.

    Example:
        routerpath generate sign.json -o sign.nc
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    _check_job_path(job_file)

    if not quiet:
        print_header(__version__)

    output_path = output or GCodeWriter.get_output_path(job_file)
    settings = RouterpathSettings(
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level,
        ),
    )

    try:
        if not quiet:
            print_step("Loading job")

        with JobReader(job_file) as reader:
            job_settings = reader.settings
            job = reader.job

        if not quiet:
            print_job_info(
                job_path=str(job_file),
                operation_count=len(job.operations),
                units=job_settings.gcode.units.value,
                bit_line=_bit_line(job_settings),
            )
            print_step("Planning toolpaths")

        processor = JobProcessor(settings, quiet=quiet)
        results = processor.run(job, job_settings)

        if not quiet and verbose:
            print_results_table(results)

        processor.build_program(results, job_settings).save(output_path)
        stats = processor.stats

        if not quiet:
            print_success(
                output_path=str(output_path),
                file_size=_format_file_size(output_path),
                total_time_s=sum(r.duration_ms for r in results) / 1000,
                processed=stats.processed_count,
                waypoints=stats.waypoint_count,
                errors=stats.error_count,
            )
            for label, message in stats.errors:
                console.print(f"  [red]{label}[/red] {SYM_DOT} {message}")

        if stats.error_count:
            raise typer.Exit(code=2)

    except JobLoadError as e:
        print_error(f"Could not load job: {e.reason}")
        raise typer.Exit(code=1)
    except GCodeSaveError as e:
        print_error(f"Could not save G-code: {e.reason}")
        raise typer.Exit(code=1)
    except RouterpathError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


@app.command()
def inspect(
    job_file: Annotated[
        Path,
        typer.Argument(
            help="Path to the JSON job file",
            show_default=False,
        ),
    ],
) -> None:
    """Plan every operation of a job and show the outcome without writing G-code.

    Example:
        routerpath inspect sign.json
    """
    _check_job_path(job_file)
    print_header(__version__)

    try:
        print_step("Loading job")
        with JobReader(job_file) as reader:
            job_settings = reader.settings
            job = reader.job
    except JobLoadError as e:
        print_error(f"Could not load job: {e.reason}")
        raise typer.Exit(code=1)

    print_job_info(
        job_path=str(job_file),
        operation_count=len(job.operations),
        units=job_settings.gcode.units.value,
        bit_line=_bit_line(job_settings),
    )

    print_step("Planning toolpaths (dry run)")
    processor = JobProcessor(quiet=True)
    results = processor.run(job, job_settings)
    print_results_table(results)

    failed = sum(1 for r in results if not r.ok)
    if failed:
        console.print(f"\n[bold red]{failed} operations failed[/bold red]")
        raise typer.Exit(code=2)

    console.print(f"\n[bold green]{SYM_OK} Inspection complete[/bold green] - no file written")


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "12 KB")
    """
    try:
        size_bytes = path.stat().st_size
    except OSError:
        return "unknown"
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
