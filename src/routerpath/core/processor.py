"""Job processing orchestration.

This module runs every operation of a job in order, turns failures into
tagged results, and renders the successful toolpaths as one G-code program.

Key components:
- process_operation: Build the toolpath of one operation
- OperationResult: Toolpath or error of one operation
- JobProcessor: Main orchestrator class for job files
"""

import time
from dataclasses import dataclass
from pathlib import Path

from routerpath.config import RouterpathSettings, TabProperties
from routerpath.core.cutter import ContourCutter
from routerpath.domain import Job, Operation, OperationKind, Toolpath
from routerpath.exceptions import InvalidGeometryError, RouterpathError
from routerpath.io import GCodeWriter, JobReader
from routerpath.utils import ProcessingLogger, ProcessingStats, configure_logging


@dataclass(frozen=True)
class OperationResult:
    """Outcome of one operation: either a toolpath or an error.

    Attributes:
        label: Operation label (name or kind)
        toolpath: Generated toolpath, None on failure
        error_type: Exception class name on failure
        error: Error message on failure
        duration_ms: Time spent planning the operation
    """

    label: str
    toolpath: Toolpath | None = None
    error_type: str | None = None
    error: str | None = None
    duration_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return self.toolpath is not None


def process_operation(operation: Operation, settings: RouterpathSettings) -> Toolpath:
    """Build the toolpath of a single operation.

    Args:
        operation: Operation to plan
        settings: Job settings (cut, tabs, geometry and safe Z)

    Returns:
        The toolpath of the operation

    Raises:
        InvalidGeometryError: If the shape is missing or degenerate
        InvalidConfigurationError: If the cut settings cannot produce a toolpath
        TriangulationError: If a pocketed polygon cannot be triangulated
    """
    tabs = settings.tabs if operation.use_tabs else TabProperties()
    cutter = ContourCutter(settings.cut, tabs, settings.geometry)
    safe_z = settings.gcode.safe_z
    kind = operation.kind

    if kind.is_circle:
        if operation.center is None or operation.radius is None:
            raise InvalidGeometryError(f"Operation '{operation.label}' needs a center and a radius")
        if kind == OperationKind.CUT_CIRCLE:
            return cutter.cut_circle(operation.center, operation.radius, operation.depth, safe_z)
        return cutter.pocket_circle(operation.center, operation.radius, operation.depth, safe_z)

    if kind == OperationKind.CUT_PATH:
        return cutter.cut_path(operation.points, operation.depth, safe_z)
    if kind == OperationKind.CUT_POLYGON:
        return cutter.cut_polygon(operation.polygon(), operation.depth, safe_z)
    return cutter.pocket_simple_polygon(operation.polygon(), operation.depth, safe_z)


class JobProcessor:
    """Orchestrates job processing.

    Manages the complete workflow:
    1. Load job file
    2. Plan every operation in order
    3. Collect results and update statistics
    4. Render and save the G-code program

    Example:
        processor = JobProcessor()
        stats = processor.process(
            job_path=Path("part.json"),
            output_path=Path("part.nc"),
        )
    """

    def __init__(self, settings: RouterpathSettings | None = None, quiet: bool = False) -> None:
        """Initialize job processor.

        Args:
            settings: Settings providing the logging configuration; the
                settings of a loaded job file replace the rest
            quiet: Suppress console logging except errors
        """
        self.settings = settings or RouterpathSettings()
        self.logger = configure_logging(
            log_file=self.settings.logging.log_file,
            console_level=self.settings.logging.log_level,
            file_level=self.settings.logging.file_log_level,
            quiet=quiet,
        )
        self.processing_logger = ProcessingLogger(self.logger)

    @property
    def stats(self) -> ProcessingStats:
        return self.processing_logger.stats

    def run(self, job: Job, settings: RouterpathSettings) -> list[OperationResult]:
        """Plan every operation of a job.

        A failed operation is reported in its result and does not stop the
        following ones.

        Args:
            job: Operations to plan
            settings: Cut, tab and G-code settings of the job

        Returns:
            One result per operation, in job order
        """
        results: list[OperationResult] = []

        for operation in job.operations:
            label = operation.label
            self.processing_logger.log_operation_start(label, operation.kind.value)
            start_time = time.time()

            try:
                toolpath = process_operation(operation, settings)
            except RouterpathError as e:
                duration_ms = (time.time() - start_time) * 1000
                self.processing_logger.log_operation_error(label, type(e).__name__, str(e))
                results.append(
                    OperationResult(
                        label=label,
                        error_type=type(e).__name__,
                        error=str(e),
                        duration_ms=duration_ms,
                    )
                )
                continue

            duration_ms = (time.time() - start_time) * 1000
            self.processing_logger.log_operation_complete(label, len(toolpath), duration_ms)
            results.append(
                OperationResult(label=label, toolpath=toolpath, duration_ms=duration_ms)
            )

        return results

    def render(self, results: list[OperationResult], settings: RouterpathSettings) -> str:
        """Render the successful toolpaths as G-code text."""
        return self.build_program(results, settings).get_gcode()

    def build_program(
        self, results: list[OperationResult], settings: RouterpathSettings
    ) -> GCodeWriter:
        """Write the successful toolpaths into one G-code program.

        Each operation is introduced by a comment with its label; failed
        operations only leave a comment.
        """
        writer = GCodeWriter()
        writer.header(settings.gcode)

        for result in results:
            if result.toolpath is None:
                writer.comment(f"{result.label} skipped: {result.error}")
                continue
            writer.comment(result.label)
            writer.write_toolpath(result.toolpath, settings.cut.feedrate)

        writer.footer()
        return writer

    def process(
        self,
        job_path: Path,
        output_path: Path | None = None,
    ) -> ProcessingStats:
        """Process a job file and save the G-code program.

        Args:
            job_path: Path to the JSON job file
            output_path: Path for the G-code program (auto-generated if None)

        Returns:
            ProcessingStats with counts, timing, and error details

        Raises:
            JobLoadError: If the job file cannot be loaded
            GCodeSaveError: If the program cannot be written
        """
        stats = self.stats
        stats.start_time = time.time()

        if output_path is None:
            output_path = GCodeWriter.get_output_path(job_path)

        self.logger.info(
            "Starting job processing",
            input=str(job_path),
            output=str(output_path),
        )

        with JobReader(job_path) as reader:
            settings = reader.settings
            job = reader.job

        self.logger.info(
            "Job loaded",
            name=job.name,
            operations=len(job.operations),
            units=settings.gcode.units.value,
        )

        results = self.run(job, settings)
        self.build_program(results, settings).save(output_path)

        stats.end_time = time.time()

        self.logger.info(
            "Processing complete",
            processed=stats.processed_count,
            errors=stats.error_count,
            waypoints=stats.waypoint_count,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return stats
