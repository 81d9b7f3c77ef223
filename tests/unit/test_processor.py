"""Tests for job processing orchestration."""

import json
from pathlib import Path

import pytest

from routerpath.config import (
    CutProperties,
    GCodeConfig,
    LoggingConfig,
    RouterpathSettings,
    TabProperties,
)
from routerpath.core.processor import JobProcessor, OperationResult, process_operation
from routerpath.domain import Job, Operation, OperationKind, Vector
from routerpath.exceptions import InvalidGeometryError, JobLoadError
from routerpath.utils import ProcessingLogger, configure_logging


@pytest.fixture
def settings() -> RouterpathSettings:
    """Create test settings."""
    return RouterpathSettings(
        cut=CutProperties(bit_diameter=0.25, pass_depth=0.5, stepover=0.5, feedrate=60),
        tabs=TabProperties(width=1.0, height=0.25),
        gcode=GCodeConfig(safe_z=1.0),
    )


@pytest.fixture
def square_op() -> Operation:
    return Operation(
        kind=OperationKind.CUT_POLYGON,
        depth=1.0,
        points=(Vector(0, 0), Vector(4, 0), Vector(4, 4), Vector(0, 4)),
        name="outline",
    )


@pytest.fixture
def job(square_op: Operation) -> Job:
    return Job(
        operations=[
            square_op,
            Operation(OperationKind.POCKET_CIRCLE, 0.5, center=Vector(0, 0), radius=0.1, name="hole"),
            Operation(OperationKind.CUT_CIRCLE, 0.5, center=Vector(2, 2), radius=1.0),
        ],
        name="test",
    )


class TestProcessOperation:
    """Tests for process_operation function."""

    def test_cut_polygon(self, square_op: Operation, settings: RouterpathSettings) -> None:
        toolpath = process_operation(square_op, settings)
        # jog + untabbed pass + tabbed pass + retract
        assert len(toolpath) == 1 + 5 + 21 + 1
        assert toolpath[-1].position.z == 1.0

    def test_tabs_can_be_disabled(self, square_op: Operation, settings: RouterpathSettings) -> None:
        square_op.use_tabs = False
        toolpath = process_operation(square_op, settings)
        assert len(toolpath) == 1 + 5 + 5 + 1

    @pytest.mark.parametrize(
        "kind",
        [OperationKind.CUT_PATH, OperationKind.POCKET_POLYGON],
    )
    def test_point_kinds(
        self, kind: OperationKind, square_op: Operation, settings: RouterpathSettings
    ) -> None:
        square_op.kind = kind
        assert not process_operation(square_op, settings).is_empty()

    def test_pocket_circle(self, settings: RouterpathSettings) -> None:
        op = Operation(OperationKind.POCKET_CIRCLE, 0.5, center=Vector(0, 0), radius=1.0)
        toolpath = process_operation(op, settings)
        assert sum(1 for w in toolpath if w.is_arc) == 8

    def test_circle_without_radius(self, settings: RouterpathSettings) -> None:
        op = Operation(OperationKind.CUT_CIRCLE, 0.5, center=Vector(0, 0))
        with pytest.raises(InvalidGeometryError):
            process_operation(op, settings)


class TestJobProcessor:
    """Tests for JobProcessor class."""

    @pytest.fixture
    def processor(self) -> JobProcessor:
        return JobProcessor(quiet=True)

    def test_run_collects_tagged_results(
        self, processor: JobProcessor, job: Job, settings: RouterpathSettings
    ) -> None:
        results = processor.run(job, settings)

        assert [r.label for r in results] == ["outline", "hole", "cut_circle"]
        assert [r.ok for r in results] == [True, False, True]

        failed = results[1]
        assert failed.toolpath is None
        assert failed.error_type == "InvalidConfigurationError"
        assert "larger than the circle" in (failed.error or "")

    def test_stats(self, processor: JobProcessor, job: Job, settings: RouterpathSettings) -> None:
        results = processor.run(job, settings)

        stats = processor.stats
        assert stats.processed_count == 2
        assert stats.error_count == 1
        assert stats.errors[0][0] == "hole"
        assert stats.waypoint_count == sum(len(r.toolpath) for r in results if r.toolpath)
        assert stats.avg_operation_time_ms is not None

    def test_render(self, processor: JobProcessor, job: Job, settings: RouterpathSettings) -> None:
        gcode = processor.render(processor.run(job, settings), settings)
        lines = gcode.splitlines()

        assert lines[0] == "G20"
        assert lines[1] == "M4"
        assert "(outline)" in lines
        assert any(line.startswith("(hole skipped:") for line in lines)
        assert lines.count("G17") == 1
        assert lines[-2:] == ["M5", "M2"]
        assert "G1 X4.00000 Y0.00000 Z-1.00000 F60.00000" in lines

    def test_process_file(
        self,
        processor: JobProcessor,
        job: Job,
        settings: RouterpathSettings,
        tmp_path: Path,
    ) -> None:
        job_path = tmp_path / "part.json"
        data = job.to_dict()
        data["settings"] = settings.model_dump(mode="json")
        job_path.write_text(json.dumps(data), encoding="utf-8")

        stats = processor.process(job_path)

        output = tmp_path / "part.nc"
        assert output.exists()
        assert "(outline)" in output.read_text()
        assert stats.processed_count == 2
        assert stats.error_count == 1
        assert stats.duration_seconds >= 0

    def test_process_missing_file(self, processor: JobProcessor, tmp_path: Path) -> None:
        with pytest.raises(JobLoadError):
            processor.process(tmp_path / "missing.json")

    def test_empty_job(self, processor: JobProcessor, settings: RouterpathSettings) -> None:
        results = processor.run(Job(operations=[]), settings)
        assert results == []
        assert processor.render(results, settings).splitlines() == ["G20", "M4", "M5", "M2"]


class TestOperationResult:
    """Tests for OperationResult."""

    def test_failure(self) -> None:
        result = OperationResult(label="x", error_type="InvalidGeometryError", error="bad")
        assert not result.ok


class TestProcessingLogger:
    """Tests for logging setup and statistics."""

    def test_log_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "run.log"
        logger = configure_logging(log_file=log_file, quiet=True)
        processing_logger = ProcessingLogger(logger)

        processing_logger.log_operation_complete("outline", waypoints=12, duration_ms=1.5)
        processing_logger.log_operation_error("hole", "InvalidGeometryError", "bad")

        assert processing_logger.stats.processed_count == 1
        assert processing_logger.stats.waypoint_count == 12
        assert processing_logger.stats.errors == [("hole", "bad")]
        assert "Operation failed" in log_file.read_text(encoding="utf-8")

    def test_processor_uses_logging_config(self, tmp_path: Path) -> None:
        log_file = tmp_path / "job.log"
        JobProcessor(RouterpathSettings(logging=LoggingConfig(log_file=log_file)), quiet=True)
        assert log_file.exists()
