"""Logging utilities for Routerpath."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

# Marks the handlers installed by configure_logging so a second call replaces them
_HANDLER_NAME = "routerpath"


@dataclass
class ProcessingStats:
    """Statistics from a job run."""

    processed_count: int = 0
    error_count: int = 0
    waypoint_count: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    operation_timings_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_operation_time_ms(self) -> float | None:
        if not self.operation_timings_ms:
            return None
        return sum(self.operation_timings_ms) / len(self.operation_timings_ms)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in list(root_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.set_name(_HANDLER_NAME)
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.set_name(_HANDLER_NAME)
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("routerpath")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class ProcessingLogger:
    """Logger for tracking job progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_operation_start(self, label: str, kind: str) -> None:
        """Log start of operation processing."""
        self._logger.debug("Processing operation", operation=label, kind=kind)

    def log_operation_complete(
        self,
        label: str,
        waypoints: int,
        duration_ms: float,
    ) -> None:
        """Log successful operation processing."""
        self._logger.info(
            "Operation processed",
            operation=label,
            waypoints=waypoints,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_count += 1
        self._stats.waypoint_count += waypoints
        self._stats.operation_timings_ms.append(duration_ms)

    def log_operation_error(
        self,
        label: str,
        error_type: str,
        message: str,
    ) -> None:
        """Log operation processing error."""
        self._logger.error(
            "Operation failed",
            operation=label,
            error=message,
            error_type=error_type,
        )
        self._stats.error_count += 1
        self._stats.errors.append((label, message))

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
