"""Job reader for loading JSON job files.

This module provides the JobReader class for loading a job file and
converting it into settings and domain models.

A job file looks like:

    {
        "name": "sign",
        "settings": {
            "cut": {"bit_diameter": 0.125, "pass_depth": 0.125,
                    "stepover": 0.5, "feedrate": 60},
            "tabs": {"width": 0.25, "height": 0.0625},
            "gcode": {"units": "inch", "safe_z": 0.5}
        },
        "operations": [
            {"kind": "cut_circle", "center": [2, 2], "radius": 1, "depth": 0.25}
        ]
    }
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from routerpath.config import RouterpathSettings
from routerpath.domain import Job
from routerpath.exceptions import JobLoadError


class JobReader:
    """Loads job files.

    Example:
        with JobReader(Path("part.json")) as reader:
            for operation in reader.job.operations:
                print(operation.label)
    """

    def __init__(self, job_path: Path) -> None:
        """Initialize the job reader.

        Args:
            job_path: Path to the JSON job file
        """
        self._job_path = job_path
        self._settings: RouterpathSettings | None = None
        self._job: Job | None = None

    def load(self) -> None:
        """Load and validate the job file.

        Raises:
            JobLoadError: If the file is missing, is not valid JSON, or
                describes invalid settings or operations
        """
        if not self._job_path.exists():
            raise JobLoadError(str(self._job_path), "file not found")

        try:
            data = json.loads(self._job_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise JobLoadError(str(self._job_path), str(e)) from e

        self._settings, self._job = self.parse(data, str(self._job_path))

    @staticmethod
    def parse(data: Any, source: str = "<memory>") -> tuple[RouterpathSettings, Job]:
        """Convert decoded JSON into settings and a job.

        Raises:
            JobLoadError: If the content is invalid
        """
        if not isinstance(data, dict):
            raise JobLoadError(source, "top level must be an object")

        try:
            settings = RouterpathSettings.model_validate(data.get("settings", {}))
        except ValidationError as e:
            raise JobLoadError(source, f"invalid settings: {e}") from e

        try:
            job = Job.from_dict(data)
        except (KeyError, ValueError, TypeError) as e:
            raise JobLoadError(source, f"invalid operation: {e!r}") from e

        return settings, job

    @property
    def settings(self) -> RouterpathSettings:
        """Return the job settings.

        Raises:
            RuntimeError: If the job has not been loaded yet
        """
        if self._settings is None:
            raise RuntimeError("Job not loaded. Call load() first.")
        return self._settings

    @property
    def job(self) -> Job:
        """Return the job operations.

        Raises:
            RuntimeError: If the job has not been loaded yet
        """
        if self._job is None:
            raise RuntimeError("Job not loaded. Call load() first.")
        return self._job

    @property
    def operation_count(self) -> int:
        return len(self.job.operations)

    def close(self) -> None:
        """Forget the loaded job."""
        self._settings = None
        self._job = None

    def __enter__(self) -> "JobReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
