"""Exception hierarchy for Routerpath."""


class RouterpathError(Exception):
    """Base exception for all Routerpath errors."""

    pass


class GeometryError(RouterpathError):
    """Errors in geometric input or calculations."""

    pass


class InvalidGeometryError(GeometryError):
    """Degenerate shape (too few vertices, zero radius, ...)."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class EmptyInputError(GeometryError):
    """An operation received an empty point set."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Empty point set given to {operation}")


class TriangulationError(GeometryError):
    """The triangulation service could not split the polygon."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Triangulation failed: {reason}")


class ConfigurationError(RouterpathError):
    """Errors related to cutting parameters."""

    pass


class InvalidConfigurationError(ConfigurationError):
    """Cutting parameters that cannot produce a toolpath."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class JobError(RouterpathError):
    """Errors related to job loading or G-code saving."""

    pass


class JobLoadError(JobError):
    """Error loading a job file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load job '{path}': {reason}")


class GCodeSaveError(JobError):
    """Error saving a G-code file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save G-code '{path}': {reason}")
