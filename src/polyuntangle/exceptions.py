"""Exception hierarchy for Polyuntangle."""


class PolyuntangleError(Exception):
    """Base exception for all Polyuntangle errors."""

    pass


class GeometryError(PolyuntangleError):
    """Errors in geometric input or calculations."""

    pass


class InvalidPathError(GeometryError):
    """Path does not satisfy the preconditions of an operation."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class PathFileError(PolyuntangleError):
    """Errors related to reading or writing path files."""

    pass


class PathLoadError(PathFileError):
    """Error loading a path file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load paths from '{path}': {reason}")


class PathFormatError(PathFileError):
    """Path file content has an unsupported structure."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid path file '{path}': {details}")


class ResultSaveError(PathFileError):
    """Error saving decomposition results."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save results to '{path}': {reason}")


class ProcessingCancelledError(PolyuntangleError):
    """Processing was cancelled by user."""

    def __init__(self, processed_count: int, pending_count: int) -> None:
        self.processed_count = processed_count
        self.pending_count = pending_count
        super().__init__(
            f"Processing cancelled: {processed_count} completed, {pending_count} pending"
        )
