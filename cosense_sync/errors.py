"""Error types raised by the sync pipeline.

Every failure the pipeline can report is one of the ``SyncError`` subclasses
below; callers that need to branch on the kind of failure can match on the
class or on its ``tag``.
"""


class SyncError(Exception):
    """Base class for all sync pipeline failures."""

    tag: str = "SyncError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(SyncError):
    """Raised when configuration is invalid or missing."""

    tag = "ConfigurationError"


class PageExportError(SyncError):
    """Raised when the source project snapshot cannot be exported."""

    tag = "ExportError"

    def __init__(self, message: str, project: str):
        super().__init__(message)
        self.project = project

    def __str__(self) -> str:
        return f"Export from /{self.project} failed: {self.message}"


class PageImportError(SyncError):
    """Raised when a batch of pages cannot be imported.

    ``batch_number`` and ``total_batches`` are filled in by the batch
    importer once the failing batch is known.
    """

    tag = "ImportError"

    def __init__(
        self,
        message: str,
        project: str,
        batch_number: int | None = None,
        total_batches: int | None = None,
    ):
        super().__init__(message)
        self.project = project
        self.batch_number = batch_number
        self.total_batches = total_batches

    def __str__(self) -> str:
        where = f"Import into /{self.project}"
        if self.batch_number is not None:
            where += f" (batch {self.batch_number}/{self.total_batches})"
        return f"{where} failed: {self.message}"


class CheckpointReadError(SyncError):
    """Raised when the checkpoint file is missing or unparsable."""

    tag = "CheckpointReadError"

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path


class CheckpointWriteError(SyncError):
    """Raised when a new checkpoint cannot be persisted."""

    tag = "CheckpointWriteError"

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path
