"""Timestamp tracking for maintaining synchronization state."""

import os
import tempfile
from pathlib import Path
from typing import Protocol

import structlog

from cosense_sync.errors import CheckpointReadError, CheckpointWriteError
from cosense_sync.models.config import INITIAL_CHECKPOINT

log = structlog.stdlib.get_logger()


class CheckpointStore(Protocol):
    """Read/write access to the last successful sync timestamp."""

    def load_checkpoint(self) -> int: ...

    def save_checkpoint(self, timestamp: int) -> None: ...


class TimestampTracker:
    """Keeps the sync checkpoint in a small text file holding one integer."""

    def __init__(self, path: str | Path, initial_checkpoint: int = INITIAL_CHECKPOINT):
        """
        Initialize timestamp tracker.

        Args:
            path: Checkpoint file location
            initial_checkpoint: Value seeded when no usable checkpoint exists
        """
        if initial_checkpoint < 0:
            raise ValueError(f"initial_checkpoint cannot be negative, got {initial_checkpoint}")
        self._path = Path(path)
        self._initial_checkpoint = initial_checkpoint

    @property
    def path(self) -> Path:
        return self._path

    def load_checkpoint(self) -> int:
        """
        Load the checkpoint, seeding it on the first run.

        A missing or unparsable file is treated as a first run: the initial
        checkpoint is written immediately and returned.

        Returns:
            Checkpoint (epoch seconds)

        Raises:
            CheckpointWriteError: If the initial checkpoint cannot be written
        """
        try:
            checkpoint = self._read_checkpoint_file()
        except CheckpointReadError as e:
            log.warning(
                "checkpoint_unavailable",
                path=str(self._path),
                error=e.message,
                initial_checkpoint=self._initial_checkpoint,
            )
            self.save_checkpoint(self._initial_checkpoint)
            return self._initial_checkpoint

        log.info("checkpoint_loaded", path=str(self._path), checkpoint=checkpoint)
        return checkpoint

    def save_checkpoint(self, timestamp: int) -> None:
        """
        Persist a new checkpoint, replacing the previous one atomically.

        Args:
            timestamp: New checkpoint (epoch seconds)

        Raises:
            ValueError: If ``timestamp`` is negative
            CheckpointWriteError: If the file cannot be written
        """
        if timestamp < 0:
            raise ValueError(f"checkpoint cannot be negative, got {timestamp}")

        directory = self._path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=f".{self._path.name}.")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(str(timestamp))
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            log.error("failed_to_save_checkpoint", path=str(self._path), error=str(e))
            raise CheckpointWriteError(f"Failed to write checkpoint: {e}", str(self._path)) from e

        log.info("checkpoint_saved", path=str(self._path), checkpoint=timestamp)

    def _read_checkpoint_file(self) -> int:
        try:
            content = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CheckpointReadError(f"Failed to read checkpoint: {e}", str(self._path)) from e

        try:
            checkpoint = int(content.strip())
        except ValueError as e:
            raise CheckpointReadError(
                f"Checkpoint is not an integer: {content!r}", str(self._path)
            ) from e

        if checkpoint < 0:
            raise CheckpointReadError(f"Checkpoint is negative: {checkpoint}", str(self._path))
        return checkpoint
