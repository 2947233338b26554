"""Sequential, paced import of pages in fixed-size batches."""

import time
from typing import Callable, Sequence, TypeVar

import structlog

from cosense_sync.errors import ConfigurationError, PageImportError
from cosense_sync.models.page import Page
from cosense_sync.sync.models import BatchImportReport, BatchProgress

log = structlog.stdlib.get_logger()

T = TypeVar("T")

ImportBatch = Callable[[list[Page]], None]
ProgressCallback = Callable[[BatchProgress], None]


def partition(items: Sequence[T], batch_size: int) -> list[list[T]]:
    """
    Split ``items`` into contiguous batches of at most ``batch_size``.

    Only the last batch may be smaller. Concatenating the result gives back
    ``items`` unchanged.

    Raises:
        ConfigurationError: If ``batch_size`` is not positive
    """
    if batch_size <= 0:
        raise ConfigurationError(f"batch_size must be positive, got {batch_size}")
    return [list(items[start : start + batch_size]) for start in range(0, len(items), batch_size)]


class BatchImporter:
    """Imports pages one batch at a time, stopping at the first failed batch."""

    def __init__(
        self,
        batch_size: int = 100,
        delay_seconds: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
        on_progress: ProgressCallback | None = None,
    ):
        """
        Initialize batch importer.

        Args:
            batch_size: Maximum pages per import call
            delay_seconds: Pause between consecutive batches
            sleep: Function used for the pause
            on_progress: Optional callback invoked after every batch

        Raises:
            ConfigurationError: If ``batch_size`` is not positive
        """
        if batch_size <= 0:
            raise ConfigurationError(f"batch_size must be positive, got {batch_size}")
        if delay_seconds < 0:
            raise ConfigurationError(f"delay_seconds cannot be negative, got {delay_seconds}")

        self._batch_size = batch_size
        self._delay_seconds = delay_seconds
        self._sleep = sleep
        self._on_progress = on_progress

    @property
    def batch_size(self) -> int:
        return self._batch_size

    def partition(self, pages: Sequence[Page]) -> list[list[Page]]:
        return partition(pages, self._batch_size)

    def import_in_batches(self, pages: list[Page], import_batch: ImportBatch) -> BatchImportReport:
        """
        Import ``pages`` through ``import_batch``, one batch after another.

        Batches run in partition order with a pause between them (none after
        the last). The first ``PageImportError`` stops the run; it is
        re-raised with the failing batch's number and the batch count.

        Args:
            pages: Pages to import, in order
            import_batch: Imports one batch or raises ``PageImportError``

        Returns:
            BatchImportReport describing the completed batches

        Raises:
            PageImportError: If a batch fails
        """
        batches = self.partition(pages)

        if not batches:
            log.info("no_pages_to_import")
            return BatchImportReport()

        total_batches = len(batches)
        log.info(
            "batch_import_started",
            page_count=len(pages),
            batch_size=self._batch_size,
            total_batches=total_batches,
        )

        for batch_number, batch in enumerate(batches, start=1):
            log.info(
                "importing_batch",
                batch_number=batch_number,
                total_batches=total_batches,
                page_count=len(batch),
            )

            try:
                import_batch(batch)
            except PageImportError as e:
                e.batch_number = batch_number
                e.total_batches = total_batches
                log.error(
                    "batch_import_failed",
                    batch_number=batch_number,
                    total_batches=total_batches,
                    page_count=len(batch),
                    project=e.project,
                    error=e.message,
                )
                self._report(batch_number, total_batches, len(batch), succeeded=False)
                raise

            log.info(
                "batch_imported",
                batch_number=batch_number,
                total_batches=total_batches,
                page_count=len(batch),
            )
            self._report(batch_number, total_batches, len(batch), succeeded=True)

            if batch_number < total_batches:
                self._sleep(self._delay_seconds)

        log.info("batch_import_completed", page_count=len(pages), total_batches=total_batches)

        return BatchImportReport(
            total_pages=len(pages),
            total_batches=total_batches,
            batch_sizes=[len(batch) for batch in batches],
        )

    def _report(self, batch_number: int, total_batches: int, page_count: int, succeeded: bool) -> None:
        if self._on_progress is None:
            return
        self._on_progress(
            BatchProgress(
                batch_number=batch_number,
                total_batches=total_batches,
                page_count=page_count,
                succeeded=succeeded,
            )
        )
