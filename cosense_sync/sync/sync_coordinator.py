"""Synchronization coordinator for orchestrating incremental replication."""

from datetime import datetime, timezone

import structlog

from cosense_sync.errors import SyncError
from cosense_sync.ingestion.cosense_client import CosenseClient
from cosense_sync.models.config import AppConfig
from cosense_sync.models.page import Page
from cosense_sync.sync.batch_importer import BatchImporter, ProgressCallback
from cosense_sync.sync.change_detector import ChangeDetector
from cosense_sync.sync.exclusion_filter import ExclusionFilter
from cosense_sync.sync.models import SyncReport
from cosense_sync.sync.timestamp_tracker import CheckpointStore, TimestampTracker

log = structlog.stdlib.get_logger()


class SyncCoordinator:
    """Orchestrates one-way incremental sync from a source to a destination project."""

    def __init__(
        self,
        client: CosenseClient,
        checkpoint_store: CheckpointStore,
        source_project: str,
        destination_project: str,
        exclusion_filter: ExclusionFilter | None = None,
        change_detector: ChangeDetector | None = None,
        batch_importer: BatchImporter | None = None,
    ):
        """
        Initialize sync coordinator.

        Args:
            client: Client used for both export and import
            checkpoint_store: Where the last synced timestamp lives
            source_project: Project to export from
            destination_project: Project to import into
            exclusion_filter: Optional filter (defaults to the private icon marker)
            change_detector: Optional change detector
            batch_importer: Optional batch importer (defaults to 100 pages, 1s apart)
        """
        self._client = client
        self._checkpoint_store = checkpoint_store
        self._source_project = source_project
        self._destination_project = destination_project
        self._exclusion_filter = exclusion_filter or ExclusionFilter()
        self._change_detector = change_detector or ChangeDetector()
        self._batch_importer = batch_importer or BatchImporter()

        log.info(
            "sync_coordinator_initialized",
            source_project=source_project,
            destination_project=destination_project,
        )

    @classmethod
    def from_config(
        cls, config: AppConfig, on_progress: ProgressCallback | None = None
    ) -> "SyncCoordinator":
        """Wire a coordinator and its collaborators from application config."""
        client = CosenseClient(
            base_url=str(config.cosense.base_url),
            sid=config.cosense.sid,
            timeout=config.cosense.timeout_seconds,
        )
        return cls(
            client=client,
            checkpoint_store=TimestampTracker(
                config.sync.checkpoint_file, config.sync.initial_checkpoint
            ),
            source_project=config.cosense.source_project,
            destination_project=config.cosense.destination_project,
            exclusion_filter=ExclusionFilter(config.sync.exclusion_marker),
            batch_importer=BatchImporter(
                batch_size=config.sync.batch_size,
                delay_seconds=config.sync.batch_delay_seconds,
                on_progress=on_progress,
            ),
        )

    def run(self) -> SyncReport:
        """
        Perform one incremental sync run.

        This method:
        1. Exports the full source snapshot
        2. Drops pages carrying the exclusion marker
        3. Keeps pages updated after the stored checkpoint
        4. Imports them in paced batches
        5. Advances the checkpoint to the newest imported page

        The checkpoint is only written after every batch succeeded, so a
        failed run can simply be re-run.

        Returns:
            SyncReport with run statistics

        Raises:
            SyncError: If export, import or the checkpoint write fails
        """
        start_time = datetime.now(timezone.utc)
        log.info(
            "sync_started",
            source_project=self._source_project,
            destination_project=self._destination_project,
        )

        try:
            report = self._run(start_time)
        except SyncError as e:
            log.error(
                "sync_failed",
                error_type=e.tag,
                error=str(e),
                source_project=self._source_project,
                destination_project=self._destination_project,
                duration_seconds=(datetime.now(timezone.utc) - start_time).total_seconds(),
            )
            raise

        log.info(
            "sync_completed",
            pages_imported=report.pages_imported,
            batches=report.batches,
            previous_checkpoint=report.previous_checkpoint,
            new_checkpoint=report.new_checkpoint,
            duration_seconds=report.duration_seconds,
        )
        return report

    def _run(self, start_time: datetime) -> SyncReport:
        pages = self._client.export_pages(self._source_project)
        eligible = self._exclusion_filter.filter_pages(pages)

        previous_checkpoint = self._checkpoint_store.load_checkpoint()
        changed = self._change_detector.select_changes(eligible, previous_checkpoint)

        counts = {
            "pages_exported": len(pages),
            "pages_excluded": len(pages) - len(eligible),
            "pages_selected": len(changed),
        }

        if not changed:
            log.info("no_new_pages_to_import", checkpoint=previous_checkpoint)
            return self._report(start_time, previous_checkpoint, previous_checkpoint, **counts)

        log.info("new_pages_found", page_count=len(changed))

        batch_report = self._batch_importer.import_in_batches(changed, self._import_batch)

        # Never move the checkpoint backwards.
        new_checkpoint = max(previous_checkpoint, self._change_detector.latest_update(changed))
        self._checkpoint_store.save_checkpoint(new_checkpoint)

        return self._report(
            start_time,
            previous_checkpoint,
            new_checkpoint,
            pages_imported=batch_report.total_pages,
            batches=batch_report.total_batches,
            **counts,
        )

    def _import_batch(self, batch: list[Page]) -> None:
        self._client.import_pages(self._destination_project, batch)

    def _report(
        self,
        start_time: datetime,
        previous_checkpoint: int,
        new_checkpoint: int,
        **counts: int,
    ) -> SyncReport:
        end_time = datetime.now(timezone.utc)
        return SyncReport(
            source_project=self._source_project,
            destination_project=self._destination_project,
            previous_checkpoint=previous_checkpoint,
            new_checkpoint=new_checkpoint,
            start_time=start_time,
            end_time=end_time,
            duration_seconds=(end_time - start_time).total_seconds(),
            **counts,
        )
