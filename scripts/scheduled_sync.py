#!/usr/bin/env python3
"""
Scheduled synchronization script for Cosense projects.

Copies pages that changed since the last successful run from the source
project to the destination project. Pages carrying the exclusion marker
(``[private.icon]`` by default) are never copied.

Configuration comes from the environment:
    SID                       connect.sid session cookie
    SOURCE_PROJECT_NAME       project to export from
    DESTINATION_PROJECT_NAME  project to import into
    APP_SYNC__*, APP_LOGGING__*  optional overrides (see cosense_sync.models.config)

Designed to be run on a schedule (cron, CI). Runs must not overlap.

Usage:
    python scripts/scheduled_sync.py
"""

import sys

import structlog

from cosense_sync.errors import SyncError
from cosense_sync.sync.models import BatchProgress, SyncReport
from cosense_sync.sync.sync_coordinator import SyncCoordinator
from cosense_sync.utils.config_loader import ConfigLoader
from cosense_sync.utils.logging_config import configure_logging

log = structlog.stdlib.get_logger()


def print_progress(progress: BatchProgress) -> None:
    mark = "✓" if progress.succeeded else "✗"
    print(
        f"{mark} Batch {progress.batch_number}/{progress.total_batches} "
        f"({progress.page_count} pages)"
    )


def print_summary(report: SyncReport) -> None:
    print("\n" + "=" * 60)
    print("SYNCHRONIZATION SUMMARY")
    print("=" * 60)
    print(f"Source: /{report.source_project}")
    print(f"Destination: /{report.destination_project}")
    print(f"Pages Exported: {report.pages_exported}")
    print(f"Pages Excluded: {report.pages_excluded}")
    print(f"Pages Imported: {report.pages_imported}")
    print(f"Batches: {report.batches}")
    print(f"Checkpoint: {report.previous_checkpoint} -> {report.new_checkpoint}")
    print(f"Duration: {report.duration_seconds:.2f} seconds")
    print("=" * 60)


def perform_sync() -> SyncReport:
    """
    Load configuration and run one sync.

    Raises:
        SyncError: If configuration is missing or the run fails
    """
    config = ConfigLoader().load_config()

    configure_logging(
        log_level=config.logging.log_level,
        json_logs=config.logging.json_logs,
        log_file=config.logging.log_file,
    )

    coordinator = SyncCoordinator.from_config(config, on_progress=print_progress)
    return coordinator.run()


def main() -> int:
    """Main entry point for scheduled sync script."""
    configure_logging()

    try:
        report = perform_sync()
    except SyncError as e:
        log.error("sync_aborted", error_type=e.tag, error=str(e))
        print(f"Status: ✗ FAILED ({e.tag})\nError: {e}", file=sys.stderr)
        return 1

    if report.has_changes:
        print_summary(report)
    else:
        print("No new pages to import.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
