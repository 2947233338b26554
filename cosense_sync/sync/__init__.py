"""Synchronization components for incremental page replication."""

from cosense_sync.sync.batch_importer import BatchImporter, partition
from cosense_sync.sync.change_detector import ChangeDetector
from cosense_sync.sync.exclusion_filter import ExclusionFilter
from cosense_sync.sync.models import BatchImportReport, BatchProgress, SyncReport
from cosense_sync.sync.sync_coordinator import SyncCoordinator
from cosense_sync.sync.timestamp_tracker import CheckpointStore, TimestampTracker

__all__ = [
    "BatchImporter",
    "BatchImportReport",
    "BatchProgress",
    "ChangeDetector",
    "CheckpointStore",
    "ExclusionFilter",
    "SyncCoordinator",
    "SyncReport",
    "TimestampTracker",
    "partition",
]
