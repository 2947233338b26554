"""Data models for the Cosense sync pipeline."""

from cosense_sync.models.config import (
    INITIAL_CHECKPOINT,
    AppConfig,
    CosenseConfig,
    LoggingConfig,
    SyncConfig,
)
from cosense_sync.models.page import Page, PageLine, to_import_document

__all__ = [
    "Page",
    "PageLine",
    "to_import_document",
    "AppConfig",
    "CosenseConfig",
    "LoggingConfig",
    "SyncConfig",
    "INITIAL_CHECKPOINT",
]
