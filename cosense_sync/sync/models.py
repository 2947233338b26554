"""Data models for synchronization operations."""

from datetime import datetime

from pydantic import BaseModel, Field


class BatchProgress(BaseModel):
    """Outcome of a single import batch, reported before the next one starts."""

    batch_number: int = Field(..., ge=1, description="1-based position of the batch")
    total_batches: int = Field(..., ge=1, description="Number of batches in the run")
    page_count: int = Field(..., ge=1, description="Pages in this batch")
    succeeded: bool = Field(..., description="Whether the batch was imported")


class BatchImportReport(BaseModel):
    """Summary of a completed batch import."""

    total_pages: int = Field(default=0, ge=0, description="Pages imported")
    total_batches: int = Field(default=0, ge=0, description="Import calls made")
    batch_sizes: list[int] = Field(
        default_factory=list, description="Size of each batch, in import order"
    )


class SyncReport(BaseModel):
    """Report of a successful synchronization run."""

    source_project: str = Field(..., description="Project pages were exported from")
    destination_project: str = Field(..., description="Project pages were imported into")
    pages_exported: int = Field(default=0, ge=0, description="Pages in the source snapshot")
    pages_excluded: int = Field(default=0, ge=0, description="Pages dropped by the exclusion marker")
    pages_selected: int = Field(default=0, ge=0, description="Pages changed since the checkpoint")
    pages_imported: int = Field(default=0, ge=0, description="Pages imported into the destination")
    batches: int = Field(default=0, ge=0, description="Import calls made")
    previous_checkpoint: int = Field(..., ge=0, description="Checkpoint read at the start of the run")
    new_checkpoint: int = Field(..., ge=0, description="Checkpoint after the run")
    start_time: datetime = Field(..., description="Sync start timestamp")
    end_time: datetime = Field(..., description="Sync end timestamp")
    duration_seconds: float = Field(default=0.0, ge=0.0, description="Sync duration in seconds")

    @property
    def has_changes(self) -> bool:
        """Check if the run found anything to import."""
        return self.pages_selected > 0

    @property
    def checkpoint_advanced(self) -> bool:
        return self.new_checkpoint > self.previous_checkpoint
