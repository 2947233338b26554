"""Configuration models for the Cosense sync pipeline."""

from pydantic import BaseModel, Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

INITIAL_CHECKPOINT = 1745842021
DEFAULT_EXCLUSION_MARKER = "[private.icon]"


class CosenseConfig(BaseModel):
    """Connection settings for the source and destination projects."""

    sid: str = Field(default=..., min_length=1, description="connect.sid session cookie value")
    source_project: str = Field(default=..., min_length=1, description="Project to export from")
    destination_project: str = Field(
        default=..., min_length=1, description="Project to import into"
    )
    base_url: HttpUrl = Field(
        default="https://scrapbox.io", validate_default=True, description="Cosense service URL"
    )
    timeout_seconds: float = Field(default=60.0, gt=0, description="HTTP request timeout")


class SyncConfig(BaseModel):
    """Settings for the incremental sync pipeline."""

    batch_size: int = Field(default=100, ge=1, description="Maximum pages per import call")
    batch_delay_seconds: float = Field(
        default=1.0, ge=0.0, description="Pause between consecutive import calls"
    )
    checkpoint_file: str = Field(
        default="last_import.txt", description="File holding the last synced timestamp"
    )
    initial_checkpoint: int = Field(
        default=INITIAL_CHECKPOINT, ge=0, description="Checkpoint seeded on the first run"
    )
    exclusion_marker: str = Field(
        default=DEFAULT_EXCLUSION_MARKER,
        min_length=1,
        description="Pages with a line containing this text are never synced",
    )


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    json_logs: bool = Field(
        default=False,
        description="If True, output JSON logs. If False, use console format.",
    )
    log_file: str | None = Field(
        default=None,
        description="Optional path to log file. If None, logs only to stdout.",
    )


class AppConfig(BaseSettings):
    """Main application configuration.

    Values passed explicitly win; anything left out is read from ``APP_``
    prefixed environment variables (``APP_SYNC__BATCH_SIZE=50``).
    """

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    cosense: CosenseConfig
    sync: SyncConfig = Field(default_factory=SyncConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
