"""Shared utilities for configuration, logging, and retries"""

from cosense_sync.utils.config_loader import ConfigLoader
from cosense_sync.utils.logging_config import configure_logging
from cosense_sync.utils.retry import exponential_backoff_retry

__all__ = ["ConfigLoader", "configure_logging", "exponential_backoff_retry"]
