"""Exclusion of pages that must never leave the source project."""

import structlog

from cosense_sync.errors import ConfigurationError
from cosense_sync.models.config import DEFAULT_EXCLUSION_MARKER
from cosense_sync.models.page import Page

log = structlog.stdlib.get_logger()


class ExclusionFilter:
    """Drops pages carrying a marker such as ``[private.icon]`` on any line."""

    def __init__(self, marker: str = DEFAULT_EXCLUSION_MARKER):
        if not marker:
            raise ConfigurationError("exclusion marker cannot be empty")
        self._marker = marker

    @property
    def marker(self) -> str:
        return self._marker

    def is_excluded(self, page: Page) -> bool:
        """Return True if any line of ``page`` contains the marker."""
        return page.contains_text(self._marker)

    def filter_pages(self, pages: list[Page]) -> list[Page]:
        """
        Remove excluded pages, keeping the order of the rest.

        Args:
            pages: Exported pages

        Returns:
            Pages eligible for replication
        """
        kept = [page for page in pages if not self.is_excluded(page)]

        log.info(
            "pages_filtered",
            marker=self._marker,
            input_count=len(pages),
            excluded_count=len(pages) - len(kept),
        )
        return kept
