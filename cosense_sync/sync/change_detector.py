"""Change detection against the last successful sync checkpoint."""

import structlog

from cosense_sync.models.page import Page

log = structlog.stdlib.get_logger()


class ChangeDetector:
    """Selects pages modified after a checkpoint."""

    def select_changes(self, pages: list[Page], since_timestamp: int) -> list[Page]:
        """
        Return pages whose ``updated`` is strictly greater than ``since_timestamp``.

        A page updated exactly at the checkpoint was the newest page of a
        previous run and is therefore already synced.

        Args:
            pages: Candidate pages
            since_timestamp: Checkpoint (epoch seconds)

        Returns:
            Changed pages, in input order
        """
        changed = [page for page in pages if page.updated > since_timestamp]

        log.info(
            "changes_detected",
            candidate_count=len(pages),
            changed_count=len(changed),
            since_timestamp=since_timestamp,
        )
        if changed:
            log.debug("changed_page_titles", titles=[page.title for page in changed])

        return changed

    @staticmethod
    def latest_update(pages: list[Page]) -> int:
        """
        Return the newest ``updated`` value among ``pages``.

        Raises:
            ValueError: If ``pages`` is empty
        """
        if not pages:
            raise ValueError("cannot compute latest update of an empty page list")
        return max(page.updated for page in pages)
