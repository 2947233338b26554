"""Cosense client wrapper for the page-data export/import API."""

import json

import requests
import structlog
from pydantic import ValidationError
from requests.exceptions import RequestException

from cosense_sync.errors import PageExportError, PageImportError
from cosense_sync.models.page import Page, to_import_document
from cosense_sync.utils.retry import exponential_backoff_retry

log = structlog.stdlib.get_logger()

SESSION_COOKIE = "connect.sid"


class CosenseClient:
    """Thin wrapper around the Cosense REST endpoints used by the sync."""

    def __init__(
        self,
        base_url: str,
        sid: str,
        timeout: float = 60.0,
        session: requests.Session | None = None,
    ):
        """
        Initialize Cosense client.

        Args:
            base_url: Cosense service URL (e.g. https://scrapbox.io)
            sid: Value of the connect.sid session cookie
            timeout: Per-request timeout in seconds
            session: Optional preconfigured requests session
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session if session is not None else requests.Session()
        self._session.cookies.set(SESSION_COOKIE, sid)
        log.info("cosense_client_initialized", base_url=self._base_url)

    def export_pages(self, project: str) -> list[Page]:
        """
        Export every page of a project, including line metadata.

        Args:
            project: Source project name

        Returns:
            Pages in the order the service returned them

        Raises:
            PageExportError: If the request fails or the response is malformed
        """
        log.info("exporting_pages", project=project)

        try:
            body = self._fetch_export(project)
            pages = [Page.model_validate(raw) for raw in body["pages"]]
        except RequestException as e:
            log.error("export_request_failed", project=project, error=str(e))
            raise PageExportError(f"Export request failed: {e}", project) from e
        except (ValueError, KeyError, TypeError, ValidationError) as e:
            log.error("export_response_invalid", project=project, error=str(e))
            raise PageExportError(f"Malformed export response: {e}", project) from e

        log.info("pages_exported", project=project, page_count=len(pages))
        return pages

    @exponential_backoff_retry(max_retries=3, base_delay=1.0, max_delay=30.0)
    def get_csrf_token(self) -> str:
        """
        Fetch the CSRF token tied to the current session.

        Returns:
            Token to send as X-CSRF-TOKEN

        Raises:
            requests.RequestException: If the profile request fails after retries
            KeyError: If the profile has no csrfToken (not logged in)
        """
        response = self._session.get(f"{self._base_url}/api/users/me", timeout=self._timeout)
        response.raise_for_status()
        return response.json()["csrfToken"]

    def import_pages(self, project: str, pages: list[Page]) -> None:
        """
        Import pages into a project with a single multipart upload.

        The upload is not retried; callers treat it as one unit of work.

        Args:
            project: Destination project name
            pages: Pages to import, sent in the given order

        Raises:
            PageImportError: If the CSRF token or the upload fails
        """
        log.debug("importing_pages", project=project, page_count=len(pages))

        try:
            csrf_token = self.get_csrf_token()
        except (RequestException, ValueError, KeyError) as e:
            log.error("csrf_token_unavailable", project=project, error=str(e))
            raise PageImportError(f"Failed to get CSRF token: {e}", project) from e

        payload = json.dumps(to_import_document(pages), ensure_ascii=False).encode("utf-8")

        try:
            response = self._session.post(
                f"{self._base_url}/api/page-data/import/{project}.json",
                headers={
                    "X-CSRF-TOKEN": csrf_token,
                    "Accept": "application/json, text/plain, */*",
                },
                files={"import-file": ("import.json", payload, "application/octet-stream")},
                data={"name": "undefined"},
                timeout=self._timeout,
            )
        except RequestException as e:
            log.error("import_request_failed", project=project, error=str(e))
            raise PageImportError(f"Import request failed: {e}", project) from e

        if not response.ok:
            log.error(
                "import_rejected",
                project=project,
                status_code=response.status_code,
                body=response.text,
            )
            raise PageImportError(
                f"Import failed: {response.status_code} - {response.text}", project
            )

        log.debug("pages_imported", project=project, page_count=len(pages))

    @exponential_backoff_retry(max_retries=3, base_delay=1.0, max_delay=30.0)
    def _fetch_export(self, project: str) -> dict:
        response = self._session.get(
            f"{self._base_url}/api/page-data/export/{project}.json",
            params={"metadata": "true"},
            timeout=self._timeout,
        )
        response.raise_for_status()
        return response.json()
