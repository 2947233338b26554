"""Pydantic models for Cosense pages and their lines."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PageLine(BaseModel):
    """A single line of a page, in display order."""

    model_config = ConfigDict(extra="allow")

    text: str = Field(default=..., description="Raw line text")
    created: int | None = Field(default=None, ge=0, description="Line creation time (epoch seconds)")
    updated: int | None = Field(default=None, ge=0, description="Line update time (epoch seconds)")


class Page(BaseModel):
    """Represents a Cosense page snapshot as returned by the export endpoint.

    Fields the exporter returns but the pipeline never inspects (``id``,
    ``views``, per-line ``userId``...) are kept as extras so the page can be
    re-imported exactly as it was exported.
    """

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "title": "Getting Started",
                "created": 1745842000,
                "updated": 1745842022,
                "lines": [
                    {"text": "Getting Started", "created": 1745842000, "updated": 1745842000},
                    {"text": "Welcome to the project", "created": 1745842000, "updated": 1745842022},
                ],
            }
        },
    )

    title: str = Field(default=..., min_length=1, description="Page title, unique per project")
    lines: list[PageLine] = Field(default=..., description="Ordered page lines")
    updated: int = Field(default=..., ge=0, description="Last modification time (epoch seconds)")
    created: int | None = Field(default=None, ge=0, description="Creation time (epoch seconds)")

    def contains_text(self, needle: str) -> bool:
        """Return True if any line contains ``needle``; stops at the first hit."""
        return any(needle in line.text for line in self.lines)

    def to_import_payload(self) -> dict[str, Any]:
        """Serialize the page for the import endpoint, lines in original order."""
        return self.model_dump(mode="json", exclude_unset=True)


def to_import_document(pages: list[Page]) -> dict[str, Any]:
    """Build the ``{"pages": [...]}`` document accepted by the import endpoint.

    Args:
        pages: Pages to include, in order

    Returns:
        JSON-serializable import document
    """
    return {"pages": [page.to_import_payload() for page in pages]}
