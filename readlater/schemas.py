"""
Pydantic models for content supplied by callers (imports, API clients).
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .exceptions import ContentValidationError
from .models import ContentRecord, OpenGraph


class OpenGraphData(BaseModel):
    """og_* values as found in imported data."""
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    og_title: str | None = None
    og_description: str | None = None
    og_image: str | None = None


class SuppliedContent(BaseModel):
    """Loose mapping shape produced by importers."""
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    url: str | None = None
    title: str | None = None
    html: str | None = None
    content_type: str | None = None
    language: str | None = None
    date: datetime | int | float | str | None = None
    authors: list[str] | None = None
    status: str | None = None
    all_headers: dict[str, str] | None = None
    open_graph: OpenGraphData | None = None

    @field_validator("html", mode="before")
    @classmethod
    def false_means_missing(cls, value):
        # Importers mark unreadable content with False
        return None if value is False else value

    @field_validator("status", mode="before")
    @classmethod
    def status_as_text(cls, value):
        # Keep codes like "200" as text
        return str(value) if isinstance(value, int) else value

    @field_validator("authors", mode="before")
    @classmethod
    def authors_list_only(cls, value):
        return value if isinstance(value, list) else None

    def to_record(self) -> ContentRecord:
        og = None
        if self.open_graph:
            og = OpenGraph(
                og_title=self.open_graph.og_title,
                og_description=self.open_graph.og_description,
                og_image=self.open_graph.og_image,
            )
        return ContentRecord(
            url=self.url or "",
            title=self.title,
            html=self.html,
            content_type=self.content_type,
            language=self.language,
            date=self.date,
            authors=self.authors,
            status=self.status,
            all_headers=self.all_headers,
            open_graph=og,
        )


def parse_supplied_content(data: dict | None) -> ContentRecord:
    """
    Convert an importer mapping into a ContentRecord.

    Raises:
        ContentValidationError: If the mapping has the wrong shape
    """
    if not data:
        return ContentRecord()
    try:
        return SuppliedContent.model_validate(data).to_record()
    except ValidationError as e:
        raise ContentValidationError(f"Invalid supplied content: {e}") from e
