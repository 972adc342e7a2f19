"""
Domain models - dataclasses for entries and the content used to fill them.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime


@dataclass(eq=False)
class Tag:
    label: str

    @property
    def slug(self) -> str:
        return re.sub(r"[^\w]+", "-", self.label.strip().lower()).strip("-")


@dataclass
class OpenGraph:
    """Open Graph fallbacks found in a page."""
    og_title: str | None = None
    og_description: str | None = None
    og_image: str | None = None


@dataclass
class ContentRecord:
    """
    Article data fetched from the web or supplied by an importer.

    `html` is None when the fetch failed; the populator then stores the
    configured error message instead.
    """
    url: str = ""
    title: str | None = None
    html: str | None = None
    content_type: str | None = None
    language: str | None = None
    date: str | int | float | datetime | None = None
    authors: list[str] | None = None
    status: str | None = None
    all_headers: dict[str, str] | None = None
    open_graph: OpenGraph | None = None

    def is_empty(self) -> bool:
        """True when nothing at all was supplied."""
        return not any([
            self.url, self.title, self.html, self.content_type, self.language,
            self.date, self.authors, self.status, self.all_headers, self.open_graph,
        ])

    def is_usable(self) -> bool:
        """A record with title, html and url needs no fetching."""
        return bool(self.title and self.html and self.url)

    @property
    def og_title(self) -> str | None:
        return self.open_graph.og_title if self.open_graph else None

    @property
    def og_description(self) -> str | None:
        return self.open_graph.og_description if self.open_graph else None

    @property
    def og_image(self) -> str | None:
        return self.open_graph.og_image if self.open_graph else None


@dataclass
class Entry:
    url: str = ""
    title: str | None = None
    content: str | None = None
    origin_url: str | None = None
    reading_time: int = 0
    domain_name: str | None = None
    language: str | None = None
    preview_picture: str | None = None
    http_status: str | None = None
    published_at: datetime | None = None
    published_by: list[str] | None = None
    headers: dict[str, str] | None = None
    mimetype: str | None = None
    tags: list[Tag] = field(default_factory=list)

    def add_tag(self, tag: Tag) -> None:
        """Attach a tag unless one with the same label is already there."""
        if any(existing is tag or existing.label == tag.label for existing in self.tags):
            return
        self.tags.append(tag)

    def remove_tag(self, tag: Tag) -> None:
        self.tags = [existing for existing in self.tags if existing.label != tag.label]

    def remove_all_tags(self) -> None:
        self.tags = []

    def serialized_tags(self) -> list[str]:
        return [tag.label for tag in self.tags]
