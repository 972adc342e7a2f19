"""
Entry populator: copy resolved content and derived metadata onto an entry.
"""

import logging
from datetime import datetime

from .metadata import (
    FieldResult,
    check_picture_url,
    default_title,
    domain_name,
    is_image_content_type,
    normalize_language,
    parse_published_at,
    reading_time,
)
from .models import ContentRecord, Entry
from .tagging import Tagger
from .url_canonicalizer import UrlCanonicalizer

logger = logging.getLogger(__name__)

SHORT_DESCRIPTION_LABEL = "<p><i>But we found a short description: </i></p>"


class EntryPopulator:
    """Fills an entry from a ContentRecord. Never raises for bad content."""

    def __init__(
        self,
        canonicalizer: UrlCanonicalizer,
        tagger: Tagger,
        fetch_error_message: str,
        store_article_headers: bool = False,
        reading_speed: int = 200,
    ):
        self.canonicalizer = canonicalizer
        self.tagger = tagger
        self.fetch_error_message = fetch_error_message
        self.store_article_headers = store_article_headers
        self.reading_speed = reading_speed

    def populate(self, entry: Entry, record: ContentRecord, reading_speed: int | None = None) -> None:
        self.canonicalizer.canonicalize(entry, record.url)
        self.set_entry_domain_name(entry)

        if record.title:
            entry.title = record.title
        elif record.og_title:
            entry.title = record.og_title

        html = record.html
        if html is None:
            html = self.fetch_error_message
            if record.og_description:
                html += SHORT_DESCRIPTION_LABEL + record.og_description

        entry.content = html
        entry.reading_time = reading_time(html, reading_speed or self.reading_speed)

        if record.status:
            entry.http_status = str(record.status)

        if record.authors and isinstance(record.authors, list):
            entry.published_by = record.authors

        if record.all_headers and self.store_article_headers:
            entry.headers = record.all_headers

        if record.date:
            self.update_published_at(entry, record.date)

        if record.language:
            self.update_language(entry, record.language)

        if record.og_image:
            self.update_preview_picture(entry, record.og_image)
        elif is_image_content_type(record.content_type):
            # The document itself is the picture
            entry.preview_picture = record.url

        if record.content_type:
            entry.mimetype = record.content_type

        try:
            self.tagger.tag(entry)
        except Exception as e:
            logger.error(f"Error while trying to automatically tag an entry. url={entry.url} error={e}")

    def set_entry_domain_name(self, entry: Entry) -> None:
        host = domain_name(entry.url)
        if host:
            entry.domain_name = host

    def update_language(self, entry: Entry, value: str) -> None:
        self._apply(entry, "language", normalize_language(value))

    def update_preview_picture(self, entry: Entry, value: str) -> None:
        self._apply(entry, "preview_picture", check_picture_url(value))

    def update_published_at(self, entry: Entry, value: str | int | float | datetime) -> None:
        result = parse_published_at(value)
        if not result.ok:
            result.error = f"{result.error} (url={entry.url}, date={value!r})"
        self._apply(entry, "published_at", result)

    def set_default_entry_title(self, entry: Entry) -> None:
        """Title from the url basename, or the host when the path is empty."""
        entry.title = default_title(entry.url)

    def _apply(self, entry: Entry, field_name: str, result: FieldResult) -> None:
        if result.ok:
            setattr(entry, field_name, result.value)
        else:
            logger.warning(result.error)
