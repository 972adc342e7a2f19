"""
Content resolution: decide between supplied and freshly fetched content.
"""

import logging
from dataclasses import dataclass, replace

from .fetcher import ContentFetcher
from .models import ContentRecord, Entry
from .sanitizer import sanitize_title

logger = logging.getLogger(__name__)


@dataclass
class Fetched:
    record: ContentRecord


@dataclass
class FetchFailed:
    """The fetcher gave up; record may still hold status, headers or og data."""
    record: ContentRecord


FetchOutcome = Fetched | FetchFailed


class ContentResolver:
    """Picks the content an entry will be populated from."""

    def __init__(self, fetcher: ContentFetcher, fetch_error_message: str):
        self.fetcher = fetcher
        self.fetch_error_message = fetch_error_message

    def fetch(self, url: str) -> FetchOutcome:
        """Fetch url and classify the result. Never raises."""
        try:
            record = self.fetcher.fetch_content(url)
        except Exception as e:
            logger.warning(f"Fetcher raised for {url}: {e}")
            return FetchFailed(ContentRecord(url=url))

        record = replace(record, title=sanitize_title(record.title, record.content_type))

        if not record.html or record.html == self.fetch_error_message:
            return FetchFailed(replace(record, html=None))
        return Fetched(record)

    def resolve(
        self,
        entry: Entry,
        url: str,
        supplied: ContentRecord | None = None,
        disable_fetch: bool = False,
    ) -> ContentRecord:
        """
        Resolve the content for an entry.

        Args:
            entry: Entry being updated
            url: URL the entry was submitted with
            supplied: Content provided by the caller (e.g. an import)
            disable_fetch: Never hit the network

        Returns:
            The record to populate the entry from; its url is never empty
        """
        if not entry.url and url:
            entry.url = url

        supplied = supplied or ContentRecord()
        if supplied.html:
            supplied = replace(supplied, html=self.fetcher.cleanup_html(supplied.html, url))

        resolved = supplied
        if not supplied.is_usable() and not disable_fetch:
            outcome = self.fetch(url)
            if isinstance(outcome, FetchFailed) and not supplied.is_empty():
                # Imported data beats a failed refetch
                logger.info(f"Fetching {url} failed, keeping supplied content")
            else:
                resolved = outcome.record

        # Keep the url so the entry can be refetched later
        return replace(resolved, url=resolved.url or url)
