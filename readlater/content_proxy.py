"""
Content proxy: the single entry point that fills an entry for a URL.

Combines content resolution (fetched vs. supplied content) with the entry
populator. All effects are mutations of the given entry.
"""

import logging
from typing import Any, Mapping

from .config import Config, IngestionSettings, config
from .fetcher import ContentFetcher
from .models import ContentRecord, Entry
from .populator import EntryPopulator
from .resolver import ContentResolver
from .schemas import parse_supplied_content
from .tagging import RuleBasedTagger, Tagger
from .url_canonicalizer import UrlCanonicalizer, UrlIgnoreList

logger = logging.getLogger(__name__)


class ContentProxy:
    """Gets content for a URL and updates an entry with what it found."""

    def __init__(
        self,
        fetcher: ContentFetcher,
        tagger: Tagger | None = None,
        settings: IngestionSettings | None = None,
    ):
        self.settings = settings or IngestionSettings.from_config()
        self.fetcher = fetcher
        self.tagger = tagger or RuleBasedTagger()
        self.resolver = ContentResolver(fetcher, self.settings.fetch_error_message)
        self.canonicalizer = UrlCanonicalizer(
            UrlIgnoreList(
                hosts=self.settings.ignored_hosts,
                patterns=self.settings.ignored_patterns,
            )
        )
        self.populator = EntryPopulator(
            self.canonicalizer,
            self.tagger,
            fetch_error_message=self.settings.fetch_error_message,
            store_article_headers=self.settings.store_article_headers,
            reading_speed=self.settings.reading_speed,
        )

    @classmethod
    def from_config(
        cls,
        fetcher: ContentFetcher | None = None,
        tagger: Tagger | None = None,
        cfg: Config = config,
    ) -> "ContentProxy":
        """Build a proxy with the default fetcher and environment settings."""
        settings = IngestionSettings.from_config(cfg)
        if fetcher is None:
            from .fetcher import Fetcher
            fetcher = Fetcher(error_message=settings.fetch_error_message, timeout=cfg.FETCH_TIMEOUT)
        return cls(fetcher, tagger=tagger, settings=settings)

    def update_entry(
        self,
        entry: Entry,
        url: str,
        content: ContentRecord | Mapping[str, Any] | None = None,
        disable_fetch: bool = False,
        reading_speed: int | None = None,
    ) -> None:
        """
        Update entry using either fetched or provided content.

        Args:
            entry: Entry to update
            url: URL of the content
            content: Content provided by an import; with at least title, html
                and url, no fetch happens
            disable_fetch: Skip fetching the URL entirely
            reading_speed: Words per minute of the entry's owner

        Raises:
            ContentValidationError: If a content mapping has the wrong shape
        """
        if content is None or isinstance(content, ContentRecord):
            supplied = content
        else:
            supplied = parse_supplied_content(dict(content))

        record = self.resolver.resolve(entry, url, supplied, disable_fetch=disable_fetch)
        self.populator.populate(entry, record, reading_speed=reading_speed)
        logger.debug(f"Entry {entry.url} updated ({entry.reading_time} min, {len(entry.tags)} tags)")

    # Field helpers, shared with importers and the API layer

    def update_language(self, entry: Entry, value: str) -> None:
        self.populator.update_language(entry, value)

    def update_preview_picture(self, entry: Entry, value: str) -> None:
        self.populator.update_preview_picture(entry, value)

    def update_published_at(self, entry: Entry, value) -> None:
        self.populator.update_published_at(entry, value)

    def set_entry_domain_name(self, entry: Entry) -> None:
        self.populator.set_entry_domain_name(entry)

    def set_default_entry_title(self, entry: Entry) -> None:
        self.populator.set_default_entry_title(entry)
