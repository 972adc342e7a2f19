"""
Pytest fixtures for ingestion tests.
"""

import pytest

from readlater.config import IngestionSettings
from readlater.content_proxy import ContentProxy
from readlater.models import ContentRecord, Entry

ERROR_MESSAGE = "Content could not be fetched."


class FakeFetcher:
    """In-memory fetcher recording every call."""

    def __init__(self, record: ContentRecord | None = None, raises: Exception | None = None):
        self.record = record or ContentRecord(url="", html=ERROR_MESSAGE)
        self.raises = raises
        self.fetched: list[str] = []
        self.cleaned: list[tuple[str, str]] = []

    def fetch_content(self, url: str) -> ContentRecord:
        self.fetched.append(url)
        if self.raises:
            raise self.raises
        return self.record

    def cleanup_html(self, html: str, url: str) -> str:
        self.cleaned.append((html, url))
        return html


class RecordingTagger:
    def __init__(self, raises: Exception | None = None):
        self.raises = raises
        self.tagged: list[Entry] = []

    def tag(self, entry: Entry) -> None:
        self.tagged.append(entry)
        if self.raises:
            raise self.raises


@pytest.fixture
def settings():
    return IngestionSettings(fetch_error_message=ERROR_MESSAGE, reading_speed=200)


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def tagger():
    return RecordingTagger()


@pytest.fixture
def proxy(fetcher, tagger, settings):
    return ContentProxy(fetcher, tagger=tagger, settings=settings)


@pytest.fixture
def fetched_record():
    """A successful fetch of a plain article."""
    return ContentRecord(
        url="http://example.com/article",
        title="Fetched title",
        html="<p>" + " ".join(["word"] * 400) + "</p>",
        content_type="text/html",
        language="fr-FR",
        status="200",
        authors=["Jane Doe"],
        date="2016-09-08T11:55:58+0200",
        all_headers={"content-type": "text/html"},
    )
