"""
Content Fetcher - Fetch a URL and turn it into a ContentRecord.

Handles:
- HTTP fetching with browser-like headers, following redirects
- HTML content extraction using trafilatura (reader-mode)
- Fallback to BeautifulSoup for edge cases
- PDF text and title extraction (PyMuPDF)
- Images, stored as a single <img> pointing at the document

Fetch failures never raise: the returned record carries the configured
error message as its html.
"""

import logging
import re
from typing import Protocol
from urllib.parse import urljoin, urlsplit

import requests
import trafilatura
from bs4 import BeautifulSoup

from .config import config
from .exceptions import FetchError
from .metadata import is_image_content_type
from .models import ContentRecord, OpenGraph
from .sanitizer import PDF_CONTENT_TYPE

logger = logging.getLogger(__name__)

# Elements never worth keeping in stored content
UNWANTED_TAGS = [
    "script", "style", "noscript", "iframe", "form", "button", "input", "object", "embed",
]


class ContentFetcher(Protocol):
    def fetch_content(self, url: str) -> ContentRecord:
        ...

    def cleanup_html(self, html: str, url: str) -> str:
        ...


class Fetcher:
    """
    Fetches and extracts content from web pages.

    Without an injected session every fetch opens and closes its own
    requests.Session, so concurrent fetches share no connection state.
    """

    def __init__(
        self,
        error_message: str | None = None,
        timeout: int | None = None,
        user_agent: str | None = None,
        session: requests.Session | None = None,
    ):
        self.error_message = error_message or config.FETCH_ERROR_MESSAGE
        self.timeout = timeout or config.FETCH_TIMEOUT
        self.session = session
        self.headers = {
            "User-Agent": user_agent or config.USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        }

    def fetch_content(self, url: str) -> ContentRecord:
        """
        Fetch and extract content from URL.

        Returns:
            ContentRecord; its html is the error message when fetching failed
        """
        try:
            return self._fetch(url)
        except FetchError as e:
            logger.warning(str(e))
            return ContentRecord(url=url, title="", html=self.error_message)

    def _fetch(self, url: str) -> ContentRecord:
        session = self.session or requests.Session()
        try:
            resp = session.get(url, headers=self.headers, timeout=self.timeout, allow_redirects=True)
        except requests.RequestException as e:
            raise FetchError(url, str(e)) from e
        finally:
            if self.session is None:
                session.close()

        final_url = resp.url or url
        content_type = resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower() or None
        status = str(resp.status_code)
        headers = {name.lower(): value for name, value in resp.headers.items()}
        logger.info(f"Fetched {url} ({status}, {content_type})")

        if not resp.ok:
            return ContentRecord(
                url=final_url,
                title="",
                html=self.error_message,
                content_type=content_type,
                status=status,
                all_headers=headers,
            )

        if content_type == PDF_CONTENT_TYPE:
            record = self._extract_pdf(final_url, resp.content)
        elif is_image_content_type(content_type):
            record = ContentRecord(
                url=final_url,
                title=self._basename(final_url),
                html=f'<img src="{final_url}" />',
            )
        else:
            record = self._extract_html(final_url, self._markup(resp))

        record.content_type = content_type
        record.status = status
        record.all_headers = headers
        return record

    @staticmethod
    def _markup(resp: requests.Response) -> str | bytes:
        """
        Page markup for the HTML parsers.

        Without a charset in Content-Type, requests would decode as ISO-8859-1;
        the raw bytes let BeautifulSoup and trafilatura honour <meta charset>.
        """
        if "charset=" in resp.headers.get("Content-Type", "").lower():
            return resp.text
        return resp.content

    def _extract_html(self, url: str, html: str | bytes) -> ContentRecord:
        """Extract article content using trafilatura, falling back to BeautifulSoup."""
        soup = BeautifulSoup(html, "html.parser")
        open_graph = self._extract_open_graph(soup)

        content = trafilatura.extract(
            html,
            url=url,
            output_format="html",
            include_links=True,
            include_images=True,
            include_tables=True,
            favor_recall=True,
        )
        if not content:
            content = self._extract_with_beautifulsoup(soup)

        metadata = trafilatura.extract_metadata(html, default_url=url)

        title = metadata.title if metadata and metadata.title else None
        if not title:
            if title_tag := soup.find("title"):
                title = title_tag.get_text(strip=True)

        authors = None
        if metadata and metadata.author:
            authors = [a.strip() for a in metadata.author.split(";") if a.strip()]

        language = None
        if soup.html and soup.html.get("lang"):
            language = soup.html.get("lang")

        return ContentRecord(
            url=url,
            title=title or "",
            html=self.cleanup_html(content, url) if content else self.error_message,
            language=language,
            date=metadata.date if metadata else None,
            authors=authors,
            open_graph=open_graph,
        )

    def _extract_with_beautifulsoup(self, soup: BeautifulSoup) -> str:
        """Fallback extraction using BeautifulSoup heuristics."""
        article = (
            soup.find("article") or
            soup.find(class_=re.compile(r"^(article|post|post-content|entry-content|story)$", re.I)) or
            soup.find(attrs={"role": "main"}) or
            soup.find("main") or
            soup.body
        )
        if not article:
            return ""

        parts = [
            str(elem)
            for elem in article.find_all(["p", "h1", "h2", "h3", "h4", "ul", "ol", "blockquote", "pre"])
            if elem.get_text(strip=True)
        ]
        return "\n".join(parts)

    def _extract_pdf(self, url: str, data: bytes) -> ContentRecord:
        """Extract text and title from a PDF document."""
        import fitz  # PyMuPDF

        try:
            doc = fitz.open(stream=data, filetype="pdf")
        except Exception as e:
            raise FetchError(url, f"unreadable PDF: {e}") from e

        try:
            title = (doc.metadata or {}).get("title") or self._basename(url)
            paragraphs = []
            for page in doc:
                text = page.get_text().strip()
                if text:
                    paragraphs.append(f"<p>{text}</p>")
        finally:
            doc.close()

        return ContentRecord(
            url=url,
            title=title,
            html="\n".join(paragraphs) or self.error_message,
        )

    def _extract_open_graph(self, soup: BeautifulSoup) -> OpenGraph | None:
        values = {}
        for key in ("title", "description", "image"):
            if meta := soup.find("meta", property=f"og:{key}"):
                values[f"og_{key}"] = meta.get("content") or None
        return OpenGraph(**values) if values else None

    def cleanup_html(self, html: str, url: str) -> str:
        """Strip unwanted elements and make links absolute against url."""
        soup = BeautifulSoup(html, "html.parser")

        for tag in soup.find_all(UNWANTED_TAGS):
            tag.decompose()

        for attr, tag_name in (("href", "a"), ("src", "img")):
            for elem in soup.find_all(tag_name):
                if elem.get(attr):
                    elem[attr] = urljoin(url, elem[attr])

        return str(soup)

    @staticmethod
    def _basename(url: str) -> str:
        path = urlsplit(url).path.rstrip("/")
        return path.rsplit("/", 1)[-1] or urlsplit(url).hostname or url
