"""
URL canonicalization after redirects.

When the fetched document lives at a different URL than the one an entry
was saved with, decide which URL is kept and whether the submitted one is
remembered as the entry's origin URL.
"""

import logging
import re
from dataclasses import dataclass, field
from urllib.parse import unquote, urlsplit

from .config import DEFAULT_IGNORED_HOSTS, DEFAULT_IGNORED_PATTERNS
from .models import Entry

logger = logging.getLogger(__name__)


@dataclass
class UrlIgnoreList:
    """Tracking redirectors whose URL is replaced without keeping an origin."""
    hosts: list[str] = field(default_factory=lambda: list(DEFAULT_IGNORED_HOSTS))
    patterns: list[str] = field(default_factory=lambda: list(DEFAULT_IGNORED_PATTERNS))

    def __post_init__(self):
        self._compiled = [re.compile(pattern, re.IGNORECASE) for pattern in self.patterns]

    def matches(self, url: str) -> bool:
        host = url_parts(url).get("host")
        if host and host in self.hosts:
            return True
        return any(pattern.search(url) for pattern in self._compiled)


def url_parts(url: str) -> dict[str, str]:
    """
    Split a URL into its named components.

    Only components actually present in the URL are returned, so that
    `http://a.com` and `http://a.com/` differ by their path.
    """
    parsed = urlsplit(url)
    parts = {
        "scheme": parsed.scheme,
        "host": parsed.hostname,
        "user": parsed.username,
        "pass": parsed.password,
        "path": parsed.path,
        "query": parsed.query,
        "fragment": parsed.fragment,
    }
    try:
        parts["port"] = str(parsed.port) if parsed.port is not None else None
    except ValueError:
        # Port out of range or not numeric
        parts["port"] = parsed.netloc.rpartition(":")[2]
    return {name: value for name, value in parts.items() if value}


def changed_parts(old_url: str, new_url: str) -> set[str]:
    """Names of the components that differ, in either direction."""
    old = url_parts(old_url)
    new = url_parts(new_url)
    return {name for name in old.keys() | new.keys() if old.get(name) != new.get(name)}


class UrlCanonicalizer:
    """Reconciles an entry's URL with the URL its content was found at."""

    def __init__(self, ignore_list: UrlIgnoreList | None = None):
        self.ignore_list = ignore_list or UrlIgnoreList()

    def canonicalize(self, entry: Entry, new_url: str) -> None:
        """
        Update entry.url / entry.origin_url for a newly observed URL.

        - trailing slash added or URL-decoded path: same resource, replace url
        - scheme change: replace url
        - fragment change: nothing to do
        - anything else: real redirect, the first submitted URL becomes
          origin_url (never overwritten afterwards)
        """
        if not new_url or entry.url == new_url:
            return

        old_url = entry.url
        diff = changed_parts(old_url, new_url)

        if self.ignore_list.matches(old_url):
            logger.debug(f"Replacing ignored redirector URL {old_url} with {new_url}")
            entry.url = new_url
            return

        if diff == {"path"}:
            old_path = url_parts(old_url).get("path", "")
            new_path = url_parts(new_url).get("path", "")
            if old_path + "/" == new_path or new_url == unquote(old_url):
                entry.url = new_url
        elif diff == {"scheme"}:
            entry.url = new_url
        elif diff == {"fragment"}:
            pass
        else:
            if not entry.origin_url:
                entry.origin_url = old_url
            logger.info(f"Entry redirected from {old_url} to {new_url}")
            entry.url = new_url
