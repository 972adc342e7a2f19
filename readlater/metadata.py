"""
Metadata extraction helpers used while populating an entry.

Each helper that can fail returns a FieldResult instead of raising, so the
caller decides how to report the problem and keeps the previous value.
"""

import math
import mimetypes
import posixpath
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Generic, TypeVar
from urllib.parse import urlsplit

from bs4 import BeautifulSoup
from dateutil import parser as dateparser

from .validators import validate_locale, validate_url

T = TypeVar("T")

IMAGE_EXTENSIONS = {".jpeg", ".jpg", ".gif", ".png"}

_INT_RE = re.compile(r"^\s*[+-]?\d+\s*$")


@dataclass
class FieldResult(Generic[T]):
    """Outcome of deriving a single entry field."""
    value: T | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "FieldResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: str) -> "FieldResult[T]":
        return cls(error=error)


def html_to_text(html: str) -> str:
    """Plain-text rendering of an HTML fragment."""
    return BeautifulSoup(html, "html.parser").get_text(separator=" ")


def count_words(html: str | None) -> int:
    if not html:
        return 0
    return len(html_to_text(html).split())


def reading_time(html: str | None, words_per_minute: int = 200) -> int:
    """Minutes needed to read the content, rounded to the nearest minute."""
    if words_per_minute <= 0:
        return 0
    # Halves round up: 2.5 minutes reads as 3
    return max(0, math.floor(count_words(html) / words_per_minute + 0.5))


def domain_name(url: str | None) -> str | None:
    """Host part of a URL, None when there is none."""
    if not url:
        return None
    try:
        return urlsplit(url).hostname
    except ValueError:
        return None


def default_title(url: str) -> str:
    """Title for an entry without one: last path segment, else the host."""
    parsed = urlsplit(url)
    basename = posixpath.basename(parsed.path)
    return basename or parsed.hostname or url


def parse_published_at(value: str | int | float | datetime) -> FieldResult[datetime]:
    """
    Turn a publication date into a datetime.

    Integers (and integer strings) are Unix timestamps; anything else goes
    through dateutil.
    """
    if isinstance(value, datetime):
        return FieldResult.success(value)

    try:
        if isinstance(value, bool):
            raise ValueError("boolean is not a date")
        if isinstance(value, int) or (isinstance(value, str) and _INT_RE.match(value)):
            return FieldResult.success(datetime.fromtimestamp(int(value), tz=timezone.utc))
        if isinstance(value, float):
            return FieldResult.success(datetime.fromtimestamp(value, tz=timezone.utc))
        return FieldResult.success(dateparser.parse(str(value)))
    except (ValueError, OverflowError, OSError) as e:
        return FieldResult.failure(f"Error while defining date: {e}")


def normalize_language(value: str) -> FieldResult[str]:
    """fr-FR becomes fr_FR; the result must be a known locale."""
    value = value.replace("-", "_")
    errors = validate_locale(value)
    if errors:
        return FieldResult.failure("Language validation failed. " + " ".join(errors))
    return FieldResult.success(value)


def check_picture_url(value: str) -> FieldResult[str]:
    errors = validate_url(value)
    if errors:
        return FieldResult.failure("PreviewPicture validation failed. " + " ".join(errors))
    return FieldResult.success(value)


def is_image_content_type(content_type: str | None) -> bool:
    """True for jpeg, gif and png documents."""
    if not content_type:
        return False
    mime = content_type.split(";", 1)[0].strip().lower()
    return bool(IMAGE_EXTENSIONS & set(mimetypes.guess_all_extensions(mime)))
