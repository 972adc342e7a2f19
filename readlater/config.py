"""
Configuration for the ingestion pipeline.
"""

import json
import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _parse_bool(value: str | None, default: bool = False) -> bool:
    """Parse boolean from environment variable."""
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


def _parse_list(value: str | None, default: list[str]) -> list[str]:
    """Parse a comma-separated environment variable."""
    if value is None:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_json_list(value: str | None, default: list[str]) -> list[str]:
    """
    Parse a JSON array environment variable, e.g. '["a{1,3}", "b"]'.

    Used where items may themselves contain commas (regex quantifiers).
    A value that is not a JSON array is taken as a single item.
    """
    if value is None:
        return list(default)
    try:
        items = json.loads(value)
    except json.JSONDecodeError:
        return [value.strip()] if value.strip() else []
    if not isinstance(items, list):
        return [str(items)]
    return [str(item) for item in items if str(item).strip()]


DEFAULT_IGNORED_HOSTS = ["feedproxy.google.com", "feeds.reuters.com"]
DEFAULT_IGNORED_PATTERNS = [r"https?://www\.lemonde\.fr/tiny.*"]


class Config:
    """Application configuration from environment."""
    # Stored as article content when fetching fails
    FETCH_ERROR_MESSAGE: str = os.getenv(
        "FETCH_ERROR_MESSAGE",
        "The content of this article could not be retrieved. "
        "You can try to reload it later.",
    )
    STORE_ARTICLE_HEADERS: bool = _parse_bool(os.getenv("STORE_ARTICLE_HEADERS"), default=False)

    # Words per minute used for reading time
    READING_SPEED: int = int(os.getenv("READING_SPEED", "200"))

    # Redirectors whose URL is never kept as origin
    IGNORED_HOSTS: list[str] = _parse_list(os.getenv("IGNORED_HOSTS"), DEFAULT_IGNORED_HOSTS)
    IGNORED_PATTERNS: list[str] = _parse_json_list(os.getenv("IGNORED_PATTERNS"), DEFAULT_IGNORED_PATTERNS)

    FETCH_TIMEOUT: int = int(os.getenv("FETCH_TIMEOUT", "30"))
    USER_AGENT: str = os.getenv(
        "USER_AGENT",
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36",
    )
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


config = Config()


@dataclass
class IngestionSettings:
    """Per-pipeline snapshot of the options the ingestion core consumes."""
    fetch_error_message: str
    store_article_headers: bool = False
    reading_speed: int = 200
    ignored_hosts: list[str] = field(default_factory=lambda: list(DEFAULT_IGNORED_HOSTS))
    ignored_patterns: list[str] = field(default_factory=lambda: list(DEFAULT_IGNORED_PATTERNS))

    @classmethod
    def from_config(cls, cfg: Config = config) -> "IngestionSettings":
        return cls(
            fetch_error_message=cfg.FETCH_ERROR_MESSAGE,
            store_article_headers=cfg.STORE_ARTICLE_HEADERS,
            reading_speed=cfg.READING_SPEED,
            ignored_hosts=list(cfg.IGNORED_HOSTS),
            ignored_patterns=list(cfg.IGNORED_PATTERNS),
        )


def configure_logging(level: str | None = None) -> None:
    """Apply LOG_LEVEL to the root logger."""
    logging.basicConfig(
        level=getattr(logging, (level or config.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
