"""
Automatic tagging of entries.

Rules are plain predicates over an entry; compiling user-written rule
expressions into predicates happens outside this package.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Protocol

from .exceptions import TaggingError
from .models import Entry, Tag

logger = logging.getLogger(__name__)


class Tagger(Protocol):
    def tag(self, entry: Entry) -> None:
        ...


@dataclass
class TaggingRule:
    """Adds `tags` to every entry `matches` accepts."""
    tags: list[str]
    matches: Callable[[Entry], bool]
    name: str = ""


@dataclass
class RuleBasedTagger:
    """
    Tags entries with the tags of every rule they match.

    Tags are owned collectively by the entries referencing them, so one
    tagger hands the same Tag instance to every entry with that label. The
    label registry is the only state kept between calls; it only ever
    grows and is filled with dict.setdefault, so concurrent ingestion calls
    on different entries never see a half-built tag. Use one tagger per
    user when tags must not be shared across users.
    """
    rules: list[TaggingRule] = field(default_factory=list)

    def __post_init__(self):
        self._known_tags: dict[str, Tag] = {}

    def _get_tag(self, label: str) -> Tag:
        return self._known_tags.setdefault(label, Tag(label=label))

    def tag(self, entry: Entry) -> None:
        """
        Apply every matching rule to the entry.

        Raises:
            TaggingError: If a rule cannot be evaluated
        """
        for rule in self.rules:
            try:
                matched = rule.matches(entry)
            except Exception as e:
                raise TaggingError(f"Rule '{rule.name or rule.tags}' failed: {e}") from e

            if not matched:
                continue

            for label in rule.tags:
                entry.add_tag(self._get_tag(label))
            logger.debug(f"Rule '{rule.name or rule.tags}' tagged {entry.url}")
