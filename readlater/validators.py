"""
Value validation utilities for entry metadata.

Validators return a list of error descriptions; an empty list means the
value is valid.
"""

from babel import Locale, UnknownLocaleError
from pydantic import HttpUrl, TypeAdapter, ValidationError

_http_url_adapter = TypeAdapter(HttpUrl)


def validate_locale(value: str) -> list[str]:
    """
    Check that a value is a known locale identifier (e.g. "fr" or "fr_FR").

    Args:
        value: Locale identifier using "_" as separator

    Returns:
        List of error descriptions, empty when valid
    """
    if not value or not value.strip():
        return ["This value is not a valid locale."]
    try:
        parsed = Locale.parse(value)
    except (UnknownLocaleError, ValueError, TypeError) as e:
        return [f"This value is not a valid locale. ({e})"]
    # Locale.parse falls back to the language alone for unknown parts
    if str(parsed) != value:
        return [f"This value is not a valid locale. (closest match: {parsed})"]
    return []


def validate_url(value: str) -> list[str]:
    """
    Check that a value is a well-formed http(s) URL.

    Args:
        value: URL to validate

    Returns:
        List of error descriptions, empty when valid
    """
    try:
        _http_url_adapter.validate_python(value)
    except ValidationError as e:
        return [error["msg"] for error in e.errors()]
    return []
