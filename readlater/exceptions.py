"""
Exceptions raised by the ingestion collaborators.

The pipeline itself never lets these escape for ordinary content problems:
fetch and tagging failures are logged and degrade to a usable entry.
"""


class IngestionError(Exception):
    """Base class for ingestion errors."""
    pass


class FetchError(IngestionError):
    """Error while fetching or extracting a remote document."""

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"Failed to fetch {url}: {message}")


class TaggingError(IngestionError):
    """Error raised by a tagging rule."""
    pass


class ContentValidationError(IngestionError):
    """Caller-supplied content is structurally invalid."""
    pass
