"""
Title sanitizing - repair wrong encodings and invalid UTF-8.

Titles extracted from PDFs frequently are not UTF-8. Fetchers hand them
over either as raw bytes or as text decoded with `surrogateescape`, so the
original bytes can still be recovered here.
"""

PDF_CONTENT_TYPE = "application/pdf"

# Order matters: UTF-8 is the easiest to rule out
PDF_TITLE_ENCODINGS = ("utf-8", "utf-16-be", "cp1252")


def _as_bytes(text: str | bytes) -> bytes:
    if isinstance(text, bytes):
        return text
    return text.encode("utf-8", errors="surrogateescape")


def convert_pdf_encoding_to_utf8(title: str | bytes) -> str | bytes:
    """
    Decode a PDF title with the first encoding that validates.

    Returns the raw title untouched when no encoding fits.
    """
    try:
        raw = _as_bytes(title)
    except UnicodeEncodeError:
        # Lone surrogates that are not escaped bytes
        return title

    for encoding in PDF_TITLE_ENCODINGS:
        try:
            decoded = raw.decode(encoding)
        except UnicodeDecodeError:
            continue
        return decoded.lstrip("\ufeff")

    return title


def sanitize_utf8_text(raw_text: str | bytes) -> str:
    """Drop anything that is not valid UTF-8."""
    if isinstance(raw_text, bytes):
        return raw_text.decode("utf-8", errors="ignore")
    try:
        raw_text.encode("utf-8")
        return raw_text
    except UnicodeEncodeError:
        return raw_text.encode("utf-8", errors="ignore").decode("utf-8")


def sanitize_title(title: str | bytes | None, content_type: str | None) -> str:
    """
    Clean a fetched title.

    PDF titles get their encoding guessed first; every title then has its
    invalid UTF-8 sequences removed.
    """
    if title is None:
        return ""

    if content_type == PDF_CONTENT_TYPE:
        title = convert_pdf_encoding_to_utf8(title)

    return sanitize_utf8_text(title)
