"""
Tests for the default content fetcher (no network access).
"""

from unittest.mock import MagicMock, patch

import fitz
import requests

from readlater.fetcher import Fetcher

ERROR = "fetch failed"

ARTICLE_HTML = """
<html lang="en">
<head>
  <title>Article title</title>
  <meta property="og:title" content="Article title">
  <meta property="og:description" content="What the article is about">
  <meta property="og:image" content="https://example.com/cover.jpg">
  <meta name="author" content="Jane Doe">
</head>
<body>
  <nav>Home | About</nav>
  <article>
    <h1>Article title</h1>
    <p>The first paragraph of the article explains what is going on in some detail,
    with enough words to look like real prose to the extractor.</p>
    <p>The second paragraph keeps going, adds more context and a
    <a href="/related">relative link</a> to another page on the same site.</p>
    <p>A third paragraph closes the article with a conclusion that sums it all up.</p>
  </article>
  <script>trackEverything();</script>
</body>
</html>
"""


def make_response(url, status=200, content_type="text/html; charset=utf-8", text="", content=b""):
    resp = MagicMock()
    resp.url = url
    resp.status_code = status
    resp.ok = status < 400
    resp.headers = {"Content-Type": content_type, "Server": "test"}
    resp.text = text
    resp.content = content
    return resp


def make_fetcher(response=None, raises=None):
    session = MagicMock()
    if raises:
        session.get.side_effect = raises
    else:
        session.get.return_value = response
    return Fetcher(error_message=ERROR, timeout=5, session=session), session


class TestFetchContent:
    """Tests for Fetcher.fetch_content."""

    def test_network_error_returns_error_record(self):
        fetcher, _ = make_fetcher(raises=requests.ConnectionError("refused"))
        record = fetcher.fetch_content("http://down.example.com/")
        assert record.html == ERROR
        assert record.url == "http://down.example.com/"

    def test_http_error_status(self):
        fetcher, _ = make_fetcher(make_response("http://example.com/gone", status=404))
        record = fetcher.fetch_content("http://example.com/gone")
        assert record.html == ERROR
        assert record.status == "404"
        assert record.content_type == "text/html"

    def test_html_article(self):
        fetcher, session = make_fetcher(make_response("https://example.com/post/", text=ARTICLE_HTML))
        record = fetcher.fetch_content("http://example.com/post")

        session.get.assert_called_once_with(
            "http://example.com/post", headers=fetcher.headers, timeout=5, allow_redirects=True
        )
        assert record.url == "https://example.com/post/"
        assert record.title == "Article title"
        assert record.html and record.html != ERROR
        assert "second paragraph" in record.html
        assert "trackEverything" not in record.html
        assert record.language == "en"
        assert record.status == "200"
        assert record.content_type == "text/html"
        assert record.all_headers["server"] == "test"
        assert record.open_graph.og_description == "What the article is about"
        assert record.open_graph.og_image == "https://example.com/cover.jpg"

    def test_image_document(self):
        fetcher, _ = make_fetcher(make_response("http://example.com/img/photo.png", content_type="image/png"))
        record = fetcher.fetch_content("http://example.com/img/photo.png")
        assert record.html == '<img src="http://example.com/img/photo.png" />'
        assert record.title == "photo.png"
        assert record.content_type == "image/png"

    def test_meta_charset_without_header_charset(self):
        """A UTF-8 page declaring its charset only in <meta> is not garbled."""
        page = (
            '<html lang="fr"><head><meta charset="utf-8">'
            "<title>Café crème</title>"
            '<meta property="og:title" content="Café crème">'
            '<meta property="og:description" content="Un résumé déjà prêt">'
            "</head><body><article>"
            "<p>Le café crème se boit le matin, à la terrasse, en lisant le journal du jour.</p>"
            "<p>Ce deuxième paragraphe ajoute assez de texte pour ressembler à un vrai article.</p>"
            "</article></body></html>"
        ).encode("utf-8")
        resp = make_response(
            "http://example.fr/cafe",
            content_type="text/html",
            text=page.decode("iso-8859-1"),
            content=page,
        )
        fetcher, _ = make_fetcher(resp)

        record = fetcher.fetch_content("http://example.fr/cafe")

        assert record.title == "Café crème"
        assert record.open_graph.og_description == "Un résumé déjà prêt"
        assert "deuxième paragraphe" in record.html
        assert "Ã" not in record.html

    def test_session_per_fetch_when_none_injected(self):
        """Each fetch uses and closes its own session."""
        with patch("readlater.fetcher.requests.Session") as session_cls:
            session_cls.return_value.get.return_value = make_response(
                "http://example.com/img/a.png", content_type="image/png"
            )
            fetcher = Fetcher(error_message=ERROR, timeout=5)

            fetcher.fetch_content("http://example.com/img/a.png")
            fetcher.fetch_content("http://example.com/img/a.png")

        assert session_cls.call_count == 2
        assert session_cls.return_value.close.call_count == 2


def make_pdf(text: str, title: str | None = None) -> bytes:
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), text)
    if title:
        doc.set_metadata({"title": title})
    data = doc.tobytes()
    doc.close()
    return data


class TestPdfDocuments:
    """Tests for PDF extraction."""

    def test_pdf_title_and_text(self):
        resp = make_response(
            "http://example.com/files/report.pdf",
            content_type="application/pdf",
            content=make_pdf("Hello PDF world", title="Quarterly report"),
        )
        fetcher, _ = make_fetcher(resp)

        record = fetcher.fetch_content("http://example.com/files/report.pdf")

        assert record.title == "Quarterly report"
        assert "Hello PDF world" in record.html
        assert record.html.startswith("<p>")
        assert record.content_type == "application/pdf"

    def test_pdf_without_title_uses_file_name(self):
        resp = make_response(
            "http://example.com/files/notes.pdf",
            content_type="application/pdf",
            content=make_pdf("Some notes"),
        )
        fetcher, _ = make_fetcher(resp)

        record = fetcher.fetch_content("http://example.com/files/notes.pdf")

        assert record.title == "notes.pdf"

    def test_unreadable_pdf(self):
        """A broken PDF becomes an error record, not an exception."""
        resp = make_response(
            "http://example.com/files/broken.pdf",
            content_type="application/pdf",
            content=b"this is not a pdf",
        )
        fetcher, _ = make_fetcher(resp)

        record = fetcher.fetch_content("http://example.com/files/broken.pdf")

        assert record.html == ERROR
        assert record.url == "http://example.com/files/broken.pdf"


class TestCleanupHtml:
    """Tests for Fetcher.cleanup_html."""

    def test_removes_scripts_and_absolutizes_links(self):
        fetcher, _ = make_fetcher(make_response("http://x"))
        html = '<p>Hi <a href="/about">about</a><img src="pic.png"></p><script>alert(1)</script>'

        cleaned = fetcher.cleanup_html(html, "https://example.com/blog/post")

        assert "<script>" not in cleaned
        assert 'href="https://example.com/about"' in cleaned
        assert 'src="https://example.com/blog/pic.png"' in cleaned
