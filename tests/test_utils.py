"""Tests for Markdown image link helpers."""

from unittest.mock import MagicMock

import requests

from issuesync.utils import extract_image_urls, is_image_url, photo_urls


class TestExtractImageUrls:
    """extract_image_urls finds ![alt](url) links in order."""

    def test_urls_in_body_order(self) -> None:
        """Every image link is returned, in order of appearance."""
        body = "Hello ![a](http://x.com/1.png) world ![b](http://x.com/2.txt)"
        assert extract_image_urls(body) == ["http://x.com/1.png", "http://x.com/2.txt"]

    def test_plain_links_ignored(self) -> None:
        """Regular [text](url) links are not images."""
        assert extract_image_urls("see [docs](http://x.com/a.png)") == []

    def test_empty_body(self) -> None:
        """Empty body yields nothing."""
        assert extract_image_urls("") == []

    def test_empty_alt(self) -> None:
        """Images without alt text are still found."""
        assert extract_image_urls("![](https://x.com/p.jpg)") == ["https://x.com/p.jpg"]


class TestIsImageUrl:
    """is_image_url heuristic."""

    def test_image_extensions_accepted(self) -> None:
        """Known image extensions pass, case-insensitive."""
        assert is_image_url("http://x.com/1.png")
        assert is_image_url("https://x.com/a/b.JPG")
        assert is_image_url("https://x.com/a.webp?size=large")

    def test_other_extensions_rejected(self) -> None:
        """Non-image extensions fail."""
        assert not is_image_url("http://x.com/2.txt")
        assert not is_image_url("https://x.com/index.html")

    def test_relative_and_non_http_rejected(self) -> None:
        """Only absolute http(s) URLs are considered."""
        assert not is_image_url("/local/1.png")
        assert not is_image_url("ftp://x.com/1.png")
        assert not is_image_url("")

    def test_extensionless_without_probe_rejected(self) -> None:
        """No extension and no probe: not an image."""
        assert not is_image_url("https://x.com/image/12345")

    def test_extensionless_probe_checks_content_type(self) -> None:
        """With probe, an image/* Content-Type is accepted."""
        session = MagicMock()
        session.head.return_value = MagicMock(status_code=200, headers={"Content-Type": "image/jpeg"})
        assert is_image_url("https://x.com/image/12345", probe=True, session=session)
        session.head.assert_called_once()

    def test_probe_non_image_or_error_rejected(self) -> None:
        """With probe, other content types and request errors fail."""
        session = MagicMock()
        session.head.return_value = MagicMock(status_code=200, headers={"Content-Type": "text/html"})
        assert not is_image_url("https://x.com/page", probe=True, session=session)

        session.head.side_effect = requests.Timeout("slow")
        assert not is_image_url("https://x.com/page", probe=True, session=session)

    def test_probe_skipped_for_known_extension(self) -> None:
        """Probe does not send requests when the extension decides."""
        session = MagicMock()
        assert not is_image_url("http://x.com/2.txt", probe=True, session=session)
        session.head.assert_not_called()


def test_photo_urls_filters_by_heuristic() -> None:
    """Only the .png candidate survives, in body order."""
    body = "Hello ![a](http://x.com/1.png) world ![b](http://x.com/2.txt)"
    assert photo_urls(body) == ["http://x.com/1.png"]
