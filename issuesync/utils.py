"""Shared utilities (Markdown image links)."""

import logging
import re
from pathlib import PurePosixPath
from typing import List
from urllib.parse import urlparse

import requests

LOG = logging.getLogger("issuesync.utils")

# ![alt](url); alt and url are matched lazily so consecutive images stay separate
_MARKDOWN_IMAGE_RE = re.compile(r"!\[(.*?)\]\((.*?)\)")

IMAGE_EXTENSIONS = frozenset(
    {
        "apng",
        "avif",
        "bmp",
        "gif",
        "heic",
        "heif",
        "ico",
        "jfif",
        "jpeg",
        "jpg",
        "png",
        "svg",
        "tif",
        "tiff",
        "webp",
    }
)


def extract_image_urls(body: str) -> List[str]:
    """Return the URL of every Markdown image link in body, in order of appearance."""
    if not body:
        return []
    return [match.group(2).strip() for match in _MARKDOWN_IMAGE_RE.finditer(body)]


def _probe_content_type(url: str, session: requests.Session | None, timeout: int) -> bool:
    http = session or requests
    try:
        resp = http.head(url, allow_redirects=True, timeout=timeout)
    except requests.RequestException as e:
        LOG.debug("HEAD %s failed: %s", url, e)
        return False
    if resp.status_code >= 400:
        return False
    return resp.headers.get("Content-Type", "").lower().startswith("image/")


def is_image_url(
    url: str,
    probe: bool = False,
    session: requests.Session | None = None,
    timeout: int = 10,
) -> bool:
    """Heuristic check that a URL points at an image.

    Accepts absolute http(s) URLs whose path ends in a known image extension.
    With probe=True, a URL whose path has no extension at all is checked with
    a HEAD request and accepted when the server answers with an image/*
    Content-Type. URLs with any other extension are rejected without a
    request.

    Args:
        url: Candidate URL (e.g. taken from a Markdown image link).
        probe: Allow a HEAD request for extensionless URLs.
        session: Optional requests session used for the probe.
        timeout: Probe timeout in seconds.

    Returns:
        True if the URL is considered an image.
    """
    if not url:
        return False
    parsed = urlparse(url.strip())
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return False
    suffix = PurePosixPath(parsed.path).suffix.lower().lstrip(".")
    if suffix:
        return suffix in IMAGE_EXTENSIONS
    if probe:
        return _probe_content_type(url, session, timeout)
    return False


def photo_urls(body: str, probe: bool = False, session: requests.Session | None = None) -> List[str]:
    """Image links from body that pass is_image_url, in body order."""
    return [url for url in extract_image_urls(body) if is_image_url(url, probe=probe, session=session)]
