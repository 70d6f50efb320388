"""Screenshot filename generation.

Filenames look like ``<page>[-<element>][-<suffix>]-<timestamp>.png`` where
``<page>`` comes from the page title, else the URL, else the literal
``page``. Everything before the timestamp is capped at ``MAX_SLUG_LENGTH``
characters.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from pathlib import PurePosixPath
from typing import Optional
from urllib.parse import unquote, urlparse

logger = logging.getLogger(__name__)

MAX_SLUG_LENGTH = 50
FALLBACK_SLUG = "page"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H-%M-%S"

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Lowercase, collapse non-alphanumeric runs to '-', trim edge hyphens."""
    return _NON_ALNUM.sub("-", text.lower()).strip("-")


def _truncate(slug: str, limit: int) -> str:
    """Cut a slug to ``limit`` chars, backing up to a hyphen rather than splitting a word."""
    if len(slug) <= limit:
        return slug
    cut = slug[:limit]
    if slug[limit] != "-" and "-" in cut:
        cut = cut.rsplit("-", 1)[0]
    return cut.strip("-") or slug[:limit].strip("-")


def _slug_from_url(url: str) -> str:
    try:
        parsed = urlparse(url)
        host = parsed.hostname or ""
    except ValueError:
        # Unbalanced IPv6 brackets and the like
        return ""
    scheme = parsed.scheme.lower()
    if scheme == "file":
        last = unquote(parsed.path).rsplit("/", 1)[-1]
        return slugify(PurePosixPath(last).stem) if last else ""
    if not scheme or not parsed.netloc:
        # No scheme or host, e.g. "not-a-valid-url"
        return ""
    if parsed.path in ("", "/"):
        if host.startswith("www."):
            host = host[4:]
        return slugify(host.replace(".", "-"))
    segments = [s for s in parsed.path.split("/") if s]
    return slugify("-".join(segments))


def _format_timestamp(timestamp: Optional[datetime]) -> str:
    if timestamp is None:
        timestamp = datetime.now(timezone.utc)
    elif timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    else:
        timestamp = timestamp.astimezone(timezone.utc)
    return timestamp.strftime(TIMESTAMP_FORMAT)


def generate_filename(
    page_title: Optional[str] = None,
    url: Optional[str] = None,
    element_id: Optional[str] = None,
    suffix: Optional[str] = None,
    timestamp: Optional[datetime] = None,
) -> str:
    """Build a filesystem-safe PNG filename for a screenshot.

    Args:
        page_title: Preferred source for the base name.
        url: Used when no title is given. ``file://`` URLs contribute the
            file's stem, other URLs their path segments, and a bare
            homepage its domain (minus ``www.``).
        element_id: CSS selector or element name; slugified.
        suffix: Filename-safe token such as ``before``, ``after``, ``diff``.
        timestamp: Defaults to now. Naive datetimes are taken as UTC.
    """
    base = ""
    if page_title:
        base = slugify(page_title)
    elif url:
        base = _slug_from_url(url)
    if not base:
        base = FALLBACK_SLUG

    tail = ""
    if element_id:
        element_slug = slugify(element_id)
        if element_slug:
            tail += f"-{element_slug}"
    if suffix:
        tail += f"-{suffix}"

    # Shorten the page part first so element and suffix survive
    budget = MAX_SLUG_LENGTH - len(tail)
    if budget > 0:
        stem = _truncate(base, budget) + tail
    else:
        stem = _truncate(base + tail, MAX_SLUG_LENGTH)

    filename = f"{stem}-{_format_timestamp(timestamp)}.png"
    logger.debug("Generated filename %s", filename)
    return filename
