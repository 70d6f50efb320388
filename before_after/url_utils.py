"""Shared URL utilities — default a protocol onto bare hosts, spot image paths."""

from __future__ import annotations

import re
from pathlib import Path

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".webp", ".bmp", ".tiff")

_HAS_PROTOCOL = re.compile(r"^(https?|file)://", re.IGNORECASE)
# Host token must end at ':', '/', or end of string; "localhostname.com" is not local
_LOCAL_HOST = re.compile(r"^(localhost|127\.0\.0\.1)(:|/|$)", re.IGNORECASE)
_ANY_SCHEME = re.compile(r"^[a-z][a-z0-9+.-]*://", re.IGNORECASE)


def normalize_url(url: str) -> str:
    """Add a protocol to a URL that lacks one.

    Local development hosts get ``http://``, everything else ``https://``.
    URLs that already carry http, https, or file are returned untouched.
    """
    if _HAS_PROTOCOL.match(url):
        return url
    if _LOCAL_HOST.match(url):
        return f"http://{url}"
    return f"https://{url}"


def looks_like_image_path(arg: str) -> bool:
    """True for a scheme-less argument with a known image extension."""
    if _ANY_SCHEME.match(arg):
        return False
    return Path(arg).suffix.lower() in IMAGE_EXTENSIONS


def is_image_file(arg: str) -> bool:
    return looks_like_image_path(arg) and Path(arg).is_file()
