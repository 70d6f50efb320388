"""Tests for URL normalization and image-path detection."""

from pathlib import Path

import pytest

from before_after.url_utils import is_image_file, looks_like_image_path, normalize_url


class TestNormalizeUrl:
    """Tests for normalize_url."""

    @pytest.mark.parametrize("raw,expected", [
        ("google.com", "https://google.com"),
        ("www.google.com", "https://www.google.com"),
        ("example.com/path/to/page", "https://example.com/path/to/page"),
        ("example.com?foo=bar", "https://example.com?foo=bar"),
        ("example.com:8080", "https://example.com:8080"),
        ("192.168.1.1:8080", "https://192.168.1.1:8080"),
    ])
    def test_adds_https(self, raw, expected):
        """Test that bare hosts get https."""
        assert normalize_url(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        ("localhost:3000", "http://localhost:3000"),
        ("localhost", "http://localhost"),
        ("localhost/api/test", "http://localhost/api/test"),
        ("127.0.0.1:8080", "http://127.0.0.1:8080"),
        ("127.0.0.1", "http://127.0.0.1"),
        ("127.0.0.1/path", "http://127.0.0.1/path"),
        ("LOCALHOST:3000", "http://LOCALHOST:3000"),
        ("localhost:", "http://localhost:"),
    ])
    def test_local_hosts_get_http(self, raw, expected):
        """Test that localhost and 127.0.0.1 get http."""
        assert normalize_url(raw) == expected

    @pytest.mark.parametrize("url", [
        "https://google.com",
        "http://localhost:3000",
        "http://example.com",
        "file:///path/to/file.html",
        "HTTPS://EXAMPLE.COM",
        "HTTP://example.com",
        "FILE:///path",
    ])
    def test_preserves_existing_protocol(self, url):
        """Test that http, https and file URLs are unchanged."""
        assert normalize_url(url) == url

    def test_localhost_prefix_is_not_local(self):
        """Test that localhostname.com is treated as remote."""
        assert normalize_url("localhostname.com") == "https://localhostname.com"

    def test_localhost_subdomain_is_not_local(self):
        """Test that sub.localhost gets https."""
        # Prefix matching only; subdomains of localhost are treated as remote
        assert normalize_url("sub.localhost") == "https://sub.localhost"

    @pytest.mark.parametrize("raw", ["google.com", "localhost:3000", "https://a.com", "127.0.0.1/x", "sub.localhost"])
    def test_idempotent(self, raw):
        """Test that normalizing twice changes nothing."""
        once = normalize_url(raw)
        assert normalize_url(once) == once


class TestImagePathDetection:
    """Tests for looks_like_image_path / is_image_file."""

    @pytest.mark.parametrize("arg", ["before.png", "shots/After.JPG", "a.jpeg", "x.webp", "/abs/y.tiff"])
    def test_image_extensions(self, arg):
        """Test recognized image extensions."""
        assert looks_like_image_path(arg)

    @pytest.mark.parametrize("arg", [
        "google.com",
        "localhost:3000",
        "https://example.com/logo.png",
        "file:///tmp/shot.png",
        "notes.txt",
    ])
    def test_non_images(self, arg):
        """Test URLs and non-image paths."""
        assert not looks_like_image_path(arg)

    def test_is_image_file_requires_existence(self, tmp_path: Path, png_bytes: bytes):
        """Test that is_image_file needs the file to exist."""
        path = tmp_path / "shot.png"
        assert not is_image_file(str(path))
        path.write_bytes(png_bytes)
        assert is_image_file(str(path))
