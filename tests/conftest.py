"""Pytest configuration and shared fixtures."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import pytest

from before_after.models.capture import ViewportSize
from before_after.models.config import ToolConfig


# Minimal 1x1 transparent PNG
MINIMAL_PNG = bytes([
    0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A,
    0x00, 0x00, 0x00, 0x0D, 0x49, 0x48, 0x44, 0x52,
    0x00, 0x00, 0x00, 0x01, 0x00, 0x00, 0x00, 0x01,
    0x08, 0x06, 0x00, 0x00, 0x00, 0x1F, 0x15, 0xC4, 0x89,
    0x00, 0x00, 0x00, 0x0A, 0x49, 0x44, 0x41, 0x54,
    0x78, 0x9C, 0x63, 0x00, 0x01, 0x00, 0x00, 0x05, 0x00, 0x01,
    0x0D, 0x0A, 0x2D, 0xB4,
    0x00, 0x00, 0x00, 0x00, 0x49, 0x45, 0x4E, 0x44, 0xAE, 0x42, 0x60, 0x82,
])


class FakeBackend:
    """Capture backend that records calls and returns canned bytes."""

    def __init__(self, fail_on: Optional[str] = None, error: Optional[Exception] = None):
        self.calls: list[dict] = []
        self.fail_on = fail_on
        self.error = error
        self.closed = False

    async def __aenter__(self) -> "FakeBackend":
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.closed = True

    async def capture(
        self,
        url: str,
        viewport: ViewportSize,
        full_page: bool = False,
        selector: Optional[str] = None,
    ) -> bytes:
        self.calls.append({
            "url": url,
            "viewport": viewport,
            "full_page": full_page,
            "selector": selector,
        })
        if self.fail_on == url:
            raise self.error
        return f"png:{url}".encode()


@pytest.fixture
def png_bytes() -> bytes:
    return bytes(MINIMAL_PNG)


@pytest.fixture
def fixed_timestamp() -> datetime:
    return datetime(2026, 1, 26, 15, 30, 45, 123000, tzinfo=timezone.utc)


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def tool_config(tmp_path: Path) -> ToolConfig:
    return ToolConfig(output_dir=str(tmp_path / "shots"))


@pytest.fixture
def image_files(tmp_path: Path, png_bytes: bytes) -> tuple[Path, Path]:
    """Write before.png/after.png into a temp dir."""
    before = tmp_path / "before.png"
    after = tmp_path / "after.png"
    before.write_bytes(png_bytes)
    after.write_bytes(png_bytes)
    return before, after


@pytest.fixture
def failing_backend():
    """Factory for a backend that raises ``error`` when asked for ``url``."""
    def _make(url: str, error: Exception) -> FakeBackend:
        return FakeBackend(fail_on=url, error=error)
    return _make
