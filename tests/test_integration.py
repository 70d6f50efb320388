"""Integration tests — CLI through orchestrator, capture, and file output.

The browser and the upload host are replaced; everything in between is real.
"""

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner

from before_after.cli import main
from before_after.errors import CaptureBackendError

FROM_CONFIG = "before_after.orchestrator.PlaywrightBackend.from_config"


@pytest.mark.integration
class TestCliPipeline:
    """Full URL-mode runs with a fake capture backend."""

    def test_capture_and_save(self, fake_backend, tmp_path: Path):
        """Test capturing two pages and writing both files."""
        with patch(FROM_CONFIG, return_value=fake_backend):
            result = CliRunner().invoke(
                main, ["example.com/pricing", "localhost:3000/pricing", ".card", "--mobile", "-o", str(tmp_path)]
            )

        assert result.exit_code == 0, result.output
        assert fake_backend.closed
        assert [c["url"] for c in fake_backend.calls] == [
            "https://example.com/pricing",
            "http://localhost:3000/pricing",
        ]
        assert all(c["viewport"].width == 375 for c in fake_backend.calls)

        saved = sorted(p.name for p in tmp_path.iterdir())
        assert len(saved) == 2
        assert saved[0].startswith("pricing-card-after-")
        assert saved[1].startswith("pricing-card-before-")
        # Both files share a timestamp
        assert saved[0].split("-after-")[1] == saved[1].split("-before-")[1]

    def test_markdown_upload(self, fake_backend, tmp_path: Path):
        """Test the full markdown flow with uploads mocked."""
        urls = ("https://0x0.st/b.png", "https://0x0.st/a.png")
        with patch(FROM_CONFIG, return_value=fake_backend), \
             patch("before_after.orchestrator.upload_before_after", new_callable=AsyncMock, return_value=urls), \
             patch("before_after.orchestrator.copy_to_clipboard", return_value=False):
            result = CliRunner().invoke(main, ["a.com", "b.com", "--markdown", "-o", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "| ![Before](https://0x0.st/b.png) | ![After](https://0x0.st/a.png) |" in result.output

    def test_capture_failure_closes_browser(self, failing_backend, tmp_path: Path):
        """Test that the browser is closed when a capture fails."""
        backend = failing_backend("https://b.com", CaptureBackendError("net::ERR_NAME_NOT_RESOLVED"))
        with patch(FROM_CONFIG, return_value=backend):
            result = CliRunner().invoke(main, ["a.com", "b.com", "-o", str(tmp_path)])

        assert result.exit_code == 1
        assert "ERR_NAME_NOT_RESOLVED" in result.output
        assert backend.closed
        assert list(tmp_path.iterdir()) == []
