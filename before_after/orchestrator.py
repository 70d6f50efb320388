"""Workflow orchestrator — capture, save, upload, and tabulate a before/after pair."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import AsyncIterator, Optional

from before_after.capture.browser import CaptureBackend, PlaywrightBackend
from before_after.capture.capture import capture_before_after, capture_screenshot
from before_after.clipboard import copy_to_clipboard
from before_after.filename import generate_filename
from before_after.markdown import ImageInput, from_images, generate_markdown
from before_after.models.capture import (
    BeforeAfterRequest,
    BeforeAfterResult,
    CaptureRequest,
    CaptureResult,
    FromImagesResult,
)
from before_after.models.config import ToolConfig
from before_after.upload import upload_before_after

logger = logging.getLogger(__name__)


class BeforeAndAfter:
    """Entry point for library use and the CLI.

    A backend passed in is borrowed and left open. Without one, each
    capture call launches its own Playwright session and closes it when
    done, success or not.
    """

    def __init__(self, config: ToolConfig | None = None, backend: CaptureBackend | None = None):
        self.config = config or ToolConfig()
        self.backend = backend

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[CaptureBackend]:
        if self.backend is not None:
            yield self.backend
            return
        async with PlaywrightBackend.from_config(self.config) as backend:
            yield backend

    async def capture(self, request: CaptureRequest | str) -> CaptureResult:
        if isinstance(request, str):
            request = CaptureRequest(url=request)
        if request.viewport is None:
            request = request.model_copy(update={"viewport": self.config.viewport})
        async with self._session() as backend:
            return await capture_screenshot(request, backend)

    async def capture_before_after(self, pair: BeforeAfterRequest | dict) -> BeforeAfterResult:
        """Capture both sides; the configured viewport is the shared fallback."""
        if isinstance(pair, dict):
            pair = BeforeAfterRequest(**pair)
        if pair.viewport is None:
            pair = pair.model_copy(update={"viewport": self.config.viewport})
        async with self._session() as backend:
            return await capture_before_after(pair, backend)

    def from_images(
        self,
        before: ImageInput,
        after: ImageInput,
        labels: Optional[dict[str, str]] = None,
    ) -> FromImagesResult:
        return from_images(before, after, labels={**self.config.labels, **(labels or {})})

    def generate_markdown(self, before_label: str, after_label: str, before_ref: str, after_ref: str) -> str:
        return generate_markdown(before_label, after_label, before_ref, after_ref)

    def save_pair(
        self,
        result: BeforeAfterResult,
        output_dir: str | Path | None = None,
        timestamp: datetime | None = None,
    ) -> tuple[Path, Path]:
        """Write both images to ``output_dir`` under generated names sharing one timestamp."""
        out_dir = Path(output_dir).expanduser() if output_dir else self.config.output_path
        out_dir.mkdir(parents=True, exist_ok=True)
        timestamp = timestamp or datetime.now(timezone.utc)

        paths = []
        for suffix, capture in (("before", result.before), ("after", result.after)):
            name = generate_filename(
                url=capture.url,
                element_id=capture.selector,
                suffix=suffix,
                timestamp=timestamp,
            )
            path = out_dir / name
            path.write_bytes(capture.image)
            logger.debug("Saved %s", path)
            paths.append(path)
        return paths[0], paths[1]

    async def upload_pair(
        self,
        before: tuple[bytes, str],
        after: tuple[bytes, str],
        upload_url: Optional[str] = None,
    ) -> tuple[str, str]:
        destination = self.config.resolved_upload_url(upload_url)
        logger.info("Uploading images to %s", destination)
        return await upload_before_after(before, after, destination)

    def run_compare(
        self,
        before: CaptureRequest,
        after: CaptureRequest,
        output_dir: str | Path | None = None,
        markdown: bool = False,
        upload_url: Optional[str] = None,
    ) -> dict:
        """Capture, save, and optionally upload + tabulate. Blocking wrapper."""
        return asyncio.run(self._run_compare(before, after, output_dir, markdown, upload_url))

    async def _run_compare(
        self,
        before: CaptureRequest,
        after: CaptureRequest,
        output_dir: str | Path | None,
        markdown: bool,
        upload_url: Optional[str],
    ) -> dict:
        result = await self.capture_before_after(BeforeAfterRequest(before=before, after=after))
        before_path, after_path = self.save_pair(result, output_dir)

        outcome: dict = {
            "before_path": str(before_path),
            "after_path": str(after_path),
        }
        if not markdown:
            return outcome

        before_url, after_url = await self.upload_pair(
            (result.before.image, before_path.name),
            (result.after.image, after_path.name),
            upload_url,
        )
        table = generate_markdown(
            self.config.labels["before"], self.config.labels["after"], before_url, after_url
        )
        outcome.update({
            "before_url": before_url,
            "after_url": after_url,
            "markdown": table,
            "copied": copy_to_clipboard(table),
        })
        return outcome
