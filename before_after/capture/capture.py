"""Capture orchestration — resolve viewports and sequence before/after captures."""

from __future__ import annotations

import logging

from before_after.models.capture import (
    BeforeAfterRequest,
    BeforeAfterResult,
    CaptureRequest,
    CaptureResult,
)
from before_after.viewport import resolve_viewport

from .browser import CaptureBackend

logger = logging.getLogger(__name__)


async def capture_screenshot(request: CaptureRequest, backend: CaptureBackend) -> CaptureResult:
    """Capture a single request and record the viewport actually used."""
    viewport = resolve_viewport(request.viewport)
    logger.debug(
        "Capturing %s%s at %dx%d",
        request.url,
        f" ({request.selector})" if request.selector else "",
        viewport.width, viewport.height,
    )
    image = await backend.capture(
        request.url,
        viewport,
        full_page=request.full_page,
        selector=request.selector,
    )
    return CaptureResult(
        image=image,
        viewport=viewport,
        url=request.url,
        selector=request.selector,
        full_page=request.full_page,
    )


def _with_shared_viewport(request: CaptureRequest, shared) -> CaptureRequest:
    if shared and not request.viewport:
        return request.model_copy(update={"viewport": shared})
    return request


async def capture_before_after(
    pair: BeforeAfterRequest | dict,
    backend: CaptureBackend,
) -> BeforeAfterResult:
    """Capture both sides of a pair, ``before`` strictly first.

    The pair-level viewport fills in for a side that has none of its own.
    Either capture failing raises and no partial result is returned.
    """
    if isinstance(pair, dict):
        pair = BeforeAfterRequest(**pair)

    before_req = _with_shared_viewport(pair.before, pair.viewport)
    after_req = _with_shared_viewport(pair.after, pair.viewport)

    # Sequential: both sides may share one browser page
    before = await capture_screenshot(before_req, backend)
    after = await capture_screenshot(after_req, backend)
    return BeforeAfterResult(before=before, after=after)
