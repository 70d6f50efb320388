"""Browser capture backend — renders pages with Playwright and returns PNG bytes."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from playwright.async_api import Browser, Error as PlaywrightError, Page, Playwright, async_playwright

from before_after.errors import CaptureBackendError, ElementNotFoundError
from before_after.models.capture import ViewportSize
from before_after.models.config import ToolConfig

logger = logging.getLogger(__name__)


class CaptureBackend(Protocol):
    """Anything that can turn a URL into screenshot bytes."""

    async def capture(
        self,
        url: str,
        viewport: ViewportSize,
        full_page: bool = False,
        selector: Optional[str] = None,
    ) -> bytes:
        ...


class PlaywrightBackend:
    """One headless Chromium with a single page, reused across captures.

    The page holds one viewport and one navigation at a time, so captures
    against the same backend must run one after another.
    """

    def __init__(
        self,
        headless: bool = True,
        settle_ms: int = 500,
        selector_settle_ms: int = 200,
        selector_timeout_ms: int = 5000,
    ):
        self.headless = headless
        self.settle_ms = settle_ms
        self.selector_settle_ms = selector_settle_ms
        self.selector_timeout_ms = selector_timeout_ms
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._page: Page | None = None

    @classmethod
    def from_config(cls, config: ToolConfig) -> "PlaywrightBackend":
        return cls(
            headless=config.headless,
            settle_ms=config.settle_ms,
            selector_settle_ms=config.selector_settle_ms,
            selector_timeout_ms=config.selector_timeout_ms,
        )

    async def __aenter__(self) -> "PlaywrightBackend":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _ensure_page(self) -> Page:
        if self._page is None:
            logger.debug("Launching Chromium (headless=%s)", self.headless)
            try:
                self._playwright = await async_playwright().start()
                self._browser = await self._playwright.chromium.launch(headless=self.headless)
                self._page = await self._browser.new_page()
            except PlaywrightError as e:
                await self.close()
                raise CaptureBackendError(str(e)) from e
        return self._page

    async def capture(
        self,
        url: str,
        viewport: ViewportSize,
        full_page: bool = False,
        selector: Optional[str] = None,
    ) -> bytes:
        page = await self._ensure_page()
        try:
            await page.set_viewport_size({"width": viewport.width, "height": viewport.height})
            logger.debug("Navigating to %s at %dx%d", url, viewport.width, viewport.height)
            await page.goto(url)
            # Fonts and client-side rendering
            await page.wait_for_timeout(self.settle_ms)
        except PlaywrightError as e:
            raise CaptureBackendError(str(e)) from e

        if selector:
            try:
                await page.locator(selector).first.scroll_into_view_if_needed(
                    timeout=self.selector_timeout_ms
                )
            except PlaywrightError as e:
                raise ElementNotFoundError(selector) from e
            await page.wait_for_timeout(self.selector_settle_ms)

        try:
            return await page.screenshot(full_page=full_page, type="png")
        except PlaywrightError as e:
            raise CaptureBackendError(str(e)) from e

    async def close(self) -> None:
        """Shut down the browser. Safe to call when nothing was launched."""
        page, browser, playwright = self._page, self._browser, self._playwright
        self._page = self._browser = self._playwright = None
        try:
            if browser is not None:
                await browser.close()
        except PlaywrightError as e:
            logger.debug("Browser close failed: %s", e)
        finally:
            if playwright is not None:
                await playwright.stop()
