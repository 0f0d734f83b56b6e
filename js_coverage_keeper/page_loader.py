"""Open instrumented pages in Chromium so their coverage can be gathered."""

import logging
from urllib.parse import urlparse

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page, async_playwright

logger = logging.getLogger(__name__)

SUPPORTED_SCHEMES = ("http", "https", "file")


class PageLoadError(Exception):
    """An instrumented page could not be opened."""

    def __init__(self, message: str, phase: str = "loading"):
        super().__init__(message)
        self.phase = phase


class PageLoader:
    """Own one Chromium instance for the lifetime of an ``async with`` block.

    Pages opened with ``load()`` share the browser and are closed with it.
    """

    def __init__(self, wait_until: str = "load", headless: bool = True):
        self.wait_until = wait_until
        self.headless = headless
        self._playwright = None
        self._browser = None

    async def __aenter__(self):
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(headless=self.headless)
        logger.info(f"Chromium started (headless={self.headless})")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Shut down Chromium and Playwright; safe to call twice."""
        if self._browser:
            await self._browser.close()
            self._browser = None
        if self._playwright:
            await self._playwright.stop()
            self._playwright = None
        logger.info("Chromium stopped")

    async def load(self, url: str) -> Page:
        """Open ``url`` in a new tab and wait for ``wait_until``.

        Raises:
            PageLoadError: phase "validation" for unsupported URLs, "loading"
                when navigation fails
        """
        scheme = urlparse(url).scheme
        if scheme not in SUPPORTED_SCHEMES:
            logger.error(f"Unsupported URL {url!r}")
            raise PageLoadError(f"Invalid URL: {url}", phase="validation")

        page = await self._browser.new_page()
        try:
            await page.goto(url, wait_until=self.wait_until)
        except PlaywrightError as e:
            await page.close()
            logger.error(f"Navigation to {url} failed: {e}")
            raise PageLoadError(str(e), phase="loading") from e

        logger.info(f"Opened {url}")
        return page
