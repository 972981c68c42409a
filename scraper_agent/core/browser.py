"""Browser session owned by one agent: start() gives a page, close() releases everything."""
import logging
from typing import Dict, Optional

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

from scraper_agent.errors import BrowserSessionError

LOGGER = logging.getLogger(__name__)

DEFAULT_VIEWPORT = {"width": 1280, "height": 800}


class BrowserSession:
    """Lazily launched Chromium with a single page."""

    def __init__(
        self,
        headless: bool = False,
        slow_mo_ms: int = 0,
        viewport: Optional[Dict[str, int]] = None,
    ):
        self.headless = headless
        self.slow_mo_ms = slow_mo_ms
        self.viewport = viewport or dict(DEFAULT_VIEWPORT)
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self.page: Optional[Page] = None

    @property
    def started(self) -> bool:
        return self.page is not None

    async def start(self) -> Page:
        if self.page is not None:
            return self.page
        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self.headless, slow_mo=self.slow_mo_ms
            )
            self._context = await self._browser.new_context(viewport=self.viewport)
            self.page = await self._context.new_page()
        except Exception as e:
            await self.close()
            raise BrowserSessionError(f"Failed to initialize page: {type(e).__name__}: {e}") from e
        LOGGER.debug("browser started (headless=%s)", self.headless)
        return self.page

    async def close(self) -> None:
        browser, playwright = self._browser, self._playwright
        self._playwright = None
        self._browser = None
        self._context = None
        self.page = None
        if browser is not None:
            try:
                await browser.close()
            except Exception as e:
                LOGGER.warning("browser close failed: %s", e)
        if playwright is not None:
            await playwright.stop()
