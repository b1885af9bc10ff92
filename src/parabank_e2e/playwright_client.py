"""
Direct Playwright client for the ParaBank suite.

Launches the configured browser in-process and hands out pages with the
suite's action and navigation timeouts applied.

Usage:
    from parabank_e2e.playwright_client import PlaywrightClient

    async with PlaywrightClient() as client:
        await client.page.goto(settings.url("/index.htm"))
"""
from __future__ import annotations

import logging
from typing import Optional

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

from parabank_e2e.config import settings

logger = logging.getLogger(__name__)

# Forced window size keeps layout-dependent locators stable
LAUNCH_ARGS = ["--window-position=0,0", "--window-size=1920,1080"]
VIEWPORT = {"width": 1920, "height": 1080}


class PlaywrightClient:
    """
    Playwright lifecycle owner: playwright -> browser -> context -> page.

    Example:
        async with PlaywrightClient(headless=True) as client:
            page = await client.new_page()
    """

    def __init__(
        self,
        browser_type: Optional[str] = None,
        headless: Optional[bool] = None,
        action_timeout: Optional[int] = None,
        navigation_timeout: Optional[int] = None,
        base_url: Optional[str] = None,
    ):
        """
        Args:
            browser_type: chromium, firefox or webkit (None = PLAYWRIGHT_BROWSER)
            headless: run headless (None = PLAYWRIGHT_HEADLESS)
            action_timeout: default timeout for clicks/fills in milliseconds
            navigation_timeout: default timeout for page loads in milliseconds
            base_url: base URL for relative page.goto() calls
        """
        self.browser_type = browser_type or settings.browser_name
        self.headless = settings.playwright_headless if headless is None else headless
        self.action_timeout = action_timeout or settings.action_timeout_ms
        self.navigation_timeout = navigation_timeout or settings.navigation_timeout_ms
        self.base_url = base_url

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    async def __aenter__(self) -> "PlaywrightClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def connect(self) -> None:
        """Launch the browser and open the default context and page."""
        self._playwright = await async_playwright().start()

        launcher = getattr(self._playwright, self.browser_type)
        launch_args = LAUNCH_ARGS if self.browser_type == "chromium" else []
        self._browser = await launcher.launch(headless=self.headless, args=launch_args)
        logger.info("Launched %s (headless=%s)", self.browser_type, self.headless)

        self._context = await self.new_context()
        self._page = await self._context.new_page()

    async def new_context(self, **kwargs) -> BrowserContext:
        """Create a browser context with the suite defaults applied."""
        if not self._browser:
            raise RuntimeError("Client not connected. Use 'async with' or call connect()")

        options = {"viewport": VIEWPORT, "ignore_https_errors": True}
        if self.base_url:
            options["base_url"] = self.base_url
        options.update(kwargs)

        context = await self._browser.new_context(**options)
        context.set_default_timeout(self.action_timeout)
        context.set_default_navigation_timeout(self.navigation_timeout)
        return context

    async def new_page(self) -> Page:
        if not self._context:
            raise RuntimeError("Client not connected. Use 'async with' or call connect()")
        return await self._context.new_page()

    async def close(self) -> None:
        """Close all connections and cleanup resources."""
        if self._page:
            await self._page.close()
            self._page = None

        if self._context:
            await self._context.close()
            self._context = None

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

    @property
    def browser(self) -> Browser:
        if not self._browser:
            raise RuntimeError("Client not connected")
        return self._browser

    @property
    def context(self) -> BrowserContext:
        if not self._context:
            raise RuntimeError("Client not connected")
        return self._context

    @property
    def page(self) -> Page:
        if not self._page:
            raise RuntimeError("Client not connected or page not created")
        return self._page

