"""Shared page behaviour: navigation, trimmed text reads, error wrapping."""
from __future__ import annotations

import logging
import re
from typing import Any, Dict

from playwright.async_api import Locator, Page, TimeoutError as PlaywrightTimeout, expect

from parabank_e2e.config import settings
from parabank_e2e.exceptions import ToolError

logger = logging.getLogger(__name__)

_HAS_CONTENT = re.compile(r"[\w$]")


class BasePage:
    """Common utilities for every ParaBank screen.

    Locators are exposed as properties so each access builds a fresh
    Locator; ParaBank renders most panels after an XHR round-trip.
    """

    def __init__(self, page: Page) -> None:
        self.page = page

    async def navigate_to(self, url_path: str = "", wait_until: str = "domcontentloaded") -> Dict[str, Any]:
        """Navigate to a path below APP_BASE_URL.

        Raises:
            MissingSettingError: APP_BASE_URL is not configured
            ToolError: navigation failed or timed out
        """
        url = settings.url(url_path if url_path.startswith("/") else f"/{url_path}")
        try:
            response = await self.page.goto(
                url,
                wait_until=wait_until,
                timeout=settings.navigation_timeout_ms,
            )
        except PlaywrightTimeout as exc:
            raise ToolError(name="goto", payload={"url": url, "wait_until": wait_until}, message=str(exc)) from exc
        logger.debug("Navigated to %s", self.page.url)
        return {"url": self.page.url, "status": response.status if response else None}

    async def title(self) -> str:
        return await self.page.title()

    async def wait_for_load_state(self, state: str = "load") -> None:
        await self.page.wait_for_load_state(state)

    async def _text(self, locator: Locator) -> str:
        """Wait for visibility and return the trimmed text content."""
        await locator.wait_for(state="visible")
        text = await locator.text_content()
        return text.strip() if text else ""

    async def _filled_text(self, locator: Locator) -> str:
        """Like _text, but also waits until the element shows real content.

        Avoids reading an empty cell while the data fetch is still running.
        """
        await locator.wait_for(state="visible")
        await expect(locator).to_have_text(_HAS_CONTENT)
        return await self._text(locator)
