"""Account Details panel (activity.htm?id=...)."""
from __future__ import annotations

from playwright.async_api import Locator

from parabank_e2e.pages.base import BasePage


class AccountActivityPage(BasePage):
    """Values are filled by an XHR after the panel renders; reads wait for content."""

    @property
    def account_details_title(self) -> Locator:
        return self.page.get_by_role("heading", name="Account Details")

    @property
    def account_id(self) -> Locator:
        return self.page.locator("#accountId")

    @property
    def account_type(self) -> Locator:
        return self.page.locator("#accountType")

    @property
    def balance(self) -> Locator:
        return self.page.locator("#balance")

    @property
    def available_balance(self) -> Locator:
        return self.page.locator("#availableBalance")

    async def account_details_title_text(self) -> str:
        return await self._filled_text(self.account_details_title)

    async def account_id_text(self) -> str:
        return await self._filled_text(self.account_id)

    async def account_type_text(self) -> str:
        return await self._filled_text(self.account_type)

    async def balance_text(self) -> str:
        return await self._filled_text(self.balance)

    async def available_balance_text(self) -> str:
        return await self._filled_text(self.available_balance)
