"""Open New Account form (openaccount.htm)."""
from __future__ import annotations

from typing import Optional

from playwright.async_api import Locator, expect

from parabank_e2e.pages.base import BasePage
from parabank_e2e.retry import CLICK_INTERVALS, CLICK_TIMEOUT, retry_until_passes

ACCOUNT_OPENED_MESSAGE = "Congratulations, your account is now open."
ACCOUNT_TYPES = ("CHECKING", "SAVINGS")


class OpenAccountPage(BasePage):

    @property
    def account_type_dropdown(self) -> Locator:
        return self.page.locator("#type")

    @property
    def from_account_dropdown(self) -> Locator:
        return self.page.locator("#fromAccountId")

    @property
    def open_new_account_button(self) -> Locator:
        return self.page.get_by_role("button", name="Open New Account")

    @property
    def success_message(self) -> Locator:
        return self.page.locator("#rightPanel p", has_text=ACCOUNT_OPENED_MESSAGE)

    @property
    def new_account_id_link(self) -> Locator:
        return self.page.locator("#newAccountId")

    async def open_account(self, account_type: str = "SAVINGS", from_account_id: Optional[str] = None) -> None:
        """Submit the form. The funding account is selected when given.

        The button is occasionally detached while the dropdowns re-render,
        so the click is retried briefly.
        """
        if account_type not in ACCOUNT_TYPES:
            raise ValueError(f"Unknown account type {account_type!r}; expected one of {ACCOUNT_TYPES}")
        await self.account_type_dropdown.select_option(account_type)

        if from_account_id:
            await expect(self.from_account_dropdown.locator("option")).not_to_have_count(0)
            await self.from_account_dropdown.select_option(from_account_id)

        await retry_until_passes(
            self.open_new_account_button.click,
            intervals=CLICK_INTERVALS,
            timeout=CLICK_TIMEOUT,
            description="click 'Open New Account'",
        )

    async def success_message_text(self) -> str:
        return await self._text(self.success_message)

    async def new_account_id(self) -> str:
        return await self._text(self.new_account_id_link)
