"""Accounts Overview table (overview.htm)."""
from __future__ import annotations

from playwright.async_api import Locator

from parabank_e2e.pages.base import BasePage

BALANCE_COLUMN = 1
AVAILABLE_AMOUNT_COLUMN = 2


class AccountsOverviewPage(BasePage):

    @property
    def account_table(self) -> Locator:
        return self.page.locator("#accountTable")

    def account_row(self, account_id: str) -> Locator:
        """Row whose account link points at ``account_id``."""
        return self.page.locator(
            "#accountTable tbody tr",
            has=self.page.locator(f'a[href*="id={account_id}"]'),
        )

    async def _account_field(self, account_id: str, column: int) -> str:
        return await self._text(self.account_row(account_id).locator("td").nth(column))

    async def account_balance(self, account_id: str) -> str:
        return await self._account_field(account_id, BALANCE_COLUMN)

    async def available_amount(self, account_id: str) -> str:
        return await self._account_field(account_id, AVAILABLE_AMOUNT_COLUMN)

    async def is_table_visible(self) -> bool:
        return await self.account_table.is_visible()
