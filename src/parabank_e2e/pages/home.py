"""Logged-in shell: left menu, welcome text and the accounts table."""
from __future__ import annotations

from playwright.async_api import Locator

from parabank_e2e.pages.base import BasePage

# Left menu entry -> (page heading, url fragment)
LEFT_MENU = {
    "Open New Account": ("Open New Account", "openaccount.htm"),
    "Accounts Overview": ("Accounts Overview", "overview.htm"),
    "Transfer Funds": ("Transfer Funds", "transfer.htm"),
    "Bill Pay": ("Bill Payment Service", "billpay.htm"),
    "Find Transactions": ("Find Transactions", "findtrans.htm"),
    "Update Contact Info": ("Update Profile", "updateprofile.htm"),
    "Request Loan": ("Apply for a Loan", "requestloan.htm"),
}


class HomePage(BasePage):

    @property
    def logout_link(self) -> Locator:
        return self.page.get_by_role("link", name="Log Out")

    @property
    def welcome_message(self) -> Locator:
        return self.page.locator("#leftPanel .smallText")

    @property
    def page_title(self) -> Locator:
        return self.page.locator("h1.title")

    @property
    def account_table_rows(self) -> Locator:
        return self.page.locator("#accountTable tbody tr")

    def heading(self, name: str) -> Locator:
        return self.page.get_by_role("heading", name=name)

    async def welcome_message_text(self) -> str:
        return await self._text(self.welcome_message)

    async def click_logout(self) -> None:
        await self.logout_link.click()

    async def is_user_logged_in(self) -> bool:
        return await self.logout_link.is_visible()

    async def navigate_via_left_menu(self, link_name: str) -> None:
        await self.page.locator("#leftPanel").get_by_role("link", name=link_name).click()

    async def first_account_id(self) -> str:
        """Id of the first row in the accounts table (the default checking account)."""
        return await self._text(self.account_table_rows.first.locator("td a"))

    async def page_title_text(self) -> str:
        return await self._text(self.page_title.first)
