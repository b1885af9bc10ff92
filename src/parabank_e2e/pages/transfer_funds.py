"""Transfer Funds form (transfer.htm)."""
from __future__ import annotations

from playwright.async_api import Locator

from parabank_e2e.pages.base import BasePage


def transfer_confirmation(amount: str, from_account_id: str, to_account_id: str) -> str:
    """Confirmation sentence ParaBank shows after a UI transfer."""
    return f"${amount} has been transferred from account #{from_account_id} to account #{to_account_id}."


class TransferFundsPage(BasePage):

    @property
    def amount_input(self) -> Locator:
        return self.page.locator("#amount")

    @property
    def from_account_dropdown(self) -> Locator:
        return self.page.locator("#fromAccountId")

    @property
    def to_account_dropdown(self) -> Locator:
        return self.page.locator("#toAccountId")

    @property
    def transfer_button(self) -> Locator:
        return self.page.locator('input[value="Transfer"]')

    @property
    def success_message(self) -> Locator:
        return self.page.locator("#showResult")

    @property
    def from_account_option_selected(self) -> Locator:
        return self.page.locator("#fromAccountId option:checked")

    @property
    def to_account_option_selected(self) -> Locator:
        return self.page.locator("#toAccountId option:checked")

    async def fill_transfer_form(self, amount: str, from_account_id: str, to_account_id: str) -> None:
        await self.from_account_dropdown.wait_for(state="visible")
        await self.amount_input.fill(amount)
        await self.from_account_dropdown.select_option(from_account_id)
        await self.to_account_dropdown.select_option(to_account_id)

    async def submit_transfer(self) -> None:
        await self.transfer_button.click()

    async def transfer_funds(self, amount: str, from_account_id: str, to_account_id: str) -> None:
        await self.fill_transfer_form(amount, from_account_id, to_account_id)
        await self.submit_transfer()

    async def from_account_selected_text(self) -> str:
        return await self._text(self.from_account_option_selected)

    async def to_account_selected_text(self) -> str:
        return await self._text(self.to_account_option_selected)

    async def success_message_text(self) -> str:
        return await self._text(self.success_message)
