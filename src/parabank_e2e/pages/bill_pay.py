"""Bill Pay form (billpay.htm)."""
from __future__ import annotations

from dataclasses import dataclass

from playwright.async_api import Locator

from parabank_e2e.identity import Address, Identity
from parabank_e2e.pages.base import BasePage


@dataclass(frozen=True)
class BillPayment:
    payee_name: str
    address: Address
    phone_number: str
    account_number: str
    amount: str
    from_account_id: str

    @classmethod
    def to_self(cls, identity: Identity, account_id: str, amount: str) -> "BillPayment":
        """Pay the customer's own account, funded from the same account."""
        return cls(
            payee_name=identity.full_name,
            address=identity.address,
            phone_number=identity.phone_number,
            account_number=account_id,
            amount=amount,
            from_account_id=account_id,
        )

    def confirmation(self) -> str:
        return (
            f"Bill Payment to {self.payee_name} in the amount of ${self.amount} "
            f"from account {self.from_account_id} was successful."
        )


class BillPayPage(BasePage):

    def _input(self, name: str) -> Locator:
        return self.page.locator(f'input[name="{name}"]')

    @property
    def payee_name_input(self) -> Locator:
        return self._input("payee.name")

    @property
    def payee_street_input(self) -> Locator:
        return self._input("payee.address.street")

    @property
    def payee_city_input(self) -> Locator:
        return self._input("payee.address.city")

    @property
    def payee_state_input(self) -> Locator:
        return self._input("payee.address.state")

    @property
    def payee_zip_code_input(self) -> Locator:
        return self._input("payee.address.zipCode")

    @property
    def payee_phone_number_input(self) -> Locator:
        return self.page.locator('[name="payee.contactInformation.phoneNumber"]')

    @property
    def payee_account_number_input(self) -> Locator:
        return self._input("payee.accountNumber")

    @property
    def verify_account_number_input(self) -> Locator:
        return self._input("verifyAccount")

    @property
    def amount_input(self) -> Locator:
        return self._input("amount")

    @property
    def from_account_dropdown(self) -> Locator:
        return self.page.locator('select[name="fromAccountId"]')

    @property
    def send_payment_button(self) -> Locator:
        return self.page.locator('input[value="Send Payment"]')

    @property
    def payment_complete_heading(self) -> Locator:
        return self.page.get_by_role("heading", name="Bill Payment Complete")

    @property
    def payment_success_title(self) -> Locator:
        return self.page.locator("#billpayResult h1.title")

    @property
    def payment_success_details(self) -> Locator:
        return self.page.locator("#billpayResult p").first

    async def fill_bill_payment_form(self, payment: BillPayment) -> None:
        await self.payee_name_input.fill(payment.payee_name)
        await self.payee_street_input.fill(payment.address.street)
        await self.payee_city_input.fill(payment.address.city)
        await self.payee_state_input.fill(payment.address.state)
        await self.payee_zip_code_input.fill(payment.address.zip_code)
        await self.payee_phone_number_input.fill(payment.phone_number)
        await self.payee_account_number_input.fill(payment.account_number)
        await self.verify_account_number_input.fill(payment.account_number)
        await self.amount_input.fill(str(payment.amount))
        await self.from_account_dropdown.select_option(payment.from_account_id)

    async def submit_payment(self) -> None:
        await self.send_payment_button.click()

    async def pay_bill(self, payment: BillPayment) -> None:
        await self.fill_bill_payment_form(payment)
        await self.submit_payment()

    async def payment_success_title_text(self) -> str:
        return await self._text(self.payment_success_title)

    async def payment_success_details_text(self) -> str:
        return await self._text(self.payment_success_details)
