"""Customer registration form (register.htm)."""
from __future__ import annotations

from playwright.async_api import Locator, expect

from parabank_e2e.identity import Identity
from parabank_e2e.pages.base import BasePage

REGISTRATION_SUCCESS_MESSAGE = "Your account was created successfully. You are now logged in."
DUPLICATE_USERNAME_MESSAGE = "This username already exists."
PASSWORD_MISMATCH_MESSAGE = "Passwords did not match."
WELCOME_TIMEOUT_MS = 3000


class RegisterPage(BasePage):
    """Registration form. Field ids contain dots, so attribute selectors are used."""

    def _field(self, field_id: str) -> Locator:
        return self.page.locator(f'input[id="{field_id}"]')

    @property
    def first_name_input(self) -> Locator:
        return self._field("customer.firstName")

    @property
    def last_name_input(self) -> Locator:
        return self._field("customer.lastName")

    @property
    def street_input(self) -> Locator:
        return self._field("customer.address.street")

    @property
    def city_input(self) -> Locator:
        return self._field("customer.address.city")

    @property
    def state_input(self) -> Locator:
        return self._field("customer.address.state")

    @property
    def zip_code_input(self) -> Locator:
        return self._field("customer.address.zipCode")

    @property
    def phone_input(self) -> Locator:
        return self._field("customer.phoneNumber")

    @property
    def ssn_input(self) -> Locator:
        return self._field("customer.ssn")

    @property
    def username_input(self) -> Locator:
        return self._field("customer.username")

    @property
    def password_input(self) -> Locator:
        return self._field("customer.password")

    @property
    def confirm_password_input(self) -> Locator:
        return self._field("repeatedPassword")

    @property
    def register_button(self) -> Locator:
        return self.page.locator('input[value="Register"]')

    @property
    def welcome_message(self) -> Locator:
        return self.page.locator("h1.title")

    @property
    def registration_success_message(self) -> Locator:
        return self.page.locator("#rightPanel p")

    @property
    def error_message(self) -> Locator:
        return self.page.locator(".error")

    async def fill_registration_form(self, identity: Identity) -> None:
        await self.first_name_input.fill(identity.first_name)
        await self.last_name_input.fill(identity.last_name)
        await self.street_input.fill(identity.address.street)
        await self.city_input.fill(identity.address.city)
        await self.state_input.fill(identity.address.state)
        await self.zip_code_input.fill(identity.address.zip_code)
        await self.phone_input.fill(identity.phone_number)
        await self.ssn_input.fill(identity.ssn)
        await self.username_input.fill(identity.username)
        await self.password_input.fill(identity.password)
        await self.confirm_password_input.fill(identity.confirm_password)

    async def submit_registration(self) -> None:
        await self.register_button.click()

    async def register_new_user(self, identity: Identity) -> None:
        await self.fill_registration_form(identity)
        await self.submit_registration()

    async def welcome_message_text(self) -> str:
        return await self._text(self.welcome_message)

    async def wait_for_welcome(self, username: str, timeout: float = WELCOME_TIMEOUT_MS) -> None:
        """Wait until the heading greets ``username``; raises AssertionError when it never does."""
        await expect(self.welcome_message).to_have_text(f"Welcome {username}", timeout=timeout)

    async def registration_success_message_text(self) -> str:
        return await self._text(self.registration_success_message.first)

    async def error_message_text(self) -> str:
        return await self._text(self.error_message.first)
