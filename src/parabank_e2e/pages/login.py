"""Login panel on the ParaBank index page."""
from __future__ import annotations

from playwright.async_api import Locator

from parabank_e2e.pages.base import BasePage

INVALID_CREDENTIALS_MESSAGE = "The username and password could not be verified."


class LoginPage(BasePage):

    @property
    def username_input(self) -> Locator:
        return self.page.locator('input[name="username"]')

    @property
    def password_input(self) -> Locator:
        return self.page.locator('input[name="password"]')

    @property
    def login_button(self) -> Locator:
        return self.page.locator('input[value="Log In"]')

    @property
    def register_link(self) -> Locator:
        return self.page.get_by_role("link", name="Register")

    @property
    def error_message(self) -> Locator:
        return self.page.locator(".error")

    async def login(self, username: str, password: str) -> None:
        await self.username_input.fill(username)
        await self.password_input.fill(password)
        await self.login_button.click()

    async def click_register_link(self) -> None:
        await self.register_link.click()

    async def error_message_text(self) -> str:
        return await self._text(self.error_message)
