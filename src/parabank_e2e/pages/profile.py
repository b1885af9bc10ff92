"""Update Contact Info form (updateprofile.htm)."""
from __future__ import annotations

from playwright.async_api import Locator, expect

from parabank_e2e.identity import Identity
from parabank_e2e.pages.base import BasePage

PROFILE_UPDATED_MESSAGE = "Your updated address and phone number have been added to the system."


class ProfilePage(BasePage):

    def _field(self, field_id: str) -> Locator:
        return self.page.locator(f'[id="{field_id}"]')

    @property
    def page_title(self) -> Locator:
        return self.page.locator("h1.title")

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
    def phone_number_input(self) -> Locator:
        return self._field("customer.phoneNumber")

    @property
    def update_profile_button(self) -> Locator:
        return self.page.locator('input.button[value="Update Profile"]')

    @property
    def success_message(self) -> Locator:
        return self.page.locator("#rightPanel p", has_text=PROFILE_UPDATED_MESSAGE)

    def field_error(self, field: str) -> Locator:
        """Inline validation error, e.g. field_error("firstName")."""
        return self.page.locator(f"#{field}-error")

    async def fill_profile_form(self, identity: Identity) -> None:
        # The form is pre-filled by an XHR; wait so it does not overwrite our values
        await expect(self.first_name_input).not_to_have_value("")
        await self.first_name_input.fill(identity.first_name)
        await self.last_name_input.fill(identity.last_name)
        await self.street_input.fill(identity.address.street)
        await self.city_input.fill(identity.address.city)
        await self.state_input.fill(identity.address.state)
        await self.zip_code_input.fill(identity.address.zip_code)
        await self.phone_number_input.fill(identity.phone_number)

    async def click_update_profile(self) -> None:
        await self.update_profile_button.click()

    async def update_profile(self, identity: Identity) -> None:
        await self.fill_profile_form(identity)
        await self.click_update_profile()

    async def verify_on_profile_page(self) -> None:
        await expect(self.page_title.first).to_have_text("Update Profile")

    async def success_message_text(self) -> str:
        return await self._text(self.success_message)
