"""Opening a savings account and checking its details."""
import re

import pytest
from playwright.async_api import expect

from parabank_e2e.pages.open_account import ACCOUNT_OPENED_MESSAGE

pytestmark = [pytest.mark.asyncio, pytest.mark.regression]

INITIAL_ACCOUNT_BALANCE = "$100.00"


class TestOpenAccount:

    async def test_open_savings_account_from_checking(self, bank):
        async def scenario(registered_user, base_page, login_page, home_page, open_account_page):
            await base_page.navigate_to("/index.htm")
            await login_page.login(registered_user.username, registered_user.password)
            await home_page.navigate_via_left_menu("Open New Account")
            await expect(home_page.page).to_have_url(re.compile(r"openaccount\.htm"))

            await open_account_page.open_account("SAVINGS", from_account_id=registered_user.checking_account_id)

            await expect(open_account_page.success_message).to_contain_text(ACCOUNT_OPENED_MESSAGE)
            new_id = await open_account_page.new_account_id()
            assert re.fullmatch(r"\d+", new_id), f"Account id should be numeric, got {new_id!r}"
            assert new_id != registered_user.checking_account_id
            print(f"✅ Opened savings account {new_id} for {registered_user.username}")

        await bank.call(scenario)

    async def test_new_savings_account_details(self, bank):
        """A new savings account starts at the default balance."""

        async def scenario(savings_account, base_page, account_activity_page):
            await base_page.navigate_to(f"/activity.htm?id={savings_account.savings_account_id}")

            await expect(account_activity_page.account_details_title).to_be_visible()
            assert await account_activity_page.account_id_text() == savings_account.savings_account_id
            assert await account_activity_page.account_type_text() == "SAVINGS"

            balance = await account_activity_page.balance_text()
            assert re.fullmatch(r"\$\d+\.\d{2}", balance)
            assert balance == INITIAL_ACCOUNT_BALANCE
            assert await account_activity_page.available_balance_text() == INITIAL_ACCOUNT_BALANCE

        await bank.call(scenario)

    async def test_new_account_is_listed_in_overview(self, bank):
        async def scenario(savings_account, base_page, accounts_overview_page):
            await base_page.navigate_to("/overview.htm")

            assert await accounts_overview_page.is_table_visible()
            balance = await accounts_overview_page.account_balance(savings_account.savings_account_id)
            assert balance == INITIAL_ACCOUNT_BALANCE

        await bank.call(scenario)
