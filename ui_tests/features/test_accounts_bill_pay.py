"""Bill payment from the customer's savings account."""
import re

import pytest
from playwright.async_api import expect

from parabank_e2e.pages.bill_pay import BillPayment

pytestmark = [pytest.mark.asyncio, pytest.mark.regression]

PAYMENT_AMOUNT = "25.00"


async def test_pay_bill_from_savings(bank):
    async def scenario(savings_account, base_page, home_page, bill_pay_page):
        payment = BillPayment.to_self(savings_account, savings_account.savings_account_id, PAYMENT_AMOUNT)

        await base_page.navigate_to("/overview.htm")
        await home_page.navigate_via_left_menu("Bill Pay")
        await expect(home_page.page).to_have_url(re.compile(r"billpay\.htm"))

        await bill_pay_page.pay_bill(payment)

        await expect(bill_pay_page.payment_complete_heading).to_be_visible()
        assert await bill_pay_page.payment_success_title_text() == "Bill Payment Complete"
        await expect(bill_pay_page.payment_success_details).to_contain_text(payment.confirmation())
        print(f"✅ {payment.confirmation()}")

    await bank.call(scenario)
