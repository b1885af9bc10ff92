"""
Concrete ParaBank fixture sets.

- ``page_fixtures``: one page object per screen, built from the seed ``page``
- ``api_fixtures``: ``api_request`` built from the seed ``http_client``
- ``business_fixtures``: users and accounts created through the UI
- ``bank_suite``: all three merged into one namespace

Scenarios open ``bank_suite.scope(page=..., http_client=...)`` and ask for
fixtures by name; see ``ui_tests/conftest.py``.
"""
from __future__ import annotations

import logging
import re

from parabank_e2e.api_client import ApiClient
from parabank_e2e.config import settings
from parabank_e2e.credentials import CredentialRecord, CredentialStore
from parabank_e2e.exceptions import FixtureSetupError, RetryExhaustedError
from parabank_e2e.fixtures import FixtureRegistry, merge_registries
from parabank_e2e.identity import Identity, generate_identity
from parabank_e2e.pages import (
    AccountActivityPage,
    AccountsOverviewPage,
    BasePage,
    BillPayPage,
    HomePage,
    LoginPage,
    OpenAccountPage,
    ProfilePage,
    RegisterPage,
    TransferFundsPage,
)
from parabank_e2e.retry import SETUP_INTERVALS, SETUP_TIMEOUT, retry_until_passes

logger = logging.getLogger(__name__)

ACCOUNT_ID_PATTERN = re.compile(r"^\d+$")

page_fixtures = FixtureRegistry("pages")
api_fixtures = FixtureRegistry("api")
business_fixtures = FixtureRegistry("business")


# ---- pages ------------------------------------------------------------------
def _page_fixture(name: str, page_class: type) -> None:
    def build(page):
        return page_class(page)

    build.__doc__ = f"{page_class.__name__} bound to the test's page."
    page_fixtures.fixture(build, name=name, requires=("page",))


for _name, _page_class in (
    ("base_page", BasePage),
    ("login_page", LoginPage),
    ("register_page", RegisterPage),
    ("home_page", HomePage),
    ("open_account_page", OpenAccountPage),
    ("accounts_overview_page", AccountsOverviewPage),
    ("transfer_funds_page", TransferFundsPage),
    ("bill_pay_page", BillPayPage),
    ("account_activity_page", AccountActivityPage),
    ("profile_page", ProfilePage),
):
    _page_fixture(_name, _page_class)


# ---- api --------------------------------------------------------------------
@api_fixtures.fixture
async def api_request(http_client):
    """ApiClient over the test's httpx client."""
    async with ApiClient(client=http_client) as client:
        yield client


# ---- business ---------------------------------------------------------------
@business_fixtures.fixture
def credential_store():
    """Credential file configured by CREDENTIALS_FILE."""
    return CredentialStore(settings.credentials_file)


def _require_account_id(value: str, fixture: str, username: str) -> str:
    if not ACCOUNT_ID_PATTERN.match(value or ""):
        raise FixtureSetupError(fixture, f"expected a numeric account id, got {value!r}", user=username)
    return value


@business_fixtures.fixture
async def registered_user(base_page, login_page, register_page, home_page, credential_store) -> Identity:
    """A freshly registered customer with its checking account id.

    Every attempt registers a new identity, so a username that was half
    created by a failed attempt is never submitted again. A session left
    open by such an attempt is logged out first, since the register link
    is only offered to anonymous visitors.
    """
    attempted: list[str] = []

    async def register_once() -> Identity:
        identity = generate_identity()
        attempted.append(identity.username)
        await base_page.navigate_to("/index.htm")
        if await home_page.is_user_logged_in():
            await home_page.click_logout()
        await login_page.click_register_link()
        await register_page.register_new_user(identity)
        await register_page.wait_for_welcome(identity.username)
        return identity

    try:
        identity = await retry_until_passes(
            register_once,
            intervals=SETUP_INTERVALS,
            timeout=SETUP_TIMEOUT,
            description="registered_user",
        )
    except RetryExhaustedError as exc:
        raise RetryExhaustedError(
            "registered_user", exc.attempts, exc.last_error, user=", ".join(attempted)
        ) from exc.last_error
    logger.info("Registered %s", identity.username)

    await home_page.navigate_via_left_menu("Accounts Overview")
    checking_id = _require_account_id(await home_page.first_account_id(), "registered_user", identity.username)
    identity = identity.with_accounts(checking=checking_id)

    credential_store.append(identity)
    await home_page.click_logout()
    return identity


@business_fixtures.fixture
async def savings_account(registered_user, login_page, home_page, open_account_page, credential_store) -> Identity:
    """A SAVINGS account funded from the registered user's checking account.

    The customer stays logged in afterwards.
    """
    user = registered_user
    await login_page.login(user.username, user.password)
    await home_page.navigate_via_left_menu("Open New Account")
    await open_account_page.open_account("SAVINGS", from_account_id=user.checking_account_id)
    await open_account_page.success_message_text()

    savings_id = _require_account_id(await open_account_page.new_account_id(), "savings_account", user.username)
    user = user.with_accounts(savings=savings_id)
    credential_store.append(CredentialRecord.from_identity(user))
    logger.info("Opened savings account %s for %s", savings_id, user.username)
    return user


bank_suite = merge_registries(page_fixtures, business_fixtures, api_fixtures, name="bank")
