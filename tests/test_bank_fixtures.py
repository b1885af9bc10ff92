"""Tests for the business fixtures, driven through fake page objects."""
import pytest

from parabank_e2e.bank_fixtures import bank_suite, business_fixtures, page_fixtures
from parabank_e2e.config import settings
from parabank_e2e.credentials import CredentialStore
from parabank_e2e.exceptions import FixtureSetupError
from parabank_e2e.fixtures import FixtureRegistry, merge_registries

pytestmark = pytest.mark.asyncio


class FakeBank:
    """Just enough ParaBank behaviour for the business fixtures."""

    def __init__(self, checking_id="13344", savings_id="13455"):
        self.checking_id = checking_id
        self.savings_id = savings_id
        self.calls = []
        self.registered = []
        self.logged_in = None


class FakeBasePage:
    def __init__(self, bank):
        self.bank = bank

    async def navigate_to(self, url_path):
        self.bank.calls.append(("navigate_to", url_path))


class FakeLoginPage:
    def __init__(self, bank):
        self.bank = bank

    async def click_register_link(self):
        if self.bank.logged_in is not None:
            raise AssertionError("register link is hidden while logged in")
        self.bank.calls.append(("click_register_link",))

    async def login(self, username, password):
        self.bank.calls.append(("login", username))
        self.bank.logged_in = username


class FakeRegisterPage:
    def __init__(self, bank):
        self.bank = bank

    async def register_new_user(self, identity):
        self.bank.registered.append(identity)
        self.bank.logged_in = identity.username

    async def welcome_message_text(self):
        return f"Welcome {self.bank.logged_in}"

    async def wait_for_welcome(self, username, timeout=None):
        heading = await self.welcome_message_text()
        if heading != f"Welcome {username}":
            raise AssertionError(f"heading stayed {heading!r}")


class FakeHomePage:
    def __init__(self, bank):
        self.bank = bank

    async def navigate_via_left_menu(self, link_name):
        self.bank.calls.append(("menu", link_name))

    async def first_account_id(self):
        return self.bank.checking_id

    async def click_logout(self):
        self.bank.calls.append(("logout",))
        self.bank.logged_in = None

    async def is_user_logged_in(self):
        return self.bank.logged_in is not None


class FakeOpenAccountPage:
    def __init__(self, bank):
        self.bank = bank

    async def open_account(self, account_type="SAVINGS", from_account_id=None):
        self.bank.calls.append(("open_account", account_type, from_account_id))

    async def success_message_text(self):
        return "Congratulations, your account is now open."

    async def new_account_id(self):
        return self.bank.savings_id


def fake_pages(bank):
    registry = FixtureRegistry("fake-pages")
    for name, page_class in (
        ("base_page", FakeBasePage),
        ("login_page", FakeLoginPage),
        ("register_page", FakeRegisterPage),
        ("home_page", FakeHomePage),
        ("open_account_page", FakeOpenAccountPage),
    ):
        registry.fixture(lambda page_class=page_class: page_class(bank), name=name, requires=())
    return registry


@pytest.fixture
def store_path(tmp_path):
    path = tmp_path / "credentials.json"
    with settings.use_overrides(CREDENTIALS_FILE=str(path)):
        yield path


async def test_suite_composition():
    names = set(bank_suite.names())

    assert set(page_fixtures.names()) <= names
    assert {"registered_user", "savings_account", "credential_store", "api_request"} <= names
    bank_suite.validate(provided=["page", "http_client"], require_complete=True)


async def test_registered_user_registers_saves_and_logs_out(store_path):
    bank = FakeBank()
    suite = merge_registries(fake_pages(bank), business_fixtures)

    async with suite.scope() as scope:
        user = await scope.get("registered_user")

    assert user.checking_account_id == "13344"
    assert user.savings_account_id is None
    assert [registered.username for registered in bank.registered] == [user.username]
    assert bank.calls[0] == ("navigate_to", "/index.htm")
    assert ("menu", "Accounts Overview") in bank.calls
    assert bank.calls[-1] == ("logout",)
    assert CredentialStore(store_path).latest().checking_account_id == "13344"


async def test_savings_account_is_funded_from_checking(store_path):
    bank = FakeBank()
    suite = merge_registries(fake_pages(bank), business_fixtures)

    async with suite.scope() as scope:
        user = await scope.get("savings_account")

    assert user.checking_account_id == "13344"
    assert user.savings_account_id == "13455"
    assert ("login", user.username) in bank.calls
    assert ("open_account", "SAVINGS", "13344") in bank.calls

    records = CredentialStore(store_path).all()
    assert len(records) == 2
    assert records[-1].savings_account_id == "13455"


async def test_non_numeric_checking_id_fails_setup(store_path):
    bank = FakeBank(checking_id="")
    suite = merge_registries(fake_pages(bank), business_fixtures)

    async with suite.scope() as scope:
        with pytest.raises(FixtureSetupError, match="registered_user") as exc_info:
            await scope.get("registered_user")

    assert exc_info.value.user == bank.registered[0].username
    assert not store_path.exists()


async def test_non_numeric_savings_id_fails_setup(store_path):
    bank = FakeBank(savings_id="Account")
    suite = merge_registries(fake_pages(bank), business_fixtures)

    async with suite.scope() as scope:
        with pytest.raises(FixtureSetupError, match="savings_account"):
            await scope.get("savings_account")


async def test_failed_registration_retries_with_a_new_identity(store_path, monkeypatch):
    bank = FakeBank()
    original = FakeRegisterPage.welcome_message_text
    attempts = []

    async def flaky_welcome(self):
        attempts.append(self.bank.logged_in)
        if len(attempts) == 1:
            return "Error!"
        return await original(self)

    monkeypatch.setattr(FakeRegisterPage, "welcome_message_text", flaky_welcome)
    suite = merge_registries(fake_pages(bank), business_fixtures)

    async with suite.scope() as scope:
        user = await scope.get("registered_user")

    assert len(bank.registered) == 2
    assert bank.registered[0].username != bank.registered[1].username
    assert user.username == bank.registered[1].username


async def test_retry_after_slow_welcome_logs_out_before_registering_again(store_path, monkeypatch):
    """The first registration succeeds server side but its heading never shows in time."""
    bank = FakeBank()
    original = FakeRegisterPage.wait_for_welcome
    waits = []

    async def slow_welcome(self, username, timeout=None):
        waits.append(username)
        if len(waits) == 1:
            raise AssertionError("heading did not appear")
        await original(self, username, timeout)

    monkeypatch.setattr(FakeRegisterPage, "wait_for_welcome", slow_welcome)
    suite = merge_registries(fake_pages(bank), business_fixtures)

    async with suite.scope() as scope:
        user = await scope.get("registered_user")

    first, second = bank.registered
    assert first.username != second.username
    assert user.username == second.username
    assert waits == [first.username, second.username]
    # The half-finished session is closed before the register link is used again
    register_clicks = [i for i, call in enumerate(bank.calls) if call == ("click_register_link",)]
    assert len(register_clicks) == 2
    assert ("logout",) in bank.calls[register_clicks[0]:register_clicks[1]]
