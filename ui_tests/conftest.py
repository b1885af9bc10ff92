import sys
from pathlib import Path

import httpx
import pytest
import pytest_asyncio

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

from parabank_e2e.api_client import DEFAULT_TIMEOUT
from parabank_e2e.bank_fixtures import bank_suite
from parabank_e2e.config import settings
from parabank_e2e.logging_setup import configure_logging
from parabank_e2e.playwright_client import PlaywrightClient


def pytest_configure(config):
    configure_logging()


@pytest.fixture(autouse=True)
def require_base_url():
    """Scenarios need a running ParaBank; skip them when none is configured."""
    if not settings.has_base_url:
        pytest.skip("APP_BASE_URL is not configured (see .env.defaults)")
    yield


@pytest_asyncio.fixture()
async def playwright_client():
    """Create a Playwright client instance."""
    async with PlaywrightClient(headless=settings.playwright_headless) as client:
        yield client


@pytest_asyncio.fixture()
async def page(playwright_client):
    return playwright_client.page


@pytest_asyncio.fixture()
async def http_client():
    """httpx client rooted at APP_BASE_URL; redirects stay visible to tests."""
    async with httpx.AsyncClient(
        base_url=settings.base_url,
        follow_redirects=False,
        verify=False,
        timeout=DEFAULT_TIMEOUT,
    ) as client:
        yield client


@pytest_asyncio.fixture()
async def bank(page, http_client):
    """Per-test fixture scope over the ParaBank fixture sets.

    Usage:
        async def test_something(bank):
            async def scenario(login_page, registered_user):
                ...
            await bank.call(scenario)
    """
    async with bank_suite.scope(page=page, http_client=http_client) as scope:
        yield scope


@pytest_asyncio.fixture()
async def api_bank(http_client):
    """Fixture scope without a browser, for REST-only scenarios."""
    async with bank_suite.scope(http_client=http_client) as scope:
        yield scope
