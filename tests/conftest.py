"""Offline unit tests for the harness core. No browser or server needed."""
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from parabank_e2e.config_defaults import load_defaults
from parabank_e2e.identity import Address, Identity


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep local .env files and the real credential file out of unit tests."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("parabank_e2e.config_defaults.REPO_ROOT", tmp_path)
    for key in ("APP_BASE_URL", "TEST_ENV", "PLAYWRIGHT_BROWSER", "PLAYWRIGHT_HEADLESS",
                "ACTION_TIMEOUT_MS", "NAVIGATION_TIMEOUT_MS", "CREDENTIALS_FILE", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    load_defaults.cache_clear()
    yield
    load_defaults.cache_clear()


@pytest.fixture
def identity():
    return Identity(
        first_name="Ada",
        last_name="Lovelace",
        address=Address(street="1 Analytical Way", city="London", state="Kent", zip_code="12345"),
        phone_number="5551234567",
        ssn="123456789",
        username="adalovelace1a2b3c",
        password="P@$$abc123",
    )
