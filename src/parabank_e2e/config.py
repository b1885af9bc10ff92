"""Shared configuration for the ParaBank end-to-end suite.

Configuration is layered (lowest first):
- .env.defaults (catalog of keys and default values)
- .env (local overrides, not committed)
- .env.<TEST_ENV> (environment-specific set, e.g. .env.staging)
- process environment

Set TEST_ENV=local (default) or any other name to select an environment set.
APP_BASE_URL is required; reading it while it is undefined fails fast.
"""
from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator
from urllib.parse import urljoin

from parabank_e2e.config_defaults import REPO_ROOT, get_setting
from parabank_e2e.exceptions import ConfigurationError, MissingSettingError

logger = logging.getLogger(__name__)

SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")

DEFAULTS: Dict[str, str] = {
    "TEST_ENV": "local",
    "PLAYWRIGHT_HEADLESS": "true",
    "PLAYWRIGHT_BROWSER": "chromium",
    "ACTION_TIMEOUT_MS": "15000",
    "NAVIGATION_TIMEOUT_MS": "30000",
    "CREDENTIALS_FILE": str(REPO_ROOT / "credentials.json"),
    "LOG_LEVEL": "INFO",
}


def _as_bool(value: str) -> bool:
    return value.strip().lower() in {"true", "1", "yes", "on"}


class BankTestConfig:
    """Settings resolved from the environment and the .env layers.

    Values are read on access so that tests can change the environment
    (monkeypatch.setenv) without rebuilding the object.
    """

    def __init__(self) -> None:
        self._overrides: Dict[str, str] = {}

    # ---- raw access -------------------------------------------------------------
    def get(self, key: str, fallback: str | None = None) -> str | None:
        if key in self._overrides:
            return self._overrides[key]
        test_env = None if key == "TEST_ENV" else self.test_env
        return get_setting(key, DEFAULTS.get(key, fallback), test_env=test_env)

    def require(self, key: str, hint: str = "") -> str:
        value = self.get(key)
        if not value:
            raise MissingSettingError(key, hint)
        return value

    def _int(self, key: str) -> int:
        raw = self.get(key)
        try:
            return int(raw)  # type: ignore[arg-type]
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from exc

    # ---- typed settings ---------------------------------------------------------
    @property
    def test_env(self) -> str:
        return (self.get("TEST_ENV") or "local").lower()

    @property
    def base_url(self) -> str:
        return self.require(
            "APP_BASE_URL",
            "Example: APP_BASE_URL=http://localhost:8080/parabank",
        ).rstrip("/")

    @property
    def has_base_url(self) -> bool:
        return bool(self.get("APP_BASE_URL"))

    @property
    def playwright_headless(self) -> bool:
        return _as_bool(self.get("PLAYWRIGHT_HEADLESS") or "true")

    @property
    def browser_name(self) -> str:
        name = (self.get("PLAYWRIGHT_BROWSER") or "chromium").lower()
        if name not in SUPPORTED_BROWSERS:
            raise ConfigurationError(
                f"Invalid PLAYWRIGHT_BROWSER: {name}\n"
                f"Must be one of {', '.join(SUPPORTED_BROWSERS)}"
            )
        return name

    @property
    def action_timeout_ms(self) -> int:
        return self._int("ACTION_TIMEOUT_MS")

    @property
    def navigation_timeout_ms(self) -> int:
        return self._int("NAVIGATION_TIMEOUT_MS")

    @property
    def credentials_file(self) -> Path:
        path = Path(self.get("CREDENTIALS_FILE") or DEFAULTS["CREDENTIALS_FILE"])
        # Relative paths are anchored at the repo root, not the working directory
        return path if path.is_absolute() else REPO_ROOT / path

    @property
    def log_level(self) -> str:
        return (self.get("LOG_LEVEL") or "INFO").upper()

    # ---- override orchestration -------------------------------------------------
    @contextmanager
    def use_overrides(self, **values: str) -> Iterator["BankTestConfig"]:
        """Context manager to temporarily override settings.

        Overrides stack; leaving the block restores the previous values.
        """
        previous = dict(self._overrides)
        self._overrides.update({key: str(value) for key, value in values.items()})
        try:
            yield self
        finally:
            self._overrides = previous

    # ---- utility helpers --------------------------------------------------------
    def url(self, path: str = "") -> str:
        """Return an absolute URL for the provided path."""
        return urljoin(self.base_url + "/", path.lstrip("/"))

    def describe(self) -> str:
        base = self.get("APP_BASE_URL") or "<unset>"
        return (
            f"TEST_ENV={self.test_env} APP_BASE_URL={base} "
            f"browser={self.get('PLAYWRIGHT_BROWSER')} headless={self.playwright_headless} "
            f"pid={os.getpid()}"
        )


# Singleton instance
settings = BankTestConfig()
