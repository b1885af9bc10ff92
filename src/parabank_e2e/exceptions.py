"""
Error taxonomy for the ParaBank end-to-end suite.

Every error raised by the core derives from BankTestError so scenarios can
tell suite failures apart from assertion failures:

- ConfigurationError: invalid setup detected before any side effect
  (missing base URL, unsupported HTTP verb, fixture name collisions, cycles)
- FixtureSetupError: a business-process fixture could not confirm its
  expected side effect (e.g. no account id after opening an account)
- RetryExhaustedError: a bounded retry ran out of attempts or time
- CredentialStoreError: the credential file is absent, empty or malformed
- ToolError: a browser operation failed
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable


class BankTestError(Exception):
    """Base class for all suite errors."""
    pass


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

class ConfigurationError(BankTestError):
    """Raised when the suite is configured incorrectly."""
    pass


class MissingSettingError(ConfigurationError):
    """Raised when a required setting is not defined in any config layer."""

    def __init__(self, key: str, hint: str = ""):
        self.key = key
        message = f"{key} is not defined. Set it in the environment, .env or .env.<TEST_ENV>."
        if hint:
            message = f"{message} {hint}"
        super().__init__(message)


class UnsupportedMethodError(ConfigurationError):
    """Raised for an HTTP verb outside the supported set."""

    def __init__(self, method: Any, supported: Iterable[str]):
        self.method = method
        self.supported = tuple(supported)
        super().__init__(
            f"Unsupported HTTP method: {method!r} (expected one of {', '.join(self.supported)})"
        )


class FixtureConflictError(ConfigurationError):
    """Raised when two fixture sets define the same fixture name."""
    pass


class FixtureCycleError(ConfigurationError):
    """Raised when fixture dependencies form a cycle."""

    def __init__(self, cycle: list[str]):
        self.cycle = cycle
        super().__init__(f"Fixture dependency cycle: {' -> '.join(cycle)}")


class UnknownFixtureError(ConfigurationError):
    """Raised when a fixture or one of its requirements is not registered."""

    def __init__(self, name: str, required_by: str | None = None):
        self.name = name
        self.required_by = required_by
        if required_by:
            message = f"Unknown fixture '{name}' (required by '{required_by}')"
        else:
            message = f"Unknown fixture '{name}'"
        super().__init__(message)


# ---------------------------------------------------------------------------
# Setup errors
# ---------------------------------------------------------------------------

class FixtureSetupError(BankTestError):
    """Raised when a fixture cannot confirm the state it was asked to create."""

    def __init__(self, fixture: str, message: str, user: str | None = None):
        self.fixture = fixture
        self.user = user
        context = f" for user '{user}'" if user else ""
        super().__init__(f"Fixture '{fixture}' failed{context}: {message}")


class RetryExhaustedError(FixtureSetupError):
    """Raised when a bounded retry gives up. Chains the last failure."""

    def __init__(self, fixture: str, attempts: int, last_error: BaseException | None, user: str | None = None):
        self.attempts = attempts
        self.last_error = last_error
        detail = f"gave up after {attempts} attempt(s)"
        if last_error is not None:
            detail = f"{detail}; last error: {last_error}"
        super().__init__(fixture, detail, user=user)


# ---------------------------------------------------------------------------
# Credential store errors
# ---------------------------------------------------------------------------

class CredentialStoreError(BankTestError):
    """Base class for credential file problems."""
    pass


class CredentialsNotFoundError(CredentialStoreError):
    """Raised when no credential record can be returned."""
    pass


class MalformedCredentialsError(CredentialStoreError):
    """Raised when the credential file is not a JSON array of records."""
    pass


# ---------------------------------------------------------------------------
# Browser errors
# ---------------------------------------------------------------------------

@dataclass
class ToolError(BankTestError):
    """Raised when a browser operation fails."""

    name: str
    payload: Dict[str, Any]
    message: str

    def __str__(self) -> str:  # pragma: no cover - human readable helper
        return f"{self.name} failed ({self.message}) with payload={self.payload}"
