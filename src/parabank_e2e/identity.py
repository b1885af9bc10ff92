"""Synthetic identities for registration and login flows.

Identities are generated with Faker and are immutable once created; account
ids discovered later are attached with ``Identity.with_accounts`` which
returns a new instance.

Usage::

    generator = IdentityGenerator(seed=42)
    user = generator.generate_identity()
    user.nested()   # form-shaped dict, address as sub-dict
    user.flat()     # address fields at top level
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from typing import Any, Dict

from faker import Faker

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")

PHONE_DIGITS = 10
SSN_DIGITS = 9
USERNAME_TOKEN_LENGTH = 6


@dataclass(frozen=True)
class PasswordPolicy:
    """Shape of generated passwords.

    The random part between prefix and suffix always carries at least one
    digit, one upper-case and one lower-case letter, so it needs 3 characters.
    """

    length: int = 10
    prefix: str = "P@$$"
    suffix: str = ""

    @property
    def random_length(self) -> int:
        return self.length - len(self.prefix) - len(self.suffix)

    def validate(self) -> None:
        if self.random_length < 3:
            raise ValueError(
                f"Password length {self.length} leaves {self.random_length} random characters "
                f"after prefix {self.prefix!r} and suffix {self.suffix!r}; at least 3 are required"
            )


@dataclass(frozen=True)
class Address:
    street: str
    city: str
    state: str
    zip_code: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "street": self.street,
            "city": self.city,
            "state": self.state,
            "zipCode": self.zip_code,
        }


@dataclass(frozen=True)
class Identity:
    """A fictitious ParaBank customer."""

    first_name: str
    last_name: str
    address: Address
    phone_number: str
    ssn: str
    username: str
    password: str
    confirm_password: str | None = None
    checking_account_id: str | None = None
    savings_account_id: str | None = None

    def __post_init__(self) -> None:
        if self.confirm_password is None:
            object.__setattr__(self, "confirm_password", self.password)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def with_accounts(self, checking: str | None = None, savings: str | None = None) -> "Identity":
        """Return a copy carrying server-assigned account ids."""
        return replace(
            self,
            checking_account_id=checking if checking is not None else self.checking_account_id,
            savings_account_id=savings if savings is not None else self.savings_account_id,
        )

    def nested(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "address": self.address.to_dict(),
            "phoneNumber": self.phone_number,
            "ssn": self.ssn,
            "username": self.username,
            "password": self.password,
            "confirmPassword": self.confirm_password,
        }
        if self.checking_account_id is not None:
            data["checkingAccountId"] = self.checking_account_id
        if self.savings_account_id is not None:
            data["savingsAccountId"] = self.savings_account_id
        return data

    def flat(self) -> Dict[str, Any]:
        data = self.nested()
        data.update(data.pop("address"))
        return data


class IdentityGenerator:
    """Generate synthetic identities.

    Usernames are unique per generator for the lifetime of the process.
    """

    def __init__(self, seed: int | None = None, password_policy: PasswordPolicy | None = None) -> None:
        self.password_policy = password_policy or PasswordPolicy()
        self.password_policy.validate()
        self._faker = Faker("en_US")
        if seed is not None:
            self._faker.seed_instance(seed)
        self._issued_usernames: set[str] = set()

    def generate_username(self) -> str:
        """Faker user name stripped to alphanumerics plus a random hex token."""
        while True:
            base = _NON_ALNUM.sub("", self._faker.user_name()) or "user"
            token = self._faker.hexify("^" * USERNAME_TOKEN_LENGTH)
            username = f"{base}{token}"
            if username not in self._issued_usernames:
                self._issued_usernames.add(username)
                return username
            logger.debug("Username collision on %s, regenerating", username)

    def generate_password(self) -> str:
        policy = self.password_policy
        body = self._faker.password(
            length=policy.random_length,
            special_chars=False,
            digits=True,
            upper_case=True,
            lower_case=True,
        )
        return f"{policy.prefix}{body}{policy.suffix}"

    def generate_address(self) -> Address:
        return Address(
            street=self._faker.street_address(),
            city=self._faker.city(),
            state=self._faker.state(),
            zip_code=self._faker.zipcode(),
        )

    def generate_identity(self, **overrides: Any) -> Identity:
        """Compose a complete identity; keyword overrides replace generated fields."""
        password = overrides.pop("password", None) or self.generate_password()
        confirm_password = overrides.pop("confirm_password", None)
        values: Dict[str, Any] = {
            "first_name": self._faker.first_name(),
            "last_name": self._faker.last_name(),
            "address": self.generate_address(),
            "phone_number": self._faker.numerify("#" * PHONE_DIGITS),
            "ssn": self._faker.numerify("#" * SSN_DIGITS),
            "username": self.generate_username(),
            "password": password,
            "confirm_password": password if confirm_password is None else confirm_password,
        }
        values.update(overrides)
        identity = Identity(**values)
        logger.debug("Generated identity %s", identity.username)
        return identity


_default_generator: IdentityGenerator | None = None


def default_generator() -> IdentityGenerator:
    global _default_generator
    if _default_generator is None:
        _default_generator = IdentityGenerator()
    return _default_generator


def generate_username() -> str:
    return default_generator().generate_username()


def generate_password() -> str:
    return default_generator().generate_password()


def generate_identity(**overrides: Any) -> Identity:
    return default_generator().generate_identity(**overrides)
