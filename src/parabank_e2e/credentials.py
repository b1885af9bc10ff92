"""Append-only credential store for generated identities.

The store is a single JSON array on disk. Each successful registration (or
account opening) appends one record; later, independent runs read the most
recent record to reuse an existing customer.

File format (one element)::

    {
      "username": "...", "password": "...",
      "firstName": "...", "lastName": "...",
      "address": "<street>", "city": "...", "state": "...", "zipCode": "...",
      "phoneNumber": "...", "ssn": "...",
      "checkingAccountId": "...", "savingsAccountId": "...",
      "createdAt": "2026-01-01T00:00:00+00:00"
    }

Known limitation: there is no cross-process locking. Writes replace the
file atomically, so readers never see a partial file, but two workers
appending at the same moment can lose one record (last writer wins).
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import asdict, dataclass, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from parabank_e2e.exceptions import CredentialsNotFoundError, MalformedCredentialsError
from parabank_e2e.identity import Identity

logger = logging.getLogger(__name__)

# Python attribute -> JSON key
_FIELD_KEYS = {
    "username": "username",
    "password": "password",
    "first_name": "firstName",
    "last_name": "lastName",
    "address": "address",
    "city": "city",
    "state": "state",
    "zip_code": "zipCode",
    "phone_number": "phoneNumber",
    "ssn": "ssn",
    "checking_account_id": "checkingAccountId",
    "savings_account_id": "savingsAccountId",
    "created_at": "createdAt",
}


@dataclass
class CredentialRecord:
    """A persisted identity plus server-assigned account ids."""

    username: str
    password: str
    first_name: str = ""
    last_name: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    phone_number: str = ""
    ssn: str = ""
    checking_account_id: Optional[str] = None
    savings_account_id: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_identity(cls, identity: Identity) -> "CredentialRecord":
        return cls(
            username=identity.username,
            password=identity.password,
            first_name=identity.first_name,
            last_name=identity.last_name,
            address=identity.address.street,
            city=identity.address.city,
            state=identity.address.state,
            zip_code=identity.address.zip_code,
            phone_number=identity.phone_number,
            ssn=identity.ssn,
            checking_account_id=identity.checking_account_id,
            savings_account_id=identity.savings_account_id,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {_FIELD_KEYS[key]: value for key, value in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CredentialRecord":
        """Create from dictionary (JSON deserialization). Unknown keys are ignored."""
        kwargs = {attr: data[key] for attr, key in _FIELD_KEYS.items() if key in data}
        if "username" not in kwargs or "password" not in kwargs:
            raise MalformedCredentialsError(
                f"Credential record is missing username/password: keys={sorted(data)}"
            )
        return cls(**kwargs)


class CredentialStore:
    """JSON-array backed, append-only record of generated identities."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _read(self, *, missing_ok: bool) -> List[Dict[str, Any]]:
        if not self.path.exists():
            if missing_ok:
                return []
            raise CredentialsNotFoundError(f"{self.path.name} does not exist: {self.path}")

        content = self.path.read_text(encoding="utf-8")
        if not content.strip():
            if missing_ok:
                return []
            raise CredentialsNotFoundError(f"{self.path.name} is empty: {self.path}")

        try:
            data = json.loads(content)
        except json.JSONDecodeError as exc:
            raise MalformedCredentialsError(f"{self.path.name} is not valid JSON: {exc}") from exc

        if not isinstance(data, list):
            raise MalformedCredentialsError(
                f"{self.path.name} must contain a JSON array, got {type(data).__name__}"
            )
        for index, item in enumerate(data):
            if not isinstance(item, dict):
                raise MalformedCredentialsError(
                    f"{self.path.name} element {index} is {type(item).__name__}, expected an object"
                )
        return data

    def _write(self, data: List[Dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def append(self, record: CredentialRecord | Identity) -> CredentialRecord:
        """Append a record stamped with the current UTC time and return it."""
        if isinstance(record, Identity):
            record = CredentialRecord.from_identity(record)
        data = self._read(missing_ok=True)
        record = replace(record, created_at=datetime.now(timezone.utc).isoformat())
        data.append(record.to_dict())
        self._write(data)
        logger.info("Saved credentials for %s to %s (%d record(s))", record.username, self.path, len(data))
        return record

    def latest(self) -> CredentialRecord:
        """Return the most recently appended record."""
        data = self._read(missing_ok=False)
        if not data:
            raise CredentialsNotFoundError(f"No saved credentials found in {self.path}")
        return CredentialRecord.from_dict(data[-1])

    def all(self) -> List[CredentialRecord]:
        return [CredentialRecord.from_dict(item) for item in self._read(missing_ok=True)]

    def __len__(self) -> int:
        return len(self._read(missing_ok=True))


def default_store() -> CredentialStore:
    from parabank_e2e.config import settings

    return CredentialStore(settings.credentials_file)


def save_credentials(identity: Identity) -> CredentialRecord:
    return default_store().append(identity)


def get_latest_credentials() -> CredentialRecord:
    return default_store().latest()
