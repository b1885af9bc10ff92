"""Pydantic models for ParaBank REST responses.

The REST services answer with XML unless ``Accept: application/json`` is
sent. Field names follow the JSON payload (camelCase) through aliases.
"""
from __future__ import annotations

from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class AddressSchema(BaseModel):
    """Customer postal address."""

    model_config = ConfigDict(populate_by_name=True)

    street: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    zip_code: str = Field(alias="zipCode", min_length=1)


class UserResponse(BaseModel):
    """Customer record from ``GET /services/bank/login/{username}/{password}``.

    Attributes:
        id: Customer id; absent from some login responses.
        phone_number: Kept as a string to preserve formatting characters.
        username: Usually omitted from profile responses.
        password: Usually omitted from profile responses.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None
    first_name: str = Field(alias="firstName", min_length=1)
    last_name: str = Field(alias="lastName", min_length=1)
    address: AddressSchema
    phone_number: str = Field(alias="phoneNumber")
    ssn: str
    username: Optional[str] = None
    password: Optional[str] = None


class Transaction(BaseModel):
    """One entry of an account's transaction history.

    ``date`` is an epoch timestamp or an ISO-8601 string depending on the
    server build.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int
    account_id: int = Field(alias="accountId")
    type: Literal["Credit", "Debit"]
    date: Union[str, int]
    amount: float
    description: str


_transaction_list = TypeAdapter(List[Transaction])


def parse_user(payload: Any) -> UserResponse:
    return UserResponse.model_validate(payload)


def parse_transactions(payload: Any) -> List[Transaction]:
    """Validate a transaction list.

    Raises:
        pydantic.ValidationError: the payload is not a list of transactions
    """
    return _transaction_list.validate_python(payload)
