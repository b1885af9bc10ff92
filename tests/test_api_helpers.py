"""Tests for the pure helpers of the request adapter."""
from decimal import Decimal

import pytest

from parabank_e2e.api_client import build_headers, extract_cookie, normalize_method, parse_body, parse_currency
from parabank_e2e.exceptions import UnsupportedMethodError


def test_normalize_method():
    assert normalize_method("patch") == "PATCH"
    with pytest.raises(UnsupportedMethodError, match="trace"):
        normalize_method("trace")
    with pytest.raises(UnsupportedMethodError):
        normalize_method(None)


def test_build_headers():
    assert build_headers(None) == {}
    assert build_headers("") == {}
    assert build_headers("abc") == {"Authorization": "Bearer abc"}
    assert build_headers({"Accept": "application/json"}) == {"Accept": "application/json"}


def test_parse_body():
    assert parse_body('[{"id": 1}]') == [{"id": 1}]
    assert parse_body("") == ""
    assert parse_body("<xml/>") == "<xml/>"


def test_extract_cookie_edge_cases():
    assert extract_cookie(None, "JSESSIONID") is None
    assert extract_cookie({}, "JSESSIONID") is None
    assert extract_cookie({"Set-Cookie": "other=1"}, "JSESSIONID") is None
    assert extract_cookie({"SET-COOKIE": " JSESSIONID=1 ; Path=/"}, "JSESSIONID") == "JSESSIONID=1"
    assert extract_cookie({"set-cookie": ["a=1", "JSESSIONID=2; HttpOnly"]}, "JSESSIONID") == "JSESSIONID=2"


@pytest.mark.parametrize(
    "text, expected",
    [("$100.00", Decimal("100.00")), ("$1,234.50", Decimal("1234.50")), ("-$10.00", Decimal("-10.00"))],
)
def test_parse_currency(text, expected):
    assert parse_currency(text) == expected


def test_parse_currency_rejects_garbage():
    with pytest.raises(ValueError):
        parse_currency("n/a")
