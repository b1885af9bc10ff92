"""
HTTP request adapter for the ParaBank REST surface.

Single entry point for every REST call in the suite. It hides verb dispatch,
header and body encoding, and response decoding:

- redirects are never followed (ParaBank signals a successful login with
  301/302 and the status must stay observable)
- a string ``headers`` value is a bearer token, a mapping is merged over
  the defaults
- ``form=True`` sends the body as application/x-www-form-urlencoded,
  otherwise as JSON with ``Content-Type: application/json``
- the body is decoded as JSON when possible and returned as raw text
  otherwise; decoding never raises

Usage::

    async with ApiClient(base_url=settings.base_url) as api:
        response = await api.request("POST", "/login.htm", body=creds, form=True)
        session = extract_cookie(response.headers, "JSESSIONID")
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional, Union

import httpx

from parabank_e2e.exceptions import UnsupportedMethodError

logger = logging.getLogger(__name__)

SUPPORTED_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH")
DEFAULT_TIMEOUT = 30.0

HeaderValue = Union[str, List[str]]


@dataclass
class ApiResponse:
    """Simplified, pre-parsed response."""

    status: int
    body: Any
    headers: Dict[str, HeaderValue] = field(default_factory=dict)

    @property
    def is_redirect(self) -> bool:
        return self.status in (301, 302, 303, 307, 308)


def normalize_method(method: Any) -> str:
    """Upper-case a verb and reject anything outside SUPPORTED_METHODS."""
    if not isinstance(method, str) or method.upper() not in SUPPORTED_METHODS:
        raise UnsupportedMethodError(method, SUPPORTED_METHODS)
    return method.upper()


def build_headers(headers: Union[str, Mapping[str, str], None]) -> Dict[str, str]:
    """Turn a bearer token or a header mapping into a request header dict."""
    merged: Dict[str, str] = {}
    if isinstance(headers, str):
        if headers:
            merged["Authorization"] = f"Bearer {headers}"
    elif headers:
        merged.update(headers)
    return merged


def _has_header(headers: Mapping[str, str], name: str) -> bool:
    name = name.lower()
    return any(key.lower() == name for key in headers)


def parse_body(text: str) -> Any:
    """Decode JSON if well-formed, otherwise return the raw text unchanged."""
    try:
        return json.loads(text)
    except ValueError:
        return text


def normalize_headers(headers: httpx.Headers) -> Dict[str, HeaderValue]:
    """Lower-case header names; repeated headers (set-cookie) become lists."""
    result: Dict[str, HeaderValue] = {}
    for key in headers.keys():
        name = key.lower()
        if name in result:
            continue
        values = headers.get_list(name)
        result[name] = values if len(values) > 1 else values[0]
    return result


def extract_cookie(headers: Optional[Mapping[str, Any]], name: str) -> Optional[str]:
    """Return the ``name=value`` part of a matching set-cookie entry, or None.

    The header lookup and the cookie name match are case-insensitive; the
    header value may be a single string or a list of strings.
    """
    if not headers:
        return None

    raw: Any = None
    for key, value in headers.items():
        if key.lower() == "set-cookie":
            raw = value
            break
    if not raw:
        return None

    entries = [raw] if isinstance(raw, str) else list(raw)
    wanted = name.lower()
    for entry in entries:
        pair = entry.split(";", 1)[0].strip()
        cookie_name = pair.split("=", 1)[0].strip()
        if cookie_name.lower() == wanted:
            return pair
    return None


def parse_currency(value: str) -> Decimal:
    """Parse a displayed amount such as ``$1,234.50`` or ``-$10.00``."""
    cleaned = value.replace("$", "").replace(",", "").strip()
    try:
        return Decimal(cleaned)
    except InvalidOperation as exc:
        raise ValueError(f"Not a currency amount: {value!r}") from exc


class ApiClient:
    """Async REST client with normalized responses.

    Wraps an ``httpx.AsyncClient``. When no client is passed one is created
    (and closed) by this object with redirects disabled.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._owns_client = client is None
        if client is None:
            client = httpx.AsyncClient(
                base_url=base_url or "",
                timeout=timeout,
                follow_redirects=False,
            )
        self._client = client

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def request(
        self,
        method: str,
        url: str,
        *,
        base_url: Optional[str] = None,
        body: Any = None,
        headers: Union[str, Mapping[str, str], None] = None,
        form: bool = False,
    ) -> ApiResponse:
        """Send one request and return ``ApiResponse(status, body, headers)``.

        Raises:
            UnsupportedMethodError: before any network call for a bad verb
            httpx.HTTPError: transport failures, propagated unmodified
        """
        verb = normalize_method(method)
        request_headers = build_headers(headers)
        full_url = f"{base_url.rstrip('/')}{url}" if base_url else url

        kwargs: Dict[str, Any] = {}
        if body is not None:
            if form:
                kwargs["data"] = body
            else:
                kwargs["content"] = json.dumps(body)
                if not _has_header(request_headers, "Content-Type"):
                    request_headers["Content-Type"] = "application/json"

        logger.debug("%s %s form=%s", verb, full_url, form)
        response = await self._client.request(
            verb,
            full_url,
            headers=request_headers,
            follow_redirects=False,
            **kwargs,
        )
        logger.debug("%s %s -> %s", verb, full_url, response.status_code)

        return ApiResponse(
            status=response.status_code,
            body=parse_body(response.text),
            headers=normalize_headers(response.headers),
        )

    async def get(self, url: str, **kwargs: Any) -> ApiResponse:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> ApiResponse:
        return await self.request("POST", url, **kwargs)

    async def put(self, url: str, **kwargs: Any) -> ApiResponse:
        return await self.request("PUT", url, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> ApiResponse:
        return await self.request("DELETE", url, **kwargs)

    async def patch(self, url: str, **kwargs: Any) -> ApiResponse:
        return await self.request("PATCH", url, **kwargs)
