"""Tests for the REST request adapter against an in-memory transport."""
import json

import httpx
import pytest

from parabank_e2e.api_client import ApiClient, extract_cookie
from parabank_e2e.exceptions import ConfigurationError, UnsupportedMethodError

pytestmark = pytest.mark.asyncio


class RecordingTransport:
    """MockTransport handler that remembers every request."""

    def __init__(self, responder):
        self.responder = responder
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)


def _client(responder, base_url="http://bank.test/parabank"):
    handler = RecordingTransport(responder)
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=base_url)
    return ApiClient(client=http_client), handler


async def test_json_body_is_sent_and_parsed():
    api, handler = _client(lambda request: httpx.Response(200, json={"ok": True}))
    async with api:
        response = await api.request("post", "/services/bank/thing", body={"a": 1})

    sent = handler.requests[0]
    assert sent.method == "POST"
    assert sent.headers["content-type"] == "application/json"
    assert json.loads(sent.content) == {"a": 1}
    assert response.status == 200
    assert response.body == {"ok": True}


async def test_form_body_is_urlencoded():
    api, handler = _client(lambda request: httpx.Response(200, text="done"))
    async with api:
        await api.request(
            "POST", "/login.htm", body={"username": "john", "password": "demo"}, form=True
        )

    sent = handler.requests[0]
    assert sent.headers["content-type"] == "application/x-www-form-urlencoded"
    assert sent.content == b"username=john&password=demo"


async def test_supplied_content_type_is_kept():
    api, handler = _client(lambda request: httpx.Response(200, text=""))
    async with api:
        await api.request("PUT", "/x", body={"a": 1}, headers={"content-type": "application/vnd.custom+json"})

    assert handler.requests[0].headers["content-type"] == "application/vnd.custom+json"


async def test_non_json_body_falls_back_to_text():
    message = "Successfully transferred $10.00 from account #1 to account #2"
    api, _ = _client(lambda request: httpx.Response(200, text=message))
    async with api:
        response = await api.get("/services/bank/transfer")

    assert response.body == message


async def test_redirects_are_not_followed():
    def responder(request):
        if request.url.path.endswith("/login.htm"):
            return httpx.Response(
                302,
                headers=[
                    ("Location", "/parabank/overview.htm"),
                    ("Set-Cookie", "JSESSIONID=ABC123; Path=/parabank; HttpOnly"),
                ],
            )
        return httpx.Response(200, text="overview")

    api, handler = _client(responder)
    async with api:
        response = await api.request("POST", "/login.htm", body={"username": "u"}, form=True)

    assert len(handler.requests) == 1
    assert response.status == 302
    assert response.is_redirect
    assert extract_cookie(response.headers, "JSESSIONID") == "JSESSIONID=ABC123"


async def test_repeated_set_cookie_headers_become_a_list():
    api, _ = _client(
        lambda request: httpx.Response(
            200,
            headers=[("Set-Cookie", "a=1; Path=/"), ("Set-Cookie", "JSESSIONID=XYZ; Path=/")],
        )
    )
    async with api:
        response = await api.get("/")

    assert response.headers["set-cookie"] == ["a=1; Path=/", "JSESSIONID=XYZ; Path=/"]
    assert extract_cookie(response.headers, "jsessionid") == "JSESSIONID=XYZ"


async def test_bearer_token_header():
    api, handler = _client(lambda request: httpx.Response(200, text=""))
    async with api:
        await api.get("/secure", headers="tok123")

    assert handler.requests[0].headers["authorization"] == "Bearer tok123"


async def test_explicit_base_url_overrides_client_base():
    api, handler = _client(lambda request: httpx.Response(200, text=""))
    async with api:
        await api.get("/services/bank/x", base_url="http://other.test/parabank/")

    assert str(handler.requests[0].url) == "http://other.test/parabank/services/bank/x"


async def test_unsupported_method_fails_before_io():
    api, handler = _client(lambda request: httpx.Response(200, text=""))
    async with api:
        with pytest.raises(UnsupportedMethodError) as exc_info:
            await api.request("TRACE", "/")

    assert handler.requests == []
    assert isinstance(exc_info.value, ConfigurationError)


async def test_owned_client_is_closed():
    api = ApiClient(base_url="http://bank.test")
    async with api:
        assert not api.client.is_closed
    assert api.client.is_closed


async def test_injected_client_stays_open():
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
    async with ApiClient(client=http_client):
        pass

    assert not http_client.is_closed
    await http_client.aclose()
