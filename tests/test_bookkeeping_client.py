"""Tests for the bookkeeping API client."""

import json
import logging

import httpx
import pytest

from balance_export.clients.bookkeeping import (
    BookkeepingClient,
    authenticate,
    list_accounts,
)
from balance_export.exceptions import AccountListError, AuthenticationError

BASE_URL = "https://books.example.com"


def make_transport(status_code: int = 200, body=None, text: str | None = None, seen=None):
    """Build a MockTransport answering every request the same way."""

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if text is not None:
            return httpx.Response(status_code, text=text)
        return httpx.Response(status_code, json=body)

    return httpx.MockTransport(handler)


def failing_transport():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    return httpx.MockTransport(handler)


class TestAuthenticate:
    """POST /api/authorize.json."""

    def test_returns_token_and_sends_credentials(self):
        seen = []
        transport = make_transport(body={"result": {"token": "abc"}}, seen=seen)

        token = authenticate(BASE_URL, "me", "secret", transport=transport)

        assert token == "abc"
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == f"{BASE_URL}/api/authorize.json"
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {"loginName": "me", "password": "secret"}

    def test_trailing_slash_on_base_url(self):
        seen = []
        transport = make_transport(body={"result": {"token": "abc"}}, seen=seen)

        authenticate(BASE_URL + "/", "me", "secret", transport=transport)

        assert str(seen[0].url) == f"{BASE_URL}/api/authorize.json"

    def test_non_200_carries_status_and_body(self):
        transport = make_transport(status_code=401, text="bad credentials")

        with pytest.raises(AuthenticationError) as exc_info:
            authenticate(BASE_URL, "me", "wrong", transport=transport)

        assert exc_info.value.status_code == 401
        assert exc_info.value.body == "bad credentials"
        assert "401" in str(exc_info.value)
        assert "bad credentials" in str(exc_info.value)

    def test_undecodable_body(self):
        transport = make_transport(text="<html>oops</html>")

        with pytest.raises(AuthenticationError, match="decoding auth response"):
            authenticate(BASE_URL, "me", "secret", transport=transport)

    def test_transport_error(self):
        with pytest.raises(AuthenticationError) as exc_info:
            authenticate(BASE_URL, "me", "secret", transport=failing_transport())

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


class TestListAccounts:
    """GET /api/v1/accounts/list.json."""

    def test_returns_accounts_and_sends_bearer_token(self):
        seen = []
        body = {
            "success": True,
            "result": [
                {"id": "1", "currency": "USD", "balance": 1050, "isAsset": True},
                {"id": "2", "currency": "USD", "balance": -300, "isLiability": True},
            ],
        }
        transport = make_transport(body=body, seen=seen)

        accounts = list_accounts(BASE_URL, "abc", transport=transport)

        assert [a.id for a in accounts] == ["1", "2"]
        request = seen[0]
        assert request.method == "GET"
        assert request.url.path == "/api/v1/accounts/list.json"
        assert request.url.params["visible_only"] == "false"
        assert request.headers["Authorization"] == "Bearer abc"

    def test_null_account_fields_do_not_fail_the_listing(self):
        body = {
            "success": True,
            "result": [
                {
                    "id": "1",
                    "currency": "USD",
                    "balance": 1,
                    "comment": None,
                    "category": None,
                    "isAsset": True,
                }
            ],
        }
        transport = make_transport(body=body)

        accounts = list_accounts(BASE_URL, "abc", transport=transport)

        assert accounts[0].comment == ""
        assert accounts[0].category == 0
        assert accounts[0].is_asset is True

    def test_success_false_is_an_error(self):
        transport = make_transport(body={"success": False, "result": []})

        with pytest.raises(AccountListError, match="success: false"):
            list_accounts(BASE_URL, "abc", transport=transport)

    def test_non_200_carries_status_and_body(self):
        transport = make_transport(status_code=500, text="boom")

        with pytest.raises(AccountListError) as exc_info:
            list_accounts(BASE_URL, "abc", transport=transport)

        assert exc_info.value.status_code == 500
        assert exc_info.value.body == "boom"

    def test_decode_error(self):
        transport = make_transport(text="not json")

        with pytest.raises(AccountListError, match="decoding account list"):
            list_accounts(BASE_URL, "abc", transport=transport)

    def test_transport_error(self):
        with pytest.raises(AccountListError):
            list_accounts(BASE_URL, "abc", transport=failing_transport())


def test_debug_mode_logs_request_and_response(caplog):
    transport = make_transport(body={"result": {"token": "abc"}})

    with caplog.at_level(logging.DEBUG, logger="balance_export.clients.bookkeeping"):
        with BookkeepingClient(BASE_URL, debug=True, transport=transport) as client:
            token = client.authenticate("me", "secret")

    assert token == "abc"
    assert "POST https://books.example.com/api/authorize.json" in caplog.text
    assert '"loginName"' in caplog.text
    assert "Status: 200" in caplog.text


def test_no_debug_logging_by_default(caplog):
    transport = make_transport(body={"result": {"token": "abc"}})

    with caplog.at_level(logging.DEBUG, logger="balance_export.clients.bookkeeping"):
        authenticate(BASE_URL, "me", "secret", transport=transport)

    assert "DEBUG: POST" not in caplog.text
