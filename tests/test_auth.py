"""Tests for the OAuth authorize URL and code exchange."""

from __future__ import annotations

import re
from urllib.parse import parse_qs, urlsplit

import httpx
import pytest

from nylas_client.auth import generate_state
from nylas_client.errors import ApiError, DecodeError, TransportError

UUID4 = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$")


def _query(url: str) -> dict[str, list[str]]:
    return parse_qs(urlsplit(url).query)


class TestAuthorizationUrl:
    def test_points_at_authorize_endpoint(self, client):
        url = client.authorization_url("https://example.com/cb")
        parts = urlsplit(url)
        assert f"{parts.scheme}://{parts.netloc}{parts.path}" == (
            "https://api.nylas.test/oauth/authorize"
        )

    def test_required_parameters(self, client):
        q = _query(client.authorization_url("https://example.com/cb"))
        assert q["client_id"] == ["app_id"]
        assert q["redirect_uri"] == ["https://example.com/cb"]
        assert q["response_type"] == ["code"]
        assert q["scope"] == ["email"]
        assert "login_hint" not in q

    def test_login_hint(self, client):
        q = _query(client.authorization_url("https://example.com/cb", "me@example.com"))
        assert q["login_hint"] == ["me@example.com"]

    def test_state_is_uuid4(self, client):
        state = _query(client.authorization_url("https://example.com/cb"))["state"][0]
        assert UUID4.match(state)

    def test_state_changes_between_calls(self, client):
        first = _query(client.authorization_url("https://example.com/cb"))["state"][0]
        second = _query(client.authorization_url("https://example.com/cb"))["state"][0]
        assert first != second

    def test_no_request_made(self, client, api):
        client.authorization_url("https://example.com/cb")
        assert api.requests == []


class TestGenerateState:
    def test_many_are_valid_and_unique(self):
        states = {generate_state() for _ in range(200)}
        assert len(states) == 200
        assert all(UUID4.match(s) for s in states)


class TestExchangeCode:
    def test_stores_and_returns_token(self, client, api):
        api.reply(json={"access_token": "T", "token_type": "bearer"})

        assert client.exchange_code("abc") == "T"
        assert client.access_token == "T"

    def test_posts_form_encoded_grant(self, client, api):
        api.reply(json={"access_token": "T"})
        client.exchange_code("abc")

        request = api.last
        assert request.method == "POST"
        assert str(request.url) == "https://api.nylas.test/oauth/token"
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert parse_qs(request.content.decode()) == {
            "client_id": ["app_id"],
            "client_secret": ["app_secret"],
            "grant_type": ["authorization_code"],
            "code": ["abc"],
        }

    def test_new_token_used_on_later_requests(self, client, api):
        api.reply(json={"access_token": "T"})
        api.reply(json=[])
        client.exchange_code("abc")
        client.messages().all()

        assert api.last.headers["Authorization"] == "Basic VDo="

    def test_present_but_empty_token_is_stored(self, client, api):
        api.reply(json={"access_token": ""})

        assert client.exchange_code("abc") == ""
        assert client.access_token == ""

    def test_missing_token_keeps_previous(self, client, api):
        api.reply(json={"error": "invalid_grant"})

        assert client.exchange_code("abc") == "tok"
        assert client.access_token == "tok"

    def test_http_error_keeps_previous(self, client, api):
        api.reply(status=400, json={"message": "bad code"})

        with pytest.raises(ApiError) as exc_info:
            client.exchange_code("abc")

        assert exc_info.value.status == 400
        assert client.access_token == "tok"

    def test_transport_failure(self, client, api):
        api.fail(httpx.ConnectError("connection refused"))

        with pytest.raises(TransportError, match="connection refused"):
            client.exchange_code("abc")
        assert client.access_token == "tok"

    def test_non_json_response(self, client, api):
        api.reply(content=b"<html>oops</html>")

        with pytest.raises(DecodeError):
            client.exchange_code("abc")
        assert client.access_token == "tok"
