"""OAuth2 authorization-code flow and the credentials it produces."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from urllib.parse import urlencode

import httpx

from nylas_client.errors import DecodeError, TransportError, error_for_status

logger = logging.getLogger(__name__)

OAUTH_SCOPE = "email"


@dataclass
class Credentials:
    """Application id/secret plus the bearer token, once one is known."""

    app_id: str
    app_secret: str
    access_token: str | None = None


def generate_state() -> str:
    """Random UUID v4 used as the OAuth ``state`` parameter."""
    return str(uuid.uuid4())


class OAuthFlow:
    """Builds the authorize URL and trades an authorization code for a token."""

    def __init__(self, credentials: Credentials, http: httpx.Client, api_server: str):
        self.credentials = credentials
        self.http = http
        self.api_server = api_server.rstrip("/")

    def authorization_url(self, redirect_uri: str, login_hint: str | None = None) -> str:
        args = {
            "client_id": self.credentials.app_id,
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "scope": OAUTH_SCOPE,
            "login_hint": login_hint,
            "state": generate_state(),
        }
        query = urlencode({k: v for k, v in args.items() if v is not None})
        return f"{self.api_server}/oauth/authorize?{query}"

    def exchange_code(self, code: str) -> str | None:
        """POST the code to ``/oauth/token`` and keep the returned access token.

        A response without an ``access_token`` key leaves the current token in
        place and returns it; a present key is stored even when empty. HTTP failures raise and also leave it in place.
        """
        form = {
            "client_id": self.credentials.app_id,
            "client_secret": self.credentials.app_secret,
            "grant_type": "authorization_code",
            "code": code,
        }
        url = f"{self.api_server}/oauth/token"
        try:
            response = self.http.post(url, data=form, headers={"Accept": "text/plain"})
        except httpx.TransportError as e:
            raise TransportError(f"Token exchange failed: {e}") from e

        if not response.is_success:
            logger.error("Token exchange failed with HTTP %d", response.status_code)
            raise error_for_status(response.status_code, response.text, url)

        try:
            data = response.json()
        except ValueError as e:
            raise DecodeError("Token response is not valid JSON", response.text) from e

        if isinstance(data, dict) and "access_token" in data:
            self.credentials.access_token = data["access_token"]
            logger.info("Exchanged authorization code for access token")
        else:
            logger.warning("Token response had no access_token; keeping current token")
        return self.credentials.access_token
