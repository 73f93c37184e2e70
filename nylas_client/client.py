"""Nylas API client — generic list/get/create/update/delete over resource kinds."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping

import httpx

from nylas_client.auth import Credentials, OAuthFlow
from nylas_client.collection import ResourceCollection
from nylas_client.config import DEFAULT_API_SERVER, NylasConfig
from nylas_client.errors import DecodeError, TransportError, error_for_status
from nylas_client.models import (
    ACCOUNT,
    CALENDAR,
    CONTACT,
    DRAFT,
    EVENT,
    FILE,
    MESSAGE,
    TAG,
    THREAD,
    Resource,
    ResourceKind,
    make_resource,
)
from nylas_client.request_builder import auth_headers, build_action_url, build_url, split_extra

logger = logging.getLogger(__name__)


class NylasClient:
    """One authenticated session against the API.

    Holds the credentials and an ``httpx.Client``; all calls are synchronous.
    """

    def __init__(
        self,
        app_id: str,
        app_secret: str,
        access_token: str | None = None,
        api_server: str | None = None,
        *,
        api_root: str = "n",
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.credentials = Credentials(app_id, app_secret, access_token)
        self.api_server = (api_server or DEFAULT_API_SERVER).rstrip("/")
        self.api_root = api_root
        self.http = httpx.Client(timeout=timeout, transport=transport)
        self.oauth = OAuthFlow(self.credentials, self.http, self.api_server)

    @classmethod
    def from_config(
        cls, config: NylasConfig, transport: httpx.BaseTransport | None = None
    ) -> NylasClient:
        return cls(
            config.app_id,
            config.app_secret,
            config.access_token,
            config.api_server,
            api_root=config.api_root,
            timeout=config.timeout,
            transport=transport,
        )

    @property
    def access_token(self) -> str | None:
        return self.credentials.access_token

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> NylasClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ── OAuth ────────────────────────────────────────────────────────────────

    def authorization_url(self, redirect_uri: str, login_hint: str | None = None) -> str:
        return self.oauth.authorization_url(redirect_uri, login_hint)

    def exchange_code(self, code: str) -> str | None:
        return self.oauth.exchange_code(code)

    # ── Transport ────────────────────────────────────────────────────────────

    def _url(
        self,
        kind: ResourceKind,
        namespace: str | None,
        resource_id: str | None = None,
        extra: str | None = None,
        filters: Mapping[str, Any] | None = None,
    ) -> str:
        if kind.api_root != self.api_root:
            kind = replace(kind, api_root=self.api_root)
        return build_url(self.api_server, kind, namespace, resource_id, extra, filters)

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send one authenticated request; map failures onto client errors."""
        headers = auth_headers(self.credentials.access_token)
        headers.update(kwargs.pop("headers", {}))
        logger.debug("%s %s", method, url)
        try:
            response = self.http.request(method, url, headers=headers, **kwargs)
        except httpx.TransportError as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        if not response.is_success:
            logger.error("%s %s returned HTTP %d", method, url, response.status_code)
            raise error_for_status(response.status_code, response.text, url)
        return response

    @staticmethod
    def _decode(response: httpx.Response, expect: type) -> Any:
        try:
            data = response.json()
        except ValueError as e:
            raise DecodeError(f"Response from {response.url} is not valid JSON", response.text) from e
        if not isinstance(data, expect):
            raise DecodeError(
                f"Expected JSON {expect.__name__} from {response.url}, got {type(data).__name__}",
                response.text,
            )
        return data

    def _body_kwargs(self, kind: ResourceKind, payload: Any) -> dict[str, Any]:
        # httpx sets the multipart boundary itself
        if kind.is_file:
            return {"files": payload}
        return {"json": payload, "headers": {"Content-Type": "application/json"}}

    # ── Generic resource operations ──────────────────────────────────────────

    def list(
        self,
        kind: ResourceKind,
        namespace: str | None = None,
        filters: Mapping[str, Any] | None = None,
    ) -> list[Resource]:
        """GET a collection and map every element to a Resource."""
        url = self._url(kind, namespace, filters=filters)
        response = self._request("GET", url)
        data = self._decode(response, list)
        if not all(isinstance(item, dict) for item in data):
            raise DecodeError(
                f"Expected a JSON array of objects from {response.url}", response.text
            )
        return [make_resource(kind, namespace, item) for item in data]

    def get(
        self,
        kind: ResourceKind,
        resource_id: str | None,
        namespace: str | None = None,
        filters: Mapping[str, Any] | None = None,
    ) -> Resource:
        """GET one resource. A reserved ``extra`` filter becomes a path segment."""
        extra, query = split_extra(filters)
        url = self._url(kind, namespace, resource_id, extra, query)
        data = self._decode(self._request("GET", url), dict)
        return make_resource(kind, namespace, data)

    def get_raw(
        self,
        kind: ResourceKind,
        resource_id: str,
        namespace: str | None = None,
        filters: Mapping[str, Any] | None = None,
    ) -> bytes:
        """GET one resource (or sub-resource) and return the undecoded body."""
        extra, query = split_extra(filters)
        url = self._url(kind, namespace, resource_id, extra, query)
        return self._request("GET", url).content

    def create(
        self, kind: ResourceKind, payload: Any, namespace: str | None = None
    ) -> Resource:
        """POST a new resource. Files go up as multipart, everything else as JSON."""
        url = self._url(kind, namespace)
        response = self._request("POST", url, **self._body_kwargs(kind, payload))
        return make_resource(kind, namespace, self._decode(response, dict))

    def update(
        self,
        kind: ResourceKind,
        resource_id: str,
        payload: Any,
        namespace: str | None = None,
    ) -> Resource:
        url = self._url(kind, namespace, resource_id)
        response = self._request("PUT", url, **self._body_kwargs(kind, payload))
        return make_resource(kind, namespace, self._decode(response, dict))

    def delete(
        self, kind: ResourceKind, resource_id: str, namespace: str | None = None
    ) -> Any:
        """DELETE a resource and return the API's confirmation payload as-is."""
        url = self._url(kind, namespace, resource_id)
        response = self._request("DELETE", url)
        if not response.content.strip():
            return None
        return self._decode(response, object)

    def send_draft(self, draft: Resource, namespace: str | None = None) -> Resource:
        """Send a saved draft; returns the resulting message."""
        namespace = namespace or draft.namespace
        url = build_action_url(self.api_server, "send", self.api_root, namespace)
        payload = {"draft_id": draft.id, "version": draft.get("version")}
        response = self._request(
            "POST", url, json=payload, headers={"Content-Type": "application/json"}
        )
        return make_resource(MESSAGE, namespace, self._decode(response, dict))

    # ── Collections ──────────────────────────────────────────────────────────

    def account(self, namespace: str | None = None) -> Resource:
        return self.get(ACCOUNT, None, namespace)

    def collection(self, kind: ResourceKind, namespace: str | None = None) -> ResourceCollection:
        return ResourceCollection(self, kind, namespace)

    def messages(self, namespace: str | None = None) -> ResourceCollection:
        return self.collection(MESSAGE, namespace)

    def threads(self, namespace: str | None = None) -> ResourceCollection:
        return self.collection(THREAD, namespace)

    def drafts(self, namespace: str | None = None) -> ResourceCollection:
        return self.collection(DRAFT, namespace)

    def tags(self, namespace: str | None = None) -> ResourceCollection:
        return self.collection(TAG, namespace)

    def files(self, namespace: str | None = None) -> ResourceCollection:
        return self.collection(FILE, namespace)

    def contacts(self, namespace: str | None = None) -> ResourceCollection:
        return self.collection(CONTACT, namespace)

    def calendars(self, namespace: str | None = None) -> ResourceCollection:
        return self.collection(CALENDAR, namespace)

    def events(self, namespace: str | None = None) -> ResourceCollection:
        return self.collection(EVENT, namespace)
