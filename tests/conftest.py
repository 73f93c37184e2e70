"""Shared fixtures — a NylasClient wired to an in-memory httpx transport."""

from __future__ import annotations

from typing import Any, Iterator

import httpx
import pytest

from nylas_client.client import NylasClient

API_SERVER = "https://api.nylas.test"


class FakeApi:
    """Records every request and answers from a queue of canned responses."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: list[httpx.Response | Exception] = []

    def reply(
        self,
        status: int = 200,
        json: Any = None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        if content is not None:
            self._responses.append(httpx.Response(status, content=content, headers=headers))
        else:
            self._responses.append(httpx.Response(status, json=json, headers=headers))

    def fail(self, exc: Exception) -> None:
        self._responses.append(exc)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def client(api: FakeApi) -> Iterator[NylasClient]:
    c = NylasClient(
        "app_id",
        "app_secret",
        "tok",
        API_SERVER,
        transport=httpx.MockTransport(api.handler),
    )
    yield c
    c.close()
