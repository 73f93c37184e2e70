"""Errors raised by the Nylas client."""

from __future__ import annotations


class NylasError(Exception):
    """Base class for every error the client raises."""


class TransportError(NylasError):
    """The HTTP call itself failed (DNS, connection, TLS, timeout)."""


class ApiError(NylasError):
    """The API answered with a non-2xx status."""

    def __init__(self, status: int, body: str, url: str = ""):
        self.status = status
        self.body = body
        self.url = url
        super().__init__(f"HTTP {status} from {url or 'API'}: {body[:200]}")


class NotFoundError(ApiError):
    """The API answered 404: the resource does not exist."""


class UnknownKindError(NylasError, KeyError):
    """No resource kind is registered under the requested name."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class DecodeError(NylasError):
    """A response body was not the JSON the call expected."""

    def __init__(self, message: str, body: str = ""):
        self.body = body
        super().__init__(message)


def error_for_status(status: int, body: str, url: str = "") -> ApiError:
    """Pick the exception class for a failed HTTP status."""
    if status == 404:
        return NotFoundError(status, body, url)
    return ApiError(status, body, url)
