"""Nylas API client — OAuth code exchange plus typed access to mail, calendar and contacts."""

from nylas_client.auth import Credentials, OAuthFlow
from nylas_client.client import NylasClient
from nylas_client.collection import ResourceCollection
from nylas_client.config import NylasConfig
from nylas_client.errors import (
    ApiError,
    DecodeError,
    NotFoundError,
    NylasError,
    TransportError,
    UnknownKindError,
)
from nylas_client.models import KINDS, Resource, ResourceKind, get_kind, make_resource

__all__ = [
    "NylasClient",
    "NylasConfig",
    "Credentials",
    "OAuthFlow",
    "ResourceCollection",
    "Resource",
    "ResourceKind",
    "KINDS",
    "get_kind",
    "make_resource",
    "NylasError",
    "ApiError",
    "NotFoundError",
    "TransportError",
    "DecodeError",
    "UnknownKindError",
]
