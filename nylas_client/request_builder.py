"""URL, query string and header construction for API requests."""

from __future__ import annotations

import base64
from typing import Any, Mapping
from urllib.parse import quote, urlencode

from nylas_client.models import ResourceKind

WRAPPER_HEADER = "X-Nylas-API-Wrapper"
WRAPPER_NAME = "python"

# Filter key consumed as a trailing path segment instead of a query parameter
EXTRA_KEY = "extra"


def split_extra(filters: Mapping[str, Any] | None) -> tuple[str | None, dict[str, Any]]:
    """Pull the reserved ``extra`` key out of a filter mapping.

    Returns ``(extra, remaining_filters)``; the input mapping is not modified.
    """
    remaining = dict(filters or {})
    extra = remaining.pop(EXTRA_KEY, None)
    return (str(extra) if extra else None), remaining


def build_query(filters: Mapping[str, Any] | None) -> str:
    """Encode filters as a query string. None values are dropped."""
    pairs: list[tuple[str, str]] = []
    for key, value in (filters or {}).items():
        if value is None:
            continue
        values = value if isinstance(value, (list, tuple)) else [value]
        for item in values:
            if isinstance(item, bool):
                item = "true" if item else "false"
            pairs.append((key, str(item)))
    return urlencode(pairs)


def build_url(
    api_server: str,
    kind: ResourceKind,
    namespace: str | None = None,
    resource_id: str | None = None,
    extra: str | None = None,
    filters: Mapping[str, Any] | None = None,
) -> str:
    """Build ``base[/api_root/namespace]/collection[/id][/extra][?query]``."""
    parts = [api_server.rstrip("/")]
    if namespace:
        parts += [kind.api_root, quote(namespace, safe="")]
    parts.append(kind.collection_name)
    if resource_id:
        parts.append(quote(str(resource_id), safe=""))
    if extra:
        parts.append(extra.strip("/"))
    url = "/".join(parts)

    query = build_query(filters)
    return f"{url}?{query}" if query else url


def build_action_url(api_server: str, action: str, api_root: str, namespace: str | None) -> str:
    """URL for a namespace-level action such as ``send``."""
    prefix = f"/{api_root}/{quote(namespace, safe='')}" if namespace else ""
    return f"{api_server.rstrip('/')}{prefix}/{action}"


def auth_headers(access_token: str | None) -> dict[str, str]:
    """Basic auth with the token as user name and an empty password."""
    encoded = base64.b64encode(f"{access_token or ''}:".encode("utf-8")).decode("ascii")
    return {
        "Authorization": f"Basic {encoded}",
        WRAPPER_HEADER: WRAPPER_NAME,
    }
