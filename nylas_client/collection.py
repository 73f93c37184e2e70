"""Filterable views over one resource kind."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterator, Mapping

from nylas_client.models import Resource, ResourceKind

if TYPE_CHECKING:
    from nylas_client.client import NylasClient


class ResourceCollection:
    """A lazily-queried view of one kind of resource.

    Nothing is cached: every ``all()`` or iteration issues a fresh request.
    Filters are passed straight through as query parameters.
    """

    def __init__(
        self,
        client: NylasClient,
        kind: ResourceKind,
        namespace: str | None = None,
        filters: Mapping[str, Any] | None = None,
    ):
        self.client = client
        self.kind = kind
        self.namespace = namespace
        self.filters: dict[str, Any] = dict(filters or {})

    def __repr__(self) -> str:
        return (
            f"ResourceCollection({self.kind.name!r}, namespace={self.namespace!r}, "
            f"filters={self.filters!r})"
        )

    def __iter__(self) -> Iterator[Resource]:
        return iter(self.all())

    def where(self, **filters: Any) -> ResourceCollection:
        """Return a new view with extra filters; this one is left unchanged."""
        return ResourceCollection(
            self.client, self.kind, self.namespace, {**self.filters, **filters}
        )

    def all(self, **filters: Any) -> list[Resource]:
        return self.client.list(self.kind, self.namespace, {**self.filters, **filters})

    def first(self) -> Resource | None:
        results = self.all(limit=1)
        return results[0] if results else None

    def find(self, resource_id: str, **filters: Any) -> Resource:
        return self.client.get(self.kind, resource_id, self.namespace, filters)

    def raw(self, resource_id: str, extra: str) -> bytes:
        """Fetch an undecoded sub-resource, e.g. ``rfc2822`` or ``download``."""
        return self.client.get_raw(self.kind, resource_id, self.namespace, {"extra": extra})

    def create(self, payload: Any) -> Resource:
        return self.client.create(self.kind, payload, self.namespace)

    def update(self, resource_id: str, payload: Any) -> Resource:
        return self.client.update(self.kind, resource_id, payload, self.namespace)

    def delete(self, resource_id: str) -> Any:
        return self.client.delete(self.kind, resource_id, self.namespace)
