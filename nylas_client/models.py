"""Resource kinds and resource values — account, message, thread, draft, and friends."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping

from nylas_client.errors import UnknownKindError


def _split_fields(declared: frozenset[str], data: Mapping[str, Any]) -> tuple[dict, dict]:
    """Split an API object into declared fields and pass-through extras."""
    known: dict[str, Any] = {}
    extras: dict[str, Any] = {}
    for key, value in data.items():
        if key in declared:
            known[key] = value
        else:
            extras[key] = value
    return known, extras


@dataclass(frozen=True)
class ResourceKind:
    """Static description of one kind of remote resource."""

    name: str
    collection_name: str
    fields: frozenset[str] = field(repr=False)
    api_root: str = "n"
    decode: Callable[[frozenset[str], Mapping[str, Any]], tuple[dict, dict]] = field(
        default=_split_fields, compare=False, repr=False
    )

    @property
    def is_file(self) -> bool:
        return self.collection_name == "files"


@dataclass(frozen=True)
class Resource:
    """One decoded API object, tagged with its kind and namespace."""

    kind: ResourceKind
    namespace: str | None
    fields: Mapping[str, Any]
    extras: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def id(self) -> str | None:
        return self.fields.get("id")

    def __getitem__(self, key: str) -> Any:
        if key in self.fields:
            return self.fields[key]
        return self.extras[key]

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails, e.g. resource.subject
        if name.startswith("_") or name in ("fields", "extras", "kind", "namespace"):
            raise AttributeError(name)
        try:
            return self[name]
        except KeyError:
            if name in self.kind.fields:
                return None
            raise AttributeError(
                f"{self.kind.name} resource has no field {name!r}"
            ) from None

    def get(self, key: str, default: Any = None) -> Any:
        try:
            return self[key]
        except KeyError:
            return default

    def to_dict(self) -> dict[str, Any]:
        return {**self.extras, **self.fields}

    def __hash__(self) -> int:
        # Equal resources share kind, namespace and id
        return hash((self.kind, self.namespace, self.id))


def make_resource(
    kind: ResourceKind, namespace: str | None, data: Mapping[str, Any]
) -> Resource:
    """Build a fresh, read-only Resource from an API object."""
    known, extras = kind.decode(kind.fields, data)
    return Resource(
        kind=kind,
        namespace=namespace,
        fields=MappingProxyType(known),
        extras=MappingProxyType(extras),
    )


# ── Kinds ────────────────────────────────────────────────────────────────────

_COMMON = {"id", "object", "namespace_id", "account_id"}

_MESSAGE_FIELDS = _COMMON | {
    "thread_id",
    "subject",
    "from",
    "to",
    "cc",
    "bcc",
    "reply_to",
    "date",
    "unread",
    "starred",
    "snippet",
    "body",
    "files",
    "events",
    "tags",
    "labels",
    "folder",
}

ACCOUNT = ResourceKind(
    name="account",
    collection_name="account",
    fields=frozenset(
        _COMMON
        | {
            "email_address",
            "name",
            "provider",
            "organization_unit",
            "sync_state",
            "linked_at",
        }
    ),
)

MESSAGE = ResourceKind(
    name="message",
    collection_name="messages",
    fields=frozenset(_MESSAGE_FIELDS),
)

THREAD = ResourceKind(
    name="thread",
    collection_name="threads",
    fields=frozenset(
        _COMMON
        | {
            "subject",
            "participants",
            "last_message_timestamp",
            "first_message_timestamp",
            "snippet",
            "tags",
            "labels",
            "folders",
            "message_ids",
            "draft_ids",
            "unread",
            "starred",
            "version",
        }
    ),
)

DRAFT = ResourceKind(
    name="draft",
    collection_name="drafts",
    fields=frozenset(
        _MESSAGE_FIELDS | {"version", "state", "reply_to_message_id", "file_ids"}
    ),
)

TAG = ResourceKind(
    name="tag",
    collection_name="tags",
    fields=frozenset({"id", "object", "namespace_id", "name", "readonly"}),
)

FILE = ResourceKind(
    name="file",
    collection_name="files",
    fields=frozenset(
        _COMMON
        | {
            "filename",
            "size",
            "content_type",
            "content_id",
            "message_ids",
            "is_embedded",
        }
    ),
)

CONTACT = ResourceKind(
    name="contact",
    collection_name="contacts",
    fields=frozenset(_COMMON | {"name", "email"}),
)

CALENDAR = ResourceKind(
    name="calendar",
    collection_name="calendars",
    fields=frozenset(_COMMON | {"name", "description", "read_only", "event_ids"}),
)

EVENT = ResourceKind(
    name="event",
    collection_name="events",
    fields=frozenset(
        _COMMON
        | {
            "calendar_id",
            "title",
            "description",
            "location",
            "read_only",
            "participants",
            "when",
            "busy",
            "status",
            "recurrence",
        }
    ),
)

KINDS: dict[str, ResourceKind] = {
    kind.name: kind
    for kind in (ACCOUNT, MESSAGE, THREAD, DRAFT, TAG, FILE, CONTACT, CALENDAR, EVENT)
}


def get_kind(name: str) -> ResourceKind:
    """Look up a kind by name ("message") or collection name ("messages")."""
    if name in KINDS:
        return KINDS[name]
    for kind in KINDS.values():
        if kind.collection_name == name:
            return kind
    raise UnknownKindError(f"Unknown resource kind {name!r}. Choose from: {', '.join(KINDS)}")
