"""Immutable snapshots of a transaction bundle and the identities it resolves to."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .types import EntryVerb, QueryParameter


@dataclass(frozen=True)
class ResourceKey:
    """Identity of a stored resource, optionally pinned to one version."""

    resource_type: str
    resource_id: str
    version_id: str | None = None

    def __str__(self) -> str:
        return f"{self.resource_type}/{self.resource_id}"


@dataclass(frozen=True)
class SearchMatch:
    resource_type: str
    resource_id: str
    version_id: str | None = None


@dataclass(frozen=True)
class ConditionalQuery:
    """Search parameters that stand in for a direct identifier."""

    resource_type: str
    query: str
    parameters: tuple[QueryParameter, ...]


@dataclass(frozen=True)
class BundleEntry:
    """One requested operation inside a bundle.

    ``full_url`` is the same-bundle reference token. For a create it names
    the resource the bundle is about to materialize.
    """

    verb: EntryVerb
    url: str
    method: str = ""
    if_none_exist: str | None = None
    full_url: str | None = None
    resource: dict[str, Any] | None = None

    @property
    def resource_type(self) -> str | None:
        if self.resource is None:
            return None
        value = self.resource.get("resourceType")
        return value if isinstance(value, str) and value else None

    @property
    def display_method(self) -> str:
        return self.method or self.verb.value


@dataclass(frozen=True)
class Bundle:
    entries: tuple[BundleEntry, ...]
    bundle_type: str = "transaction"
    bundle_id: str | None = None


@dataclass
class ResourceWrapper:
    """Storage-ready envelope around a resource payload."""

    resource_type: str
    resource_id: str
    raw_resource: dict[str, Any]
    last_modified: datetime
    deleted: bool = False
    version: str | None = None

    @property
    def key(self) -> ResourceKey:
        return ResourceKey(self.resource_type, self.resource_id, self.version)


@dataclass(frozen=True)
class UpsertOutcome:
    wrapper: ResourceWrapper
    created: bool
    history: tuple[str, ...] = field(default_factory=tuple)
