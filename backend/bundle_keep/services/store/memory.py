"""In-memory versioned resource store."""
from __future__ import annotations

import asyncio
from dataclasses import replace

from ...core.logging_utils import log_event
from ...core.models import ResourceKey, ResourceWrapper, UpsertOutcome
from .base import BaseResourceStore, ResourceNotFoundError, VersionConflictError


def _identity(resource_type: str, resource_id: str) -> tuple[str, str]:
    return resource_type, resource_id


class InMemoryResourceStore(BaseResourceStore):
    """Keeps every resource version in process memory.

    Versions are monotonically increasing integers rendered as strings.
    A deleted wrapper is stored as a tombstone version, so ``get`` on the
    current key returns None while older versions stay readable.
    """

    def __init__(self):
        self._current: dict[tuple[str, str], ResourceWrapper] = {}
        self._history: dict[tuple[str, str], dict[str, ResourceWrapper]] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: ResourceKey) -> ResourceWrapper | None:
        identity = _identity(key.resource_type, key.resource_id)
        if key.version_id is not None:
            stored = self._history.get(identity, {}).get(key.version_id)
        else:
            stored = self._current.get(identity)
        if stored is None or stored.deleted:
            return None
        return stored

    async def upsert(
        self,
        wrapper: ResourceWrapper,
        expected_version: str | None,
        allow_create: bool,
        keep_history: bool,
    ) -> UpsertOutcome:
        identity = _identity(wrapper.resource_type, wrapper.resource_id)
        async with self._lock:
            existing = self._current.get(identity)
            live = existing if existing is not None and not existing.deleted else None

            if expected_version is not None:
                current_version = live.version if live is not None else None
                if current_version != expected_version:
                    raise VersionConflictError(wrapper.key, expected_version, current_version)
            if live is None and not allow_create:
                raise ResourceNotFoundError(wrapper.key)

            next_version = str(int(existing.version) + 1) if existing is not None else "1"
            raw = dict(wrapper.raw_resource)
            meta = dict(raw.get("meta") or {})
            meta["versionId"] = next_version
            meta["lastUpdated"] = wrapper.last_modified.isoformat()
            raw["meta"] = meta
            stored = replace(wrapper, raw_resource=raw, version=next_version)

            versions = self._history.setdefault(identity, {})
            if not keep_history:
                versions.clear()
            versions[next_version] = stored
            self._current[identity] = stored

        log_event(
            component="resource_store",
            event="resource_upserted",
            level="DEBUG",
            details={
                "resource": str(stored.key),
                "version": next_version,
                "created": live is None,
                "deleted": stored.deleted,
            },
        )
        return UpsertOutcome(
            wrapper=stored,
            created=live is None,
            history=tuple(versions.keys()),
        )

    def iter_current(self) -> list[ResourceWrapper]:
        """Return live resources, used by the in-memory search gateway."""
        return [wrapper for wrapper in self._current.values() if not wrapper.deleted]
