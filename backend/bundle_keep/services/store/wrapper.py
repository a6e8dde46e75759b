"""Conversion from resource payloads into storage-ready wrappers."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable
from uuid import uuid4

from ...core.models import ResourceWrapper


class ResourceWrapperFactory:
    """Wrap raw resources, stamping default metadata only."""

    def __init__(self, clock: Callable[[], datetime] | None = None):
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def create(self, resource: dict[str, Any], deleted: bool = False) -> ResourceWrapper:
        if not isinstance(resource, dict):
            raise ValueError("resource must be a JSON object")
        resource_type = resource.get("resourceType")
        if not isinstance(resource_type, str) or not resource_type:
            raise ValueError("resource is missing resourceType")

        raw = dict(resource)
        resource_id = str(raw.get("id") or "").strip()
        if not resource_id:
            resource_id = str(uuid4())
            raw["id"] = resource_id

        return ResourceWrapper(
            resource_type=resource_type,
            resource_id=resource_id,
            raw_resource=raw,
            last_modified=self._clock(),
            deleted=deleted,
        )
