"""Conversion from FHIR bundle JSON into validation snapshots."""

from __future__ import annotations

from typing import Any
from uuid import uuid4

from ..core.models import Bundle, BundleEntry
from ..core.types import HTTP_METHOD_VERBS, EntryVerb


def _to_urn(resource_id: str) -> str:
    return f"urn:uuid:{resource_id}"


def _normalize_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_entry(entry: dict[str, Any]) -> BundleEntry:
    request = entry.get("request") or {}
    method = str(request.get("method", "")).strip().upper()
    verb = HTTP_METHOD_VERBS.get(method)
    if verb is None:
        raise ValueError(f"unsupported request method '{method}'")

    full_url = _normalize_text(entry.get("fullUrl"))
    if verb is EntryVerb.CREATE and full_url is None:
        # A new resource still needs a same-bundle token to be compared by.
        full_url = _to_urn(str(uuid4()))

    resource = entry.get("resource")
    return BundleEntry(
        verb=verb,
        url=str(request.get("url", "")).strip(),
        method=method,
        if_none_exist=_normalize_text(request.get("ifNoneExist")),
        full_url=full_url,
        resource=dict(resource) if isinstance(resource, dict) else None,
    )


def parse_bundle(bundle: dict[str, Any]) -> Bundle:
    """Build a ``Bundle`` snapshot from structurally valid bundle JSON."""
    if not isinstance(bundle, dict):
        raise ValueError("bundle must be a JSON object")
    entries = bundle.get("entry") or []
    return Bundle(
        entries=tuple(parse_entry(entry) for entry in entries),
        bundle_type=str(bundle.get("type", "transaction")),
        bundle_id=_normalize_text(bundle.get("id")),
    )
