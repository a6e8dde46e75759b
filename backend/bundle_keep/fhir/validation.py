"""Lightweight structural validation for incoming transaction bundles."""

from __future__ import annotations

from typing import Any

from ..core.types import HTTP_METHOD_VERBS, EntryVerb

SUPPORTED_BUNDLE_TYPES = ("transaction", "batch")


def _validate_entry(index: int, entry: Any) -> list[str]:
    if not isinstance(entry, dict):
        return [f"fatal: bundle.entry[{index}] must be an object."]

    issues: list[str] = []
    request = entry.get("request")
    if not isinstance(request, dict):
        return [f"fatal: bundle.entry[{index}].request must be an object."]

    method = request.get("method")
    verb = HTTP_METHOD_VERBS.get(method.upper()) if isinstance(method, str) else None
    if verb is None:
        issues.append(f"fatal: bundle.entry[{index}].request.method '{method}' is not supported.")

    url = request.get("url")
    if not isinstance(url, str) or not url.strip():
        issues.append(f"fatal: bundle.entry[{index}].request.url must be a non-empty string.")

    if_none_exist = request.get("ifNoneExist")
    if if_none_exist is not None and not isinstance(if_none_exist, str):
        issues.append(f"fatal: bundle.entry[{index}].request.ifNoneExist must be a string.")

    full_url = entry.get("fullUrl")
    if full_url is not None and not isinstance(full_url, str):
        issues.append(f"fatal: bundle.entry[{index}].fullUrl must be a string.")

    resource = entry.get("resource")
    if resource is not None:
        if not isinstance(resource, dict):
            issues.append(f"fatal: bundle.entry[{index}].resource must be an object.")
        elif not isinstance(resource.get("resourceType"), str) or not resource["resourceType"]:
            issues.append(f"fatal: bundle.entry[{index}] missing resourceType.")
    elif verb in (EntryVerb.CREATE, EntryVerb.UPDATE):
        issues.append(f"fatal: bundle.entry[{index}] {method} request requires a resource.")

    return issues


def validate_transaction_bundle_structure(bundle: dict[str, Any]) -> list[str]:
    """Validate the minimal shape every bundle entry needs before resolution."""
    issues: list[str] = []

    if not isinstance(bundle, dict):
        return ["fatal: bundle must be a JSON object."]

    if bundle.get("resourceType") != "Bundle":
        issues.append("fatal: resourceType must be 'Bundle'.")
    if bundle.get("type") not in SUPPORTED_BUNDLE_TYPES:
        supported = ", ".join(SUPPORTED_BUNDLE_TYPES)
        issues.append(f"fatal: bundle type must be one of: {supported}.")

    entries = bundle.get("entry", [])
    if not isinstance(entries, list):
        issues.append("fatal: bundle.entry must be an array.")
        return issues
    if not entries:
        issues.append("warning: bundle.entry is empty.")

    for index, entry in enumerate(entries):
        issues.extend(_validate_entry(index, entry))

    return issues


def has_fatal_issue(issues: list[str]) -> bool:
    return any(issue.lower().startswith("fatal") for issue in issues)
