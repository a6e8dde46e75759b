"""Structural checks deciding whether an entry joins the uniqueness check."""
from __future__ import annotations

from ..core.errors import UnsupportedOperationError, UnsupportedResourceTypeError
from ..core.models import BundleEntry
from ..core.types import EntryVerb
from .query import has_query, is_operation_url, is_search_url

NESTED_RESOURCE_TYPE = "Bundle"


def should_validate_entry(entry: BundleEntry) -> bool:
    """Return whether ``entry`` modifies a resource and must be unique.

    Raises for entry shapes a transaction bundle cannot carry.
    """
    if (entry.verb is EntryVerb.CREATE and is_search_url(entry.url)) or (
        entry.verb is EntryVerb.DELETE and has_query(entry.url)
    ):
        raise UnsupportedOperationError(entry.url, entry.display_method)

    if entry.resource_type == NESTED_RESOURCE_TYPE:
        raise UnsupportedResourceTypeError(NESTED_RESOURCE_TYPE)

    return not (entry.verb is EntryVerb.READ or is_operation_url(entry.url))
