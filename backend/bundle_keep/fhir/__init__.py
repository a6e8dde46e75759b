"""FHIR bundle parsing and structural validation helpers."""

from .parsing import parse_bundle, parse_entry
from .validation import has_fatal_issue, validate_transaction_bundle_structure

__all__ = [
    "has_fatal_issue",
    "parse_bundle",
    "parse_entry",
    "validate_transaction_bundle_structure",
]
