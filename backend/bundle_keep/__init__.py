"""
BundleKeep: transaction bundle validation for a FHIR resource server.

Before a transaction executes, every entry is checked for legal shape,
conditional references are resolved through the search gateway, and the
bundle is rejected when two entries target the same resource.

Core components:
    - core: Models, errors, schemas and structured logging
    - fhir: Bundle JSON parsing and structural validation
    - transactions: Entry classifier, reference resolver, bundle validator
    - services: Search gateway and resource store implementations
    - config: Service configuration and factory
"""

from .core import (
    Bundle,
    BundleEntry,
    EntryVerb,
    ResourceKey,
    SearchMatch,
    BundleValidationError,
    BundleConflictError,
)
from .fhir import parse_bundle, validate_transaction_bundle_structure
from .transactions import BundleValidator
from .config import get_services, get_validator

__all__ = [
    # Models
    "Bundle",
    "BundleEntry",
    "EntryVerb",
    "ResourceKey",
    "SearchMatch",
    # Errors
    "BundleValidationError",
    "BundleConflictError",
    # Validation
    "parse_bundle",
    "validate_transaction_bundle_structure",
    "BundleValidator",
    # Config
    "get_services",
    "get_validator",
]

__version__ = "1.0.0"
