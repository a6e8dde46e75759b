"""Core abstractions and types for bundle validation."""
from .errors import (
    BundleValidationError,
    UnsupportedOperationError,
    UnsupportedResourceTypeError,
    InvalidConditionalParametersError,
    AmbiguousConditionalMatchError,
    BundleConflictError,
)
from .models import (
    Bundle,
    BundleEntry,
    ConditionalQuery,
    ResourceKey,
    ResourceWrapper,
    SearchMatch,
    UpsertOutcome,
)
from .types import EntryVerb, HTTP_METHOD_VERBS, QueryParameter, QueryParameters, ResourcePayload
from .schemas import (
    BundleValidationRequest,
    BundleValidationResponse,
    ResourceVersionResponse,
    ResourceUpsertResponse,
    StatusResponse,
)

__all__ = [
    # Errors
    "BundleValidationError",
    "UnsupportedOperationError",
    "UnsupportedResourceTypeError",
    "InvalidConditionalParametersError",
    "AmbiguousConditionalMatchError",
    "BundleConflictError",
    # Models
    "Bundle",
    "BundleEntry",
    "ConditionalQuery",
    "ResourceKey",
    "ResourceWrapper",
    "SearchMatch",
    "UpsertOutcome",
    # Types
    "EntryVerb",
    "HTTP_METHOD_VERBS",
    "QueryParameter",
    "QueryParameters",
    "ResourcePayload",
    # Schemas
    "BundleValidationRequest",
    "BundleValidationResponse",
    "ResourceVersionResponse",
    "ResourceUpsertResponse",
    "StatusResponse",
]
