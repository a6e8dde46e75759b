"""Shared error code mapping for bundle validation and store failures."""
from typing import Any

from ..services.search.base import SearchUnavailableError
from ..services.store.base import ResourceNotFoundError, VersionConflictError
from .errors import (
    AmbiguousConditionalMatchError,
    BundleConflictError,
    BundleValidationError,
    InvalidConditionalParametersError,
    UnsupportedOperationError,
    UnsupportedResourceTypeError,
)

ERROR_CODE_UNSUPPORTED_OPERATION = "BUNDLE_ENTRY_UNSUPPORTED_OPERATION"
ERROR_CODE_UNSUPPORTED_RESOURCE_TYPE = "BUNDLE_ENTRY_UNSUPPORTED_RESOURCE_TYPE"
ERROR_CODE_INVALID_CONDITIONAL = "CONDITIONAL_PARAMETERS_INVALID"
ERROR_CODE_AMBIGUOUS_CONDITIONAL = "CONDITIONAL_NOT_SELECTIVE"
ERROR_CODE_BUNDLE_CONFLICT = "BUNDLE_RESOURCES_NOT_UNIQUE"
ERROR_CODE_SEARCH_UNAVAILABLE = "SEARCH_UNAVAILABLE"
ERROR_CODE_VERSION_CONFLICT = "RESOURCE_VERSION_CONFLICT"
ERROR_CODE_NOT_FOUND = "RESOURCE_NOT_FOUND"
ERROR_CODE_GENERIC = "BUNDLE_VALIDATION_FAILED"

# Most specific class first.
_ERROR_TABLE: tuple[tuple[type[Exception], str, int], ...] = (
    (UnsupportedOperationError, ERROR_CODE_UNSUPPORTED_OPERATION, 400),
    (UnsupportedResourceTypeError, ERROR_CODE_UNSUPPORTED_RESOURCE_TYPE, 400),
    (InvalidConditionalParametersError, ERROR_CODE_INVALID_CONDITIONAL, 400),
    (AmbiguousConditionalMatchError, ERROR_CODE_AMBIGUOUS_CONDITIONAL, 412),
    (BundleConflictError, ERROR_CODE_BUNDLE_CONFLICT, 400),
    (BundleValidationError, ERROR_CODE_GENERIC, 400),
    (SearchUnavailableError, ERROR_CODE_SEARCH_UNAVAILABLE, 503),
    (VersionConflictError, ERROR_CODE_VERSION_CONFLICT, 409),
    (ResourceNotFoundError, ERROR_CODE_NOT_FOUND, 404),
)


def classify_error(error: Exception) -> tuple[str, int]:
    """Return the stable error code and transport status for ``error``."""
    for error_type, code, status in _ERROR_TABLE:
        if isinstance(error, error_type):
            return code, status
    return ERROR_CODE_GENERIC, 500


def _error_details(error: Exception) -> dict[str, Any]:
    if isinstance(error, UnsupportedOperationError):
        return {"url": error.url, "method": error.method}
    if isinstance(error, UnsupportedResourceTypeError):
        return {"resource_type": error.resource_type}
    if isinstance(error, InvalidConditionalParametersError):
        return {"url": error.url}
    if isinstance(error, AmbiguousConditionalMatchError):
        return {"query": error.query, "match_count": error.match_count}
    if isinstance(error, BundleConflictError):
        return {
            "request_url": error.request_url,
            "entry_index": error.entry_index,
            "first_index": error.first_index,
        }
    return {}


def build_error_payload(error: Exception) -> dict[str, Any]:
    """Build standardized error payload for a failed validation pass."""
    code, _status = classify_error(error)
    payload: dict[str, Any] = {
        "code": code,
        "message": str(error),
    }
    details = _error_details(error)
    if details:
        payload["details"] = details
    return payload
