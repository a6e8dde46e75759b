import pytest

from bundle_keep.core import ResourceKey
from bundle_keep.core.error_mapping import (
    ERROR_CODE_AMBIGUOUS_CONDITIONAL,
    ERROR_CODE_BUNDLE_CONFLICT,
    ERROR_CODE_GENERIC,
    ERROR_CODE_INVALID_CONDITIONAL,
    ERROR_CODE_SEARCH_UNAVAILABLE,
    ERROR_CODE_UNSUPPORTED_OPERATION,
    ERROR_CODE_UNSUPPORTED_RESOURCE_TYPE,
    ERROR_CODE_VERSION_CONFLICT,
    build_error_payload,
    classify_error,
)
from bundle_keep.core.errors import (
    AmbiguousConditionalMatchError,
    BundleConflictError,
    InvalidConditionalParametersError,
    UnsupportedOperationError,
    UnsupportedResourceTypeError,
)
from bundle_keep.services.search import SearchUnavailableError
from bundle_keep.services.store import VersionConflictError


@pytest.mark.parametrize(
    ("error", "expected_code", "expected_status"),
    [
        (UnsupportedOperationError("Patient/_search", "POST"), ERROR_CODE_UNSUPPORTED_OPERATION, 400),
        (UnsupportedResourceTypeError("Bundle"), ERROR_CODE_UNSUPPORTED_RESOURCE_TYPE, 400),
        (InvalidConditionalParametersError("Patient?"), ERROR_CODE_INVALID_CONDITIONAL, 400),
        (AmbiguousConditionalMatchError("identifier=1", 2), ERROR_CODE_AMBIGUOUS_CONDITIONAL, 412),
        (BundleConflictError("Patient/1", 1, 0), ERROR_CODE_BUNDLE_CONFLICT, 400),
        (SearchUnavailableError("down"), ERROR_CODE_SEARCH_UNAVAILABLE, 503),
        (VersionConflictError(ResourceKey("Patient", "1"), "1", "2"), ERROR_CODE_VERSION_CONFLICT, 409),
        (RuntimeError("boom"), ERROR_CODE_GENERIC, 500),
    ],
)
def test_classify_error_matrix(error: Exception, expected_code: str, expected_status: int):
    assert classify_error(error) == (expected_code, expected_status)


def test_build_error_payload_for_conflict_includes_details():
    payload = build_error_payload(BundleConflictError("Patient?identifier=1", 3, 1))
    assert payload == {
        "code": ERROR_CODE_BUNDLE_CONFLICT,
        "message": "Bundle contains multiple entries that refer to the same resource 'Patient?identifier=1'.",
        "details": {"request_url": "Patient?identifier=1", "entry_index": 3, "first_index": 1},
    }


def test_build_error_payload_omits_empty_details():
    payload = build_error_payload(SearchUnavailableError("index offline"))
    assert payload == {"code": ERROR_CODE_SEARCH_UNAVAILABLE, "message": "index offline"}


def test_unsupported_operation_message_names_url_and_method():
    payload = build_error_payload(UnsupportedOperationError("Patient?identifier=1", "DELETE"))
    assert "Patient?identifier=1" in payload["message"]
    assert "DELETE" in payload["message"]
    assert payload["details"] == {"url": "Patient?identifier=1", "method": "DELETE"}
