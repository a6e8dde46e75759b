import pytest

from bundle_keep.core import BundleEntry, EntryVerb
from bundle_keep.core.errors import UnsupportedOperationError, UnsupportedResourceTypeError
from bundle_keep.transactions import should_validate_entry


def _entry(verb: EntryVerb, url: str, resource_type: str | None = "Patient", method: str = "") -> BundleEntry:
    resource = {"resourceType": resource_type} if resource_type else None
    return BundleEntry(verb=verb, url=url, method=method, resource=resource)


@pytest.mark.parametrize(
    ("verb", "url", "expected"),
    [
        (EntryVerb.CREATE, "Patient", True),
        (EntryVerb.UPDATE, "Patient/1", True),
        (EntryVerb.UPDATE, "Patient?identifier=123", True),
        (EntryVerb.DELETE, "Patient/1", True),
        (EntryVerb.OTHER, "Patient/1", True),
        (EntryVerb.READ, "Patient/1", False),
        (EntryVerb.READ, "Patient?name=smith", False),
        (EntryVerb.CREATE, "Patient/$validate", False),
        (EntryVerb.UPDATE, "Patient/1/$meta-add", False),
    ],
)
def test_should_validate_entry_matrix(verb: EntryVerb, url: str, expected: bool):
    assert should_validate_entry(_entry(verb, url)) is expected


@pytest.mark.parametrize("url", ["Patient/_search", "Patient/_SEARCH?name=x"])
def test_search_via_create_is_rejected(url: str):
    with pytest.raises(UnsupportedOperationError) as exc_info:
        should_validate_entry(_entry(EntryVerb.CREATE, url, method="POST"))

    assert exc_info.value.url == url
    assert exc_info.value.method == "POST"


def test_conditional_delete_is_rejected():
    with pytest.raises(UnsupportedOperationError) as exc_info:
        should_validate_entry(_entry(EntryVerb.DELETE, "Patient?identifier=123", resource_type=None))

    assert exc_info.value.method == "DELETE"


def test_search_url_on_read_is_not_rejected():
    assert should_validate_entry(_entry(EntryVerb.READ, "Patient/_search", resource_type=None)) is False


def test_nested_bundle_resource_is_rejected():
    with pytest.raises(UnsupportedResourceTypeError) as exc_info:
        should_validate_entry(_entry(EntryVerb.CREATE, "Bundle", resource_type="Bundle"))

    assert exc_info.value.resource_type == "Bundle"


def test_nested_bundle_is_rejected_even_for_reads():
    with pytest.raises(UnsupportedResourceTypeError):
        should_validate_entry(_entry(EntryVerb.READ, "Bundle/1", resource_type="Bundle"))


def test_classification_is_idempotent():
    entry = _entry(EntryVerb.UPDATE, "Patient/1")
    assert should_validate_entry(entry) == should_validate_entry(entry)
