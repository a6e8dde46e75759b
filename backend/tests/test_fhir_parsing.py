from __future__ import annotations

from copy import deepcopy
import os
import sys
from typing import Any

import pytest

# Ensure backend modules are importable when running tests directly.
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "../")))

from bundle_keep.core import EntryVerb
from bundle_keep.fhir.parsing import parse_bundle
from bundle_keep.fhir.validation import has_fatal_issue, validate_transaction_bundle_structure


def _build_admission_bundle() -> dict[str, Any]:
    return {
        "resourceType": "Bundle",
        "id": "admission-001",
        "type": "transaction",
        "entry": [
            {
                "fullUrl": "urn:uuid:61ebe359-bfdc-4613-8bf2-c5e300945f0a",
                "resource": {"resourceType": "Patient", "active": True},
                "request": {
                    "method": "POST",
                    "url": "Patient",
                    "ifNoneExist": "identifier=http://mrn|12345",
                },
            },
            {
                "resource": {"resourceType": "Encounter", "status": "in-progress"},
                "request": {"method": "POST", "url": "Encounter"},
            },
            {
                "resource": {"resourceType": "Practitioner", "id": "pr1"},
                "request": {"method": "PUT", "url": "Practitioner?identifier=npi|999"},
            },
            {"request": {"method": "GET", "url": "Organization/org-1"}},
            {"request": {"method": "DELETE", "url": "Observation/obs-1"}},
            {"request": {"method": "PATCH", "url": "Condition/c1"}},
        ],
    }


def test_parse_bundle_maps_methods_to_verbs():
    bundle = parse_bundle(_build_admission_bundle())

    assert bundle.bundle_id == "admission-001"
    assert bundle.bundle_type == "transaction"
    assert [entry.verb for entry in bundle.entries] == [
        EntryVerb.CREATE,
        EntryVerb.CREATE,
        EntryVerb.UPDATE,
        EntryVerb.READ,
        EntryVerb.DELETE,
        EntryVerb.OTHER,
    ]


def test_parse_bundle_keeps_conditional_fields():
    entry = parse_bundle(_build_admission_bundle()).entries[0]

    assert entry.url == "Patient"
    assert entry.method == "POST"
    assert entry.if_none_exist == "identifier=http://mrn|12345"
    assert entry.full_url == "urn:uuid:61ebe359-bfdc-4613-8bf2-c5e300945f0a"
    assert entry.resource_type == "Patient"


def test_parse_bundle_assigns_tokens_to_creates_without_full_url():
    entries = parse_bundle(_build_admission_bundle()).entries

    assert entries[1].full_url is not None
    assert entries[1].full_url.startswith("urn:uuid:")
    assert entries[3].full_url is None


def test_parse_bundle_assigns_distinct_tokens():
    payload = _build_admission_bundle()
    payload["entry"].append(deepcopy(payload["entry"][1]))

    entries = parse_bundle(payload).entries
    assert entries[1].full_url != entries[-1].full_url


def test_parse_bundle_rejects_unknown_method():
    payload = _build_admission_bundle()
    payload["entry"][0]["request"]["method"] = "TRACE"

    with pytest.raises(ValueError, match="TRACE"):
        parse_bundle(payload)


def test_validate_structure_accepts_fixture():
    issues = validate_transaction_bundle_structure(_build_admission_bundle())
    assert issues == []
    assert not has_fatal_issue(issues)


def test_validate_structure_rejects_non_object():
    assert validate_transaction_bundle_structure([]) == ["fatal: bundle must be a JSON object."]


def test_validate_structure_reports_entry_problems():
    payload = _build_admission_bundle()
    payload["type"] = "collection"
    payload["entry"][0]["request"]["method"] = "TRACE"
    payload["entry"][1]["request"]["url"] = ""
    del payload["entry"][2]["resource"]
    payload["entry"][3] = "not-an-entry"

    issues = validate_transaction_bundle_structure(payload)

    assert has_fatal_issue(issues)
    joined = "\n".join(issues)
    assert "bundle type must be one of" in joined
    assert "entry[0].request.method 'TRACE'" in joined
    assert "entry[1].request.url" in joined
    assert "entry[2] PUT request requires a resource" in joined
    assert "entry[3] must be an object" in joined


def test_validate_structure_warns_on_empty_bundle():
    issues = validate_transaction_bundle_structure({"resourceType": "Bundle", "type": "batch", "entry": []})
    assert issues == ["warning: bundle.entry is empty."]
    assert not has_fatal_issue(issues)
