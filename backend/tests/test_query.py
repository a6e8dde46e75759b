from bundle_keep.transactions.query import (
    build_request_url,
    has_query,
    is_operation_url,
    is_search_url,
    parse_query_parameters,
    split_conditional_url,
)


def test_parse_query_parameters_expands_repeated_names():
    assert parse_query_parameters("identifier=a&identifier=b&name=smith") == [
        ("identifier", "a"),
        ("identifier", "b"),
        ("name", "smith"),
    ]


def test_parse_query_parameters_decodes_and_strips_leading_separator():
    assert parse_query_parameters("?identifier=http%3A%2F%2Fsys%7C123&family=O%27Brien") == [
        ("identifier", "http://sys|123"),
        ("family", "O'Brien"),
    ]


def test_parse_query_parameters_keeps_blank_values():
    assert parse_query_parameters("name=&active=true") == [("name", ""), ("active", "true")]


def test_split_conditional_url_uses_first_separator():
    assert split_conditional_url("Patient?identifier=1?x") == ("Patient", "identifier=1?x")
    assert split_conditional_url("Patient") == ("Patient", "")


def test_build_request_url_appends_conditional_query():
    assert build_request_url("Patient", "identifier=123") == "Patient?identifier=123"
    assert build_request_url("Patient/1", None) == "Patient/1"
    assert build_request_url("Patient/1", "   ") == "Patient/1"


def test_url_markers():
    assert has_query("Patient?name=x")
    assert not has_query("Patient/1")
    assert is_search_url("Observation/_Search")
    assert is_operation_url("Patient/$everything")
    assert not is_operation_url("Patient/1")
