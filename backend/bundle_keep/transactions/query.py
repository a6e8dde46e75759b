"""URL and query-string helpers for bundle entry requests."""
from __future__ import annotations

from urllib.parse import parse_qsl

from ..core.types import QueryParameters

QUERY_SEPARATOR = "?"
SEARCH_MARKER = "_search"
OPERATION_MARKER = "$"


def has_query(url: str) -> bool:
    return QUERY_SEPARATOR in url


def is_search_url(url: str) -> bool:
    return SEARCH_MARKER in url.lower()


def is_operation_url(url: str) -> bool:
    return OPERATION_MARKER in url


def split_conditional_url(url: str) -> tuple[str, str]:
    """Split ``Type?query`` at the first separator into type and query."""
    resource_type, _, query = url.partition(QUERY_SEPARATOR)
    return resource_type, query


def parse_query_parameters(query: str) -> QueryParameters:
    """Parse a query string into ordered (name, value) pairs.

    A parameter repeated in the query yields one pair per value.
    """
    cleaned = query[1:] if query.startswith(QUERY_SEPARATOR) else query
    return [
        (name, value)
        for name, value in parse_qsl(cleaned, keep_blank_values=True)
        if name
    ]


def build_request_url(url: str, conditional_query: str | None) -> str:
    if conditional_query is None or not conditional_query.strip():
        return url
    return f"{url}{QUERY_SEPARATOR}{conditional_query}"
