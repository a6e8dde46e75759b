"""Search gateway backed by the in-memory resource store."""
from __future__ import annotations

from typing import Any, Sequence

from ...core.models import SearchMatch
from ...core.types import QueryParameter
from ..store.memory import InMemoryResourceStore
from .base import BaseSearchGateway

# Result-shaping parameters that never filter matches.
_IGNORED_PARAMETERS = {"_count", "_sort", "_summary", "_elements", "_total", "_format"}


def _collect_leaf_values(node: Any) -> list[str]:
    values: list[str] = []
    if isinstance(node, dict):
        for value in node.values():
            values.extend(_collect_leaf_values(value))
    elif isinstance(node, list):
        for item in node:
            values.extend(_collect_leaf_values(item))
    elif node is not None:
        values.append(str(node))
    return values


def _match_identifier(resource: dict[str, Any], token: str) -> bool:
    identifiers = resource.get("identifier")
    if not isinstance(identifiers, list):
        return False
    if "|" in token:
        system, _, value = token.partition("|")
    else:
        system, value = None, token
    for identifier in identifiers:
        if not isinstance(identifier, dict):
            continue
        if system is not None and identifier.get("system", "") != system:
            continue
        if not value or identifier.get("value") == value:
            return True
    return False


def _match_single(resource_id: str, resource: dict[str, Any], name: str, value: str) -> bool:
    if name == "_id":
        return resource_id == value
    if name == "identifier":
        return _match_identifier(resource, value)
    wanted = value.casefold()
    return any(leaf.casefold() == wanted for leaf in _collect_leaf_values(resource.get(name)))


def _matches(resource_id: str, resource: dict[str, Any], parameters: Sequence[QueryParameter]) -> bool:
    for raw_name, raw_value in parameters:
        name = raw_name.split(":", 1)[0]
        if name in _IGNORED_PARAMETERS:
            continue
        alternatives = [item for item in raw_value.split(",") if item] or [""]
        if not any(_match_single(resource_id, resource, name, item) for item in alternatives):
            return False
    return True


class InMemorySearchGateway(BaseSearchGateway):
    """Linear scan over live resources of one type.

    Repeated parameter names must all match; comma-separated values match
    any alternative.
    """

    def __init__(self, store: InMemoryResourceStore):
        self._store = store

    async def search(
        self,
        resource_type: str,
        parameters: Sequence[QueryParameter],
    ) -> list[SearchMatch]:
        matches: list[SearchMatch] = []
        for wrapper in self._store.iter_current():
            if wrapper.resource_type != resource_type:
                continue
            if _matches(wrapper.resource_id, wrapper.raw_resource, parameters):
                matches.append(
                    SearchMatch(
                        resource_type=wrapper.resource_type,
                        resource_id=wrapper.resource_id,
                        version_id=wrapper.version,
                    )
                )
        return matches
