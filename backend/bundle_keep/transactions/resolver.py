"""Resolution of bundle entries into comparable resource identities."""
from __future__ import annotations

import asyncio
import time

from ..core.errors import AmbiguousConditionalMatchError, InvalidConditionalParametersError
from ..core.logging_utils import log_event, log_latency_event
from ..core.models import BundleEntry, ConditionalQuery, SearchMatch
from ..core.types import EntryVerb
from ..services.search.base import BaseSearchGateway, SearchUnavailableError
from .query import has_query, parse_query_parameters, split_conditional_url

UNRESOLVED_IDENTITY = ""


def is_conditional_entry(entry: BundleEntry) -> bool:
    return bool(entry.if_none_exist and entry.if_none_exist.strip()) or has_query(entry.url)


def build_conditional_query(entry: BundleEntry) -> ConditionalQuery:
    """Derive the resource type and search parameters of a conditional entry."""
    resource_type = ""
    query = ""
    if entry.verb is EntryVerb.UPDATE:
        resource_type, query = split_conditional_url(entry.url)
    elif entry.verb is EntryVerb.CREATE:
        resource_type = entry.url
        query = entry.if_none_exist or ""

    if not resource_type or not query:
        raise InvalidConditionalParametersError(entry.url)

    return ConditionalQuery(
        resource_type=resource_type,
        query=query,
        parameters=tuple(parse_query_parameters(query)),
    )


class ReferenceResolver:
    """Turns one eligible entry into the identity used for duplicate checks.

    Direct entries resolve locally. Conditional entries cost one search
    call; an empty identity means the entry cannot be pinned down yet.
    """

    def __init__(self, search_gateway: BaseSearchGateway, search_timeout_s: float | None = None):
        if search_timeout_s is not None and search_timeout_s <= 0:
            raise ValueError("search_timeout_s must be positive")
        self.search_gateway = search_gateway
        self.search_timeout_s = search_timeout_s

    async def resolve(self, entry: BundleEntry) -> str:
        if not is_conditional_entry(entry):
            if entry.verb is EntryVerb.CREATE:
                return entry.full_url or UNRESOLVED_IDENTITY
            return entry.url

        conditional = build_conditional_query(entry)
        matches = await self._search(conditional)

        if len(matches) > 1:
            raise AmbiguousConditionalMatchError(conditional.query, len(matches))
        if len(matches) == 1:
            resource_type = entry.resource_type or conditional.resource_type
            identity = f"{resource_type}/{matches[0].resource_id}"
            log_event(
                component="reference_resolver",
                event="conditional_reference_resolved",
                details={"query": conditional.query, "identity": identity},
            )
            return identity
        return UNRESOLVED_IDENTITY

    async def _search(self, conditional: ConditionalQuery) -> list[SearchMatch]:
        started_at = time.perf_counter()
        try:
            if self.search_timeout_s is None:
                matches = await self.search_gateway.search(
                    conditional.resource_type, list(conditional.parameters)
                )
            else:
                matches = await asyncio.wait_for(
                    self.search_gateway.search(conditional.resource_type, list(conditional.parameters)),
                    timeout=self.search_timeout_s,
                )
        except asyncio.TimeoutError as err:
            log_latency_event(
                component="reference_resolver",
                event="conditional_search_latency",
                stage="conditional_search",
                duration_s=time.perf_counter() - started_at,
                status="timed_out",
                level="WARNING",
                details={"resource_type": conditional.resource_type, "timeout_s": self.search_timeout_s},
            )
            raise SearchUnavailableError(
                f"Search for '{conditional.resource_type}?{conditional.query}' timed out "
                f"after {self.search_timeout_s}s"
            ) from err
        except SearchUnavailableError:
            log_latency_event(
                component="reference_resolver",
                event="conditional_search_latency",
                stage="conditional_search",
                duration_s=time.perf_counter() - started_at,
                status="failed",
                level="ERROR",
                details={"resource_type": conditional.resource_type},
            )
            raise

        matches = list(matches or [])
        log_latency_event(
            component="reference_resolver",
            event="conditional_search_latency",
            stage="conditional_search",
            duration_s=time.perf_counter() - started_at,
            status="completed",
            details={"resource_type": conditional.resource_type, "match_count": len(matches)},
        )
        return matches
