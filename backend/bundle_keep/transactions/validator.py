"""Cross-entry consistency checks for transaction bundles."""
from __future__ import annotations

import time
from typing import Any

from ..core.errors import BundleConflictError
from ..core.logging_utils import log_event, log_latency_event, set_entry_index
from ..core.models import Bundle, ResourceKey, UpsertOutcome
from ..services.search.base import BaseSearchGateway
from ..services.store.base import BaseResourceStore
from ..services.store.wrapper import ResourceWrapperFactory
from .classifier import should_validate_entry
from .query import build_request_url
from .resolver import ReferenceResolver


class BundleValidator:
    """Rejects transaction bundles whose entries modify the same resource.

    Entries are checked strictly in bundle order and the first problem
    aborts the pass. Validation never writes to the store.
    """

    def __init__(
        self,
        search_gateway: BaseSearchGateway,
        store: BaseResourceStore,
        wrapper_factory: ResourceWrapperFactory | None = None,
        search_timeout_s: float | None = None,
    ):
        self.store = store
        self.wrapper_factory = wrapper_factory or ResourceWrapperFactory()
        self.resolver = ReferenceResolver(search_gateway, search_timeout_s=search_timeout_s)

    async def validate_bundle(self, bundle: Bundle) -> None:
        if bundle is None:
            raise ValueError("bundle is required")

        # identity (casefolded) -> index of the entry that claimed it first
        seen: dict[str, int] = {}
        started_at = time.perf_counter()
        log_event(
            component="bundle_validator",
            event="bundle_validation_started",
            details={"bundle_id": bundle.bundle_id, "entries": len(bundle.entries)},
        )

        try:
            for index, entry in enumerate(bundle.entries):
                set_entry_index(index)
                if not should_validate_entry(entry):
                    log_event(
                        component="bundle_validator",
                        event="bundle_entry_skipped",
                        level="DEBUG",
                        details={"method": entry.display_method, "url": entry.url},
                    )
                    continue

                identity = await self.resolver.resolve(entry)
                if not identity:
                    continue

                normalized = identity.casefold()
                if normalized in seen:
                    request_url = build_request_url(entry.url, entry.if_none_exist)
                    log_event(
                        component="bundle_validator",
                        event="bundle_conflict_detected",
                        level="WARNING",
                        details={
                            "request_url": request_url,
                            "identity": identity,
                            "first_index": seen[normalized],
                        },
                    )
                    raise BundleConflictError(request_url, index, seen[normalized])
                seen[normalized] = index
        except Exception as err:
            log_latency_event(
                component="bundle_validator",
                event="bundle_validation_latency",
                stage="bundle_validation",
                duration_s=time.perf_counter() - started_at,
                status="failed",
                level="WARNING",
                details={"error": type(err).__name__},
            )
            raise
        finally:
            set_entry_index(None)

        log_latency_event(
            component="bundle_validator",
            event="bundle_validation_latency",
            stage="bundle_validation",
            duration_s=time.perf_counter() - started_at,
            status="completed",
            details={"unique_identities": len(seen)},
        )
        log_event(
            component="bundle_validator",
            event="bundle_validation_completed",
            details={"bundle_id": bundle.bundle_id, "unique_identities": len(seen)},
        )

    async def get_latest_version_id(self, key: ResourceKey) -> str | None:
        current = await self.store.get(key)
        return current.version if current is not None else None

    async def update_versioned_reference(self, resource: dict[str, Any]) -> UpsertOutcome:
        """Store a fully materialized resource, creating it when absent."""
        wrapper = self.wrapper_factory.create(resource, deleted=False)
        return await self.store.upsert(wrapper, None, True, True)
