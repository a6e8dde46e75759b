"""Configuration and service factory for bundle validation."""
import json
import os
from pathlib import Path
from typing import Dict, Any

from ..core.logging_utils import log_event
from ..services.search import BaseSearchGateway, InMemorySearchGateway
from ..services.store import BaseResourceStore, InMemoryResourceStore, ResourceWrapperFactory
from ..transactions import BundleValidator


# Singleton service instances
_services: Dict[str, Any] = None
_SUPPORTED_STORE_BACKENDS = ("memory",)
_DEFAULT_SEARCH_TIMEOUT_S = "5.0"


def _normalize_choice(env_name: str, supported: tuple[str, ...], default: str) -> str:
    raw = os.environ.get(env_name, default).strip().lower()
    if raw in supported:
        return raw
    supported_values = ", ".join(supported)
    raise ValueError(
        f"Unsupported {env_name} value '{raw}'. Supported values: {supported_values}."
    )


def get_search_timeout_seconds() -> float:
    raw = os.environ.get("BUNDLE_SEARCH_TIMEOUT_S", _DEFAULT_SEARCH_TIMEOUT_S)
    try:
        value = float(raw)
    except ValueError as err:
        raise ValueError("BUNDLE_SEARCH_TIMEOUT_S must be a number") from err
    if value <= 0:
        raise ValueError("BUNDLE_SEARCH_TIMEOUT_S must be positive")
    return value


def _build_store(backend_name: str) -> tuple[BaseResourceStore, BaseSearchGateway]:
    if backend_name == "memory":
        store = InMemoryResourceStore()
        return store, InMemorySearchGateway(store)
    raise ValueError(f"Unsupported store backend: {backend_name}")


def get_services() -> Dict[str, Any]:
    """
    Factory function to get or initialize service instances.

    Returns a dictionary with:
        - 'store': Resource store
        - 'search': Search gateway over the store
        - 'wrapper_factory': Resource wrapper factory
        - 'validator': Transaction bundle validator
    """
    global _services
    if _services is None:
        backend = _normalize_choice("BUNDLE_STORE_BACKEND", _SUPPORTED_STORE_BACKENDS, "memory")
        search_timeout_s = get_search_timeout_seconds()
        store, search = _build_store(backend)
        wrapper_factory = ResourceWrapperFactory()

        log_event(
            component="settings",
            event="services_initialized",
            details={"store_backend": backend, "search_timeout_s": search_timeout_s},
        )
        _services = {
            "store": store,
            "search": search,
            "wrapper_factory": wrapper_factory,
            "validator": BundleValidator(
                search,
                store,
                wrapper_factory=wrapper_factory,
                search_timeout_s=search_timeout_s,
            ),
        }
    return _services


def reset_services() -> None:
    """Drop the cached service instances."""
    global _services
    _services = None


def _read_seed_resources(path: Path) -> list[dict[str, Any]]:
    with path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if isinstance(payload, dict) and payload.get("resourceType") == "Bundle":
        payload = [entry.get("resource") for entry in payload.get("entry", [])]
    if not isinstance(payload, list):
        raise ValueError(f"Seed file {path} must contain a JSON array of resources")
    return [resource for resource in payload if isinstance(resource, dict)]


async def seed_store_from_env(services: Dict[str, Any] | None = None) -> int:
    """Preload resources listed in BUNDLE_STORE_SEED_PATH; returns the count."""
    raw_path = os.environ.get("BUNDLE_STORE_SEED_PATH", "").strip()
    if not raw_path:
        return 0

    services = services or get_services()
    resources = _read_seed_resources(Path(raw_path))
    for resource in resources:
        wrapper = services["wrapper_factory"].create(resource)
        await services["store"].upsert(wrapper, None, True, True)

    log_event(
        component="settings",
        event="store_seeded",
        details={"path": raw_path, "resources": len(resources)},
    )
    return len(resources)


def get_validator() -> BundleValidator:
    """Get the bundle validator instance."""
    return get_services()["validator"]


def get_store() -> BaseResourceStore:
    """Get the resource store instance."""
    return get_services()["store"]
