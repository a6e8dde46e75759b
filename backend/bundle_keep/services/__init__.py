"""Bundle validation collaborators (search gateway, resource store)."""
from .search import BaseSearchGateway, InMemorySearchGateway, SearchUnavailableError
from .store import (
    BaseResourceStore,
    InMemoryResourceStore,
    ResourceNotFoundError,
    ResourceStoreError,
    ResourceWrapperFactory,
    VersionConflictError,
)

__all__ = [
    # Search
    "BaseSearchGateway",
    "InMemorySearchGateway",
    "SearchUnavailableError",
    # Store
    "BaseResourceStore",
    "InMemoryResourceStore",
    "ResourceStoreError",
    "ResourceNotFoundError",
    "ResourceWrapperFactory",
    "VersionConflictError",
]
