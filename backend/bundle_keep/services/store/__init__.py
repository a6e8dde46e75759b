"""Resource store service module."""
from .base import (
    BaseResourceStore,
    ResourceNotFoundError,
    ResourceStoreError,
    VersionConflictError,
)
from .memory import InMemoryResourceStore
from .wrapper import ResourceWrapperFactory

__all__ = [
    "BaseResourceStore",
    "ResourceStoreError",
    "ResourceNotFoundError",
    "VersionConflictError",
    "InMemoryResourceStore",
    "ResourceWrapperFactory",
]
