"""Base class for resource store services."""
import abc

from ...core.models import ResourceKey, ResourceWrapper, UpsertOutcome


class ResourceStoreError(RuntimeError):
    """Base runtime error for resource store failures."""


class VersionConflictError(ResourceStoreError):
    """Raised when an upsert carries a stale expected version."""

    def __init__(self, key: ResourceKey, expected_version: str, current_version: str | None):
        self.key = key
        self.expected_version = expected_version
        self.current_version = current_version
        super().__init__(
            f"Version conflict for '{key}': expected {expected_version}, "
            f"current is {current_version or 'absent'}."
        )


class ResourceNotFoundError(ResourceStoreError):
    """Raised when an update targets a missing resource and creation is not allowed."""

    def __init__(self, key: ResourceKey):
        self.key = key
        super().__init__(f"Resource '{key}' was not found.")


class BaseResourceStore(abc.ABC):
    """Abstract base class for versioned resource persistence."""

    @abc.abstractmethod
    async def get(self, key: ResourceKey) -> ResourceWrapper | None:
        """
        Load a resource by key.

        :param key: Resource key; a set version selects a history entry
        :return: Stored wrapper, or None when the resource does not exist
        """
        pass

    @abc.abstractmethod
    async def upsert(
        self,
        wrapper: ResourceWrapper,
        expected_version: str | None,
        allow_create: bool,
        keep_history: bool,
    ) -> UpsertOutcome:
        """
        Create or replace a resource.

        :param wrapper: Storage-ready resource
        :param expected_version: Optimistic concurrency guard, None to skip
        :param allow_create: Whether a missing resource may be created
        :param keep_history: Whether the replaced version stays readable
        :return: Stored wrapper with its new version
        """
        pass
