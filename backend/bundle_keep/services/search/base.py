"""Base class for search gateway services."""
import abc
from typing import Sequence

from ...core.models import SearchMatch
from ...core.types import QueryParameter


class SearchUnavailableError(RuntimeError):
    """Raised when the search backend cannot answer a query."""


class BaseSearchGateway(abc.ABC):
    """Abstract base class for conditional reference search."""

    @abc.abstractmethod
    async def search(
        self,
        resource_type: str,
        parameters: Sequence[QueryParameter],
    ) -> list[SearchMatch]:
        """
        Find resources of one type matching every search parameter.

        :param resource_type: FHIR resource type to search
        :param parameters: Ordered (name, value) pairs; names may repeat
        :return: Matching resource identifiers with version stamps
        """
        pass
