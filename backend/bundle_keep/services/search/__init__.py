"""Search gateway service module."""
from .base import BaseSearchGateway, SearchUnavailableError
from .memory import InMemorySearchGateway

__all__ = [
    "BaseSearchGateway",
    "SearchUnavailableError",
    "InMemorySearchGateway",
]
