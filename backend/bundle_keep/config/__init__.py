"""Configuration module for bundle validation."""
from .settings import (
    get_search_timeout_seconds,
    get_services,
    get_store,
    get_validator,
    reset_services,
    seed_store_from_env,
)

__all__ = [
    "get_search_timeout_seconds",
    "get_services",
    "get_store",
    "get_validator",
    "reset_services",
    "seed_store_from_env",
]
