"""Transaction bundle validation engine."""
from .classifier import should_validate_entry
from .resolver import ReferenceResolver, build_conditional_query, is_conditional_entry
from .validator import BundleValidator

__all__ = [
    "BundleValidator",
    "ReferenceResolver",
    "build_conditional_query",
    "is_conditional_entry",
    "should_validate_entry",
]
