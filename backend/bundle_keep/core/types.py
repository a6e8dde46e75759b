"""Common type definitions for bundle validation."""
from enum import Enum
from typing import Any, Dict, List, Tuple

# Type aliases for clarity
ResourcePayload = Dict[str, Any]  # raw FHIR resource JSON
QueryParameter = Tuple[str, str]  # (name, value)
QueryParameters = List[QueryParameter]


class EntryVerb(str, Enum):
    """Operation requested by a bundle entry."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    READ = "READ"
    OTHER = "OTHER"


HTTP_METHOD_VERBS: Dict[str, EntryVerb] = {
    "GET": EntryVerb.READ,
    "HEAD": EntryVerb.READ,
    "POST": EntryVerb.CREATE,
    "PUT": EntryVerb.UPDATE,
    "DELETE": EntryVerb.DELETE,
    "PATCH": EntryVerb.OTHER,
}
