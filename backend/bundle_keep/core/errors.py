"""Errors raised while validating a transaction bundle."""


class BundleValidationError(ValueError):
    """Base error for bundles rejected before any entry executes."""


class UnsupportedOperationError(BundleValidationError):
    """Raised for search-via-create or conditional delete entries."""

    def __init__(self, url: str, method: str):
        self.url = url
        self.method = method
        super().__init__(
            f"Requested operation '{url}' with method '{method}' is not supported inside a bundle."
        )


class UnsupportedResourceTypeError(BundleValidationError):
    """Raised when an entry embeds a resource type that cannot be nested."""

    def __init__(self, resource_type: str):
        self.resource_type = resource_type
        super().__init__(f"Resource type '{resource_type}' is not supported inside a bundle.")


class InvalidConditionalParametersError(BundleValidationError):
    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Given conditional reference '{url}' does not resolve to a resource type and query.")


class AmbiguousConditionalMatchError(BundleValidationError):
    """Raised when a conditional query matches more than one resource."""

    def __init__(self, query: str, match_count: int):
        self.query = query
        self.match_count = match_count
        super().__init__(
            f"Conditional operation in bundle is not selective enough: '{query}' "
            f"matched {match_count} resources."
        )


class BundleConflictError(BundleValidationError):
    """Raised when two entries resolve to the same resource."""

    def __init__(self, request_url: str, entry_index: int, first_index: int):
        self.request_url = request_url
        self.entry_index = entry_index
        self.first_index = first_index
        super().__init__(
            f"Bundle contains multiple entries that refer to the same resource '{request_url}'."
        )
