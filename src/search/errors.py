"""
Exceptions raised by the product search path.

InvalidFilterPayload and its subclass UnknownAttributeValue are client
errors and are raised before any backend call. BackendError and its
subclass BackendUnavailable wrap failures of the vector index call; their
message is for operators and is never returned to API callers.
"""

from typing import Any


class ProductSearchError(Exception):
    """Base class for product search errors."""
    pass


class InvalidFilterPayload(ProductSearchError):
    """Raised when a filter payload is missing fields, mistyped or out of range."""
    pass


class UnknownAttributeValue(InvalidFilterPayload):
    """Raised when a color or size name is outside its closed enumeration."""

    def __init__(self, attribute: str, value: Any):
        self.attribute = attribute
        self.value = value
        super().__init__(f"Unknown {attribute} value: {value!r}")


class BackendError(ProductSearchError):
    """Raised when the vector index rejects or fails a request."""
    pass


class BackendUnavailable(BackendError):
    """Raised when the vector index cannot be reached or is not configured."""
    pass
