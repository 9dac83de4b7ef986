"""
Product Search Module: filter expressions + probe-vector ordering over a vector index.

Provides:
- FilterExpressionBuilder: grouped OR / AND filter strings
- OrderingStrategy: probe-vector sorting (and exact page sort)
- VectorIndexClient: Upstash Vector wrapper
- ProductSearchService: validation + single bounded query per request
"""

from search.errors import (
    BackendError,
    BackendUnavailable,
    InvalidFilterPayload,
    ProductSearchError,
    UnknownAttributeValue,
)
from search.filters import FilterExpressionBuilder, build_product_filter
from search.models import FilterSelection, SortMode
from search.ordering import OrderingStrategy, probe_vector
from search.product_search import ProductSearchService, get_product_search_service, parse_selection
from search.vector_client import VectorIndexClient, get_vector_client

__all__ = [
    "BackendError",
    "BackendUnavailable",
    "InvalidFilterPayload",
    "ProductSearchError",
    "UnknownAttributeValue",
    "FilterExpressionBuilder",
    "build_product_filter",
    "FilterSelection",
    "SortMode",
    "OrderingStrategy",
    "probe_vector",
    "ProductSearchService",
    "get_product_search_service",
    "parse_selection",
    "VectorIndexClient",
    "get_vector_client",
]
