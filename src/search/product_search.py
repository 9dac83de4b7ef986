"""
Product Search Service.

Pipeline for one request:
1. Validate the raw filter payload into a FilterSelection
2. Build the filter expression (color, size, price groups)
3. Build the probe vector for the requested sort
4. Run exactly one vector index query (top_k, metadata included)
5. Return the matches as ranked by the index

Nothing is retried and nothing is cached. Invalid payloads are rejected
before the index is touched.
"""

import threading
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from config.settings import Settings, get_settings
from core.logging import get_logger
from search.encoding import encode_color, encode_size
from search.errors import BackendError, InvalidFilterPayload
from search.filters import build_product_filter
from search.models import FilterSelection
from search.ordering import OrderingStrategy, get_ordering_strategy
from search.vector_client import VectorIndexClient, get_vector_client

logger = get_logger(__name__)

_ENCODERS = {
    "color": encode_color,
    "size": encode_size,
}


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "payload"
        parts.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts)


def parse_selection(payload: Any) -> FilterSelection:
    """
    Validate a raw request body into a FilterSelection.

    Args:
        payload: Decoded JSON body.

    Returns:
        Immutable FilterSelection.

    Raises:
        UnknownAttributeValue: A color or size string is not in its enumeration.
        InvalidFilterPayload: Missing fields, wrong types, or low > high.
    """
    if not isinstance(payload, dict):
        raise InvalidFilterPayload("Filter payload must be a JSON object")

    # Enumeration check first so unknown names get their own error type
    for attribute, encode in _ENCODERS.items():
        values = payload.get(attribute)
        if isinstance(values, (list, tuple)):
            for value in values:
                if isinstance(value, str):
                    encode(value)

    try:
        return FilterSelection.model_validate(payload)
    except ValidationError as e:
        raise InvalidFilterPayload(_format_validation_error(e)) from e


class ProductSearchService:
    """
    Turns filter payloads into vector index queries.
    """

    def __init__(
        self,
        vector_client: Optional[VectorIndexClient] = None,
        ordering: Optional[OrderingStrategy] = None,
        settings: Optional[Settings] = None,
    ):
        self._settings = settings or get_settings()
        self._vector_client = vector_client
        self._ordering = ordering or get_ordering_strategy(
            self._settings.ordering_strategy,
            average_price=self._settings.catalog_average_price,
            max_price=self._settings.catalog_max_price,
        )
        self.top_k = self._settings.search_top_k

    @property
    def vector_client(self) -> VectorIndexClient:
        if self._vector_client is None:
            self._vector_client = get_vector_client()
        return self._vector_client

    @property
    def ordering(self) -> OrderingStrategy:
        return self._ordering

    def build_query(self, selection: FilterSelection) -> Dict[str, Any]:
        """
        Build the keyword arguments for VectorIndexClient.query.

        The 'filter' key is left out when there is nothing to filter on.
        """
        builder = build_product_filter(selection)
        query: Dict[str, Any] = {
            "vector": self._ordering.query_vector(selection.sort),
            "top_k": self.top_k,
            "include_metadata": True,
        }
        if builder.has_any_filter():
            query["filter"] = builder.render()
        return query

    def search(self, payload: Any) -> List[Dict[str, Any]]:
        """
        Validate the payload and run one product query.

        Returns:
            Matches as {id, score, vector, metadata} dicts.

        Raises:
            InvalidFilterPayload: (or UnknownAttributeValue) before any query is sent.
            BackendError: The query failed; the cause is logged here.
        """
        selection = parse_selection(payload)
        query = self.build_query(selection)

        logger.debug(
            "Product query",
            filter=query.get("filter"),
            vector=query["vector"],
            top_k=query["top_k"],
            sort=selection.sort.value,
        )

        try:
            results = self.vector_client.query(**query)
        except BackendError as e:
            logger.error(
                "Vector index query failed",
                error=str(e),
                error_type=type(e).__name__,
                cause=repr(e.__cause__) if e.__cause__ else None,
            )
            raise

        return self._ordering.order_results(results, selection.sort)


# =============================================================================
# Singleton
# =============================================================================

_service: Optional[ProductSearchService] = None
_service_lock = threading.Lock()


def get_product_search_service() -> ProductSearchService:
    """Get or create the ProductSearchService singleton (thread-safe)."""
    global _service
    if _service is None:
        with _service_lock:
            if _service is None:
                _service = ProductSearchService()
    return _service
