"""
Product filter API route.

NOTE: The route uses `def` (not `async def`) because the vector index SDK
is synchronous. FastAPI runs sync handlers in a thread pool, so the
query does not block the event loop.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse

from config.constants import DEFAULT_SEARCH_CONFIG
from core.logging import get_logger
from search.errors import BackendError, InvalidFilterPayload, UnknownAttributeValue
from search.models import ErrorResponse, SearchResult
from search.product_search import get_product_search_service

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Products"])


@router.post(
    "/products",
    response_model=List[SearchResult],
    responses={
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Filter products by color, size and price",
)
def query_products(payload: Any = Body(...)):
    """
    Return up to `top_k` products matching the filter.

    Body:
        {"color": ["blue"], "size": ["M"], "price": [0, 100], "sort": "price-asc"}

    - An empty `color` or `size` list returns no products.
    - `sort` biases the nearest-neighbor ranking; it is not an exact sort.
    """
    service = get_product_search_service()

    try:
        return service.search(payload)
    except UnknownAttributeValue as e:
        logger.info("Rejected filter payload", attribute=e.attribute, value=e.value)
        return _error(422, str(e))
    except InvalidFilterPayload as e:
        logger.info("Rejected filter payload", error=str(e))
        return _error(422, str(e))
    except BackendError:
        # Cause already logged by the service; never echoed to the caller
        return _error(
            500,
            DEFAULT_SEARCH_CONFIG.INTERNAL_ERROR_MESSAGE,
        )


def _error(status_code: int, message: str) -> JSONResponse:
    body: Dict[str, str] = ErrorResponse(message=message).model_dump()
    return JSONResponse(status_code=status_code, content=body)
