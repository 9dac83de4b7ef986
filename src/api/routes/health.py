"""
Health check endpoints.

Provides endpoints for monitoring application health and status.
"""

from typing import Any, Dict

from fastapi import APIRouter

from config.settings import get_settings
from search.errors import BackendError
from search.vector_client import get_vector_client


router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """
    Basic health check endpoint.
    """
    return {
        "status": "healthy",
        "service": "product-filter-api",
    }


@router.get("/health/detailed")
def detailed_health_check() -> Dict[str, Any]:
    """
    Detailed health check with vector index status.

    Checks:
    - Configuration loaded
    - Vector index reachable (via index info)
    """
    settings = get_settings()

    index_status = "not_configured"
    index_error = None
    vector_count = None
    if settings.vector_configured:
        try:
            info = get_vector_client().info()
            vector_count = getattr(info, "vector_count", None)
            index_status = "connected" if vector_count else "empty"
        except BackendError as e:
            index_status = "error"
            index_error = str(e)

    return {
        "status": "healthy" if index_status == "connected" else "degraded",
        "service": "product-filter-api",
        "environment": settings.environment,
        "checks": {
            "config": "ok",
            "vector_index": {
                "status": index_status,
                "vector_count": vector_count,
                "error": index_error,
            },
        },
    }


@router.get("/ready")
async def readiness_check() -> Dict[str, str]:
    """
    Kubernetes-style readiness probe.

    Ready once the vector index credentials are configured.
    """
    if not get_settings().vector_configured:
        return {"status": "not_ready", "reason": "vector_index_not_configured"}

    return {"status": "ready"}


@router.get("/live")
async def liveness_check() -> Dict[str, str]:
    """
    Kubernetes-style liveness probe.
    """
    return {"status": "alive"}
