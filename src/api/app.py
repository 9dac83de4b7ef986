"""
FastAPI Application Factory.

Usage:
    # Development
    uvicorn api.app:create_app --factory --reload

    # Production
    uvicorn api.app:app --host 0.0.0.0 --port 8080
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import get_settings
from core.logging import configure_logging_from_settings, get_logger
from core.middleware import RequestTracingMiddleware


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler.

    Configures logging on startup. The vector index client is created
    lazily on the first query.
    """
    settings = get_settings()

    configure_logging_from_settings(settings)

    logger.info(
        "Starting product filter API",
        environment=settings.environment,
        port=settings.port,
        top_k=settings.search_top_k,
        ordering=settings.ordering_strategy,
    )
    if not settings.vector_configured:
        logger.warning("Vector index credentials not set; product queries will fail")

    yield

    logger.info("Shutting down product filter API")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application
    """
    settings = get_settings()

    app = FastAPI(
        title="Product Filter API",
        description="""
        Filter a product catalog by color, size and price, with optional
        price ordering, backed by a vector index.

        ## Endpoints

        - `POST /api/products` - Filtered product query

        ## Health Checks

        - `/health` - Basic health check
        - `/health/detailed` - Detailed health with vector index status
        - `/ready` - Kubernetes readiness probe
        - `/live` - Kubernetes liveness probe
        """,
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    # =========================================================================
    # Middleware (order matters - first added = outermost)
    # =========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request tracing (adds X-Request-ID, logs timing)
    app.add_middleware(RequestTracingMiddleware)

    # =========================================================================
    # Routes
    # =========================================================================

    from api.routes.health import router as health_router
    app.include_router(health_router)

    from api.routes.products import router as products_router
    app.include_router(products_router)

    return app


# Create default app instance for uvicorn
# Usage: uvicorn api.app:app
app = create_app()
