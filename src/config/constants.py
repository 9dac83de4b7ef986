"""
Application constants.

These are values that don't change based on environment but may need
to be referenced across the codebase.
"""

from dataclasses import dataclass, field
from typing import Tuple


# =============================================================================
# Search Configuration
# =============================================================================

@dataclass(frozen=True)
class SearchConfig:
    """Constants for the product query path."""

    # Generic message returned to clients when the backend fails
    INTERNAL_ERROR_MESSAGE: str = "Internal server error"


DEFAULT_SEARCH_CONFIG = SearchConfig()


# =============================================================================
# Catalog Seeding
# =============================================================================

@dataclass(frozen=True)
class CatalogConfig:
    """Shape of the demo catalog written by the seeding script."""

    # One product per (color, size, price)
    PRICES: Tuple[float, ...] = field(default_factory=lambda: (9.99, 19.99, 29.99, 39.99, 49.99))

    # Records per upsert request
    UPSERT_BATCH_SIZE: int = 100


DEFAULT_CATALOG_CONFIG = CatalogConfig()
