"""
Pydantic models for the product search API.
"""

import math
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from search.encoding import MIN_PRICE, Color, Size


# ============================================================================
# Enums
# ============================================================================

class SortMode(str, Enum):
    """Requested result ordering."""
    NONE = "none"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"


# ============================================================================
# Request Models
# ============================================================================

class FilterSelection(BaseModel):
    """
    One request's filter state.

    Color and size keep the caller's order with duplicates removed. An
    empty list is meaningful: it selects no products for that attribute.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    color: Tuple[Color, ...] = Field(..., description="Selected colors")
    size: Tuple[Size, ...] = Field(..., description="Selected sizes")
    price: Tuple[float, float] = Field(..., description="Inclusive price range [low, high]")
    sort: SortMode = Field(..., description="Requested ordering")

    @field_validator("color", "size", mode="before")
    @classmethod
    def require_sequence(cls, v):
        if isinstance(v, (str, bytes)) or not isinstance(v, (list, tuple)):
            raise ValueError("must be a list of strings")
        return v

    @field_validator("color", "size", mode="after")
    @classmethod
    def drop_duplicates(cls, v):
        return tuple(dict.fromkeys(v))

    @field_validator("price", mode="before")
    @classmethod
    def require_numeric_range(cls, v):
        if not isinstance(v, (list, tuple)) or len(v) != 2:
            raise ValueError("must be a [low, high] pair")
        for bound in v:
            if isinstance(bound, bool) or not isinstance(bound, (int, float)):
                raise ValueError("price bounds must be numbers")
            # JSON bodies may carry NaN / Infinity
            if not math.isfinite(bound):
                raise ValueError("price bounds must be finite")
        return v

    @model_validator(mode="after")
    def validate_price_range(self):
        """Ensure MIN_PRICE <= low <= high."""
        low, high = self.price
        if low < MIN_PRICE:
            raise ValueError(f"price low ({low}) must be >= {MIN_PRICE:g}")
        if low > high:
            raise ValueError(f"price low ({low}) must be <= high ({high})")
        return self


# ============================================================================
# Catalog Models
# ============================================================================

class Product(BaseModel):
    """A catalog product, stored as vector metadata."""
    id: str
    name: str
    imageId: str
    color: Color
    size: Size
    price: float = Field(..., ge=0)


# ============================================================================
# Response Models
# ============================================================================

class SearchResult(BaseModel):
    """One match returned by the vector index."""
    id: Union[str, int]
    score: float
    vector: Optional[List[float]] = None
    metadata: Optional[Dict[str, Any]] = None


class ErrorResponse(BaseModel):
    """Error body returned for rejected or failed queries."""
    message: str
