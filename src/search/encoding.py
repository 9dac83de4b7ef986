"""
Attribute encoding for catalog vectors.

Every stored product is indexed as ``[color_code, size_code, price]``.
Filter predicates compare against the same codes, so the mappings below
must never be renumbered without re-seeding the index.
"""

from enum import Enum
from typing import Any, Dict, List, Mapping

from search.errors import UnknownAttributeValue


class Color(str, Enum):
    """Closed set of product colors."""
    WHITE = "white"
    BEIGE = "beige"
    BLUE = "blue"
    GREEN = "green"
    PURPLE = "purple"


class Size(str, Enum):
    """Closed set of product sizes."""
    S = "S"
    M = "M"
    L = "L"


COLOR_CODES: Dict[str, int] = {
    Color.WHITE.value: 0,
    Color.BEIGE.value: 1,
    Color.BLUE.value: 2,
    Color.GREEN.value: 3,
    Color.PURPLE.value: 4,
}

SIZE_CODES: Dict[str, int] = {
    Size.S.value: 0,
    Size.M.value: 1,
    Size.L.value: 2,
}

# Lowest price any product can carry; the upper bound is configured
# (Settings.catalog_max_price).
MIN_PRICE: float = 0.0


def _lookup(attribute: str, codes: Mapping[str, int], value: Any) -> int:
    if isinstance(value, Enum):
        value = value.value
    if not isinstance(value, str) or value not in codes:
        raise UnknownAttributeValue(attribute, value)
    return codes[value]


def encode_color(value: Any) -> int:
    """Return the integer code for a color name (or Color member)."""
    return _lookup("color", COLOR_CODES, value)


def encode_size(value: Any) -> int:
    """Return the integer code for a size name (or Size member)."""
    return _lookup("size", SIZE_CODES, value)


def encode_product_vector(product: Mapping[str, Any]) -> List[float]:
    """
    Build the stored vector for a product record.

    Args:
        product: Mapping with at least 'color', 'size' and 'price'.

    Returns:
        [color_code, size_code, price]

    Raises:
        UnknownAttributeValue: If color or size is outside the enumeration.
    """
    return [
        encode_color(product["color"]),
        encode_size(product["size"]),
        float(product["price"]),
    ]
