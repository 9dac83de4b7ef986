"""
Demo catalog generation and index record mapping.

The seeding script writes one product per (color, size, price). Each
record's vector is built with search.encoding so that stored items and
filter predicates use the same codes.
"""

from itertools import product as cartesian
from typing import Any, Dict, Iterator, List, Optional, Sequence

from config.constants import DEFAULT_CATALOG_CONFIG
from search.encoding import Color, Size, encode_product_vector
from search.models import Product


def generate_catalog(prices: Optional[Sequence[float]] = None) -> Iterator[Product]:
    """
    Yield the demo catalog.

    Ids are deterministic ("blue-M-2") so re-seeding overwrites instead
    of duplicating.
    """
    prices = prices if prices is not None else DEFAULT_CATALOG_CONFIG.PRICES
    for color, size in cartesian(Color, Size):
        for i, price in enumerate(prices):
            yield Product(
                id=f"{color.value}-{size.value}-{i}",
                name=f"{color.value.capitalize()} shirt ({size.value})",
                imageId=f"/{color.value}_{size.value}.png",
                color=color,
                size=size,
                price=price,
            )


def product_to_vector_record(product: Product) -> Dict[str, Any]:
    """
    Map a product to the {id, vector, metadata} record stored in the index.
    """
    metadata = product.model_dump(mode="json")
    return {
        "id": product.id,
        "vector": encode_product_vector(metadata),
        "metadata": metadata,
    }


def batched(records: Sequence[Dict[str, Any]], batch_size: int) -> Iterator[List[Dict[str, Any]]]:
    """Split records into lists of at most batch_size."""
    if batch_size < 1:
        raise ValueError("batch_size must be >= 1")
    for i in range(0, len(records), batch_size):
        yield list(records[i : i + batch_size])
