"""
Result ordering for vector index queries.

The index has no ORDER BY. Results are ranked by distance to the probe
vector, so the price component of the probe doubles as a sort hint:

- none        -> (0, 0, average price): results cluster around typical items
- price-asc   -> (0, 0, 0):             cheapest items are nearest
- price-desc  -> (0, 0, max price):     most expensive items are nearest

This is an approximation. Color and size are always 0 in the probe, so
items at the same (or nearly the same) price are ranked by their color
and size codes, and their relative order is not guaranteed.

MetadataPriceOrdering keeps the same probe and then sorts the returned
page by price exactly.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from search.models import SortMode

QueryVector = List[float]


def probe_vector(sort: SortMode, average_price: float, max_price: float) -> QueryVector:
    """
    Build the (color, size, price) probe for a sort mode.

    Args:
        sort: Requested ordering.
        average_price: Neutral price used when no ordering is requested.
        max_price: Highest catalog price.

    Returns:
        [0, 0, price_probe]
    """
    if sort == SortMode.PRICE_ASC:
        price_probe = 0
    elif sort == SortMode.PRICE_DESC:
        price_probe = max_price
    else:
        price_probe = average_price
    return [0, 0, price_probe]


class OrderingStrategy(ABC):
    """How a sort mode turns into a probe vector and a result order."""

    def __init__(self, average_price: float, max_price: float):
        self.average_price = average_price
        self.max_price = max_price

    def query_vector(self, sort: SortMode) -> QueryVector:
        return probe_vector(sort, self.average_price, self.max_price)

    @abstractmethod
    def order_results(self, results: List[Dict[str, Any]], sort: SortMode) -> List[Dict[str, Any]]:
        """Return the results in the order they should reach the caller."""


class ProbeVectorOrdering(OrderingStrategy):
    """Rely on the probe alone; results are passed through as ranked."""

    def order_results(self, results, sort):
        return results


class MetadataPriceOrdering(OrderingStrategy):
    """Exact price sort of the returned page (stable for equal prices)."""

    def order_results(self, results, sort):
        if sort == SortMode.NONE:
            return results
        return sorted(
            results,
            key=lambda r: float((r.get("metadata") or {}).get("price", 0)),
            reverse=sort == SortMode.PRICE_DESC,
        )


_STRATEGIES = {
    "probe": ProbeVectorOrdering,
    "metadata": MetadataPriceOrdering,
}


def get_ordering_strategy(name: str, average_price: float, max_price: float) -> OrderingStrategy:
    """
    Create an ordering strategy by its settings name.

    Raises:
        ValueError: If the name is not 'probe' or 'metadata'.
    """
    try:
        strategy_cls = _STRATEGIES[name]
    except KeyError:
        raise ValueError(f"Unknown ordering strategy: {name!r}") from None
    return strategy_cls(average_price=average_price, max_price=max_price)
