"""
Filter expression builder for vector index queries.

Clauses are collected under group keys. Clauses inside one group are
alternatives (OR), groups are requirements (AND):

    builder = FilterExpressionBuilder()
    builder.add_grouped("color", "=", 2)
    builder.add_grouped("color", "=", 3)
    builder.add_raw("price", "price >= 10 AND price <= 50")
    builder.render()
    # '(color = 2 OR color = 3) AND (price >= 10 AND price <= 50)'

Groups render in the order they were first registered.
"""

from typing import Dict, List, Union

from search.encoding import encode_color, encode_size
from search.models import FilterSelection

FilterValue = Union[int, float, str]

_OPERATORS = frozenset({"=", "!=", "<", "<=", ">", ">="})


def format_number(value: Union[int, float]) -> str:
    """Render a number as a filter literal (20.0 -> '20', 9.99 -> '9.99')."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_value(value: FilterValue) -> str:
    """Render a clause value: numbers as literals, strings double-quoted."""
    if isinstance(value, bool):
        raise TypeError("Boolean filter values are not supported")
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    raise TypeError(f"Unsupported filter value type: {type(value).__name__}")


def match_nothing(field: str) -> str:
    """
    Clause that no stored product satisfies.

    Categorical fields are stored as integer codes, so comparing them to
    the empty string is always false.
    """
    return f'{field} = ""'


class FilterExpressionBuilder:
    """Accumulates grouped clauses and renders one filter string."""

    def __init__(self):
        self._groups: Dict[str, List[str]] = {}

    def add_grouped(self, group_key: str, operator: str, value: FilterValue) -> "FilterExpressionBuilder":
        """
        Add ``group_key <operator> value`` as one more alternative of the group.

        Raises:
            ValueError: If the operator is not a supported comparison.
        """
        if operator not in _OPERATORS:
            raise ValueError(f"Unsupported filter operator: {operator!r}")
        clause = f"{group_key} {operator} {format_value(value)}"
        self._groups.setdefault(group_key, []).append(clause)
        return self

    def add_raw(self, group_key: str, expression: str) -> "FilterExpressionBuilder":
        """Install a literal expression for the group, replacing earlier clauses."""
        self._groups[group_key] = [expression]
        return self

    def has_any_filter(self) -> bool:
        return bool(self._groups)

    def render(self) -> str:
        """Return the filter string, or '' when no group was registered."""
        return " AND ".join(
            f"({' OR '.join(clauses)})" for clauses in self._groups.values()
        )

    def __repr__(self) -> str:
        return f"FilterExpressionBuilder({self.render()!r})"


def build_product_filter(selection: FilterSelection) -> FilterExpressionBuilder:
    """
    Build the color, size and price groups for a validated selection.

    An empty color or size selection matches no product at all rather
    than leaving that attribute unconstrained. Price is always present.
    """
    builder = FilterExpressionBuilder()

    if selection.color:
        for color in selection.color:
            builder.add_grouped("color", "=", encode_color(color))
    else:
        builder.add_raw("color", match_nothing("color"))

    if selection.size:
        for size in selection.size:
            builder.add_grouped("size", "=", encode_size(size))
    else:
        builder.add_raw("size", match_nothing("size"))

    low, high = selection.price
    builder.add_raw(
        "price",
        f"price >= {format_number(low)} AND price <= {format_number(high)}",
    )

    return builder
