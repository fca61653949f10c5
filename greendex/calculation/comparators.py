# -*- coding: utf-8 -*-
"""
Comparator / Sort Utilities

Three-way comparators used to order project tables (by a configurable
column) and participant leaderboards (by ascending total CO2).

Ordering rules:
- None / missing values always sort last, in both directions
- dates and datetimes compare by timestamp difference
- strings compare accent- and case-insensitively first, independent of the
  process locale (Århus sorts with A, not after Z)
- the descending flag negates the base comparison only
"""

import functools
import unicodedata
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Callable, Iterable, List, Mapping

Comparator = Callable[[Any, Any], int]

PROJECT_SORT_FIELDS = (
    "name",
    "country",
    "location",
    "start_date",
    "created_at",
    "updated_at",
)

# (column, descending)
DEFAULT_PROJECT_SORT = ("name", True)


def get_field(item: Any, field: str) -> Any:
    """Read ``field`` from a mapping or an attribute object; None when absent."""
    if isinstance(item, Mapping):
        return item.get(field)
    return getattr(item, field, None)


def _timestamp(value: date) -> float:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.timestamp()
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc).timestamp()


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def _collation_key(text: str) -> str:
    """Case-folded text with accents stripped ("Évora" -> "evora")."""
    decomposed = unicodedata.normalize("NFKD", text.casefold())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def compare_strings(a: str, b: str) -> int:
    """
    Human-friendly string comparison.

    Base letters decide first, then accents and case, then the exact text.
    """
    for key in (_collation_key, str.casefold):
        result = _cmp(key(a), key(b))
        if result:
            return result
    return _cmp(a, b)


def compare_values(a: Any, b: Any) -> int:
    """Base three-way comparison of two non-None values."""
    if isinstance(a, Enum):
        a = a.value
    if isinstance(b, Enum):
        b = b.value

    if isinstance(a, date) and isinstance(b, date):
        return _sign(_timestamp(a) - _timestamp(b))
    if isinstance(a, str) and isinstance(b, str):
        return compare_strings(a, b)
    if (
        isinstance(a, (int, float)) and isinstance(b, (int, float))
        and not isinstance(a, bool) and not isinstance(b, bool)
    ):
        return _sign(a - b)
    try:
        return (a > b) - (a < b)
    except TypeError:
        # Incomparable types: group by type name for a deterministic order
        return compare_strings(type(a).__name__, type(b).__name__)


def create_project_comparator(field: str, descending: bool = False) -> Comparator:
    """
    Build a comparator over ``field``.

    Args:
        field: Name of the key/attribute to sort by
        descending: Reverse the order of non-None values

    Returns:
        cmp(a, b) -> negative, zero or positive
    """

    def comparator(a: Any, b: Any) -> int:
        value_a = get_field(a, field)
        value_b = get_field(b, field)

        if value_a is None and value_b is None:
            return 0
        if value_a is None:
            return 1
        if value_b is None:
            return -1

        result = compare_values(value_a, value_b)
        return -result if descending else result

    return comparator


def sort_projects(
    projects: Iterable[Any],
    field: str = DEFAULT_PROJECT_SORT[0],
    descending: bool = DEFAULT_PROJECT_SORT[1],
) -> List[Any]:
    """Return a new list of projects sorted by ``field`` (stable)."""
    comparator = create_project_comparator(field, descending)
    return sorted(projects, key=functools.cmp_to_key(comparator))


__all__ = [
    "Comparator",
    "PROJECT_SORT_FIELDS",
    "DEFAULT_PROJECT_SORT",
    "get_field",
    "compare_strings",
    "compare_values",
    "create_project_comparator",
    "sort_projects",
]
