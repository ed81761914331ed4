"""Sorting, searching and filtering of dashboard tables.

Records are plain dicts of field name to scalar value. Nothing here mutates
the records or the list passed in; every call returns a new list.
"""
from functools import cmp_to_key
from typing import Any, Dict, List, Optional, Sequence

from gtraf_admin.core.enums import SortDirection

Record = Dict[str, Any]


def display_value(value: Any) -> str:
    """String shown in a table cell, also what the search box matches against."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ", ".join(display_value(item) for item in value)
    return str(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float))


def compare_values(a: Any, b: Any) -> int:
    # Missing and null rank lowest
    if a is None and b is None:
        return 0
    if a is None:
        return -1
    if b is None:
        return 1

    if not (_is_number(a) and _is_number(b)):
        a, b = display_value(a), display_value(b)
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def sort_records(
    records: Sequence[Record],
    sort_field: Optional[str],
    sort_direction: SortDirection = SortDirection.ASC,
) -> List[Record]:
    if not sort_field:
        return list(records)

    key = cmp_to_key(lambda a, b: compare_values(a.get(sort_field), b.get(sort_field)))
    # sorted() keeps equal keys in input order even with reverse=True
    return sorted(records, key=key, reverse=SortDirection(sort_direction) == SortDirection.DESC)


def search_records(records: Sequence[Record], search_term: Optional[str]) -> List[Record]:
    if not search_term:
        return list(records)

    needle = search_term.lower()
    return [
        record for record in records
        if any(needle in display_value(value).lower() for value in record.values())
    ]


def view(
    records: Sequence[Record],
    search_term: Optional[str] = None,
    sort_field: Optional[str] = None,
    sort_direction: SortDirection = SortDirection.ASC,
) -> List[Record]:
    """Sort, then search. Returns the rows to render, possibly empty."""
    return search_records(sort_records(records, sort_field, sort_direction), search_term)


def apply_filters(records: Sequence[Record], criteria: Dict[str, Optional[str]]) -> List[Record]:
    """Keep records matching every non-empty dropdown filter exactly."""
    active = {field: wanted for field, wanted in criteria.items() if wanted}
    return [
        record for record in records
        if all(record.get(field) == wanted for field, wanted in active.items())
    ]


def next_sort(current_field: Optional[str], current_direction: SortDirection, field: str) -> tuple:
    """Sort state after a click on a column header."""
    if current_field == field and SortDirection(current_direction) == SortDirection.ASC:
        return field, SortDirection.DESC
    return field, SortDirection.ASC
