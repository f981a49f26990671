"""Filtering utilities for the paged list views."""

from __future__ import annotations

from typing import Callable, Iterable, List, Mapping, Optional, Sequence

from library_portal.utils.helpers import normalize_text

ALL_STATUSES = "all"


def filter_by_status(
    records: Sequence[Mapping],
    selected: Optional[str],
    derive: Callable[[Mapping], str],
) -> List[Mapping]:
    """Keep records whose derived status matches the selected tab."""
    if not selected or selected == ALL_STATUSES:
        return list(records)
    return [record for record in records if derive(record) == selected]


def search_records(
    records: Sequence[Mapping],
    term: Optional[str],
    fields: Iterable[str],
) -> List[Mapping]:
    """Case-insensitive substring search across the given fields."""
    needle = normalize_text(term).lower()
    if not needle:
        return list(records)

    field_names = list(fields)
    return [
        record
        for record in records
        if any(needle in normalize_text(record.get(field)).lower() for field in field_names)
    ]


def filters_signature(*parts: object) -> tuple:
    """Build a hashable signature used to detect filter changes."""
    return tuple(
        tuple(sorted(part)) if isinstance(part, (list, set, frozenset)) else normalize_text(part)
        for part in parts
    )
