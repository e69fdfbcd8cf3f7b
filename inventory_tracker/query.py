"""Linear search helpers over an ordered sequence of records."""
from __future__ import annotations

from typing import Iterable, List

from .records import InventoryRecord

DEFAULT_LOW_STOCK_THRESHOLD = 5


def matches_query(record: InventoryRecord, query: str) -> bool:
    """Return ``True`` when ``record`` satisfies a non-empty search query.

    The identifier must match exactly; the name and the category-like fields
    match on a case-insensitive substring.
    """

    if query == str(record.id):
        return True
    needle = query.casefold()
    haystacks = (record.name, *record.search_fields())
    return any(needle in text.casefold() for text in haystacks if text)


def search_records(records: Iterable[InventoryRecord], query: str) -> List[InventoryRecord]:
    candidate = (query or "").strip()
    if not candidate:
        return []
    return [record for record in records if matches_query(record, candidate)]


def low_stock_records(
    records: Iterable[InventoryRecord],
    threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
) -> List[InventoryRecord]:
    return [record for record in records if record.quantity < threshold]


__all__ = [
    "DEFAULT_LOW_STOCK_THRESHOLD",
    "low_stock_records",
    "matches_query",
    "search_records",
]
