"""
In-memory record store.

Answers the same queries as the Supabase store over a fixed list of
SaleRecord values. Used by tests and for running the API without a database.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Tuple

from domain.sale_record import SaleRecord
from repositories.record_store import (
    SaleRecordFilter,
    require_groupable,
    require_summable,
)


def _parse_price(search: str) -> Optional[float]:
    try:
        return float(search)
    except ValueError:
        return None


class InMemoryRecordStore:
    """RecordStore over an immutable snapshot of records."""

    def __init__(self, records: Iterable[SaleRecord] = ()) -> None:
        self._records: Tuple[SaleRecord, ...] = tuple(records)

    def _matching(self, predicate: SaleRecordFilter) -> List[SaleRecord]:
        return [record for record in self._records if predicate.matches(record)]

    def sum_where(self, field: str, predicate: SaleRecordFilter) -> Optional[float]:
        require_summable(field)
        matched = self._matching(predicate)
        if not matched:
            return None
        return sum(getattr(record, field) for record in matched)

    def count_where(self, predicate: SaleRecordFilter) -> int:
        return len(self._matching(predicate))

    def group_count_by(self, field: str, predicate: SaleRecordFilter) -> Dict[Any, int]:
        require_groupable(field)
        counts: Dict[Any, int] = {}
        for record in self._matching(predicate):
            value = getattr(record, field)
            counts[value] = counts.get(value, 0) + 1
        return counts

    def page_records(
        self,
        search: str = "",
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[SaleRecord], int]:
        rows = list(self._records)
        needle = search.strip()
        if needle:
            lowered = needle.lower()
            price = _parse_price(needle)
            rows = [
                record
                for record in rows
                if lowered in record.title.lower()
                or lowered in record.description.lower()
                or (price is not None and record.price == price)
            ]
        return rows[offset:offset + limit], len(rows)


__all__ = ["InMemoryRecordStore"]
