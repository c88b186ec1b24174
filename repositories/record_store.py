"""
Record store query interface.

The analytics layer consumes sale records only through this narrow interface:
filtered sums, counts and group-counts. Implementations live in
`repositories.sale_record_repository` (Supabase) and
`repositories.memory_store` (in-process list).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Tuple

from domain.month_range import MonthRange
from domain.sale_record import SaleRecord

# Fields the store knows how to aggregate over.
SUMMABLE_FIELDS: frozenset[str] = frozenset({"price"})
GROUPABLE_FIELDS: frozenset[str] = frozenset({"category", "price", "sold"})


class StoreUnavailable(RuntimeError):
    """Raised when the underlying store query fails (network, storage, API error)."""


@dataclass(frozen=True, slots=True)
class SaleRecordFilter:
    """
    Conjunctive predicate over sale records.

    Unset criteria do not constrain the match.
    - sold: exact match on the sold flag
    - sold_between: sold_date ∈ [start, end); records without sold_date never match
    - min_price / max_price: inclusive price bounds
    """

    sold: Optional[bool] = None
    sold_between: Optional[MonthRange] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None

    def matches(self, record: SaleRecord) -> bool:
        if self.sold is not None and record.sold != self.sold:
            return False
        if self.sold_between is not None:
            if record.sold_date is None or not self.sold_between.contains(record.sold_date):
                return False
        if self.min_price is not None and record.price < self.min_price:
            return False
        if self.max_price is not None and record.price > self.max_price:
            return False
        return True


def require_summable(field: str) -> None:
    if field not in SUMMABLE_FIELDS:
        raise ValueError(f"Cannot sum over field {field!r}")


def require_groupable(field: str) -> None:
    if field not in GROUPABLE_FIELDS:
        raise ValueError(f"Cannot group by field {field!r}")


class RecordStore(Protocol):
    """Read-only query interface over sale records."""

    def sum_where(self, field: str, predicate: SaleRecordFilter) -> Optional[float]:
        """Sum of `field` over matching records, or None when nothing matches."""
        ...

    def count_where(self, predicate: SaleRecordFilter) -> int:
        """Number of matching records."""
        ...

    def group_count_by(self, field: str, predicate: SaleRecordFilter) -> Dict[Any, int]:
        """Count of matching records per distinct value of `field` (present values only)."""
        ...

    def page_records(
        self,
        search: str = "",
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[SaleRecord], int]:
        """One page of records matching a free-text search, plus the total match count."""
        ...


__all__ = [
    "GROUPABLE_FIELDS",
    "RecordStore",
    "SaleRecordFilter",
    "StoreUnavailable",
    "SUMMABLE_FIELDS",
    "require_groupable",
    "require_summable",
]
