"""
Analytics service for monthly sales views.

Pure functions over an explicit RecordStore and MonthRange:
- compute_statistics: total sales amount and sold / not-sold counts
- compute_histogram: record counts per fixed price bucket
- compute_category_breakdown: record counts per category

Every filter is on sold_date ∈ [start, end). Only the statistics view looks at
the sold flag. Store failures propagate as StoreUnavailable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from domain.month_range import MonthRange
from domain.price_bucket import PriceBucket
from repositories.record_store import RecordStore, SaleRecordFilter


@dataclass(frozen=True, slots=True)
class Statistics:
    """
    Monthly sales totals.

    total_sales_amount is None when no sold record falls in the month.
    total_not_sold_items counts unsold records whose sold_date is in the
    month, the same date filter as the sold count.
    """
    total_sales_amount: Optional[float]
    total_sold_items: int
    total_not_sold_items: int


def compute_statistics(store: RecordStore, month_range: MonthRange) -> Statistics:
    """
    Compute sales totals for a month.

    Example:
        stats = compute_statistics(store, MonthRange.parse("2024-03"))
        print(stats.total_sales_amount, stats.total_sold_items)
    """
    sold = SaleRecordFilter(sold=True, sold_between=month_range)
    not_sold = SaleRecordFilter(sold=False, sold_between=month_range)

    return Statistics(
        total_sales_amount=store.sum_where("price", sold),
        total_sold_items=store.count_where(sold),
        total_not_sold_items=store.count_where(not_sold),
    )


def compute_histogram(store: RecordStore, month_range: MonthRange) -> Dict[str, int]:
    """
    Count records per price bucket for a month, regardless of the sold flag.

    One grouped query by price, folded into buckets. All ten labels are
    present, in bucket order, with 0 where nothing matched.
    """
    by_price = store.group_count_by("price", SaleRecordFilter(sold_between=month_range))

    counts = PriceBucket.empty_counts()
    for price, count in by_price.items():
        if price is None:
            continue
        counts[PriceBucket.for_price(price)] += count

    return {bucket.label: count for bucket, count in counts.items()}


def compute_category_breakdown(store: RecordStore, month_range: MonthRange) -> Dict[str, int]:
    """
    Count records per category for a month, regardless of the sold flag.

    Only categories with at least one matching record appear.
    """
    by_category = store.group_count_by("category", SaleRecordFilter(sold_between=month_range))
    return {str(category): count for category, count in by_category.items() if count > 0}


__all__ = [
    "Statistics",
    "compute_category_breakdown",
    "compute_histogram",
    "compute_statistics",
]
