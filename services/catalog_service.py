"""
Catalog listing service.

Paginated, searchable listing of sale records.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List

from domain.sale_record import SaleRecord
from repositories.record_store import RecordStore

MAX_PER_PAGE: int = 100


@dataclass(frozen=True, slots=True)
class ProductPage:
    """One page of catalog results."""
    records: List[SaleRecord]
    total: int
    page: int
    per_page: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.per_page)


def list_products(
    store: RecordStore,
    page: int = 1,
    per_page: int = 10,
    search: str = "",
) -> ProductPage:
    """
    Fetch one page of records matching `search`.

    Args:
        store: Record store to read from
        page: 1-based page number
        per_page: Page size (1 to MAX_PER_PAGE)
        search: Matches title or description (substring, case-insensitive),
            or the exact price when numeric. Empty matches everything.

    Raises:
        ValueError: If page or per_page is out of range
    """
    if page < 1:
        raise ValueError("page must be >= 1")
    if not 1 <= per_page <= MAX_PER_PAGE:
        raise ValueError(f"per_page must be between 1 and {MAX_PER_PAGE}")

    records, total = store.page_records(
        search=search,
        limit=per_page,
        offset=(page - 1) * per_page,
    )
    return ProductPage(records=records, total=total, page=page, per_page=per_page)


__all__ = ["MAX_PER_PAGE", "ProductPage", "list_products"]
