"""
Tests for `services/catalog_service.py`.

Covers:
- Page/offset translation and total_pages rounding.
- Out-of-range page and per_page values raise error.
"""

from __future__ import annotations

import pytest

from domain.sale_record import SaleRecord
from repositories.memory_store import InMemoryRecordStore
from services.catalog_service import MAX_PER_PAGE, list_products


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore(
        SaleRecord(id=i, title=f"Item {i}", price=i, category="misc") for i in range(1, 12)
    )


def test_list_products_second_page(store: InMemoryRecordStore) -> None:
    page = list_products(store, page=2, per_page=5)

    assert [r.id for r in page.records] == [6, 7, 8, 9, 10]
    assert page.total == 11
    assert page.total_pages == 3


def test_list_products_past_the_end_is_empty(store: InMemoryRecordStore) -> None:
    page = list_products(store, page=9, per_page=5)

    assert page.records == []
    assert page.total == 11


def test_list_products_no_matches_has_zero_pages(store: InMemoryRecordStore) -> None:
    page = list_products(store, search="nothing")

    assert page.total == 0
    assert page.total_pages == 0


@pytest.mark.parametrize("page, per_page", [(0, 10), (1, 0), (1, MAX_PER_PAGE + 1)])
def test_list_products_rejects_out_of_range_paging(store: InMemoryRecordStore, page: int, per_page: int) -> None:
    with pytest.raises(ValueError):
        list_products(store, page=page, per_page=per_page)
