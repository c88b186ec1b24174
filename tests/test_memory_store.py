"""
Tests for `repositories/memory_store.py` and the SaleRecordFilter predicate.

Covers contract rules:
- Predicates are conjunctions; unset criteria do not constrain.
- sold_date range is half-open and never matches records without a sale date.
- Sums over an empty match are None; unknown fields are rejected.
- Listing search matches title/description substrings or the exact price.
"""

from __future__ import annotations

import pytest

from conftest import utc
from domain.month_range import MonthRange
from domain.sale_record import SaleRecord
from repositories.memory_store import InMemoryRecordStore
from repositories.record_store import SaleRecordFilter

MARCH = MonthRange.parse("2024-03")


def _record(**overrides) -> SaleRecord:
    fields = dict(id=1, title="Blue Backpack", price=120.0, category="bags", description="Roomy pack")
    fields.update(overrides)
    return SaleRecord(**fields)


def test_filter_without_criteria_matches_everything() -> None:
    assert SaleRecordFilter().matches(_record())


def test_filter_sold_between_requires_sold_date() -> None:
    predicate = SaleRecordFilter(sold_between=MARCH)

    assert not predicate.matches(_record(sold=True, sold_date=None))
    assert predicate.matches(_record(sold=False, sold_date=utc(2024, 3, 31, 23, 59, 59)))
    assert not predicate.matches(_record(sold=True, sold_date=utc(2024, 4, 1)))


def test_filter_price_bounds_are_inclusive() -> None:
    predicate = SaleRecordFilter(min_price=101, max_price=200)

    assert predicate.matches(_record(price=101))
    assert predicate.matches(_record(price=200))
    assert not predicate.matches(_record(price=100))
    assert not predicate.matches(_record(price=200.01))


def test_filter_criteria_are_combined_with_and() -> None:
    predicate = SaleRecordFilter(sold=True, sold_between=MARCH, max_price=100)

    assert predicate.matches(_record(price=50, sold=True, sold_date=utc(2024, 3, 2)))
    assert not predicate.matches(_record(price=50, sold=False, sold_date=utc(2024, 3, 2)))
    assert not predicate.matches(_record(price=150, sold=True, sold_date=utc(2024, 3, 2)))


def test_sum_where_empty_is_none() -> None:
    assert InMemoryRecordStore().sum_where("price", SaleRecordFilter()) is None


def test_unknown_fields_are_rejected() -> None:
    store = InMemoryRecordStore([_record()])

    with pytest.raises(ValueError):
        store.sum_where("title", SaleRecordFilter())
    with pytest.raises(ValueError):
        store.group_count_by("description", SaleRecordFilter())


def test_group_count_by_returns_present_values_only() -> None:
    store = InMemoryRecordStore([
        _record(id=1, category="bags"),
        _record(id=2, category="bags"),
        _record(id=3, category="shoes"),
    ])

    assert store.group_count_by("category", SaleRecordFilter()) == {"bags": 2, "shoes": 1}
    assert store.group_count_by("category", SaleRecordFilter(sold=True)) == {}


class TestPageRecords:
    """Tests for catalog listing over the in-memory store."""

    @pytest.fixture
    def store(self) -> InMemoryRecordStore:
        return InMemoryRecordStore([
            _record(id=1, title="Blue Backpack", description="Roomy pack", price=120.0),
            _record(id=2, title="Red Jacket", description="Warm winter BACKPACK companion", price=55.99),
            _record(id=3, title="Monitor", description="27 inch", price=120.0),
            _record(id=4, title="Keyboard", description="Mechanical", price=45.0),
        ])

    def test_empty_search_pages_all_records(self, store):
        rows, total = store.page_records(limit=3, offset=0)
        assert [r.id for r in rows] == [1, 2, 3]
        assert total == 4

        rows, total = store.page_records(limit=3, offset=3)
        assert [r.id for r in rows] == [4]
        assert total == 4

    def test_search_matches_title_or_description_case_insensitively(self, store):
        rows, total = store.page_records(search="backpack")
        assert [r.id for r in rows] == [1, 2]
        assert total == 2

    def test_numeric_search_matches_exact_price(self, store):
        rows, total = store.page_records(search="120")
        assert [r.id for r in rows] == [1, 3]
        assert total == 2

    def test_search_without_matches(self, store):
        assert store.page_records(search="nothing here") == ([], 0)
