"""
Pytest configuration and shared fixtures.

Adds the project root to the Python path so tests can import domain,
repositories, services and api, and provides small record sets.
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Add the project root to the Python path
# so tests can import domain, repositories, etc.
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from domain.sale_record import SaleRecord  # noqa: E402
from repositories.memory_store import InMemoryRecordStore  # noqa: E402


def utc(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)


@pytest.fixture
def march_records() -> list[SaleRecord]:
    """The three-record scenario: two March 2024 records, one on 1 April."""

    return [
        SaleRecord(id=1, title="Backpack", price=150, category="A", sold=True, sold_date=utc(2024, 3, 10)),
        SaleRecord(id=2, title="Jacket", price=150, category="B", sold=False, sold_date=utc(2024, 3, 15)),
        SaleRecord(id=3, title="Monitor", price=950, category="A", sold=True, sold_date=utc(2024, 4, 1)),
    ]


@pytest.fixture
def march_store(march_records: list[SaleRecord]) -> InMemoryRecordStore:
    return InMemoryRecordStore(march_records)
