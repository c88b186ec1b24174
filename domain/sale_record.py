"""
Domain: Sale records.

A sale record is one catalog entry, optionally marked sold with a sale date.
The analytics layer only reads these records; ingestion lives elsewhere.

`sold` and `sold_date` are independent: a record may carry a sale date while
`sold` is false, or be sold without a date. Nothing here cross-validates them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from .time import require_utc_timestamp


@dataclass(frozen=True, slots=True)
class SaleRecord:
    """
    Immutable catalog entry.

    sold_date, when present, must be a UTC timestamp.
    """

    id: int
    title: str
    price: float
    category: str
    description: str = ""
    sold: bool = False
    sold_date: Optional[datetime] = None
    image: Optional[str] = None
    rating: Optional[Mapping[str, Any]] = None

    def __post_init__(self) -> None:
        if self.price < 0:
            raise ValueError("price must be >= 0")
        if self.sold_date is not None:
            require_utc_timestamp("sold_date", self.sold_date)


__all__ = ["SaleRecord"]
