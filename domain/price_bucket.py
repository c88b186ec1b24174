"""
Domain: Price buckets for the monthly histogram.

Buckets are a fixed constant of the system, in this order:
  - PRICE_0_100:      price ∈ [  0, 100 ]
  - PRICE_101_200:    price ∈ [101, 200 ]
  - PRICE_201_300:    price ∈ [201, 300 ]
  - PRICE_301_400:    price ∈ [301, 400 ]
  - PRICE_401_500:    price ∈ [401, 500 ]
  - PRICE_501_600:    price ∈ [501, 600 ]
  - PRICE_601_700:    price ∈ [601, 700 ]
  - PRICE_701_800:    price ∈ [701, 800 ]
  - PRICE_801_900:    price ∈ [801, 900 ]
  - PRICE_901_ABOVE:  price ≥ 901

Integer prices follow the inclusive ranges exactly. A fractional price between
two ranges (e.g. 100.5) belongs to the next bucket up, so every non-negative
price lands in exactly one bucket.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional


class PriceBucket(str, Enum):
    PRICE_0_100 = "0-100"
    PRICE_101_200 = "101-200"
    PRICE_201_300 = "201-300"
    PRICE_301_400 = "301-400"
    PRICE_401_500 = "401-500"
    PRICE_501_600 = "501-600"
    PRICE_601_700 = "601-700"
    PRICE_701_800 = "701-800"
    PRICE_801_900 = "801-900"
    PRICE_901_ABOVE = "901-above"

    @property
    def label(self) -> str:
        return self.value

    @property
    def min_price(self) -> float:
        return float(_BOUNDS[self][0])

    @property
    def max_price(self) -> Optional[float]:
        """Inclusive upper bound, or None for the open-ended top bucket."""

        upper = _BOUNDS[self][1]
        return None if upper is None else float(upper)

    @staticmethod
    def for_price(price: float) -> "PriceBucket":
        """Resolve the bucket for a non-negative price."""

        if price < 0:
            raise ValueError("price must be >= 0")

        for bucket in PriceBucket:
            upper = _BOUNDS[bucket][1]
            if upper is None or price <= upper:
                return bucket
        raise AssertionError("unreachable: top bucket is unbounded")

    @staticmethod
    def empty_counts() -> Dict["PriceBucket", int]:
        """Zero count for every bucket, in bucket order."""

        return {bucket: 0 for bucket in PriceBucket}


_BOUNDS: Dict[PriceBucket, tuple[int, Optional[int]]] = {
    PriceBucket.PRICE_0_100: (0, 100),
    PriceBucket.PRICE_101_200: (101, 200),
    PriceBucket.PRICE_201_300: (201, 300),
    PriceBucket.PRICE_301_400: (301, 400),
    PriceBucket.PRICE_401_500: (401, 500),
    PriceBucket.PRICE_501_600: (501, 600),
    PriceBucket.PRICE_601_700: (601, 700),
    PriceBucket.PRICE_701_800: (701, 800),
    PriceBucket.PRICE_801_900: (801, 900),
    PriceBucket.PRICE_901_ABOVE: (901, None),
}


__all__ = ["PriceBucket"]
