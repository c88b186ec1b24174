"""
Domain: Calendar month ranges.

A month token "YYYY-MM" resolves to the half-open interval [start, end) where
start is the first instant of that month in the reporting timezone and end is
start advanced by exactly one calendar month.

Month lengths (including leap-year February) come from calendar arithmetic,
never from a fixed day offset.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo

_MONTH_TOKEN = re.compile(r"^([0-9]{4})-([0-9]{2})$")


class InvalidMonth(ValueError):
    """Raised when a month token is not a valid "YYYY-MM" value."""


@dataclass(frozen=True, slots=True)
class MonthRange:
    """Half-open calendar interval covering one month."""

    start: datetime
    end: datetime

    @staticmethod
    def parse(token: str, tz: tzinfo = timezone.utc) -> "MonthRange":
        """
        Resolve a "YYYY-MM" token into a MonthRange.

        Raises:
            InvalidMonth: wrong format, non-numeric parts, month outside 1-12,
                or a year whose range cannot be represented.
        """

        match = _MONTH_TOKEN.match(token.strip()) if isinstance(token, str) else None
        if match is None:
            raise InvalidMonth(f"Invalid month {token!r}; expected format YYYY-MM")

        year, month = int(match.group(1)), int(match.group(2))
        if not 1 <= month <= 12:
            raise InvalidMonth(f"Invalid month {token!r}; month must be between 01 and 12")

        next_year, next_month = (year + 1, 1) if month == 12 else (year, month + 1)
        try:
            start = datetime(year, month, 1, tzinfo=tz)
            end = datetime(next_year, next_month, 1, tzinfo=tz)
            # Store queries compare in UTC; both bounds must be representable there
            start.astimezone(timezone.utc)
            end.astimezone(timezone.utc)
        except (ValueError, OverflowError) as exc:
            raise InvalidMonth(f"Invalid month {token!r}; {exc}") from exc

        return MonthRange(start=start, end=end)

    @property
    def token(self) -> str:
        return f"{self.start.year:04d}-{self.start.month:02d}"

    def contains(self, ts: datetime) -> bool:
        """True iff start <= ts < end."""

        return self.start <= ts < self.end


__all__ = ["InvalidMonth", "MonthRange"]
