"""
Sale record repository (persistence).

Supabase-backed implementation of the RecordStore query interface. It only
reads; it never inserts or updates sale records.

The Supabase Python client has no GROUP BY or SUM, so sums and group-counts
fetch the needed column in pages and aggregate in Python. Counts use the
exact count returned by PostgREST.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Mapping, Optional, Tuple

import httpx
from postgrest.exceptions import APIError

from domain.sale_record import SaleRecord
from domain.time import parse_utc_datetime, to_iso_utc
from repositories.record_store import (
    SaleRecordFilter,
    StoreUnavailable,
    require_groupable,
    require_summable,
)

logger = logging.getLogger(__name__)

# Default Supabase table name for sale records.
# Keep this aligned with your database schema.
_SALES_TABLE: str = "products"

_PAGE_SIZE: int = 1000


def _row_to_record(row: Mapping[str, Any]) -> SaleRecord:
    """Convert a Supabase row into a SaleRecord."""

    sold_date = row.get("sold_date")
    return SaleRecord(
        id=int(row["id"]),
        title=str(row.get("title") or ""),
        price=float(row["price"]),
        category=str(row.get("category") or ""),
        description=str(row.get("description") or ""),
        sold=bool(row.get("sold")),
        sold_date=parse_utc_datetime(sold_date) if sold_date else None,
        image=row.get("image"),
        rating=row.get("rating"),
    )


def _quote(value: str) -> str:
    """Quote a value for a PostgREST logical filter (commas, dots, parens are reserved)."""

    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _search_filter(search: str) -> str:
    """
    Build the `or` filter for free-text search.

    Matches title or description (case-insensitive substring), or the exact
    price when the search text is numeric.
    """

    pattern = _quote(f"*{search}*")
    clauses = [f"title.ilike.{pattern}", f"description.ilike.{pattern}"]
    try:
        price = float(search)
    except ValueError:
        price = None
    if price is not None and math.isfinite(price):
        clauses.append(f"price.eq.{price}")
    return ",".join(clauses)


class SupabaseRecordStore:
    """RecordStore backed by a Supabase table."""

    def __init__(self, client: Any, table: str = _SALES_TABLE) -> None:
        self._client = client
        self._table_name = table

    def _table(self) -> Any:
        return self._client.table(self._table_name)

    @staticmethod
    def _apply_filter(query: Any, predicate: SaleRecordFilter) -> Any:
        if predicate.sold is not None:
            query = query.eq("sold", "true" if predicate.sold else "false")

        if predicate.sold_between is not None:
            query = (
                query.gte("sold_date", to_iso_utc(predicate.sold_between.start))
                .lt("sold_date", to_iso_utc(predicate.sold_between.end))
            )

        if predicate.min_price is not None:
            query = query.gte("price", predicate.min_price)

        if predicate.max_price is not None:
            query = query.lte("price", predicate.max_price)

        return query

    def _execute(self, query: Any, action: str) -> Any:
        """Run a query, turning driver and API failures into StoreUnavailable."""

        try:
            response = query.execute()
        except (APIError, httpx.HTTPError) as exc:
            logger.error(
                f"Store query failed: {action}",
                extra={"table": self._table_name, "action": action, "error": str(exc)},
            )
            raise StoreUnavailable(f"Failed to {action}: {exc}") from exc

        error = getattr(response, "error", None)
        if error:
            logger.error(
                f"Store query returned an error: {action}",
                extra={"table": self._table_name, "action": action, "error": str(error)},
            )
            raise StoreUnavailable(f"Failed to {action}: {error}")

        return response

    def _fetch_column(self, column: str, predicate: SaleRecordFilter, action: str) -> List[Mapping[str, Any]]:
        """Fetch one column for every matching row, a page at a time."""

        rows: List[Mapping[str, Any]] = []
        offset = 0

        while True:
            query = self._apply_filter(self._table().select(column), predicate)
            query = query.order("id").range(offset, offset + _PAGE_SIZE - 1)
            page_rows = getattr(self._execute(query, action), "data", None) or []

            rows.extend(page_rows)
            if len(page_rows) < _PAGE_SIZE:
                break
            offset += len(page_rows)

        return rows

    def sum_where(self, field: str, predicate: SaleRecordFilter) -> Optional[float]:
        require_summable(field)
        rows = self._fetch_column(field, predicate, f"sum {field}")
        values = [float(row[field]) for row in rows if row.get(field) is not None]
        if not values:
            return None
        return sum(values)

    def count_where(self, predicate: SaleRecordFilter) -> int:
        query = self._apply_filter(self._table().select("id", count="exact"), predicate).limit(1)
        response = self._execute(query, "count sale records")
        return getattr(response, "count", 0) or 0

    def group_count_by(self, field: str, predicate: SaleRecordFilter) -> Dict[Any, int]:
        require_groupable(field)
        rows = self._fetch_column(field, predicate, f"group sale records by {field}")

        counts: Dict[Any, int] = {}
        for row in rows:
            value = row.get(field)
            if field == "price" and value is not None:
                value = float(value)
            counts[value] = counts.get(value, 0) + 1
        return counts

    def page_records(
        self,
        search: str = "",
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[SaleRecord], int]:
        query = self._table().select("*", count="exact")

        needle = search.strip()
        if needle:
            query = query.or_(_search_filter(needle))

        query = query.order("id").range(offset, offset + limit - 1)
        response = self._execute(query, "list sale records")

        rows = getattr(response, "data", None) or []
        total = getattr(response, "count", 0) or 0
        return [_row_to_record(row) for row in rows], total


__all__ = ["SupabaseRecordStore"]
