"""
Shared FastAPI dependencies.

Route handlers receive the record store and the validated month range through
these, so tests can swap the store with `app.dependency_overrides`.
"""

from functools import lru_cache
from typing import Optional

from fastapi import HTTPException, Query

from config import get_settings
from domain.month_range import MonthRange
from repositories.client import get_supabase_client
from repositories.record_store import RecordStore
from repositories.sale_record_repository import SupabaseRecordStore


@lru_cache(maxsize=1)
def get_record_store() -> RecordStore:
    """Production record store (Supabase)."""

    return SupabaseRecordStore(get_supabase_client(), table=get_settings().sales_table)


def resolve_month(
    month: Optional[str] = Query(None, description="Month to report on, formatted YYYY-MM (e.g., '2024-03')"),
) -> MonthRange:
    """Validate the `month` query parameter at the boundary."""

    if not month:
        raise HTTPException(status_code=400, detail="Month query parameter is required")

    # InvalidMonth propagates to the handler in api.main
    return MonthRange.parse(month, get_settings().reporting_timezone)
