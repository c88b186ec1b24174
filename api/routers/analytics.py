"""
Analytics API Endpoints.

Monthly statistics, price histogram, category breakdown and the combined
dashboard view.
"""

import logging
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_record_store, resolve_month
from api.models import CombinedResponse, StatisticsResponse
from config import get_settings
from domain.month_range import MonthRange
from repositories.record_store import RecordStore, StoreUnavailable
from services.analytics_service import (
    Statistics,
    compute_category_breakdown,
    compute_histogram,
    compute_statistics,
)
from services.combined_service import PartialAggregationFailure, get_combined_analytics

logger = logging.getLogger(__name__)

router = APIRouter()


def _statistics_response(stats: Statistics) -> StatisticsResponse:
    return StatisticsResponse(
        total_sales_amount=stats.total_sales_amount,
        total_sold_items=stats.total_sold_items,
        total_not_sold_items=stats.total_not_sold_items,
    )


@router.get(
    "/statistics",
    response_model=StatisticsResponse,
    summary="Monthly Sales Statistics",
    description="Total sales amount plus sold and not-sold item counts for the month."
)
def get_statistics(
    month_range: MonthRange = Depends(resolve_month),
    store: RecordStore = Depends(get_record_store),
):
    """
    Sales totals for the selected month.

    `totalSalesAmount` is null when nothing was sold in the month.

    **Example usage:**
    - `GET /api/v1/statistics?month=2024-03`
    """
    try:
        return _statistics_response(compute_statistics(store, month_range))
    except StoreUnavailable:
        raise
    except Exception as e:
        logger.exception("Failed to compute statistics", extra={"month": month_range.token})
        raise HTTPException(status_code=500, detail=f"Failed to compute statistics: {str(e)}")


@router.get(
    "/barchart",
    response_model=Dict[str, int],
    summary="Monthly Price Histogram",
    description="Number of items per fixed price range for the month."
)
def get_bar_chart(
    month_range: MonthRange = Depends(resolve_month),
    store: RecordStore = Depends(get_record_store),
):
    """
    Item counts per price range for the selected month.

    All ten ranges ("0-100" through "901-above") are always present.
    """
    try:
        return compute_histogram(store, month_range)
    except StoreUnavailable:
        raise
    except Exception as e:
        logger.exception("Failed to compute bar chart", extra={"month": month_range.token})
        raise HTTPException(status_code=500, detail=f"Failed to compute bar chart: {str(e)}")


@router.get(
    "/piechart",
    response_model=Dict[str, int],
    summary="Monthly Category Breakdown",
    description="Number of items per category for the month."
)
def get_pie_chart(
    month_range: MonthRange = Depends(resolve_month),
    store: RecordStore = Depends(get_record_store),
):
    """
    Item counts per category for the selected month.

    Categories without items in the month are omitted.
    """
    try:
        return compute_category_breakdown(store, month_range)
    except StoreUnavailable:
        raise
    except Exception as e:
        logger.exception("Failed to compute pie chart", extra={"month": month_range.token})
        raise HTTPException(status_code=500, detail=f"Failed to compute pie chart: {str(e)}")


@router.get(
    "/combined",
    response_model=CombinedResponse,
    summary="Combined Monthly Dashboard",
    description="Statistics, bar chart and pie chart for the month in one response."
)
async def get_combined(
    month_range: MonthRange = Depends(resolve_month),
    store: RecordStore = Depends(get_record_store),
):
    """
    All three monthly views, computed concurrently.

    **All-or-nothing:** if any of the three fails, the whole request fails;
    no partial dashboard is returned.

    **Example response:**
    ```json
    {
      "statistics": {"totalSalesAmount": 150.0, "totalSoldItems": 1, "totalNotSoldItems": 1},
      "barChart": {"0-100": 0, "101-200": 2, "...": 0},
      "pieChart": {"A": 1, "B": 1}
    }
    ```
    """
    settings = get_settings()
    try:
        combined = await get_combined_analytics(
            store,
            month_range.token,
            tz=settings.reporting_timezone,
            timeout=settings.combined_timeout_seconds,
        )
    except PartialAggregationFailure:
        raise
    except Exception as e:
        logger.exception("Failed to compute combined analytics", extra={"month": month_range.token})
        raise HTTPException(status_code=500, detail=f"Failed to compute combined analytics: {str(e)}")

    return CombinedResponse(
        statistics=_statistics_response(combined.statistics),
        bar_chart=combined.bar_chart,
        pie_chart=combined.pie_chart,
    )
