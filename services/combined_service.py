"""
Combined analytics service.

Runs the statistics, histogram and category aggregations for one month
concurrently and merges them into a single payload.

Strategy:
- The month range is resolved once, before any store query.
- Each aggregation runs on a worker thread (store drivers are blocking).
- All-or-nothing: the first failure cancels the remaining work and fails the
  whole call. No partial payload, no retries.
- An optional deadline cancels whatever is still running.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import timezone, tzinfo
from typing import Any, Callable, Dict, List, Optional

from domain.month_range import MonthRange
from repositories.record_store import RecordStore
from services.analytics_service import (
    Statistics,
    compute_category_breakdown,
    compute_histogram,
    compute_statistics,
)

logger = logging.getLogger(__name__)


class PartialAggregationFailure(RuntimeError):
    """Raised when one of the combined sub-aggregations fails."""

    def __init__(self, component: str, message: str) -> None:
        super().__init__(message)
        self.component = component


class AggregationTimeout(PartialAggregationFailure):
    """Raised when the combined view misses its deadline."""

    def __init__(self, components: List[str], timeout: float) -> None:
        super().__init__(
            ",".join(components),
            f"Combined analytics timed out after {timeout:g}s waiting for: {', '.join(components)}",
        )
        self.components = components


@dataclass(frozen=True, slots=True)
class CombinedAnalytics:
    """Merged monthly view. Field order is fixed, independent of completion order."""
    statistics: Statistics
    bar_chart: Dict[str, int]
    pie_chart: Dict[str, int]


_COMPONENTS: Dict[str, Callable[[RecordStore, MonthRange], Any]] = {
    "statistics": compute_statistics,
    "barChart": compute_histogram,
    "pieChart": compute_category_breakdown,
}


async def _cancel_all(tasks: List["asyncio.Task[Any]"]) -> None:
    pending = [task for task in tasks if not task.done()]
    for task in pending:
        task.cancel()
    if pending:
        await asyncio.gather(*pending, return_exceptions=True)


async def get_combined_analytics(
    store: RecordStore,
    month: str,
    *,
    tz: tzinfo = timezone.utc,
    timeout: Optional[float] = None,
) -> CombinedAnalytics:
    """
    Build the combined statistics + bar chart + pie chart view for a month.

    Args:
        store: Read-only record store shared by all three aggregations
        month: Month token formatted "YYYY-MM"
        tz: Reporting timezone used to derive the month range
        timeout: Seconds to wait for all three; None waits indefinitely

    Returns:
        CombinedAnalytics with all three results

    Raises:
        InvalidMonth: If the month token is malformed (before any query runs)
        PartialAggregationFailure: If any sub-aggregation fails
        AggregationTimeout: If the deadline elapses first

    Example:
        combined = asyncio.run(get_combined_analytics(store, "2024-03", timeout=10))
        print(combined.bar_chart["101-200"])
    """
    month_range = MonthRange.parse(month, tz)
    started = time.perf_counter()
    logger.info("Combined analytics started", extra={"month": month_range.token})

    tasks: Dict[str, "asyncio.Task[Any]"] = {
        name: asyncio.create_task(asyncio.to_thread(func, store, month_range), name=f"analytics-{name}")
        for name, func in _COMPONENTS.items()
    }

    try:
        done, pending = await asyncio.wait(
            tasks.values(),
            timeout=timeout,
            return_when=asyncio.FIRST_EXCEPTION,
        )

        for name, task in tasks.items():
            if task in done and task.exception() is not None:
                error = task.exception()
                logger.warning(
                    f"Combined analytics failed in {name}",
                    extra={"month": month_range.token, "component": name, "error": str(error)},
                )
                raise PartialAggregationFailure(
                    name, f"Combined analytics failed in {name}: {error}"
                ) from error

        if pending:
            missing = [name for name, task in tasks.items() if task in pending]
            logger.warning(
                "Combined analytics timed out",
                extra={"month": month_range.token, "components": missing, "timeout": timeout},
            )
            raise AggregationTimeout(missing, timeout or 0.0)
    finally:
        await _cancel_all(list(tasks.values()))

    logger.info(
        "Combined analytics finished",
        extra={
            "month": month_range.token,
            "elapsed_ms": round((time.perf_counter() - started) * 1000, 1),
        },
    )

    return CombinedAnalytics(
        statistics=tasks["statistics"].result(),
        bar_chart=tasks["barChart"].result(),
        pie_chart=tasks["pieChart"].result(),
    )


__all__ = [
    "AggregationTimeout",
    "CombinedAnalytics",
    "PartialAggregationFailure",
    "get_combined_analytics",
]
