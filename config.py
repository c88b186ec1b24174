"""
Configuration helpers and Settings container.

Settings are read from the environment. A `.env` file at the project root is
loaded first so local runs do not need exported variables.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import tzinfo
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from domain.time import resolve_timezone

PROJECT_ROOT = Path(__file__).resolve().parent
load_dotenv(PROJECT_ROOT / ".env")


@dataclass(frozen=True, slots=True)
class Settings:
    """
    Service configuration.

    Attributes:
        supabase_url: Supabase project URL (None when not configured).
        supabase_key: Server-side Supabase API key (None when not configured).
        sales_table: Table holding sale records.
        reporting_timezone: Calendar used to derive month ranges.
        combined_timeout_seconds: Deadline for the combined view; None disables it.
        log_level: Root logging level.
    """

    supabase_url: Optional[str]
    supabase_key: Optional[str]
    sales_table: str
    reporting_timezone: tzinfo
    combined_timeout_seconds: Optional[float]
    log_level: int


def _parse_timeout(raw: str) -> Optional[float]:
    try:
        value = float(raw)
    except ValueError:
        raise RuntimeError(
            f"COMBINED_TIMEOUT_SECONDS must be a number, got {raw!r}"
        ) from None
    if value < 0:
        raise RuntimeError("COMBINED_TIMEOUT_SECONDS must be >= 0")
    return value or None


def _parse_log_level(raw: str) -> int:
    level = logging.getLevelName(raw.strip().upper())
    if not isinstance(level, int):
        raise RuntimeError(f"LOG_LEVEL is not a valid logging level: {raw!r}")
    return level


def load_settings() -> Settings:
    """
    Read environment variables and return a frozen `Settings` object.

    Raises:
        RuntimeError: if a variable is present but malformed.
    """

    tz_name = os.getenv("REPORTING_TIMEZONE", "UTC").strip() or "UTC"
    try:
        reporting_timezone = resolve_timezone(tz_name)
    except ValueError as exc:
        raise RuntimeError(f"REPORTING_TIMEZONE is invalid: {exc}") from exc

    return Settings(
        supabase_url=os.getenv("SUPABASE_URL") or None,
        supabase_key=os.getenv("SUPABASE_KEY") or None,
        sales_table=os.getenv("SALES_TABLE", "products").strip() or "products",
        reporting_timezone=reporting_timezone,
        combined_timeout_seconds=_parse_timeout(os.getenv("COMBINED_TIMEOUT_SECONDS", "10")),
        log_level=_parse_log_level(os.getenv("LOG_LEVEL", "INFO")),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, read once."""

    return load_settings()


__all__ = ["Settings", "get_settings", "load_settings"]
