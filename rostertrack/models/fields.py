"""
Shared enums and field helpers used by the query services and routes.
"""
import calendar
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional


class Timeframe(str, Enum):
    last_week = "last_week"
    last_month = "last_month"
    all_time = "all_time"

    @property
    def display_name(self) -> str:
        return {
            "last_week": "Last Week",
            "last_month": "Last Month",
            "all_time": "All Time",
        }[self.value]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime, the form every stored date uses."""
    return datetime.now(timezone.utc)


def as_utc(dt: datetime) -> datetime:
    """Convert to aware UTC; naive values are assumed to already be UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def months_back(dt: datetime, months: int) -> datetime:
    """Step back whole calendar months, clamping the day (Mar 31 -> Feb 28/29)."""
    month_index = dt.year * 12 + (dt.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)


def timeframe_cutoff(
    timeframe: Timeframe, now: Optional[datetime] = None
) -> Optional[datetime]:
    """Return the inclusive lower bound on match date, or None for all time.

    Args:
        timeframe: Window to evaluate
        now: Reference time; defaults to the current UTC time

    Returns:
        Aware UTC datetime, or None when no date filter applies
    """
    reference = as_utc(now) if now is not None else utc_now()

    if timeframe == Timeframe.last_week:
        return reference - timedelta(weeks=1)
    if timeframe == Timeframe.last_month:
        return months_back(reference, 1)
    return None
