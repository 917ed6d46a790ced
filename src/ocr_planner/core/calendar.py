"""
Calendar helpers: week counts, plan start dates, and date formatting.
"""

import math
from datetime import date, datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal

from .config import DAYS_PER_WEEK


def parse_iso(date_str: str) -> date:
    """Parse a YYYY-MM-DD string into a date."""
    return datetime.strptime(date_str, "%Y-%m-%d").date()


def to_iso(d: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return d.strftime("%Y-%m-%d")


def to_ics_date(d: date) -> str:
    """Format a date as YYYYMMDD for all-day calendar values."""
    return d.strftime("%Y%m%d")


def to_utc_stamp(dt: datetime) -> str:
    """Format a datetime as a UTC timestamp YYYYMMDDTHHMMSSZ."""
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y%m%dT%H%M%SZ")


def weeks_between(today: date, race_date: date) -> int:
    """
    Whole weeks from today until race day, never less than one.

    Args:
        today: Reference date
        race_date: Race day

    Returns:
        max(1, floor(days / 7))
    """
    return max(1, math.floor((race_date - today).days / DAYS_PER_WEEK))


def plan_start_date(today: date) -> date:
    """
    First day of a plan generated on ``today``.

    Monday starts the same day; any other day starts on the next Monday
    (Sunday +1 day, Tuesday +6 days).
    """
    return today + timedelta(days=(7 - today.weekday()) % 7)


def day_date(start: date, week_index: int, day_index: int) -> date:
    """Calendar date of day ``day_index`` (0=Monday) in 0-based week ``week_index``."""
    return start + timedelta(days=week_index * DAYS_PER_WEEK + day_index)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def round_tenth(value: float) -> float:
    """
    Round to one decimal place, halves up.

    Works on the exact binary value of ``value`` so 10.25 becomes 10.3
    (Python's round() would give 10.2).
    """
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
