"""Calendar-day helpers.

Session dates are plain ``YYYY-MM-DD`` strings with no time zone, so every
comparison against "today" happens on ISO strings, which order the same way
lexicographically as the dates they represent.
"""

import calendar
from datetime import date, datetime, timedelta
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from app.config import settings


def today(tz: Optional[str] = None) -> date:
    """Current calendar day in the configured zone (UTC unless overridden)."""
    return datetime.now(ZoneInfo(tz or settings.TIMEZONE)).date()


def utcnow() -> datetime:
    """Naive UTC timestamp, the form Mongo stores and hands back."""
    return datetime.utcnow()


def to_iso(day: date) -> str:
    return day.isoformat()


def next_day(day: date) -> date:
    return day + timedelta(days=1)


def month_bounds(year: int, month: int) -> Tuple[str, str]:
    """First and last calendar day of a month as inclusive ISO bounds."""
    if not 1 <= month <= 12:
        raise ValueError("month must be between 1 and 12")
    last_day = calendar.monthrange(year, month)[1]
    return (
        to_iso(date(year, month, 1)),
        to_iso(date(year, month, last_day)),
    )
