# Earnings Feature - Aggregator

"""
Pipelines and filters for earnings over completed, paid sessions.

Only ``status == completed`` sessions with a positive ``amount`` count.
Amounts are summed as plain floats with no rounding.
"""

from typing import Any, Dict, Iterable, List, Optional, Tuple

from app.core.dates import month_bounds
from app.features.sessions.models import SessionStatus
from app.features.sessions.queries import date_range_clause


# Chronological within a month
DETAIL_SORT: List[Tuple[str, int]] = [("date", 1), ("time", 1)]


def earnings_match(
    user_id: str,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> Dict[str, Any]:
    """Owner's earning sessions, optionally bounded by inclusive dates."""
    match: Dict[str, Any] = {
        "user_id": user_id,
        "status": SessionStatus.COMPLETED.value,
        "amount": {"$exists": True, "$gt": 0},
    }
    date_clause = date_range_clause(start_date, end_date)
    if date_clause:
        match["date"] = date_clause
    return match


def build_monthly_earnings_pipeline(
    user_id: str,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    One row per calendar month having at least one earning session:
    ``{year, month, totalEarnings, sessionCount}``, newest month first.
    """
    parsed_date = {"$dateFromString": {"dateString": "$date", "format": "%Y-%m-%d"}}
    return [
        {"$match": earnings_match(user_id, start_date, end_date)},
        {
            "$group": {
                "_id": {
                    "year": {"$year": parsed_date},
                    "month": {"$month": parsed_date},
                },
                "totalEarnings": {"$sum": "$amount"},
                "sessionCount": {"$sum": 1},
            }
        },
        {"$sort": {"_id.year": -1, "_id.month": -1}},
        {
            "$project": {
                "_id": 0,
                "year": "$_id.year",
                "month": "$_id.month",
                "totalEarnings": 1,
                "sessionCount": 1,
            }
        },
    ]


def monthly_detail_filter(user_id: str, year: int, month: int) -> Dict[str, Any]:
    """Earning sessions dated within the given calendar month."""
    first_day, last_day = month_bounds(year, month)
    return earnings_match(user_id, first_day, last_day)


def total_earnings(amounts: Iterable[Optional[float]]) -> float:
    return sum(amount or 0 for amount in amounts)
