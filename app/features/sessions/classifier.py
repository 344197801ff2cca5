# Sessions Feature - Classifier

"""
Read-time bucketing of sessions relative to the current calendar day.

No state transition is ever written: a pending session whose date has gone by
simply starts showing up under *past*. Each view is expressed twice, once as
a MongoDB filter plus sort order for listing, and once as the pure predicate
``categories_for`` for a single session.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple

from app.core.dates import next_day, to_iso
from app.features.sessions.models import SessionStatus


PENDING = SessionStatus.PENDING.value
COMPLETED = SessionStatus.COMPLETED.value
CANCELLED = SessionStatus.CANCELLED.value


class SessionCategory(str, Enum):
    TODAY = "today"
    UPCOMING = "upcoming"
    PAST = "past"
    PAST_WITH_CANCELLED = "past_with_cancelled"
    ACTIVE = "active"


@dataclass(frozen=True)
class SessionView:
    """A filter and the order its results are listed in."""

    filter: Dict[str, Any]
    sort: List[Tuple[str, int]]


def today_view(user_id: str, today: date) -> SessionView:
    """Everything dated today, whatever its status."""
    return SessionView(
        filter={"user_id": user_id, "date": to_iso(today)},
        sort=[("time", 1)],
    )


def upcoming_view(user_id: str, today: date) -> SessionView:
    """Pending sessions from tomorrow onwards; today is deliberately excluded."""
    return SessionView(
        filter={
            "user_id": user_id,
            "date": {"$gte": to_iso(next_day(today))},
            "status": PENDING,
        },
        sort=[("date", 1), ("time", 1)],
    )


def past_view(user_id: str, today: date, include_cancelled: bool = False) -> SessionView:
    """
    Completed sessions on any date, plus pending ones that have elapsed.

    Cancelled sessions are only listed with ``include_cancelled``; a cancelled
    session dated in the future is therefore absent from both this view and
    the upcoming one.
    """
    branches: List[Dict[str, Any]] = [
        {"status": COMPLETED},
        {"date": {"$lt": to_iso(today)}, "status": PENDING},
    ]
    if include_cancelled:
        branches.insert(1, {"status": CANCELLED})

    return SessionView(
        filter={"user_id": user_id, "$or": branches},
        sort=[("date", -1), ("time", 1)],
    )


def active_filter(
    user_id: str,
    *,
    patient_id: Optional[str] = None,
    patient_ids: Optional[Iterable[str]] = None,
) -> Dict[str, Any]:
    """Open (pending) sessions regardless of date, optionally per patient."""
    query: Dict[str, Any] = {"user_id": user_id, "status": PENDING}
    if patient_id is not None:
        query["patient_id"] = patient_id
    elif patient_ids is not None:
        query["patient_id"] = {"$in": list(patient_ids)}
    return query


def categories_for(
    session_date: str,
    status: SessionStatus,
    today: date,
) -> FrozenSet[SessionCategory]:
    """
    Categories a single session falls into, matching the views above.

    ``past_with_cancelled`` is membership in the past view listed with
    ``include_cancelled``.
    """
    today_iso = to_iso(today)
    tomorrow_iso = to_iso(next_day(today))
    status = SessionStatus(status)
    is_pending = status.is_open

    categories = set()
    if session_date == today_iso:
        categories.add(SessionCategory.TODAY)
    if is_pending and session_date >= tomorrow_iso:
        categories.add(SessionCategory.UPCOMING)
    if status == SessionStatus.COMPLETED or (is_pending and session_date < today_iso):
        categories.add(SessionCategory.PAST)
        categories.add(SessionCategory.PAST_WITH_CANCELLED)
    if status == SessionStatus.CANCELLED:
        categories.add(SessionCategory.PAST_WITH_CANCELLED)
    if is_pending:
        categories.add(SessionCategory.ACTIVE)

    return frozenset(categories)
