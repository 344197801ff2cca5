# Sessions Feature - Query Builder

"""
Pure translation of session filter intents into MongoDB filter documents.

Nothing here touches the database or validates input: date strings are
compared lexicographically as ``YYYY-MM-DD`` and passed through untouched.
"""

from typing import Any, Dict, List, Optional, Tuple

from app.features.sessions.models import SessionStatus


# Newest first for general listings
DEFAULT_SORT: List[Tuple[str, int]] = [("date", -1), ("time", -1)]


def date_range_clause(start_date: Optional[str] = None, end_date: Optional[str] = None) -> Dict[str, str]:
    """Inclusive bounds on the ``date`` field; empty when neither is given."""
    clause: Dict[str, str] = {}
    if start_date:
        clause["$gte"] = start_date
    if end_date:
        clause["$lte"] = end_date
    return clause


def status_clause(
    completed: Optional[bool] = None,
    include_cancelled: Optional[bool] = None,
) -> Optional[Any]:
    """
    Combine the completion and cancellation intents into one ``status`` match.

    ``include_cancelled`` left unset behaves exactly like ``True``: no
    constraint on cancellation at all.
    """
    if completed is True:
        # A completed session can't also be cancelled, so nothing else to add
        return SessionStatus.COMPLETED.value

    excluded = []
    if completed is False:
        excluded.append(SessionStatus.COMPLETED.value)
    if include_cancelled is False:
        excluded.append(SessionStatus.CANCELLED.value)

    if not excluded:
        return None
    if len(excluded) == 1:
        return {"$ne": excluded[0]}
    return {"$nin": excluded}


def build_session_filter(
    user_id: str,
    *,
    patient_id: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    completed: Optional[bool] = None,
    include_cancelled: Optional[bool] = None,
) -> Dict[str, Any]:
    """
    Build the owner-scoped filter for listing sessions.

    Args:
        user_id: Owner; always part of the filter
        patient_id: Restrict to one patient
        start_date: Inclusive lower bound (YYYY-MM-DD)
        end_date: Inclusive upper bound (YYYY-MM-DD)
        completed: True for completed only, False for everything else
        include_cancelled: False drops cancelled sessions; True or None keeps them

    Returns:
        MongoDB filter document
    """
    query: Dict[str, Any] = {"user_id": user_id}

    if patient_id:
        query["patient_id"] = patient_id

    status = status_clause(completed, include_cancelled)
    if status is not None:
        query["status"] = status

    date_clause = date_range_clause(start_date, end_date)
    if date_clause:
        query["date"] = date_clause

    return query
