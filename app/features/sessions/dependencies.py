# Sessions Feature - Dependencies

from dataclasses import dataclass
from typing import Optional
from fastapi import Query
from app.shared.validators import DATE_PATTERN, OBJECT_ID_PATTERN, canonical_object_id


@dataclass
class SessionFilters:
    """Optional listing filters taken from the query string."""

    patient_id: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    completed: Optional[bool] = None
    include_cancelled: Optional[bool] = None


def get_session_filters(
    patient: Optional[str] = Query(None, alias="patientId", pattern=OBJECT_ID_PATTERN),
    start_date: Optional[str] = Query(None, alias="startDate", pattern=DATE_PATTERN),
    end_date: Optional[str] = Query(None, alias="endDate", pattern=DATE_PATTERN),
    completed: Optional[bool] = Query(None),
    include_cancelled: Optional[bool] = Query(None, alias="includeCancelled"),
) -> SessionFilters:
    """Collect the listing filters shared by /sessions and /patients/{id}/sessions."""
    return SessionFilters(
        patient_id=canonical_object_id(patient) if patient else None,
        start_date=start_date,
        end_date=end_date,
        completed=completed,
        include_cancelled=include_cancelled,
    )
