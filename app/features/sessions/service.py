# Sessions Feature - Service

from typing import Any, Dict, List, Optional, Tuple
from datetime import date
from bson import ObjectId
from app.core import dates
from app.core.logging import logger
from app.features.patients.models import Patient
from app.features.patients.service import PatientService
from app.features.sessions.models import Session, SessionStatus
from app.features.sessions.schemas import SessionCreate, SessionUpdate, SessionResponse
from app.features.sessions.dependencies import SessionFilters
from app.features.sessions.queries import DEFAULT_SORT, build_session_filter
from app.features.sessions.classifier import (
    SessionView,
    categories_for,
    past_view,
    today_view,
    upcoming_view,
)
from app.shared.exceptions import NotFoundException


def resolve_status(
    current: SessionStatus,
    completed: Optional[bool] = None,
    cancelled: Optional[bool] = None,
) -> SessionStatus:
    """
    Fold a partial flag update into the current status.

    A flag that is switched off only matters when it describes the current
    state: ``completed=false`` re-opens a completed session but leaves a
    cancelled one cancelled.
    """
    if completed is not None and cancelled is not None:
        return SessionStatus.from_flags(completed, cancelled)
    if cancelled is True:
        return SessionStatus.CANCELLED
    if completed is True:
        return SessionStatus.COMPLETED
    if completed is False and current == SessionStatus.COMPLETED:
        return SessionStatus.PENDING
    if cancelled is False and current == SessionStatus.CANCELLED:
        return SessionStatus.PENDING
    return current


def legacy_status_backfill() -> List[Tuple[Dict[str, Any], Dict[str, Any]]]:
    """
    (filter, update) pairs converting boolean-flag documents to ``status``.

    Order matters: cancelled first, so records flagged both ways end up
    cancelled.
    """
    missing = {"status": {"$exists": False}}
    unset = {"completed": "", "cancelled": ""}
    return [
        (
            {**missing, "cancelled": True},
            {"$set": {"status": SessionStatus.CANCELLED.value, "amount": 0}, "$unset": unset},
        ),
        (
            {**missing, "completed": True},
            {"$set": {"status": SessionStatus.COMPLETED.value}, "$unset": unset},
        ),
        (
            missing,
            {"$set": {"status": SessionStatus.PENDING.value}, "$unset": unset},
        ),
    ]


class SessionService:
    """Service class for session operations."""

    @staticmethod
    def session_to_response(session: Session, today: Optional[date] = None) -> SessionResponse:
        """
        Convert Session document to response schema.

        When ``today`` is given the read-time categories are included.
        """
        categories = None
        if today is not None:
            categories = sorted(
                categories_for(session.date, session.status, today),
                key=lambda c: c.value,
            )
        return SessionResponse(
            id=str(session.id),
            user_id=session.user_id,
            patient_id=session.patient_id,
            patient_name=session.patient_name,
            date=session.date,
            time=session.time,
            notes=session.notes,
            status=session.status,
            completed=session.completed,
            cancelled=session.cancelled,
            amount=session.amount,
            categories=categories,
            created_at=session.created_at,
            updated_at=session.updated_at,
        )

    @staticmethod
    def _build_session(user_id: str, data: SessionCreate, patient_name: str) -> Session:
        status = data.resolved_status()
        amount = 0 if status == SessionStatus.CANCELLED else data.amount
        return Session(
            user_id=user_id,
            patient_id=data.patient_id,
            patient_name=data.patient_name or patient_name,
            date=data.date,
            time=data.time,
            notes=data.notes or "",
            status=status,
            amount=amount,
        )

    @staticmethod
    async def get_owned_session(session_id: str, user_id: str) -> Session:
        """Get a session owned by the user; missing and foreign look the same."""
        session = await Session.find_one({"_id": ObjectId(session_id), "user_id": user_id})
        if not session:
            raise NotFoundException("Session not found")
        return session

    @staticmethod
    async def _list_view(view: SessionView) -> List[SessionResponse]:
        sessions = await Session.find(view.filter).sort(view.sort).to_list()
        return [SessionService.session_to_response(s) for s in sessions]

    # ============== Reads ==============

    @staticmethod
    async def get_sessions(user_id: str, filters: SessionFilters) -> List[SessionResponse]:
        """List a user's sessions matching the optional filters, newest first."""
        query = build_session_filter(
            user_id,
            patient_id=filters.patient_id,
            start_date=filters.start_date,
            end_date=filters.end_date,
            completed=filters.completed,
            include_cancelled=filters.include_cancelled,
        )
        return await SessionService._list_view(SessionView(filter=query, sort=DEFAULT_SORT))

    @staticmethod
    async def get_session(session_id: str, user_id: str, today: Optional[date] = None) -> SessionResponse:
        session = await SessionService.get_owned_session(session_id, user_id)
        return SessionService.session_to_response(session, today or dates.today())

    @staticmethod
    async def get_today_sessions(user_id: str, today: Optional[date] = None) -> List[SessionResponse]:
        return await SessionService._list_view(today_view(user_id, today or dates.today()))

    @staticmethod
    async def get_upcoming_sessions(user_id: str, today: Optional[date] = None) -> List[SessionResponse]:
        return await SessionService._list_view(upcoming_view(user_id, today or dates.today()))

    @staticmethod
    async def get_past_sessions(
        user_id: str,
        include_cancelled: bool = False,
        today: Optional[date] = None,
    ) -> List[SessionResponse]:
        return await SessionService._list_view(
            past_view(user_id, today or dates.today(), include_cancelled=include_cancelled)
        )

    # ============== Writes ==============

    @staticmethod
    async def create_session(user_id: str, data: SessionCreate) -> SessionResponse:
        """Schedule one session for a patient the user owns."""
        patient = await PatientService.get_owned_patient(data.patient_id, user_id)

        session = SessionService._build_session(user_id, data, patient.name)
        await session.insert()

        logger.info(f"Created session {session.id} for patient {data.patient_id} on {data.date} {data.time}")
        return SessionService.session_to_response(session)

    @staticmethod
    async def create_sessions(user_id: str, items: List[SessionCreate]) -> List[SessionResponse]:
        """
        Schedule several sessions at once.

        Every referenced patient must belong to the user; nothing is inserted
        otherwise.
        """
        patient_ids = list(dict.fromkeys(item.patient_id for item in items))
        patients = await Patient.find({
            "_id": {"$in": [ObjectId(pid) for pid in patient_ids]},
            "user_id": user_id,
        }).to_list()

        if len(patients) != len(patient_ids):
            raise NotFoundException("One or more patients not found")

        names = {str(p.id): p.name for p in patients}
        sessions = [
            SessionService._build_session(user_id, item, names[item.patient_id])
            for item in items
        ]

        result = await Session.insert_many(sessions)
        for session, inserted_id in zip(sessions, result.inserted_ids):
            session.id = inserted_id

        logger.info(f"Created {len(sessions)} sessions for user {user_id}")
        return [SessionService.session_to_response(s) for s in sessions]

    @staticmethod
    async def update_session(session_id: str, user_id: str, data: SessionUpdate) -> SessionResponse:
        """Update only the fields present in the request."""
        session = await SessionService.get_owned_session(session_id, user_id)
        provided = data.model_dump(exclude_unset=True)

        if provided.get("patient_id") and provided["patient_id"] != session.patient_id:
            patient = await PatientService.get_owned_patient(provided["patient_id"], user_id)
            session.patient_id = provided["patient_id"]
            if "patient_name" not in provided:
                session.patient_name = patient.name

        for field in ("patient_name", "date", "time"):
            if provided.get(field):
                setattr(session, field, provided[field])
        if "notes" in provided:
            session.notes = provided["notes"] or ""
        if "amount" in provided:
            session.amount = provided["amount"]

        previous = session.status
        if provided.get("status") is not None:
            session.status = SessionStatus(provided["status"])
        elif "completed" in provided or "cancelled" in provided:
            session.status = resolve_status(
                session.status,
                completed=provided.get("completed"),
                cancelled=provided.get("cancelled"),
            )

        if session.status == SessionStatus.CANCELLED and (
            previous != SessionStatus.CANCELLED or "amount" in provided
        ):
            session.amount = 0

        session.touch()
        await session.save()

        logger.info(f"Updated session {session_id} fields={sorted(provided)} status={session.status.value}")
        return SessionService.session_to_response(session)

    @staticmethod
    async def delete_session(session_id: str, user_id: str) -> bool:
        """Hard delete a session; the patient is untouched."""
        session = await SessionService.get_owned_session(session_id, user_id)
        await session.delete()
        logger.info(f"Deleted session {session_id} for user {user_id}")
        return True

    # ============== Maintenance ==============

    @staticmethod
    async def backfill_legacy_status() -> int:
        """Give every boolean-flag session document a ``status``."""
        converted = 0
        for query, update in legacy_status_backfill():
            result = await Session.find(query).update_many(update)
            converted += result.modified_count if result else 0
        if converted:
            logger.info(f"Backfilled status on {converted} legacy sessions")
        return converted
