# Sessions Feature - Models

from enum import Enum
from typing import Any, Optional
from beanie import Document, Indexed
from pydantic import Field, model_validator
from app.shared.models import TimestampMixin


class SessionStatus(str, Enum):
    """Lifecycle state of a therapy session.

    ``pending`` is the only open state; ``completed`` and ``cancelled`` are
    terminal and are never touched by the patient-wide bulk operations.
    """

    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @classmethod
    def from_flags(cls, completed: bool, cancelled: bool) -> "SessionStatus":
        """Map the legacy boolean pair onto a single status.

        Cancellation wins, so the meaningless ``completed and cancelled``
        combination resolves to ``cancelled``.
        """
        if cancelled:
            return cls.CANCELLED
        if completed:
            return cls.COMPLETED
        return cls.PENDING

    @property
    def is_open(self) -> bool:
        return self is SessionStatus.PENDING


class Session(Document, TimestampMixin):
    """
    Session document model.
    One therapy appointment for a patient, owned by the therapist (User)
    who scheduled it.
    """

    # Owner (User._id as hex string)
    user_id: Indexed(str)

    # Patient this session is for (Patient._id as hex string)
    patient_id: str

    # Snapshot of the patient's name when the session was scheduled.
    # Not refreshed when the patient is renamed.
    patient_name: str

    # Calendar date (YYYY-MM-DD) and 24h time (HH:MM), no time zone
    date: str
    time: str

    notes: str = ""
    status: SessionStatus = SessionStatus.PENDING

    # Fee charged; meaningful once completed, forced to 0 on cancellation
    amount: Optional[float] = Field(default=None, ge=0)

    @model_validator(mode="before")
    @classmethod
    def map_legacy_flags(cls, data: Any) -> Any:
        """Documents written before ``status`` existed carry two booleans."""
        if isinstance(data, dict) and "status" not in data:
            if "completed" in data or "cancelled" in data:
                data = dict(data)
                data["status"] = SessionStatus.from_flags(
                    bool(data.pop("completed", False)),
                    bool(data.pop("cancelled", False)),
                )
        return data

    @property
    def completed(self) -> bool:
        return self.status == SessionStatus.COMPLETED

    @property
    def cancelled(self) -> bool:
        return self.status == SessionStatus.CANCELLED

    class Settings:
        name = "sessions"
        use_state_management = True
        indexes = [
            [("user_id", 1), ("date", 1)],
            [("user_id", 1), ("status", 1), ("date", 1)],
            [("user_id", 1), ("patient_id", 1), ("date", 1)],
            [("patient_id", 1), ("date", 1)],
            [("created_at", -1)],
        ]

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": "65f1c0a2b4e8d9a1c2b3d4e5",
                "patient_id": "65f1c0a2b4e8d9a1c2b3d4f6",
                "patient_name": "Asha Verma",
                "date": "2024-03-15",
                "time": "10:30",
                "notes": "Knee mobility, week 3",
                "status": "completed",
                "amount": 500,
            }
        }
