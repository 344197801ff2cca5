# Sessions Feature - Schemas

from typing import Optional, List
from datetime import datetime
from pydantic import Field, field_validator
from app.features.sessions.models import SessionStatus
from app.features.sessions.classifier import SessionCategory
from app.shared.schemas import CamelModel
from app.shared.validators import check_date, check_object_id, check_time


# ============== Create ==============

class SessionCreate(CamelModel):
    """Request schema for scheduling a session."""
    patient_id: str
    patient_name: Optional[str] = Field(None, max_length=200, description="Defaults to the patient's current name")
    date: str = Field(..., description="YYYY-MM-DD")
    time: str = Field(..., description="HH:MM, 24-hour")
    notes: Optional[str] = ""
    completed: bool = False
    cancelled: bool = False
    status: Optional[SessionStatus] = Field(None, description="Takes precedence over completed/cancelled")
    amount: Optional[float] = Field(None, ge=0)

    @field_validator("patient_id")
    @classmethod
    def validate_patient_id(cls, v: str) -> str:
        return check_object_id(v)

    @field_validator("patient_name", "notes")
    @classmethod
    def strip_text(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else v

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        return check_date(v)

    @field_validator("time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        return check_time(v)

    def resolved_status(self) -> SessionStatus:
        return self.status or SessionStatus.from_flags(self.completed, self.cancelled)

    class Config:
        json_schema_extra = {
            "example": {
                "patientId": "65f1c0a2b4e8d9a1c2b3d4f6",
                "patientName": "Asha Verma",
                "date": "2024-03-15",
                "time": "10:30",
                "notes": "Knee mobility, week 3",
                "amount": 500,
            }
        }


class BulkSessionCreate(CamelModel):
    """Request schema for scheduling several sessions at once."""
    sessions: List[SessionCreate] = Field(..., min_length=1)


# ============== Update ==============

class SessionUpdate(CamelModel):
    """Partial update; only fields present in the request change."""
    patient_id: Optional[str] = None
    patient_name: Optional[str] = Field(None, min_length=1, max_length=200)
    date: Optional[str] = None
    time: Optional[str] = None
    notes: Optional[str] = None
    completed: Optional[bool] = None
    cancelled: Optional[bool] = None
    status: Optional[SessionStatus] = None
    amount: Optional[float] = Field(None, ge=0)

    @field_validator("patient_id")
    @classmethod
    def validate_patient_id(cls, v: Optional[str]) -> Optional[str]:
        return check_object_id(v) if v is not None else v

    @field_validator("patient_name", "notes")
    @classmethod
    def strip_text(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else v

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: Optional[str]) -> Optional[str]:
        return check_date(v) if v is not None else v

    @field_validator("time")
    @classmethod
    def validate_time(cls, v: Optional[str]) -> Optional[str]:
        return check_time(v) if v is not None else v


# ============== Responses ==============

class SessionResponse(CamelModel):
    """Response schema for session data."""
    id: str
    user_id: str
    patient_id: str
    patient_name: str
    date: str
    time: str
    notes: str
    status: SessionStatus
    completed: bool
    cancelled: bool
    amount: Optional[float] = None
    categories: Optional[List[SessionCategory]] = None
    created_at: datetime
    updated_at: datetime


class SessionData(CamelModel):
    """Payload wrapping a single session."""
    session: SessionResponse


class SessionListData(CamelModel):
    """Payload wrapping a list of sessions."""
    sessions: List[SessionResponse]
