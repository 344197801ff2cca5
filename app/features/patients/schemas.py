# Patient Management Feature - Schemas

from typing import Optional, List
from datetime import datetime
from pydantic import Field, field_validator
from app.features.patients.models import Gender
from app.shared.schemas import CamelModel
from app.shared.validators import check_time


def _clean_name(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("name is required")
    return v


# ============== Create Patient ==============

class CreatePatientRequest(CamelModel):
    """Request schema for creating a new patient."""
    name: str = Field(..., max_length=100)
    contact_number: Optional[str] = Field(None, max_length=20)
    age: int = Field(..., ge=0, le=150, description="Valid age is required (0-150)")
    gender: Gender

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _clean_name(v)

    @field_validator("contact_number")
    @classmethod
    def strip_contact(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else v


# ============== Update Patient ==============

class UpdatePatientRequest(CamelModel):
    """Request schema for updating patient information."""
    name: Optional[str] = Field(None, max_length=100)
    contact_number: Optional[str] = Field(None, max_length=20)
    age: Optional[int] = Field(None, ge=0, le=150)
    gender: Optional[Gender] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return _clean_name(v)

    @field_validator("contact_number")
    @classmethod
    def strip_contact(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else v


# ============== Patient Response ==============

class PatientResponse(CamelModel):
    """Response schema for patient data."""
    id: str
    user_id: str
    name: str
    contact_number: Optional[str] = None
    age: int
    gender: str
    created_at: datetime
    updated_at: datetime


class PatientData(CamelModel):
    patient: PatientResponse


class PatientListData(CamelModel):
    patients: List[PatientResponse]


# ============== Patient-wide Session Operations ==============

class SessionDetailsUpdate(CamelModel):
    """Fields copied onto every open session of a patient."""
    notes: Optional[str] = None
    time: Optional[str] = None
    amount: Optional[float] = Field(None, ge=0)

    @field_validator("notes")
    @classmethod
    def strip_notes(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else v

    @field_validator("time")
    @classmethod
    def validate_time(cls, v: Optional[str]) -> Optional[str]:
        return check_time(v) if v is not None else v


class ModifiedCountData(CamelModel):
    modified_count: int


class LastActiveData(CamelModel):
    last_active_date: Optional[str] = None


class ActiveSessionsRequest(CamelModel):
    patient_ids: List[str]


class ActiveSessionsData(CamelModel):
    active_patient_ids: List[str]
