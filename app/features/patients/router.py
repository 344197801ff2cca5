# Patient Management Feature - Router

from fastapi import APIRouter, Depends, status
from app.features.auth.models import User
from app.features.auth.dependencies import get_current_user
from app.features.patients.schemas import (
    CreatePatientRequest,
    UpdatePatientRequest,
    PatientData,
    PatientListData,
    SessionDetailsUpdate,
    ModifiedCountData,
    LastActiveData,
    ActiveSessionsRequest,
    ActiveSessionsData,
)
from app.features.patients.service import PatientService
from app.features.sessions.dependencies import SessionFilters, get_session_filters
from app.features.sessions.schemas import SessionListData
from app.features.sessions.service import SessionService
from app.shared.exceptions import BadRequestException
from app.shared.schemas import BaseResponse
from app.shared.validators import ensure_object_id


router = APIRouter(prefix="/patients", tags=["Patients"])


@router.get("", response_model=BaseResponse)
async def list_patients(current_user: User = Depends(get_current_user)):
    """List the current user's patients, newest first."""
    patients = await PatientService.get_patients(str(current_user.id))
    return BaseResponse(data=PatientListData(patients=patients))


@router.post("", response_model=BaseResponse, status_code=status.HTTP_201_CREATED)
async def create_patient(
    request: CreatePatientRequest,
    current_user: User = Depends(get_current_user)
):
    """
    Create a new patient.

    - **name**: Required, non-blank
    - **contactNumber**: Optional
    - **age**: 0 to 150
    - **gender**: male, female or other
    """
    patient = await PatientService.create_patient(str(current_user.id), request)
    return BaseResponse(message="Patient created successfully", data=PatientData(patient=patient))


# NOTE: must come before the /{patient_id} routes
@router.post("/active-sessions", response_model=BaseResponse)
async def get_patients_with_active_sessions(
    request: ActiveSessionsRequest,
    current_user: User = Depends(get_current_user)
):
    """Which of the given patients still have at least one open session."""
    patient_ids = [ensure_object_id(patient_id, "patient") for patient_id in request.patient_ids]
    active = await PatientService.get_patients_with_active_sessions(
        patient_ids, str(current_user.id)
    )
    return BaseResponse(data=ActiveSessionsData(active_patient_ids=active))


@router.put("/{patient_id}", response_model=BaseResponse)
async def update_patient(
    patient_id: str,
    request: UpdatePatientRequest,
    current_user: User = Depends(get_current_user)
):
    patient_id = ensure_object_id(patient_id, "patient")
    patient = await PatientService.update_patient(patient_id, str(current_user.id), request)
    return BaseResponse(message="Patient updated successfully", data=PatientData(patient=patient))


@router.delete("/{patient_id}", response_model=BaseResponse)
async def delete_patient(
    patient_id: str,
    current_user: User = Depends(get_current_user)
):
    """
    Permanently delete a patient.

    Their sessions are kept and still show the patient's name.
    """
    patient_id = ensure_object_id(patient_id, "patient")
    await PatientService.delete_patient(patient_id, str(current_user.id))
    return BaseResponse(message="Patient deleted successfully")


# ============== Patient Sessions ==============

@router.get("/{patient_id}/sessions", response_model=BaseResponse)
async def list_patient_sessions(
    patient_id: str,
    filters: SessionFilters = Depends(get_session_filters),
    current_user: User = Depends(get_current_user)
):
    """Sessions of one patient, accepting the same filters as GET /sessions."""
    patient_id = ensure_object_id(patient_id, "patient")
    filters.patient_id = patient_id
    sessions = await SessionService.get_sessions(str(current_user.id), filters)
    return BaseResponse(data=SessionListData(sessions=sessions))


@router.put("/{patient_id}/sessions/details", response_model=BaseResponse)
async def update_patient_session_details(
    patient_id: str,
    request: SessionDetailsUpdate,
    current_user: User = Depends(get_current_user)
):
    """
    Copy notes, time and/or amount onto every open session of the patient.

    Completed and cancelled sessions are left alone.
    """
    patient_id = ensure_object_id(patient_id, "patient")
    fields = request.model_dump(exclude_none=True)
    if not fields:
        raise BadRequestException("At least one field (notes, time, or amount) is required")

    modified = await PatientService.update_all_patient_sessions(patient_id, str(current_user.id), fields)
    return BaseResponse(
        message=f"Updated {modified} sessions for patient",
        data=ModifiedCountData(modified_count=modified),
    )


@router.put("/{patient_id}/sessions/close", response_model=BaseResponse)
async def close_patient_sessions(
    patient_id: str,
    current_user: User = Depends(get_current_user)
):
    """Cancel every open session of the patient and zero its amount."""
    patient_id = ensure_object_id(patient_id, "patient")
    closed = await PatientService.close_all_upcoming_sessions(patient_id, str(current_user.id))
    return BaseResponse(
        message=f"Closed {closed} upcoming sessions for patient",
        data=ModifiedCountData(modified_count=closed),
    )


@router.get("/{patient_id}/sessions/last-active", response_model=BaseResponse)
async def get_last_active_session(
    patient_id: str,
    current_user: User = Depends(get_current_user)
):
    patient_id = ensure_object_id(patient_id, "patient")
    last_active = await PatientService.get_last_active_session_date(patient_id, str(current_user.id))
    return BaseResponse(data=LastActiveData(last_active_date=last_active))
