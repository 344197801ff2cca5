# Patient Management Feature - Service

from typing import Any, Dict, List, Optional
from bson import ObjectId
from app.features.patients.models import Patient
from app.features.patients.schemas import (
    CreatePatientRequest,
    UpdatePatientRequest,
    PatientResponse,
)
from app.features.sessions.models import Session, SessionStatus
from app.features.sessions.classifier import active_filter
from app.core.logging import logger
from app.shared.exceptions import NotFoundException
from app.shared.models import with_updated_at


class PatientService:
    """Service class for patient management operations."""

    @staticmethod
    def patient_to_response(patient: Patient) -> PatientResponse:
        """Convert Patient document to response schema."""
        return PatientResponse(
            id=str(patient.id),
            user_id=patient.user_id,
            name=patient.name,
            contact_number=patient.contact_number,
            age=patient.age,
            gender=patient.gender,
            created_at=patient.created_at,
            updated_at=patient.updated_at,
        )

    @staticmethod
    def owner_filter(patient_id: str, user_id: str) -> Dict[str, Any]:
        """Match one patient only if it belongs to the caller."""
        return {"_id": ObjectId(patient_id), "user_id": user_id}

    @staticmethod
    async def get_owned_patient(patient_id: str, user_id: str) -> Patient:
        """Get a patient owned by the user; missing and foreign look the same."""
        patient = await Patient.find_one(PatientService.owner_filter(patient_id, user_id))
        if not patient:
            raise NotFoundException("Patient not found")
        return patient

    @staticmethod
    async def get_patients(user_id: str) -> List[PatientResponse]:
        """Get all patients of a user, newest first."""
        patients = await Patient.find({"user_id": user_id}).sort([("created_at", -1)]).to_list()
        return [PatientService.patient_to_response(p) for p in patients]

    @staticmethod
    async def create_patient(user_id: str, request: CreatePatientRequest) -> PatientResponse:
        """Create a new patient for a user."""
        patient = Patient(
            user_id=user_id,
            name=request.name,
            contact_number=request.contact_number,
            age=request.age,
            gender=request.gender,
        )
        await patient.insert()
        logger.info(f"Created patient {patient.id} for user {user_id}")
        return PatientService.patient_to_response(patient)

    @staticmethod
    async def update_patient(
        patient_id: str,
        user_id: str,
        request: UpdatePatientRequest
    ) -> PatientResponse:
        """Update only the fields present in the request."""
        patient = await PatientService.get_owned_patient(patient_id, user_id)

        update_dict = request.model_dump(exclude_unset=True)
        if update_dict.get("name") is None:
            # A null name is ignored rather than blanking the record
            update_dict.pop("name", None)
        for field in ("age", "gender"):
            if field in update_dict and update_dict[field] is None:
                update_dict.pop(field)

        for field, value in update_dict.items():
            setattr(patient, field, value)

        patient.touch()
        await patient.save()

        logger.info(f"Updated patient {patient_id} fields={sorted(update_dict)}")
        return PatientService.patient_to_response(patient)

    @staticmethod
    async def delete_patient(patient_id: str, user_id: str) -> bool:
        """
        Hard delete a patient.

        Sessions are left in place and keep their ``patient_name`` snapshot.
        """
        patient = await PatientService.get_owned_patient(patient_id, user_id)
        await patient.delete()
        logger.info(f"Deleted patient {patient_id} for user {user_id}")
        return True

    # ============== Open-session queries ==============

    @staticmethod
    async def get_last_active_session_date(patient_id: str, user_id: str) -> Optional[str]:
        """Latest date among the patient's open sessions, or None."""
        session = await Session.find(
            active_filter(user_id, patient_id=patient_id)
        ).sort([("date", -1)]).first_or_none()
        return session.date if session else None

    @staticmethod
    async def get_patients_with_active_sessions(patient_ids: List[str], user_id: str) -> List[str]:
        """Subset of ``patient_ids`` having at least one open session."""
        if not patient_ids:
            return []
        sessions = await Session.find(active_filter(user_id, patient_ids=patient_ids)).to_list()
        # Unique, in first-seen order
        return list(dict.fromkeys(s.patient_id for s in sessions))

    # ============== Patient-wide bulk updates ==============

    @staticmethod
    async def update_all_patient_sessions(patient_id: str, user_id: str, fields: Dict[str, Any]) -> int:
        """Apply ``fields`` to every open session of the patient."""
        result = await Session.find(active_filter(user_id, patient_id=patient_id)).update_many(
            {"$set": with_updated_at(fields)}
        )
        modified = result.modified_count if result else 0
        logger.info(f"Updated {modified} open sessions of patient {patient_id} fields={sorted(fields)}")
        return modified

    @staticmethod
    async def close_all_upcoming_sessions(patient_id: str, user_id: str) -> int:
        """Cancel every open session of the patient, zeroing its amount."""
        result = await Session.find(active_filter(user_id, patient_id=patient_id)).update_many(
            {"$set": with_updated_at({
                "status": SessionStatus.CANCELLED.value,
                "amount": 0,
            })}
        )
        closed = result.modified_count if result else 0
        logger.info(f"Closed {closed} open sessions of patient {patient_id}")
        return closed
