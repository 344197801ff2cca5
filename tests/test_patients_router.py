"""HTTP tests for /api/patients with the service layer patched."""

from unittest.mock import AsyncMock, patch

from app.features.patients.schemas import PatientResponse
from app.features.sessions.schemas import SessionResponse
from app.features.sessions.service import SessionService

from conftest import PATIENT_ID, USER_ID, stored_patient, stored_session


def patient_response(**overrides):
    return PatientResponse(**vars(stored_patient(**overrides)))


def test_list_patients_envelope(client):
    with patch("app.features.patients.service.PatientService.get_patients", new_callable=AsyncMock) as mock_list:
        mock_list.return_value = [patient_response()]
        response = client.get("/api/patients")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    patient = body["data"]["patients"][0]
    assert patient["contactNumber"] == "+91 98765 43210"
    assert patient["userId"] == USER_ID
    mock_list.assert_awaited_once_with(USER_ID)


def test_create_patient_accepts_age_150(client):
    with patch("app.features.patients.service.PatientService.create_patient", new_callable=AsyncMock) as mock_create:
        mock_create.return_value = patient_response(age=150, gender="other")
        response = client.post("/api/patients", json={"name": "Old Timer", "age": 150, "gender": "other"})

    assert response.status_code == 201
    assert response.json()["message"] == "Patient created successfully"
    assert response.json()["data"]["patient"]["age"] == 150


def test_create_patient_rejects_age_151(client):
    with patch("app.features.patients.service.PatientService.create_patient", new_callable=AsyncMock) as mock_create:
        response = client.post("/api/patients", json={"name": "Too Old", "age": 151, "gender": "other"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "age" in body["error"]
    mock_create.assert_not_awaited()


def test_create_patient_rejects_blank_name_and_bad_gender(client):
    assert client.post("/api/patients", json={"name": "  ", "age": 30, "gender": "male"}).status_code == 400
    assert client.post("/api/patients", json={"name": "A", "age": 30, "gender": "robot"}).status_code == 400


def test_malformed_patient_id_is_rejected_before_service(client):
    with patch("app.features.patients.service.PatientService.update_patient", new_callable=AsyncMock) as mock_update:
        response = client.put("/api/patients/not-an-id", json={"name": "X"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Invalid patient ID format"}
    mock_update.assert_not_awaited()


def test_missing_patient_is_404(client):
    from app.shared.exceptions import NotFoundException

    with patch(
        "app.features.patients.service.PatientService.delete_patient",
        new_callable=AsyncMock,
        side_effect=NotFoundException("Patient not found"),
    ):
        response = client.delete(f"/api/patients/{PATIENT_ID}")

    assert response.status_code == 404
    assert response.json()["error"] == "Patient not found"


def test_session_details_require_a_field(client):
    with patch(
        "app.features.patients.service.PatientService.update_all_patient_sessions", new_callable=AsyncMock
    ) as mock_update:
        response = client.put(f"/api/patients/{PATIENT_ID}/sessions/details", json={})

    assert response.status_code == 400
    assert response.json()["error"] == "At least one field (notes, time, or amount) is required"
    mock_update.assert_not_awaited()


def test_session_details_update(client):
    with patch(
        "app.features.patients.service.PatientService.update_all_patient_sessions",
        new_callable=AsyncMock,
        return_value=4,
    ) as mock_update:
        response = client.put(f"/api/patients/{PATIENT_ID}/sessions/details", json={"time": "08:30"})

    assert response.status_code == 200
    assert response.json()["message"] == "Updated 4 sessions for patient"
    assert response.json()["data"] == {"modifiedCount": 4}
    mock_update.assert_awaited_once_with(PATIENT_ID, USER_ID, {"time": "08:30"})


def test_session_details_reject_bad_time(client):
    response = client.put(f"/api/patients/{PATIENT_ID}/sessions/details", json={"time": "25:00"})
    assert response.status_code == 400


def test_close_sessions(client):
    with patch(
        "app.features.patients.service.PatientService.close_all_upcoming_sessions",
        new_callable=AsyncMock,
        return_value=2,
    ):
        response = client.put(f"/api/patients/{PATIENT_ID}/sessions/close")

    assert response.status_code == 200
    assert response.json()["message"] == "Closed 2 upcoming sessions for patient"


def test_last_active(client):
    with patch(
        "app.features.patients.service.PatientService.get_last_active_session_date",
        new_callable=AsyncMock,
        return_value=None,
    ):
        response = client.get(f"/api/patients/{PATIENT_ID}/sessions/last-active")

    assert response.status_code == 200
    assert response.json()["data"] == {"lastActiveDate": None}


def test_active_sessions(client):
    with patch(
        "app.features.patients.service.PatientService.get_patients_with_active_sessions",
        new_callable=AsyncMock,
        return_value=[PATIENT_ID],
    ):
        response = client.post("/api/patients/active-sessions", json={"patientIds": [PATIENT_ID]})

    assert response.status_code == 200
    assert response.json()["data"] == {"activePatientIds": [PATIENT_ID]}


def test_active_sessions_rejects_malformed_id(client):
    response = client.post("/api/patients/active-sessions", json={"patientIds": ["xyz"]})
    assert response.status_code == 400


def test_patient_sessions_are_scoped_to_patient(client):
    session = SessionResponse(**vars(stored_session()))
    with patch.object(SessionService, "get_sessions", new_callable=AsyncMock, return_value=[session]) as mock_list:
        response = client.get(f"/api/patients/{PATIENT_ID}/sessions?includeCancelled=false")

    assert response.status_code == 200
    filters = mock_list.await_args.args[1]
    assert filters.patient_id == PATIENT_ID
    assert filters.include_cancelled is False


def test_requires_token(anonymous_client):
    response = anonymous_client.get("/api/patients")
    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "No token provided"}


# ============== Upper-case ids ==============

UPPER_PATIENT_ID = PATIENT_ID.upper()


def test_upper_case_path_id_reaches_service_lower_cased(client):
    with patch(
        "app.features.patients.service.PatientService.close_all_upcoming_sessions",
        new_callable=AsyncMock,
        return_value=1,
    ) as mock_close:
        response = client.put(f"/api/patients/{UPPER_PATIENT_ID}/sessions/close")

    assert response.status_code == 200
    mock_close.assert_awaited_once_with(PATIENT_ID, USER_ID)


def test_upper_case_id_on_session_details(client):
    with patch(
        "app.features.patients.service.PatientService.update_all_patient_sessions",
        new_callable=AsyncMock,
        return_value=0,
    ) as mock_update:
        response = client.put(f"/api/patients/{UPPER_PATIENT_ID}/sessions/details", json={"notes": "x"})

    assert response.status_code == 200
    mock_update.assert_awaited_once_with(PATIENT_ID, USER_ID, {"notes": "x"})


def test_upper_case_patient_sessions_path(client):
    with patch.object(SessionService, "get_sessions", new_callable=AsyncMock, return_value=[]) as mock_list:
        response = client.get(f"/api/patients/{UPPER_PATIENT_ID}/sessions")

    assert response.status_code == 200
    assert mock_list.await_args.args[1].patient_id == PATIENT_ID


def test_patient_sessions_path_id_wins_over_query_filter(client):
    other = "65f1c0a2b4e8d9a1c2b3d4aa"
    with patch.object(SessionService, "get_sessions", new_callable=AsyncMock, return_value=[]) as mock_list:
        response = client.get(f"/api/patients/{PATIENT_ID}/sessions?patientId={other}")

    assert response.status_code == 200
    assert mock_list.await_args.args[1].patient_id == PATIENT_ID


def test_active_sessions_lower_cases_ids(client):
    with patch(
        "app.features.patients.service.PatientService.get_patients_with_active_sessions",
        new_callable=AsyncMock,
        return_value=[PATIENT_ID],
    ) as mock_active:
        response = client.post("/api/patients/active-sessions", json={"patientIds": [UPPER_PATIENT_ID]})

    assert response.status_code == 200
    mock_active.assert_awaited_once_with([PATIENT_ID], USER_ID)
