"""HTTP tests for /api/sessions with the service layer patched."""

from unittest.mock import AsyncMock, patch

from app.features.sessions.models import SessionStatus
from app.features.sessions.schemas import SessionResponse
from app.features.sessions.service import SessionService

from conftest import PATIENT_ID, SESSION_ID, USER_ID, stored_session


def session_response(**overrides):
    return SessionResponse(**vars(stored_session(**overrides)))


def test_list_sessions_passes_filters(client):
    with patch.object(SessionService, "get_sessions", new_callable=AsyncMock, return_value=[]) as mock_list:
        response = client.get(
            "/api/sessions",
            params={"patientId": PATIENT_ID, "startDate": "2024-03-01", "completed": "true"},
        )

    assert response.status_code == 200
    assert response.json()["data"] == {"sessions": []}
    user_id, filters = mock_list.await_args.args
    assert user_id == USER_ID
    assert filters.patient_id == PATIENT_ID
    assert filters.start_date == "2024-03-01"
    assert filters.completed is True
    assert filters.include_cancelled is None


def test_list_sessions_rejects_bad_date(client):
    assert client.get("/api/sessions", params={"startDate": "03/01/2024"}).status_code == 400


def test_create_session(client):
    with patch.object(SessionService, "create_session", new_callable=AsyncMock) as mock_create:
        mock_create.return_value = session_response(amount=500)
        response = client.post(
            "/api/sessions",
            json={"patientId": PATIENT_ID, "date": "2024-03-15", "time": "10:30", "amount": 500},
        )

    assert response.status_code == 201
    session = response.json()["data"]["session"]
    assert session["patientId"] == PATIENT_ID
    assert session["status"] == "pending"
    assert session["completed"] is False and session["cancelled"] is False


def test_create_session_validates_fields(client):
    base = {"patientId": PATIENT_ID, "date": "2024-03-15", "time": "10:30"}
    assert client.post("/api/sessions", json={**base, "patientId": "123"}).status_code == 400
    assert client.post("/api/sessions", json={**base, "date": "2024-02-30"}).status_code == 400
    assert client.post("/api/sessions", json={**base, "time": "7pm"}).status_code == 400
    assert client.post("/api/sessions", json={**base, "amount": -1}).status_code == 400
    assert client.post("/api/sessions", json={**base, "status": "archived"}).status_code == 400


def test_bulk_create(client):
    with patch.object(SessionService, "create_sessions", new_callable=AsyncMock) as mock_bulk:
        mock_bulk.return_value = [session_response(), session_response(date="2024-03-22")]
        response = client.post(
            "/api/sessions/bulk",
            json={"sessions": [
                {"patientId": PATIENT_ID, "date": "2024-03-15", "time": "10:30"},
                {"patientId": PATIENT_ID, "date": "2024-03-22", "time": "10:30"},
            ]},
        )

    assert response.status_code == 201
    assert response.json()["message"] == "2 sessions created successfully"


def test_bulk_create_needs_sessions(client):
    assert client.post("/api/sessions/bulk", json={"sessions": []}).status_code == 400


def test_static_views_are_not_treated_as_ids(client):
    with patch.object(SessionService, "get_today_sessions", new_callable=AsyncMock, return_value=[]), \
            patch.object(SessionService, "get_upcoming_sessions", new_callable=AsyncMock, return_value=[]):
        assert client.get("/api/sessions/today").status_code == 200
        assert client.get("/api/sessions/upcoming").status_code == 200


def test_past_defaults_to_excluding_cancelled(client):
    with patch.object(SessionService, "get_past_sessions", new_callable=AsyncMock, return_value=[]) as mock_past:
        client.get("/api/sessions/past")
        client.get("/api/sessions/past", params={"includeCancelled": "true"})

    assert mock_past.await_args_list[0].kwargs["include_cancelled"] is False
    assert mock_past.await_args_list[1].kwargs["include_cancelled"] is True


def test_malformed_session_id(client):
    for method in ("get", "delete"):
        response = getattr(client, method)("/api/sessions/zzz")
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid session ID format"


def test_update_session(client):
    with patch.object(SessionService, "update_session", new_callable=AsyncMock) as mock_update:
        mock_update.return_value = session_response(status=SessionStatus.CANCELLED, amount=0)
        response = client.put(f"/api/sessions/{SESSION_ID}", json={"cancelled": True})

    assert response.status_code == 200
    assert response.json()["data"]["session"]["amount"] == 0
    update = mock_update.await_args.args[2]
    assert update.model_dump(exclude_unset=True) == {"cancelled": True}


def test_delete_session(client):
    with patch.object(SessionService, "delete_session", new_callable=AsyncMock, return_value=True):
        response = client.delete(f"/api/sessions/{SESSION_ID}")

    assert response.status_code == 200
    assert response.json()["success"] is True


# ============== Upper-case ids ==============

def test_patient_id_filter_is_lower_cased(client):
    with patch.object(SessionService, "get_sessions", new_callable=AsyncMock, return_value=[]) as mock_list:
        response = client.get("/api/sessions", params={"patientId": PATIENT_ID.upper()})

    assert response.status_code == 200
    assert mock_list.await_args.args[1].patient_id == PATIENT_ID


def test_create_session_lower_cases_patient_id(client):
    with patch.object(SessionService, "create_session", new_callable=AsyncMock) as mock_create:
        mock_create.return_value = session_response()
        response = client.post(
            "/api/sessions",
            json={"patientId": PATIENT_ID.upper(), "date": "2024-03-15", "time": "10:30"},
        )

    assert response.status_code == 201
    assert mock_create.await_args.args[1].patient_id == PATIENT_ID


def test_upper_case_session_id_reaches_service_lower_cased(client):
    with patch.object(SessionService, "delete_session", new_callable=AsyncMock, return_value=True) as mock_delete:
        response = client.delete(f"/api/sessions/{SESSION_ID.upper()}")

    assert response.status_code == 200
    mock_delete.assert_awaited_once_with(SESSION_ID, USER_ID)
