"""
Shared pytest fixtures.

Nothing here talks to MongoDB: Beanie documents can't be constructed before
``init_beanie``, so tests stand in plain namespaces for stored documents and
patch the document classes or service methods that would hit the database.
"""

import os
import sys
from datetime import date, datetime
from types import SimpleNamespace

import pytest

# Add the project root to Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from app.features.sessions.models import SessionStatus


USER_ID = "65f1c0a2b4e8d9a1c2b3d4e5"
PATIENT_ID = "65f1c0a2b4e8d9a1c2b3d4f6"
SESSION_ID = "65f1c0a2b4e8d9a1c2b3d4f7"
TODAY = date(2024, 3, 15)
STAMP = datetime(2024, 3, 1, 9, 0, 0)


def stored_session(**overrides):
    """Something shaped like a loaded Session document."""
    fields = dict(
        id=SESSION_ID,
        user_id=USER_ID,
        patient_id=PATIENT_ID,
        patient_name="Asha Verma",
        date="2024-03-15",
        time="10:30",
        notes="",
        status=SessionStatus.PENDING,
        amount=None,
        created_at=STAMP,
        updated_at=STAMP,
    )
    fields.update(overrides)
    doc = SimpleNamespace(**fields)
    doc.completed = doc.status == SessionStatus.COMPLETED
    doc.cancelled = doc.status == SessionStatus.CANCELLED
    return doc


def stored_patient(**overrides):
    fields = dict(
        id=PATIENT_ID,
        user_id=USER_ID,
        name="Asha Verma",
        contact_number="+91 98765 43210",
        age=42,
        gender="female",
        created_at=STAMP,
        updated_at=STAMP,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


@pytest.fixture
def current_user():
    return SimpleNamespace(
        id=USER_ID,
        email="therapist@example.com",
        name="Meera Rao",
        phone_number="+91 90000 00000",
        profile_image=None,
        is_active=True,
        created_at=STAMP,
        updated_at=STAMP,
    )


@pytest.fixture
def client(current_user):
    """TestClient authenticated as ``current_user``; the lifespan (DB) is not run."""
    from fastapi.testclient import TestClient
    from app.main import app
    from app.features.auth.dependencies import get_current_user

    app.dependency_overrides[get_current_user] = lambda: current_user
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client():
    from fastapi.testclient import TestClient
    from app.main import app

    app.dependency_overrides.clear()
    return TestClient(app)
