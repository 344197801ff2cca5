"""Tests for session status resolution and legacy record mapping."""

import pytest

from app.features.sessions.models import Session, SessionStatus
from app.features.sessions.service import legacy_status_backfill, resolve_status


@pytest.mark.parametrize(
    "completed,cancelled,expected",
    [
        (False, False, SessionStatus.PENDING),
        (True, False, SessionStatus.COMPLETED),
        (False, True, SessionStatus.CANCELLED),
        (True, True, SessionStatus.CANCELLED),
    ],
)
def test_from_flags(completed, cancelled, expected):
    assert SessionStatus.from_flags(completed, cancelled) == expected


def test_only_pending_is_open():
    assert SessionStatus.PENDING.is_open
    assert not SessionStatus.COMPLETED.is_open
    assert not SessionStatus.CANCELLED.is_open


def test_legacy_flags_mapped_on_read():
    mapped = Session.map_legacy_flags({"date": "2024-03-15", "completed": True, "cancelled": True})
    assert mapped["status"] == SessionStatus.CANCELLED
    assert "completed" not in mapped and "cancelled" not in mapped


def test_status_field_wins_over_flags():
    data = {"status": "completed", "cancelled": True}
    assert Session.map_legacy_flags(data) is data


@pytest.mark.parametrize(
    "current,completed,cancelled,expected",
    [
        (SessionStatus.PENDING, True, None, SessionStatus.COMPLETED),
        (SessionStatus.PENDING, None, True, SessionStatus.CANCELLED),
        (SessionStatus.COMPLETED, False, None, SessionStatus.PENDING),
        (SessionStatus.CANCELLED, False, None, SessionStatus.CANCELLED),
        (SessionStatus.CANCELLED, None, False, SessionStatus.PENDING),
        (SessionStatus.COMPLETED, None, False, SessionStatus.COMPLETED),
        (SessionStatus.COMPLETED, True, True, SessionStatus.CANCELLED),
        (SessionStatus.CANCELLED, False, False, SessionStatus.PENDING),
        (SessionStatus.PENDING, None, None, SessionStatus.PENDING),
    ],
)
def test_resolve_status(current, completed, cancelled, expected):
    assert resolve_status(current, completed=completed, cancelled=cancelled) == expected


def test_backfill_converts_cancelled_first_and_zeroes_amount():
    steps = legacy_status_backfill()
    first_filter, first_update = steps[0]
    assert first_filter == {"status": {"$exists": False}, "cancelled": True}
    assert first_update["$set"] == {"status": "cancelled", "amount": 0}

    # Last step catches everything still without a status
    assert steps[-1][0] == {"status": {"$exists": False}}
    assert steps[-1][1]["$set"] == {"status": "pending"}
    for _, update in steps:
        assert update["$unset"] == {"completed": "", "cancelled": ""}
