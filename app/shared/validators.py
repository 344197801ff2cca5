"""Field format checks shared by request schemas and routers."""

import re
from datetime import date

from bson import ObjectId

from app.shared.exceptions import BadRequestException


OBJECT_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")
DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_RE = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")

DATE_PATTERN = DATE_RE.pattern
OBJECT_ID_PATTERN = OBJECT_ID_RE.pattern


def is_valid_object_id(value: str) -> bool:
    return bool(OBJECT_ID_RE.match(value or ""))


def is_valid_date(value: str) -> bool:
    """YYYY-MM-DD and a real calendar day."""
    if not DATE_RE.match(value or ""):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def is_valid_time(value: str) -> bool:
    """HH:MM, 24-hour clock."""
    return bool(TIME_RE.match(value or ""))


def canonical_object_id(value: str) -> str:
    """Lower-case hex form, the way ids are stored and returned."""
    return str(ObjectId(value))


def ensure_object_id(value: str, label: str = "resource") -> str:
    """Reject malformed identifiers before they reach the database."""
    if not is_valid_object_id(value):
        raise BadRequestException(f"Invalid {label} ID format")
    return canonical_object_id(value)


def check_object_id(value: str, label: str = "patient") -> str:
    if not is_valid_object_id(value):
        raise ValueError(f"Invalid {label} ID format")
    return canonical_object_id(value)


def check_date(value: str) -> str:
    if not is_valid_date(value):
        raise ValueError("date must be a valid YYYY-MM-DD date")
    return value


def check_time(value: str) -> str:
    if not is_valid_time(value):
        raise ValueError("time must be in HH:MM (24-hour) format")
    return value
