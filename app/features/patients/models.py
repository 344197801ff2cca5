# Patient Management Feature - Models

from typing import Optional, Literal
from beanie import Document, Indexed
from pydantic import Field
from app.shared.models import TimestampMixin


Gender = Literal["male", "female", "other"]


class Patient(Document, TimestampMixin):
    """Patient document model. Each patient belongs to exactly one user."""

    # Owner (User._id as hex string)
    user_id: Indexed(str)

    # Personal information
    name: str
    contact_number: Optional[str] = None
    age: int = Field(..., ge=0, le=150)
    gender: Gender

    class Settings:
        name = "patients"
        use_state_management = True
        indexes = [
            [("user_id", 1), ("name", 1)],
            [("user_id", 1), ("created_at", -1)],
        ]

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": "65f1c0a2b4e8d9a1c2b3d4e5",
                "name": "Asha Verma",
                "contact_number": "+91 98765 43210",
                "age": 42,
                "gender": "female",
            }
        }
