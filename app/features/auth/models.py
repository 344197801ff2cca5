from beanie import Document, Indexed
from pydantic import EmailStr, field_validator
from typing import Optional
from app.shared.models import TimestampMixin


class User(Document, TimestampMixin):
    """Therapist account. Owns patients and sessions through ``user_id``."""

    email: Indexed(EmailStr, unique=True)
    password_hash: str
    name: Optional[str] = None
    phone_number: str
    profile_image: Optional[str] = None
    is_active: bool = True

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    class Settings:
        name = "users"
        use_state_management = True

    class Config:
        json_schema_extra = {
            "example": {
                "email": "therapist@example.com",
                "name": "Dr. Meera Rao",
                "phone_number": "+91 98765 43210",
            }
        }
