from pydantic import EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime
from app.shared.schemas import CamelModel


def _normalize_email(v: str) -> str:
    return v.strip().lower() if isinstance(v, str) else v


# Request Schemas
class RegisterRequest(CamelModel):
    """Registration; the email must have been verified by OTP first."""

    email: EmailStr
    phone_number: str = Field(..., min_length=1, max_length=20)
    password: str = Field(..., min_length=6, max_length=100)
    name: Optional[str] = Field(None, max_length=100)
    profile_image: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return _normalize_email(v)

    @field_validator("phone_number")
    @classmethod
    def strip_phone(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Phone number is required")
        return v


class LoginRequest(CamelModel):
    """Login request schema."""

    email: EmailStr
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return _normalize_email(v)


class UpdateProfileRequest(CamelModel):
    """Only the fields sent are changed."""

    email: Optional[EmailStr] = None
    phone_number: Optional[str] = Field(None, max_length=20)
    profile_image: Optional[str] = None
    name: Optional[str] = Field(None, max_length=100)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return _normalize_email(v)


class ForgotPasswordRequest(CamelModel):
    """Forgot password request schema."""

    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return _normalize_email(v)


class ResetPasswordRequest(CamelModel):
    """Reset password with the emailed code."""

    email: EmailStr
    otp: str = Field(..., min_length=6, max_length=6, pattern=r"^\d{6}$")
    new_password: str = Field(..., min_length=6, max_length=100)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return _normalize_email(v)


# Response Schemas
class UserResponse(CamelModel):
    """User response schema; never carries the password hash."""

    id: str
    email: EmailStr
    name: Optional[str] = None
    phone_number: str
    profile_image: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class UserData(CamelModel):
    user: UserResponse


class AuthData(CamelModel):
    """User plus a bearer token, returned by register and login."""

    user: UserResponse
    token: str
    token_type: str = "bearer"
