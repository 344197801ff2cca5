# OTP Feature - Schemas

from pydantic import EmailStr, Field, field_validator
from app.shared.schemas import CamelModel


class SendOtpRequest(CamelModel):
    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class VerifyOtpRequest(CamelModel):
    """Email plus the 6 digit code that was mailed to it."""

    email: EmailStr
    otp: str = Field(..., min_length=6, max_length=6)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("otp")
    @classmethod
    def validate_otp(cls, v: str) -> str:
        v = v.strip()
        if not v.isdigit():
            raise ValueError("OTP code must be numeric")
        return v
