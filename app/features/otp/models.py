# OTP Feature - Models

from datetime import datetime
from beanie import Document, Indexed
from pydantic import EmailStr
from pymongo import ASCENDING, IndexModel
from app.shared.models import TimestampMixin


class OTP(Document, TimestampMixin):
    """
    One-time email code. At most one live record per email; issuing a new
    code overwrites the previous one.
    """

    email: Indexed(EmailStr)
    otp_code: str
    expires_at: datetime
    used: bool = False

    class Settings:
        name = "otps"
        use_state_management = True
        indexes = [
            # MongoDB removes the document once expires_at has passed
            IndexModel([("expires_at", ASCENDING)], expireAfterSeconds=0),
        ]
