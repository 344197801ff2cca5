import secrets
from datetime import timedelta
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import settings
from app.core.dates import utcnow


OTP_DIGITS = 6

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(claims: dict, expires_in: Optional[timedelta] = None) -> str:
    """Sign ``claims`` with an ``exp`` of ACCESS_TOKEN_EXPIRE_MINUTES unless given."""
    lifetime = expires_in or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {**claims, "exp": utcnow() + lifetime}
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def create_user_token(email: str, user_id: str) -> str:
    """Bearer token for a therapist; ``sub`` carries the login email."""
    return create_access_token({"sub": email, "user_id": user_id})


def decode_token(token: str) -> Optional[dict]:
    """Verified claims, or None for an expired, tampered or foreign token."""
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None


def token_email(token: str) -> Optional[str]:
    payload = decode_token(token)
    return payload.get("sub") if payload else None


def generate_otp(digits: int = OTP_DIGITS) -> str:
    """Random numeric code without a leading zero."""
    low = 10 ** (digits - 1)
    return str(low + secrets.randbelow(9 * low))


def otp_expiry() -> timedelta:
    return timedelta(minutes=settings.OTP_EXPIRE_MINUTES)
