# OTP Feature - Service

import asyncio
from typing import Optional
from app.config import settings
from app.core.email import send_otp_email
from app.core.logging import logger
from app.core.dates import utcnow
from app.core.security import generate_otp, otp_expiry
from app.features.auth.models import User
from app.features.otp.models import OTP
from app.shared.exceptions import BadRequestException


SIGNUP = "signup"
PASSWORD_RESET = "password_reset"


class OTPService:
    """Issue, check and expire one-time email codes."""

    @staticmethod
    async def issue_otp(email: str, purpose: str = SIGNUP) -> str:
        """
        Create (or replace) the code for ``email`` and mail it.

        A failed delivery is logged; the code stays valid either way.
        """
        otp_code = generate_otp()
        expires_at = utcnow() + otp_expiry()

        otp = await OTP.find_one({"email": email})
        if otp:
            otp.otp_code = otp_code
            otp.expires_at = expires_at
            otp.used = False
            otp.touch()
            await otp.save()
        else:
            otp = OTP(email=email, otp_code=otp_code, expires_at=expires_at)
            await otp.insert()

        logger.info(f"Issued {purpose} OTP for {email}")
        if not await send_otp_email(email, otp_code, purpose):
            logger.error(f"Failed to deliver {purpose} OTP email to {email}")
        return otp_code

    @staticmethod
    async def send_signup_otp(email: str) -> None:
        if await User.find_one({"email": email}):
            raise BadRequestException("User with this email already exists")
        await OTPService.issue_otp(email, SIGNUP)

    @staticmethod
    async def find_live_otp(email: str, otp_code: str) -> Optional[OTP]:
        """Unused, unexpired record matching the email and code."""
        return await OTP.find_one({
            "email": email,
            "otp_code": otp_code,
            "expires_at": {"$gt": utcnow()},
            "used": False,
        })

    @staticmethod
    async def verify_otp(email: str, otp_code: str) -> None:
        """Check the code and mark it used, unlocking registration."""
        otp = await OTPService.find_live_otp(email, otp_code)
        if not otp:
            raise BadRequestException("Invalid or expired OTP")
        otp.used = True
        otp.touch()
        await otp.save()
        logger.info(f"OTP verified for {email}")

    @staticmethod
    async def check_password_reset_otp(email: str, otp_code: str) -> None:
        """Check the code without consuming it; the reset itself consumes it."""
        if not await OTPService.find_live_otp(email, otp_code):
            raise BadRequestException("Invalid or expired OTP")

    @staticmethod
    async def has_recent_verification(email: str) -> bool:
        """
        True when a code for ``email`` was verified and its expiry is no more
        than OTP_EXPIRE_MINUTES in the past.
        """
        window_start = utcnow() - otp_expiry()
        otp = await OTP.find_one({
            "email": email,
            "used": True,
            "expires_at": {"$gt": window_start},
        })
        return otp is not None

    @staticmethod
    async def clear(email: str) -> None:
        await OTP.find({"email": email}).delete()

    @staticmethod
    async def cleanup_expired_otps() -> int:
        """Delete expired and already used codes."""
        result = await OTP.find({
            "$or": [
                {"expires_at": {"$lt": utcnow()}},
                {"used": True},
            ]
        }).delete()
        deleted = result.deleted_count if result else 0
        logger.info(f"Cleaned up {deleted} expired/used OTPs")
        return deleted


async def run_otp_sweep(interval_seconds: Optional[int] = None) -> None:
    """Sweep OTPs now and then every interval until cancelled."""
    interval = interval_seconds or settings.OTP_CLEANUP_INTERVAL_SECONDS
    logger.info(f"OTP sweep started, interval={interval}s")
    while True:
        try:
            await OTPService.cleanup_expired_otps()
        except Exception as e:
            logger.error(f"OTP sweep failed: {type(e).__name__}: {e}")
        await asyncio.sleep(interval)
