# OTP Feature - Router

from fastapi import APIRouter
from app.features.otp.schemas import SendOtpRequest, VerifyOtpRequest
from app.features.otp.service import OTPService
from app.shared.schemas import BaseResponse


router = APIRouter(prefix="/otp", tags=["OTP"])


@router.post("/send", response_model=BaseResponse)
async def send_otp(request: SendOtpRequest):
    """
    Email a 6 digit sign-up code.

    Fails with 400 if the email already belongs to an account.
    """
    await OTPService.send_signup_otp(request.email)
    return BaseResponse(message="OTP sent successfully")


@router.post("/verify", response_model=BaseResponse)
async def verify_otp(request: VerifyOtpRequest):
    """Verify a sign-up code. Registration must follow within 10 minutes."""
    await OTPService.verify_otp(request.email, request.otp)
    return BaseResponse(message="OTP verified successfully")


@router.post("/verify-password-reset", response_model=BaseResponse)
async def verify_password_reset_otp(request: VerifyOtpRequest):
    # Does not consume the code; /auth/reset-password does
    await OTPService.check_password_reset_otp(request.email, request.otp)
    return BaseResponse(message="OTP verified successfully")
