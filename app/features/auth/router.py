from fastapi import APIRouter, Depends, status
from app.features.auth.schemas import (
    RegisterRequest,
    LoginRequest,
    UpdateProfileRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    UserData,
    AuthData,
)
from app.features.auth.service import AuthService
from app.features.auth.dependencies import get_current_user
from app.features.auth.models import User
from app.shared.schemas import BaseResponse


router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=BaseResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest):
    """
    Register a new account.

    - **email**: Must have been verified via /otp/verify in the last 10 minutes
    - **phoneNumber**: Contact number
    - **password**: At least 6 characters
    - **name**, **profileImage**: Optional
    """
    user, token = await AuthService.register(request)
    return BaseResponse(
        message="User registered successfully",
        data=AuthData(user=AuthService.user_to_response(user), token=token),
    )


@router.post("/login", response_model=BaseResponse)
async def login(request: LoginRequest):
    """Authenticate with email and password."""
    user, token = await AuthService.login(request)
    return BaseResponse(
        message="Login successful",
        data=AuthData(user=AuthService.user_to_response(user), token=token),
    )


@router.get("/profile", response_model=BaseResponse)
async def get_profile(current_user: User = Depends(get_current_user)):
    return BaseResponse(data=UserData(user=AuthService.user_to_response(current_user)))


@router.put("/profile", response_model=BaseResponse)
async def update_profile(
    request: UpdateProfileRequest,
    current_user: User = Depends(get_current_user)
):
    """Update email, phone number, name or profile image."""
    user = await AuthService.update_profile(current_user, request)
    return BaseResponse(
        message="Profile updated successfully",
        data=UserData(user=AuthService.user_to_response(user)),
    )


@router.post("/forgot-password", response_model=BaseResponse)
async def forgot_password(request: ForgotPasswordRequest):
    """Email a password reset code to an existing account."""
    await AuthService.forgot_password(request.email)
    return BaseResponse(message="Password reset OTP sent successfully")


@router.post("/reset-password", response_model=BaseResponse)
async def reset_password(request: ResetPasswordRequest):
    """Set a new password using the emailed code."""
    await AuthService.reset_password(request)
    return BaseResponse(message="Password reset successfully")
