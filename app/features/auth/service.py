from typing import Optional, Tuple
from app.features.auth.models import User
from app.features.auth.schemas import (
    RegisterRequest,
    LoginRequest,
    UpdateProfileRequest,
    ResetPasswordRequest,
    UserResponse,
)
from app.features.otp.service import OTPService, PASSWORD_RESET
from app.core.security import (
    verify_password,
    get_password_hash,
    create_user_token,
)
from app.shared.exceptions import (
    BadRequestException,
    NotFoundException,
    CredentialsException,
)
from app.core.logging import logger


class AuthService:
    """Authentication service for handling auth business logic."""

    @staticmethod
    def user_to_response(user: User) -> UserResponse:
        return UserResponse(
            id=str(user.id),
            email=user.email,
            name=user.name,
            phone_number=user.phone_number,
            profile_image=user.profile_image,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    @staticmethod
    def issue_token(user: User) -> str:
        return create_user_token(user.email, str(user.id))

    @staticmethod
    async def register(request: RegisterRequest) -> Tuple[User, str]:
        """
        Create an account for an email that was verified by OTP.

        Returns:
            tuple: (user, access_token)
        """
        if await User.find_one({"email": request.email}):
            raise BadRequestException("Email already registered")

        if not await OTPService.has_recent_verification(request.email):
            raise BadRequestException("Please verify your email with OTP first")

        user = User(
            email=request.email,
            password_hash=get_password_hash(request.password),
            name=request.name,
            phone_number=request.phone_number,
            profile_image=request.profile_image,
        )
        await user.insert()

        await OTPService.clear(request.email)
        logger.info(f"Registered user {user.id} ({user.email})")

        return user, AuthService.issue_token(user)

    @staticmethod
    async def login(login_data: LoginRequest) -> Tuple[User, str]:
        """
        Authenticate user and return access token.

        Returns:
            tuple: (user, access_token)
        """
        user = await User.find_one({"email": login_data.email})
        if not user:
            raise CredentialsException("Invalid email or password")

        if not verify_password(login_data.password, user.password_hash):
            raise CredentialsException("Invalid email or password")

        if not user.is_active:
            raise CredentialsException("Account is inactive")

        return user, AuthService.issue_token(user)

    @staticmethod
    async def update_profile(user: User, request: UpdateProfileRequest) -> User:
        """
        Update user profile information.

        Empty strings are ignored for email and phone number; an explicit
        null clears the profile image.
        """
        update_data = request.model_dump(exclude_unset=True)

        new_email = update_data.get("email")
        if new_email and new_email != user.email:
            if await User.find_one({"email": new_email}):
                raise BadRequestException("Email already registered")
            user.email = new_email
        if update_data.get("phone_number"):
            user.phone_number = update_data["phone_number"].strip()
        if update_data.get("name") is not None:
            user.name = update_data["name"].strip() or user.name
        if "profile_image" in update_data:
            user.profile_image = update_data["profile_image"]

        user.touch()
        await user.save()
        logger.info(f"Updated profile of user {user.id} fields={sorted(update_data)}")
        return user

    @staticmethod
    async def forgot_password(email: str) -> None:
        """Mail a password-reset code to an existing account."""
        if not await User.find_one({"email": email}):
            raise NotFoundException("User not found")
        await OTPService.issue_otp(email, PASSWORD_RESET)

    @staticmethod
    async def reset_password(request: ResetPasswordRequest) -> None:
        """Consume the reset code and replace the password hash."""
        user = await User.find_one({"email": request.email})
        if not user:
            raise NotFoundException("User not found")

        otp = await OTPService.find_live_otp(request.email, request.otp)
        if not otp:
            raise BadRequestException("Invalid or expired OTP")

        user.password_hash = get_password_hash(request.new_password)
        user.touch()
        await user.save()

        await OTPService.clear(request.email)
        logger.info(f"Password reset for user {user.id}")

    @staticmethod
    async def get_user_by_email(email: str) -> Optional[User]:
        """Get user by email."""
        return await User.find_one({"email": email.lower()})
