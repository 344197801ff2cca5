from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional
from app.features.auth.models import User
from app.features.auth.service import AuthService
from app.core.security import token_email
from app.shared.exceptions import CredentialsException


# HTTP Bearer security scheme; a missing header is reported by us, not by FastAPI
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> User:
    """
    Dependency to get current authenticated user.

    Args:
        credentials: HTTP Bearer credentials

    Returns:
        User: Current authenticated user

    Raises:
        CredentialsException: If the token is missing, invalid or expired
    """
    if credentials is None:
        raise CredentialsException("No token provided")

    email = token_email(credentials.credentials)
    if email is None:
        raise CredentialsException("Invalid token")

    user = await AuthService.get_user_by_email(email)
    if user is None:
        raise CredentialsException("User not found")

    if not user.is_active:
        raise CredentialsException("Inactive user")

    return user
