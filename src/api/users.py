"""User account API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from src.api.dependencies import get_account_service, require_session
from src.config import Settings, get_settings
from src.schemas.auth import (
    ForgotPasswordRequest,
    LoginResponse,
    MessageResponse,
    ProfileResponse,
    ResetPasswordRequest,
    UserLogin,
    UserRegister,
    UserSummary,
)
from src.services.account_service import AccountService

settings = get_settings()

router = APIRouter(prefix=settings.api_prefix, tags=["users"])


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    service: Annotated[AccountService, Depends(get_account_service)],
):
    """Register a new user and send the verification email."""
    service.register(user_data.name, user_data.email, user_data.password, user_data.phone)
    return MessageResponse(message="User registered successfully.")


@router.get("/verify", response_model=MessageResponse)
@router.get("/verify/", response_model=MessageResponse)
def verify_without_token(
    service: Annotated[AccountService, Depends(get_account_service)],
):
    """Reject a verification link that carries no token."""
    service.verify("")
    return MessageResponse(message="Verification successful. You can now log in.")


@router.get("/verify/{token}", response_model=MessageResponse)
def verify(
    token: str,
    service: Annotated[AccountService, Depends(get_account_service)],
):
    """Confirm an email address with its verification token."""
    service.verify(token)
    return MessageResponse(message="Verification successful. You can now log in.")


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: UserLogin,
    response: Response,
    service: Annotated[AccountService, Depends(get_account_service)],
):
    """Login with email and password; the session token is also set as a cookie."""
    token, user = service.login(credentials.email, credentials.password)

    response.set_cookie(
        key=service.settings.session_cookie_name,
        value=token,
        max_age=service.settings.session_max_age_seconds,
        httponly=True,
        secure=service.settings.is_production,
    )

    return LoginResponse(
        message="User logged in successfully",
        token=token,
        user=UserSummary.model_validate(user),
    )


@router.get("/me", response_model=ProfileResponse)
def get_me(
    user_id: Annotated[str, Depends(require_session)],
    service: Annotated[AccountService, Depends(get_account_service)],
):
    """Get current user profile."""
    profile = service.get_profile(user_id)
    return ProfileResponse(message="User profile retrieved successfully", user=profile)


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Logout by clearing the session cookie."""
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.is_production,
    )
    return MessageResponse(message="Logged out successfully")


@router.post("/forgot-password", response_model=MessageResponse)
def forgot_password(
    request_data: ForgotPasswordRequest,
    service: Annotated[AccountService, Depends(get_account_service)],
):
    """Email a password reset link."""
    service.forgot_password(request_data.email)
    return MessageResponse(message="Password reset email sent successfully")


@router.post("/reset-password/{reset_token}", response_model=MessageResponse)
def reset_password(
    reset_token: str,
    request_data: ResetPasswordRequest,
    service: Annotated[AccountService, Depends(get_account_service)],
):
    """Set a new password using a reset token."""
    service.reset_password(reset_token, request_data.password)
    return MessageResponse(message="Password reset successfully")
