"""Pydantic schemas for API request/response validation."""

from src.schemas.auth import (
    ErrorResponse,
    ForgotPasswordRequest,
    LoginResponse,
    MessageResponse,
    ProfileResponse,
    ResetPasswordRequest,
    UserLogin,
    UserProfile,
    UserRegister,
    UserSummary,
)

__all__ = [
    "ErrorResponse",
    "ForgotPasswordRequest",
    "LoginResponse",
    "MessageResponse",
    "ProfileResponse",
    "ResetPasswordRequest",
    "UserLogin",
    "UserProfile",
    "UserRegister",
    "UserSummary",
]
