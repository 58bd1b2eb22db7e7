"""Account request and response schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.models.enums import UserRole

# Request fields are optional so that missing values reach the account service,
# which reports them as a single validation error.


class UserRegister(BaseModel):
    """User registration request."""

    name: str | None = Field(None, max_length=255)
    email: EmailStr | None = None
    password: str | None = Field(None, max_length=128)
    phone: str | None = Field(None, max_length=50)


class UserLogin(BaseModel):
    """User login request."""

    email: EmailStr | None = None
    password: str | None = Field(None, max_length=128)


class ForgotPasswordRequest(BaseModel):
    """Password reset request."""

    email: EmailStr | None = None


class ResetPasswordRequest(BaseModel):
    """New password submitted with a reset token."""

    password: str | None = Field(None, max_length=128)


class MessageResponse(BaseModel):
    """Success envelope without data."""

    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """Error envelope returned for every failed request."""

    success: bool = False
    error: str
    message: str


class UserSummary(BaseModel):
    """Reduced user projection returned on login."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str


class LoginResponse(MessageResponse):
    """Login response with the session token and user summary."""

    token: str
    user: UserSummary


class UserProfile(BaseModel):
    """Non-secret user fields."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    phone: str
    email: str
    role: UserRole
    is_verified: bool
    created_at: datetime
    updated_at: datetime


class ProfileResponse(MessageResponse):
    """Profile response."""

    user: UserProfile
