"""Domain errors raised by the account services.

Each error carries the HTTP status and machine-readable code used by the
exception handlers in ``src.main`` to build the error envelope.
"""

from fastapi import status


class AccountError(Exception):
    """Base class for errors translated into an error response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal_error"
    default_message: str = "Internal Server Error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AccountError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"
    default_message = "Invalid request"


class ConflictError(AccountError):
    status_code = status.HTTP_409_CONFLICT
    code = "conflict"
    default_message = "User already exists"


class NotFoundError(AccountError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "User not found"


class AuthError(AccountError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "auth_error"
    default_message = "Authentication failed"


class InvalidOrExpiredError(AccountError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_or_expired"
    default_message = "Invalid or expired password reset token"


class UnauthenticatedError(AccountError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthenticated"
    default_message = "Authentication failed. No token provided."


class InvalidTokenError(AccountError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "invalid_token"
    default_message = "Invalid token"


class TokenExpiredError(AccountError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "token_expired"
    default_message = "Token expired"


class InternalError(AccountError):
    pass


class MailDeliveryError(Exception):
    """Raised by a mailer when a message could not be handed to the transport."""
