"""Account service: registration, verification, login and password reset."""

import logging
from datetime import UTC, datetime, timedelta

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.config import Settings
from src.models.user import User
from src.schemas.auth import UserProfile
from src.services.auth import (
    create_session_token,
    generate_token,
    get_password_hash,
    verify_password,
)
from src.services.exceptions import (
    AuthError,
    ConflictError,
    InternalError,
    InvalidOrExpiredError,
    MailDeliveryError,
    NotFoundError,
    ValidationError,
)
from src.services.mailer import Mailer, build_password_reset_email, build_verification_email

logger = logging.getLogger(__name__)

PROFILE_COLUMNS = (
    User.id,
    User.name,
    User.phone,
    User.email,
    User.role,
    User.is_verified,
    User.created_at,
    User.updated_at,
)


def utcnow() -> datetime:
    return datetime.now(UTC)


class AccountService:
    """Service for the user account lifecycle."""

    def __init__(self, db: Session, settings: Settings, mailer: Mailer):
        self.db = db
        self.settings = settings
        self.mailer = mailer

    def get_user_by_email(self, email: str) -> User | None:
        """Get a user by email."""
        return self.db.query(User).filter(User.email == email).first()

    def register(self, name: str | None, email: str | None, password: str | None, phone: str | None) -> User:
        """
        Create an unverified user and send the verification email.

        The email is sent best-effort: a delivery failure is logged and the
        registration still succeeds.
        """
        if not name or not email or not password or not phone:
            raise ValidationError("Please fill in all fields")

        if self.get_user_by_email(email):
            raise ConflictError("User already exists")

        verification_token = generate_token()
        user = User(
            name=name,
            email=email,
            phone=phone,
            password_hash=get_password_hash(password),
            verification_token=verification_token,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            # Lost a race against a concurrent registration for the same email
            self.db.rollback()
            raise ConflictError("User already exists") from e
        self.db.refresh(user)
        logger.info(f"Registered user {user.id}")

        link = self.settings.build_link(f"/verify/{verification_token}")
        subject, text, html = build_verification_email(user.name, link)
        try:
            self.mailer.send(user.email, subject, text, html)
        except MailDeliveryError as e:
            logger.warning(f"Verification email for user {user.id} not sent: {e}")

        return user

    def verify(self, token: str | None) -> None:
        """Mark the user holding this verification token as verified.

        Unknown and already-consumed tokens are reported the same way.
        """
        if not token:
            raise ValidationError("Invalid token")

        updated = (
            self.db.query(User)
            .filter(User.verification_token == token)
            .update(
                {User.is_verified: True, User.verification_token: None},
                synchronize_session=False,
            )
        )
        if not updated:
            self.db.rollback()
            raise NotFoundError("User not found or already verified")
        self.db.commit()
        logger.info("User email verified")

    def login(self, email: str | None, password: str | None) -> tuple[str, User]:
        """Check credentials and issue a session token."""
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = self.get_user_by_email(email)
        if not user:
            raise NotFoundError("User not found")

        if not verify_password(password, user.password_hash):
            raise AuthError("Invalid password")

        if not user.is_verified:
            raise AuthError("User is not verified")

        token = create_session_token(user.id, self.settings)
        logger.info(f"User {user.id} logged in")
        return token, user

    def get_profile(self, user_id: str) -> UserProfile:
        """Get the non-secret fields of a user."""
        row = self.db.query(*PROFILE_COLUMNS).filter(User.id == user_id).first()
        if row is None:
            raise NotFoundError("User not found")
        return UserProfile.model_validate(row._asdict())

    def forgot_password(self, email: str | None) -> None:
        """
        Issue a password reset token and email the reset link.

        Unlike registration, a delivery failure fails the request.
        """
        if not email:
            raise ValidationError("Email is required")

        user = self.get_user_by_email(email)
        if not user:
            raise NotFoundError("User not found")

        reset_token = generate_token()
        expires_minutes = self.settings.password_reset_expiration_minutes
        user.password_reset_token = reset_token
        user.password_reset_expires = utcnow() + timedelta(minutes=expires_minutes)
        self.db.commit()
        logger.info(f"Password reset requested for user {user.id}")

        link = self.settings.build_link(f"/reset-password/{reset_token}")
        subject, text, html = build_password_reset_email(user.name, link, expires_minutes)
        try:
            self.mailer.send(user.email, subject, text, html)
        except MailDeliveryError as e:
            logger.error(f"Password reset email for user {user.id} not sent: {e}")
            raise InternalError() from e

    def reset_password(self, reset_token: str | None, password: str | None) -> None:
        """Replace the password of the user holding an unexpired reset token.

        A wrong token and an expired one produce the same error.
        """
        if not reset_token or not password:
            raise ValidationError("Please provide both password and reset token")

        password_hash = get_password_hash(password)
        updated = (
            self.db.query(User)
            .filter(
                User.password_reset_token == reset_token,
                User.password_reset_expires > utcnow(),
            )
            .update(
                {
                    User.password_hash: password_hash,
                    User.password_reset_token: None,
                    User.password_reset_expires: None,
                },
                synchronize_session=False,
            )
        )
        if not updated:
            self.db.rollback()
            raise InvalidOrExpiredError("Invalid or expired password reset token")
        self.db.commit()
        logger.info("Password reset completed")
