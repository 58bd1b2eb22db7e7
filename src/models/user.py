"""User model."""

import uuid

from sqlalchemy import Boolean, Column, DateTime, Enum, String

from src.database import Base
from src.models.enums import UserRole
from src.models.mixins import TimestampMixin


def _new_user_id() -> str:
    return str(uuid.uuid4())


class User(Base, TimestampMixin):
    """User account with its verification and password-reset state."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_user_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    phone = Column(String(50), nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(
            UserRole,
            name="userrole",
            values_callable=lambda x: [e.value for e in x],
        ),
        default=UserRole.USER,
        nullable=False,
    )

    # Email verification: token is present only while the account is unverified
    is_verified = Column(Boolean, nullable=False, default=False)
    verification_token = Column(String(64), unique=True, nullable=True)

    # Password reset: token and expiry are always set and cleared together
    password_reset_token = Column(String(64), unique=True, nullable=True)
    password_reset_expires = Column(DateTime(timezone=True), nullable=True)
