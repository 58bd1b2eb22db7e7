"""SQLAlchemy models."""

from src.models.enums import UserRole
from src.models.user import User

__all__ = [
    "User",
    "UserRole",
]
