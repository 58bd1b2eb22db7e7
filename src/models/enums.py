"""Enums for model fields."""

from enum import Enum


class UserRole(str, Enum):
    """Authorization tag assigned to a user."""

    USER = "user"
    ADMIN = "admin"
