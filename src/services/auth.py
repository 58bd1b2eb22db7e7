"""Credential primitives: password hashing, random tokens and session JWTs."""

import secrets
from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from src.config import Settings
from src.services.exceptions import InvalidTokenError, TokenExpiredError

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

TOKEN_BYTES = 32


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def generate_token() -> str:
    """Generate an opaque single-use token (256 bits, hex encoded)."""
    return secrets.token_hex(TOKEN_BYTES)


def create_session_token(user_id: str, settings: Settings) -> str:
    """Create a signed session token carrying only the user id."""
    expire = datetime.now(UTC) + timedelta(hours=settings.session_expiration_hours)
    to_encode = {
        "sub": str(user_id),
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_session_token(token: str, settings: Settings) -> str:
    """Verify a session token and return the user id it was issued for.

    Raises TokenExpiredError when the signature is valid but the token has
    expired, and InvalidTokenError for any other verification failure.
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError as e:
        raise TokenExpiredError() from e
    except JWTError as e:
        raise InvalidTokenError() from e

    user_id = payload.get("sub")
    if not user_id:
        raise InvalidTokenError()
    return user_id
