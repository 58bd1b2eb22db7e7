"""FastAPI dependencies for sessions, services and the database."""

import logging
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from src.config import Settings, get_settings
from src.database import get_db
from src.services.account_service import AccountService
from src.services.auth import decode_session_token
from src.services.exceptions import AccountError, InternalError, UnauthenticatedError
from src.services.mailer import Mailer, SmtpMailer

logger = logging.getLogger(__name__)


def get_mailer(settings: Annotated[Settings, Depends(get_settings)]) -> Mailer:
    """Get the mailer used for transactional email."""
    return SmtpMailer(settings)


def get_account_service(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    mailer: Annotated[Mailer, Depends(get_mailer)],
) -> AccountService:
    """Get account service with dependencies."""
    return AccountService(db, settings, mailer)


def require_session(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
) -> str:
    """Authenticate the request from its session cookie.

    The verified user id is attached to ``request.state.user_id`` and returned.
    """
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        raise UnauthenticatedError()

    try:
        user_id = decode_session_token(token, settings)
    except AccountError:
        raise
    except Exception as e:
        logger.exception("Session verification failed unexpectedly")
        raise InternalError() from e

    request.state.user_id = user_id
    return user_id
