"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api import users
from src.config import get_settings
from src.database import init_db
from src.schemas.auth import ErrorResponse
from src.services.exceptions import AccountError, InternalError, ValidationError

settings = get_settings()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if settings.auto_create_tables:
        init_db()
    yield


app = FastAPI(
    title="User Accounts API",
    description="Registration, email verification, login and password reset",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.base_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

# Register routers
app.include_router(users.router)


def _route_path(request: Request) -> str:
    # Route template, so tokens in path parameters stay out of the logs
    route = request.scope.get("route")
    return getattr(route, "path", "<unmatched>")


def _error_response(error: AccountError) -> JSONResponse:
    body = ErrorResponse(error=error.code, message=error.message)
    return JSONResponse(status_code=error.status_code, content=body.model_dump())


@app.exception_handler(AccountError)
async def handle_account_error(request: Request, exc: AccountError):
    """Translate domain errors into the error envelope."""
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"{request.method} {_route_path(request)} failed: {exc.message}")
    return _error_response(exc)


HTTP_ERROR_CODES = {
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
}


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    """Wrap routing errors such as unknown paths in the error envelope."""
    body = ErrorResponse(
        error=HTTP_ERROR_CODES.get(exc.status_code, "http_error"),
        message=str(exc.detail),
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(),
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    """Report malformed request bodies as validation errors."""
    fields = {".".join(str(part) for part in err["loc"][1:]) for err in exc.errors()}
    fields = sorted(fields - {""})
    message = f"Invalid value for: {', '.join(fields)}" if fields else "Invalid request body"
    return _error_response(ValidationError(message))


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    """Log unexpected failures and hide their details from the caller."""
    logger.exception(f"Unhandled error on {request.method} {_route_path(request)}", exc_info=exc)
    return _error_response(InternalError())


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
