"""
Centralized error handling.

Every error leaves the API as ``{"error": "<message>"}`` with a 400/401/404 status.
"""
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base application error."""
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing input."""
    def __init__(self, message: str = "Please check your input and try again."):
        super().__init__(message, status_code=400)


class DuplicateEmailError(ValidationError):
    def __init__(self, message: str = "Email already registered"):
        super().__init__(message)


class InvalidCredentialsError(ValidationError):
    def __init__(self, message: str = "Invalid password"):
        super().__init__(message)


class UserNotFoundError(ValidationError):
    """Login with an unknown email. Reported as 400 like the other auth failures."""
    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class NotFoundError(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class UnauthorizedError(AppError):
    """Missing or invalid bearer token."""
    def __init__(self, message: str = "Invalid token"):
        super().__init__(message, status_code=401)


def create_error_response(status_code: int, message: str) -> JSONResponse:
    """Create a standardized error response."""
    return JSONResponse(status_code=status_code, content={"error": message})


def storage_error_message(error: SQLAlchemyError) -> str:
    """Raw message of the underlying driver error, without SQLAlchemy's statement dump."""
    root = getattr(error, "orig", None)
    return str(root) if root is not None else str(error)


def format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc)
        msg = err.get("msg", "invalid value")
        parts.append(f"{field}: {msg}" if field else msg)
    return "; ".join(parts) or "Please check your input and try again."


async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code == 401:
        logger.warning("Unauthorized %s %s: %s", request.method, request.url.path, exc.message)
    return create_error_response(exc.status_code, exc.message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return create_error_response(exc.status_code, str(exc.detail))


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    message = format_validation_errors(exc)
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, message)
    return create_error_response(400, message)


async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError):
    """Storage faults and constraint violations both surface as 400 with the raw message."""
    logger.exception("Database error on %s %s: %s", request.method, request.url.path, exc)
    return create_error_response(400, storage_error_message(exc))


async def unhandled_exception_handler(request: Request, exc: Exception):
    """Anything else, e.g. a driver rejecting an out-of-range id, is reported like a storage fault."""
    logger.exception("Unhandled exception on %s %s: %s", request.method, request.url.path, exc)
    return create_error_response(400, str(exc) or exc.__class__.__name__)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
