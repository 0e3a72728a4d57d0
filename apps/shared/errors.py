"""
Secure Error Handling

Domain exceptions raised by the services, and the FastAPI handlers that turn
them (and any unexpected failure) into consistent JSON error payloads
without leaking sensitive information.
"""

import logging
import uuid
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base class for errors the services report to callers."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    category = "server_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    category = "validation_error"


class InvalidCredentials(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    category = "invalid_credentials"


class Unauthenticated(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    category = "unauthenticated"


class Forbidden(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    category = "forbidden"


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    category = "not_found"


class ConflictError(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    category = "conflict"


def log_and_sanitize_error(
    error: Exception,
    context: str,
    user_message: Optional[str] = None
) -> tuple[str, str]:
    """
    Log full error details server-side and return sanitized message for client.

    Args:
        error: The exception that occurred
        context: Description of what operation failed (e.g., "GET /posts")
        user_message: Optional custom message to show user. If None, uses generic message.

    Returns:
        Tuple of (sanitized_message, error_id) for client response
    """
    # Generate unique error ID for correlation
    error_id = str(uuid.uuid4())[:8]

    # Log full error server-side
    logger.error(
        f"{context} failed [{error_id}]: {type(error).__name__}: {str(error)}",
        exc_info=error
    )

    # Return sanitized message for client
    if user_message:
        sanitized = f"{user_message} (Error ID: {error_id})"
    else:
        sanitized = f"{context} failed. Please try again later. (Error ID: {error_id})"

    return sanitized, error_id


def error_response(message: str, category: str, status_code: int, headers: Optional[dict] = None) -> JSONResponse:
    """Consistent error payloads across the API."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error": message,
            "category": category,
        },
        headers=headers,
    )


def _category_for_status(status_code: int) -> str:
    if status_code == status.HTTP_401_UNAUTHORIZED:
        return "unauthenticated"
    if status_code == status.HTTP_403_FORBIDDEN:
        return "forbidden"
    if status_code == status.HTTP_404_NOT_FOUND:
        return "not_found"
    if status_code >= 500:
        return "server_error"
    return "client_error"


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    # Drop the leading "body"/"query" element from the location
    location = ".".join(str(part) for part in first.get("loc", ())[1:])
    if location:
        return f"Invalid request: {location}: {first.get('msg')}"
    return f"Invalid request: {first.get('msg')}"


def setup_error_handlers(app: FastAPI) -> None:
    """Register exception handlers mapping errors to JSON responses."""

    @app.exception_handler(ServiceError)
    async def service_exception_handler(request: Request, exc: ServiceError):
        headers = None
        if exc.status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}
        return error_response(exc.message, exc.category, exc.status_code, headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return error_response(
            message=_describe_validation_error(exc),
            category=ValidationError.category,
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        detail = exc.detail
        message = (
            detail.get("message") if isinstance(detail, dict) else str(detail)
        ) or "Request failed."
        return error_response(
            message=message,
            category=_category_for_status(exc.status_code),
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        sanitized_msg, error_id = log_and_sanitize_error(
            exc,
            f"{request.method} {request.url.path}",
            "A database error occurred while processing the request.",
        )
        return error_response(
            message=sanitized_msg,
            category="database",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    @app.exception_handler(Exception)
    async def unexpected_exception_handler(request: Request, exc: Exception):
        sanitized_msg, error_id = log_and_sanitize_error(
            exc,
            f"{request.method} {request.url.path}",
            "An unexpected server error occurred. Please try again later.",
        )
        return error_response(
            message=sanitized_msg,
            category="server_error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
