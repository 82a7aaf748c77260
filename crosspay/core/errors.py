"""
Centralized error handling.

This module defines the CrossPay exception taxonomy and the FastAPI
exception handlers that turn every failure into the uniform
``{"success": false, "error": ..., "details": ...}`` JSON body.
"""
import logging
import traceback
from typing import Any

from fastapi.exceptions import RequestValidationError
from fastapi.requests import Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from crosspay.core.config import settings

logger = logging.getLogger(__name__)


class ErrorResponse(BaseModel):
    """Standardized error response model."""
    success: bool = False
    error: str
    details: str | None = None
    message: str | None = None


class CrossPayError(Exception):
    """Base exception for CrossPay application errors."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: str | None = None,
        details: str | None = None,
        hint: str | None = None,
    ):
        """
        Initialize the CrossPay error.

        Args:
            message: User-facing error message
            details: Optional additional detail shown to the caller
            hint: Optional longer explanation shown to the caller
        """
        self.message = message or self.default_message
        self.details = details
        self.hint = hint
        super().__init__(self.message)


class ValidationError(CrossPayError, ValueError):
    """Malformed or missing input."""

    status_code = 400
    default_message = "Validation error"


class NotFoundError(CrossPayError):
    """Unknown payment link."""

    status_code = 404
    default_message = "Payment link not found"


class InvalidStateError(CrossPayError):
    """Payment link is not pending any more."""

    status_code = 400
    default_message = "Payment link is no longer active"


class ExpiredError(CrossPayError):
    """Payment link is past its expiry."""

    status_code = 400
    default_message = "Payment link has expired"


class ForbiddenError(CrossPayError):
    """Requesting wallet is not the designated recipient."""

    status_code = 403
    default_message = "You are not the authorized recipient for this payment"


class StoreError(CrossPayError):
    """Database failure."""

    status_code = 500
    default_message = "Database error occurred"


def create_error_response(
    status_code: int,
    error: str,
    details: str | None = None,
    message: str | None = None,
) -> JSONResponse:
    """
    Create a standardized JSON error response.

    Args:
        status_code: HTTP status code
        error: Main error message
        details: Optional additional detail
        message: Optional longer explanation

    Returns:
        JSONResponse with error information
    """
    error_response = ErrorResponse(error=error, details=details, message=message)

    if status_code >= 500:
        logger.error(f"Error {status_code}: {error} - {details}")
    else:
        logger.warning(f"Error {status_code}: {error} - {details}")

    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(exclude_none=True),
    )


async def crosspay_exception_handler(
    request: Request, exc: CrossPayError
) -> JSONResponse:
    """Handle errors raised by the services."""
    return create_error_response(
        status_code=exc.status_code,
        error=exc.message,
        details=exc.details,
        message=exc.hint,
    )


def _first_validation_message(errors: list[dict[str, Any]]) -> str | None:
    if not errors:
        return None
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "")
    return f"{location}: {message}" if location else message


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies and query strings as 400."""
    return create_error_response(
        status_code=400,
        error=ValidationError.default_message,
        details=_first_validation_message(list(exc.errors())),
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """
    Handle HTTPException globally.

    Unknown routes and unsupported methods on known paths both surface
    as 404 ``Route not found``.
    """
    if (exc.status_code, exc.detail) in ((404, "Not Found"), (405, "Method Not Allowed")):
        return create_error_response(status_code=404, error="Route not found")

    return create_error_response(
        status_code=exc.status_code,
        error=str(exc.detail),
    )


async def general_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """
    Handle all other exceptions globally.

    Args:
        request: The request that caused the exception
        exc: The exception that was raised

    Returns:
        JSONResponse with a generic 500 body
    """
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: {exc}",
        exc_info=True,
    )

    if settings.debug:
        detail = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    else:
        # In production, don't leak implementation details
        detail = None

    return create_error_response(
        status_code=500,
        error="Internal server error",
        details=detail,
    )
