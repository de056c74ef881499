"""Standardized error handling for the availability engine and its API.

This module provides:
1. Custom exception classes, including the engine's precondition and
   recurrence failures
2. Exception handlers for FastAPI
3. Standard error response models

Usage:
    from flock.errors import InvalidIntervalError

    if interval.start >= interval.end:
        raise InvalidIntervalError(detail="Interval must end after it starts", index=3)

    # Register handlers in main.py:
    from flock.errors import register_exception_handlers
    register_exception_handlers(app)
"""

import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str
    detail: str | None = None
    error_code: str | None = None
    context: dict[str, Any] | None = None


class APIError(Exception):
    """Base class for API errors."""

    status_code: int = 500
    error: str = "internal_error"
    detail: str = "An unexpected error occurred"

    def __init__(
        self,
        detail: str | None = None,
        error_code: str | None = None,
        **context: Any,
    ) -> None:
        self.detail = detail or self.__class__.detail
        self.error_code = error_code
        self.context = context if context else None
        super().__init__(self.detail)

    def to_response(self) -> ErrorResponse:
        """Convert exception to error response model."""
        return ErrorResponse(
            error=self.error,
            detail=self.detail,
            error_code=self.error_code,
            context=self.context,
        )


class BadRequestError(APIError):
    """Bad request error (400)."""

    status_code = 400
    error = "bad_request"
    detail = "Invalid request"


class AvailabilityError(APIError):
    """Base class for errors raised by the availability engine."""

    status_code = 422
    error = "availability_error"
    detail = "Availability could not be computed"


class InvalidIntervalError(BadRequestError):
    """An interval or grid definition violates its preconditions (400)."""

    error = "invalid_interval"
    detail = "Interval must end after it starts"


class InvalidEventError(BadRequestError):
    """A calendar event is malformed (400)."""

    error = "invalid_event"
    detail = "Calendar event is malformed"


class RecurrenceExpansionError(AvailabilityError):
    """A recurrence rule failed while expanding occurrences (422)."""

    error = "recurrence_expansion_error"
    detail = "Recurrence rule could not be expanded"


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle custom API errors."""
    logger.warning(
        "API error: %s (status=%d, path=%s)",
        exc.detail,
        exc.status_code,
        request.url.path,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(mode="json", exclude_none=True),
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI HTTPExceptions with standard format."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=_status_to_error_type(exc.status_code),
            detail=str(exc.detail),
        ).model_dump(exclude_none=True),
    )


def _status_to_error_type(status_code: int) -> str:
    """Map HTTP status code to error type string."""
    mapping = {
        400: "bad_request",
        404: "not_found",
        405: "method_not_allowed",
        422: "validation_error",
        500: "internal_error",
        503: "service_unavailable",
    }
    return mapping.get(status_code, "error")


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
