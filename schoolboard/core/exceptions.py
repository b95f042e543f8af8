"""
Custom exceptions and error handlers for the School Leaderboard service
Every error leaves the API as a flat {"error", "hint"} document
"""

import logging
from typing import Any, Dict, Optional

import sentry_sdk
from fastapi import Request, status
from fastapi.responses import JSONResponse

from schoolboard.core.config import settings

logger = logging.getLogger(__name__)

DEFAULT_HINT = (
    "Make sure MOODLE_BASE_URL and MOODLE_TOKEN are set, and Web Services is enabled."
)


class SchoolboardException(Exception):
    """Base exception for the leaderboard service"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: Optional[str] = None,
        hint: str = DEFAULT_HINT,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_ERROR"
        self.hint = hint
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(SchoolboardException):
    """The Moodle endpoint is unusable (missing base URL or token)"""

    def __init__(
        self,
        message: str = "Moodle base URL or token not configured",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="CONFIGURATION_ERROR",
            details=details,
        )


class RemoteServiceError(SchoolboardException):
    """A Moodle web-service call did not succeed"""

    def __init__(
        self,
        message: str = "Moodle API error",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="REMOTE_SERVICE_ERROR",
            details=details,
        )


def create_error_response(status_code: int, message: str, hint: str = DEFAULT_HINT) -> JSONResponse:
    """
    Create standardized error response

    Args:
        status_code: HTTP status code
        message: Error message
        hint: Static remediation hint shown to the operator

    Returns:
        JSON response with error information
    """
    return JSONResponse(
        status_code=status_code,
        content={"error": message or "Unknown error", "hint": hint},
    )


async def schoolboard_exception_handler(request: Request, exc: SchoolboardException) -> JSONResponse:
    """
    Handle service exceptions

    Args:
        request: FastAPI request object
        exc: Service exception

    Returns:
        JSON error response
    """
    logger.error(
        f"Leaderboard exception: {exc.message}",
        extra={
            "error_code": exc.error_code,
            "status_code": exc.status_code,
            "details": exc.details,
            "path": str(request.url),
        },
    )

    if settings.SENTRY_DSN and exc.status_code >= 500:
        sentry_sdk.capture_exception(exc)

    return create_error_response(exc.status_code, exc.message, exc.hint)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected exceptions

    Args:
        request: FastAPI request object
        exc: Any exception

    Returns:
        JSON error response
    """
    logger.error(
        f"Unexpected error: {str(exc)}",
        extra={"exception_type": type(exc).__name__, "path": str(request.url)},
        exc_info=True,
    )

    if settings.SENTRY_DSN:
        sentry_sdk.capture_exception(exc)

    return create_error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


def register_exception_handlers(app):
    """
    Register all exception handlers with the FastAPI app

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(SchoolboardException, schoolboard_exception_handler)

    # Catch-all handler for unexpected exceptions
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Exception handlers registered")
