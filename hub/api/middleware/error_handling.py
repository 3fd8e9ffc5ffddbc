# 📄 File: hub/api/middleware/error_handling.py
# 🧭 Purpose (Layman Explanation):
# Catches any error that happens while answering a request and turns it into a consistent error
# message, so clients never see a raw crash and can report the request id back to us.
# 🧪 Purpose (Technical Summary):
# Error envelope construction shared by the exception handlers, plus a BaseHTTPMiddleware that
# converts anything the routes leave uncaught (database constraint violations, unexpected errors)
# into the same {"error": {...}} body with request correlation headers.
# 🔗 Dependencies:
# starlette, FastAPI responses, SQLAlchemy exceptions, hub.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# hub.main (middleware and exception handler registration)

import logging
import traceback
from typing import Any, Dict, Optional, Tuple

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from hub.shared.config.settings import Settings
from hub.shared.core.exceptions import ConflictError, HubException
from hub.shared.utils.helpers import utc_now

from . import REQUEST_ID_HEADER, get_middleware_config, get_or_create_request_id

logger = logging.getLogger(__name__)


def create_error_response(
    request: Request,
    error_code: str,
    message: str,
    status_code: int = 500,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """
    Create a standardized error response

    Args:
        request: HTTP request that failed
        error_code: Error code identifier
        message: Human-readable error message
        status_code: HTTP status code
        details: Additional error details

    Returns:
        JSON error response
    """
    request_id = get_or_create_request_id(request)
    error_response = {
        "error": {
            "code": error_code,
            "message": message,
            "details": details or {},
            "timestamp": utc_now().isoformat(),
            "request_id": request_id,
            "path": str(request.url.path),
            "method": request.method,
        }
    }

    response = JSONResponse(status_code=status_code, content=error_response)
    response.headers[REQUEST_ID_HEADER] = request_id
    response.headers["X-Error-Code"] = error_code
    return response


def hub_exception_response(request: Request, exc: HubException) -> JSONResponse:
    return create_error_response(
        request,
        error_code=exc.error_code,
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
    )


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware for the back-office API.

    Domain errors raised by services are rendered by the exception handlers
    before reaching this layer; what arrives here is either a database
    constraint violation or a genuine failure.
    """

    def __init__(self, app: ASGIApp, settings: Settings):
        super().__init__(app)
        self.settings = settings
        self.include_traceback = (
            get_middleware_config("error_handling").get("include_traceback", False)
            or (settings.DEBUG and not settings.is_production)
        )

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = get_or_create_request_id(request)

        try:
            response = await call_next(request)
        except Exception as exc:
            return self._handle_exception(request, exc)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    def _handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        status_code, error_code, message, details = self._get_error_info(exc)

        if status_code >= 500:
            logger.error(
                f"Server error in {request.method} {request.url.path}: {type(exc).__name__}",
                exc_info=exc,
            )
        else:
            logger.info(f"Client error in {request.method} {request.url.path}: {error_code}")

        if status_code >= 500 and self.include_traceback:
            details = {
                **details,
                "exception_type": type(exc).__name__,
                "traceback": traceback.format_exception(type(exc), exc, exc.__traceback__),
            }

        return create_error_response(request, error_code, message, status_code, details)

    def _get_error_info(self, exc: Exception) -> Tuple[int, str, str, Dict[str, Any]]:
        """
        Extract error information from exception

        Returns:
            Tuple of (status_code, error_code, error_message, error_details)
        """
        if isinstance(exc, IntegrityError):
            exc = ConflictError(
                message="The change conflicts with existing data",
                details={"constraint": type(exc.orig).__name__ if exc.orig is not None else None},
            )

        if isinstance(exc, HubException):
            return exc.status_code, exc.error_code, exc.message, exc.details or {}

        return 500, "INTERNAL_SERVER_ERROR", "An internal server error occurred", {}
