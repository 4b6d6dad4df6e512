"""
Error handling middleware for the Fleet Inventory Platform.
"""

import logging
import traceback
from datetime import datetime, timezone
from uuid import uuid4

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from sqlalchemy.exc import IntegrityError, OperationalError, TimeoutError as SQLTimeoutError
from pydantic import ValidationError as PydanticValidationError

from ..utils.exceptions import (
    FleetInventoryError,
    ErrorCode,
    ValidationError,
    NotFoundError,
    ConcurrencyError,
    ExternalServiceError,
)

logger = logging.getLogger(__name__)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Middleware that turns exceptions into structured JSON error responses."""

    def __init__(self, app, debug: bool = False):
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next):
        """Process request and handle any exceptions."""
        error_id = str(uuid4())

        try:
            return await call_next(request)
        except Exception as exc:
            return await self._handle_exception(request, exc, error_id)

    async def _handle_exception(self, request: Request, exc: Exception, error_id: str) -> JSONResponse:
        """Handle different types of exceptions and return appropriate responses."""
        self._log_error(request, exc, error_id)

        if isinstance(exc, FleetInventoryError):
            return self._handle_platform_error(exc, error_id)
        elif isinstance(exc, PydanticValidationError):
            return self._handle_validation_error(exc, error_id)
        elif isinstance(exc, IntegrityError):
            return self._handle_integrity_error(exc, error_id)
        elif isinstance(exc, (OperationalError, SQLTimeoutError)):
            return self._handle_database_error(exc, error_id)
        else:
            return self._handle_unexpected_error(exc, error_id)

    def _error_response(self, error: FleetInventoryError, error_id: str, status_code: int, headers=None) -> JSONResponse:
        return JSONResponse(
            status_code=status_code,
            content={
                "error": error.to_dict(),
                "error_id": error_id,
                "timestamp": self._get_timestamp()
            },
            headers=headers
        )

    def _handle_platform_error(self, exc: FleetInventoryError, error_id: str) -> JSONResponse:
        """Handle errors raised by the platform's services."""
        headers = {}
        if exc.retry_after:
            headers["Retry-After"] = str(exc.retry_after)

        return self._error_response(exc, error_id, self._get_status_code_for_error(exc), headers)

    def _handle_validation_error(self, exc: PydanticValidationError, error_id: str) -> JSONResponse:
        """Handle Pydantic validation errors."""
        field_errors = {}

        for error in exc.errors():
            field_path = ".".join(str(loc) for loc in error["loc"])
            field_errors.setdefault(field_path, []).append(error["msg"])

        validation_error = ValidationError(
            "Request validation failed",
            field_errors=field_errors
        )
        return self._error_response(validation_error, error_id, status.HTTP_422_UNPROCESSABLE_ENTITY)

    def _handle_integrity_error(self, exc: IntegrityError, error_id: str) -> JSONResponse:
        """Handle database integrity constraint violations."""
        error_message = str(exc.orig) if hasattr(exc, 'orig') else str(exc)
        lowered = error_message.lower()

        if "unique" in lowered and "position" in lowered:
            error = ValidationError(
                "Two spaces cannot occupy the same position",
                details={"constraint_type": "unique"}
            )
        elif "unique" in lowered or "duplicate key" in lowered:
            error = ValidationError(
                "Resource already exists",
                details={"constraint_type": "unique"}
            )
        elif "foreign key" in lowered:
            error = ValidationError(
                "Referenced resource does not exist",
                details={"constraint_type": "foreign_key"}
            )
        else:
            error = ValidationError(
                "Data integrity constraint violation",
                details={"constraint_type": "unknown"}
            )

        return self._error_response(error, error_id, status.HTTP_409_CONFLICT)

    def _handle_database_error(self, exc: Exception, error_id: str) -> JSONResponse:
        """Handle database connection and operational errors."""
        error = ExternalServiceError(
            "database",
            "Database service temporarily unavailable",
            details={"error_type": type(exc).__name__}
        )
        return self._error_response(
            error, error_id, status.HTTP_503_SERVICE_UNAVAILABLE, {"Retry-After": "30"}
        )

    def _handle_unexpected_error(self, exc: Exception, error_id: str) -> JSONResponse:
        """Handle unexpected errors."""
        error = FleetInventoryError(
            "An unexpected error occurred",
            error_code=ErrorCode.INTERNAL_ERROR,
            details={"error_type": type(exc).__name__} if self.debug else None
        )

        response_data = {
            "error": error.to_dict(),
            "error_id": error_id,
            "timestamp": self._get_timestamp()
        }

        if self.debug:
            response_data["debug"] = {
                "exception": str(exc),
                "traceback": traceback.format_exc()
            }

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=response_data
        )

    def _get_status_code_for_error(self, exc: FleetInventoryError) -> int:
        """Map error codes to HTTP status codes."""
        status_map = {
            ErrorCode.VALIDATION_ERROR: status.HTTP_422_UNPROCESSABLE_ENTITY,
            ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
            ErrorCode.CONCURRENCY_CONFLICT: status.HTTP_409_CONFLICT,
            ErrorCode.LAYOUT_LOCKED: status.HTTP_409_CONFLICT,
            ErrorCode.EXTERNAL_SERVICE_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
            ErrorCode.CACHE_SERVICE_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
        }

        return status_map.get(exc.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    def _log_error(self, request: Request, exc: Exception, error_id: str):
        """Log error with request context."""
        request_info = {
            "method": request.method,
            "url": str(request.url),
            "client_ip": request.client.host if request.client else None,
        }

        if isinstance(exc, (ValidationError, NotFoundError)):
            logger.warning(
                f"Client error [{error_id}]: {exc.message}",
                extra={
                    "error_id": error_id,
                    "error_code": exc.error_code.value,
                    "request": request_info,
                    "details": exc.details
                }
            )
        elif isinstance(exc, (ConcurrencyError, ExternalServiceError)):
            logger.error(
                f"System error [{error_id}]: {exc.message}",
                extra={
                    "error_id": error_id,
                    "error_code": exc.error_code.value,
                    "request": request_info,
                    "details": exc.details
                }
            )
        elif isinstance(exc, FleetInventoryError):
            logger.error(
                f"Business error [{error_id}]: {exc.message}",
                extra={
                    "error_id": error_id,
                    "error_code": exc.error_code.value,
                    "request": request_info,
                    "details": exc.details
                }
            )
        else:
            logger.error(
                f"Unexpected error [{error_id}]: {exc}",
                extra={
                    "error_id": error_id,
                    "error_type": type(exc).__name__,
                    "request": request_info,
                },
                exc_info=exc
            )

    def _get_timestamp(self) -> str:
        """Get current timestamp in ISO format."""
        return datetime.now(timezone.utc).isoformat()
