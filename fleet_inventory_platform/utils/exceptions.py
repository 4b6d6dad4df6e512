"""
Custom exceptions for the Fleet Inventory Platform.
"""

from typing import Any, Dict, Optional, List
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the platform."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"

    # Concurrency errors
    CONCURRENCY_CONFLICT = "CONCURRENCY_CONFLICT"
    LAYOUT_LOCKED = "LAYOUT_LOCKED"

    # External service errors
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    CACHE_SERVICE_ERROR = "CACHE_SERVICE_ERROR"


class FleetInventoryError(Exception):
    """Base exception class for the Fleet Inventory platform."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        retry_after: Optional[int] = None
    ):
        """Initialize the exception with comprehensive error information."""
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.suggestions = suggestions or []
        self.retry_after = retry_after
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        result = {
            "error_code": self.error_code.value,
            "message": self.message,
        }

        if self.details:
            result["details"] = self.details

        if self.suggestions:
            result["suggestions"] = self.suggestions

        if self.retry_after:
            result["retry_after"] = self.retry_after

        return result


class ValidationError(FleetInventoryError):
    """Exception raised for validation errors."""

    def __init__(
        self,
        message: str,
        field_errors: Optional[Dict[str, List[str]]] = None,
        details: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        merged_details = dict(details or {})
        if field_errors:
            merged_details["field_errors"] = field_errors
        super().__init__(
            message,
            error_code=ErrorCode.VALIDATION_ERROR,
            details=merged_details or None,
            **kwargs
        )
        self.field_errors = field_errors or {}


class NotFoundError(FleetInventoryError):
    """Base exception for resource not found errors."""

    def __init__(self, message: str, resource_type: Optional[str] = None, resource_id: Optional[str] = None, **kwargs):
        super().__init__(
            message,
            error_code=ErrorCode.NOT_FOUND,
            details={"resource_type": resource_type, "resource_id": resource_id} if resource_type else None,
            **kwargs
        )


class LayoutTemplateNotFoundError(NotFoundError):
    """Exception raised when a layout template is not found."""

    def __init__(self, template_id: str, **kwargs):
        super().__init__(
            f"Layout template {template_id} not found",
            resource_type="layout_template",
            resource_id=str(template_id),
            suggestions=["Check the layout template ID"],
            **kwargs
        )


class SeatDiagramNotFoundError(NotFoundError):
    """Exception raised when a seat diagram is not found."""

    def __init__(self, seat_diagram_id: str, **kwargs):
        super().__init__(
            f"Seat diagram {seat_diagram_id} not found",
            resource_type="seat_diagram",
            resource_id=str(seat_diagram_id),
            **kwargs
        )


class ZoneNotFoundError(NotFoundError):
    """Exception raised when a zone does not exist within its layout."""

    def __init__(self, zone_id: str, layout_id: str, **kwargs):
        super().__init__(
            f"Zone {zone_id} not found in layout {layout_id}",
            resource_type="zone",
            resource_id=str(zone_id),
            **kwargs
        )


class BusNotFoundError(NotFoundError):
    """Exception raised when a bus is not found."""

    def __init__(self, bus_id: str, **kwargs):
        super().__init__(
            f"Bus {bus_id} not found",
            resource_type="bus",
            resource_id=str(bus_id),
            **kwargs
        )


class LayoutInUseError(ValidationError):
    """Exception raised when a template is still referenced by seat diagrams."""

    def __init__(self, template_id: str, seat_diagram_count: int, **kwargs):
        super().__init__(
            f"Layout template {template_id} is referenced by {seat_diagram_count} seat diagrams",
            details={"template_id": str(template_id), "seat_diagram_count": seat_diagram_count},
            suggestions=["Move the buses to another template first"],
            **kwargs
        )


class ConcurrencyError(FleetInventoryError):
    """Exception raised for concurrency-related issues."""

    def __init__(self, message: str, retry_after: int = 1, **kwargs):
        kwargs.setdefault("error_code", ErrorCode.CONCURRENCY_CONFLICT)
        super().__init__(
            message,
            retry_after=retry_after,
            suggestions=["Please try again", "Wait a moment and retry"],
            **kwargs
        )


class LayoutLockError(ConcurrencyError):
    """Exception raised when another operation holds the layout lock."""

    def __init__(self, layout_kind: str, layout_id: str, **kwargs):
        super().__init__(
            f"{layout_kind} {layout_id} is being modified by another operation",
            details={"layout_kind": layout_kind, "layout_id": str(layout_id)},
            error_code=ErrorCode.LAYOUT_LOCKED,
            **kwargs
        )


class ExternalServiceError(FleetInventoryError):
    """Exception raised for external service failures."""

    def __init__(self, service_name: str, message: str, status_code: Optional[int] = None, **kwargs):
        kwargs.setdefault("error_code", ErrorCode.EXTERNAL_SERVICE_ERROR)
        details = kwargs.pop("details", None) or {}
        super().__init__(
            f"{service_name} service error: {message}",
            details={"service_name": service_name, "status_code": status_code, **details},
            suggestions=["Try again later", "Contact support if problem persists"],
            **kwargs
        )


class CacheServiceError(ExternalServiceError):
    """Exception raised for cache service failures."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            "cache",
            message,
            error_code=ErrorCode.CACHE_SERVICE_ERROR,
            **kwargs
        )
