"""
Common schemas for API responses and error handling.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class ErrorDetail(BaseModel):
    """Schema for detailed error information."""

    error_code: str = Field(..., description="Error code for programmatic handling")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error context")
    suggestions: Optional[List[str]] = Field(None, description="Helpful suggestions for resolving the error")


class ErrorResponse(BaseModel):
    """Schema for API error responses."""

    error: ErrorDetail
    error_id: str
    timestamp: str

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "error": {
                        "error_code": "VALIDATION_ERROR",
                        "message": "Duplicate positions found in payload",
                        "details": {
                            "field_errors": {
                                "spaces[3].position": ["Duplicate position 1:0:1"]
                            }
                        }
                    },
                    "error_id": "5b0c5a53-5f5e-4a43-a1b5-5f4a1d3c2b11",
                    "timestamp": "2025-01-01T00:00:00+00:00"
                },
                {
                    "error": {
                        "error_code": "NOT_FOUND",
                        "message": "Seat diagram 123e4567-e89b-12d3-a456-426614174000 not found",
                        "details": {
                            "resource_type": "seat_diagram",
                            "resource_id": "123e4567-e89b-12d3-a456-426614174000"
                        }
                    },
                    "error_id": "0f7b2c1e-7f11-4a8e-bd43-4f0a1c2d3e44",
                    "timestamp": "2025-01-01T00:00:00+00:00"
                }
            ]
        }
    )


class HealthResponse(BaseModel):
    """Schema for health check responses."""

    status: str = Field(..., description="Overall health status")
    service: str = Field(..., description="Service name")
    checks: Dict[str, str] = Field(default_factory=dict, description="Dependency checks")
