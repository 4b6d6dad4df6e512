"""
Standard API response examples for documentation.
"""

from typing import Dict, Any
from fastapi import status

from fleet_inventory_platform.schemas.common import ErrorResponse

# Common Error Responses
ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    status.HTTP_404_NOT_FOUND: {
        "description": "Not Found - Resource does not exist",
        "model": ErrorResponse,
        "content": {
            "application/json": {
                "examples": {
                    "template_not_found": {
                        "summary": "Layout Template Not Found",
                        "value": {
                            "error": {
                                "error_code": "NOT_FOUND",
                                "message": "Layout template 123e4567-e89b-12d3-a456-426614174000 not found",
                                "details": {
                                    "resource_type": "layout_template",
                                    "resource_id": "123e4567-e89b-12d3-a456-426614174000"
                                }
                            }
                        }
                    },
                    "zone_not_found": {
                        "summary": "Zone Not Found",
                        "value": {
                            "error": {
                                "error_code": "NOT_FOUND",
                                "message": (
                                    "Zone 9b2f7c1e-0d6a-4c55-9f0e-2d4c0c6f1a11 not found in layout "
                                    "123e4567-e89b-12d3-a456-426614174000"
                                ),
                                "details": {
                                    "resource_type": "zone",
                                    "resource_id": "9b2f7c1e-0d6a-4c55-9f0e-2d4c0c6f1a11"
                                }
                            }
                        }
                    }
                }
            }
        }
    },
    status.HTTP_409_CONFLICT: {
        "description": "Conflict - Layout busy or storage constraint violated",
        "model": ErrorResponse,
        "content": {
            "application/json": {
                "examples": {
                    "layout_locked": {
                        "summary": "Layout Locked",
                        "value": {
                            "error": {
                                "error_code": "LAYOUT_LOCKED",
                                "message": "seat_diagram 123e4567-e89b-12d3-a456-426614174000 is being modified by another operation",
                                "retry_after": 1
                            }
                        }
                    }
                }
            }
        }
    },
    status.HTTP_422_UNPROCESSABLE_ENTITY: {
        "description": "Unprocessable Entity - Invalid layout data",
        "model": ErrorResponse,
        "content": {
            "application/json": {
                "examples": {
                    "duplicate_positions": {
                        "summary": "Duplicate Positions",
                        "value": {
                            "error": {
                                "error_code": "VALIDATION_ERROR",
                                "message": "Duplicate positions found in payload",
                                "details": {
                                    "field_errors": {
                                        "spaces[1].position": ["Duplicate position 1:0:1 (first used by spaces[0])"]
                                    }
                                }
                            }
                        }
                    },
                    "out_of_bounds": {
                        "summary": "Position Out of Bounds",
                        "value": {
                            "error": {
                                "error_code": "VALIDATION_ERROR",
                                "message": "Invalid row number 11 for floor 1. Must be between 1 and 10",
                                "details": {
                                    "field_errors": {
                                        "spaces[0].position.y": [
                                            "Invalid row number 11 for floor 1. Must be between 1 and 10"
                                        ]
                                    }
                                }
                            }
                        }
                    }
                }
            }
        }
    },
    status.HTTP_503_SERVICE_UNAVAILABLE: {
        "description": "Service Unavailable - Database or Redis unreachable",
        "model": ErrorResponse,
        "content": {
            "application/json": {
                "examples": {
                    "cache_unavailable": {
                        "summary": "Lock Service Unavailable",
                        "value": {
                            "error": {
                                "error_code": "CACHE_SERVICE_ERROR",
                                "message": "cache service error: Redis client not initialized"
                            }
                        }
                    }
                }
            }
        }
    },
    status.HTTP_500_INTERNAL_SERVER_ERROR: {
        "description": "Internal Server Error",
        "model": ErrorResponse,
        "content": {
            "application/json": {
                "examples": {
                    "internal_error": {
                        "summary": "Internal Server Error",
                        "value": {
                            "error": {
                                "error_code": "INTERNAL_ERROR",
                                "message": "An unexpected error occurred"
                            },
                            "error_id": "c0a8012e-5f2b-4a7e-9d61-3e1f0b7c2a90"
                        }
                    }
                }
            }
        }
    }
}
