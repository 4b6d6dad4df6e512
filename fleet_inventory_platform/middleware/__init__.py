"""Middleware components for the Fleet Inventory Platform."""

from .error_handler import ErrorHandlerMiddleware
from .logging import LoggingMiddleware

__all__ = [
    "ErrorHandlerMiddleware",
    "LoggingMiddleware"
]
