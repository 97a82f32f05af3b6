"""API middleware."""

from repairshop.api.middleware.error_handler import ErrorHandlerMiddleware
from repairshop.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
