"""Middleware for request processing."""

from .error_handler import register_exception_handlers
from .request_context import RequestContextMiddleware, get_request_id
from .logging import LoggingMiddleware

__all__ = [
    "register_exception_handlers",
    "RequestContextMiddleware",
    "LoggingMiddleware",
    "get_request_id",
]
