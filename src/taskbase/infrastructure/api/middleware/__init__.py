"""HTTP middleware for TaskBase."""

from taskbase.infrastructure.api.middleware.logging_middleware import (
    CORRELATION_HEADER,
    RequestLoggingMiddleware,
)

__all__ = ["CORRELATION_HEADER", "RequestLoggingMiddleware"]
