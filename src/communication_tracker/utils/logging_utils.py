"""
# Logging Utilities

Helpers that sit between the logging manager and the FastAPI application:

- **`RequestLoggingMiddleware`**: logs method, path, status code and duration of every request.
- **`log_application_lifecycle()`**: records startup/shutdown milestones with structured details.
- **`log_error_with_context()`**: logs an exception together with the operation it interrupted.
"""

import time
from typing import Any, Dict, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from communication_tracker.managers.logging_manager import get_logger

request_logger = get_logger(prefix="[REQUEST]")
lifecycle_logger = get_logger(prefix="[LIFECYCLE]")
error_logger = get_logger(prefix="[ERROR]")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request once the response is ready."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.time() - start_time
            request_logger.error(
                "%s %s raised %s after %.3fs", request.method, request.url.path, type(e).__name__, duration
            )
            raise

        duration = time.time() - start_time
        log = request_logger.warning if response.status_code >= 500 else request_logger.info
        log("%s %s -> %d (%.3fs)", request.method, request.url.path, response.status_code, duration)
        return response


def log_application_lifecycle(event: str, details: Optional[Dict[str, Any]] = None) -> None:
    """Log an application lifecycle event such as `startup_initiated` or `database_connected`."""
    if details:
        rendered = ", ".join(f"{key}={value}" for key, value in details.items())
        lifecycle_logger.info("%s: %s", event, rendered)
    else:
        lifecycle_logger.info("%s", event)


def log_error_with_context(error: BaseException, context: Optional[Dict[str, Any]] = None) -> None:
    """Log `error` at error level with the operation context that produced it."""
    error_logger.error(
        "%s: %s | context=%s", type(error).__name__, error, context or {}, exc_info=error
    )
