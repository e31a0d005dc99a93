"""
FastAPI middleware for observability.

CorrelationMiddleware binds a correlation ID to each request (taken from
the X-Correlation-ID header or generated) and echoes it on the response.
Redline runs started inside the request inherit it.

RequestLoggingMiddleware logs one line per request with status, timing
and the acting user from X-User-Id. Health probes log at DEBUG.

Dependencies: fastapi, starlette, legalai.observability.correlation
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from legalai.observability.correlation import clear_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
USER_HEADER = "X-User-Id"
QUIET_PATH_PREFIX = "/api/v1/health"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each HTTP request with its outcome and duration."""

    async def dispatch(self, request: Request, call_next):
        """
        Log the request after the response is produced.

        Args:
            request: FastAPI request
            call_next: Next middleware in chain

        Returns:
            Response: Response object
        """
        started = time.perf_counter()
        method = request.method
        path = request.url.path
        context = {
            "method": method,
            "path": path,
            "user_id": request.headers.get(USER_HEADER),
            "client_host": request.client.host if request.client else None,
        }

        try:
            response: Response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{method} {path} - unhandled {type(e).__name__}",
                extra={**context, "duration_ms": _elapsed_ms(started)},
            )
            raise

        level = logging.DEBUG if path.startswith(QUIET_PATH_PREFIX) else logging.INFO
        if response.status_code >= 500:
            level = logging.ERROR
        logger.log(
            level,
            f"{method} {path} - {response.status_code}",
            extra={
                **context,
                "status_code": response.status_code,
                "duration_ms": _elapsed_ms(started),
            },
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Bind a correlation ID for the duration of each request."""

    async def dispatch(self, request: Request, call_next):
        """
        Set the correlation ID, call the app, and echo the ID on the response.

        Args:
            request: FastAPI request
            call_next: Next middleware in chain

        Returns:
            Response: Response with correlation ID header
        """
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response: Response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
