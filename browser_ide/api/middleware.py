"""Custom middleware for the API."""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from browser_ide.utils.logging import get_logger

logger = get_logger(__name__)

# Polling hits these every few seconds; keep them out of INFO logs
QUIET_PATHS = frozenset({"/deployments", "/health"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all requests."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()

        request_id = request.headers.get("X-Request-ID", str(time.time_ns()))
        log = logger.debug if request.url.path in QUIET_PATHS else logger.info

        log(
            "request.started",
            method=request.method,
            path=request.url.path,
            request_id=request_id,
        )

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000

        log(
            "request.completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
            request_id=request_id,
        )

        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"
        response.headers["X-Request-ID"] = request_id

        return response
