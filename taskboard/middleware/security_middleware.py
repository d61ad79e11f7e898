"""
HTTP middleware for the Taskboard API
Request logging and security headers
"""

from fastapi import Request, Response
import time
import logging
from typing import Callable

logger = logging.getLogger(__name__)

SLOW_REQUEST_SECONDS = 1.0

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}

QUIET_PATHS = {"/", "/health"}


class SecurityMiddleware:
    """Logs each request and adds security headers to the response"""

    async def __call__(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if path not in QUIET_PATHS:
            logger.info(f"📥 Request: {request.method} {path}")

        start_time = time.perf_counter()
        response = await call_next(request)
        process_time = time.perf_counter() - start_time

        for name, value in SECURITY_HEADERS.items():
            response.headers[name] = value
        response.headers["X-Process-Time"] = f"{process_time:.4f}"

        if "server" in response.headers:
            del response.headers["server"]

        if process_time > SLOW_REQUEST_SECONDS:
            logger.warning(f"⏱️ Slow request: {path} took {process_time:.2f}s")

        return response
