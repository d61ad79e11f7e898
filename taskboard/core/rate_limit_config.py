"""
Rate limiting configuration for the Taskboard API
"""

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address


def get_real_ip(request: Request) -> str:
    """
    Get the real client IP, considering proxy headers.
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        # May contain a chain of proxies, the client comes first
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    return get_remote_address(request)


# Unauthenticated endpoints that run bcrypt
RATE_LIMITS = {
    "login": "10/minute",
    "register": "5/minute",
}

RATE_LIMIT_MESSAGE = "Too many requests. Please wait a moment and try again."

limiter = Limiter(key_func=get_real_ip)
