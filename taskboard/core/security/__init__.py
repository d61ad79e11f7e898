"""
Security layer: password hashing and stateless session tokens.

Kept apart from the route handlers; handlers reach it only through the
services and the request guard.
"""

from .passwords import PasswordHasher, MAX_PASSWORD_BYTES
from .tokens import TokenService, DEFAULT_TTL

__all__ = [
    'PasswordHasher',
    'MAX_PASSWORD_BYTES',
    'TokenService',
    'DEFAULT_TTL',
]
