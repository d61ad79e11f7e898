"""
Stateless session tokens.

A token is a JWT carrying the user id (``sub``), issue time (``iat``) and
expiry (``exp``), signed with the process-wide secret. Verification
consults nothing but the token, the clock and the key, so there is no
session table and no revocation before expiry.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from jwt.algorithms import get_default_algorithms

from taskboard.core.exceptions import UnauthenticatedError
from taskboard.models.auth import Identity, IssuedToken

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(hours=1)

# Only a shared secret is configured, so only HMAC signing applies
HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")


class TokenService:
    """Issues and verifies signed, time-limited identity tokens"""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = DEFAULT_TTL
    ):
        """
        Args:
            secret: Signing key
            algorithm: HMAC signing algorithm (HS256, HS384 or HS512)
            ttl: Lifetime of issued tokens
        """
        if not secret:
            raise ValueError("A signing secret is required")
        if algorithm not in HMAC_ALGORITHMS or algorithm not in get_default_algorithms():
            raise ValueError(f"Unsupported token algorithm: {algorithm}")
        if ttl <= timedelta(0):
            raise ValueError("Token lifetime must be positive")

        self._secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, identity: Identity, issued_at: Optional[datetime] = None) -> IssuedToken:
        """
        Mint a token for an identity.

        Args:
            identity: Who the token asserts
            issued_at: Issue time, defaults to now (UTC)
        """
        now = issued_at or datetime.now(timezone.utc)
        # JWT timestamps have second resolution
        now = now.replace(microsecond=0)
        expires_at = now + self.ttl
        payload = {
            "sub": identity.user_id,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(payload, self._secret, algorithm=self.algorithm)
        return IssuedToken(token=token, issued_at=now, expires_at=expires_at)

    def verify(self, token: Optional[str]) -> Identity:
        """
        Decode a token and return the identity it asserts.

        Raises:
            UnauthenticatedError: If the token is missing, malformed,
                expired, badly signed or lacks required claims
        """
        if not token or not token.strip():
            raise UnauthenticatedError("Access denied", reason=UnauthenticatedError.MISSING)

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise UnauthenticatedError("Token has expired", reason=UnauthenticatedError.EXPIRED)
        except jwt.InvalidSignatureError:
            raise UnauthenticatedError("Invalid token", reason=UnauthenticatedError.INVALID_SIGNATURE)
        except jwt.DecodeError:
            raise UnauthenticatedError("Invalid token", reason=UnauthenticatedError.MALFORMED)
        except jwt.InvalidTokenError as e:
            logger.debug(f"Token rejected: {type(e).__name__}")
            raise UnauthenticatedError("Invalid token", reason=UnauthenticatedError.INVALID)

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            raise UnauthenticatedError("Invalid token", reason=UnauthenticatedError.INVALID)
        return Identity(user_id=subject)
