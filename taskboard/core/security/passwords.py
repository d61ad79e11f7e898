"""
Password hashing with bcrypt.

The salt is generated per call and embedded in the hash, so verification
needs nothing but the stored value. bcrypt only reads the first 72 bytes
of its input; longer passwords are refused instead of silently truncated.
"""

import asyncio
import logging

import bcrypt

from taskboard.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """One-way salted hashing of plaintext passwords"""

    def __init__(self, rounds: int = 10):
        if not 4 <= rounds <= 31:
            raise ValueError("bcrypt rounds must be between 4 and 31")
        self.rounds = rounds

    @staticmethod
    def _encode(plain: str) -> bytes:
        if not plain:
            raise ValidationError("Password must not be empty", field="password")
        encoded = plain.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise ValidationError(
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes",
                field="password"
            )
        return encoded

    def hash(self, plain: str) -> str:
        """Hash a plaintext password with a fresh salt"""
        encoded = self._encode(plain)
        return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=self.rounds)).decode("ascii")

    def verify(self, plain: str, hashed: str) -> bool:
        """
        Check a plaintext password against a stored hash.

        Unusable input (empty values, oversized password, malformed hash)
        never matches.
        """
        if not plain or not hashed:
            return False
        encoded = plain.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(encoded, hashed.encode("ascii"))
        except ValueError:
            logger.warning("Stored password hash is not a valid bcrypt hash")
            return False

    async def hash_async(self, plain: str) -> str:
        """hash() on a worker thread"""
        return await asyncio.to_thread(self.hash, plain)

    async def verify_async(self, plain: str, hashed: str) -> bool:
        """verify() on a worker thread"""
        return await asyncio.to_thread(self.verify, plain, hashed)
