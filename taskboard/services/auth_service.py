# taskboard/services/auth_service.py
"""Login: credential check followed by token issuance."""
import logging

from taskboard.core.security.tokens import TokenService
from taskboard.models.auth import Identity, IssuedToken
from taskboard.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)


class AuthService:

    def __init__(self, credentials: CredentialStore, tokens: TokenService):
        self.credentials = credentials
        self.tokens = tokens

    async def login(self, email: str, password: str) -> IssuedToken:
        """
        Exchange valid credentials for a session token.

        Raises:
            UnauthenticatedError: If the credentials do not match a user
        """
        user = await self.credentials.authenticate(email, password)
        issued = self.tokens.issue(Identity(user_id=user.id))
        logger.info(f"🔐 Issued session token for user {user.id}")
        return issued

    def verify(self, token: str) -> Identity:
        return self.tokens.verify(token)
