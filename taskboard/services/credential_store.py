# taskboard/services/credential_store.py
"""
Credential store: user records and their password hashes.

Plaintext passwords enter through register/update/authenticate, are
hashed or checked on a worker thread and are never stored, logged or
returned. Email uniqueness comes from the store's unique index.
"""
import logging
import secrets
from typing import List

from taskboard.core.exceptions import (
    DuplicateEmailError,
    DuplicateRecordError,
    UnauthenticatedError,
    not_found,
)
from taskboard.core.security.passwords import PasswordHasher
from taskboard.models.user import UserCreate, UserPublic, UserRecord, UserUpdate
from taskboard.services.repositories import DocumentRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class CredentialStore:
    """User registration, lookup, update and password verification"""

    def __init__(self, users: DocumentRepository, hasher: PasswordHasher):
        self.users = users
        self.hasher = hasher
        # Unknown-email logins are verified against this hash
        self._dummy_hash = hasher.hash(secrets.token_urlsafe(16))

    async def register(self, data: UserCreate) -> UserPublic:
        """
        Create a user with a freshly salted password hash.

        Raises:
            DuplicateEmailError: If the email is already registered
        """
        password_hash = await self.hasher.hash_async(data.password)
        try:
            document = await self.users.create({
                "username": data.username,
                "email": data.email,
                "password": password_hash,
            })
        except DuplicateRecordError as e:
            raise DuplicateEmailError(data.email) from e

        user = UserRecord.model_validate(document)
        logger.info(f"Registered user {user.id}")
        return UserPublic.from_record(user)

    async def verify(self, plain: str, password_hash: str) -> bool:
        """Check a plaintext password against a stored hash"""
        return await self.hasher.verify_async(plain, password_hash)

    async def authenticate(self, email: str, password: str) -> UserRecord:
        """
        Resolve credentials to a user.

        Unknown emails still go through a full hash check so both
        failures cost the same and produce the same error.

        Raises:
            UnauthenticatedError: If the email is unknown or the password is wrong
        """
        document = await self.users.find_by_field("email", email)
        if document is None:
            await self.verify(password, self._dummy_hash)
            logger.info("Login failed: invalid credentials")
            raise UnauthenticatedError(INVALID_CREDENTIALS, reason=UnauthenticatedError.INVALID_CREDENTIALS)

        user = UserRecord.model_validate(document)
        if not await self.verify(password, user.password_hash):
            logger.info("Login failed: invalid credentials")
            raise UnauthenticatedError(INVALID_CREDENTIALS, reason=UnauthenticatedError.INVALID_CREDENTIALS)

        return user

    async def get_user(self, user_id: str) -> UserPublic:
        document = await self.users.find_by_id(user_id)
        if document is None:
            raise not_found("user", user_id)
        return UserPublic.from_record(UserRecord.model_validate(document))

    async def list_users(self) -> List[UserPublic]:
        documents = await self.users.find_many()
        return [UserPublic.from_record(UserRecord.model_validate(d)) for d in documents]

    async def update_user(self, user_id: str, changes: UserUpdate) -> UserPublic:
        """
        Apply a partial update. Only a supplied password is re-hashed.

        Raises:
            NotFoundError: If the user does not exist
            DuplicateEmailError: If the new email belongs to another user
        """
        fields = changes.model_dump(exclude_unset=True, exclude_none=True)
        password = fields.pop("password", None)
        if password is not None:
            fields["password"] = await self.hasher.hash_async(password)

        try:
            document = await self.users.update_by_id(user_id, fields)
        except DuplicateRecordError as e:
            raise DuplicateEmailError(fields.get("email")) from e

        if document is None:
            raise not_found("user", user_id)
        if password is not None:
            logger.info(f"Password changed for user {user_id}")
        return UserPublic.from_record(UserRecord.model_validate(document))

    async def update_secret(self, user_id: str, new_password: str) -> UserPublic:
        """Replace a user's password"""
        return await self.update_user(user_id, UserUpdate(password=new_password))

    async def delete_user(self, user_id: str) -> None:
        if not await self.users.delete_by_id(user_id):
            raise not_found("user", user_id)
        logger.info(f"Deleted user {user_id}")
