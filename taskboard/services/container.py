# taskboard/services/container.py
"""Wiring of services from settings and repositories."""
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from taskboard.core.config import Settings
from taskboard.core.security import PasswordHasher, TokenService
from taskboard.services.auth_service import AuthService
from taskboard.services.credential_store import CredentialStore
from taskboard.services.directory_service import DirectoryService
from taskboard.services.mongo_service import DIRECTORIES, TASKS, USERS, MongoService
from taskboard.services.repositories import DocumentRepository, MongoRepository
from taskboard.services.task_service import TaskService


@dataclass
class ServiceContainer:
    credentials: CredentialStore
    auth: AuthService
    directories: DirectoryService
    tasks: TaskService
    mongo: Optional[MongoService] = None


def build_container(
    settings: Settings,
    users: DocumentRepository,
    directories: DocumentRepository,
    tasks: DocumentRepository,
    mongo: Optional[MongoService] = None
) -> ServiceContainer:
    """Create all services around the given repositories"""
    hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
    token_service = TokenService(
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        ttl=timedelta(seconds=settings.JWT_TTL_SECONDS),
    )
    credentials = CredentialStore(users, hasher)
    return ServiceContainer(
        credentials=credentials,
        auth=AuthService(credentials, token_service),
        directories=DirectoryService(directories),
        tasks=TaskService(tasks, directories, users),
        mongo=mongo,
    )


def build_mongo_container(settings: Settings, mongo: MongoService) -> ServiceContainer:
    """Create all services backed by an initialized MongoService"""
    return build_container(
        settings,
        users=MongoRepository(mongo.collection(USERS), "user"),
        directories=MongoRepository(mongo.collection(DIRECTORIES), "directory"),
        tasks=MongoRepository(mongo.collection(TASKS), "task", ref_fields=("dirId", "userId")),
        mongo=mongo,
    )
