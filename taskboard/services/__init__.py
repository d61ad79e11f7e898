from .auth_service import AuthService
from .container import ServiceContainer, build_container, build_mongo_container
from .credential_store import CredentialStore
from .directory_service import DirectoryService
from .mongo_service import MongoConfig, MongoService
from .repositories import DocumentRepository, MongoRepository
from .task_service import TaskService

__all__ = [
    'AuthService',
    'ServiceContainer',
    'build_container',
    'build_mongo_container',
    'CredentialStore',
    'DirectoryService',
    'MongoConfig',
    'MongoService',
    'DocumentRepository',
    'MongoRepository',
    'TaskService',
]
