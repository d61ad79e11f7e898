# tests/conftest.py
"""
Shared fixtures for Taskboard tests.

Services run against an in-memory repository that mirrors the
MongoRepository contract (string ids, unique fields, None for unknown
ids), so the API can be exercised end to end without a database.
"""

import pytest
from typing import Any, Dict, Iterable, List, Optional

from bson import ObjectId
from fastapi.testclient import TestClient

from taskboard.core.config import Settings
from taskboard.core.exceptions import DuplicateRecordError
from taskboard.core.security import PasswordHasher, TokenService
from taskboard.main import create_app
from taskboard.services.container import build_container
from taskboard.services.credential_store import CredentialStore

TEST_SECRET = "test-signing-secret-for-taskboard-0123456789"


class InMemoryRepository:
    """Dict-backed stand-in for MongoRepository"""

    def __init__(self, entity: str, unique_fields: Iterable[str] = ()):
        self.entity = entity
        self.unique_fields = tuple(unique_fields)
        self.documents: Dict[str, Dict[str, Any]] = {}

    def _check_unique(self, fields: Dict[str, Any], exclude_id: Optional[str] = None) -> None:
        for field in self.unique_fields:
            if field not in fields:
                continue
            for doc_id, existing in self.documents.items():
                if doc_id != exclude_id and existing.get(field) == fields[field]:
                    raise DuplicateRecordError(f"Duplicate {self.entity}", collection=self.entity)

    @staticmethod
    def _matches(document: Dict[str, Any], query: Optional[Dict[str, Any]]) -> bool:
        return all(document.get(k) == v for k, v in (query or {}).items())

    async def create(self, document: Dict[str, Any]) -> Dict[str, Any]:
        self._check_unique(document)
        stored = {**document, "_id": str(ObjectId())}
        self.documents[stored["_id"]] = stored
        return dict(stored)

    async def find_by_id(self, doc_id: str) -> Optional[Dict[str, Any]]:
        document = self.documents.get(doc_id)
        return dict(document) if document else None

    async def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        for document in self.documents.values():
            if self._matches(document, query):
                return dict(document)
        return None

    async def find_by_field(self, field: str, value: Any) -> Optional[Dict[str, Any]]:
        return await self.find_one({field: value})

    async def find_many(self, query: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        return [dict(d) for d in self.documents.values() if self._matches(d, query)]

    async def find_by_ids(self, doc_ids: Iterable[str]) -> List[Dict[str, Any]]:
        wanted = set(doc_ids)
        return [dict(d) for k, d in self.documents.items() if k in wanted]

    async def update_by_id(self, doc_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        if doc_id not in self.documents:
            return None
        self._check_unique(changes, exclude_id=doc_id)
        self.documents[doc_id].update(changes)
        return dict(self.documents[doc_id])

    async def delete_by_id(self, doc_id: str) -> bool:
        return self.documents.pop(doc_id, None) is not None


@pytest.fixture(scope="session")
def log_dir(tmp_path_factory):
    return str(tmp_path_factory.mktemp("logs"))


@pytest.fixture
def settings(log_dir):
    """Test settings: cheap bcrypt, no rate limiting, no .env"""
    return Settings(
        JWT_SECRET=TEST_SECRET,
        MONGO_URI="mongodb://localhost:27017",
        MONGO_DB_NAME="taskboard_test",
        BCRYPT_ROUNDS=4,
        RATE_LIMIT_ENABLED=False,
        LOG_DIR=log_dir,
        _env_file=None,
    )


@pytest.fixture
def users_repo():
    return InMemoryRepository("user", unique_fields=("email",))


@pytest.fixture
def directories_repo():
    return InMemoryRepository("directory")


@pytest.fixture
def tasks_repo():
    return InMemoryRepository("task")


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def token_service():
    return TokenService(secret=TEST_SECRET)


@pytest.fixture
def credential_store(users_repo, hasher):
    return CredentialStore(users_repo, hasher)


@pytest.fixture
def container(settings, users_repo, directories_repo, tasks_repo):
    return build_container(settings, users_repo, directories_repo, tasks_repo)


@pytest.fixture
def app(settings, container):
    return create_app(settings=settings, container=container)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def registered_user(client):
    """A registered user and the plaintext password used for it"""
    payload = {"username": "alice", "email": "a@x.com", "password": "pw1"}
    response = client.post("/api/users", json=payload)
    assert response.status_code == 201
    return {**response.json()["user"], "password": payload["password"]}


@pytest.fixture
def auth_token(client, registered_user):
    response = client.post(
        "/api/login",
        json={"email": registered_user["email"], "password": registered_user["password"]},
    )
    assert response.status_code == 200
    return response.json()["token"]
