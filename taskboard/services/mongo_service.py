# taskboard/services/mongo_service.py
"""
MongoDB service for the Taskboard API.

Async wrapper around a Motor client with:
- Connection check on startup
- Unique index on user emails
- Health checks
"""
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional
import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure, PyMongoError

from taskboard.core.config import Settings
from taskboard.core.exceptions import ConfigurationError, StoreUnavailableError
from taskboard.core.service_base import BaseService, ServiceConfig

logger = logging.getLogger(__name__)

USERS = "users"
DIRECTORIES = "directories"
TASKS = "tasks"


@dataclass
class MongoConfig(ServiceConfig):
    """Configuration for the MongoDB service"""
    uri: Optional[str] = None
    db_name: str = "taskboard"
    timeout_ms: int = 5000

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoConfig":
        return cls(
            uri=settings.MONGO_URI,
            db_name=settings.MONGO_DB_NAME,
            timeout_ms=settings.MONGO_TIMEOUT_MS,
        )


class MongoService(BaseService[MongoConfig]):
    """
    Owns the Motor client and hands out collections.

    Example:
        service = MongoService(MongoConfig(uri="mongodb://localhost:27017"))
        await service.initialize()
        users = service.collection("users")
    """

    def __init__(self, config: MongoConfig):
        super().__init__(config, logger)

    def _validate_config(self) -> None:
        super()._validate_config()

        if not self.config.uri:
            raise ConfigurationError("MONGO_URI is required", component=self.service_name)

    async def _initialize_client(self) -> AsyncIOMotorClient:
        client = AsyncIOMotorClient(
            self.config.uri,
            serverSelectionTimeoutMS=self.config.timeout_ms,
        )
        try:
            await client.admin.command("ping")
            # Email uniqueness is enforced here, not by a read-then-write check
            await client[self.config.db_name][USERS].create_index("email", unique=True)
        except ConnectionFailure as e:
            client.close()
            self.logger.error(f"MongoDB connection failed: {e}")
            raise StoreUnavailableError(
                "Failed to connect to MongoDB",
                operation="initialize",
                details={'error_type': type(e).__name__}
            ) from e

        self.logger.info(f"MongoDB connection successful (database: {self.config.db_name})")
        return client

    @property
    def database(self) -> AsyncIOMotorDatabase:
        return self.client[self.config.db_name]

    def collection(self, name: str) -> AsyncIOMotorCollection:
        return self.database[name]

    async def health_check(self) -> Dict[str, Any]:
        """Ping the server and report latency"""
        if not self._initialized:
            return {"healthy": False, "status": "not_initialized"}

        start = time.perf_counter()
        try:
            await self.client.admin.command("ping")
        except PyMongoError as e:
            self.logger.warning(f"MongoDB health check failed: {type(e).__name__}")
            return {
                "healthy": False,
                "status": "unreachable",
                "details": {"error_type": type(e).__name__}
            }

        return {
            "healthy": True,
            "status": "connected",
            "details": {
                "database": self.config.db_name,
                "response_time_ms": round((time.perf_counter() - start) * 1000, 2)
            }
        }

    async def _cleanup(self) -> None:
        if self._client is not None:
            # Motor's close() is synchronous
            self._client.close()
