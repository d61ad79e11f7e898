# taskboard/core/service_base.py
"""
Base service class for services that own an external client.

Subclasses get:
- Lazy, idempotent initialization
- Consistent error wrapping
- Health check interface
- Graceful shutdown
"""
from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, TypeVar, Generic
import logging

from taskboard.core.exceptions import ServiceError, ConfigurationError

ConfigType = TypeVar('ConfigType')


class ServiceConfig:
    """Base configuration class for services"""
    pass


class BaseService(ABC, Generic[ConfigType]):
    """
    Abstract base class for services wrapping a client connection.
    """

    def __init__(
        self,
        config: Optional[ConfigType] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the service.

        Args:
            config: Service-specific configuration
            logger: Optional logger instance
        """
        self.config = config
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self._initialized = False
        self._client = None

        self.service_name = self.__class__.__name__

    @abstractmethod
    async def _initialize_client(self) -> Any:
        """
        Create the underlying client and verify it can be used.

        Raises:
            ConfigurationError: If configuration is invalid
            ServiceError: If initialization fails
        """
        pass

    async def initialize(self) -> None:
        """
        Initialize the service.

        Idempotent - multiple calls are safe.
        """
        if self._initialized:
            self.logger.debug(f"{self.service_name} already initialized")
            return

        try:
            self.logger.info(f"Initializing {self.service_name}...")
            self._validate_config()
            self._client = await self._initialize_client()
            self._initialized = True
            self.logger.info(f"{self.service_name} initialized successfully")

        except (ConfigurationError, ServiceError):
            raise
        except Exception as e:
            error_msg = f"Failed to initialize {self.service_name}"
            self.logger.error(error_msg, exc_info=True)
            raise ServiceError(
                error_msg,
                service_name=self.service_name,
                details={'original_error': str(e), 'error_type': type(e).__name__}
            ) from e

    def _validate_config(self) -> None:
        """
        Validate service configuration.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if self.config is None:
            raise ConfigurationError(
                f"No configuration provided for {self.service_name}",
                component=self.service_name
            )

    @abstractmethod
    async def health_check(self) -> Dict[str, Any]:
        """
        Perform a health check on the service.

        Returns:
            Dict with ``healthy`` (bool), ``status`` (str) and optional ``details``
        """
        pass

    async def ensure_initialized(self) -> None:
        """Initialize on first use"""
        if not self._initialized:
            await self.initialize()

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def client(self) -> Any:
        """
        The underlying client.

        Raises:
            ServiceError: If service is not initialized
        """
        if not self._initialized or self._client is None:
            raise ServiceError(
                f"{self.service_name} is not initialized. Call initialize() first.",
                service_name=self.service_name
            )
        return self._client

    async def shutdown(self) -> None:
        """Release resources held by the service"""
        if not self._initialized:
            return

        try:
            self.logger.info(f"Shutting down {self.service_name}...")
            await self._cleanup()
            self.logger.info(f"{self.service_name} shut down successfully")
        except Exception:
            self.logger.error(f"Error during {self.service_name} shutdown", exc_info=True)
        finally:
            self._client = None
            self._initialized = False

    async def _cleanup(self) -> None:
        """Service-specific cleanup logic"""
        pass
