# taskboard/core/config.py
from functools import lru_cache
from typing import List

from pydantic import Field, ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings

from taskboard.core.exceptions import ConfigurationError
from taskboard.core.security.tokens import HMAC_ALGORITHMS


class Settings(BaseSettings):
    """Application settings, read once from the environment or .env"""
    APP_NAME: str = "Taskboard"
    DEBUG: bool = False

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Document store
    MONGO_URI: str
    MONGO_DB_NAME: str = "taskboard"
    MONGO_TIMEOUT_MS: int = 5000

    # Session tokens
    JWT_SECRET: str = Field(min_length=1)
    JWT_ALGORITHM: str = "HS256"
    JWT_TTL_SECONDS: int = Field(default=3600, gt=0)
    AUTH_HEADER: str = "Authorization"

    # Password hashing (bcrypt log2 rounds)
    BCRYPT_ROUNDS: int = Field(default=10, ge=4, le=31)

    # HTTP
    CORS_ORIGINS: List[str] = ["*"]
    RATE_LIMIT_ENABLED: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore"
    }

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def _require_hmac(cls, value: str) -> str:
        if value not in HMAC_ALGORITHMS:
            raise ValueError(f"must be one of {', '.join(HMAC_ALGORITHMS)}")
        return value


def load_settings(**overrides) -> Settings:
    """
    Build settings, turning missing or invalid values into a ConfigurationError.

    Args:
        **overrides: Explicit values taking precedence over the environment
    """
    try:
        return Settings(**overrides)
    except PydanticValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        raise ConfigurationError(
            f"Invalid or missing settings: {', '.join(fields)}",
            component="settings",
            details={"fields": fields}
        ) from e


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, loaded on first use"""
    return load_settings()
