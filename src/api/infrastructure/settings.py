"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        KEYAUTH_DB_HOST: Database host (default: localhost)
        KEYAUTH_DB_PORT: Database port (default: 5432)
        KEYAUTH_DB_DATABASE: Database name (default: keyauth)
        KEYAUTH_DB_USERNAME: Database user (default: keyauth)
        KEYAUTH_DB_PASSWORD: Database password (required in production)
        KEYAUTH_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        KEYAUTH_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
        KEYAUTH_DB_ECHO: Log emitted SQL (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="KEYAUTH_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="keyauth", description="Database name")
    username: str = Field(default="keyauth", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=2,
        description="Minimum connections in pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )
    echo: bool = Field(default=False, description="Log emitted SQL statements")

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class CacheSettings(BaseSettings):
    """Aggregate cache settings.

    Environment variables:
        KEYAUTH_CACHE_ENABLED: Serve aggregate reads through the cache (default: true)
        KEYAUTH_CACHE_BACKEND: "memory" or "redis" (default: memory)
        KEYAUTH_CACHE_REDIS_URL: Redis URL when backend is redis
        KEYAUTH_CACHE_TTL_SECONDS: Lifetime of cached aggregates (default: 300)
        KEYAUTH_CACHE_KEY_PREFIX: Namespace for all cache keys (default: keyauth:)
        KEYAUTH_CACHE_SOCKET_TIMEOUT: Redis socket timeout in seconds (default: 2.0)
        KEYAUTH_CACHE_MAX_ENTRIES: Size bound of the in-memory backend (default: 10000)
    """

    model_config = SettingsConfigDict(
        env_prefix="KEYAUTH_CACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    enabled: bool = Field(default=True, description="Enable aggregate caching")
    backend: Literal["memory", "redis"] = Field(
        default="memory", description="Cache backend"
    )
    redis_url: str = Field(
        default="redis://localhost:6379/0", description="Redis connection URL"
    )
    ttl_seconds: int = Field(
        default=300,
        description="Lifetime of cached aggregates in seconds",
        ge=1,
        le=86400,
    )
    key_prefix: str = Field(default="keyauth:", description="Cache key namespace")
    socket_timeout: float = Field(
        default=2.0, description="Redis socket timeout in seconds", gt=0
    )
    max_entries: int = Field(
        default=10_000, description="In-memory backend size bound", ge=1
    )


class IdentitySettings(BaseSettings):
    """Identity bounded context settings.

    Environment variables:
        KEYAUTH_IDENTITY_DEFAULT_DEPARTMENT_NAME: Name of the department every
            domain is bootstrapped with and users fall back to (default: default)
        KEYAUTH_IDENTITY_CLIENT_SECRET_BYTES: Entropy of generated application
            client secrets (default: 32)
    """

    model_config = SettingsConfigDict(
        env_prefix="KEYAUTH_IDENTITY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_department_name: str = Field(
        default="default",
        min_length=1,
        max_length=255,
        description="Name of the per-domain default department",
    )
    client_secret_bytes: int = Field(
        default=32,
        ge=16,
        le=128,
        description="Random bytes used for generated client secrets",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_prefix="KEYAUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Keyauth API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Minimum log level"
    )

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def cache(self) -> CacheSettings:
        """Get cache settings."""
        return get_cache_settings()

    @property
    def identity(self) -> IdentitySettings:
        """Get identity settings."""
        return get_identity_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings."""
    return DatabaseSettings()


@lru_cache
def get_cache_settings() -> CacheSettings:
    """Get cached cache settings."""
    return CacheSettings()


@lru_cache
def get_identity_settings() -> IdentitySettings:
    """Get cached identity settings."""
    return IdentitySettings()
