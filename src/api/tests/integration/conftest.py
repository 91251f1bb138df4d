"""Integration test fixtures for database tests.

These fixtures require a running PostgreSQL instance. Tests are skipped
when the database cannot be reached.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
import os

import pytest
import pytest_asyncio
from pydantic import SecretStr
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

import identity.infrastructure.models  # noqa: F401
from infrastructure.database.engines import create_engine
from infrastructure.database.models import Base
from infrastructure.settings import DatabaseSettings


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (requires database)",
    )


@pytest.fixture(scope="session")
def integration_db_settings() -> DatabaseSettings:
    """Database settings for integration tests.

    Override with environment variables:
        KEYAUTH_DB_HOST, KEYAUTH_DB_PORT, etc.
    """
    return DatabaseSettings(
        host=os.getenv("KEYAUTH_DB_HOST", "localhost"),
        port=int(os.getenv("KEYAUTH_DB_PORT", "5432")),
        database=os.getenv("KEYAUTH_DB_DATABASE", "keyauth_test"),
        username=os.getenv("KEYAUTH_DB_USERNAME", "keyauth"),
        password=SecretStr(os.getenv("KEYAUTH_DB_PASSWORD", "keyauth_dev_password")),
    )


@pytest_asyncio.fixture
async def engine(
    integration_db_settings: DatabaseSettings,
) -> AsyncGenerator[AsyncEngine, None]:
    """Provide an engine over freshly created identity tables."""
    engine = create_engine(integration_db_settings)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
    except (OSError, DBAPIError) as e:
        await engine.dispose()
        pytest.skip(f"PostgreSQL not available: {e}")

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def async_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Provide an async session for integration tests."""
    sessionmaker = async_sessionmaker(engine, expire_on_commit=False)
    async with sessionmaker() as session:
        yield session
