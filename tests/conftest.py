"""Global test configuration and fixtures."""

import logging
from collections.abc import AsyncGenerator
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from tsg.database.driver_logging import DRIVER_LOGGER_NAMES
from tsg.database.models import Base
from tsg.keys import Key, KeyStore

from tests.factories import KeyFactory


@pytest.fixture
def key_factory():
    return KeyFactory


@pytest.fixture
def test_database_uri(tmp_path):
    """File-backed SQLite database so every checkout sees the same data."""
    return f"sqlite+aiosqlite:///{(tmp_path / 'keys.db').as_posix()}"


@pytest_asyncio.fixture
async def async_engine(test_database_uri) -> AsyncGenerator[AsyncEngine, None]:
    """Create async engine with the schema in place."""
    engine = create_async_engine(test_database_uri, echo=False)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def key_store(async_engine: AsyncEngine) -> KeyStore:
    return KeyStore(async_engine)


@pytest.fixture
def spy_engine() -> MagicMock:
    """Engine double that records any attempt to touch the database."""
    return MagicMock(spec=AsyncEngine)


@pytest.fixture
def spy_store(spy_engine: MagicMock) -> KeyStore:
    return KeyStore(spy_engine)


@pytest_asyncio.fixture
async def test_key(key_store: KeyStore, key_factory) -> Key:
    """A key that has already been inserted."""
    return await key_factory.create_async(
        key_store, name="foo", account_id="acct1"
    )


@pytest.fixture
def restore_driver_loggers():
    """Put the SQLAlchemy loggers back the way they were."""
    saved = {}
    for name in DRIVER_LOGGER_NAMES:
        logger = logging.getLogger(name)
        saved[name] = (logger.level, list(logger.handlers), logger.propagate)
    yield
    for name, (level, handlers, propagate) in saved.items():
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.handlers = handlers
        logger.propagate = propagate
