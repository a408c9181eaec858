"""
Pytest configuration and shared fixtures for all tests.

This file is automatically loaded by pytest and provides:
- A file-backed SQLite store per test (aiosqlite)
- Small and default seed datasets
- Failing connection errors and a recording sleep
- Settings isolation
"""

import logging
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from passlib.hash import bcrypt
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from database.connection import create_engine, create_session_factory, init_db
from database.seeds.data import SeedDataset
from database.seeds.startup import RetryPolicy
from shared.config import get_settings


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

@pytest.fixture(scope="session", autouse=True)
def setup_logging():
    """Configure logging for tests."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Reduce noise from third-party loggers
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch):
    """Use the minimum bcrypt cost so account seeding stays fast."""
    monkeypatch.setattr(
        "database.seeds.seeders.accounts.bcrypt",
        bcrypt.using(rounds=4),
    )


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make every test read settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# DATABASE FIXTURES
# =============================================================================

@pytest.fixture
def database_url(tmp_path) -> str:
    """URL of an empty SQLite database file private to the test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}"


@pytest.fixture
async def db_engine(database_url):
    """Create test database engine."""
    engine = create_engine(database_url)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_schema(db_engine):
    """Engine whose tables already exist."""
    await init_db(db_engine)
    return db_engine


@pytest.fixture
def session_factory(db_engine):
    return create_session_factory(db_engine)


@pytest.fixture
def count_rows(session_factory):
    """Return an async helper counting the rows of a model."""

    async def _count(model) -> int:
        async with session_factory() as session:
            result = await session.execute(select(func.count()).select_from(model))
            return result.scalar_one()

    return _count


# =============================================================================
# TEST DATA FIXTURES
# =============================================================================

@pytest.fixture
def small_dataset() -> SeedDataset:
    """Two brands, two types, three items, two accounts."""
    return SeedDataset(
        brands=({"name": "Azure"}, {"name": ".NET"}),
        types=({"name": "Mug"}, {"name": "T-Shirt"}),
        items=(
            {
                "name": ".NET Black & White Mug",
                "description": ".NET Black & White Mug",
                "price": Decimal("8.50"),
                "picture_uri": "http://catalogbaseurltobereplaced/images/products/2.png",
                "brand": ".NET",
                "type": "Mug",
            },
            {
                "name": ".NET Bot Black Sweatshirt",
                "description": ".NET Bot Black Sweatshirt",
                "price": Decimal("19.50"),
                "picture_uri": "http://catalogbaseurltobereplaced/images/products/1.png",
                "brand": ".NET",
                "type": "T-Shirt",
            },
            {
                "name": "Azure Mug",
                "description": "Azure Mug",
                "price": Decimal("10.00"),
                "picture_uri": "",
                "brand": "Azure",
                "type": "Mug",
            },
        ),
        accounts=(
            {
                "email": "DemoUser@example.com",
                "password": "Pass@word1",
                "role": None,
                "display_name": "Demo User",
            },
            {
                "email": "admin@example.com",
                "password": "Pass@word1",
                "role": "Administrators",
                "display_name": "Administrator",
            },
        ),
    )


@pytest.fixture
def fast_policy() -> RetryPolicy:
    """Policy from the reference scenario: 5 attempts, 1s doubling."""
    return RetryPolicy(
        max_attempts=5,
        initial_backoff=1.0,
        backoff_multiplier=2.0,
        max_backoff=30.0,
        connect_timeout=5.0,
    )


# =============================================================================
# MOCK FIXTURES
# =============================================================================

class FakeDriverError(Exception):
    """Stand-in for a DBAPI driver exception carrying a SQLSTATE."""

    def __init__(self, message: str, sqlstate: str | None = None):
        super().__init__(message)
        self.sqlstate = sqlstate


@pytest.fixture
def driver_error():
    """Build an OperationalError as SQLAlchemy raises it when a connection fails."""

    def _make(message: str, sqlstate: str | None = None) -> OperationalError:
        return OperationalError("SELECT 1", {}, FakeDriverError(message, sqlstate))

    return _make


@pytest.fixture
def recording_sleep() -> AsyncMock:
    """Sleep replacement that returns at once and records each wait."""
    return AsyncMock(return_value=None)


@pytest.fixture
def slept():
    """Return the waits passed to a recording sleep, in call order."""

    def _slept(sleep_mock: AsyncMock) -> list[float]:
        return [call.args[0] for call in sleep_mock.await_args_list]

    return _slept


# =============================================================================
# MARKERS
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests that need a real PostgreSQL server"
    )
