"""
Database connection module - Async SQLAlchemy engine and session management.

Engines and session factories are built from explicit arguments; nothing here
holds a module-level engine. Callers own the engine they create and dispose
it with close_db().
"""

from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from shared.config import Settings


def create_engine(
    database_url: str | URL,
    *,
    pool_size: int = 10,
    max_overflow: int = 20,
    echo: bool = False,
) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    Pool sizing only applies to pooled backends; SQLite uses its own pool.

    Raises:
        sqlalchemy.exc.ArgumentError: URL cannot be parsed
        sqlalchemy.exc.NoSuchModuleError: Unknown dialect/driver
    """
    url = make_url(database_url)
    kwargs: dict = {
        "echo": echo,
        "pool_pre_ping": True,  # Verify connections before using them
    }
    if url.get_backend_name() != "sqlite":
        kwargs["pool_size"] = pool_size
        kwargs["max_overflow"] = max_overflow
    return create_async_engine(url, **kwargs)


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Create the application engine from DATABASE_URL and pool settings."""
    return create_engine(
        settings.DATABASE_URL,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        echo=settings.DB_ECHO,
    )


# Drivers used by synchronous tools such as Alembic, keyed by backend
SYNC_DRIVERS = {
    "postgresql": "postgresql+psycopg",
    "sqlite": "sqlite",
}


def sync_database_url(database_url: str | URL) -> str:
    """
    Same database as ``database_url``, addressed through a synchronous driver.

    Raises:
        sqlalchemy.exc.ArgumentError: URL cannot be parsed
    """
    url = make_url(database_url)
    backend = url.get_backend_name()
    url = url.set(drivername=SYNC_DRIVERS.get(backend, url.drivername))
    return url.render_as_string(hide_password=False)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory bound to engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Don't expire objects after commit
        autoflush=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """
    Create all tables that do not exist yet.

    NOTE: In production, use Alembic migrations instead.
    This function is useful for testing or initial setup.
    """
    from database.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db(engine: AsyncEngine) -> None:
    """
    Close database engine and all connections.

    Call this during application shutdown.
    """
    await engine.dispose()
