"""
eShop - Database module.

This module contains SQLAlchemy models and database connection utilities.
"""

from database.connection import (
    close_db,
    create_engine,
    create_engine_from_settings,
    create_session_factory,
    init_db,
    sync_database_url,
)

__all__ = [
    "create_engine",
    "create_engine_from_settings",
    "create_session_factory",
    "init_db",
    "sync_database_url",
    "close_db",
]
