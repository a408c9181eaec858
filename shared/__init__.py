"""
eShop - Shared module.

This module contains configuration, logging and error handling
used by the seeding runner and the API host.
"""

from shared.config import Settings, get_settings
from shared.logging_config import configure_logging, mask_database_url
from shared.errors import (
    ErrorCategory,
    ErrorLogger,
    FailureKind,
    SeedError,
    SeedFailureReason,
    get_error_logger,
)

__all__ = [
    # Core utilities
    "Settings",
    "get_settings",
    "configure_logging",
    "mask_database_url",
    # Error handling
    "ErrorCategory",
    "ErrorLogger",
    "get_error_logger",
    "FailureKind",
    "SeedError",
    "SeedFailureReason",
]
