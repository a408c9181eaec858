"""Structured JSON logging configuration."""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from shared.config import Settings, get_settings

# Extra attributes copied into the JSON payload when a log call provides them
STRUCTURED_FIELDS: tuple[str, ...] = (
    "attempt",
    "max_attempts",
    "wait_seconds",
    "failure_reason",
    "seed_group",
    "log_ref",
    "error_category",
)


def mask_database_url(url: str) -> str:
    """
    Hide the password part of a database URL for logs.

    Args:
        url: Connection string (e.g., "postgresql+asyncpg://eshop:secret@db/eshop")

    Returns:
        URL with the password replaced by "***", or the input unchanged if it
        cannot be parsed
    """
    try:
        return make_url(url).render_as_string(hide_password=True)
    except ArgumentError:
        return url


class JSONFormatter(logging.Formatter):
    """
    Custom JSON formatter for structured logging.

    Outputs logs as JSON with consistent fields:
    - timestamp (ISO 8601)
    - level (INFO, ERROR, etc.)
    - logger (module name)
    - message
    - any of STRUCTURED_FIELDS present in extra
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as JSON string.

        Args:
            record: Python log record

        Returns:
            JSON-formatted log string
        """
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in STRUCTURED_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def configure_logging(settings: Settings | None = None) -> None:
    """
    Configure application logging with JSON formatter.

    Reads LOG_LEVEL from settings (default: INFO).
    Outputs to stderr (captured by Docker logs).
    """
    settings = settings or get_settings()

    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(console_handler)

    # Statement echo is controlled by DB_ECHO, not the root level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    root_logger.info(
        f"Logging configured: level={settings.LOG_LEVEL}, format=JSON"
    )
