"""
Unified Error Handling System for the seeding and API components.

This module provides the error taxonomy used during application startup:
error categories for logging, the two failure kinds the connection loop
distinguishes, and the SeedError raised whenever startup must abort.

Usage:
    from shared.errors import ErrorCategory, get_error_logger

    log_ref = get_error_logger().log_error(
        error=exc,
        category=ErrorCategory.DATABASE_ERROR,
        context={"operation": "seed"},
    )
"""

import logging
import uuid
from datetime import datetime, UTC
from enum import Enum
from typing import TYPE_CHECKING, Any, Sequence

if TYPE_CHECKING:
    from database.seeds.startup import ConnectionAttempt


logger = logging.getLogger(__name__)


class ErrorCategory(str, Enum):
    """Categories of errors for proper handling and logging.

    - DATABASE_ERROR: store unreachable or rejected a statement
    - CONFIGURATION_ERROR: bad credentials, malformed connection target
    - SEED_DATA_ERROR: the baseline dataset itself is inconsistent
    - UNEXPECTED_ERROR: Unknown/unhandled exceptions
    """
    DATABASE_ERROR = "database_error"
    CONFIGURATION_ERROR = "configuration_error"
    SEED_DATA_ERROR = "seed_data_error"
    UNEXPECTED_ERROR = "unexpected_error"


class FailureKind(str, Enum):
    """How a failed connection attempt is treated by the retry loop."""
    RETRYABLE = "retryable"
    FATAL = "fatal"


class SeedFailureReason(str, Enum):
    """Why ensure_seeded gave up."""
    AUTHENTICATION_REJECTED = "authentication_rejected"
    MALFORMED_TARGET = "malformed_target"
    ATTEMPTS_EXHAUSTED = "attempts_exhausted"
    SEED_GROUP_FAILED = "seed_group_failed"
    INVALID_DATASET = "invalid_dataset"


REASON_TO_CATEGORY: dict[SeedFailureReason, ErrorCategory] = {
    SeedFailureReason.AUTHENTICATION_REJECTED: ErrorCategory.CONFIGURATION_ERROR,
    SeedFailureReason.MALFORMED_TARGET: ErrorCategory.CONFIGURATION_ERROR,
    SeedFailureReason.ATTEMPTS_EXHAUSTED: ErrorCategory.DATABASE_ERROR,
    SeedFailureReason.SEED_GROUP_FAILED: ErrorCategory.DATABASE_ERROR,
    SeedFailureReason.INVALID_DATASET: ErrorCategory.SEED_DATA_ERROR,
}


class SeedError(Exception):
    """
    Fatal startup failure: the store is unusable or the baseline could not be applied.

    The hosting process must not serve traffic after this is raised.
    """

    def __init__(
        self,
        message: str,
        reason: SeedFailureReason,
        *,
        attempts: Sequence["ConnectionAttempt"] = (),
        group: str | None = None,
    ):
        self.message = message
        self.reason = reason
        self.attempts = list(attempts)
        self.group = group
        super().__init__(self.message)

    @property
    def category(self) -> ErrorCategory:
        return REASON_TO_CATEGORY.get(self.reason, ErrorCategory.UNEXPECTED_ERROR)

    def __str__(self) -> str:
        details = [self.reason.value]
        if self.group:
            details.append(f"group={self.group}")
        if self.attempts:
            details.append(f"attempts={len(self.attempts)}")
        return f"{self.message} ({', '.join(details)})"


class ErrorLogger:
    """Centralized error logging with structured context.

    Every logged error gets a reference id so that operator reports can be
    matched against log lines.
    """

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.ErrorLogger")

    def _generate_log_ref(self) -> str:
        """Generate unique reference ID for error correlation."""
        return f"err_{datetime.now(UTC).strftime('%Y%m%d_%H%M%S')}_{uuid.uuid4().hex[:8]}"

    def log_error(
        self,
        error: Exception,
        category: ErrorCategory,
        *,
        context: dict[str, Any] | None = None,
        exc_info: bool = True,
    ) -> str:
        """Log error with full structured context.

        Args:
            error: The exception that occurred
            category: Error category for classification
            context: Additional context data
            exc_info: Whether to include stack trace

        Returns:
            log_ref: Unique reference ID for this error instance
        """
        log_ref = self._generate_log_ref()

        log_data = {
            "log_ref": log_ref,
            "error_category": category.value,
            "error_type": type(error).__name__,
            "error_message": str(error),
            "context": context or {},
        }

        if category is ErrorCategory.UNEXPECTED_ERROR or category is ErrorCategory.DATABASE_ERROR:
            self.logger.error(
                f"[{log_ref}] {category.value}: {error}",
                extra=log_data,
                exc_info=exc_info,
            )
        else:
            self.logger.critical(
                f"[{log_ref}] {category.value}: {error}",
                extra=log_data,
                exc_info=exc_info,
            )

        return log_ref


# Global error logger instance
_error_logger = ErrorLogger()


def get_error_logger() -> ErrorLogger:
    """Get the global error logger instance."""
    return _error_logger
