"""
eShop - Startup seeding.

Makes sure the catalog store is reachable and holds the baseline dataset
before the application serves traffic. The database may still be starting
(30-60s is common under emulation), so connection attempts are retried with
bounded exponential backoff; authentication and configuration problems abort
immediately.

Usage:
    from database.seeds.startup import RetryPolicy, ensure_seeded

    report = await ensure_seeded(engine, DEFAULT_DATASET, RetryPolicy(max_attempts=5))
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import text
from sqlalchemy.engine import URL
from sqlalchemy.exc import (
    ArgumentError,
    DBAPIError,
    InterfaceError,
    NoSuchModuleError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from database.connection import create_engine, create_session_factory, init_db
from database.seeds.data.dataset import DEFAULT_DATASET, SeedDataset
from database.seeds.seeders import SEEDERS
from shared.config import Settings
from shared.errors import FailureKind, SeedError, SeedFailureReason, get_error_logger

logger = logging.getLogger(__name__)
error_logger = get_error_logger()

Sleep = Callable[[float], Awaitable[Any]]


# =============================================================================
# Retry policy
# =============================================================================

class RetryPolicy(BaseModel):
    """Connection retry configuration for ensure_seeded."""

    model_config = ConfigDict(frozen=True)

    max_attempts: int = Field(default=10, ge=1, description="Connection attempts before giving up")
    initial_backoff: float = Field(default=2.0, ge=0, description="Seconds to wait after the first failure")
    backoff_multiplier: float = Field(default=2.0, ge=1, description="Growth factor between waits")
    max_backoff: float = Field(default=30.0, ge=0, description="Ceiling on a single wait")
    connect_timeout: float = Field(default=10.0, gt=0, description="Timeout for one connection attempt")

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetryPolicy":
        return cls(
            max_attempts=settings.SEED_MAX_ATTEMPTS,
            initial_backoff=settings.SEED_INITIAL_BACKOFF_SECONDS,
            backoff_multiplier=settings.SEED_BACKOFF_MULTIPLIER,
            max_backoff=settings.SEED_MAX_BACKOFF_SECONDS,
            connect_timeout=settings.SEED_CONNECT_TIMEOUT_SECONDS,
        )

    def backoff_for(self, attempt: int) -> float:
        """
        Wait between attempt ``attempt`` and ``attempt + 1``.

        min(initial_backoff * backoff_multiplier ** (attempt - 1), max_backoff)
        """
        if attempt < 1:
            raise ValueError("attempt numbers start at 1")
        try:
            wait = self.initial_backoff * self.backoff_multiplier ** (attempt - 1)
        except OverflowError:
            return self.max_backoff
        return min(wait, self.max_backoff)

    def schedule(self) -> list[float]:
        """All waits of a run where every attempt fails."""
        return [self.backoff_for(attempt) for attempt in range(1, self.max_attempts)]

    def wait_strategy(self) -> wait_exponential:
        return wait_exponential(
            multiplier=self.initial_backoff,
            exp_base=self.backoff_multiplier,
            max=self.max_backoff,
        )


@dataclass(frozen=True)
class ConnectionAttempt:
    """One connection attempt of a single ensure_seeded call."""

    number: int
    elapsed_wait: float  # seconds slept before this attempt
    failure: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.failure is None


@dataclass
class SeedReport:
    """Outcome of a successful ensure_seeded call."""

    attempts: list[ConnectionAttempt] = field(default_factory=list)
    inserted: dict[str, int] = field(default_factory=dict)
    skipped: dict[str, int] = field(default_factory=dict)

    @property
    def connection_attempts(self) -> int:
        return len(self.attempts)

    @property
    def total_inserted(self) -> int:
        return sum(self.inserted.values())

    def as_dict(self) -> dict[str, Any]:
        return {
            "connection_attempts": self.connection_attempts,
            "inserted": dict(self.inserted),
            "skipped": dict(self.skipped),
        }


# =============================================================================
# Failure classification
# =============================================================================

AUTH_SQLSTATES = frozenset({"28000", "28P01"})  # invalid authorization / password
FATAL_SQLSTATES = AUTH_SQLSTATES | {"3D000"}  # unknown database
RETRYABLE_SQLSTATES = frozenset({"57P03", "53300"})  # starting up / too many connections

AUTH_MESSAGES = (
    "password authentication failed",
    "authentication failed",
    "access denied",
)
FATAL_MESSAGES = AUTH_MESSAGES + ("does not exist",)
RETRYABLE_MESSAGES = (
    "starting up",
    "connection refused",
    "could not connect",
    "timeout",
    "timed out",
    "name or service not known",
    "temporary failure in name resolution",
    "connection reset",
)


def _error_chain(exc: BaseException) -> list[BaseException]:
    """The exception plus the driver errors SQLAlchemy wrapped inside it."""
    chain: list[BaseException] = []
    current: BaseException | None = exc
    while current is not None and current not in chain:
        chain.append(current)
        if isinstance(current, DBAPIError) and current.orig is not None:
            current = current.orig
        else:
            current = current.__cause__
    return chain


def _sqlstate(exc: BaseException) -> str | None:
    for error in _error_chain(exc):
        code = getattr(error, "sqlstate", None) or getattr(error, "pgcode", None)
        if isinstance(code, str) and code:
            return code
    return None


def _messages(exc: BaseException) -> str:
    return " | ".join(str(error) for error in _error_chain(exc)).lower()


def describe_error(exc: BaseException) -> str:
    """Short single-line reason for logs and ConnectionAttempt.failure."""
    root = exc.orig if isinstance(exc, DBAPIError) and exc.orig is not None else exc
    lines = str(root).strip().splitlines()
    return f"{type(root).__name__}: {lines[0]}" if lines else type(root).__name__


def classify_connection_error(exc: BaseException) -> FailureKind:
    """
    Decide whether a failed connection attempt is worth retrying.

    RETRYABLE: refused, timed out, unresolvable host, database still starting.
    FATAL: credentials rejected, unknown database, malformed target.
    """
    if isinstance(exc, (ArgumentError, NoSuchModuleError, ImportError, ValueError)):
        return FailureKind.FATAL

    sqlstate = _sqlstate(exc)
    if sqlstate:
        if sqlstate in FATAL_SQLSTATES:
            return FailureKind.FATAL
        if sqlstate in RETRYABLE_SQLSTATES or sqlstate.startswith("08"):
            return FailureKind.RETRYABLE

    messages = _messages(exc)
    if any(marker in messages for marker in FATAL_MESSAGES):
        return FailureKind.FATAL
    if any(marker in messages for marker in RETRYABLE_MESSAGES):
        return FailureKind.RETRYABLE

    if isinstance(exc, (OSError, OperationalError, InterfaceError)):
        return FailureKind.RETRYABLE
    return FailureKind.FATAL


def fatal_reason(exc: BaseException) -> SeedFailureReason:
    """SeedFailureReason for an exception classified FATAL."""
    if _sqlstate(exc) in AUTH_SQLSTATES:
        return SeedFailureReason.AUTHENTICATION_REJECTED
    messages = _messages(exc)
    if any(marker in messages for marker in AUTH_MESSAGES):
        return SeedFailureReason.AUTHENTICATION_REJECTED
    return SeedFailureReason.MALFORMED_TARGET


def _is_retryable(exc: BaseException) -> bool:
    return classify_connection_error(exc) is FailureKind.RETRYABLE


# =============================================================================
# Reachability
# =============================================================================

async def probe_store(engine: AsyncEngine, timeout: float) -> None:
    """Open one connection and run a trivial statement."""
    async with asyncio.timeout(timeout):
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))


async def wait_for_store(
    engine: AsyncEngine,
    policy: RetryPolicy,
    *,
    sleep: Sleep = asyncio.sleep,
) -> list[ConnectionAttempt]:
    """
    Block until the store accepts a connection.

    Args:
        engine: Engine pointing at the store
        policy: Attempt budget and backoff
        sleep: Awaitable sleep used between attempts

    Returns:
        Every attempt made, the last one successful

    Raises:
        SeedError: MALFORMED_TARGET / AUTHENTICATION_REJECTED on a fatal
            failure (no retry), ATTEMPTS_EXHAUSTED after max_attempts failures
    """
    attempts: list[ConnectionAttempt] = []
    elapsed = 0.0

    def _record_retry(retry_state: RetryCallState) -> None:
        nonlocal elapsed
        exc = retry_state.outcome.exception()
        wait = retry_state.next_action.sleep if retry_state.next_action else 0.0
        reason = describe_error(exc)
        attempts.append(ConnectionAttempt(retry_state.attempt_number, elapsed, reason))
        logger.warning(
            f"Database not ready (attempt {retry_state.attempt_number}/{policy.max_attempts}): "
            f"{reason}. Retrying in {wait:.1f}s...",
            extra={
                "attempt": retry_state.attempt_number,
                "max_attempts": policy.max_attempts,
                "wait_seconds": wait,
                "failure_reason": reason,
            },
        )
        elapsed += wait

    retrying = AsyncRetrying(
        stop=stop_after_attempt(policy.max_attempts),
        wait=policy.wait_strategy(),
        retry=retry_if_exception(_is_retryable),
        before_sleep=_record_retry,
        sleep=sleep,
    )

    try:
        async for attempt in retrying:
            with attempt:
                await probe_store(engine, policy.connect_timeout)

    except RetryError as e:
        last = e.last_attempt.exception()
        reason = describe_error(last)
        attempts.append(ConnectionAttempt(len(attempts) + 1, elapsed, reason))
        logger.error(
            f"Max attempts reached ({policy.max_attempts}), database still unreachable: {reason}",
            extra={
                "attempt": len(attempts),
                "max_attempts": policy.max_attempts,
                "failure_reason": reason,
            },
        )
        raise SeedError(
            f"Database unreachable after {policy.max_attempts} attempts: {reason}",
            SeedFailureReason.ATTEMPTS_EXHAUSTED,
            attempts=attempts,
        ) from last

    except Exception as e:
        reason = describe_error(e)
        attempts.append(ConnectionAttempt(len(attempts) + 1, elapsed, reason))
        logger.error(
            f"Database connection rejected (attempt {len(attempts)}/{policy.max_attempts}), "
            f"not retrying: {reason}",
            extra={
                "attempt": len(attempts),
                "max_attempts": policy.max_attempts,
                "failure_reason": reason,
            },
        )
        raise SeedError(
            f"Database connection rejected: {reason}",
            fatal_reason(e),
            attempts=attempts,
        ) from e

    attempts.append(ConnectionAttempt(len(attempts) + 1, elapsed))
    logger.info(
        f"Database reachable (attempt {len(attempts)}/{policy.max_attempts}, "
        f"waited {elapsed:.1f}s)",
        extra={"attempt": len(attempts), "max_attempts": policy.max_attempts},
    )
    return attempts


# =============================================================================
# Seeding
# =============================================================================

async def seed_dataset(
    session_factory: async_sessionmaker[AsyncSession],
    dataset: SeedDataset,
) -> tuple[dict[str, int], dict[str, int]]:
    """
    Apply every record group, one transaction per group.

    Groups run brands -> types -> items -> accounts. A failing group is rolled
    back as a whole; groups committed before it stay, and a rerun skips them.

    Returns:
        (inserted, skipped) row counts per group

    Raises:
        SeedError: SEED_GROUP_FAILED
    """
    inserted: dict[str, int] = {}
    skipped: dict[str, int] = {}

    for seeder_class in SEEDERS:
        group = seeder_class.group
        try:
            async with session_factory() as session:
                async with session.begin():
                    seeder = seeder_class(session)
                    inserted[group] = await seeder.seed(dataset)
                    skipped[group] = seeder.stats["skipped"]
        except SQLAlchemyError as e:
            raise SeedError(
                f"Seeding {group} failed and was rolled back: {describe_error(e)}",
                SeedFailureReason.SEED_GROUP_FAILED,
                group=group,
            ) from e

    return inserted, skipped


def _resolve_store(store: AsyncEngine | str | URL) -> tuple[AsyncEngine, bool]:
    """Return (engine, owned) where owned engines are disposed by the caller."""
    if isinstance(store, AsyncEngine):
        return store, False
    try:
        return create_engine(store), True
    except (ArgumentError, NoSuchModuleError, ImportError, ValueError) as e:
        # The URL may embed credentials, keep it out of the message
        reason = type(e).__name__
        logger.error(
            f"Database URL rejected (attempt 1/1), not retrying: {reason}",
            extra={"attempt": 1, "max_attempts": 1, "failure_reason": reason},
        )
        raise SeedError(
            f"Malformed database target: {reason}",
            SeedFailureReason.MALFORMED_TARGET,
            attempts=[ConnectionAttempt(1, 0.0, reason)],
        ) from e


async def ensure_seeded(
    store: AsyncEngine | str | URL,
    dataset: SeedDataset = DEFAULT_DATASET,
    policy: RetryPolicy | None = None,
    *,
    create_schema: bool = False,
    sleep: Sleep = asyncio.sleep,
) -> SeedReport:
    """
    Make sure the store is reachable and holds ``dataset``.

    Safe to call repeatedly: records already stored (by natural key) are
    skipped, so a second call inserts nothing.

    Args:
        store: Engine for the store, or a database URL (the engine created
            for it is disposed before returning)
        dataset: Baseline records to apply
        policy: Connection retry policy (defaults to RetryPolicy())
        create_schema: Create missing tables once the store is reachable
        sleep: Awaitable sleep used between connection attempts

    Returns:
        SeedReport with the connection attempts and per-group counts

    Raises:
        SeedError: always fatal; the caller must not start serving traffic
    """
    policy = policy or RetryPolicy()
    attempts: list[ConnectionAttempt] = []

    try:
        dataset.validate()
        engine, owned = _resolve_store(store)
        try:
            attempts = await wait_for_store(engine, policy, sleep=sleep)

            if create_schema:
                try:
                    await init_db(engine)
                except SQLAlchemyError as e:
                    raise SeedError(
                        f"Creating tables failed: {describe_error(e)}",
                        SeedFailureReason.SEED_GROUP_FAILED,
                        group="schema",
                    ) from e

            inserted, skipped = await seed_dataset(create_session_factory(engine), dataset)
        finally:
            if owned:
                await engine.dispose()

    except SeedError as e:
        if not e.attempts:
            e.attempts = list(attempts)
        error_logger.log_error(
            error=e,
            category=e.category,
            context={
                "reason": e.reason.value,
                "group": e.group,
                "connection_attempts": len(e.attempts),
            },
            exc_info=False,
        )
        raise

    report = SeedReport(attempts=attempts, inserted=inserted, skipped=skipped)
    logger.info(
        f"Seeding complete: {report.total_inserted} rows inserted "
        f"({report.connection_attempts} connection attempt(s)), inserted={inserted}, skipped={skipped}"
    )
    return report
