"""
eShop - Run all seeds.

Waits for the database, creates missing tables and applies the baseline
dataset (catalog brands, types, items and demo accounts). Exits with status 1
when seeding fails so that orchestration can restart or alert.

Run with: python -m database.seeds.run_all_seeds [--database-url URL] [--dataset PATH]
"""

import argparse
import asyncio
import logging
import sys

from database.seeds.data import DEFAULT_DATASET, SeedDataset, load_dataset
from database.seeds.startup import RetryPolicy, SeedReport, ensure_seeded
from shared.config import Settings, get_settings
from shared.errors import SeedError
from shared.logging_config import configure_logging, mask_database_url

logger = logging.getLogger(__name__)


def load_configured_dataset(settings: Settings) -> SeedDataset:
    """Bundled baseline, or the JSON file named by SEED_DATASET_PATH."""
    if settings.SEED_DATASET_PATH:
        return load_dataset(settings.SEED_DATASET_PATH)
    return DEFAULT_DATASET


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments; defaults come from settings."""
    parser = argparse.ArgumentParser(
        description="Seed the eShop catalog database (idempotent)"
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="SQLAlchemy async database URL (default: DATABASE_URL)",
    )
    parser.add_argument(
        "--dataset",
        default=None,
        help="JSON seed dataset (default: SEED_DATASET_PATH or the bundled baseline)",
    )
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=None,
        help="Connection attempts before giving up (default: SEED_MAX_ATTEMPTS)",
    )
    parser.add_argument(
        "--no-create-schema",
        action="store_true",
        help="Do not create missing tables before seeding",
    )
    return parser.parse_args(argv)


async def run_all_seeds(
    settings: Settings,
    *,
    database_url: str | None = None,
    dataset_path: str | None = None,
    max_attempts: int | None = None,
    create_schema: bool | None = None,
) -> SeedReport:
    """Seed the configured database; raises SeedError on fatal failure."""
    url = database_url or settings.DATABASE_URL
    dataset = load_dataset(dataset_path) if dataset_path else load_configured_dataset(settings)

    policy = RetryPolicy.from_settings(settings)
    if max_attempts is not None:
        policy = policy.model_copy(update={"max_attempts": max_attempts})

    logger.info("=" * 70)
    logger.info(f"{settings.PROJECT_NAME} database seeding: {mask_database_url(url)}")
    logger.info("=" * 70)

    return await ensure_seeded(
        url,
        dataset,
        policy,
        create_schema=settings.SEED_CREATE_SCHEMA if create_schema is None else create_schema,
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point; returns the process exit status."""
    settings = get_settings()
    configure_logging(settings)
    args = _parse_args(argv)

    try:
        report = asyncio.run(
            run_all_seeds(
                settings,
                database_url=args.database_url,
                dataset_path=args.dataset,
                max_attempts=args.max_attempts,
                create_schema=False if args.no_create_schema else None,
            )
        )
    except SeedError as e:
        logger.error(f"Seeding failed: {e}")
        return 1

    logger.info("SEEDING SUMMARY")
    for group, count in report.inserted.items():
        logger.info(f"  {group}: {count} inserted, {report.skipped.get(group, 0)} already present")
    print(f"Seeding complete: {report.as_dict()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
