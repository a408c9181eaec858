"""
eShop database seeds.

- data/: seed data definitions (SeedDataset and the bundled baseline)
- seeders/: check-then-insert logic per record group
- startup: connection retry loop and ensure_seeded()
- run_all_seeds: command line entry point
"""

from database.seeds.startup import (
    ConnectionAttempt,
    RetryPolicy,
    SeedReport,
    classify_connection_error,
    ensure_seeded,
    seed_dataset,
    wait_for_store,
)

__all__ = [
    "ConnectionAttempt",
    "RetryPolicy",
    "SeedReport",
    "classify_connection_error",
    "ensure_seeded",
    "seed_dataset",
    "wait_for_store",
]
