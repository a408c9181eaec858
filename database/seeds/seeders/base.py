"""
eShop Base Seeder.

Provides common functionality for all seeders:
- Uniform logging format
- Generic check-then-insert by natural key
- Statistics tracking
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from database.seeds.data.dataset import SeedDataset

logger = logging.getLogger(__name__)


class BaseSeeder:
    """
    Base class for all seeders with common functionality.

    Subclasses set ``group`` and ``entity_type`` and implement ``seed()``.
    Seeders never update existing rows: a record whose natural key is
    already stored is skipped.
    """

    group: str = ""
    entity_type: str = "Entity"

    def __init__(self, session: AsyncSession):
        """
        Initialize the seeder.

        Args:
            session: The async database session, already inside a transaction
        """
        self.session = session
        self.stats = {
            "created": 0,
            "skipped": 0,
        }

    def log_created(self, code: str) -> None:
        """Log a created entity."""
        self.stats["created"] += 1
        logger.debug(f"  + {self.entity_type} {code}: Created")

    def log_skipped(self, code: str) -> None:
        """Log a skipped entity."""
        self.stats["skipped"] += 1

    def log_summary(self) -> None:
        """Log a summary of operations."""
        logger.info(
            f"  {self.entity_type}: {self.stats['created']} created, "
            f"{self.stats['skipped']} skipped",
            extra={"seed_group": self.group},
        )

    async def find_by_key(
        self,
        model_class: type,
        key_column: InstrumentedAttribute,
        key_value: str,
    ) -> Any | None:
        """Return the stored row with this natural key, or None."""
        result = await self.session.execute(
            select(model_class).where(key_column == key_value)
        )
        return result.scalar_one_or_none()

    async def insert_missing(
        self,
        model_class: type,
        key_column: InstrumentedAttribute,
        key_value: str,
        deterministic_id: UUID,
        data: dict[str, Any],
    ) -> tuple[Any, str]:
        """
        Insert a record unless its natural key is already stored.

        Args:
            model_class: The SQLAlchemy model class
            key_column: Column holding the natural key (e.g. CatalogBrand.name)
            key_value: Natural key of the record
            deterministic_id: Id used when the record is inserted
            data: Column values for a new row (natural key included)

        Returns:
            Tuple of (instance, action) where action is "created" or "skipped"
        """
        existing = await self.find_by_key(model_class, key_column, key_value)

        if existing is not None:
            self.log_skipped(key_value)
            return existing, "skipped"

        instance = model_class(id=deterministic_id, **data)
        self.session.add(instance)
        self.log_created(key_value)
        return instance, "created"

    async def seed(self, dataset: SeedDataset) -> int:
        """Apply this seeder's group of ``dataset``; return the number of rows inserted."""
        raise NotImplementedError
