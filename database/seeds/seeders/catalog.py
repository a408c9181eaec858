"""
eShop Catalog Seeders.

Seeds catalog data in dependency order:
- CatalogBrand
- CatalogType
- CatalogItem (references brand and type by name)
"""

import logging

from database.models import CatalogBrand, CatalogItem, CatalogType
from database.seeds.data.common import GROUP_BRANDS, GROUP_ITEMS, GROUP_TYPES
from database.seeds.data.dataset import SeedDataset
from database.seeds.seed_utils import (
    deterministic_brand_uuid,
    deterministic_item_uuid,
    deterministic_type_uuid,
)
from database.seeds.seeders.base import BaseSeeder
from shared.errors import SeedError, SeedFailureReason

logger = logging.getLogger(__name__)


class BrandSeeder(BaseSeeder):
    """Seeder for catalog brands."""

    group = GROUP_BRANDS
    entity_type = "Brand"

    async def seed(self, dataset: SeedDataset) -> int:
        for brand in dataset.brands:
            await self.insert_missing(
                model_class=CatalogBrand,
                key_column=CatalogBrand.name,
                key_value=brand["name"],
                deterministic_id=deterministic_brand_uuid(brand["name"]),
                data={"name": brand["name"]},
            )
        await self.session.flush()
        self.log_summary()
        return self.stats["created"]


class TypeSeeder(BaseSeeder):
    """Seeder for catalog types."""

    group = GROUP_TYPES
    entity_type = "Type"

    async def seed(self, dataset: SeedDataset) -> int:
        for type_ in dataset.types:
            await self.insert_missing(
                model_class=CatalogType,
                key_column=CatalogType.name,
                key_value=type_["name"],
                deterministic_id=deterministic_type_uuid(type_["name"]),
                data={"name": type_["name"]},
            )
        await self.session.flush()
        self.log_summary()
        return self.stats["created"]


class ItemSeeder(BaseSeeder):
    """
    Seeder for catalog items.

    Brands and types are looked up in the store, not in the dataset, so an
    item is only inserted once the rows it references exist.
    """

    group = GROUP_ITEMS
    entity_type = "Item"

    async def _resolve(self, model_class: type, name: str, item_name: str):
        instance = await self.find_by_key(model_class, model_class.name, name)
        if instance is None:
            raise SeedError(
                f"Item {item_name!r} references {model_class.__name__} {name!r} "
                f"which is not stored",
                SeedFailureReason.SEED_GROUP_FAILED,
                group=self.group,
            )
        return instance

    async def seed(self, dataset: SeedDataset) -> int:
        brand_ids: dict[str, object] = {}
        type_ids: dict[str, object] = {}

        for item in dataset.items:
            if item["brand"] not in brand_ids:
                brand = await self._resolve(CatalogBrand, item["brand"], item["name"])
                brand_ids[item["brand"]] = brand.id
            if item["type"] not in type_ids:
                type_ = await self._resolve(CatalogType, item["type"], item["name"])
                type_ids[item["type"]] = type_.id

            await self.insert_missing(
                model_class=CatalogItem,
                key_column=CatalogItem.name,
                key_value=item["name"],
                deterministic_id=deterministic_item_uuid(item["name"]),
                data={
                    "name": item["name"],
                    "description": item["description"],
                    "price": item["price"],
                    "picture_uri": item["picture_uri"],
                    "catalog_brand_id": brand_ids[item["brand"]],
                    "catalog_type_id": type_ids[item["type"]],
                },
            )

        await self.session.flush()
        self.log_summary()
        return self.stats["created"]
