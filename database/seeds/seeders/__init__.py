"""
eShop Seeders Module.

Reusable seeding logic separated from data definitions.
"""

from database.seeds.seeders.base import BaseSeeder
from database.seeds.seeders.catalog import BrandSeeder, ItemSeeder, TypeSeeder
from database.seeds.seeders.accounts import AccountSeeder

# Application order: items need brands and types to be stored first
SEEDERS: tuple[type[BaseSeeder], ...] = (
    BrandSeeder,
    TypeSeeder,
    ItemSeeder,
    AccountSeeder,
)

__all__ = [
    "BaseSeeder",
    "BrandSeeder",
    "TypeSeeder",
    "ItemSeeder",
    "AccountSeeder",
    "SEEDERS",
]
