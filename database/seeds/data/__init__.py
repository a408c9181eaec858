"""
eShop Seed Data Module.

This module contains all seed data definitions separated from seeding logic.
"""

from database.seeds.data.common import (
    AccountData,
    BrandData,
    ItemData,
    TypeData,
    GROUP_ACCOUNTS,
    GROUP_BRANDS,
    GROUP_ITEMS,
    GROUP_TYPES,
    SEED_GROUPS,
)
from database.seeds.data import catalog
from database.seeds.data import identity
from database.seeds.data.dataset import DEFAULT_DATASET, SeedDataset, load_dataset

__all__ = [
    # Type definitions
    "BrandData",
    "TypeData",
    "ItemData",
    "AccountData",
    # Groups
    "GROUP_BRANDS",
    "GROUP_TYPES",
    "GROUP_ITEMS",
    "GROUP_ACCOUNTS",
    "SEED_GROUPS",
    # Dataset
    "SeedDataset",
    "DEFAULT_DATASET",
    "load_dataset",
    # Data modules
    "catalog",
    "identity",
]
