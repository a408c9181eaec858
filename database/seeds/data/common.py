"""
eShop Seed Data - Common Types.

This module defines TypedDict types for seed records. Items and accounts
reference other records by natural key only, never by database id.
"""

from decimal import Decimal
from typing import TypedDict


# =============================================================================
# Type Definitions
# =============================================================================

class BrandData(TypedDict):
    """Catalog brand data structure."""
    name: str


class TypeData(TypedDict):
    """Catalog type data structure."""
    name: str


class ItemData(TypedDict):
    """Catalog item data structure."""
    name: str
    description: str
    price: Decimal
    picture_uri: str
    brand: str  # CatalogBrand.name
    type: str  # CatalogType.name


class AccountData(TypedDict):
    """Demo identity account data structure."""
    email: str
    password: str  # plain text, hashed on insert
    role: str | None
    display_name: str


# Group names, in the order they are applied
GROUP_BRANDS = "brands"
GROUP_TYPES = "types"
GROUP_ITEMS = "items"
GROUP_ACCOUNTS = "accounts"

SEED_GROUPS: tuple[str, ...] = (GROUP_BRANDS, GROUP_TYPES, GROUP_ITEMS, GROUP_ACCOUNTS)
