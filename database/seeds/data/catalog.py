"""
eShop Seed Data - Catalog baseline.

Brands, types and the twelve demo products shown on a fresh install.
"""

from decimal import Decimal

from database.seeds.data.common import BrandData, ItemData, TypeData

PICTURE_BASE_URI = "http://catalogbaseurltobereplaced/images/products"


def _picture(number: int) -> str:
    return f"{PICTURE_BASE_URI}/{number}.png"


# =============================================================================
# Brands
# =============================================================================

BRANDS: list[BrandData] = [
    {"name": "Azure"},
    {"name": ".NET"},
    {"name": "Visual Studio"},
    {"name": "SQL Server"},
    {"name": "Other"},
]

# =============================================================================
# Types
# =============================================================================

TYPES: list[TypeData] = [
    {"name": "Mug"},
    {"name": "T-Shirt"},
    {"name": "Sheet"},
    {"name": "USB Memory Stick"},
]

# =============================================================================
# Items
# =============================================================================

ITEMS: list[ItemData] = [
    {
        "name": ".NET Bot Black Sweatshirt",
        "description": ".NET Bot Black Sweatshirt",
        "price": Decimal("19.50"),
        "picture_uri": _picture(1),
        "brand": ".NET",
        "type": "T-Shirt",
    },
    {
        "name": ".NET Black & White Mug",
        "description": ".NET Black & White Mug",
        "price": Decimal("8.50"),
        "picture_uri": _picture(2),
        "brand": ".NET",
        "type": "Mug",
    },
    {
        "name": "Prism White T-Shirt",
        "description": "Prism White T-Shirt",
        "price": Decimal("12.00"),
        "picture_uri": _picture(3),
        "brand": "Other",
        "type": "T-Shirt",
    },
    {
        "name": ".NET Foundation Sweatshirt",
        "description": ".NET Foundation Sweatshirt",
        "price": Decimal("12.00"),
        "picture_uri": _picture(4),
        "brand": ".NET",
        "type": "T-Shirt",
    },
    {
        "name": "Roslyn Red Sheet",
        "description": "Roslyn Red Sheet",
        "price": Decimal("8.50"),
        "picture_uri": _picture(5),
        "brand": "Other",
        "type": "Sheet",
    },
    {
        "name": ".NET Blue Sweatshirt",
        "description": ".NET Blue Sweatshirt",
        "price": Decimal("12.00"),
        "picture_uri": _picture(6),
        "brand": ".NET",
        "type": "T-Shirt",
    },
    {
        "name": "Roslyn Red T-Shirt",
        "description": "Roslyn Red T-Shirt",
        "price": Decimal("12.00"),
        "picture_uri": _picture(7),
        "brand": "Other",
        "type": "T-Shirt",
    },
    {
        "name": "Kudu Purple Sweatshirt",
        "description": "Kudu Purple Sweatshirt",
        "price": Decimal("8.50"),
        "picture_uri": _picture(8),
        "brand": "Other",
        "type": "T-Shirt",
    },
    {
        "name": "Cup<T> White Mug",
        "description": "Cup<T> White Mug",
        "price": Decimal("12.00"),
        "picture_uri": _picture(9),
        "brand": "Other",
        "type": "Mug",
    },
    {
        "name": ".NET Foundation Sheet",
        "description": ".NET Foundation Sheet",
        "price": Decimal("12.00"),
        "picture_uri": _picture(10),
        "brand": ".NET",
        "type": "Sheet",
    },
    {
        "name": "Cup<T> Sheet",
        "description": "Cup<T> Sheet",
        "price": Decimal("8.50"),
        "picture_uri": _picture(11),
        "brand": ".NET",
        "type": "Sheet",
    },
    {
        "name": "Prism White TShirt",
        "description": "Prism White TShirt",
        "price": Decimal("12.00"),
        "picture_uri": _picture(12),
        "brand": "Other",
        "type": "T-Shirt",
    },
]
