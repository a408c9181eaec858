"""
Utilities for idempotent seeds with deterministic UUIDs.

Seeded rows get ids derived from their natural key, so the same baseline
record always has the same primary key on every install.
"""

import uuid

# Fixed project namespace for deterministic UUIDs (UUID v5)
SEED_NAMESPACE = uuid.UUID("6f1c2b7e-4d3a-5e8f-9a0b-1c2d3e4f5a6b")


def deterministic_uuid(entity_type: str, natural_key: str) -> uuid.UUID:
    """
    Generate a deterministic UUID from entity type and natural key.

    Args:
        entity_type: Entity type (e.g. "brand", "type", "item", "account")
        natural_key: Natural key of the record (name or lowercase email)

    Returns:
        Deterministic UUID v5

    Examples:
        >>> deterministic_uuid("brand", ".NET") == deterministic_uuid("brand", ".NET")
        True
    """
    return uuid.uuid5(SEED_NAMESPACE, f"{entity_type}:{natural_key}")


def deterministic_brand_uuid(name: str) -> uuid.UUID:
    """Shortcut for CatalogBrand ids."""
    return deterministic_uuid("brand", name)


def deterministic_type_uuid(name: str) -> uuid.UUID:
    """Shortcut for CatalogType ids."""
    return deterministic_uuid("type", name)


def deterministic_item_uuid(name: str) -> uuid.UUID:
    """Shortcut for CatalogItem ids."""
    return deterministic_uuid("item", name)


def deterministic_account_uuid(email: str) -> uuid.UUID:
    """Shortcut for UserAccount ids; emails are compared lowercase."""
    return deterministic_uuid("account", email.lower())
