"""
eShop Seed Data - the SeedDataset bundle.

A SeedDataset is built once (from the bundled modules or a JSON file) and is
only ever read by the seeders.
"""

import json
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Iterable

from database.seeds.data import catalog, identity
from database.seeds.data.common import (
    GROUP_ACCOUNTS,
    GROUP_BRANDS,
    GROUP_ITEMS,
    GROUP_TYPES,
    AccountData,
    BrandData,
    ItemData,
    TypeData,
)
from shared.errors import SeedError, SeedFailureReason


def _duplicates(keys: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    dupes: list[str] = []
    for key in keys:
        if key in seen and key not in dupes:
            dupes.append(key)
        seen.add(key)
    return dupes


@dataclass(frozen=True)
class SeedDataset:
    """Baseline records applied to an empty or partially seeded store."""

    brands: tuple[BrandData, ...] = field(default_factory=tuple)
    types: tuple[TypeData, ...] = field(default_factory=tuple)
    items: tuple[ItemData, ...] = field(default_factory=tuple)
    accounts: tuple[AccountData, ...] = field(default_factory=tuple)

    def natural_keys(self, group: str) -> list[str]:
        """Return the natural keys of one record group, in dataset order."""
        if group == GROUP_BRANDS:
            return [brand["name"] for brand in self.brands]
        if group == GROUP_TYPES:
            return [type_["name"] for type_ in self.types]
        if group == GROUP_ITEMS:
            return [item["name"] for item in self.items]
        if group == GROUP_ACCOUNTS:
            return [account["email"].lower() for account in self.accounts]
        raise KeyError(group)

    def _field_problems(self) -> list[str]:
        problems: list[str] = []
        for group, records, keys in (
            (GROUP_BRANDS, self.brands, ("name",)),
            (GROUP_TYPES, self.types, ("name",)),
            (GROUP_ITEMS, self.items, ("name", "brand", "type")),
            (GROUP_ACCOUNTS, self.accounts, ("email", "password")),
        ):
            for record in records:
                for key in keys:
                    value = record.get(key)
                    if not isinstance(value, str) or not value:
                        problems.append(f"{group}: {key} must be a non-empty string, got {value!r}")
        return problems

    def validate(self) -> None:
        """
        Check the dataset is internally consistent.

        Raises:
            SeedError: INVALID_DATASET on a missing or non-string natural key
                or password, on duplicated natural keys, or on an item
                referencing a brand/type missing from the dataset.
        """
        problems = self._field_problems()
        if problems:
            raise SeedError(
                "Seed dataset is malformed: " + "; ".join(problems),
                SeedFailureReason.INVALID_DATASET,
            )

        for group in (GROUP_BRANDS, GROUP_TYPES, GROUP_ITEMS, GROUP_ACCOUNTS):
            dupes = _duplicates(self.natural_keys(group))
            if dupes:
                problems.append(f"duplicate {group}: {', '.join(dupes)}")

        brand_names = set(self.natural_keys(GROUP_BRANDS))
        type_names = set(self.natural_keys(GROUP_TYPES))
        for item in self.items:
            if item["brand"] not in brand_names:
                problems.append(f"item {item['name']!r} references unknown brand {item['brand']!r}")
            if item["type"] not in type_names:
                problems.append(f"item {item['name']!r} references unknown type {item['type']!r}")

        if problems:
            raise SeedError(
                "Seed dataset is inconsistent: " + "; ".join(problems),
                SeedFailureReason.INVALID_DATASET,
            )

    def __len__(self) -> int:
        return len(self.brands) + len(self.types) + len(self.items) + len(self.accounts)


DEFAULT_DATASET = SeedDataset(
    brands=tuple(catalog.BRANDS),
    types=tuple(catalog.TYPES),
    items=tuple(catalog.ITEMS),
    accounts=tuple(identity.ACCOUNTS),
)


# =============================================================================
# JSON loading
# =============================================================================

def _text(entry: dict[str, Any], key: str, group: str) -> str:
    value = entry[key]
    if not isinstance(value, str) or not value:
        raise ValueError(f"{group}: {key!r} must be a non-empty string, got {value!r}")
    return value


def _optional_text(entry: dict[str, Any], key: str, group: str, default: str | None) -> str | None:
    value = entry.get(key, default)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{group}: {key!r} must be a string, got {value!r}")
    return value


def _named(entries: list[Any], group: str) -> tuple[dict[str, str], ...]:
    records = []
    for entry in entries:
        name = entry.get("name") if isinstance(entry, dict) else entry
        if not isinstance(name, str) or not name:
            raise ValueError(f"{group}: every entry needs a name, got {entry!r}")
        records.append({"name": name})
    return tuple(records)


def _item(entry: dict[str, Any]) -> ItemData:
    name = _text(entry, "name", GROUP_ITEMS)
    try:
        price = Decimal(str(entry["price"]))
    except InvalidOperation as e:
        raise ValueError(f"items: invalid price for {name!r}") from e
    return {
        "name": name,
        "description": _optional_text(entry, "description", GROUP_ITEMS, name) or name,
        "price": price,
        "picture_uri": _optional_text(entry, "picture_uri", GROUP_ITEMS, "") or "",
        "brand": _text(entry, "brand", GROUP_ITEMS),
        "type": _text(entry, "type", GROUP_ITEMS),
    }


def _account(entry: dict[str, Any]) -> AccountData:
    email = _text(entry, "email", GROUP_ACCOUNTS)
    return {
        "email": email,
        "password": _text(entry, "password", GROUP_ACCOUNTS),
        "role": _optional_text(entry, "role", GROUP_ACCOUNTS, None),
        "display_name": _optional_text(entry, "display_name", GROUP_ACCOUNTS, email) or email,
    }


def load_dataset(path: str | Path) -> SeedDataset:
    """
    Load a SeedDataset from a JSON file.

    Expected shape:
        {
            "brands": ["Azure", ...],
            "types": ["Mug", ...],
            "items": [{"name": ..., "price": "8.50", "brand": ..., "type": ...}],
            "accounts": [{"email": ..., "password": ..., "role": null}]
        }

    Raises:
        SeedError: INVALID_DATASET if the file is missing, unreadable or malformed.
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"), parse_float=Decimal)
        if not isinstance(raw, dict):
            raise ValueError("top level must be an object")
        dataset = SeedDataset(
            brands=_named(raw.get("brands", []), GROUP_BRANDS),
            types=_named(raw.get("types", []), GROUP_TYPES),
            items=tuple(_item(entry) for entry in raw.get("items", [])),
            accounts=tuple(_account(entry) for entry in raw.get("accounts", [])),
        )
    except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
        raise SeedError(
            f"Cannot load seed dataset from {path}: {e}",
            SeedFailureReason.INVALID_DATASET,
        ) from e

    return dataset
