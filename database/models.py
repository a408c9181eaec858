"""
eShop - Database models.

This module defines SQLAlchemy ORM models for the tables populated at startup.
All models use UUIDs as primary keys and include a creation timestamp.
Each seeded table has a unique natural key used to detect existing rows.
"""

import uuid
from datetime import datetime, UTC
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Numeric,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class CatalogBrand(Base):
    """Catalog brand (e.g. ".NET", "Azure")."""

    __tablename__ = "catalog_brands"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        comment="Natural key",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    items: Mapped[list["CatalogItem"]] = relationship(
        "CatalogItem",
        back_populates="brand",
    )

    def __repr__(self) -> str:
        return f"<CatalogBrand(id={self.id}, name={self.name})>"


class CatalogType(Base):
    """Catalog item type (e.g. "Mug", "T-Shirt")."""

    __tablename__ = "catalog_types"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        comment="Natural key",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    items: Mapped[list["CatalogItem"]] = relationship(
        "CatalogItem",
        back_populates="catalog_type",
    )

    def __repr__(self) -> str:
        return f"<CatalogType(id={self.id}, name={self.name})>"


class CatalogItem(Base):
    """
    Catalog item - a product shown in the shop.

    Every item references exactly one brand and one type, which must be
    stored before the item is inserted.
    """

    __tablename__ = "catalog_items"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        comment="Natural key",
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
    )
    picture_uri: Mapped[str | None] = mapped_column(String(255), nullable=True)
    catalog_brand_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("catalog_brands.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    catalog_type_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("catalog_types.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    # Relationships
    brand: Mapped["CatalogBrand"] = relationship(
        "CatalogBrand",
        back_populates="items",
        lazy="selectin",
    )
    catalog_type: Mapped["CatalogType"] = relationship(
        "CatalogType",
        back_populates="items",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<CatalogItem(id={self.id}, name={self.name}, price={self.price})>"


class UserAccount(Base):
    """
    Identity account used to sign in to the shop and admin pages.

    Passwords are stored as bcrypt hashes only.
    """

    __tablename__ = "user_accounts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="Natural key, stored lowercase",
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
        comment="Role name, e.g. Administrators",
    )
    display_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<UserAccount(id={self.id}, email={self.email}, role={self.role})>"
