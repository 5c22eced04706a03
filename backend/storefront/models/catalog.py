"""
Storefront Backend: Catalog SQLAlchemy Models
==============================================

What:  ORM models for the `categories` and `products` tables.
Who:   Read by the persistence gateway; never written by this service.

Column names follow the existing database (camelCase, e.g. `categoryId`);
Python attributes are snake_case and map onto them explicitly.
"""

from typing import Optional

from sqlalchemy import ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from storefront.database import Base


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Category(id='{self.id}', name='{self.name}')>"


class Product(Base):
    """
    A sellable product.

    `category_id` is nullable: uncategorized products exist and are only
    reachable through the unfiltered product listing.
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    # asdecimal=False: prices come back as float, which is what the JSON API emits
    price: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False)
    category_id: Mapped[Optional[str]] = mapped_column(
        "categoryId",
        String(255),
        ForeignKey("categories.id"),
        nullable=True,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Product(id='{self.id}', category_id='{self.category_id}')>"
