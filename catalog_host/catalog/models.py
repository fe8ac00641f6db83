"""SQLAlchemy models for the product catalog.

Defines CatalogItem, CatalogBrand and CatalogType tables.
"""

from decimal import Decimal

from sqlalchemy import ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog_host.infrastructure.database import Base

# Column limits shared with update validation.
NAME_MAX_LENGTH = 200
PICTURE_FILE_NAME_MAX_LENGTH = 255
PRICE_PRECISION = 10
PRICE_SCALE = 2
INTEGER_MAX = 2**31 - 1


class CatalogBrand(Base):
    """Brand an item is sold under.

    Attributes:
        id: Brand identifier.
        brand: Unique brand name.
    """

    __tablename__ = "catalog_brands"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    brand: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    def __repr__(self) -> str:
        """String representation."""
        return f"<CatalogBrand(id={self.id}, brand={self.brand})>"


class CatalogType(Base):
    """Kind of product (e.g. "Mug", "T-Shirt").

    Attributes:
        id: Type identifier.
        type: Unique type name.
    """

    __tablename__ = "catalog_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    type: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    def __repr__(self) -> str:
        """String representation."""
        return f"<CatalogType(id={self.id}, type={self.type})>"


class CatalogItem(Base):
    """Product entity in the catalog.

    Attributes:
        id: Item identifier.
        name: Item name.
        description: Item description.
        price: Unit price, non-negative.
        available_stock: Units in stock, non-negative.
        catalog_brand_id: Brand foreign key.
        catalog_type_id: Type foreign key.
        picture_file_name: Picture file name, may be empty.
    """

    __tablename__ = "catalog_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    price: Mapped[Decimal] = mapped_column(Numeric(PRICE_PRECISION, PRICE_SCALE), nullable=False)
    available_stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    catalog_brand_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("catalog_brands.id"),
        nullable=False,
        index=True,
    )
    catalog_type_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("catalog_types.id"),
        nullable=False,
        index=True,
    )
    picture_file_name: Mapped[str] = mapped_column(
        String(PICTURE_FILE_NAME_MAX_LENGTH), nullable=False, default=""
    )

    # Relationships
    catalog_brand: Mapped["CatalogBrand"] = relationship("CatalogBrand", lazy="selectin")
    catalog_type: Mapped["CatalogType"] = relationship("CatalogType", lazy="selectin")

    def __repr__(self) -> str:
        """String representation."""
        return f"<CatalogItem(id={self.id}, name={self.name[:30]})>"
