"""Product database model."""

from decimal import Decimal

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from storefront.database import Base


class Product(Base):
    """
    Product model representing an item for sale.

    Attributes:
        product_id: Primary key
        category_id: Foreign key to categories table
        product_name: Display name
        description: Optional long description
        price: Unit price
        discount_percent: Discount applied to the price, 0-100
        stock_quantity: Units available
        slug: URL-friendly product identifier (unique), ``<base-slug>-<product_id>``
        created_at: Timestamp when record was created
        updated_at: Timestamp of the last update
    """

    __tablename__ = "products"

    product_id = Column(Integer, primary_key=True, autoincrement=True)
    category_id = Column(Integer, ForeignKey("categories.category_id"), nullable=False, index=True)
    product_name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    discount_percent = Column(Numeric(5, 2), default=0, nullable=False)
    stock_quantity = Column(Integer, default=0, nullable=False)
    # Nullable only until the row is flushed and its id-suffixed slug assigned
    slug = Column(String(255), nullable=True, unique=True, index=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    category = relationship("Category", back_populates="products")

    @property
    def discounted_price(self) -> Decimal:
        """Price after applying the discount."""
        price = Decimal(self.price)
        discounted = price * (1 - Decimal(self.discount_percent or 0) / 100)
        return discounted.quantize(Decimal("0.01"))

    @property
    def is_in_stock(self) -> bool:
        return (self.stock_quantity or 0) > 0

    def __repr__(self) -> str:
        """String representation of Product."""
        return f"<Product(id={self.product_id}, name='{self.product_name}', slug='{self.slug}')>"
