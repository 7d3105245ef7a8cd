"""Category database model."""

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from storefront.database import Base


class Category(Base):
    """
    Category model grouping products in the storefront.

    Attributes:
        category_id: Primary key
        category_name: Display name
        description: Optional long description
        product_count: Number of products currently in the category
        slug: URL-friendly category identifier (unique)
        created_at: Timestamp when record was created
    """

    __tablename__ = "categories"

    category_id = Column(Integer, primary_key=True, autoincrement=True)
    category_name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    product_count = Column(Integer, default=0, nullable=False)
    slug = Column(String(255), nullable=True, unique=True, index=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    products = relationship("Product", back_populates="category")

    def __repr__(self) -> str:
        """String representation of Category."""
        return f"<Category(id={self.category_id}, name='{self.category_name}', slug='{self.slug}')>"
