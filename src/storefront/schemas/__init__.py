"""Pydantic schemas package."""

from storefront.schemas.category import (
    Category,
    CategoryBase,
    CategoryCreate,
    CategoryList,
    CategoryUpdate,
)
from storefront.schemas.product import (
    Product,
    ProductBase,
    ProductCreate,
    ProductList,
    ProductUpdate,
)

__all__ = [
    "Category",
    "CategoryBase",
    "CategoryCreate",
    "CategoryList",
    "CategoryUpdate",
    "Product",
    "ProductBase",
    "ProductCreate",
    "ProductList",
    "ProductUpdate",
]
