"""Product Pydantic schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from storefront.schemas.category import sluggable_name


class ProductBase(BaseModel):
    """Base product schema with common fields."""

    category_id: int
    product_name: str = Field(min_length=1, max_length=200)
    description: str | None = None
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    discount_percent: Decimal = Field(default=Decimal("0"), ge=0, le=100, decimal_places=2)
    stock_quantity: int = Field(default=0, ge=0)


class ProductCreate(ProductBase):
    """Schema for creating a new product."""

    @field_validator("product_name")
    @classmethod
    def name_is_sluggable(cls, value: str) -> str:
        return sluggable_name(value)


class ProductUpdate(BaseModel):
    """Schema for partially updating a product. The slug never changes."""

    category_id: int | None = None
    product_name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    discount_percent: Decimal | None = Field(default=None, ge=0, le=100, decimal_places=2)
    stock_quantity: int | None = Field(default=None, ge=0)

    @field_validator("product_name")
    @classmethod
    def name_is_sluggable(cls, value: str | None) -> str | None:
        return None if value is None else sluggable_name(value)


class Product(ProductBase):
    """Complete product schema with database fields."""

    model_config = ConfigDict(from_attributes=True)

    product_id: int
    slug: str
    discounted_price: Decimal
    is_in_stock: bool
    created_at: datetime
    updated_at: datetime


class ProductList(BaseModel):
    """Paginated product listing."""

    products: list[Product]
    total: int
    page: int
    limit: int
