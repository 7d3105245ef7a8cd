"""Category Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from storefront.utils.slug import normalize


def sluggable_name(name: str) -> str:
    """Reject names that would produce an empty base slug."""
    name = name.strip()
    if not normalize(name):
        raise ValueError("name must contain at least one letter or digit")
    return name


class CategoryBase(BaseModel):
    """Base category schema with common fields."""

    category_name: str = Field(min_length=1, max_length=100)
    description: str | None = None


class CategoryCreate(CategoryBase):
    """Schema for creating a new category."""

    @field_validator("category_name")
    @classmethod
    def name_is_sluggable(cls, value: str) -> str:
        return sluggable_name(value)


class CategoryUpdate(BaseModel):
    """Schema for partially updating a category."""

    category_name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = None

    @field_validator("category_name")
    @classmethod
    def name_is_sluggable(cls, value: str | None) -> str | None:
        return None if value is None else sluggable_name(value)


class Category(CategoryBase):
    """Complete category schema with database fields."""

    model_config = ConfigDict(from_attributes=True)

    category_id: int
    product_count: int
    slug: str
    created_at: datetime


class CategoryList(BaseModel):
    """Paginated category listing."""

    categories: list[Category]
    total: int
    page: int
    limit: int
