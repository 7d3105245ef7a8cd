"""Catalog service: product and category records with slug assignment."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.config import SlugConfig
from storefront.models.category import Category
from storefront.models.product import Product
from storefront.schemas.category import CategoryCreate, CategoryUpdate
from storefront.schemas.product import ProductCreate, ProductUpdate
from storefront.utils.slug import normalize, truncate, with_bounded_suffix, with_random_suffix

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Raised when a catalog operation cannot be completed."""


class NotFoundError(CatalogError):
    """Raised when a product or category does not exist."""


class SlugConflictError(CatalogError):
    """Raised when no unique slug could be stored within the attempt budget."""


def _is_slug_violation(exc: IntegrityError) -> bool:
    """Whether an integrity error comes from a unique index on a slug column."""
    return "slug" in str(exc.orig).lower()


class CatalogService:
    """
    Service for creating and querying catalog records.

    Slug strategies:
    - Products get ``<base-slug>-<product_id>``. The id is unique, so the slug
      is too, regardless of how many products share a name.
    - Categories get ``<base-slug>-<random 6 digits>``. A collision is caught
      from the unique index and retried with a fresh suffix.

    Slugs are assigned once at creation and never recomputed on rename.
    """

    def __init__(self, db: Session, config: SlugConfig | None = None) -> None:
        """
        Initialize the catalog service.

        Args:
            db: SQLAlchemy database session
            config: Slug configuration (uses defaults if not provided)
        """
        self.db = db
        self.config = config or SlugConfig()

    # ------------------------------------------------------------------ slugs

    def _category_slug(self, name: str) -> str:
        """Build a random-suffixed slug that fits the slug column."""
        # "-" plus six digits
        base = truncate(normalize(name), self.config.max_length - 7)
        return with_random_suffix(base)

    # ------------------------------------------------------------- categories

    def create_category(self, data: CategoryCreate) -> Category:
        """
        Create a category, retrying on slug collisions.

        Args:
            data: Validated category fields

        Returns:
            The committed Category

        Raises:
            SlugConflictError: If every attempt collided with an existing slug
        """
        category = Category(
            category_name=data.category_name,
            description=data.description,
            product_count=0,
        )
        attempts = self.config.max_insert_attempts
        for attempt in range(1, attempts + 1):
            category.slug = self._category_slug(data.category_name)
            self.db.add(category)
            try:
                self.db.commit()
            except IntegrityError as exc:
                self.db.rollback()
                if not _is_slug_violation(exc):
                    raise
                logger.warning(
                    "Slug collision on '%s' (attempt %d/%d)", category.slug, attempt, attempts
                )
                continue
            self.db.refresh(category)
            logger.info("Created category %d with slug '%s'", category.category_id, category.slug)
            return category

        raise SlugConflictError(
            f"Could not assign a unique slug to '{data.category_name}' after {attempts} attempts"
        )

    def list_categories(self, page: int = 1, limit: int = 10) -> tuple[list[Category], int]:
        """
        List categories, newest first.

        Returns:
            Tuple of (categories on the requested page, total count)
        """
        query = self.db.query(Category)
        total = query.count()
        categories = (
            query.order_by(Category.created_at.desc(), Category.category_id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return categories, total

    def get_category(self, category_id: int) -> Category:
        category = self.db.query(Category).filter(Category.category_id == category_id).first()
        if not category:
            raise NotFoundError(f"Category with ID {category_id} not found")
        return category

    def get_category_by_slug(self, slug: str) -> Category:
        category = self.db.query(Category).filter(Category.slug == slug).first()
        if not category:
            raise NotFoundError(f"Category with slug '{slug}' not found")
        return category

    def update_category(self, category_id: int, data: CategoryUpdate) -> Category:
        """Apply a partial update. The slug is left untouched."""
        category = self.get_category(category_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if field == "category_name" and value is None:
                continue
            setattr(category, field, value)
        self.db.commit()
        self.db.refresh(category)
        return category

    def delete_category(self, category_id: int) -> None:
        """
        Delete a category.

        Raises:
            NotFoundError: If the category does not exist
            CatalogError: If products still belong to the category
        """
        category = self.get_category(category_id)
        remaining = self.db.query(Product).filter(Product.category_id == category_id).count()
        if remaining:
            raise CatalogError(
                f"Cannot delete category {category_id}: it still has {remaining} product(s)"
            )
        self.db.delete(category)
        self.db.commit()
        logger.info("Deleted category %d", category_id)

    # --------------------------------------------------------------- products

    def create_product(self, data: ProductCreate) -> Product:
        """
        Create a product with an id-suffixed slug.

        The row is flushed first to obtain its id, then the slug is set and
        the whole unit committed together with the category's product count.

        Raises:
            NotFoundError: If the category does not exist
        """
        category = self.get_category(data.category_id)

        product = Product(**data.model_dump())
        self.db.add(product)
        self.db.flush()  # Obtain product_id before building the slug

        product.slug = with_bounded_suffix(
            data.product_name, product.product_id, self.config.max_length
        )
        category.product_count = (category.product_count or 0) + 1
        self.db.commit()
        self.db.refresh(product)

        logger.info("Created product %d with slug '%s'", product.product_id, product.slug)
        return product

    def list_products(
        self,
        page: int = 1,
        limit: int = 10,
        category_id: int | None = None,
        search: str | None = None,
    ) -> tuple[list[Product], int]:
        """
        List products, newest first.

        Args:
            page: 1-based page number
            limit: Page size
            category_id: Only products in this category
            search: Case-insensitive substring of the name or description

        Returns:
            Tuple of (products on the requested page, total matching count)
        """
        query = self.db.query(Product)
        if category_id is not None:
            query = query.filter(Product.category_id == category_id)
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                Product.product_name.ilike(pattern) | Product.description.ilike(pattern)
            )
        total = query.count()
        products = (
            query.order_by(Product.created_at.desc(), Product.product_id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return products, total

    def get_product(self, product_id: int) -> Product:
        product = self.db.query(Product).filter(Product.product_id == product_id).first()
        if not product:
            raise NotFoundError(f"Product with ID {product_id} not found")
        return product

    def get_product_by_slug(self, slug: str) -> Product:
        product = self.db.query(Product).filter(Product.slug == slug).first()
        if not product:
            raise NotFoundError(f"Product with slug '{slug}' not found")
        return product

    def update_product(self, product_id: int, data: ProductUpdate) -> Product:
        """
        Apply a partial update. The slug is left untouched.

        Moving a product to another category keeps both product counts in sync.

        Raises:
            NotFoundError: If the product or the target category does not exist
        """
        product = self.get_product(product_id)
        changes = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field == "description"
        }

        new_category_id = changes.get("category_id")
        if new_category_id is not None and new_category_id != product.category_id:
            target = self.get_category(new_category_id)
            source = self.get_category(product.category_id)
            source.product_count = max((source.product_count or 0) - 1, 0)
            target.product_count = (target.product_count or 0) + 1

        for field, value in changes.items():
            setattr(product, field, value)
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete_product(self, product_id: int) -> None:
        """Delete a product and decrement its category's product count."""
        product = self.get_product(product_id)
        category = self.db.query(Category).filter(
            Category.category_id == product.category_id
        ).first()
        if category:
            category.product_count = max((category.product_count or 0) - 1, 0)
        self.db.delete(product)
        self.db.commit()
        logger.info("Deleted product %d", product_id)
