"""Services package."""

from storefront.services.catalog import (
    CatalogError,
    CatalogService,
    NotFoundError,
    SlugConflictError,
)

__all__ = ["CatalogError", "CatalogService", "NotFoundError", "SlugConflictError"]
