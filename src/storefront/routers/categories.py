"""Categories API router - create, list, detail, update, and delete endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from storefront.config import slug_config
from storefront.database import get_db
from storefront.schemas.category import Category, CategoryCreate, CategoryList, CategoryUpdate
from storefront.services.catalog import (
    CatalogError,
    CatalogService,
    NotFoundError,
    SlugConflictError,
)

router = APIRouter()


def to_http_error(exc: CatalogError) -> HTTPException:
    """
    Map a catalog service error onto an HTTP error.

    Args:
        exc: The service-layer exception

    Returns:
        HTTPException with 404 for missing records and 409 for conflicts
    """
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, SlugConflictError):
        return HTTPException(status_code=409, detail=f"Slug conflict: {exc}")
    return HTTPException(status_code=409, detail=str(exc))


def get_catalog(db: Session = Depends(get_db)) -> CatalogService:
    """Dependency building a CatalogService on the request's session."""
    return CatalogService(db, config=slug_config)


@router.post("/categories", response_model=Category, status_code=201)
def create_category(
    payload: CategoryCreate,
    catalog: CatalogService = Depends(get_catalog),
) -> Category:
    """
    Create a category with a random-suffixed slug.

    Raises:
        HTTPException 409: If no unique slug could be assigned.
    """
    try:
        category = catalog.create_category(payload)
    except CatalogError as exc:
        raise to_http_error(exc) from exc
    return Category.model_validate(category)


@router.get("/categories", response_model=CategoryList)
def list_categories(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    catalog: CatalogService = Depends(get_catalog),
) -> CategoryList:
    """List categories, newest first."""
    categories, total = catalog.list_categories(page=page, limit=limit)
    return CategoryList(
        categories=[Category.model_validate(c) for c in categories],
        total=total,
        page=page,
        limit=limit,
    )


@router.get("/categories/slug/{slug}", response_model=Category)
def get_category_by_slug(slug: str, catalog: CatalogService = Depends(get_catalog)) -> Category:
    """Look up a category by its slug."""
    try:
        return Category.model_validate(catalog.get_category_by_slug(slug))
    except CatalogError as exc:
        raise to_http_error(exc) from exc


@router.get("/categories/{category_id}", response_model=Category)
def get_category(category_id: int, catalog: CatalogService = Depends(get_catalog)) -> Category:
    try:
        return Category.model_validate(catalog.get_category(category_id))
    except CatalogError as exc:
        raise to_http_error(exc) from exc


@router.patch("/categories/{category_id}", response_model=Category)
def update_category(
    category_id: int,
    payload: CategoryUpdate,
    catalog: CatalogService = Depends(get_catalog),
) -> Category:
    """Partially update a category. Its slug does not change."""
    try:
        return Category.model_validate(catalog.update_category(category_id, payload))
    except CatalogError as exc:
        raise to_http_error(exc) from exc


@router.delete("/categories/{category_id}", status_code=204)
def delete_category(category_id: int, catalog: CatalogService = Depends(get_catalog)) -> Response:
    """
    Delete an empty category.

    Raises:
        HTTPException 404: If the category is not found.
        HTTPException 409: If the category still has products.
    """
    try:
        catalog.delete_category(category_id)
    except CatalogError as exc:
        raise to_http_error(exc) from exc
    return Response(status_code=204)
