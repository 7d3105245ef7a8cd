"""Products API router - create, list, detail, update, and delete endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response

from storefront.routers.categories import get_catalog, to_http_error
from storefront.schemas.product import Product, ProductCreate, ProductList, ProductUpdate
from storefront.services.catalog import CatalogError, CatalogService

router = APIRouter()


@router.post("/products", response_model=Product, status_code=201)
def create_product(
    payload: ProductCreate,
    catalog: CatalogService = Depends(get_catalog),
) -> Product:
    """
    Create a product. Its slug is the base slug of the name plus the new id.

    Raises:
        HTTPException 404: If the category is not found.
    """
    try:
        product = catalog.create_product(payload)
    except CatalogError as exc:
        raise to_http_error(exc) from exc
    return Product.model_validate(product)


@router.get("/products", response_model=ProductList)
def list_products(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    category_id: int | None = None,
    search: str | None = None,
    catalog: CatalogService = Depends(get_catalog),
) -> ProductList:
    """
    List products, newest first.

    Args:
        page: 1-based page number.
        limit: Page size (1-100).
        category_id: Restrict to one category.
        search: Substring matched against name and description.
    """
    products, total = catalog.list_products(
        page=page, limit=limit, category_id=category_id, search=search
    )
    return ProductList(
        products=[Product.model_validate(p) for p in products],
        total=total,
        page=page,
        limit=limit,
    )


@router.get("/products/slug/{slug}", response_model=Product)
def get_product_by_slug(slug: str, catalog: CatalogService = Depends(get_catalog)) -> Product:
    """Look up a product by its slug."""
    try:
        return Product.model_validate(catalog.get_product_by_slug(slug))
    except CatalogError as exc:
        raise to_http_error(exc) from exc


@router.get("/products/{product_id}", response_model=Product)
def get_product(product_id: int, catalog: CatalogService = Depends(get_catalog)) -> Product:
    try:
        return Product.model_validate(catalog.get_product(product_id))
    except CatalogError as exc:
        raise to_http_error(exc) from exc


@router.patch("/products/{product_id}", response_model=Product)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    catalog: CatalogService = Depends(get_catalog),
) -> Product:
    """Partially update a product. Renaming keeps the existing slug."""
    try:
        return Product.model_validate(catalog.update_product(product_id, payload))
    except CatalogError as exc:
        raise to_http_error(exc) from exc


@router.delete("/products/{product_id}", status_code=204)
def delete_product(product_id: int, catalog: CatalogService = Depends(get_catalog)) -> Response:
    try:
        catalog.delete_product(product_id)
    except CatalogError as exc:
        raise to_http_error(exc) from exc
    return Response(status_code=204)
