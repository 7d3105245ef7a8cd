"""Integration tests for the catalog API endpoints."""

from __future__ import annotations

import re
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.database import Base, get_db
from storefront.main import app
from storefront.models.category import Category
from storefront.utils import slug as slug_module

# ---------------------------------------------------------------------------
# In-memory SQLite test database (shared via StaticPool)
# ---------------------------------------------------------------------------
SQLALCHEMY_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    """Dependency override that uses the test in-memory database."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def setup_db():
    """Create and tear down tables around each test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    """TestClient with the DB dependency overridden."""
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    """SQLAlchemy session for pre-populating test data."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sample_category(client):
    """Create a category through the API."""
    response = client.post(
        "/api/categories",
        json={"category_name": "Thời Trang Nam", "description": "Quần áo nam"},
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def sample_product(client, sample_category):
    """Create a product through the API."""
    response = client.post(
        "/api/products",
        json={
            "category_id": sample_category["category_id"],
            "product_name": "Áo Thun Đẹp",
            "description": "Áo thun cotton",
            "price": "100.00",
            "discount_percent": "10",
            "stock_quantity": 3,
        },
    )
    assert response.status_code == 201
    return response.json()


# ---------------------------------------------------------------------------
# Tests: /health
# ---------------------------------------------------------------------------


class TestHealth:
    """Tests for GET /health."""

    def test_health(self, client):
        """Health endpoint reports ok."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


# ---------------------------------------------------------------------------
# Tests: /api/categories
# ---------------------------------------------------------------------------


class TestCategories:
    """Tests for the category endpoints."""

    def test_create_category(self, sample_category):
        """Created categories carry a random-suffixed slug."""
        assert sample_category["category_name"] == "Thời Trang Nam"
        assert sample_category["product_count"] == 0
        assert re.fullmatch(r"thoi-trang-nam-\d{6}", sample_category["slug"])

    def test_create_category_unsluggable_name(self, client):
        """Names without letters or digits are rejected with 422."""
        response = client.post("/api/categories", json={"category_name": "@@@"})
        assert response.status_code == 422

    def test_create_category_slug_conflict(self, client, db, monkeypatch):
        """Persistent slug collisions surface as 409."""
        db.add(Category(category_name="Giày", slug="giay-123456"))
        db.commit()
        monkeypatch.setattr(slug_module.random, "randint", lambda low, high: 123456)

        response = client.post("/api/categories", json={"category_name": "Giày"})

        assert response.status_code == 409
        assert "Slug conflict" in response.json()["detail"]

    def test_list_categories(self, client, sample_category):
        """Listing includes pagination metadata."""
        response = client.get("/api/categories", params={"page": 1, "limit": 5})
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["page"] == 1
        assert data["limit"] == 5
        assert data["categories"][0]["slug"] == sample_category["slug"]

    def test_list_categories_invalid_limit(self, client):
        """Out-of-range page sizes are rejected."""
        assert client.get("/api/categories", params={"limit": 0}).status_code == 422
        assert client.get("/api/categories", params={"limit": 101}).status_code == 422

    def test_get_category_by_id_and_slug(self, client, sample_category):
        """Categories are reachable by id and by slug."""
        by_id = client.get(f"/api/categories/{sample_category['category_id']}")
        by_slug = client.get(f"/api/categories/slug/{sample_category['slug']}")
        assert by_id.status_code == 200
        assert by_slug.status_code == 200
        assert by_id.json() == by_slug.json()

    def test_get_category_not_found(self, client):
        """Unknown ids and slugs return 404."""
        assert client.get("/api/categories/999").status_code == 404
        assert client.get("/api/categories/slug/khong-co").status_code == 404

    def test_update_category_keeps_slug(self, client, sample_category):
        """Renaming through PATCH leaves the slug alone."""
        response = client.patch(
            f"/api/categories/{sample_category['category_id']}",
            json={"category_name": "Thời Trang Nữ"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["category_name"] == "Thời Trang Nữ"
        assert data["slug"] == sample_category["slug"]
        assert data["description"] == "Quần áo nam"

    def test_delete_category(self, client, sample_category):
        """Empty categories are deleted with 204."""
        response = client.delete(f"/api/categories/{sample_category['category_id']}")
        assert response.status_code == 204
        assert client.get(f"/api/categories/{sample_category['category_id']}").status_code == 404

    def test_delete_category_with_products(self, client, sample_category, sample_product):
        """Categories with products cannot be deleted."""
        response = client.delete(f"/api/categories/{sample_category['category_id']}")
        assert response.status_code == 409


# ---------------------------------------------------------------------------
# Tests: /api/products
# ---------------------------------------------------------------------------


class TestProducts:
    """Tests for the product endpoints."""

    def test_create_product(self, sample_product):
        """Created products carry an id-suffixed slug and derived fields."""
        assert sample_product["slug"] == f"ao-thun-dep-{sample_product['product_id']}"
        assert Decimal(str(sample_product["price"])) == Decimal("100")
        assert Decimal(str(sample_product["discounted_price"])) == Decimal("90")
        assert sample_product["is_in_stock"] is True

    def test_create_product_updates_category_count(self, client, sample_category, sample_product):
        """The category's product count reflects the new product."""
        response = client.get(f"/api/categories/{sample_category['category_id']}")
        assert response.json()["product_count"] == 1

    def test_create_same_name_products(self, client, sample_category, sample_product):
        """A second product with the same name gets its own slug."""
        response = client.post(
            "/api/products",
            json={
                "category_id": sample_category["category_id"],
                "product_name": "Áo Thun Đẹp",
                "price": 120,
            },
        )
        assert response.status_code == 201
        second = response.json()
        assert second["slug"] == f"ao-thun-dep-{second['product_id']}"
        assert second["slug"] != sample_product["slug"]

    def test_create_product_unknown_category(self, client):
        """Creating a product in a missing category returns 404."""
        response = client.post(
            "/api/products",
            json={"category_id": 999, "product_name": "Áo", "price": 10},
        )
        assert response.status_code == 404
        assert "Category with ID 999 not found" in response.json()["detail"]

    def test_create_product_invalid_payload(self, client, sample_category):
        """Invalid prices and discounts are rejected with 422."""
        base = {"category_id": sample_category["category_id"], "product_name": "Áo"}
        assert client.post("/api/products", json={**base, "price": -1}).status_code == 422
        assert (
            client.post(
                "/api/products", json={**base, "price": 10, "discount_percent": 101}
            ).status_code
            == 422
        )

    def test_get_product_by_slug(self, client, sample_product):
        """Products are reachable by slug."""
        response = client.get(f"/api/products/slug/{sample_product['slug']}")
        assert response.status_code == 200
        assert response.json()["product_id"] == sample_product["product_id"]

    def test_get_product_not_found(self, client):
        """Unknown products return 404."""
        assert client.get("/api/products/999").status_code == 404
        assert client.get("/api/products/slug/ao-thun-999").status_code == 404

    def test_list_products_filters(self, client, sample_category, sample_product):
        """Listing supports category and search filters."""
        response = client.get(
            "/api/products",
            params={"category_id": sample_category["category_id"], "search": "cotton"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["products"][0]["slug"] == sample_product["slug"]

        response = client.get("/api/products", params={"search": "khong-co"})
        assert response.json()["total"] == 0

    def test_update_product_keeps_slug(self, client, sample_product):
        """Renaming a product leaves its slug alone."""
        response = client.patch(
            f"/api/products/{sample_product['product_id']}",
            json={"product_name": "Áo Polo", "stock_quantity": 0},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["product_name"] == "Áo Polo"
        assert data["slug"] == sample_product["slug"]
        assert data["is_in_stock"] is False

    def test_delete_product(self, client, sample_category, sample_product):
        """Deleted products are gone and the category count drops."""
        response = client.delete(f"/api/products/{sample_product['product_id']}")
        assert response.status_code == 204
        assert client.get(f"/api/products/{sample_product['product_id']}").status_code == 404
        category = client.get(f"/api/categories/{sample_category['category_id']}").json()
        assert category["product_count"] == 0
