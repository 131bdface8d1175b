"""
Tests for category management.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from bakery.core.exceptions import ConflictError, ResourceInUseError, ValidationError
from bakery.models.category import Category
from bakery.models.product import Product
from bakery.services.category_service import CategoryService


class TestCategoryService:
    def test_slug_defaults_from_name(self, db: Session):
        category = CategoryService.create_category(db, {"name": "  Pães Artesanais "})
        assert category.name == "Pães Artesanais"
        assert category.slug == "paes-artesanais"

    def test_name_required(self, db: Session):
        with pytest.raises(ValidationError):
            CategoryService.create_category(db, {"slug": "x"})

    def test_duplicate_slug(self, db: Session, category: Category):
        with pytest.raises(ConflictError):
            CategoryService.create_category(db, {"name": "Bolos!"})

    def test_update_slug_conflict(self, db: Session, category: Category):
        other = CategoryService.create_category(db, {"name": "Tortas"})
        with pytest.raises(ConflictError):
            CategoryService.update_category(db, other.id, {"slug": "bolos"})

    def test_listed_by_name(self, db: Session):
        for name in ("Tortas", "Bolos", "Pães"):
            CategoryService.create_category(db, {"name": name})
        assert [c.name for c in CategoryService.list_categories(db)] == ["Bolos", "Pães", "Tortas"]

    def test_delete_in_use(self, db: Session, category: Category, product: Product):
        with pytest.raises(ResourceInUseError):
            CategoryService.delete_category(db, category.id)
        assert db.query(Category).count() == 1


class TestCategoriesAPI:
    def test_public_read(self, client: TestClient, category: Category):
        response = client.get("/api/categories")
        assert response.status_code == 200
        assert response.json()[0]["slug"] == "bolos"
        assert client.get(f"/api/categories/{category.id}").json()["name"] == "Bolos"
        assert client.get("/api/categories/unknown").status_code == 404

    def test_admin_crud(self, client: TestClient, admin_headers):
        created = client.post("/api/categories", json={"name": "Salgados"}, headers=admin_headers)
        assert created.status_code == 201
        category_id = created.json()["id"]

        duplicate = client.post("/api/categories", json={"name": "Salgados"}, headers=admin_headers)
        assert duplicate.status_code == 409

        renamed = client.put(
            f"/api/categories/{category_id}", json={"name": "Salgados Assados"}, headers=admin_headers
        )
        assert renamed.status_code == 200
        assert renamed.json()["name"] == "Salgados Assados"
        assert renamed.json()["slug"] == "salgados"

        deleted = client.delete(f"/api/categories/{category_id}", headers=admin_headers)
        assert deleted.status_code == 200
        assert deleted.json() == {"message": "Category deleted successfully"}
        assert client.get(f"/api/categories/{category_id}").status_code == 404

    def test_delete_in_use_is_409(self, client: TestClient, admin_headers, category: Category, product: Product):
        response = client.delete(f"/api/categories/{category.id}", headers=admin_headers)
        assert response.status_code == 409
        assert "in use" in response.json()["detail"]

    def test_social_media_cannot_write(self, client: TestClient, social_headers):
        response = client.post("/api/categories", json={"name": "Salgados"}, headers=social_headers)
        assert response.status_code == 403
