"""
Tests for the change request endpoints.
"""
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from bakery.models.category import Category
from bakery.models.product import Product


def _submit(client: TestClient, headers, **payload):
    return client.post("/api/change-requests", json=payload, headers=headers)


class TestSubmitChangeRequest:
    def test_social_media_submits(self, client: TestClient, social_headers, db: Session):
        response = _submit(
            client,
            social_headers,
            type="category_create",
            data={"name": "Tortas"},
            change_summary="Nova categoria: Tortas",
        )

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "pending"
        assert body["type"] == "category_create"
        assert body["submitted_by"] == "social@padaria.com.br"
        assert body["submitted_at"]
        assert body["target_id"] is None
        assert db.query(Category).count() == 0

    def test_status_in_body_is_ignored(self, client: TestClient, social_headers):
        response = client.post(
            "/api/change-requests",
            json={"type": "category_create", "data": {"name": "Tortas"}, "status": "approved"},
            headers=social_headers,
        )
        assert response.status_code == 201
        assert response.json()["status"] == "pending"

    def test_missing_fields(self, client: TestClient, social_headers):
        assert _submit(client, social_headers, data={"name": "Tortas"}).status_code == 400
        assert _submit(client, social_headers, type="category_create").status_code == 400
        assert _submit(client, social_headers, type="bogus", data={"a": 1}).status_code == 400
        response = _submit(client, social_headers, type="product_update", data={"price": 1})
        assert response.status_code == 400
        assert "target_id" in response.json()["detail"]

    def test_anonymous_rejected(self, client: TestClient):
        response = _submit(client, {}, type="category_create", data={"name": "Tortas"})
        assert response.status_code == 401

    def test_account_without_role_forbidden(self, client: TestClient, roleless_headers):
        response = _submit(client, roleless_headers, type="category_create", data={"name": "Tortas"})
        assert response.status_code == 403


class TestReviewChangeRequest:
    def test_full_approval_flow(self, client: TestClient, social_headers, admin_headers, db: Session):
        request_id = _submit(
            client, social_headers, type="category_create", data={"name": "Tortas"}
        ).json()["id"]

        pending = client.get("/api/change-requests/pending", headers=admin_headers)
        assert [c["id"] for c in pending.json()] == [request_id]

        response = client.put(
            f"/api/change-requests/{request_id}", json={"status": "approved"}, headers=admin_headers
        )
        assert response.status_code == 200
        assert response.json() == {
            "message": "Change approved successfully.",
            "id": request_id,
            "status": "approved",
        }
        assert db.query(Category).filter(Category.slug == "tortas").count() == 1

        detail = client.get(f"/api/change-requests/{request_id}", headers=social_headers).json()
        assert detail["status"] == "approved"
        assert detail["reviewed_by"] == "admin@padaria.com.br"

        assert client.get("/api/change-requests/pending", headers=admin_headers).json() == []

        again = client.put(
            f"/api/change-requests/{request_id}", json={"status": "rejected"}, headers=admin_headers
        )
        assert again.status_code == 409

    def test_social_media_cannot_decide(self, client: TestClient, social_headers):
        request_id = _submit(
            client, social_headers, type="category_create", data={"name": "Tortas"}
        ).json()["id"]

        response = client.put(
            f"/api/change-requests/{request_id}", json={"status": "approved"}, headers=social_headers
        )
        assert response.status_code == 403

    def test_invalid_status(self, client: TestClient, social_headers, admin_headers):
        request_id = _submit(
            client, social_headers, type="category_create", data={"name": "Tortas"}
        ).json()["id"]

        response = client.put(
            f"/api/change-requests/{request_id}", json={"status": "pending"}, headers=admin_headers
        )
        assert response.status_code == 400

    def test_unknown_request(self, client: TestClient, admin_headers):
        response = client.put(
            "/api/change-requests/nope", json={"status": "approved"}, headers=admin_headers
        )
        assert response.status_code == 404
        assert client.get("/api/change-requests/nope", headers=admin_headers).status_code == 404

    def test_missing_target_returns_404_and_stays_pending(
        self, client: TestClient, social_headers, admin_headers
    ):
        request_id = _submit(
            client, social_headers, type="product_update", target_id="p1", data={"price": 10}
        ).json()["id"]

        response = client.put(
            f"/api/change-requests/{request_id}", json={"status": "approved"}, headers=admin_headers
        )
        assert response.status_code == 404
        detail = client.get(f"/api/change-requests/{request_id}", headers=admin_headers).json()
        assert detail["status"] == "pending"

    def test_approved_product_update(
        self, client: TestClient, social_headers, admin_headers, product: Product, db: Session
    ):
        request_id = _submit(
            client,
            social_headers,
            type="product_update",
            target_id=product.id,
            data={"price": "30", "featured": "true"},
            change_summary="Edição do produto: Bolo de Cenoura",
        ).json()["id"]

        client.put(f"/api/change-requests/{request_id}", json={"status": "approved"}, headers=admin_headers)

        db.refresh(product)
        assert product.price == 30.0
        assert product.featured is True

    def test_list_filtered_by_status(self, client: TestClient, social_headers, admin_headers):
        first = _submit(client, social_headers, type="category_create", data={"name": "A"}).json()["id"]
        second = _submit(client, social_headers, type="category_create", data={"name": "B"}).json()["id"]
        decision = client.put(f"/api/change-requests/{first}", json={"status": "rejected"}, headers=admin_headers)
        assert decision.json()["message"] == "Change rejected successfully."

        all_requests = client.get("/api/change-requests", headers=admin_headers).json()
        assert [c["id"] for c in all_requests] == [second, first]

        rejected = client.get("/api/change-requests?status=rejected", headers=admin_headers).json()
        assert [c["id"] for c in rejected] == [first]

        assert client.get("/api/change-requests?status=bogus", headers=admin_headers).status_code == 400
