"""
Tests for authentication endpoints.
"""
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from bakery.core.config import settings
from bakery.models.user import User, UserRole

from conftest import TEST_PASSWORD


def _token(client: TestClient, email: str, password: str):
    return client.post(
        "/auth/token",
        data={"username": email, "password": password},
        headers={"Content-Type": "application/x-www-form-urlencoded"}
    )


class TestUserRegistration:
    def test_register_has_no_role(self, client: TestClient, db: Session):
        response = client.post(
            "/auth/register",
            json={"email": "nova@padaria.com.br", "password": "Fornada2024", "full_name": "Nova Conta"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "nova@padaria.com.br"
        assert data["role"] is None
        assert "password" not in data
        assert "password_hash" not in data

        user = db.query(User).filter(User.email == "nova@padaria.com.br").first()
        assert user is not None
        assert user.password_hash != "Fornada2024"

    def test_register_duplicate_email(self, client: TestClient, admin_user: User):
        response = client.post(
            "/auth/register",
            json={"email": admin_user.email, "password": "Fornada2024", "full_name": "Dup"},
        )
        assert response.status_code == 409

    def test_register_weak_password(self, client: TestClient):
        response = client.post(
            "/auth/register",
            json={"email": "fraca@padaria.com.br", "password": "abc", "full_name": "Fraca"},
        )
        assert response.status_code == 400


class TestLogin:
    def test_login_returns_role(self, client: TestClient, admin_user: User):
        response = _token(client, admin_user.email, TEST_PASSWORD)
        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["role"] == "admin"

    def test_wrong_password(self, client: TestClient, admin_user: User):
        assert _token(client, admin_user.email, "WrongPassword1").status_code == 401

    def test_inactive_user(self, client: TestClient, db: Session, admin_user: User):
        admin_user.is_active = False
        db.commit()
        assert _token(client, admin_user.email, TEST_PASSWORD).status_code == 401

    def test_me(self, client: TestClient, social_headers):
        response = client.get("/auth/me", headers=social_headers)
        assert response.status_code == 200
        assert response.json()["role"] == "social_media"

    def test_invalid_token(self, client: TestClient):
        response = client.get("/auth/me", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401


class TestChangePassword:
    def test_change_password(self, client: TestClient, social_headers, social_user: User):
        response = client.post(
            "/auth/change-password",
            json={"current_password": TEST_PASSWORD, "new_password": "NovaSenha2024"},
            headers=social_headers,
        )
        assert response.status_code == 200
        assert _token(client, social_user.email, "NovaSenha2024").status_code == 200

    def test_wrong_current_password(self, client: TestClient, social_headers):
        response = client.post(
            "/auth/change-password",
            json={"current_password": "Errada2024", "new_password": "NovaSenha2024"},
            headers=social_headers,
        )
        assert response.status_code == 403

    def test_requires_login(self, client: TestClient):
        response = client.post(
            "/auth/change-password",
            json={"current_password": TEST_PASSWORD, "new_password": "NovaSenha2024"},
        )
        assert response.status_code == 401


class TestSetupRoles:
    def test_assigns_configured_roles(self, client: TestClient, db: Session, roleless_user: User, monkeypatch):
        monkeypatch.setattr(settings, "SETUP_TOKEN", "setup-secret")
        monkeypatch.setattr(settings, "ADMIN_EMAIL", roleless_user.email)
        monkeypatch.setattr(settings, "SOCIAL_MEDIA_EMAIL", "missing@padaria.com.br")

        response = client.post("/auth/setup-roles", headers={"X-Setup-Token": "setup-secret"})

        assert response.status_code == 200
        results = response.json()
        assert results[0]["status"] == f"Role 'admin' assigned to {roleless_user.email}."
        assert results[1]["status"].startswith("ERROR")
        db.refresh(roleless_user)
        assert roleless_user.role == UserRole.admin

    def test_wrong_token(self, client: TestClient, monkeypatch):
        monkeypatch.setattr(settings, "SETUP_TOKEN", "setup-secret")
        response = client.post("/auth/setup-roles", headers={"X-Setup-Token": "guess"})
        assert response.status_code == 403

    def test_disabled_without_token(self, client: TestClient, monkeypatch):
        monkeypatch.setattr(settings, "SETUP_TOKEN", None)
        assert client.post("/auth/setup-roles").status_code == 404


def test_login_rate_limit(client: TestClient):
    for i in range(5):
        response = _token(client, f"user{i}@padaria.com.br", "Password123")
        assert response.status_code == 401

    response = _token(client, "user@padaria.com.br", "Password123")
    assert response.status_code == 429
    assert "too many requests" in response.json()["detail"].lower()
