"""
Pytest configuration and fixtures for testing the bakery backend application.
"""
import sys
import os
from typing import Generator, Dict

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

# Add the parent directory to the path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from bakery.main import app
from bakery.db.session import Base, get_db, get_storage
from bakery.models.category import Category
from bakery.models.product import Product
from bakery.models.user import User, UserRole
from bakery.storage import LocalStorage
from bakery.utils.hash import hash_password

TEST_PASSWORD = "TestPassword123"
STORAGE_BASE_URL = "http://testserver/uploads"

# Create in-memory SQLite database for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """
    Create a fresh database for each test function.
    """
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def storage(tmp_path) -> LocalStorage:
    """Object storage rooted in a temporary directory."""
    return LocalStorage(tmp_path / "uploads", STORAGE_BASE_URL)


@pytest.fixture(scope="function")
def client(db: Session, storage: LocalStorage) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database and storage.
    """
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage

    # Reset rate limiter for each test to avoid rate limit issues in tests
    app.state.limiter.reset()

    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def stored_files(storage: LocalStorage):
    """Every object currently in the storage directory."""
    return sorted(p for p in storage.base_path.rglob("*") if p.is_file())


def store_image(storage: LocalStorage, name: str) -> str:
    """Write a small image object and return its public URL."""
    return storage.write(f"products/{name}", b"\x89PNG fake", content_type="image/png").url


def _make_user(db: Session, full_name: str, email: str, role) -> User:
    user = User(
        full_name=full_name,
        email=email,
        password_hash=hash_password(TEST_PASSWORD),
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin_user(db: Session) -> User:
    return _make_user(db, "Store Admin", "admin@padaria.com.br", UserRole.admin)


@pytest.fixture
def social_user(db: Session) -> User:
    return _make_user(db, "Social Media", "social@padaria.com.br", UserRole.social_media)


@pytest.fixture
def roleless_user(db: Session) -> User:
    """A registered account that has not been given a back-office role."""
    return _make_user(db, "New Account", "new@padaria.com.br", None)


def _login(client: TestClient, email: str) -> Dict[str, str]:
    response = client.post(
        "/auth/token",
        data={"username": email, "password": TEST_PASSWORD},
        headers={"Content-Type": "application/x-www-form-urlencoded"}
    )
    assert response.status_code == 200
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client: TestClient, admin_user: User) -> Dict[str, str]:
    return _login(client, admin_user.email)


@pytest.fixture
def social_headers(client: TestClient, social_user: User) -> Dict[str, str]:
    return _login(client, social_user.email)


@pytest.fixture
def roleless_headers(client: TestClient, roleless_user: User) -> Dict[str, str]:
    return _login(client, roleless_user.email)


@pytest.fixture
def category(db: Session) -> Category:
    category = Category(name="Bolos", slug="bolos")
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


@pytest.fixture
def product(db: Session, storage: LocalStorage, category: Category) -> Product:
    """A product in the 'bolos' category with two stored images."""
    product = Product(
        name="Bolo de Cenoura",
        slug="bolo-de-cenoura",
        description="Com cobertura de chocolate",
        price=25.9,
        category=category.name,
        category_slug=category.slug,
        images=[store_image(storage, "cenoura-1.png"), store_image(storage, "cenoura-2.png")],
        featured=False,
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    return product
