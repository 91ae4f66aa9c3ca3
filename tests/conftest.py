import os

# Settings are read at import time, so the environment must be ready first
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from evercart.core.security import create_access_token
from evercart.crud import user as crud_user
from evercart.db.base import Base
from evercart.db.deps import get_db
from evercart.main import app
from evercart.models.product import Product
from evercart.models.user import UserRole


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_product(db):
    def factory(**overrides):
        data = {
            "name": "Wireless Headphones",
            "category": "Electronics",
            "price": 10.0,
            "brand": "AudioX",
            "rating": 4.5,
            "availability": True,
            "description": "Noise cancelling headphones",
            "image": "https://example.com/headphones.jpg",
        }
        data.update(overrides)
        product = Product(**data)
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return factory


@pytest.fixture
def make_user(db):
    def factory(email="shopper@example.com", name="Shopper", password="secret123", role=UserRole.user):
        return crud_user.create_user(db, name=name, email=email, password=password, role=role)

    return factory


def auth_headers(email: str) -> dict:
    return {"Authorization": f"Bearer {create_access_token(data={'sub': email})}"}


@pytest.fixture
def headers_for():
    return auth_headers


@pytest.fixture
def shopper(make_user):
    return make_user()


@pytest.fixture
def shopper_headers(shopper):
    return auth_headers(shopper.email)


@pytest.fixture
def admin(make_user):
    return make_user(email="admin@example.com", name="Admin", role=UserRole.admin)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin.email)
