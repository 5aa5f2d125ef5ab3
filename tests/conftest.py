# tests/conftest.py
import os

# Settings are read at import time; configure before importing the app.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-access-secret"
os.environ["JWT_REFRESH_SECRET"] = "test-refresh-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RAZORPAY_KEY_ID"] = "rzp_test_key"
os.environ["RAZORPAY_SECRET_KEY"] = "rzp_test_secret"
os.environ.pop("ADMIN_EMAIL", None)
os.environ.pop("ADMIN_PASSWORD", None)
os.environ.pop("SUPABASE_URL", None)
os.environ.pop("SUPABASE_SERVICE_ROLE_KEY", None)

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session

from storefront.core.security import hash_password
from storefront.database import engine
from storefront.main import app
from storefront.models.product import Product
from storefront.models.user import User

API = "/api/v1"


@pytest.fixture(autouse=True)
def clean_db():
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    yield


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def session():
    with Session(engine) as s:
        yield s


@pytest.fixture
def user(session):
    u = User(email="shopper@mail.com", password_hash=hash_password("secret123"))
    session.add(u)
    session.commit()
    session.refresh(u)
    return u


@pytest.fixture
def make_product(session):
    def _make(**fields):
        fields.setdefault("product_name", "Phone")
        fields.setdefault("product_price", "499.99")
        p = Product(**fields)
        session.add(p)
        session.commit()
        session.refresh(p)
        return p

    return _make


@pytest.fixture
def admin_headers(client, session):
    session.add(
        User(email="admin@mail.com", password_hash=hash_password("adminpass"), role="admin")
    )
    session.commit()
    res = client.post(f"{API}/login", json={"email": "admin@mail.com", "password": "adminpass"})
    return {"Authorization": f"Bearer {res.json()['accessToken']}"}


@pytest.fixture
def user_headers(client, user):
    res = client.post(f"{API}/login", json={"email": user.email, "password": "secret123"})
    return {"Authorization": f"Bearer {res.json()['accessToken']}"}


@pytest.fixture
def enforce_foreign_keys():
    """Turn on SQLite FK enforcement, as Postgres always has it."""
    with engine.connect() as conn:
        conn.exec_driver_sql("PRAGMA foreign_keys=ON")
    yield
    with engine.connect() as conn:
        conn.exec_driver_sql("PRAGMA foreign_keys=OFF")
