"""Shared fixtures: an in-memory SQLite schema per test and session-aware clients."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SESSION_SECRET"] = "test-secret"

import pytest
from fastapi.testclient import TestClient

from storerate.db.session import SessionLocal, engine, init_db
from storerate.main import app
from storerate.model.base import Base
from storerate.model.store_schema import StoreCreate
from storerate.model.user import Role
from storerate.model.user_schema import UserCreate
from storerate.repository.store import create_store
from storerate.repository.user import create_user

PASSWORD = "Password1!"


@pytest.fixture
def db():
    init_db()
    session = SessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    """Anonymous client."""
    return TestClient(app)


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(role: Role = Role.USER, email: str = None, password: str = PASSWORD):
        counter["n"] += 1
        data = UserCreate(
            email=email or f"{role.value}{counter['n']}@example.com",
            password=password,
            name=f"Test Account Number {counter['n']:03d}",
            address="1 Test Street",
            role=role,
        )
        return create_user(db, data)

    return _make


@pytest.fixture
def login_as(db, make_user):
    """Create a user with ``role`` and return a client holding their session cookie."""

    def _login(role: Role = Role.USER):
        user = make_user(role)
        c = TestClient(app)
        response = c.post("/api/login", json={"email": user.email, "password": PASSWORD})
        assert response.status_code == 200
        c.user = user
        return c

    return _login


@pytest.fixture
def make_store(db):
    def _make(name: str = "Corner Shop", address: str = "9 High Street"):
        return create_store(db, StoreCreate(name=name, address=address))

    return _make
