"""
Shared fixtures: an in-memory SQLite database per test and a TestClient bound to it.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tripsplit.main import app
from tripsplit.db.base import Base
from tripsplit.db.session import get_db, init_db
from tripsplit.services.user_service import register_user


@pytest.fixture
def engine():
    """Fresh in-memory database with all tables."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    """Session for service-level tests."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    """TestClient whose requests use the test database."""
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def owner(db_session):
    return register_user("alice", "alice@example.com", "testpassword123", name="Alice", db=db_session)


@pytest.fixture
def other_owner(db_session):
    return register_user("mallory", "mallory@example.com", "testpassword123", db=db_session)


def signup_and_login(client, username: str) -> dict:
    """Register a user through the API and return bearer auth headers."""
    password = "testpassword123"
    response = client.post(
        "/api/auth/signup",
        json={
            "username": username,
            "email": f"{username}@example.com",
            "password": password
        }
    )
    assert response.status_code == 201
    response = client.post("/api/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def auth_headers(client):
    return signup_and_login(client, "alice")


@pytest.fixture
def other_auth_headers(client):
    return signup_and_login(client, "mallory")
