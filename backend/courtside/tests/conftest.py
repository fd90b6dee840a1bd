"""
Shared pytest configuration for backend tests.

Each test gets a fresh in-memory SQLite database. The API client overrides
``get_db`` so requests and the ``db`` fixture see the same data.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import courtside.models  # noqa: F401
from courtside.core.security import create_access_token
from courtside.db.base import Base
from courtside.db.session import get_db
from courtside.main import app
from courtside.services import user_service

TEST_PASSWORD = "testpassword123"


@pytest.fixture
def engine():
    """In-memory database shared by every connection of one test."""
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
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    """Database session for calling services directly."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    """Test client whose requests use the test database."""
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
def make_user(db):
    """Factory for registered users."""
    def _make_user(email: str, name: str = None, password: str = TEST_PASSWORD):
        return user_service.register_user(db, email, password, name)
    return _make_user


@pytest.fixture
def auth_headers():
    """Build a bearer header for a user."""
    def _auth_headers(user):
        token = create_access_token(
            data={"sub": user.email, "user_id": user.id, "role": user.role.value}
        )
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers


@pytest.fixture
def alice(make_user):
    return make_user("alice@example.com", "Alice")


@pytest.fixture
def bob(make_user):
    return make_user("bob@example.com", "Bob")


@pytest.fixture
def carol(make_user):
    return make_user("carol@example.com", "Carol")
