"""Shared test fixtures — in-memory SQLite + FastAPI test client.

Invariants:
    - Environment is pinned before the application is imported
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test database
    - Rate limiter and metrics start empty for every client
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_ALGORITHM"] = "HS256"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker, Session

from app.core.database import Base, build_engine, get_db
from app.auth.jwt_manager import jwt_manager
from app.auth.rate_limiter import rate_limiter
from app.api.metrics import metrics_collector
from app.main import app


@pytest.fixture
def test_engine():
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def test_session_factory(test_engine):
    return sessionmaker(bind=test_engine, autocommit=False, autoflush=False, class_=Session)


@pytest.fixture
def test_db(test_session_factory):
    session = test_session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    def override_get_db():
        db = test_session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    rate_limiter.reset()
    metrics_collector.reset()

    yield TestClient(app)

    app.dependency_overrides.clear()
    rate_limiter.reset()


@pytest.fixture
def auth_headers():
    """Build bearer headers for a user id."""
    def _headers(user_id: int) -> dict:
        return {"Authorization": f"Bearer {jwt_manager.create_access_token(user_id)}"}
    return _headers
