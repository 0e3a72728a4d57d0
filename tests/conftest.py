"""
Shared fixtures: an in-memory SQLite store, services bound to it, and a
TestClient over a fully built app.
"""
import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from apps.accounts.service import IdentityService
from apps.blog.service import PostService
from apps.shared.config import Settings
from apps.shared.database import create_db_engine, create_session_factory, init_db

TEST_SECRET = "test-secret-that-is-long-enough-for-hs256-signing"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url="sqlite:///:memory:",
        jwt_secret=TEST_SECRET,
        token_ttl_seconds=3600,
        environment="testing",
        log_level="DEBUG",
    )


@pytest.fixture
def db_session(settings):
    """Session on a fresh in-memory database."""
    engine = create_db_engine(settings.database_url)
    init_db(engine)
    session = create_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def identity(db_session, settings) -> IdentityService:
    return IdentityService(db_session, settings)


@pytest.fixture
def posts(db_session) -> PostService:
    return PostService(db_session)


@pytest.fixture
def alice(identity):
    return identity.signup("alice@example.com", "alice-pw")


@pytest.fixture
def bob(identity):
    return identity.signup("bob@example.com", "bob-pw")


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def register_and_login(client: TestClient, email: str, password: str) -> dict:
    """Sign up, log in and return the login payload plus an auth header."""
    response = client.post("/auth/signup", json={"email": email, "password": password})
    assert response.status_code == 201, response.text
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    payload = response.json()
    payload["headers"] = {"Authorization": f"Bearer {payload['token']}"}
    return payload


@pytest.fixture
def login_as(client):
    """Factory fixture: ``login_as(email, password)`` -> login payload with headers."""
    def _login_as(email: str, password: str) -> dict:
        return register_and_login(client, email, password)
    return _login_as
