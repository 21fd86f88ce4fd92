"""Shared test fixtures for bookvault."""

import pytest

from bookvault.auth.service import AuthService
from bookvault.config import Settings
from bookvault.db import Store
from bookvault.main import create_app

TEST_SECRET = "test-secret-key-for-unit-tests-0123456789abcdef"


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a per-test database file.

    Uses bcrypt work factor 4 for faster execution.
    """
    return Settings(
        _env_file=None,
        jwt_secret_key=TEST_SECRET,
        database_path=str(tmp_path / "bookvault.db"),
        bcrypt_work_factor=4,
    )


@pytest.fixture
def store(settings):
    """Store with schema applied to a fresh temp-file database."""
    store = Store.from_settings(settings)
    store.init_schema()
    return store


@pytest.fixture
def auth_service(store, settings):
    """AuthService wired to the test store."""
    return AuthService(store.credentials, settings)


@pytest.fixture
def app(settings, store):
    """Flask app built from the test settings and store."""
    app = create_app(settings, store)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Create test client for API testing."""
    with app.test_client() as client:
        yield client


@pytest.fixture
def test_user(auth_service):
    """Register a test user.

    Returns a tuple of (credential, password).
    """
    password = "pw123"
    credential = auth_service.register("alice", password)
    return credential, password


@pytest.fixture
def jwt_token(auth_service, test_user):
    """Log the test user in and return the token."""
    credential, password = test_user
    return auth_service.login(credential.username, password)


@pytest.fixture
def auth_headers(jwt_token):
    """Authorization header carrying the test user's token."""
    return {"Authorization": f"Bearer {jwt_token}"}
