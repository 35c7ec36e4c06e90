"""
Backend-specific test fixtures and configuration.

These fixtures extend the global fixtures with ready-made services and a
FastAPI TestClient wired to a temporary data file.
"""

import pytest
from fastapi.testclient import TestClient


# =============================================================================
# Store and Service Fixtures
# =============================================================================

@pytest.fixture
def store(data_file):
    """Document store on a fresh temporary data file."""
    from app.database.document_store import DocumentStore

    return DocumentStore(data_file)


@pytest.fixture
def user_service(store):
    from app.core.security import PlaintextCredentialVerifier
    from app.services.user_service import UserService

    return UserService(store, PlaintextCredentialVerifier(), min_password_length=6)


@pytest.fixture
def photo_service(store):
    from app.services.photo_service import PhotoService

    return PhotoService(store)


@pytest.fixture
def registry(clock):
    """In-memory reset code registry driven by the fake clock."""
    from app.services.reset_codes import InMemoryResetCodeStore, ResetCodeRegistry

    return ResetCodeRegistry(InMemoryResetCodeStore(), ttl_seconds=120, clock=clock)


@pytest.fixture
def reset_service(user_service, registry, mailer):
    from app.services.password_reset_service import PasswordResetService

    return PasswordResetService(user_service, registry, mailer)


@pytest.fixture
def bob(user_service, bob_data):
    """The reference account, already created."""
    return user_service.create(**bob_data)


# =============================================================================
# App Fixtures
# =============================================================================

@pytest.fixture
def app(settings, mailer, registry):
    """
    Create the FastAPI app for testing.

    Uses the temporary data file, the recording mailer and the fake-clock
    registry so tests can read codes and move time.
    """
    from app.main import create_app

    return create_app(settings, mailer=mailer, reset_registry=registry)


@pytest.fixture
def client(app):
    """TestClient with the application lifespan running."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def signed_up(client, bob_data):
    """Sign the reference account up through the API."""
    response = client.post("/api/auth/signup", json=bob_data)
    assert response.status_code == 200
    return response.json()["user"]


# =============================================================================
# Response Assertion Helpers
# =============================================================================

@pytest.fixture
def assert_error_response():
    """Helper to assert error response structure."""
    def _assert(response, status_code: int, error_contains: str = None):
        assert response.status_code == status_code
        data = response.json()
        assert "error" in data
        if error_contains:
            assert error_contains.lower() in data["error"].lower()
    return _assert
