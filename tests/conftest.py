"""Pytest configuration and fixtures."""

import httpx
import pytest
from fastapi.testclient import TestClient

from app.api.db.memory_storage import MemoryStorage
from app.api.v1.services.google import GoogleIdentityVerifier
from config import settings
from main import create_app

# access token -> Google user-info profile
GOOGLE_PROFILES = {
    "token-alice": {
        "id": "g-alice",
        "email": "alice@example.com",
        "name": "Alice",
        "picture": "https://example.com/alice.png",
        "verified_email": True,
    },
    "token-bob": {
        "id": "g-bob",
        "email": "bob@example.com",
        "name": "Bob",
        "verified_email": True,
    },
}


class FakeGoogle:
    """Stand-in for the Google user-info endpoint that counts its calls."""

    def __init__(self, profiles=None):
        self.profiles = dict(profiles or GOOGLE_PROFILES)
        self.calls = 0

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        token = request.headers.get("authorization", "").removeprefix("Bearer ")
        profile = self.profiles.get(token)
        if profile is None:
            return httpx.Response(401, json={"error": "invalid_token"})
        return httpx.Response(200, json=profile)

    def verifier(self) -> GoogleIdentityVerifier:
        return GoogleIdentityVerifier(transport=httpx.MockTransport(self.handler))


@pytest.fixture(autouse=True)
def development_environment(monkeypatch):
    """Run every test with development cookie settings and a known secret."""
    monkeypatch.setattr(settings, "ENVIRONMENT", "development")
    monkeypatch.setattr(settings, "JWT_SECRET", "test-jwt-secret")


@pytest.fixture
def fake_google():
    return FakeGoogle()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def app(storage, fake_google):
    return create_app(storage=storage, identity_verifier=fake_google.verifier())


@pytest.fixture
def client(app):
    """Test client without a session."""
    with TestClient(app) as test_client:
        yield test_client


def _login(client: TestClient, access_token: str = "token-alice") -> dict:
    """Sign in through the Google endpoint; the client keeps the session cookie."""
    response = client.post("/api/auth/google", json={"access_token": access_token})
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture
def alice(client):
    """Client signed in as Alice, plus her user record."""
    return client, _login(client, "token-alice")


@pytest.fixture
def bob(app):
    """Separate client signed in as Bob."""
    with TestClient(app) as bob_client:
        yield bob_client, _login(bob_client, "token-bob")


@pytest.fixture
def login():
    """Helper signing a client in with a fake Google access token."""
    return _login
