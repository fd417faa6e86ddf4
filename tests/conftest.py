import os

# Must be set before the application modules create the engine
os.environ["DATABASE_URI"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

from dating_app.database import Base, SessionLocal, engine
from dating_app.main import app
import dating_app.models  # noqa: F401
from tests.helpers import auth_headers, registration_payload


@pytest.fixture()
def client():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def db(client):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def register(client):
    """Register a user and return (token, user_id)"""
    def _register(username, **overrides):
        response = client.post("/api/auth/register", json=registration_payload(username, **overrides))
        assert response.status_code == 201, response.text
        body = response.json()
        return body["access_token"], body["user"]["id"]
    return _register


@pytest.fixture()
def matched_pair(client, register):
    """Two users, alice and bob, with an accepted request from alice to bob"""
    alice_token, alice_id = register("alice")
    bob_token, bob_id = register("bob")

    sent = client.post(f"/api/requests/send/{bob_id}", headers=auth_headers(alice_token))
    assert sent.status_code == 201, sent.text
    request_id = sent.json()["request"]["id"]

    accepted = client.post(f"/api/requests/accept/{request_id}", headers=auth_headers(bob_token))
    assert accepted.status_code == 200, accepted.text

    return {
        "alice": (alice_token, alice_id),
        "bob": (bob_token, bob_id),
        "request_id": request_id,
    }
