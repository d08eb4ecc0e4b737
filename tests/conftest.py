# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up test environment variables before any imports
# - Builds the app on an in-memory mongomock database
# - Provides registered-user fixtures with auth headers
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("JWT_SECRET", "test-secret-key-0123456789")

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from app.config import Settings
from app.context import AppContext
from app.main import create_app


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def test_settings():
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None, JWT_SECRET="test-secret-key-0123456789")


@pytest.fixture
def database():
    """Fresh in-memory database per test."""
    return AsyncMongoMockClient()["adaptive_fitness_test"]


@pytest.fixture
def app(test_settings, database):
    return create_app(AppContext(settings=test_settings, database=database))


@pytest.fixture
def client(app):
    """Test client that returns 500 responses instead of raising."""
    return TestClient(app, raise_server_exceptions=False)


def register(client, email="alex@example.com", **overrides):
    """Register a user and return the response body."""
    payload = {
        "name": "Alex",
        "email": email,
        "password": "correct-horse",
        "fitness_level": "intermediate",
        "goal": "build_muscle",
        "daily_calorie_target": 2400,
    }
    payload.update(overrides)
    response = client.post("/api/auth/register", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def auth_headers(client):
    """Authorization header for a freshly registered user."""
    body = register(client)
    return {"Authorization": f"Bearer {body['token']}"}


@pytest.fixture
def other_auth_headers(client):
    """Authorization header for a second, unrelated user."""
    body = register(client, email="sam@example.com", name="Sam")
    return {"Authorization": f"Bearer {body['token']}"}
