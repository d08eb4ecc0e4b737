# =============================================================================
# tests/test_app.py - Application Assembly Tests
# =============================================================================
# Tests for the bootstrap behavior shared by every route:
# - Health endpoints
# - CORS allow-list
# - 404 / 500 JSON responses
# - JSON and URL-encoded body parsing
# - Request logging with credential redaction
# =============================================================================

import logging
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from app.context import AppContext
from app.main import create_app

ALLOWED_ORIGIN = "http://localhost:5173"
DISALLOWED_ORIGIN = "http://evil.example.com"


# =============================================================================
# Health Endpoints
# =============================================================================

class TestHealth:
    """Tests for GET / and GET /api/health."""

    def test_root_greeting(self, client):
        """Test the root endpoint payload."""
        response = client.get("/")

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Adaptive Fitness API",
            "documentation": "/api/health",
        }

    def test_root_is_idempotent(self, client):
        """Test that repeated calls return identical bodies."""
        assert client.get("/").json() == client.get("/").json()

    def test_health_check(self, client):
        """Test that health returns success and a fresh timestamp."""
        arrived = datetime.now(timezone.utc) - timedelta(seconds=1)

        response = client.get("/api/health")
        body = response.json()

        assert response.status_code == 200
        assert body["success"] is True
        assert body["message"] == "Adaptive Fitness API is running"
        assert datetime.fromisoformat(body["timestamp"]) >= arrived

    def test_health_needs_no_auth(self, client):
        """Test that health endpoints ignore missing credentials."""
        assert client.get("/api/health").status_code == 200


# =============================================================================
# CORS
# =============================================================================

class TestCors:
    """Tests for the CORS allow-list."""

    @pytest.mark.parametrize("origin", [
        "http://localhost:5173",
        "http://localhost:5174",
        "http://localhost:5175",
        "http://localhost:3000",
    ])
    def test_allowed_origins_with_credentials(self, client, origin):
        """Test that every allow-listed origin is granted with credentials."""
        response = client.get("/api/health", headers={"Origin": origin})

        assert response.headers["access-control-allow-origin"] == origin
        assert response.headers["access-control-allow-credentials"] == "true"

    def test_disallowed_origin_gets_no_grant(self, client):
        """Test that other origins get no CORS headers."""
        response = client.get("/api/health", headers={"Origin": DISALLOWED_ORIGIN})

        assert "access-control-allow-origin" not in response.headers

    def test_preflight_allowed(self, client):
        """Test a credentialed preflight from an allowed origin."""
        response = client.options(
            "/api/auth/login",
            headers={
                "Origin": ALLOWED_ORIGIN,
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "content-type,authorization",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == ALLOWED_ORIGIN
        assert response.headers["access-control-allow-credentials"] == "true"

    def test_preflight_disallowed(self, client):
        """Test that a preflight from another origin is rejected."""
        response = client.options(
            "/api/auth/login",
            headers={
                "Origin": DISALLOWED_ORIGIN,
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == 400
        assert "access-control-allow-origin" not in response.headers


# =============================================================================
# Route Not Found
# =============================================================================

class TestNotFound:
    """Tests for the 404 catch-all."""

    @pytest.mark.parametrize("path", [
        "/nope",
        "/api",
        "/api/unknown/thing",
        "/api/healthz",
    ])
    def test_unmatched_path(self, client, path):
        """Test the exact 404 body for unmatched paths."""
        response = client.get(path)

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": f"Route {path} not found."}

    def test_query_string_is_kept(self, client):
        """Test that the message quotes the original URL."""
        response = client.get("/missing?page=2")

        assert response.json()["message"] == "Route /missing?page=2 not found."

    def test_unsupported_method_is_unmatched(self, client):
        """Test that a known path with the wrong method is a 404."""
        response = client.delete("/api/health")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Route /api/health not found."}


# =============================================================================
# Unhandled Errors
# =============================================================================

class TestErrorHandler:
    """Tests for the global 500 handler."""

    @pytest.fixture
    def failing_client(self, test_settings, database):
        app = create_app(AppContext(settings=test_settings, database=database))

        @app.get("/api/explode")
        async def explode():
            raise RuntimeError("database password is hunter2")

        @app.post("/api/explode-key")
        async def explode_key():
            raise KeyError("user_id")

        return TestClient(app, raise_server_exceptions=False)

    def test_generic_500(self, failing_client):
        """Test that the client sees only the generic message."""
        response = failing_client.get("/api/explode")

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Internal server error."}
        assert "hunter2" not in response.text

    def test_any_error_type(self, failing_client):
        """Test that the response doesn't depend on the error type."""
        response = failing_client.post("/api/explode-key")

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Internal server error."}

    def test_error_is_logged(self, failing_client, caplog):
        """Test that the full error is logged server-side."""
        caplog.set_level(logging.ERROR, logger="app.exceptions")

        failing_client.get("/api/explode")

        assert "hunter2" in caplog.text

    def test_500_keeps_cors_headers(self, failing_client):
        """Test that a browser on an allowed origin can read the 500 body."""
        response = failing_client.get("/api/explode", headers={"Origin": "http://localhost:5173"})

        assert response.status_code == 500
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"
        assert response.headers["access-control-allow-credentials"] == "true"
        assert response.json() == {"success": False, "message": "Internal server error."}


# =============================================================================
# Body Parsing
# =============================================================================

class TestBodyParsing:
    """Tests for JSON and URL-encoded bodies."""

    def test_malformed_json_is_400(self, client):
        """Test that broken JSON never reaches the handler."""
        response = client.post(
            "/api/auth/login",
            content=b'{"email": "a@b.co", ',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Malformed JSON body."}

    def test_validation_error_is_422(self, client):
        """Test that schema violations list the offending fields."""
        response = client.post("/api/auth/register", json={"email": "a@b.co"})
        body = response.json()

        assert response.status_code == 422
        assert body["success"] is False
        assert body["message"] == "Validation error."
        fields = {error["field"] for error in body["errors"]}
        assert {"name", "password"} <= fields

    def test_urlencoded_body(self, client):
        """Test that form bodies are parsed like JSON."""
        response = client.post(
            "/api/auth/register",
            data={
                "name": "Robin",
                "email": "robin@example.com",
                "password": "long-enough",
                "daily_calorie_target": "2100",
            },
        )

        assert response.status_code == 201
        assert response.json()["user"]["daily_calorie_target"] == 2100

    def test_nested_urlencoded_body(self, client, auth_headers):
        """Test bracket-nested form fields."""
        response = client.post(
            "/api/session",
            content=(
                "workout_type=strength"
                "&exercises[0][name]=Squat&exercises[0][sets]=5&exercises[0][reps]=5"
                "&exercises[1][name]=Row&exercises[1][sets]=3"
            ),
            headers={**auth_headers, "Content-Type": "application/x-www-form-urlencoded"},
        )

        assert response.status_code == 201
        exercises = response.json()["session"]["exercises"]
        assert [e["name"] for e in exercises] == ["Squat", "Row"]
        assert exercises[0]["sets"] == 5

    def test_unsupported_content_type(self, client):
        """Test that other content types are rejected."""
        response = client.post(
            "/api/auth/login",
            content=b"email=a",
            headers={"Content-Type": "text/plain"},
        )

        assert response.status_code == 415
        assert response.json()["success"] is False

    def test_oversized_body(self, client):
        """Test the body size ceiling."""
        response = client.post("/api/auth/login", json={"email": "x" * 200_000, "password": "p"})

        assert response.status_code == 413

    def test_oversized_streamed_body(self, client):
        """Test that a body without Content-Length is cut off at the ceiling."""

        def chunks():
            for _ in range(11):
                yield b" " * 10_240

        response = client.post(
            "/api/auth/login",
            content=chunks(),
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 413

    def test_small_streamed_body(self, client):
        """Test that an unsized body under the ceiling is still parsed."""

        def chunks():
            yield b'{"email": "nobody@example.com",'
            yield b' "password": "wrong-password"}'

        response = client.post(
            "/api/auth/login",
            content=chunks(),
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password."

    def test_deeply_nested_form_key(self, client):
        """Test that runaway bracket nesting is a 400, not a crash."""
        response = client.post(
            "/api/auth/login",
            content="name" + "[a]" * 5000 + "=x",
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )

        assert response.status_code == 400
        assert response.json()["success"] is False


# =============================================================================
# Request Logging
# =============================================================================

class TestRequestLogging:
    """Tests for the request logger middleware."""

    def test_logs_method_and_path(self, client, caplog):
        caplog.set_level(logging.INFO, logger="app.middleware")

        client.get("/api/health?verbose=1")

        assert "GET /api/health?verbose=1" in caplog.text

    def test_post_body_is_logged_redacted(self, client, caplog):
        """Test that POST bodies are logged without credentials."""
        caplog.set_level(logging.INFO, logger="app.middleware")

        client.post("/api/auth/login", json={"email": "alex@example.com", "password": "s3cret-pass"})

        assert "alex@example.com" in caplog.text
        assert "s3cret-pass" not in caplog.text
        assert "[REDACTED]" in caplog.text

    def test_get_body_not_logged(self, client, caplog):
        caplog.set_level(logging.INFO, logger="app.middleware")

        client.get("/")

        assert "Body:" not in caplog.text
