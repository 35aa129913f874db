"""
Basic application tests.

Validates that the FastAPI app starts correctly and the
health endpoint responds as expected.
"""

import logging

from fastapi.testclient import TestClient

from futureself.main import app
from futureself.shared.logging import configure_logging

client = TestClient(app)


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    def test_health_returns_200(self) -> None:
        """Health endpoint must return HTTP 200 with status ok."""
        response = client.get("/api/v1/health")
        assert response.status_code == 200

    def test_health_response_body(self) -> None:
        """Health endpoint must return status and version fields."""
        response = client.get("/api/v1/health")
        body = response.json()
        assert body["status"] == "ok"
        assert "version" in body
        assert body["environment"] in ("development", "production")

    def test_unknown_route_is_404(self) -> None:
        assert client.get("/api/v1/nowhere").status_code == 404


class TestLoggingConfiguration:
    """Tests for configure_logging."""

    def test_http_client_loggers_are_quieted(self) -> None:
        """Assistant HTTP chatter stays out of DEBUG output."""
        configure_logging("DEBUG")
        assert logging.getLogger().level == logging.DEBUG
        for name in ("urllib3", "requests", "charset_normalizer", "uvicorn.access"):
            assert logging.getLogger(name).level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self) -> None:
        configure_logging("chatty")
        assert logging.getLogger().level == logging.INFO
