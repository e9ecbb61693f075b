"""Tests for CORS, security headers, and request logging middleware."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from loguru import logger

from legislature_api.api.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware, setup_cors
from legislature_api.core.config import Settings


def _create_test_app() -> FastAPI:
    """Create a minimal FastAPI app for middleware testing."""
    app = FastAPI()

    @app.get("/test")
    async def test_route() -> dict:
        return {"ok": True}

    return app


class TestSecurityHeadersMiddleware:
    """Tests for SecurityHeadersMiddleware."""

    @pytest.fixture
    def client(self) -> TestClient:
        app = _create_test_app()
        app.add_middleware(SecurityHeadersMiddleware)
        return TestClient(app)

    def test_headers_present(self, client: TestClient) -> None:
        response = client.get("/test")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["Referrer-Policy"] == "no-referrer"
        assert "max-age=31536000" in response.headers["Strict-Transport-Security"]


class TestCors:
    """Tests for the read-only CORS policy."""

    @pytest.fixture
    def client(self) -> TestClient:
        app = _create_test_app()
        settings = Settings(
            database_url="sqlite+aiosqlite://",
            cors_origins="https://civic.example",
            _env_file=None,  # type: ignore[call-arg]
        )
        setup_cors(app, settings)
        return TestClient(app)

    def test_allowed_origin(self, client: TestClient) -> None:
        response = client.get("/test", headers={"Origin": "https://civic.example"})
        assert response.headers["access-control-allow-origin"] == "https://civic.example"
        assert "access-control-allow-credentials" not in response.headers

    def test_unsafe_method_not_allowed_in_preflight(self, client: TestClient) -> None:
        response = client.options(
            "/test",
            headers={"Origin": "https://civic.example", "Access-Control-Request-Method": "POST"},
        )
        assert response.status_code == 400

    def test_unknown_origin_gets_no_header(self, client: TestClient) -> None:
        response = client.get("/test", headers={"Origin": "https://evil.example"})
        assert "access-control-allow-origin" not in response.headers


class TestRequestLoggingMiddleware:
    def test_logs_method_path_and_status(self) -> None:
        app = _create_test_app()
        app.add_middleware(RequestLoggingMiddleware)
        messages: list[str] = []
        sink_id = logger.add(lambda m: messages.append(m.record["message"]), level="INFO")
        try:
            TestClient(app).get("/test")
        finally:
            logger.remove(sink_id)

        assert any(m.startswith("GET /test -> 200") for m in messages)
