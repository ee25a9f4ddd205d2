"""Integration tests for /health, /healthz and /metrics endpoints."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from backend.app.main import app


@pytest.fixture
def client() -> TestClient:
    """Create test client."""
    return TestClient(app)


class TestHealthEndpoint:
    """Test /health and /healthz endpoints."""

    def test_health_always_ok(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    @patch("backend.app.api.routes.health.check_db", new_callable=AsyncMock)
    def test_healthz_returns_200_when_db_ok(
        self, mock_check_db: AsyncMock, client: TestClient
    ) -> None:
        """Test /healthz returns 200 when the database is reachable."""
        mock_check_db.return_value = (True, "ok")

        response = client.get("/healthz")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["components"]["db"] == "ok"

    @patch("backend.app.api.routes.health.check_db", new_callable=AsyncMock)
    def test_healthz_returns_503_when_db_fails(
        self, mock_check_db: AsyncMock, client: TestClient
    ) -> None:
        """Test /healthz returns 503 when DB check fails."""
        mock_check_db.return_value = (False, "error: OperationalError")

        response = client.get("/healthz")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "degraded"
        assert data["components"]["db"] == "error: OperationalError"

    def test_healthz_against_sqlite(self, client: TestClient) -> None:
        """The test environment points DATABASE_URL at in-memory SQLite."""
        response = client.get("/healthz")

        assert response.status_code == 200
        assert response.json()["components"]["db"] == "ok"


class TestMetricsEndpoint:
    """Test /metrics endpoint."""

    def test_metrics_returns_prometheus_format(self, client: TestClient) -> None:
        response = client.get("/metrics")

        assert response.status_code == 200
        assert "text/plain" in response.headers["content-type"]
        assert "# HELP" in response.text

    def test_metrics_includes_pricing_metrics(self, client: TestClient) -> None:
        """Test /metrics includes pricing run metrics."""
        from backend.app.utils.metrics import PrometheusPricingMetrics

        metrics = PrometheusPricingMetrics()
        metrics.record_run("ready", 1.5)
        metrics.inc_superseded()

        text = client.get("/metrics").text

        assert "pricing_latency_ms" in text
        assert 'pricing_runs_total{outcome="ready"}' in text
        assert "pricing_superseded_total" in text


class TestRootEndpoint:
    """Test root endpoint."""

    def test_root_returns_api_info(self, client: TestClient) -> None:
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Tour Builder API"
        assert data["version"] == "0.1.0"
