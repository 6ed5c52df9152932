"""Tests for the HTTP surface."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.testclient import TestClient

from flight_status.main import create_app
from flight_status.startup.config_schema import ServiceSettings


class TestHttpSurface:
    def setup_method(self) -> None:
        self.settings = ServiceSettings(ENVIRONMENT="dev")

    def test_health_returns_up(self) -> None:
        client = TestClient(create_app(self.settings))

        response = client.get("/health")

        assert response.status_code == 200
        assert response.text == "UP"
        assert response.headers["content-type"].startswith("text/plain")

    def test_health_is_independent_of_bootstrap(self) -> None:
        app = create_app(self.settings)
        assert not hasattr(app.state, "bootstrap")

        response = TestClient(app).get("/health")

        assert response.status_code == 200

    def test_api_router_mounted_under_api(self) -> None:
        router = APIRouter()

        @router.get("/flights/{flight_id}")
        async def get_flight(flight_id: str) -> dict[str, str]:
            return {"id": flight_id}

        client = TestClient(create_app(self.settings, api_router=router))

        assert client.get("/api/flights/AF123").json() == {"id": "AF123"}
        assert client.get("/flights/AF123").status_code == 404

    def test_metrics_endpoint(self) -> None:
        client = TestClient(create_app(self.settings))

        response = client.get("/metrics/")

        assert response.status_code == 200
        assert "python_info" in response.text or "process_" in response.text
