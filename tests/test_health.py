"""Health endpoint tests."""

from contextlib import asynccontextmanager

import pytest
from falcon.asgi import App
from falcon.testing import TestClient

from accessgate.domain.exceptions import StoreUnavailable
from accessgate.interfaces.api.resources.health import HealthResource


def _client(uow_factory) -> TestClient:
    app = App()
    health = HealthResource(uow_factory)
    app.add_route("/v1/health", health)
    app.add_route("/v1/health/ready", health, suffix="ready")
    return TestClient(app)


@pytest.fixture
def client(uow_factory) -> TestClient:
    """Create test client with health endpoints over the memory store."""
    return _client(uow_factory)


def test_health_liveness(client: TestClient) -> None:
    """GET /v1/health returns 200."""
    result = client.simulate_get("/v1/health")
    assert result.status_code == 200
    assert result.json["status"] == "ok"


def test_health_ready(client: TestClient) -> None:
    """GET /v1/health/ready returns 200 when the store answers."""
    result = client.simulate_get("/v1/health/ready")
    assert result.status_code == 200
    assert result.json["status"] == "ready"


def test_health_ready_store_down() -> None:
    """GET /v1/health/ready returns 503 when the store cannot be opened."""

    @asynccontextmanager
    async def broken_factory(read_only: bool = False):
        raise StoreUnavailable("connection refused")
        yield

    result = _client(broken_factory).simulate_get("/v1/health/ready")
    assert result.status_code == 503
    assert result.json["status"] == "unavailable"
