import asyncio
from unittest.mock import AsyncMock

import pytest

from domain.exceptions.currency import UpstreamUnavailableError


async def trip(breaker):
    for _ in range(breaker.failure_threshold):
        with pytest.raises(UpstreamUnavailableError):
            await breaker.call(AsyncMock(side_effect=UpstreamUnavailableError("HTTP 503")))


def test_health_reports_sources_and_breakers(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["default_source"] == "Frankfurt"
    assert data["sources"] == ["Frankfurt"]
    assert data["circuit_breakers"]["Frankfurt"]["state"] == "CLOSED"
    assert data["circuit_breakers"]["Frankfurt"]["failure_threshold"] == 5


def test_health_is_degraded_while_circuit_is_open(client, breaker):
    asyncio.run(trip(breaker))

    response = client.get("/api/v1/health")

    data = response.json()
    assert data["status"] == "degraded"
    assert data["circuit_breakers"]["Frankfurt"]["state"] == "OPEN"
    assert data["circuit_breakers"]["Frankfurt"]["retry_after"] > 0


def test_root_lists_endpoints(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["endpoints"]["health"] == "/api/v1/health"
