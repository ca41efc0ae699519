from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_currency_gate, get_rate_cache, get_registry
from api.main import create_app
from application.services import ClientRateLimiter, CurrencyValidationGate
from config.settings import Settings
from domain.models.currency import ExchangeRate
from infrastructure.cache.memory_cache import InMemoryTTLStore
from infrastructure.providers import SourceRegistry
from infrastructure.resilience.circuit_breaker import CircuitBreaker


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def mock_rate_cache(usd_latest, usd_history):
    rate_cache = Mock()
    rate_cache.get_latest = AsyncMock(return_value=usd_latest.without({"TRY", "PLN"}))
    rate_cache.convert = AsyncMock(
        return_value=ExchangeRate(
            amount=Decimal("100"), base="USD", date=date(2025, 9, 26), rates={"EUR": Decimal("85.5")}
        )
    )
    rate_cache.get_historical = AsyncMock(return_value=usd_history.without({"THB", "MXN"}))
    return rate_cache


@pytest.fixture
def breaker():
    return CircuitBreaker(source_name="Frankfurt")


@pytest.fixture
def registry(breaker):
    source = Mock()
    source.name = "Frankfurt"
    source.transport.breaker = breaker
    return SourceRegistry({"Frankfurt": source})


@pytest.fixture
def make_client(settings, mock_rate_cache, registry):
    def _make_client(max_requests: int = 1000, **client_kwargs) -> TestClient:
        limiter = ClientRateLimiter(store=InMemoryTTLStore(), max_requests=max_requests, window=60)
        app = create_app(settings, rate_limiter=limiter)
        app.dependency_overrides[get_rate_cache] = lambda: mock_rate_cache
        app.dependency_overrides[get_currency_gate] = lambda: CurrencyValidationGate()
        app.dependency_overrides[get_registry] = lambda: registry
        return TestClient(app, **client_kwargs)

    return _make_client


@pytest.fixture
def client(make_client):
    return make_client()
