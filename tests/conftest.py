"""
Shared test configuration and fixtures.
"""

from datetime import date
from decimal import Decimal

import pytest

from domain.models.currency import ExchangeRate, HistoricalRate


class FakeClock:
    """Manually advanced monotonic clock"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def usd_latest():
    return ExchangeRate(
        amount=Decimal("1.0"),
        base="USD",
        date=date(2025, 9, 26),
        rates={
            "EUR": Decimal("0.855"),
            "GBP": Decimal("0.746"),
            "TRY": Decimal("41.52"),
            "PLN": Decimal("3.64"),
        },
    )


@pytest.fixture
def usd_history():
    return HistoricalRate(
        amount=Decimal("1.0"),
        base="USD",
        start_date="2025-01-01",
        end_date="2025-01-03",
        rates={
            "2025-01-03": {"EUR": Decimal("0.97"), "THB": Decimal("34.1")},
            "2025-01-01": {"EUR": Decimal("0.96"), "MXN": Decimal("20.6")},
            "2025-01-02": {"EUR": Decimal("0.965"), "GBP": Decimal("0.80")},
        },
    )
