from datetime import date
from decimal import Decimal

import pytest

from domain.models.currency import format_amount


@pytest.mark.parametrize(
    "amount, expected",
    [
        (Decimal("100.00"), "100"),
        (Decimal("100"), "100"),
        (Decimal("1E+2"), "100"),
        (Decimal("12.50"), "12.5"),
        (Decimal("0.001"), "0.001"),
    ],
)
def test_format_amount(amount, expected):
    assert format_amount(amount) == expected


def test_without_returns_stripped_copy(usd_latest):
    stripped = usd_latest.without({"TRY", "PLN"})

    assert set(stripped.rates) == {"EUR", "GBP"}
    assert "TRY" in usd_latest.rates
    assert stripped.date == date(2025, 9, 26)


def test_historical_without_strips_every_day(usd_history):
    stripped = usd_history.without({"THB", "MXN"})

    assert stripped.rates["2025-01-03"] == {"EUR": Decimal("0.97")}
    assert stripped.rates["2025-01-01"] == {"EUR": Decimal("0.96")}
    assert "THB" in usd_history.rates["2025-01-03"]


def test_sorted_items_orders_by_date(usd_history):
    days = [day for day, _ in usd_history.sorted_items()]

    assert days == [date(2025, 1, 1), date(2025, 1, 2), date(2025, 1, 3)]
