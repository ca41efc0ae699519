import datetime
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Iterable


def format_amount(amount: Decimal) -> str:
    """Render ``amount`` without exponent or trailing zeros (``100.00`` -> ``100``)."""
    return format(amount.normalize(), "f")


@dataclass(frozen=True)
class ExchangeRate:
    amount: Decimal
    base: str
    date: datetime.date
    rates: dict[str, Decimal]

    def without(self, currencies: Iterable[str]) -> "ExchangeRate":
        """Copy of this rate with the given currency codes dropped from ``rates``."""
        excluded = set(currencies)
        return replace(
            self, rates={code: value for code, value in self.rates.items() if code not in excluded}
        )


@dataclass(frozen=True)
class HistoricalRate:
    amount: Decimal
    base: str
    start_date: str
    end_date: str
    rates: dict[str, dict[str, Decimal]]  # ISO date -> currency -> rate

    def without(self, currencies: Iterable[str]) -> "HistoricalRate":
        excluded = set(currencies)
        return replace(
            self,
            rates={
                day: {code: value for code, value in day_rates.items() if code not in excluded}
                for day, day_rates in self.rates.items()
            },
        )

    def sorted_items(self) -> list[tuple[datetime.date, dict[str, Decimal]]]:
        # ISO date keys give no ordering guarantee once they pass through a dict
        return sorted(
            ((datetime.date.fromisoformat(day), day_rates) for day, day_rates in self.rates.items()),
            key=lambda item: item[0],
        )
