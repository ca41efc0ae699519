from datetime import date
from decimal import Decimal
from typing import Protocol, runtime_checkable

from domain.models.currency import ExchangeRate, HistoricalRate


@runtime_checkable
class RateSource(Protocol):
    """A single upstream exchange-rate provider.

    Every operation returns a fully populated result or raises
    ``UpstreamUnavailableError`` / ``UpstreamEmptyResponseError``.
    """

    @property
    def name(self) -> str: ...

    async def get_latest(self, base: str) -> ExchangeRate: ...

    async def convert(self, from_currency: str, to_currency: str, amount: Decimal) -> ExchangeRate: ...

    async def get_historical(self, base: str, start: date, end: date) -> HistoricalRate: ...

    async def close(self) -> None: ...
