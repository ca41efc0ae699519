import logging
from datetime import date
from decimal import Decimal

import httpx

from domain.constants.currency import DEFAULT_SOURCE
from domain.exceptions.currency import (
    ProviderError,
    UpstreamEmptyResponseError,
    UpstreamUnavailableError,
)
from domain.models.currency import ExchangeRate, HistoricalRate, format_amount
from infrastructure.resilience.transport import ResilientTransport

logger = logging.getLogger(__name__)


class FrankfurterProvider:
    BASE_URL = "https://api.frankfurter.app"

    def __init__(
        self,
        transport: ResilientTransport,
        base_url: str = BASE_URL,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10,
    ):
        self.base_url = base_url.rstrip("/")
        self._transport = transport
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            headers={"accept": "application/json"},
        )

    @property
    def name(self) -> str:
        return DEFAULT_SOURCE

    @property
    def transport(self) -> ResilientTransport:
        return self._transport

    async def _request(self, path: str, params: dict) -> dict:
        logger.debug(f"Sending request to {self.name}{path} with {params}")
        try:
            return await self._transport.execute(lambda: self._get(path, params))
        except ProviderError as e:
            logger.error(f"{self.name} request {path} failed: {e}")
            raise

    async def _get(self, path: str, params: dict) -> dict:
        url = f"{self.base_url}{path}"
        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            raise UpstreamUnavailableError(
                f"Frankfurter HTTP error {status_code}: {e.response.text[:200]}",
                transient=status_code >= 500 or status_code == 408,
                status_code=status_code,
            ) from e
        except httpx.RequestError as e:
            raise UpstreamUnavailableError(f"Frankfurter request failed: {e.__class__.__name__}") from e

        if not response.content.strip():
            raise UpstreamEmptyResponseError(f"Frankfurter returned an empty response for {path}")

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamUnavailableError(
                f"Frankfurter response parsing error: {str(e)}", transient=False
            ) from e

        if not data:
            raise UpstreamEmptyResponseError(f"Frankfurter returned an empty response for {path}")
        return data

    async def get_latest(self, base: str) -> ExchangeRate:
        data = await self._request("/latest", {"base": base})
        return self._parse_exchange_rate(data)

    async def convert(self, from_currency: str, to_currency: str, amount: Decimal) -> ExchangeRate:
        data = await self._request(
            "/latest",
            {"from": from_currency, "to": to_currency, "amount": format_amount(amount)},
        )
        return self._parse_exchange_rate(data)

    async def get_historical(self, base: str, start: date, end: date) -> HistoricalRate:
        data = await self._request(f"/{start.isoformat()}..{end.isoformat()}", {"base": base})
        try:
            return HistoricalRate(
                amount=Decimal(str(data["amount"])),
                base=data["base"],
                start_date=data["start_date"],
                end_date=data["end_date"],
                rates={
                    day: {code: Decimal(str(value)) for code, value in day_rates.items()}
                    for day, day_rates in data["rates"].items()
                },
            )
        except (KeyError, TypeError, ArithmeticError, AttributeError) as e:
            raise UpstreamUnavailableError(
                f"Unexpected historical rates payload from {self.name}: {e!r}", transient=False
            ) from e

    def _parse_exchange_rate(self, data: dict) -> ExchangeRate:
        try:
            return ExchangeRate(
                amount=Decimal(str(data["amount"])),
                base=data["base"],
                date=date.fromisoformat(data["date"]),
                rates={code: Decimal(str(value)) for code, value in data["rates"].items()},
            )
        except (KeyError, TypeError, ValueError, ArithmeticError, AttributeError) as e:
            raise UpstreamUnavailableError(
                f"Unexpected rates payload from {self.name}: {e!r}", transient=False
            ) from e

    async def close(self) -> None:
        await self._client.aclose()
