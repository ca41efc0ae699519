import logging
from collections.abc import Iterable
from datetime import date, timedelta
from decimal import Decimal

from domain.constants.currency import RESTRICTED_CURRENCIES
from domain.exceptions.currency import RestrictedCurrencyError
from domain.models.currency import ExchangeRate, HistoricalRate, format_amount
from infrastructure.cache.memory_cache import TTLStore
from infrastructure.providers.registry import SourceRegistry

logger = logging.getLogger(__name__)


class RateCache:
	"""Single entry point to rate data.

	Rejects restricted base currencies, strips restricted currencies from
	upstream results and keeps successful results for an operation-specific
	TTL. Failures propagate unchanged and are never cached. Concurrent misses
	on the same key may each reach the upstream source.
	"""

	def __init__(
		self,
		registry: SourceRegistry,
		store: TTLStore,
		restricted_currencies: Iterable[str] = RESTRICTED_CURRENCIES,
		latest_ttl: timedelta = timedelta(minutes=5),
		convert_ttl: timedelta = timedelta(minutes=1),
		historical_ttl: timedelta = timedelta(minutes=10),
	):
		self.registry = registry
		self.store = store
		self.restricted_currencies = frozenset(restricted_currencies)
		self.latest_ttl = latest_ttl
		self.convert_ttl = convert_ttl
		self.historical_ttl = historical_ttl

	def _ensure_allowed(self, code: str) -> None:
		if code in self.restricted_currencies:
			raise RestrictedCurrencyError(code)

	def _lookup(self, key: str):
		cached = self.store.get(key)
		logger.debug(f'Cache lookup for {key}: {"HIT" if cached is not None else "MISS"}')
		return cached

	async def get_latest(self, base: str) -> ExchangeRate:
		self._ensure_allowed(base)

		key = f'latest:{base}'
		cached = self._lookup(key)
		if cached is not None:
			return cached

		source = self.registry.resolve()
		result = await source.get_latest(base)
		cleaned = result.without(self.restricted_currencies)

		self.store.set(key, cleaned, self.latest_ttl.total_seconds())
		return cleaned

	async def convert(self, from_currency: str, to_currency: str, amount: Decimal) -> ExchangeRate:
		# no restricted check here; requests reach this through CurrencyValidationGate
		key = f'convert:{from_currency}:{to_currency}:{format_amount(amount)}'
		cached = self._lookup(key)
		if cached is not None:
			return cached

		source = self.registry.resolve()
		result = await source.convert(from_currency, to_currency, amount)

		self.store.set(key, result, self.convert_ttl.total_seconds())
		return result

	async def get_historical(self, base: str, start: date, end: date) -> HistoricalRate:
		self._ensure_allowed(base)

		key = f'historical:{base}:{start:%Y%m%d}:{end:%Y%m%d}'
		cached = self._lookup(key)
		if cached is not None:
			return cached

		source = self.registry.resolve()
		result = await source.get_historical(base, start, end)
		cleaned = result.without(self.restricted_currencies)

		self.store.set(key, cleaned, self.historical_ttl.total_seconds())
		return cleaned
