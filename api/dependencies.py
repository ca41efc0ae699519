import logging
from datetime import timedelta

from application.services import CurrencyValidationGate, RateCache
from config.settings import Settings, get_settings
from domain.constants.currency import DEFAULT_SOURCE
from infrastructure.cache.memory_cache import InMemoryTTLStore
from infrastructure.providers import FrankfurterProvider, SourceRegistry
from infrastructure.resilience.circuit_breaker import CircuitBreaker
from infrastructure.resilience.transport import ResilientTransport

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	registry: SourceRegistry | None = None
	rate_cache: RateCache | None = None
	currency_gate: CurrencyValidationGate | None = None


deps = AppDependencies()


def build_registry(settings: Settings) -> SourceRegistry:
	breaker = CircuitBreaker(
		source_name=DEFAULT_SOURCE,
		failure_threshold=settings.CIRCUIT_FAILURE_THRESHOLD,
		recovery_timeout=settings.CIRCUIT_RECOVERY_SECONDS,
	)
	transport = ResilientTransport(breaker, max_attempts=settings.RETRY_ATTEMPTS)
	frankfurter = FrankfurterProvider(
		transport,
		base_url=settings.FRANKFURTER_BASE_URL,
		timeout=settings.HTTP_TIMEOUT,
	)
	return SourceRegistry({frankfurter.name: frankfurter}, default=settings.DEFAULT_SOURCE)


def init_dependencies(settings: Settings | None = None) -> None:
	"""Initialize all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')
	settings = settings or get_settings()

	deps.registry = build_registry(settings)
	deps.rate_cache = RateCache(
		registry=deps.registry,
		store=InMemoryTTLStore(),
		restricted_currencies=settings.RESTRICTED_CURRENCIES,
		latest_ttl=timedelta(seconds=settings.LATEST_TTL_SECONDS),
		convert_ttl=timedelta(seconds=settings.CONVERT_TTL_SECONDS),
		historical_ttl=timedelta(seconds=settings.HISTORICAL_TTL_SECONDS),
	)
	deps.currency_gate = CurrencyValidationGate(settings.RESTRICTED_CURRENCIES)
	logger.info(f'Dependencies initialized with sources: {sorted(deps.registry.list_available())}')


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.registry:
		await deps.registry.close()

	deps.registry = None
	deps.rate_cache = None
	deps.currency_gate = None
	logger.info('Cleanup complete')


def get_registry() -> SourceRegistry:
	if deps.registry is None:
		raise RuntimeError('Source registry not initialized')
	return deps.registry


def get_rate_cache() -> RateCache:
	if deps.rate_cache is None:
		raise RuntimeError('Rate cache not initialized')
	return deps.rate_cache


def get_currency_gate() -> CurrencyValidationGate:
	if deps.currency_gate is None:
		raise RuntimeError('Currency validation gate not initialized')
	return deps.currency_gate
