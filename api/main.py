import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.dependencies import cleanup_dependencies, init_dependencies
from api.error_handlers import register_exception_handlers
from api.middleware.rate_limit import RateLimitMiddleware
from api.middleware.request_logging import RequestLoggingMiddleware
from api.routes import currency, health
from application.services import ClientRateLimiter
from config.logger import setup_logging
from config.settings import Settings, get_settings
from infrastructure.cache.memory_cache import InMemoryTTLStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
	logger.info('Starting FX Gateway API...')
	init_dependencies(app.state.settings)
	logger.info('Application ready')

	yield

	logger.info('Shutting down...')
	await cleanup_dependencies()


def create_app(settings: Settings | None = None, rate_limiter: ClientRateLimiter | None = None) -> FastAPI:
	settings = settings or get_settings()
	setup_logging(settings.LOG_LEVEL, json_output=settings.LOG_JSON)

	rate_limiter = rate_limiter or ClientRateLimiter(
		store=InMemoryTTLStore(),
		max_requests=settings.RATE_LIMIT_MAX_REQUESTS,
		window=settings.RATE_LIMIT_WINDOW_SECONDS,
	)

	app = FastAPI(
		title=settings.APP_NAME,
		description='Rate-limited, cached and circuit-protected gateway to the Frankfurter exchange rate API',
		version='1.0.0',
		debug=settings.DEBUG,
		lifespan=lifespan,
	)
	app.state.settings = settings

	app.add_middleware(RateLimitMiddleware, limiter=rate_limiter)
	app.add_middleware(RequestLoggingMiddleware)

	app.include_router(currency.router)
	app.include_router(health.router)
	register_exception_handlers(app)

	@app.get('/', summary='API Information')
	async def root():
		return {
			'name': settings.APP_NAME,
			'version': '1.0.0',
			'endpoints': {
				'latest_rates': '/api/v1/currency/latest-rates/{base_currency}',
				'convert': '/api/v1/currency/convert',
				'historical_rates': '/api/v1/currency/historical-rates',
				'health': '/api/v1/health',
				'documentation': '/docs',
			},
		}

	return app


app = create_app()


if __name__ == '__main__':
	import os

	import uvicorn

	uvicorn.run(
		'api.main:app',
		host=os.getenv('HOST', '0.0.0.0'),
		port=int(os.getenv('PORT', 8000)),
		log_level='info',
	)
