import math
from collections.abc import Iterable

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from api.error_handlers import error_body
from application.services.rate_limiter import UNKNOWN_CLIENT, ClientRateLimiter
from domain.exceptions.currency import RateLimitExceededError

EXEMPT_PATHS = frozenset({'/', '/api/v1/health', '/docs', '/redoc', '/openapi.json'})


def client_identity(request: Request) -> str:
	return request.client.host if request.client and request.client.host else UNKNOWN_CLIENT


class RateLimitMiddleware(BaseHTTPMiddleware):
	"""Rejects a client's requests with 429 once its window quota is used up."""

	def __init__(self, app: ASGIApp, limiter: ClientRateLimiter, exempt_paths: Iterable[str] = EXEMPT_PATHS):
		super().__init__(app)
		self.limiter = limiter
		self.exempt_paths = frozenset(exempt_paths)

	async def dispatch(self, request: Request, call_next: RequestResponseEndpoint):
		if request.url.path in self.exempt_paths:
			return await call_next(request)

		try:
			remaining = self.limiter.check(client_identity(request))
		except RateLimitExceededError as exc:
			return JSONResponse(
				status_code=429,
				content=error_body(exc.message, 429),
				headers={'Retry-After': str(max(1, math.ceil(exc.retry_after)))},
			)

		response = await call_next(request)
		response.headers['X-RateLimit-Limit'] = str(self.limiter.max_requests)
		response.headers['X-RateLimit-Remaining'] = str(remaining)
		return response
