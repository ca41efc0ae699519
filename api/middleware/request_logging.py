import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from api.middleware.rate_limit import client_identity

logger = logging.getLogger('api.requests')


class RequestLoggingMiddleware(BaseHTTPMiddleware):
	async def dispatch(self, request: Request, call_next: RequestResponseEndpoint):
		start_time = time.perf_counter()
		client_ip = client_identity(request)
		logger.info(f'Incoming request: {client_ip} {request.method} {request.url.path}')

		status_code = 500
		try:
			response = await call_next(request)
			status_code = response.status_code
			return response
		finally:
			response_time = (time.perf_counter() - start_time) * 1000
			logger.info(
				f'Outgoing response: {client_ip} {request.method} {request.url.path} '
				f'{status_code} ({response_time:.2f}ms)'
			)
