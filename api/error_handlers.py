import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from domain.exceptions.currency import ErrorKind, GatewayError

logger = logging.getLogger(__name__)


def error_body(message: str, status_code: int, errors: list[str] | None = None) -> dict:
	return {'message': message, 'status_code': status_code, 'errors': errors or []}


def status_for(kind: ErrorKind) -> int:
	match kind:
		case ErrorKind.RESTRICTED_CURRENCY | ErrorKind.UNSUPPORTED_CURRENCY | ErrorKind.UNKNOWN_SOURCE:
			return status.HTTP_400_BAD_REQUEST
		case ErrorKind.RATE_LIMIT_EXCEEDED:
			return status.HTTP_429_TOO_MANY_REQUESTS
		case ErrorKind.UPSTREAM_EMPTY_RESPONSE:
			return status.HTTP_502_BAD_GATEWAY
		case ErrorKind.UPSTREAM_UNAVAILABLE:
			return status.HTTP_503_SERVICE_UNAVAILABLE
	return status.HTTP_500_INTERNAL_SERVER_ERROR


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(GatewayError)
	async def gateway_error_handler(request: Request, exc: GatewayError):
		status_code = status_for(exc.kind)
		if status_code >= 500:
			logger.error(f'{exc.kind.value} on {request.url.path}: {exc}')
			message = 'Exchange rate service unavailable'
		else:
			message = exc.message
		return JSONResponse(status_code=status_code, content=error_body(message, status_code))

	@app.exception_handler(RequestValidationError)
	async def validation_error_handler(request: Request, exc: RequestValidationError):
		errors = [str(error.get('msg')) for error in exc.errors()]
		logger.warning(f'Validation error on {request.url.path}: {errors}')
		return JSONResponse(
			status_code=status.HTTP_400_BAD_REQUEST,
			content=error_body('Validation failed.', status.HTTP_400_BAD_REQUEST, errors),
		)

	@app.exception_handler(Exception)
	async def global_exception_handler(request: Request, exc: Exception):
		logger.error(f'Unhandled exception: {exc}', exc_info=True)
		return JSONResponse(
			status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
			content=error_body('An unexpected error occurred.', status.HTTP_500_INTERNAL_SERVER_ERROR),
		)
