from .requests import ConvertCurrencyRequest, HistoricalRatesQuery
from .responses import (
	ConversionResponse,
	ErrorResponse,
	ExchangeRateResponse,
	HealthResponse,
	HistoricalRatesResponse,
)

__all__ = [
	'ConversionResponse',
	'ConvertCurrencyRequest',
	'ErrorResponse',
	'ExchangeRateResponse',
	'HealthResponse',
	'HistoricalRatesQuery',
	'HistoricalRatesResponse',
]
