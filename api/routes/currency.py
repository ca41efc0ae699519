from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from api.dependencies import get_currency_gate, get_rate_cache
from api.schemas import (
	ConversionResponse,
	ConvertCurrencyRequest,
	ErrorResponse,
	ExchangeRateResponse,
	HistoricalRatesQuery,
	HistoricalRatesResponse,
)
from application.services import CurrencyValidationGate, RateCache, paginate_history
from domain.exceptions.currency import UnsupportedCurrencyError

router = APIRouter(
	prefix='/api/v1/currency',
	tags=['currency'],
	responses={
		400: {'model': ErrorResponse, 'description': 'Invalid or restricted currency'},
		429: {'model': ErrorResponse, 'description': 'Too many requests'},
		503: {'model': ErrorResponse, 'description': 'Upstream provider unavailable'},
	},
)


@router.get(
	'/latest-rates/{base_currency}',
	response_model=ExchangeRateResponse,
	status_code=status.HTTP_200_OK,
	summary='Get latest exchange rates for a base currency',
)
async def get_latest_rates(
	base_currency: Annotated[
		str,
		Path(
			min_length=3,
			max_length=3,
		),
	],
	gate: Annotated[CurrencyValidationGate, Depends(get_currency_gate)],
	rate_cache: Annotated[RateCache, Depends(get_rate_cache)],
) -> ExchangeRateResponse:
	base_currency = base_currency.upper()
	gate.check(base=base_currency)

	result = await rate_cache.get_latest(base_currency)
	return ExchangeRateResponse.from_domain(result)


@router.post(
	'/convert',
	response_model=ConversionResponse,
	status_code=status.HTTP_200_OK,
	summary='Convert currency amount',
)
async def convert_currency(
	request: ConvertCurrencyRequest,
	gate: Annotated[CurrencyValidationGate, Depends(get_currency_gate)],
	rate_cache: Annotated[RateCache, Depends(get_rate_cache)],
) -> ConversionResponse:
	gate.check(from_currency=request.from_currency, to_currency=request.to_currency)

	result = await rate_cache.convert(request.from_currency, request.to_currency, request.amount)
	return ConversionResponse.from_domain(result)


@router.get(
	'/historical-rates',
	response_model=HistoricalRatesResponse,
	status_code=status.HTTP_200_OK,
	summary='Get paginated historical rates for a date range',
)
async def get_historical_rates(
	query: Annotated[HistoricalRatesQuery, Query()],
	gate: Annotated[CurrencyValidationGate, Depends(get_currency_gate)],
	rate_cache: Annotated[RateCache, Depends(get_rate_cache)],
) -> HistoricalRatesResponse:
	gate.check(base=query.base_currency)

	historical = await rate_cache.get_historical(query.base_currency, query.start_date, query.end_date)
	if not historical.rates:
		raise UnsupportedCurrencyError(query.base_currency)

	page = paginate_history(historical, page=query.page, page_size=query.page_size)
	return HistoricalRatesResponse.from_page(page)
