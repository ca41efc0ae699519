import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from application.services.history import HistoryPage
from domain.exceptions.currency import UpstreamEmptyResponseError
from domain.models.currency import ExchangeRate


class ExchangeRateResponse(BaseModel):
	amount: Decimal = Field(..., description='Amount of the base currency')
	base: str = Field(..., description='Base currency code')
	date: datetime.date = Field(..., description='Date the rates were published')
	rates: dict[str, Decimal] = Field(..., description='Rate per currency code')

	model_config = ConfigDict(
		json_schema_extra={
			'example': {'amount': 1.0, 'base': 'USD', 'date': '2025-09-26', 'rates': {'EUR': 0.855, 'GBP': 0.746}}
		}
	)

	@classmethod
	def from_domain(cls, rate: ExchangeRate) -> 'ExchangeRateResponse':
		return cls(amount=rate.amount, base=rate.base, date=rate.date, rates=rate.rates)


class ConversionResponse(BaseModel):
	from_currency: str = Field(..., description='Source currency code')
	to_currency: str = Field(..., description='Target currency code')
	original_amount: Decimal = Field(..., description='Original amount requested')
	converted_amount: Decimal = Field(..., description='Converted amount')
	conversion_rate: Decimal = Field(..., description='Exchange rate used for conversion')

	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'from_currency': 'USD',
				'to_currency': 'EUR',
				'original_amount': 100.00,
				'converted_amount': 85.50,
				'conversion_rate': 0.8550,
			}
		}
	)

	@classmethod
	def from_domain(cls, result: ExchangeRate) -> 'ConversionResponse':
		if not result.rates:
			raise UpstreamEmptyResponseError(f'Conversion result for {result.base} has no rates')
		# upstream answers a single-target conversion with exactly one rate
		to_currency, converted = next(iter(result.rates.items()))
		return cls(
			from_currency=result.base,
			to_currency=to_currency,
			original_amount=result.amount,
			converted_amount=converted,
			conversion_rate=converted / result.amount if result.amount else Decimal(0),
		)


class HistoryItemResponse(BaseModel):
	date: datetime.date
	rates: dict[str, Decimal]


class HistoricalRatesResponse(BaseModel):
	base_currency: str
	items: list[HistoryItemResponse]
	total_count: int
	page: int
	page_size: int
	total_pages: int

	@classmethod
	def from_page(cls, page: HistoryPage) -> 'HistoricalRatesResponse':
		return cls(
			base_currency=page.base_currency,
			items=[HistoryItemResponse(date=item.date, rates=item.rates) for item in page.items],
			total_count=page.total_count,
			page=page.page,
			page_size=page.page_size,
			total_pages=page.total_pages,
		)


class ErrorResponse(BaseModel):
	message: str
	status_code: int
	errors: list[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
	status: str
	default_source: str
	sources: list[str]
	circuit_breakers: dict[str, dict]
