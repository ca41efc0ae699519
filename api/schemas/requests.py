from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

CURRENCY_PATTERN = r'^[A-Z]{3}$'


class ConvertCurrencyRequest(BaseModel):
	from_currency: str = Field(..., pattern=CURRENCY_PATTERN, description='Source currency code')
	to_currency: str = Field(..., pattern=CURRENCY_PATTERN, description='Target currency code')
	amount: Decimal = Field(..., gt=0, description='Amount to convert')

	model_config = ConfigDict(
		json_schema_extra={'example': {'from_currency': 'USD', 'to_currency': 'EUR', 'amount': 100.00}}
	)

	@field_validator('from_currency', 'to_currency', mode='before')
	@classmethod
	def uppercase_currency(cls, v):
		return v.strip().upper() if isinstance(v, str) else v


class HistoricalRatesQuery(BaseModel):
	base_currency: str = Field(..., pattern=CURRENCY_PATTERN)
	start_date: date
	end_date: date
	page: int = Field(1, ge=1)
	page_size: int = Field(10, ge=1, le=100)

	@field_validator('base_currency', mode='before')
	@classmethod
	def uppercase_currency(cls, v):
		return v.strip().upper() if isinstance(v, str) else v

	@model_validator(mode='after')
	def check_date_range(self):
		if self.start_date > date.today():
			raise ValueError('Start date cannot be in the future.')
		if self.end_date < self.start_date:
			raise ValueError('End date must be greater than or equal to start date.')
		return self
