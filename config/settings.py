from functools import lru_cache
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from domain.constants.currency import DEFAULT_SOURCE, RESTRICTED_CURRENCIES


class Settings(BaseSettings):
	# Application
	APP_NAME: str = 'FX Gateway API'
	DEBUG: bool = False
	LOG_LEVEL: str = 'INFO'
	LOG_JSON: bool = False

	# Upstream
	FRANKFURTER_BASE_URL: str = 'https://api.frankfurter.app'
	HTTP_TIMEOUT: float = 10.0
	DEFAULT_SOURCE: str = DEFAULT_SOURCE
	RESTRICTED_CURRENCIES: Annotated[frozenset[str], NoDecode] = RESTRICTED_CURRENCIES

	# Cache TTLs
	LATEST_TTL_SECONDS: int = 300
	CONVERT_TTL_SECONDS: int = 60
	HISTORICAL_TTL_SECONDS: int = 600

	# Resilience
	RETRY_ATTEMPTS: int = 3
	CIRCUIT_FAILURE_THRESHOLD: int = 5
	CIRCUIT_RECOVERY_SECONDS: float = 60.0

	# Rate limiting
	RATE_LIMIT_MAX_REQUESTS: int = 3
	RATE_LIMIT_WINDOW_SECONDS: float = 60.0

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')

	@field_validator('RESTRICTED_CURRENCIES', mode='before')
	@classmethod
	def split_currency_list(cls, v):
		if isinstance(v, str):
			return frozenset(code.strip().upper() for code in v.split(',') if code.strip())
		return v


@lru_cache
def get_settings() -> Settings:
	return Settings()
