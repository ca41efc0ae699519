import logging
from collections.abc import Iterable

from domain.constants.currency import RESTRICTED_CURRENCIES
from domain.exceptions.currency import RestrictedCurrencyError

logger = logging.getLogger(__name__)


class CurrencyValidationGate:
	def __init__(self, restricted_currencies: Iterable[str] = RESTRICTED_CURRENCIES):
		self.restricted_currencies = frozenset(restricted_currencies)

	def check(
		self,
		base: str | None = None,
		from_currency: str | None = None,
		to_currency: str | None = None,
	) -> None:
		"""Reject the request if any populated currency field is restricted."""
		for code in (base, from_currency, to_currency):
			if code and code in self.restricted_currencies:
				logger.warning(f'Rejected request for restricted currency {code}')
				raise RestrictedCurrencyError(code)
