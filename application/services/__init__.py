from .currency_gate import CurrencyValidationGate
from .history import HistoryPage, paginate_history
from .rate_cache import RateCache
from .rate_limiter import ClientRateLimiter

__all__ = ['ClientRateLimiter', 'CurrencyValidationGate', 'HistoryPage', 'RateCache', 'paginate_history']
