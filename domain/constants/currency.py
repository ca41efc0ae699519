# Excluded from results and rejected as query currencies.
RESTRICTED_CURRENCIES: frozenset[str] = frozenset({"TRY", "PLN", "THB", "MXN"})

DEFAULT_SOURCE = "Frankfurt"
