from enum import Enum


class ErrorKind(Enum):
    RESTRICTED_CURRENCY = "restricted_currency"
    UNSUPPORTED_CURRENCY = "unsupported_currency"
    UNKNOWN_SOURCE = "unknown_source"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    UPSTREAM_EMPTY_RESPONSE = "upstream_empty_response"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"


class GatewayError(Exception):
    """Base for every failure the gateway reports. Callers branch on ``kind``."""

    kind: ErrorKind

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class RestrictedCurrencyError(GatewayError):
    kind = ErrorKind.RESTRICTED_CURRENCY

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Currency {code} is restricted.")


class UnsupportedCurrencyError(GatewayError):
    kind = ErrorKind.UNSUPPORTED_CURRENCY

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"The currency code '{code}' is not supported.")


class UnknownSourceError(GatewayError):
    kind = ErrorKind.UNKNOWN_SOURCE

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Source '{name}' not supported.")


class ProviderError(GatewayError):
    """Failure of a call to an upstream rate provider."""

    kind = ErrorKind.UPSTREAM_UNAVAILABLE


class UpstreamUnavailableError(ProviderError):
    # transient failures are retried and counted by the circuit breaker
    def __init__(self, message: str, transient: bool = True, status_code: int | None = None):
        self.transient = transient
        self.status_code = status_code
        super().__init__(message)


class CircuitOpenError(UpstreamUnavailableError):
    def __init__(self, source_name: str, failure_count: int, retry_after: float):
        self.source_name = source_name
        self.failure_count = failure_count
        self.retry_after = retry_after
        super().__init__(
            f"Circuit breaker OPEN for {source_name} ({failure_count} failures)",
            transient=False,
        )


class UpstreamEmptyResponseError(ProviderError):
    kind = ErrorKind.UPSTREAM_EMPTY_RESPONSE


class RateLimitExceededError(GatewayError):
    kind = ErrorKind.RATE_LIMIT_EXCEEDED

    def __init__(self, client: str, limit: int, retry_after: float):
        self.client = client
        self.limit = limit
        self.retry_after = retry_after
        super().__init__("Too many requests. Please try again later.")
