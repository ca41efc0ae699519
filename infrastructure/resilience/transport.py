import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from tenacity import AsyncRetrying, RetryCallState, retry_if_exception, stop_after_attempt, wait_exponential

from infrastructure.resilience.circuit_breaker import CircuitBreaker, is_transient

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResilientTransport:
    """Retry and circuit breaker policies for the network calls of one rate source.

    The breaker wraps the retry loop, so a call that is still failing after
    every attempt counts as a single breaker failure, and an open breaker
    short-circuits before any attempt is made.
    """

    def __init__(
        self,
        breaker: CircuitBreaker,
        max_attempts: int = 3,
        backoff_multiplier: float = 2.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.breaker = breaker
        self.max_attempts = max_attempts
        self.backoff_multiplier = backoff_multiplier
        self._sleep = sleep

    @property
    def name(self) -> str:
        return self.breaker.source_name

    async def execute(self, func: Callable[[], Awaitable[T]]) -> T:
        return await self.breaker.call(lambda: self._with_retry(func))

    async def _with_retry(self, func: Callable[[], Awaitable[T]]) -> T:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            # 2s before the second attempt, 4s before the third
            wait=wait_exponential(multiplier=self.backoff_multiplier),
            retry=retry_if_exception(is_transient),
            before_sleep=self._log_retry,
            sleep=self._sleep,
            reraise=True,
        )
        return await retrying(func)

    def _log_retry(self, retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        delay = retry_state.next_action.sleep if retry_state.next_action else 0
        logger.warning(
            f"Request to {self.name} failed: {exc}. Retrying in {delay:.0f}s. "
            f"Attempt {retry_state.attempt_number}/{self.max_attempts}"
        )
