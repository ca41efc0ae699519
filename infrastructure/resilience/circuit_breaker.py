import logging
import time
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import TypeVar

from domain.exceptions.currency import CircuitOpenError, UpstreamUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CircuitBreakerState(Enum):
    CLOSED = "CLOSED"
    OPEN = "OPEN"
    HALF_OPEN = "HALF_OPEN"


def is_transient(exc: BaseException) -> bool:
    return isinstance(exc, UpstreamUnavailableError) and exc.transient


class CircuitBreaker:
    """Circuit breaker for a single rate source.

    CLOSED counts consecutive transient failures; reaching ``failure_threshold``
    opens the circuit for ``recovery_timeout`` seconds. While OPEN every call
    fails fast with ``CircuitOpenError``. Once the timeout passes a single
    trial call runs in HALF_OPEN: success closes the circuit, a transient
    failure reopens it for another full period.

    Non-transient outcomes (4xx, empty payloads) mean the upstream answered,
    so they count as successes here.

    Calls that started before the latest state change do not affect the
    new state.
    """

    def __init__(
        self,
        source_name: str,
        failure_threshold: int = 5,
        recovery_timeout: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.source_name = source_name
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self._clock = clock

        self._state = CircuitBreakerState.CLOSED
        self._failure_count = 0
        self._opened_at: float | None = None
        self._trial_in_flight = False
        # bumped on every transition; outcomes from an earlier generation are ignored
        self._generation = 0

    @property
    def state(self) -> CircuitBreakerState:
        return self._state

    @property
    def failure_count(self) -> int:
        return self._failure_count

    async def call(self, func: Callable[[], Awaitable[T]]) -> T:
        """Execute ``func`` with circuit breaker protection."""
        self._before_call()
        is_trial = self._state == CircuitBreakerState.HALF_OPEN
        if is_trial:
            self._trial_in_flight = True
        generation = self._generation

        try:
            result = await func()
        except Exception as e:
            if generation == self._generation:
                if is_transient(e):
                    self._on_failure()
                else:
                    self._on_success()
            raise
        else:
            if generation == self._generation:
                self._on_success()
            return result
        finally:
            # also runs on cancellation, which leaves the state untouched
            if is_trial:
                self._trial_in_flight = False

    def _before_call(self) -> None:
        if self._state == CircuitBreakerState.OPEN:
            if self._retry_after() > 0:
                raise CircuitOpenError(self.source_name, self._failure_count, self._retry_after())
            self._transition(CircuitBreakerState.HALF_OPEN, "attempting_recovery")

        if self._state == CircuitBreakerState.HALF_OPEN and self._trial_in_flight:
            raise CircuitOpenError(self.source_name, self._failure_count, self.recovery_timeout)

    def _on_success(self) -> None:
        if self._state == CircuitBreakerState.HALF_OPEN:
            self._failure_count = 0
            self._opened_at = None
            self._transition(CircuitBreakerState.CLOSED, "recovery_successful")
        elif self._state == CircuitBreakerState.CLOSED:
            self._failure_count = 0

    def _on_failure(self) -> None:
        if self._state == CircuitBreakerState.HALF_OPEN:
            self._open("failure_during_recovery")
            return

        self._failure_count += 1
        if self._failure_count >= self.failure_threshold:
            self._open(f"{self._failure_count}_consecutive_failures")
        else:
            logger.warning(
                f"Upstream failure for {self.source_name}: "
                f"{self._failure_count}/{self.failure_threshold}"
            )

    def _open(self, reason: str) -> None:
        self._opened_at = self._clock()
        self._transition(CircuitBreakerState.OPEN, reason)

    def _retry_after(self) -> float:
        if self._opened_at is None:
            return 0.0
        return max(0.0, self._opened_at + self.recovery_timeout - self._clock())

    def _transition(self, new_state: CircuitBreakerState, reason: str) -> None:
        old_state = self._state
        self._state = new_state
        self._generation += 1
        log = logger.error if new_state == CircuitBreakerState.OPEN else logger.info
        log(
            f"Circuit breaker {self.source_name}: {old_state.value} -> {new_state.value} "
            f"({reason}, failures={self._failure_count})"
        )

    def get_status(self) -> dict:
        """Get current circuit breaker status for monitoring"""
        return {
            "source_name": self.source_name,
            "state": self._state.value,
            "status": "healthy" if self._state == CircuitBreakerState.CLOSED else "unhealthy",
            "failure_count": self._failure_count,
            "failure_threshold": self.failure_threshold,
            "recovery_timeout": self.recovery_timeout,
            "retry_after": round(self._retry_after(), 3) if self._state == CircuitBreakerState.OPEN else 0.0,
        }
