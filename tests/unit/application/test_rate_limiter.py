import pytest

from application.services.rate_limiter import ClientRateLimiter
from domain.exceptions.currency import RateLimitExceededError
from infrastructure.cache.memory_cache import InMemoryTTLStore


@pytest.fixture
def limiter(clock):
    return ClientRateLimiter(store=InMemoryTTLStore(clock=clock), max_requests=3, window=60, clock=clock)


def test_allows_up_to_limit_and_counts_down(limiter):
    assert limiter.check("10.0.0.1") == 2
    assert limiter.check("10.0.0.1") == 1
    assert limiter.check("10.0.0.1") == 0


def test_fourth_request_in_window_is_rejected(limiter):
    for _ in range(3):
        limiter.check("10.0.0.1")

    with pytest.raises(RateLimitExceededError) as exc_info:
        limiter.check("10.0.0.1")

    assert exc_info.value.client == "10.0.0.1"
    assert exc_info.value.limit == 3
    assert exc_info.value.message == "Too many requests. Please try again later."


def test_clients_are_counted_independently(limiter):
    for _ in range(3):
        limiter.check("10.0.0.1")

    assert limiter.check("10.0.0.2") == 2


def test_window_is_anchored_at_first_request(limiter, clock):
    limiter.check("10.0.0.1")
    clock.advance(30)
    limiter.check("10.0.0.1")
    limiter.check("10.0.0.1")

    clock.advance(29)
    with pytest.raises(RateLimitExceededError) as exc_info:
        limiter.check("10.0.0.1")
    assert exc_info.value.retry_after == pytest.approx(1)

    # later requests do not push the window out
    clock.advance(1)
    assert limiter.check("10.0.0.1") == 2


def test_rejected_requests_do_not_extend_the_window(limiter, clock):
    for _ in range(3):
        limiter.check("10.0.0.1")
    for _ in range(5):
        clock.advance(10)
        with pytest.raises(RateLimitExceededError):
            limiter.check("10.0.0.1")

    clock.advance(10)
    assert limiter.check("10.0.0.1") == 2


@pytest.mark.parametrize("client", [None, ""])
def test_missing_client_shares_unknown_bucket(limiter, client):
    for _ in range(3):
        limiter.check(client)

    with pytest.raises(RateLimitExceededError) as exc_info:
        limiter.check("Unknown")

    assert exc_info.value.client == "Unknown"
