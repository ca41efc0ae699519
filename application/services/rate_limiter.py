import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from domain.exceptions.currency import RateLimitExceededError
from infrastructure.cache.memory_cache import TTLStore

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = 'Unknown'


@dataclass(frozen=True)
class RateLimitEntry:
	count: int
	expires_at: float


class ClientRateLimiter:
	"""Fixed-window request counter per client.

	The window starts with a client's first request and is discarded wholesale
	when it expires, so up to twice ``max_requests`` can pass in a short span
	straddling a window boundary.

	``check`` reads, compares and writes the entry without awaiting, which keeps
	it atomic on a single event loop. Called from several threads at once it
	can over-admit a client, since the read-check-write is not locked.
	"""

	def __init__(
		self,
		store: TTLStore,
		max_requests: int = 3,
		window: float = 60.0,
		clock: Callable[[], float] = time.monotonic,
	):
		self.store = store
		self.max_requests = max_requests
		self.window = window
		self._clock = clock

	def check(self, client: str | None) -> int:
		"""Admit one request from ``client`` or raise ``RateLimitExceededError``.

		Returns the number of requests left in the current window.
		"""
		client = client or UNKNOWN_CLIENT
		key = f'rate_limit:{client}'
		now = self._clock()

		entry = self.store.get(key)
		if entry is None:
			entry = RateLimitEntry(count=0, expires_at=now + self.window)
			self.store.set(key, entry, self.window)

		if entry.count >= self.max_requests:
			logger.warning(f'Client {client} has exceeded the request limit')
			raise RateLimitExceededError(client, self.max_requests, entry.expires_at - now)

		entry = RateLimitEntry(count=entry.count + 1, expires_at=entry.expires_at)
		self.store.set(key, entry, entry.expires_at - now)
		return self.max_requests - entry.count
