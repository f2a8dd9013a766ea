"""Simple in-memory TTL cache. No Redis needed for this scale.

Note: Each uvicorn worker has its own cache instance. With --workers 2,
matches may be fetched twice (once per worker). The cache is only touched
from the event loop, so there is no lock. Concurrent misses on the same key
may each run the loader.
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from services.clock import Clock

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    key: str
    value: Any
    stored_at: float
    ttl_seconds: int

    def is_fresh(self, now: float) -> bool:
        return now < self.stored_at + self.ttl_seconds


class TTLCache:
    def __init__(self, clock: Clock | None = None):
        self._clock = clock or Clock()
        self._store: dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._store)

    def get(self, key: str) -> Any | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        if entry.is_fresh(self._clock.time()):
            return entry.value
        del self._store[key]
        return None

    def set(self, key: str, value: Any, ttl_seconds: int = 60) -> None:
        self._store[key] = CacheEntry(
            key=key, value=value, stored_at=self._clock.time(), ttl_seconds=ttl_seconds
        )

    async def get_or_load(
        self, key: str, ttl_seconds: int, loader: Callable[[], Awaitable[Any]]
    ) -> tuple[Any, bool]:
        """Return (value, was_cached), running ``loader`` on miss or expiry.

        Results carrying an ``error`` are returned but never stored, so an
        upstream outage is retried on the next request instead of being
        pinned for the whole TTL.
        """
        cached = self.get(key)
        if cached is not None:
            logger.debug("Cache hit: %s", key)
            return cached, True

        logger.debug("Cache miss: %s", key)
        value = await loader()
        if getattr(value, "error", None):
            logger.debug("Not caching errored result for %s", key)
        else:
            self.set(key, value, ttl_seconds=ttl_seconds)
        return value, False

    def sweep(self) -> int:
        """Drop expired entries. Returns how many were removed."""
        now = self._clock.time()
        expired = [key for key, entry in self._store.items() if not entry.is_fresh(now)]
        for key in expired:
            del self._store[key]
        if expired:
            logger.debug("Swept %d expired cache entries", len(expired))
        return len(expired)

    def flush(self) -> None:
        self._store.clear()
