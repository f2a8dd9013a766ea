"""Fixed-window, per-client request limiter for the /api/ routes."""

import logging
import math
from dataclasses import dataclass

from errors import RateLimitExceededError
from services.clock import Clock

logger = logging.getLogger(__name__)


@dataclass
class RateLimitState:
    limit: int
    remaining: int
    reset_seconds: int


class RateLimiter:
    def __init__(self, limit: int, window_seconds: int, clock: Clock | None = None):
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock or Clock()
        self._windows: dict[str, tuple[float, int]] = {}  # client -> (window_start, count)

    def check(self, client_id: str) -> RateLimitState:
        """Count one request for ``client_id``.

        Raises:
            RateLimitExceededError: If the client is over the limit for the current window.
        """
        now = self._clock.time()
        window_start, count = self._windows.get(client_id, (now, 0))
        if now - window_start >= self.window_seconds:
            window_start, count = now, 0

        reset = max(1, math.ceil(window_start + self.window_seconds - now))
        if count >= self.limit:
            logger.warning("Rate limit exceeded for %s: %d/%d in window", client_id, count, self.limit)
            raise RateLimitExceededError(retry_after=reset)

        count += 1
        self._windows[client_id] = (window_start, count)
        return RateLimitState(limit=self.limit, remaining=self.limit - count, reset_seconds=reset)

    def prune(self) -> int:
        """Forget clients whose window has closed."""
        now = self._clock.time()
        stale = [c for c, (start, _) in self._windows.items() if now - start >= self.window_seconds]
        for client_id in stale:
            del self._windows[client_id]
        return len(stale)
