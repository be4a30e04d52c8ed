"""
Per-client rate limiting for the /api routes
"""
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, Optional
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    retry_after: float = 0.0


class RateLimiter:
    """
    Rate limiter that enforces a requests-per-window limit for each client key
    Uses sliding window algorithm
    """

    def __init__(self, requests_per_minute: int, window_seconds: float = 60.0, clock: Optional[Callable[[], float]] = None):
        """
        Initialize rate limiter

        Args:
            requests_per_minute: Maximum number of requests allowed per window and key (0 disables limiting)
            window_seconds: Length of the sliding window
            clock: Monotonic time source, overridable in tests
        """
        self.requests_per_minute = requests_per_minute
        self.window_seconds = window_seconds
        self._clock = clock or time.monotonic
        self.request_times: Dict[str, Deque[float]] = {}
        self._last_purge: Optional[float] = None

    def _cleanup_old_requests(self, times: Deque[float], current_time: float) -> None:
        """Remove requests older than the window"""
        while times and current_time - times[0] >= self.window_seconds:
            times.popleft()

    def _purge_idle_clients(self, current_time: float) -> None:
        """Drop clients with no requests left in the window, at most once per window"""
        if self._last_purge is not None and current_time - self._last_purge < self.window_seconds:
            return
        self._last_purge = current_time
        for key in list(self.request_times):
            times = self.request_times[key]
            self._cleanup_old_requests(times, current_time)
            if not times:
                del self.request_times[key]

    def hit(self, key: str) -> RateLimitDecision:
        """
        Record a request for ``key`` unless it is over the limit
        Never blocks; the caller decides how to reject
        """
        if not self.requests_per_minute:
            return RateLimitDecision(allowed=True, limit=0, remaining=0)

        current_time = self._clock()
        self._purge_idle_clients(current_time)
        times = self.request_times.setdefault(key, deque())
        self._cleanup_old_requests(times, current_time)

        if len(times) >= self.requests_per_minute:
            retry_after = self.window_seconds - (current_time - times[0])
            logger.debug(f"Rate limit reached for {key}. Retry in {retry_after:.2f} seconds")
            return RateLimitDecision(
                allowed=False,
                limit=self.requests_per_minute,
                remaining=0,
                retry_after=max(retry_after, 0.0),
            )

        times.append(current_time)
        return RateLimitDecision(
            allowed=True,
            limit=self.requests_per_minute,
            remaining=self.requests_per_minute - len(times),
        )

    def get_stats(self, key: str) -> dict:
        """Get current rate limiter statistics for one client"""
        times = self.request_times.get(key, deque())
        self._cleanup_old_requests(times, self._clock())

        return {
            'requests_in_window': len(times),
            'limit': self.requests_per_minute,
            'window_seconds': self.window_seconds,
        }
