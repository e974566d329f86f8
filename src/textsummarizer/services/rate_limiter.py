"""Per-address sliding window rate limiter."""

import logging
import math
import threading
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of a single rate limit check."""

    allowed: bool
    limit: int
    remaining: int
    reset_after: float

    @property
    def retry_after_seconds(self) -> int:
        """Whole seconds until another request would be admitted."""
        return max(1, math.ceil(self.reset_after))

    def headers(self) -> dict[str, str]:
        """Standard RateLimit-* headers describing this decision."""
        headers = {
            "RateLimit-Limit": str(self.limit),
            "RateLimit-Remaining": str(self.remaining),
            "RateLimit-Reset": str(math.ceil(self.reset_after)),
        }
        if not self.allowed:
            headers["Retry-After"] = str(self.retry_after_seconds)
        return headers


class RateLimiter:
    """Thread-safe sliding log limiter keyed by client address.

    Each key may make at most max_requests admitted requests in any
    window_seconds interval. Rejected requests are not recorded.
    """

    def __init__(
        self,
        max_requests: int = 10,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the limiter.

        Args:
            max_requests: Requests admitted per key per window
            window_seconds: Length of the rolling window in seconds
            clock: Monotonic time source, injectable for tests
        """
        if max_requests < 1 or window_seconds <= 0:
            raise ValueError("max_requests and window_seconds must be positive")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._lock = threading.Lock()

    def _prune(self, bucket: deque[float], now: float) -> None:
        cutoff = now - self.window_seconds
        while bucket and bucket[0] <= cutoff:
            bucket.popleft()

    def hit(self, key: str) -> RateLimitDecision:
        """Record a request for key if it fits in the current window."""
        now = self._clock()
        with self._lock:
            bucket = self._hits.setdefault(key, deque())
            self._prune(bucket, now)

            if len(bucket) >= self.max_requests:
                reset_after = bucket[0] + self.window_seconds - now
                return RateLimitDecision(
                    allowed=False,
                    limit=self.max_requests,
                    remaining=0,
                    reset_after=reset_after,
                )

            bucket.append(now)
            return RateLimitDecision(
                allowed=True,
                limit=self.max_requests,
                remaining=self.max_requests - len(bucket),
                reset_after=bucket[0] + self.window_seconds - now,
            )

    def sweep(self) -> int:
        """Drop buckets with no requests left in the window.

        Returns:
            Number of buckets removed
        """
        now = self._clock()
        with self._lock:
            idle = []
            for key, bucket in self._hits.items():
                self._prune(bucket, now)
                if not bucket:
                    idle.append(key)
            for key in idle:
                del self._hits[key]
        if idle:
            logger.debug(f"Swept {len(idle)} idle rate limit buckets")
        return len(idle)

    def reset(self, key: str | None = None) -> None:
        """Forget recorded requests for one key, or for every key."""
        with self._lock:
            if key is None:
                self._hits.clear()
            else:
                self._hits.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._hits)
