# core/services/services_rate_limit.py
"""
Fixed-window rate limiting per client key (usually the client IP).

✔ Thread-safe (sync endpoints run in a threadpool)
✔ Injectable clock for tests
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    reset_after: float  # seconds until the current window closes


class FixedWindowRateLimiter:
    def __init__(
        self,
        *,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_requests <= 0:
            raise ValueError("max_requests must be > 0")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")

        self.max_requests = max_requests
        self.window_seconds = float(window_seconds)
        self._clock = clock
        self._lock = threading.Lock()
        # key -> (window_start, hits)
        self._windows: dict[str, tuple[float, int]] = {}

    def hit(self, key: str) -> RateLimitDecision:
        now = self._clock()

        with self._lock:
            start, hits = self._windows.get(key, (now, 0))
            if now - start >= self.window_seconds:
                start, hits = now, 0

            hits += 1
            self._windows[key] = (start, hits)

            if len(self._windows) > 10_000:
                self._purge(now)

        reset_after = max(0.0, self.window_seconds - (now - start))
        return RateLimitDecision(
            allowed=hits <= self.max_requests,
            limit=self.max_requests,
            remaining=max(0, self.max_requests - hits),
            reset_after=reset_after,
        )

    def _purge(self, now: float) -> None:
        # caller holds the lock
        expired = [k for k, (start, _) in self._windows.items() if now - start >= self.window_seconds]
        for k in expired:
            del self._windows[k]
