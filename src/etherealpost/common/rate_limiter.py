"""Request pacing for the Battle.net API."""

from __future__ import annotations

import time
import threading


class RateLimiter:
    """Thread-safe limiter spacing requests evenly across a minute.

    ``defer`` pushes the next allowed request back, e.g. when the API
    answers 429 with a ``Retry-After`` header.

    Args:
        requests_per_minute: Maximum requests allowed per minute.
    """

    def __init__(self, requests_per_minute: int = 100) -> None:
        self._interval = 60.0 / max(requests_per_minute, 1)
        self._next_allowed: float | None = None
        self._lock = threading.Lock()

    @property
    def interval(self) -> float:
        return self._interval

    def wait(self) -> None:
        """Block until the next request is allowed."""
        with self._lock:
            if self._next_allowed is not None:
                delay = self._next_allowed - time.monotonic()
                if delay > 0:
                    time.sleep(delay)
            self._next_allowed = time.monotonic() + self._interval

    def defer(self, seconds: float) -> None:
        """Hold every request for at least ``seconds`` from now."""
        with self._lock:
            until = time.monotonic() + max(seconds, 0.0)
            if self._next_allowed is None or until > self._next_allowed:
                self._next_allowed = until
