"""Fixed-window request-rate guard with pluggable counter backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
import logging
from threading import Lock
import time
from typing import Callable

import redis

from areto.constants.network_constants import (
    RATE_LIMIT_MAX_REQUESTS,
    RATE_LIMIT_MESSAGE,
    RATE_LIMIT_WINDOW_SECONDS,
)
from areto.core.errors import RateLimitedError

logger = logging.getLogger(__name__)


class RateLimitBackend(ABC):
    """Counts hits per key within the current window."""

    @abstractmethod
    def hit(self, key: str, window_seconds: int) -> int:
        """Count one request for ``key`` and return the count in the current window."""


class InMemoryRateLimitBackend(RateLimitBackend):
    """Process-local counters; windows are aligned to the clock."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._lock = Lock()
        self._current_window: int | None = None
        self._windows: dict[str, tuple[int, int]] = {}

    @property
    def active_sources(self) -> int:
        with self._lock:
            return len(self._windows)

    def hit(self, key: str, window_seconds: int) -> int:
        window = int(self._clock() // window_seconds)
        with self._lock:
            if window != self._current_window:
                # Counters from earlier windows are dead once the window rolls over
                self._windows = {k: v for k, v in self._windows.items() if v[0] == window}
                self._current_window = window
            count = self._windows.get(key, (window, 0))[1] + 1
            self._windows[key] = (window, count)
            return count

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()
            self._current_window = None


class RedisRateLimitBackend(RateLimitBackend):
    """Counters shared between processes through Redis ``INCR``/``EXPIRE``."""

    def __init__(self, client, key_prefix: str = "areto:ratelimit", clock: Callable[[], float] = time.time) -> None:
        self._client = client
        self._key_prefix = key_prefix
        self._clock = clock

    @classmethod
    def from_url(cls, url: str) -> "RedisRateLimitBackend":
        return cls(redis.from_url(url, socket_timeout=2))

    def hit(self, key: str, window_seconds: int) -> int:
        window = int(self._clock() // window_seconds)
        redis_key = f"{self._key_prefix}:{key}:{window}"
        count = int(self._client.incr(redis_key))
        if count == 1:
            self._client.expire(redis_key, window_seconds)
        return count


class RateLimiter:
    """Allows ``max_requests`` per source in each window.

    When the backend itself fails, ``fail_open`` decides the outcome: the
    failure is logged and the request is either let through (``True``) or
    rejected (``False``).
    """

    def __init__(
        self,
        backend: RateLimitBackend | None = None,
        max_requests: int = RATE_LIMIT_MAX_REQUESTS,
        window_seconds: int = RATE_LIMIT_WINDOW_SECONDS,
        fail_open: bool = True,
    ) -> None:
        if max_requests <= 0:
            raise ValueError("max_requests must be a positive integer.")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be a positive integer.")
        self._backend = backend or InMemoryRateLimitBackend()
        self._max_requests = max_requests
        self._window_seconds = window_seconds
        self._fail_open = fail_open

    @property
    def max_requests(self) -> int:
        return self._max_requests

    @property
    def fail_open(self) -> bool:
        return self._fail_open

    def allow(self, source: str) -> bool:
        """Count a request from ``source`` and report whether it may proceed."""
        try:
            count = self._backend.hit(source, self._window_seconds)
        except Exception:
            logger.exception(
                "Rate limit backend failed; %s request from %s",
                "allowing" if self._fail_open else "rejecting",
                source,
            )
            return self._fail_open
        if count > self._max_requests:
            logger.warning("Rate limit exceeded for %s (%d requests)", source, count)
            return False
        return True

    def check(self, source: str) -> None:
        """Like ``allow`` but raises RateLimitedError when the request must be rejected."""
        if not self.allow(source):
            raise RateLimitedError(RATE_LIMIT_MESSAGE)
