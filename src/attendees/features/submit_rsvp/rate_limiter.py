"""Per-client submission limits.

Fixed-origin windows: a key gets ``limit`` hits starting from its first hit,
and the first hit after ``window_seconds`` starts a fresh window. State is
process-local and lost on restart; with several workers each one counts on
its own, so the limit is approximate.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from src.attendees.dtos import RateLimitedError
from src.config.settings import settings


class RateLimiter(Protocol):
    def check(self, key: str) -> bool:
        """Record a hit for ``key`` and return whether it is allowed."""
        ...


@dataclass
class RateLimitRecord:
    count: int
    window_start: float


class InMemoryRateLimiter:
    def __init__(
        self,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        max_keys: int = 10_000,
    ) -> None:
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._max_keys = max_keys
        self._records: dict[str, RateLimitRecord] = {}

    def check(self, key: str) -> bool:
        now = self._clock()
        record = self._records.get(key)

        if record is None or now - record.window_start >= self.window_seconds:
            if record is None and len(self._records) >= self._max_keys:
                self._evict_expired(now)
            self._records[key] = RateLimitRecord(count=1, window_start=now)
            return True

        if record.count >= self.limit:
            return False

        record.count += 1
        return True

    def get_record(self, key: str) -> RateLimitRecord | None:
        return self._records.get(key)

    def reset(self) -> None:
        self._records.clear()

    def _evict_expired(self, now: float) -> None:
        expired = [
            key
            for key, record in self._records.items()
            if now - record.window_start >= self.window_seconds
        ]
        for key in expired:
            del self._records[key]


rsvp_rate_limiter = InMemoryRateLimiter(
    limit=settings.rsvp_rate_limit,
    window_seconds=settings.rsvp_rate_window_seconds,
)


def enforce_rate_limit(rate_limiter: RateLimiter, key: str) -> None:
    """Count a hit for ``key``, raising RateLimitedError once it is over the limit."""
    if not rate_limiter.check(key):
        raise RateLimitedError(key)
