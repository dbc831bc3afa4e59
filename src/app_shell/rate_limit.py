"""
In-memory fixed-window rate limiter for public submissions.

State is local to one process. Behind a load balancer each instance keeps
its own counters, so limits are under-enforced when scaled horizontally;
swap in a shared counter store if that matters.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from threading import Lock
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_MAX_SUBMISSIONS = 5
DEFAULT_WINDOW_MS = 10 * 60 * 1000


class TimePort(Protocol):
    """Protocol for time operations (enables testing with deterministic time)."""

    def now(self) -> datetime:
        """Return current UTC time."""
        ...


class SystemTimeAdapter:
    """Production time adapter using system clock."""

    def now(self) -> datetime:
        return datetime.now(UTC)


@dataclass(frozen=True)
class RateLimitConfig:
    max_submissions: int = DEFAULT_MAX_SUBMISSIONS
    window_ms: int = DEFAULT_WINDOW_MS

    @property
    def window(self) -> timedelta:
        return timedelta(milliseconds=self.window_ms)


@dataclass
class RateLimitEntry:
    count: int
    expires_at: datetime


@dataclass(frozen=True)
class RateLimitDecision:
    """
    Outcome of a rate-limit check.

    `remaining` is set when allowed, `retry_after_ms` when denied.
    """

    allowed: bool
    remaining: int | None = None
    retry_after_ms: int | None = None


class RateLimiter:
    def __init__(
        self,
        config: RateLimitConfig | None = None,
        time_port: TimePort | None = None,
    ):
        self.config = config if config is not None else RateLimitConfig()
        self._time = time_port if time_port is not None else SystemTimeAdapter()
        self._store: dict[str, RateLimitEntry] = {}
        self._lock = Lock()

    def check_rate_limit(self, identifier: str) -> RateLimitDecision:
        """
        Count one submission for `identifier` and decide whether it may proceed.

        An empty identifier is always allowed: clients we cannot measure are
        not blocked.
        """
        limit = self.config.max_submissions

        if not identifier:
            return RateLimitDecision(allowed=True, remaining=limit)

        with self._lock:
            now = self._time.now()
            entry = self._store.get(identifier)

            if entry is None or entry.expires_at <= now:
                self._store[identifier] = RateLimitEntry(
                    count=1, expires_at=now + self.config.window
                )
                return RateLimitDecision(allowed=True, remaining=limit - 1)

            if entry.count >= limit:
                retry_after = entry.expires_at - now
                return RateLimitDecision(
                    allowed=False,
                    retry_after_ms=int(retry_after.total_seconds() * 1000),
                )

            entry.count += 1
            return RateLimitDecision(allowed=True, remaining=limit - entry.count)

    def purge_expired(self) -> int:
        """Drop expired entries. Returns the number removed."""
        with self._lock:
            now = self._time.now()
            expired = [key for key, entry in self._store.items() if entry.expires_at <= now]
            for key in expired:
                del self._store[key]
        return len(expired)

    def get_entry(self, identifier: str) -> RateLimitEntry | None:
        with self._lock:
            entry = self._store.get(identifier)
            return RateLimitEntry(entry.count, entry.expires_at) if entry else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)


async def run_purge_loop(limiter: RateLimiter, interval_seconds: float) -> None:
    """Purge expired entries every `interval_seconds` until cancelled."""
    while True:
        await asyncio.sleep(interval_seconds)
        removed = limiter.purge_expired()
        if removed:
            logger.debug("Purged %d expired rate-limit entries", removed)
