import asyncio
import threading
from datetime import UTC, datetime, timedelta

import pytest

from src.app_shell.rate_limit import (
    RateLimitConfig,
    RateLimiter,
    run_purge_loop,
)


class FakeTime:
    def __init__(self) -> None:
        self.current = datetime(2025, 1, 1, 12, 0, tzinfo=UTC)

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeTime()


@pytest.fixture
def limiter(clock):
    return RateLimiter(RateLimitConfig(max_submissions=3, window_ms=60_000), clock)


def test_first_request_starts_window(limiter, clock):
    decision = limiter.check_rate_limit("1.2.3.4")

    assert decision.allowed is True
    assert decision.remaining == 2
    entry = limiter.get_entry("1.2.3.4")
    assert entry.count == 1
    assert entry.expires_at == clock.now() + timedelta(seconds=60)


def test_nth_allowed_n_plus_one_denied(limiter):
    for expected_remaining in (2, 1, 0):
        decision = limiter.check_rate_limit("ip")
        assert decision.allowed is True
        assert decision.remaining == expected_remaining

    denied = limiter.check_rate_limit("ip")
    assert denied.allowed is False
    assert denied.retry_after_ms == 60_000


def test_denied_request_does_not_extend_window(limiter, clock):
    for _ in range(3):
        limiter.check_rate_limit("ip")
    clock.advance(seconds=45)

    denied = limiter.check_rate_limit("ip")

    assert denied.retry_after_ms == 15_000
    assert limiter.get_entry("ip").count == 3


def test_window_expiry_resets_count(limiter, clock):
    for _ in range(4):
        limiter.check_rate_limit("ip")
    clock.advance(seconds=60)

    decision = limiter.check_rate_limit("ip")

    assert decision.allowed is True
    assert limiter.get_entry("ip").count == 1


def test_identifiers_are_independent(limiter):
    for _ in range(3):
        limiter.check_rate_limit("a")
    assert limiter.check_rate_limit("a").allowed is False
    assert limiter.check_rate_limit("b").allowed is True


def test_empty_identifier_fails_open(limiter):
    for _ in range(10):
        decision = limiter.check_rate_limit("")
        assert decision.allowed is True
        assert decision.remaining == 3
    assert len(limiter) == 0


def test_purge_removes_only_expired(limiter, clock):
    limiter.check_rate_limit("old")
    clock.advance(seconds=30)
    limiter.check_rate_limit("new")
    clock.advance(seconds=31)

    assert limiter.purge_expired() == 1
    assert limiter.get_entry("old") is None
    assert limiter.get_entry("new") is not None


def test_get_entry_returns_copy(limiter):
    limiter.check_rate_limit("ip")
    entry = limiter.get_entry("ip")
    entry.count = 99
    assert limiter.get_entry("ip").count == 1


def test_concurrent_checks_never_exceed_limit():
    limiter = RateLimiter(RateLimitConfig(max_submissions=5, window_ms=60_000))
    results: list[bool] = []
    lock = threading.Lock()

    def worker():
        decision = limiter.check_rate_limit("shared")
        with lock:
            results.append(decision.allowed)

    threads = [threading.Thread(target=worker) for _ in range(50)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count(True) == 5


def test_config_window():
    assert RateLimitConfig().window == timedelta(minutes=10)
    assert RateLimitConfig().max_submissions == 5


@pytest.mark.asyncio
async def test_purge_loop_runs_until_cancelled(limiter, clock):
    limiter.check_rate_limit("ip")
    clock.advance(seconds=61)

    task = asyncio.create_task(run_purge_loop(limiter, 0.01))
    await asyncio.sleep(0.05)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert len(limiter) == 0
