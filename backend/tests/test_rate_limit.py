"""Tests for the receipt-send rate limiter."""
from __future__ import annotations

from types import SimpleNamespace

import pytest
from fastapi import HTTPException

from backend.posgo.middleware import rate_limit
from backend.posgo.middleware.rate_limit import InMemoryRateLimiter


class _Clock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture()
def clock(monkeypatch: pytest.MonkeyPatch) -> _Clock:
    fake = _Clock()
    monkeypatch.setattr(rate_limit, "time", SimpleNamespace(time=fake))
    return fake


class TestInMemoryRateLimiter:
    def test_blocks_after_max_attempts(self, clock: _Clock) -> None:
        limiter = InMemoryRateLimiter(window_seconds=60, max_attempts=2)
        limiter.check("store-a")
        limiter.check("store-a")
        with pytest.raises(HTTPException) as exc_info:
            limiter.check("store-a")
        assert exc_info.value.status_code == 429
        limiter.check("store-b")

    def test_window_slides(self, clock: _Clock) -> None:
        limiter = InMemoryRateLimiter(window_seconds=60, max_attempts=1)
        limiter.check("store-a")
        clock.now += 61
        limiter.check("store-a")

    def test_idle_keys_are_dropped(self, clock: _Clock) -> None:
        limiter = InMemoryRateLimiter(window_seconds=60, max_attempts=5)
        limiter.check("store-a")
        limiter.check("store-b")
        clock.now += 61
        limiter.check("store-c")
        assert set(limiter._attempts) == {"store-c"}
