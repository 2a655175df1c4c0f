"""In-memory rate limiter for outbound receipt sends.

Counts are per process; a multi-replica deployment needs a shared backend.
"""

from __future__ import annotations

import time

from fastapi import HTTPException, status


class InMemoryRateLimiter:
    """Sliding-window in-memory rate limiter keyed by an arbitrary string."""

    def __init__(self, window_seconds: int = 60, max_attempts: int = 10) -> None:
        self._window = window_seconds
        self._max = max_attempts
        self._attempts: dict[str, list[float]] = {}

    def _prune(self, now: float) -> None:
        """Drop keys with no attempt left inside the window."""
        stale = [
            key for key, stamps in self._attempts.items()
            if not any(now - ts < self._window for ts in stamps)
        ]
        for key in stale:
            del self._attempts[key]

    def check(self, key: str) -> None:
        """Raise HTTP 429 if *key* has exceeded *max_attempts* in the window."""
        now = time.time()
        self._prune(now)
        recent = [ts for ts in self._attempts.get(key, []) if now - ts < self._window]
        if len(recent) >= self._max:
            self._attempts[key] = recent
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail=f"Too many receipts sent. Try again in {self._window} seconds.",
            )
        recent.append(now)
        self._attempts[key] = recent

    def reset(self) -> None:
        self._attempts.clear()
