"""Pacing for verification engine calls: a minimum spacing plus an optional pause."""
from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Optional


@dataclass
class DelayPolicy:
    """Fixed pause applied after each engine call."""

    delay_seconds: float = 0.0

    def pause(self) -> None:
        if self.delay_seconds > 0:
            time.sleep(self.delay_seconds)


class RateLimiter:
    """Hands out call slots at least ``60 / calls_per_minute`` seconds apart.

    Slots are claimed under a lock but the caller waits for its slot outside
    of it, so concurrent workers queue up without serialising their calls.
    """

    def __init__(self, calls_per_minute: Optional[float]) -> None:
        self._interval = 60.0 / float(calls_per_minute) if calls_per_minute else 0.0
        self._lock = threading.Lock()
        self._next_slot = 0.0

    @property
    def interval(self) -> float:
        return self._interval

    def reserve(self) -> float:
        """Claim the next free slot and return the seconds until it opens."""
        if self._interval <= 0:
            return 0.0
        with self._lock:
            now = time.monotonic()
            slot = max(now, self._next_slot)
            self._next_slot = slot + self._interval
        return slot - now

    def acquire(self) -> None:
        wait = self.reserve()
        if wait > 0:
            time.sleep(wait)


class RateLimitedEngine:
    """Verification engine wrapper that paces calls to ``verify``."""

    def __init__(
        self,
        engine,
        *,
        display_name: Optional[str] = None,
        delay_policy: Optional[DelayPolicy] = None,
        rate_limiter: Optional[RateLimiter] = None,
    ) -> None:
        self._engine = engine
        self._display_name = display_name
        self._delay_policy = delay_policy or DelayPolicy()
        self._rate_limiter = rate_limiter or RateLimiter(None)

    @property
    def name(self) -> str:
        return self._display_name or getattr(self._engine, "name", type(self._engine).__name__)

    @property
    def engine(self):
        return self._engine

    def verify(self, email: str) -> bool:
        self._rate_limiter.acquire()
        try:
            return self._engine.verify(email)
        finally:
            self._delay_policy.pause()
