import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from lead_importer.rate_limit import DelayPolicy, RateLimitedEngine, RateLimiter


class DummyEngine:
    name = "dummy"

    def __init__(self) -> None:
        self.calls = 0
        self.last_email = None

    def verify(self, email: str) -> bool:
        self.calls += 1
        self.last_email = email
        return True


def test_rate_limited_engine_delegates_to_engine() -> None:
    engine = DummyEngine()
    wrapper = RateLimitedEngine(engine)

    result = wrapper.verify("ada@example.com")

    assert result is True
    assert wrapper.name == "dummy"
    assert wrapper.engine is engine
    assert engine.calls == 1
    assert engine.last_email == "ada@example.com"


def test_display_name_overrides_engine_name() -> None:
    wrapper = RateLimitedEngine(DummyEngine(), display_name="Primary")

    assert wrapper.name == "Primary"


def test_rate_limiter_without_limit_does_not_wait() -> None:
    limiter = RateLimiter(None)

    started = time.monotonic()
    for _ in range(100):
        limiter.acquire()

    assert limiter.interval == 0.0
    assert time.monotonic() - started < 0.5


def test_rate_limiter_spaces_calls() -> None:
    limiter = RateLimiter(1200)  # one call every 50ms

    started = time.monotonic()
    limiter.acquire()
    limiter.acquire()
    limiter.acquire()

    assert time.monotonic() - started >= 0.09


def test_delay_policy_sleeps_after_call() -> None:
    wrapper = RateLimitedEngine(DummyEngine(), delay_policy=DelayPolicy(delay_seconds=0.05))

    started = time.monotonic()
    wrapper.verify("ada@example.com")

    assert time.monotonic() - started >= 0.04


def test_reserve_hands_out_spaced_slots_without_waiting() -> None:
    limiter = RateLimiter(60)  # one call per second

    started = time.monotonic()
    waits = [limiter.reserve() for _ in range(3)]

    assert time.monotonic() - started < 0.5
    assert waits[0] == 0.0
    assert 0.9 <= waits[1] <= 1.0
    assert 1.9 <= waits[2] <= 2.0


def test_concurrent_callers_wait_in_parallel() -> None:
    limiter = RateLimiter(600)  # one call every 100ms
    limiter.acquire()

    started = time.monotonic()
    with ThreadPoolExecutor(max_workers=4) as executor:
        list(executor.map(lambda _: limiter.acquire(), range(4)))

    elapsed = time.monotonic() - started
    assert 0.35 <= elapsed < 0.8


def test_delay_policy_applies_when_engine_fails() -> None:
    class FailingEngine:
        def verify(self, email: str) -> bool:
            raise RuntimeError("mailbox lookup failed")

    wrapper = RateLimitedEngine(FailingEngine(), delay_policy=DelayPolicy(delay_seconds=0.05))

    started = time.monotonic()
    with pytest.raises(RuntimeError):
        wrapper.verify("ada@example.com")

    assert time.monotonic() - started >= 0.04
    assert wrapper.name == "FailingEngine"
