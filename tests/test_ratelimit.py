"""Tests for request spacing and retry bounds."""

import threading
import time

import pytest

from xentropy.errors import EntropyTimeoutError
from xentropy.ratelimit import RateLimiter, RetryPolicy


class TestRateLimiter:
    def test_first_request_not_delayed(self, clock):
        limiter = RateLimiter(1.2, sleep=clock.sleep, clock=clock.time)
        assert limiter.throttle() == 0.0
        assert clock.sleeps == []

    def test_back_to_back_requests_spaced(self, clock):
        limiter = RateLimiter(1.2, sleep=clock.sleep, clock=clock.time)
        limiter.throttle()
        assert limiter.throttle() == pytest.approx(1.2)

    def test_pause_then_throttle_does_not_double_wait(self, clock):
        limiter = RateLimiter(1.2, sleep=clock.sleep, clock=clock.time)
        limiter.throttle()
        limiter.pause()
        limiter.throttle()
        assert clock.sleeps == [1.2]

    def test_zero_delay_never_sleeps(self, clock):
        limiter = RateLimiter(0.0, sleep=clock.sleep, clock=clock.time)
        for _ in range(5):
            limiter.throttle()
            limiter.pause()
        assert clock.sleeps == []

    def test_concurrent_requests_spaced(self):
        limiter = RateLimiter(0.05)
        threads = [threading.Thread(target=limiter.throttle) for _ in range(4)]
        t0 = time.monotonic()
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        # four slots -> three full gaps
        assert time.monotonic() - t0 >= 0.14


class TestRetryPolicy:
    def test_unbounded(self, clock):
        budget = RetryPolicy(clock=clock.time).start()
        for _ in range(1000):
            budget.check()
        assert budget.attempts == 1000

    def test_max_attempts(self, clock):
        budget = RetryPolicy(max_attempts=2, clock=clock.time).start()
        budget.check()
        budget.check()
        with pytest.raises(EntropyTimeoutError) as exc:
            budget.check(collected=8)
        assert exc.value.attempts == 2
        assert exc.value.collected == 8

    def test_deadline(self, clock):
        budget = RetryPolicy(deadline=3.0, clock=clock.time).start()
        budget.check()
        clock.sleep(3.0)
        with pytest.raises(EntropyTimeoutError):
            budget.check()

    def test_budgets_independent(self, clock):
        policy = RetryPolicy(max_attempts=1, clock=clock.time)
        policy.start().check()
        policy.start().check()
