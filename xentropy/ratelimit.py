"""Request spacing and retry bounds for the search feed."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable

from xentropy.errors import EntropyTimeoutError

logger = logging.getLogger(__name__)


class RateLimiter:
    """Thread-safe fixed-delay limiter shared by all calls on one facade.

    ``throttle()`` runs before every request and keeps requests from any
    thread at least ``delay`` seconds apart. ``pause()`` is the blocking
    wait after every attempt.
    """

    def __init__(
        self,
        delay: float,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.delay = delay
        self._sleep = sleep
        self._clock = clock
        self._lock = threading.Lock()
        self._next_slot: float | None = None

    def throttle(self) -> float:
        """Block until the next request slot is free; return the time waited."""
        with self._lock:
            now = self._clock()
            waited = 0.0
            if self._next_slot is not None and self._next_slot > now:
                waited = self._next_slot - now
                logger.debug("Rate limit: waiting %.3fs for request slot", waited)
                self._sleep(waited)
                now = self._clock()
            self._next_slot = now + self.delay
            return waited

    def pause(self) -> float:
        if self.delay > 0:
            self._sleep(self.delay)
        return self.delay


@dataclass
class RetryBudget:
    """Per-call attempt counter checked against a :class:`RetryPolicy`."""

    policy: RetryPolicy
    started: float
    attempts: int = 0

    def elapsed(self) -> float:
        return self.policy.clock() - self.started

    def check(self, collected: int = 0) -> None:
        """Raise :class:`EntropyTimeoutError` if another attempt is not allowed."""
        p = self.policy
        if p.max_attempts is not None and self.attempts >= p.max_attempts:
            raise EntropyTimeoutError(
                f"Entropy collection gave up after {self.attempts} attempts "
                f"({collected} bytes collected)",
                attempts=self.attempts,
                collected=collected,
            )
        if p.deadline is not None and self.elapsed() >= p.deadline:
            raise EntropyTimeoutError(
                f"Entropy collection exceeded {p.deadline:.1f}s deadline "
                f"after {self.attempts} attempts ({collected} bytes collected)",
                attempts=self.attempts,
                collected=collected,
            )
        self.attempts += 1


@dataclass
class RetryPolicy:
    """Upper bounds on one collection; ``None`` means unbounded."""

    max_attempts: int | None = None
    deadline: float | None = None
    clock: Callable[[], float] = time.monotonic

    def start(self) -> RetryBudget:
        return RetryBudget(policy=self, started=self.clock())
