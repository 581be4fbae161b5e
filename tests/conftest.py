"""Shared fakes: a clock advanced only by sleep, and a scripted search client."""

from __future__ import annotations

import threading

import pytest

from xentropy.errors import ExternalFetchError

# 2025-01-01T00:00:00Z
T0 = 1_735_689_600.0

SCENARIO_EVENTS = [
    {"id": "1", "created_at": "2025-01-01T00:00:00.123456Z"},
    {"id": "2", "created_at": "2025-01-01T00:00:01.654321Z"},
]


class FakeClock:
    """Wall and monotonic clock in one; only ``sleep`` moves it."""

    def __init__(self, start: float = T0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def time(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    @property
    def slept(self) -> float:
        return sum(self.sleeps)


class ScriptedClient:
    """Replays a list of responses; the last one repeats forever.

    A response is a list of result dicts or an exception instance to raise.
    """

    def __init__(self, *responses) -> None:
        self._responses = list(responses) or [[]]
        self.windows = []
        self._lock = threading.Lock()

    @property
    def calls(self) -> int:
        return len(self.windows)

    def search(self, window):
        with self._lock:
            idx = min(len(self.windows), len(self._responses) - 1)
            self.windows.append(window)
        resp = self._responses[idx]
        if isinstance(resp, Exception):
            raise resp
        return list(resp)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def failing():
    return ExternalFetchError("API request failed", status_code=503, body="unavailable")
