"""Entropy from creation timestamps of recent public X posts.

Each attempt queries the last ``window_seconds`` of posts, converts every
``created_at`` to nanoseconds since the epoch, and keeps the lower 32 bits
as one big-endian 4-byte chunk. The nanosecond LSBs of independent posting
times are the unpredictable part; high-order bits are shared across the
window and are removed later by conditioning.

Failure policy:

* fetch failure -> one local-clock chunk, pause, retry (never raised)
* zero usable timestamps -> pause, retry, nothing appended
* batch received -> all chunks appended, one pause per batch
"""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Iterable

import numpy as np

from xentropy.errors import ExternalFetchError
from xentropy.ratelimit import RateLimiter, RetryPolicy
from xentropy.sources.base import EntropySource
from xentropy.sources.clock import ClockFallbackSource

if TYPE_CHECKING:
    from xentropy.client import SearchClient

logger = logging.getLogger(__name__)

CREATED_AT_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"
_CREATED_AT_RE = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{1,6}Z")
_EPOCH = datetime(1970, 1, 1)
CHUNK_BYTES = 4


@dataclass(frozen=True)
class TimeWindow:
    """Unix-second ``[start, end]`` search range."""

    start: int
    end: int

    @classmethod
    def ending_at(cls, now: float, seconds: int = 60) -> TimeWindow:
        end = int(now)
        return cls(start=end - seconds, end=end)

    @property
    def seconds(self) -> int:
        return self.end - self.start


@dataclass
class CollectionReport:
    """What one :meth:`XPostSource.collect_report` call went through."""

    attempts: int = 0
    events: int = 0
    empty_responses: int = 0
    failures: int = 0
    fallback_chunks: int = 0
    bytes_collected: int = 0

    @property
    def degraded(self) -> bool:
        return self.fallback_chunks > 0


def parse_created_at(value) -> int | None:
    """``YYYY-MM-DDTHH:MM:SS.ffffffZ`` (UTC) -> nanoseconds since epoch.

    Returns None for anything that does not match exactly.
    """
    if not isinstance(value, str) or not _CREATED_AT_RE.fullmatch(value):
        return None
    try:
        dt = datetime.strptime(value, CREATED_AT_FORMAT)
    except ValueError:
        return None
    delta = dt - _EPOCH
    seconds = delta.days * 86400 + delta.seconds
    return seconds * 1_000_000_000 + delta.microseconds * 1000


def extract_timestamps(events: Iterable[dict]) -> list[int]:
    """Lower 32 bits of every parseable ``created_at``, in feed order."""
    out: list[int] = []
    for event in events:
        ns = parse_created_at(event.get("created_at")) if isinstance(event, dict) else None
        if ns is not None:
            out.append(ns & 0xFFFFFFFF)
    return out


def extract_chunks(events: Iterable[dict]) -> bytes:
    """Pack :func:`extract_timestamps` as consecutive big-endian uint32."""
    return np.array(extract_timestamps(events), dtype=">u4").tobytes()


class XPostSource(EntropySource):
    """Windowed, rate-limited collector over a search client.

    The limiter is shared with every other caller of the same facade; the
    retry budget and buffer belong to a single :meth:`collect` call.
    """

    name = "x_posts"
    description = "Nanosecond LSBs of recent public X post timestamps"

    def __init__(
        self,
        client: SearchClient,
        limiter: RateLimiter,
        window_seconds: int = 60,
        retry: RetryPolicy | None = None,
        fallback: ClockFallbackSource | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._client = client
        self._limiter = limiter
        self.window_seconds = window_seconds
        self._retry = retry or RetryPolicy()
        self._fallback = fallback or ClockFallbackSource()
        self._clock = clock

    def is_available(self) -> bool:
        return self._client is not None

    def current_window(self) -> TimeWindow:
        return TimeWindow.ending_at(self._clock(), self.window_seconds)

    def fetch(self, window: TimeWindow) -> bytes:
        """One throttled request; raises :class:`ExternalFetchError`."""
        self._limiter.throttle()
        chunks = extract_chunks(self._client.search(window))
        logger.info("Retrieved %d timestamps", len(chunks) // CHUNK_BYTES)
        return chunks

    def collect_report(self, n_bytes: int) -> tuple[bytes, CollectionReport]:
        """Collect at least *n_bytes*; may overshoot by up to one batch."""
        report = CollectionReport()
        budget = self._retry.start()
        buf = bytearray()

        while len(buf) < n_bytes:
            budget.check(len(buf))
            report.attempts = budget.attempts
            window = self.current_window()
            try:
                chunks = self.fetch(window)
            except ExternalFetchError as exc:
                report.failures += 1
                logger.warning("Error collecting entropy: %s", exc)
                buf += self._fallback.collect(CHUNK_BYTES)
                report.fallback_chunks += 1
                logger.warning(
                    "Using local clock fallback entropy (%d/%d bytes)", len(buf), n_bytes
                )
                self._limiter.pause()
                continue

            if not chunks:
                report.empty_responses += 1
                logger.info("No timestamps received, retrying")
                self._limiter.pause()
                continue

            buf += chunks
            report.events += len(chunks) // CHUNK_BYTES
            self._limiter.pause()

        report.bytes_collected = len(buf)
        return bytes(buf), report

    def collect(self, n_bytes: int = 16) -> bytes:
        data, _ = self.collect_report(n_bytes)
        return data
