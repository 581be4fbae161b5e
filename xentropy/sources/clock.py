"""Local-clock fallback source.

Used only when the search feed fails. The microsecond clock is not random,
merely time-varying; it keeps collection moving at the cost of quality.
"""

from __future__ import annotations

import struct
import time
from typing import Callable

from xentropy.sources.base import EntropySource


def _microtime() -> int:
    return time.time_ns() // 1000


class ClockFallbackSource(EntropySource):
    """Lower 32 bits of the current microsecond clock, 4 bytes big-endian."""

    name = "clock_fallback"
    description = "Lower 32 bits of the local microsecond clock"

    def __init__(self, microtime: Callable[[], int] | None = None) -> None:
        self._microtime = microtime or _microtime

    def is_available(self) -> bool:
        return True

    def chunk(self) -> bytes:
        return struct.pack(">I", self._microtime() & 0xFFFFFFFF)

    def collect(self, n_bytes: int = 4) -> bytes:
        out = bytearray()
        while len(out) < max(n_bytes, 1):
            out += self.chunk()
        return bytes(out)
