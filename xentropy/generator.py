"""Single-draw LCG seeded from a conditioned seed.

``state' = (1664525 * state + 1013904223) mod 2**32``

Only the low 32 bits of the 63-bit initial state influence the output.
Mapping into ``[lo, hi]`` uses plain modulo reduction, so widths that do
not divide ``2**32`` are biased by at most ``(2**32 mod width) / 2**32``.
"""

from __future__ import annotations

import enum
import operator

from xentropy.errors import GeneratorStateError, InvalidRangeError, RangeOverflowError

LCG_A = 1664525
LCG_C = 1013904223
LCG_M = 1 << 32

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

_STATE_MASK = 0x7FFFFFFFFFFFFFFF


# ── pure functions ──


def seed_state(seed: bytes) -> int:
    """First 8 seed bytes as big-endian uint64, top bit cleared."""
    if len(seed) < 8:
        raise ValueError(f"seed must be at least 8 bytes, got {len(seed)}")
    return int.from_bytes(bytes(seed[:8]), "big") & _STATE_MASK


def lcg_step(state: int) -> int:
    return (LCG_A * state + LCG_C) % LCG_M


def check_bounds(lo, hi) -> tuple[int, int]:
    """Coerce to int and require ``lo <= hi``."""
    try:
        lo, hi = operator.index(lo), operator.index(hi)
    except TypeError as exc:
        raise InvalidRangeError(f"Range bounds must be integers, got {lo!r} and {hi!r}") from exc
    if lo > hi:
        raise InvalidRangeError("Minimum value cannot be greater than maximum")
    return lo, hi


def range_width(lo: int, hi: int) -> int:
    """``hi - lo + 1``, required to be positive and to fit in signed 64 bits."""
    lo, hi = check_bounds(lo, hi)
    if not (INT64_MIN <= lo <= INT64_MAX and INT64_MIN <= hi <= INT64_MAX):
        raise RangeOverflowError("Range bounds exceed 64-bit integer limits")
    width = hi - lo + 1
    if width <= 0 or width > INT64_MAX:
        raise RangeOverflowError("Range too large for random number generation")
    return width


def map_to_range(value: int, lo: int, hi: int) -> int:
    return lo + value % range_width(lo, hi)


def modulo_bias(width: int) -> float:
    """Worst-case probability excess of modulo reduction from 32 bits."""
    if width <= 0:
        raise ValueError("width must be positive")
    return (LCG_M % width) / LCG_M


# ── stateful wrapper ──


class GeneratorPhase(enum.Enum):
    UNINITIALIZED = "uninitialized"
    SEEDED = "seeded"


class BoundedGenerator:
    """LCG bound to one generation call. Seed once, draw once."""

    def __init__(self) -> None:
        self.state: int | None = None

    @property
    def phase(self) -> GeneratorPhase:
        return GeneratorPhase.UNINITIALIZED if self.state is None else GeneratorPhase.SEEDED

    def initialize(self, seed: bytes) -> int:
        self.state = seed_state(seed)
        return self.state

    def next(self) -> int:
        if self.state is None:
            raise GeneratorStateError("Generator used before initialize()")
        self.state = lcg_step(self.state)
        return self.state & 0xFFFFFFFF

    def draw_in_range(self, lo: int, hi: int) -> int:
        width = range_width(lo, hi)
        return operator.index(lo) + self.next() % width

    def __repr__(self) -> str:
        return f"<BoundedGenerator phase={self.phase.value}>"
