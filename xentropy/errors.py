"""Exception hierarchy for xentropy.

Only configuration, range, and timeout errors reach callers of
:meth:`xentropy.rng.XEntropy.generate`. Fetch failures are absorbed by the
entropy source and only show up in the log.
"""

from __future__ import annotations


class XEntropyError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(XEntropyError):
    """Missing or placeholder credential, or an unusable setting."""


class InvalidRangeError(XEntropyError, ValueError):
    """``min > max`` (or a non-integer bound)."""


class RangeOverflowError(XEntropyError, OverflowError):
    """Range width is not positive or does not fit the working width."""


class EntropyTimeoutError(XEntropyError, TimeoutError):
    """Collection exceeded the configured attempt or deadline bound."""

    def __init__(self, message: str, attempts: int = 0, collected: int = 0) -> None:
        super().__init__(message)
        self.attempts = attempts
        self.collected = collected


class ExternalFetchError(XEntropyError):
    """A single search request failed (non-200, transport, or bad body)."""

    def __init__(self, message: str, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body[:200]

    def __str__(self) -> str:
        base = super().__str__()
        if self.status_code is not None:
            base = f"{base} (code {self.status_code})"
        if self.body:
            base = f"{base}: {self.body}"
        return base


class GeneratorStateError(XEntropyError, RuntimeError):
    """A draw was requested from a generator that was never seeded."""
