"""Entropy source implementations."""

from xentropy.sources.base import EntropySource
from xentropy.sources.clock import ClockFallbackSource
from xentropy.sources.x_posts import CollectionReport, TimeWindow, XPostSource

__all__ = [
    "ClockFallbackSource",
    "CollectionReport",
    "EntropySource",
    "TimeWindow",
    "XPostSource",
]
