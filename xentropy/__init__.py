"""
xentropy: random integers seeded by the timing of public X posts.

Collects nanosecond timestamp LSBs from recent posts via the xAI Live
Search API, conditions them with SHA-256, and draws once from an LCG.
A novelty entropy source; not a cryptographically secure RNG.
"""

__version__ = "0.1.0"

from xentropy.config import XEntropyConfig
from xentropy.errors import (
    ConfigurationError,
    EntropyTimeoutError,
    InvalidRangeError,
    RangeOverflowError,
    XEntropyError,
)
from xentropy.rng import GenerationResult, XEntropy

__all__ = [
    "ConfigurationError",
    "EntropyTimeoutError",
    "GenerationResult",
    "InvalidRangeError",
    "RangeOverflowError",
    "XEntropy",
    "XEntropyConfig",
    "XEntropyError",
    "__version__",
]
