"""Entropy conditioning.

Timestamps from one search window share their high-order bits; SHA-256
over the whole buffer acts as the extractor that turns that structured raw
input into a uniform fixed-size seed.
"""

from __future__ import annotations

import hashlib

import numpy as np

DIGEST_BYTES = hashlib.sha256().digest_size


def _as_bytes(data) -> bytes:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    return np.asarray(data).astype(np.uint8).tobytes()


def sha256_condition(data, output_bytes: int = 16) -> bytes:
    """SHA-256 over *data*, truncated to the first *output_bytes* bytes.

    Pure: identical input always yields the identical seed.
    """
    if not 1 <= output_bytes <= DIGEST_BYTES:
        raise ValueError(f"output_bytes must be within 1..{DIGEST_BYTES}, got {output_bytes}")
    return hashlib.sha256(_as_bytes(data)).digest()[:output_bytes]


def condition(buffer, seed_bytes: int = 16) -> bytes:
    """Compress a raw entropy buffer into a *seed_bytes*-long seed."""
    return sha256_condition(buffer, seed_bytes)
