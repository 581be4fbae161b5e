"""Statistics for raw entropy buffers and range-mapped generator output."""

from __future__ import annotations

from collections import Counter

import numpy as np

from xentropy.generator import LCG_A, LCG_C, LCG_M, modulo_bias

MAX_HISTOGRAM_WIDTH = 1 << 20


def shannon_entropy(data: np.ndarray) -> float:
    """Shannon entropy in bits for uint8 data."""
    data = np.asarray(data).flatten()
    if len(data) == 0:
        return 0.0
    counts = np.array(list(Counter(data.tolist()).values()))
    probs = counts / len(data)
    return float(-np.sum(probs * np.log2(probs + 1e-15)))


def min_entropy(data: np.ndarray) -> float:
    """Min-entropy (NIST SP 800-90B), the most conservative estimate."""
    data = np.asarray(data).flatten()
    if len(data) == 0:
        return 0.0
    p_max = max(Counter(data.tolist()).values()) / len(data)
    return float(-np.log2(p_max + 1e-15))


def chi_squared_uniformity(counts: np.ndarray) -> dict:
    """Chi-squared statistic of a histogram against a flat expectation."""
    counts = np.asarray(counts, dtype=float).flatten()
    total = counts.sum()
    if len(counts) < 2 or total == 0:
        return {"chi2": 0.0, "dof": max(len(counts) - 1, 0)}
    expected = total / len(counts)
    chi2 = float(np.sum((counts - expected) ** 2 / expected))
    return {"chi2": round(chi2, 4), "dof": len(counts) - 1}


def modulo_bias_bound(width: int) -> float:
    """``(2**32 mod width) / 2**32``; zero exactly when width divides 2**32."""
    return modulo_bias(width)


def residue_counts(width: int) -> tuple[int, int, int]:
    """Exact residue histogram of ``value % width`` over all 2**32 values.

    The LCG step is a bijection on ``[0, 2**32)``, so for a uniform seed this
    is also the exact output distribution. Returns ``(heavy, heavy_count,
    light_count)``: the first *heavy* residues occur *heavy_count* times,
    the rest *light_count* times.
    """
    if width <= 0:
        raise ValueError("width must be positive")
    light = LCG_M // width
    heavy = LCG_M % width
    return heavy, light + 1 if heavy else light, light


def lcg_sweep(samples: int) -> np.ndarray:
    """First LCG output for *samples* states spread evenly over ``[0, 2**32)``.

    The stride is forced odd so the low bits of the states still cycle.
    """
    if samples <= 0:
        raise ValueError("samples must be positive")
    stride = (LCG_M // samples) | 1
    states = (np.arange(samples, dtype=np.uint64) * np.uint64(stride)) % np.uint64(LCG_M)
    return (np.uint64(LCG_A) * states + np.uint64(LCG_C)) & np.uint64(0xFFFFFFFF)


def lcg_bias_report(width: int, samples: int = 1 << 16) -> dict:
    """Compare observed single-draw bias against the theoretical bound."""
    if not 0 < width <= MAX_HISTOGRAM_WIDTH:
        raise ValueError(f"width must be within 1..{MAX_HISTOGRAM_WIDTH}")
    outputs = lcg_sweep(samples)
    mapped = (outputs % np.uint64(width)).astype(np.int64)
    counts = np.bincount(mapped, minlength=width)
    probs = counts / samples
    deviation = float(np.max(np.abs(probs - 1.0 / width)))
    heavy, heavy_count, light_count = residue_counts(width)
    return {
        "width": width,
        "samples": samples,
        "theoretical_bias": modulo_bias_bound(width),
        "heavy_residues": heavy,
        "heavy_count": heavy_count,
        "light_count": light_count,
        "max_deviation": round(deviation, 8),
        "chi_squared": chi_squared_uniformity(counts),
        "power_of_two": (width & (width - 1)) == 0,
    }


def buffer_report(data: bytes, label: str = "") -> dict:
    """Summary of a raw timestamp buffer (bytes and 32-bit words)."""
    arr = np.frombuffer(data, dtype=np.uint8)
    words = np.frombuffer(data[: len(data) - len(data) % 4], dtype=">u4")
    return {
        "label": label,
        "bytes": len(arr),
        "words": int(len(words)),
        "unique_words": int(len(np.unique(words))),
        "shannon_entropy": round(shannon_entropy(arr), 4),
        "min_entropy": round(min_entropy(arr), 4),
    }
