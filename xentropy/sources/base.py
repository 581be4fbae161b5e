"""Abstract base class for entropy sources."""

from abc import ABC, abstractmethod

import numpy as np


class EntropySource(ABC):
    """Base class for a raw entropy source.

    Sources return *raw* bytes: structurally correlated, not uniform.
    Conditioning is the caller's job (see :mod:`xentropy.conditioning`).
    """

    name: str = "unnamed"
    description: str = ""

    @abstractmethod
    def is_available(self) -> bool:
        """Return True if the source can operate right now."""
        ...

    @abstractmethod
    def collect(self, n_bytes: int) -> bytes:
        """Collect at least *n_bytes* of raw entropy.

        Parameters
        ----------
        n_bytes:
            Minimum buffer length. Sources producing fixed-size chunks
            may return more.
        """
        ...

    # ── helpers available to subclasses ──

    @staticmethod
    def _quick_shannon(data: np.ndarray) -> float:
        """Fast Shannon entropy in bits/byte for uint8 data."""
        if len(data) == 0:
            return 0.0
        _, counts = np.unique(data, return_counts=True)
        probs = counts / len(data)
        return float(-np.sum(probs * np.log2(probs + 1e-15)))

    @staticmethod
    def _quick_quality(data: np.ndarray, label: str = "") -> dict:
        """Lightweight quality metrics on uint8 data.

        Timestamp buffers are short, so the grade leans on byte diversity
        rather than compression.
        """
        if len(data) < 4:
            return {"label": label, "grade": "F", "error": "insufficient data", "samples": len(data)}

        shannon = EntropySource._quick_shannon(data)
        n_unique = int(len(np.unique(data)))
        # Max achievable Shannon entropy is log2(len) for short samples.
        ceiling = min(8.0, float(np.log2(len(data))))
        eff = shannon / ceiling if ceiling > 0 else 0.0
        score = eff * 70 + min(n_unique / len(data), 1.0) * 30
        grade = (
            "A" if score >= 80 else
            "B" if score >= 60 else
            "C" if score >= 40 else
            "D" if score >= 20 else "F"
        )
        return {
            "label": label,
            "samples": len(data),
            "unique_values": n_unique,
            "shannon_entropy": round(shannon, 4),
            "quality_score": round(score, 1),
            "grade": grade,
        }

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
