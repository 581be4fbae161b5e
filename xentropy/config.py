"""Static configuration for an :class:`~xentropy.rng.XEntropy` instance.

Built once by the caller and injected; nothing here changes after
construction.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field

from xentropy.errors import ConfigurationError

PLACEHOLDER_API_KEY = "your-xai-api-key"
DEFAULT_BASE_URL = "https://api.x.ai/v1/search"


@dataclass(frozen=True)
class XEntropyConfig:
    """Search scope, rate limit, entropy target, and credential."""

    api_key: str = field(repr=False)
    base_url: str = DEFAULT_BASE_URL
    query: str = "*"
    domain_list: tuple[str, ...] = ("x.com",)
    max_results: int = 50
    window_seconds: int = 60
    rate_limit_delay: float = 1.2  # seconds between requests (50 RPM)
    entropy_bits: int = 128
    seed_bytes: int = 16
    request_timeout: float = 10.0
    max_attempts: int | None = None
    deadline: float | None = 300.0
    log_file: str | None = None

    @classmethod
    def from_env(cls, **overrides) -> XEntropyConfig:
        """Read the key and common knobs from ``XAI_API_KEY`` / ``XENTROPY_*``."""
        values: dict = {"api_key": os.environ.get("XAI_API_KEY", "")}
        if "XENTROPY_LOG_FILE" in os.environ:
            values["log_file"] = os.environ["XENTROPY_LOG_FILE"]
        if "XENTROPY_RATE_LIMIT_DELAY" in os.environ:
            values["rate_limit_delay"] = _env_float("XENTROPY_RATE_LIMIT_DELAY")
        if "XENTROPY_DEADLINE" in os.environ:
            raw = os.environ["XENTROPY_DEADLINE"].strip().lower()
            values["deadline"] = None if raw in ("", "none", "0") else _env_float("XENTROPY_DEADLINE")
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @property
    def target_bytes(self) -> int:
        return math.ceil(self.entropy_bits / 8)

    def validate(self) -> XEntropyConfig:
        """Raise :class:`ConfigurationError` for unusable settings; return self."""
        if not self.api_key or self.api_key.strip() == PLACEHOLDER_API_KEY:
            raise ConfigurationError("xAI API key is not set or invalid")
        if self.entropy_bits <= 0 or self.entropy_bits % 8:
            raise ConfigurationError(f"entropy_bits must be a positive multiple of 8, got {self.entropy_bits}")
        if not 8 <= self.seed_bytes <= 32:
            raise ConfigurationError(f"seed_bytes must be within 8..32, got {self.seed_bytes}")
        if self.rate_limit_delay < 0:
            raise ConfigurationError("rate_limit_delay cannot be negative")
        if self.window_seconds <= 0:
            raise ConfigurationError("window_seconds must be positive")
        if self.max_results <= 0:
            raise ConfigurationError("max_results must be positive")
        if self.max_attempts is not None and self.max_attempts <= 0:
            raise ConfigurationError("max_attempts must be positive or None")
        if self.deadline is not None and self.deadline <= 0:
            raise ConfigurationError("deadline must be positive or None")
        return self

    def __repr__(self) -> str:
        key = self.api_key[:4] + "…" if self.api_key else "<unset>"
        return (
            f"XEntropyConfig(api_key={key!r}, base_url={self.base_url!r}, "
            f"entropy_bits={self.entropy_bits}, rate_limit_delay={self.rate_limit_delay}, "
            f"max_attempts={self.max_attempts}, deadline={self.deadline})"
        )


def _env_float(name: str) -> float:
    try:
        return float(os.environ[name])
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {os.environ[name]!r}") from exc
