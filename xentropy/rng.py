"""Public entry point: ``XEntropy(config).generate(min, max)``.

Pipeline per call::

    XPostSource.collect -> condition (SHA-256, 16 bytes)
        -> BoundedGenerator.initialize -> draw_in_range

Nothing from one call is reused by the next: each call gets a fresh buffer,
seed, and generator. The configuration, search client, and rate limiter are
shared, so concurrent calls still respect the feed's request ceiling.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable

from xentropy.client import SearchClient, XSearchClient
from xentropy.conditioning import condition
from xentropy.config import XEntropyConfig
from xentropy.generator import BoundedGenerator, check_bounds
from xentropy.log import setup_logging
from xentropy.ratelimit import RateLimiter, RetryPolicy
from xentropy.sources.clock import ClockFallbackSource
from xentropy.sources.x_posts import XPostSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    """One generated value plus how its entropy was obtained.

    ``degraded`` is True when at least one local-clock fallback chunk went
    into the seed, i.e. the search feed failed at least once.
    """

    value: int
    minimum: int
    maximum: int
    seed: bytes
    initial_state: int
    attempts: int
    events: int
    fallback_chunks: int
    entropy_bytes: int

    @property
    def degraded(self) -> bool:
        return self.fallback_chunks > 0


class XEntropy:
    """Random integers seeded from public X post timestamps.

    Usage::

        config = XEntropyConfig.from_env()
        with XEntropy(config) as rng:
            rng.generate(1, 6)

    Log records go to the ``xentropy`` logger. A handler is attached only
    when ``config.log_file`` is set; otherwise the caller decides where they
    go, for example with :func:`xentropy.log.setup_logging`.

    Not a cryptographically secure generator.
    """

    def __init__(
        self,
        config: XEntropyConfig,
        client: SearchClient | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.time,
        monotonic: Callable[[], float] = time.monotonic,
        microtime: Callable[[], int] | None = None,
    ) -> None:
        self.config = config.validate()
        if config.log_file:
            setup_logging(config.log_file)
        self._owns_client = client is None
        self._client = client if client is not None else XSearchClient(config)
        self._limiter = RateLimiter(config.rate_limit_delay, sleep=sleep, clock=monotonic)
        self._retry = RetryPolicy(config.max_attempts, config.deadline, clock=monotonic)
        self._fallback = ClockFallbackSource(microtime)
        self._clock = clock
        logger.info("XEntropy initialized")

    def source(self) -> XPostSource:
        return XPostSource(
            self._client,
            self._limiter,
            window_seconds=self.config.window_seconds,
            retry=self._retry,
            fallback=self._fallback,
            clock=self._clock,
        )

    def draw(self, minimum: int, maximum: int) -> GenerationResult:
        """Generate a value in ``[minimum, maximum]`` and report its provenance."""
        lo, hi = check_bounds(minimum, maximum)

        data, report = self.source().collect_report(self.config.target_bytes)
        seed = condition(data, self.config.seed_bytes)
        logger.info("Generated %d-bit entropy seed from %d bytes", len(seed) * 8, len(data))
        if report.degraded:
            logger.warning(
                "Seed includes %d local clock fallback chunk(s)", report.fallback_chunks
            )

        gen = BoundedGenerator()
        state = gen.initialize(seed)
        logger.info("LCG initialized with state: %d", state)

        value = gen.draw_in_range(lo, hi)
        logger.info("Generated random number: %d (range: %d-%d)", value, lo, hi)
        return GenerationResult(
            value=value,
            minimum=lo,
            maximum=hi,
            seed=seed,
            initial_state=state,
            attempts=report.attempts,
            events=report.events,
            fallback_chunks=report.fallback_chunks,
            entropy_bytes=len(data),
        )

    def generate(self, minimum: int, maximum: int) -> int:
        """Random integer in ``[minimum, maximum]``, both inclusive."""
        return self.draw(minimum, maximum).value

    def close(self) -> None:
        if self._owns_client and hasattr(self._client, "close"):
            self._client.close()

    def __enter__(self) -> XEntropy:
        return self

    def __exit__(self, *exc) -> None:
        self.close()
