"""CLI for xentropy."""

from __future__ import annotations

import sys
import time

import click

from xentropy import __version__
from xentropy.errors import XEntropyError


@click.group()
@click.version_option(__version__)
def main() -> None:
    """🎲 xentropy: random integers seeded by public X post timestamps."""


def _common_options(fn):
    fn = click.option("--api-key", envvar="XAI_API_KEY", default=None,
                      help="xAI API key (defaults to $XAI_API_KEY).")(fn)
    fn = click.option("--log-file", default=None, envvar="XENTROPY_LOG_FILE",
                      help="Append the event log to this file.")(fn)
    fn = click.option("--delay", type=float, default=None,
                      help="Seconds between search requests.")(fn)
    return fn


def _make_config(api_key: str | None, log_file: str | None, delay: float | None, **extra):
    from xentropy.config import XEntropyConfig

    return XEntropyConfig.from_env(
        api_key=api_key, log_file=log_file, rate_limit_delay=delay, **extra
    ).validate()


def _fail(exc: Exception) -> None:
    click.echo(f"Error: {exc}", err=True)
    sys.exit(1)


# ────────────────────────────────────────────────────────────
# Generation
# ────────────────────────────────────────────────────────────


@main.command()
@click.argument("minimum", type=int)
@click.argument("maximum", type=int)
@_common_options
@click.option("--deadline", type=float, default=None,
              help="Give up collecting after this many seconds.")
@click.option("--max-attempts", type=int, default=None,
              help="Give up collecting after this many requests.")
@click.option("--verbose", "-v", is_flag=True, help="Show seed and collection details.")
def generate(minimum: int, maximum: int, api_key: str | None, log_file: str | None,
             delay: float | None, deadline: float | None, max_attempts: int | None,
             verbose: bool) -> None:
    """Print a random integer in [MINIMUM, MAXIMUM].

    Examples:

        xentropy generate 1 6

        xentropy generate --deadline 30 -- -100 100
    """
    from xentropy.log import setup_logging
    from xentropy.rng import XEntropy

    if verbose and not log_file:
        setup_logging()

    try:
        config = _make_config(api_key, log_file, delay, deadline=deadline, max_attempts=max_attempts)
        with XEntropy(config) as rng:
            result = rng.draw(minimum, maximum)
    except XEntropyError as exc:
        _fail(exc)
        return

    click.echo(result.value)
    if verbose:
        click.echo(f"  Seed:            {result.seed.hex()}")
        click.echo(f"  Initial state:   {result.initial_state}")
        click.echo(f"  Requests:        {result.attempts}")
        click.echo(f"  Timestamps:      {result.events}")
        click.echo(f"  Entropy bytes:   {result.entropy_bytes}")
        click.echo(f"  Fallback chunks: {result.fallback_chunks}")
        if result.degraded:
            click.echo("  ⚠ seed includes local clock fallback entropy")


# ────────────────────────────────────────────────────────────
# Inspection
# ────────────────────────────────────────────────────────────


@main.command()
@_common_options
def probe(api_key: str | None, log_file: str | None, delay: float | None) -> None:
    """Run one search over the current window and show timestamp quality."""
    import numpy as np

    from xentropy.client import XSearchClient
    from xentropy.sources.base import EntropySource
    from xentropy.sources.x_posts import TimeWindow, XPostSource, extract_chunks
    from xentropy.stats import buffer_report

    try:
        config = _make_config(api_key, log_file, delay)
        window = TimeWindow.ending_at(time.time(), config.window_seconds)
        with XSearchClient(config) as client:
            events = client.search(window)
    except XEntropyError as exc:
        _fail(exc)
        return

    data = extract_chunks(events)
    click.echo(f"Window:     {window.start} → {window.end} ({window.seconds}s)")
    click.echo(f"Results:    {len(events)}")
    click.echo(f"Timestamps: {len(data) // 4}")
    if not data:
        click.echo("  (no usable timestamps in this window)")
        return
    r = buffer_report(data, XPostSource.name)
    click.echo(f"  Bytes:           {r['bytes']}")
    click.echo(f"  Unique words:    {r['unique_words']}/{r['words']}")
    click.echo(f"  Shannon entropy: {r['shannon_entropy']:.4f} / 8.0 bits")
    click.echo(f"  Min-entropy:     {r['min_entropy']:.4f} bits")
    q = EntropySource._quick_quality(np.frombuffer(data, dtype=np.uint8), XPostSource.name)
    click.echo(f"  Grade:           {q['grade']} ({q.get('quality_score', 0.0):.1f}/100)")


@main.command()
@click.argument("width", type=click.IntRange(min=1))
@click.option("--samples", default=1 << 16, type=click.IntRange(min=1),
              help="LCG states to sweep for the empirical check.")
def bias(width: int, samples: int) -> None:
    """Show modulo bias of mapping 32-bit output into WIDTH values."""
    from xentropy.stats import MAX_HISTOGRAM_WIDTH, lcg_bias_report, modulo_bias_bound, residue_counts

    bound = modulo_bias_bound(width)
    heavy, heavy_count, light_count = residue_counts(width)
    click.echo(f"Width:            {width:,}")
    click.echo(f"Theoretical bias: {bound:.3e}")
    if heavy:
        click.echo(f"  {heavy:,} residue(s) occur {heavy_count:,}×, the rest {light_count:,}×")
    else:
        click.echo("  width divides 2**32: no modulo bias")

    if width > MAX_HISTOGRAM_WIDTH:
        click.echo(f"  (empirical sweep skipped above {MAX_HISTOGRAM_WIDTH:,})")
        return
    r = lcg_bias_report(width, samples)
    click.echo(f"\nEmpirical sweep ({r['samples']:,} states)")
    click.echo(f"  Max deviation:  {r['max_deviation']:.3e}")
    click.echo(f"  Chi-squared:    {r['chi_squared']['chi2']:.2f} (dof {r['chi_squared']['dof']})")
