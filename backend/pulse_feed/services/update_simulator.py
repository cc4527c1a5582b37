"""Tick-by-tick evolution of token snapshots.

Every token ages by exactly one second per tick.  Roughly 30% of tokens also
get a price swing each tick; price and market cap move by the same factor,
volume by its own upward-skewed factor.  Inputs are never mutated.
"""
from __future__ import annotations
from typing import Optional, Sequence

from pulse_feed.schemas.token import Token
from pulse_feed.services.sampling import Sampler, get_sampler, now_ms as wall_clock_ms

UPDATE_PROBABILITY = 0.3
PRICE_SWING = (-0.1, 0.1)
VOLUME_SWING = (-0.05, 0.15)


def advance_one(
    token: Token,
    sampler: Optional[Sampler] = None,
    now_ms: Optional[int] = None,
) -> Token:
    """Full metrics update for a single token."""
    s = sampler or get_sampler()
    delta = s.uniform(*PRICE_SWING)
    volume_factor = 1 + s.uniform(*VOLUME_SWING)
    m = token.metrics

    metrics = m.model_copy(update={
        "price": m.price * (1 + delta),
        "market_cap": m.market_cap * (1 + delta),
        "volume": m.volume * volume_factor,
        "price_change": m.price_change + delta,
    })
    return token.model_copy(update={
        "metrics": metrics,
        "age_in_seconds": token.age_in_seconds + 1,
        "updated_at": wall_clock_ms() if now_ms is None else now_ms,
    })


def advance_age(token: Token) -> Token:
    # updated_at only tracks metric changes
    return token.model_copy(update={"age_in_seconds": token.age_in_seconds + 1})


def advance_tick(
    tokens: Sequence[Token],
    sampler: Optional[Sampler] = None,
    now_ms: Optional[int] = None,
) -> list[Token]:
    """Advance every token by one tick, preserving length and order."""
    s = sampler or get_sampler()
    stamp = wall_clock_ms() if now_ms is None else now_ms
    return [
        advance_one(token, s, stamp) if s.chance(UPDATE_PROBABILITY) else advance_age(token)
        for token in tokens
    ]
