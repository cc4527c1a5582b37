from __future__ import annotations
import math
from typing import Callable, NamedTuple, Optional, Sequence

from pulse_feed.schemas.token import Token, TokenCategory

CATEGORY_LABELS: dict[TokenCategory, str] = {
    TokenCategory.new_pairs: "New Pairs",
    TokenCategory.final_stretch: "Final Stretch",
    TokenCategory.migrated: "Migrated",
}

DEFAULT_SORT = "age"

SORT_KEYS: dict[str, Callable[[Token], float]] = {
    "age": lambda t: t.age_in_seconds,
    "market_cap": lambda t: t.metrics.market_cap,
    "volume": lambda t: t.metrics.volume,
    "price": lambda t: t.metrics.price,
    "price_change": lambda t: t.metrics.price_change,
    "holders": lambda t: t.metrics.holders,
    "transactions": lambda t: t.metrics.transactions,
    "liquidity": lambda t: t.metrics.liquidity,
}


class Preset(NamedTuple):
    label: str
    min_market_cap: float
    max_market_cap: float
    min_holders: int


PRESETS: dict[str, Preset] = {
    "P1": Preset("P1", 0, 100_000, 0),
    "P2": Preset("P2", 100_000, 1_000_000, 50),
    "P3": Preset("P3", 1_000_000, math.inf, 200),
}

# Risk score thresholds (0-100)
RISK_LOW = 30
RISK_MEDIUM = 60
RISK_HIGH = 80


def risk_level(score: float) -> str:
    if score < RISK_LOW:
        return "low"
    if score < RISK_MEDIUM:
        return "medium"
    if score < RISK_HIGH:
        return "high"
    return "critical"


def matches_preset(token: Token, preset: Preset) -> bool:
    mc = token.metrics.market_cap
    return (
        preset.min_market_cap <= mc <= preset.max_market_cap
        and token.metrics.holders >= preset.min_holders
    )


def apply_preset(tokens: Sequence[Token], preset: Optional[str]) -> list[Token]:
    """Filter by a named preset; ``None`` or an unknown name keeps everything."""
    p = PRESETS.get(preset) if preset else None
    if p is None:
        return list(tokens)
    return [t for t in tokens if matches_preset(t, p)]


def sort_tokens(tokens: Sequence[Token], sort_by: str = DEFAULT_SORT, order: str = "asc") -> list[Token]:
    key = SORT_KEYS.get(sort_by, SORT_KEYS[DEFAULT_SORT])
    return sorted(tokens, key=key, reverse=(order == "desc"))


def query_tokens(
    tokens: Sequence[Token],
    sort_by: Optional[str] = None,
    order: str = "asc",
    preset: Optional[str] = None,
    offset: int = 0,
    limit: Optional[int] = None,
) -> tuple[list[Token], int]:
    """Filter, sort and page a category's tokens.

    Returns the page and the total number of rows after filtering.  Without
    ``sort_by`` the feed order is kept.
    """
    rows = apply_preset(tokens, preset)
    if sort_by:
        rows = sort_tokens(rows, sort_by, order)
    total = len(rows)
    end = None if limit is None else offset + limit
    return rows[offset:end], total
