"""Synthetic token factory.

Builds category-consistent token records: the visual identity is derived
from the ordinal, everything else is sampled from the category's regime.
Two calls with the same ``(category, index)`` share name, symbol and avatar
but differ in id, address and every sampled metric.
"""
from __future__ import annotations
import itertools
import logging
from typing import NamedTuple, Optional, Union

from pulse_feed.schemas.token import (
    RiskMetrics,
    SocialLinks,
    SocialMetrics,
    Token,
    TokenCategory,
    TokenMetrics,
)
from pulse_feed.services.sampling import Sampler, get_sampler, now_ms as wall_clock_ms
from pulse_feed.services.token_catalog import identity_for, random_address

logger = logging.getLogger(__name__)


class UnknownCategoryError(ValueError):
    """Raised when a value outside ``TokenCategory`` reaches the factory."""

    def __init__(self, value):
        super().__init__(f"Unknown token category: {value!r}")
        self.value = value


class CategoryRegime(NamedTuple):
    min_age: int
    max_age: int
    min_market_cap: float
    max_market_cap: float


# Creation-time ranges only; the simulator lets values drift outside them.
# Market cap bands overlap on purpose.
CATEGORY_REGIMES: dict[TokenCategory, CategoryRegime] = {
    TokenCategory.new_pairs: CategoryRegime(0, 300, 1_000, 100_000),            # < 5 min
    TokenCategory.final_stretch: CategoryRegime(300, 3_600, 50_000, 500_000),   # 5-60 min
    TokenCategory.migrated: CategoryRegime(3_600, 86_400, 100_000, 2_000_000),  # 1-24 h
}

_missing = set(TokenCategory) - set(CATEGORY_REGIMES)
if _missing:
    raise RuntimeError(f"No category regime for: {sorted(c.value for c in _missing)}")

TWITTER_PLACEHOLDER = "https://twitter.com/example"
TELEGRAM_PLACEHOLDER = "https://t.me/example"
WEBSITE_PLACEHOLDER = "https://example.com"

# Disambiguates tokens created within the same millisecond
_id_sequence = itertools.count()


def resolve_category(category: Union[TokenCategory, str]) -> TokenCategory:
    if isinstance(category, TokenCategory):
        return category
    try:
        return TokenCategory(category)
    except ValueError:
        raise UnknownCategoryError(category) from None


def _sample_metrics(regime: CategoryRegime, s: Sampler) -> TokenMetrics:
    market_cap = s.uniform(regime.min_market_cap, regime.max_market_cap)
    return TokenMetrics(
        market_cap=market_cap,
        volume=market_cap * s.uniform(0.1, 0.5),
        price=market_cap / s.uniform(1_000_000, 100_000_000),
        price_change=s.uniform(-0.5, 1.5),
        holders=s.uniform_int(10, 500),
        transactions=s.uniform_int(50, 5_000),
        liquidity=market_cap * s.uniform(0.05, 0.2),
        fee_percentage=s.uniform(0.01, 0.05),
    )


def _sample_social(s: Sampler) -> SocialMetrics:
    return SocialMetrics(
        likes=s.uniform_int(0, 50),
        dislikes=s.uniform_int(0, 10),
        comments=s.uniform_int(0, 30),
        is_bookmarked=s.chance(0.2),
    )


def _sample_risk(s: Sampler) -> RiskMetrics:
    # Independent draws, not a risk model
    return RiskMetrics(
        top_holder_percentage=s.uniform(0.03, 0.75),
        dev_holding_percentage=s.uniform(0, 0.25),
        sniper_percentage=s.uniform(0, 0.5),
        bundle_percentage=s.uniform(0, 0.5),
        risk_score=s.uniform_int(0, 100),
    )


def _sample_links(s: Sampler) -> SocialLinks:
    return SocialLinks(
        twitter=TWITTER_PLACEHOLDER if s.chance(0.5) else None,
        telegram=TELEGRAM_PLACEHOLDER if s.chance(0.5) else None,
        website=WEBSITE_PLACEHOLDER if s.chance(0.3) else None,
    )


def generate_token(
    category: Union[TokenCategory, str],
    index: int,
    sampler: Optional[Sampler] = None,
    now_ms: Optional[int] = None,
) -> Token:
    """Create one token for ``category`` at ordinal ``index``."""
    category = resolve_category(category)
    s = sampler or get_sampler()
    now = wall_clock_ms() if now_ms is None else now_ms
    regime = CATEGORY_REGIMES[category]
    identity = identity_for(index)

    age = s.uniform_int(regime.min_age, regime.max_age)
    metrics = _sample_metrics(regime, s)

    return Token(
        id=f"{category.value}-{index}-{now}-{next(_id_sequence)}",
        address=random_address(s),
        name=identity.name,
        symbol=identity.symbol,
        image_url=identity.image_url,
        age_in_seconds=age,
        category=category,
        metrics=metrics,
        social_metrics=_sample_social(s),
        risk_metrics=_sample_risk(s),
        social_links=_sample_links(s),
        created_at=now - age * 1000,
        updated_at=now,
    )


def generate_tokens(
    category: Union[TokenCategory, str],
    count: int = 10,
    start: int = 0,
    sampler: Optional[Sampler] = None,
    now_ms: Optional[int] = None,
) -> list[Token]:
    """Create ``count`` tokens with ordinals ``start .. start + count - 1``."""
    category = resolve_category(category)
    return [
        generate_token(category, index, sampler=sampler, now_ms=now_ms)
        for index in range(start, start + count)
    ]


def generate_all_categories(
    count_per_category: int = 10,
    sampler: Optional[Sampler] = None,
    now_ms: Optional[int] = None,
) -> dict[TokenCategory, list[Token]]:
    feed = {
        category: generate_tokens(category, count_per_category, sampler=sampler, now_ms=now_ms)
        for category in TokenCategory
    }
    logger.debug(f"Generated {count_per_category} tokens for each of {len(feed)} categories")
    return feed
