"""Tests for feed filtering, sorting, paging and risk levels."""
import math

import pytest

from pulse_feed.schemas.token import TokenCategory
from pulse_feed.services.feed_query import (
    CATEGORY_LABELS,
    PRESETS,
    apply_preset,
    query_tokens,
    risk_level,
    sort_tokens,
)
from pulse_feed.services.token_factory import generate_token, generate_tokens


def _with(token, **metrics):
    return token.model_copy(update={"metrics": token.metrics.model_copy(update=metrics)})


@pytest.fixture
def tokens(sampler):
    return generate_tokens(TokenCategory.migrated, 12, sampler=sampler)


class TestRiskLevel:
    @pytest.mark.parametrize("score,level", [
        (0, "low"), (29, "low"), (30, "medium"), (59, "medium"),
        (60, "high"), (79, "high"), (80, "critical"), (100, "critical"),
    ])
    def test_thresholds(self, score, level):
        assert risk_level(score) == level


class TestPresets:
    def test_every_category_labelled(self):
        assert set(CATEGORY_LABELS) == set(TokenCategory)
        assert CATEGORY_LABELS[TokenCategory.final_stretch] == "Final Stretch"

    def test_p3_open_ended(self):
        assert PRESETS["P3"].max_market_cap == math.inf

    def test_filters_by_market_cap_and_holders(self, sampler):
        base = generate_token(TokenCategory.migrated, 0, sampler=sampler)
        small = _with(base, market_cap=50_000, holders=5)
        mid = _with(base, market_cap=500_000, holders=60)
        mid_thin = _with(base, market_cap=500_000, holders=10)
        big = _with(base, market_cap=3_000_000, holders=250)
        rows = [small, mid, mid_thin, big]

        assert apply_preset(rows, "P1") == [small]
        assert apply_preset(rows, "P2") == [mid]
        assert apply_preset(rows, "P3") == [big]

    def test_no_preset_keeps_all(self, tokens):
        assert apply_preset(tokens, None) == tokens
        assert apply_preset(tokens, "P9") == tokens


class TestSorting:
    def test_sort_by_market_cap_desc(self, tokens):
        rows = sort_tokens(tokens, "market_cap", "desc")
        caps = [t.metrics.market_cap for t in rows]
        assert caps == sorted(caps, reverse=True)

    def test_sort_by_age_asc(self, tokens):
        ages = [t.age_in_seconds for t in sort_tokens(tokens, "age")]
        assert ages == sorted(ages)

    def test_unknown_key_falls_back_to_age(self, tokens):
        assert sort_tokens(tokens, "nonsense") == sort_tokens(tokens, "age")


class TestQuery:
    def test_feed_order_kept_without_sort(self, tokens):
        rows, total = query_tokens(tokens)
        assert rows == tokens
        assert total == len(tokens)

    def test_paging(self, tokens):
        rows, total = query_tokens(tokens, offset=5, limit=4)
        assert rows == tokens[5:9]
        assert total == 12

    def test_total_counts_filtered_rows(self, sampler):
        base = generate_token(TokenCategory.new_pairs, 0, sampler=sampler)
        rows = [_with(base, market_cap=10_000, holders=20) for _ in range(3)]
        rows.append(_with(base, market_cap=900_000, holders=20))
        page, total = query_tokens(rows, preset="P1", limit=2)
        assert len(page) == 2
        assert total == 3
