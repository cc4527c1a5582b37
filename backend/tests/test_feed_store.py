"""Tests for the in-memory live feed store."""
import asyncio

import pytest

from pulse_feed.schemas.token import TokenCategory
from pulse_feed.services.feed_store import FeedStore
from pulse_feed.services.token_factory import UnknownCategoryError


@pytest.fixture
def store(sampler):
    s = FeedStore(sampler=sampler)
    s.seed(5)
    return s


class TestSeed:
    def test_every_category_filled(self, store):
        snap = store.snapshot()
        assert set(snap) == set(TokenCategory)
        assert all(len(rows) == 5 for rows in snap.values())
        assert store.tick_count == 0

    def test_reseed_replaces_tokens(self, store):
        old_ids = {t.id for rows in store.snapshot().values() for t in rows}
        store.seed(2)
        new_ids = {t.id for rows in store.snapshot().values() for t in rows}
        assert len(new_ids) == 6
        assert not old_ids & new_ids

    def test_empty_before_seed(self, sampler):
        assert FeedStore(sampler=sampler).tokens(TokenCategory.migrated) == ()


class TestEnsureRows:
    def test_tops_up_with_continuing_ordinals(self, store):
        added = store.ensure_rows(TokenCategory.new_pairs, 8)
        rows = store.tokens(TokenCategory.new_pairs)
        assert added == 3
        assert len(rows) == 8
        assert [t.id.split("-")[2] for t in rows] == [str(i) for i in range(8)]

    def test_never_shrinks(self, store):
        assert store.ensure_rows("migrated", 2) == 0
        assert len(store.tokens("migrated")) == 5

    def test_unknown_category(self, store):
        with pytest.raises(UnknownCategoryError):
            store.ensure_rows("bonded", 3)


class TestTick:
    def test_tick_advances_every_token(self, store):
        before = store.snapshot()
        tick = asyncio.run(store.tick())
        after = store.snapshot()
        assert tick == 1
        assert store.tick_count == 1
        for category in TokenCategory:
            assert [t.id for t in after[category]] == [t.id for t in before[category]]
            for old, new in zip(before[category], after[category]):
                assert new.age_in_seconds == old.age_in_seconds + 1

    def test_old_snapshot_unchanged(self, store):
        before = store.snapshot()
        ages = [t.age_in_seconds for t in before[TokenCategory.migrated]]
        asyncio.run(store.tick())
        assert [t.age_in_seconds for t in before[TokenCategory.migrated]] == ages

    def test_concurrent_ticks_serialized(self, store):
        start = [t.age_in_seconds for t in store.tokens(TokenCategory.final_stretch)]

        async def burst():
            return await asyncio.gather(*(store.tick() for _ in range(10)))

        ticks = asyncio.run(burst())
        assert sorted(ticks) == list(range(1, 11))
        ages = [t.age_in_seconds for t in store.tokens(TokenCategory.final_stretch)]
        assert ages == [a + 10 for a in start]


def test_find(store):
    token = store.tokens(TokenCategory.final_stretch)[2]
    assert store.find(token.id) == token
    assert store.find("missing") is None


class TestGeneration:
    def test_every_replacement_bumps_generation(self, store):
        gen = store.generation
        asyncio.run(store.tick())
        assert store.generation == gen + 1
        store.ensure_rows(TokenCategory.migrated, 7)
        assert store.generation == gen + 2
        store.seed(5)
        assert store.generation == gen + 3
        assert store.tick_count == 0

    def test_noop_top_up_keeps_generation(self, store):
        gen = store.generation
        store.ensure_rows(TokenCategory.migrated, 3)
        assert store.generation == gen
