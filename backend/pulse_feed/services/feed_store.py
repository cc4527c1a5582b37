"""In-memory live token feed.

Holds the current snapshot for every category and replaces it wholesale on
each tick.  Readers only ever see complete snapshots; concurrent tick
requests are serialized by a lock, so the last completed tick wins.
"""
from __future__ import annotations
import asyncio
import logging
from typing import Optional

from pulse_feed.schemas.token import Token, TokenCategory
from pulse_feed.services.sampling import Sampler, get_sampler, now_ms
from pulse_feed.services.token_factory import generate_all_categories, generate_tokens, resolve_category
from pulse_feed.services.update_simulator import advance_tick

logger = logging.getLogger(__name__)

Snapshot = dict[TokenCategory, tuple[Token, ...]]


class FeedStore:
    def __init__(self, sampler: Optional[Sampler] = None):
        self._sampler = sampler
        self._snapshot: Snapshot = {category: () for category in TokenCategory}
        self._tick = 0
        self._generation = 0  # bumped on every snapshot replacement
        self._updated_at = now_ms()
        self._lock = asyncio.Lock()

    @property
    def sampler(self) -> Sampler:
        return self._sampler or get_sampler()

    @property
    def tick_count(self) -> int:
        return self._tick

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def updated_at(self) -> int:
        return self._updated_at

    # ── reads ──────────────────────────────────────────────────────

    def snapshot(self) -> Snapshot:
        return dict(self._snapshot)

    def tokens(self, category) -> tuple[Token, ...]:
        return self._snapshot[resolve_category(category)]

    def find(self, token_id: str) -> Optional[Token]:
        for rows in self._snapshot.values():
            for token in rows:
                if token.id == token_id:
                    return token
        return None

    # ── writes ─────────────────────────────────────────────────────

    def seed(self, count_per_category: int) -> None:
        """Discard the current feed and generate a fresh one."""
        feed = generate_all_categories(count_per_category, sampler=self.sampler)
        self._snapshot = {category: tuple(rows) for category, rows in feed.items()}
        self._tick = 0
        self._generation += 1
        self._updated_at = now_ms()
        logger.info(f"Feed seeded with {count_per_category} tokens per category")

    def ensure_rows(self, category, count: int) -> int:
        """Top a category up to ``count`` rows. Returns the number added."""
        category = resolve_category(category)
        current = self._snapshot[category]
        missing = count - len(current)
        if missing <= 0:
            return 0
        fresh = generate_tokens(category, missing, start=len(current), sampler=self.sampler)
        self._snapshot = {**self._snapshot, category: current + tuple(fresh)}
        self._generation += 1
        logger.info(f"Added {missing} {category.value} tokens (now {count})")
        return missing

    async def tick(self) -> int:
        """Advance every category by one tick and swap in the result."""
        async with self._lock:
            stamp = now_ms()
            nxt = {
                category: tuple(advance_tick(rows, sampler=self.sampler, now_ms=stamp))
                for category, rows in self._snapshot.items()
            }
            self._snapshot = nxt
            self._tick += 1
            self._generation += 1
            self._updated_at = stamp
            return self._tick


feed_store = FeedStore()


def get_feed_store() -> FeedStore:
    return feed_store
