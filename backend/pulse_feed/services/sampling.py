"""Random sampling seam shared by the token factory and the update simulator.

All draws go through a ``Sampler`` so tests can swap in a seeded or scripted
source without touching any category range logic.  Ranges are half-open
``[lo, hi)``.
"""
from __future__ import annotations
import math
import random
import time
from typing import Optional, Protocol, Sequence, TypeVar

T = TypeVar("T")


class Sampler(Protocol):
    def uniform(self, lo: float, hi: float) -> float: ...

    def uniform_int(self, lo: int, hi: int) -> int: ...

    def chance(self, p: float) -> bool: ...

    def choice(self, seq: Sequence[T]) -> T: ...


class RandomSampler:
    """Sampler backed by a ``random.Random`` instance."""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    @classmethod
    def seeded(cls, seed: int) -> "RandomSampler":
        return cls(random.Random(seed))

    def uniform(self, lo: float, hi: float) -> float:
        value = lo + self._rng.random() * (hi - lo)
        # rounding can land exactly on hi for wide ranges
        return min(value, math.nextafter(hi, lo))

    def uniform_int(self, lo: int, hi: int) -> int:
        return self._rng.randrange(lo, hi)

    def chance(self, p: float) -> bool:
        return self._rng.random() < p

    def choice(self, seq: Sequence[T]) -> T:
        return self._rng.choice(seq)


_default_sampler: Sampler = RandomSampler()


def get_sampler() -> Sampler:
    return _default_sampler


def set_sampler(sampler: Sampler) -> None:
    """Replace the process-wide sampler (used when a random seed is configured)."""
    global _default_sampler
    _default_sampler = sampler


def now_ms() -> int:
    return int(time.time() * 1000)
