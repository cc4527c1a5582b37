"""Shared fixtures: deterministic samplers and a fixed clock."""
import os

import pytest

# Keep the lifespan worker out of API tests
os.environ.setdefault("TICK_ENABLED", "false")

from pulse_feed.services.sampling import RandomSampler

FIXED_NOW = 1_700_000_000_000


class ScriptedSampler:
    """Sampler returning canned values.

    ``uniform`` looks up ``(lo, hi)`` in ``ranges`` and falls back to ``lo``;
    ``chance`` pops from ``flips`` and falls back to ``default_flip``.
    """

    def __init__(self, ranges=None, flips=None, default_flip=False):
        self.ranges = dict(ranges or {})
        self.flips = list(flips or [])
        self.default_flip = default_flip

    def uniform(self, lo, hi):
        return self.ranges.get((lo, hi), lo)

    def uniform_int(self, lo, hi):
        return int(self.uniform(lo, hi))

    def chance(self, p):
        if self.flips:
            return self.flips.pop(0)
        return self.default_flip

    def choice(self, seq):
        return seq[0]


@pytest.fixture
def sampler():
    return RandomSampler.seeded(1234)


@pytest.fixture
def scripted():
    return ScriptedSampler
