from pulse_feed.services.sampling import RandomSampler, Sampler
from pulse_feed.services.token_factory import (
    UnknownCategoryError,
    generate_all_categories,
    generate_token,
    generate_tokens,
)
from pulse_feed.services.update_simulator import advance_one, advance_tick

__all__ = [
    "RandomSampler",
    "Sampler",
    "UnknownCategoryError",
    "generate_all_categories",
    "generate_token",
    "generate_tokens",
    "advance_one",
    "advance_tick",
]
