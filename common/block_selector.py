"""Random block selection for cache-resistant queries."""

import random
from typing import Optional

from config.defaults import BenchmarkServiceConfig


def select_block(
    seed: int = BenchmarkServiceConfig.SEED_BLOCK,
    entropy_window: int = BenchmarkServiceConfig.ENTROPY_WINDOW,
    rng: Optional[random.Random] = None,
) -> int:
    """Returns a block number in [seed, seed + entropy_window)."""
    source = rng if rng is not None else random
    return seed + source.randrange(entropy_window)
