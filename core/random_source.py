"""
乱数源

Anything with `randrange(start, stop)` returning a uniform integer in the
half-open range can drive CodeGenerator.
"""
import random
from typing import Protocol

SEED_MAX = 2 ** 64


class RandomSource(Protocol):
    def randrange(self, start: int, stop: int) -> int:
        ...


def make_random_source(seed: int | None = None) -> random.Random:
    """Seeded Mersenne Twister, or one seeded from os.urandom when `seed` is None."""
    if seed is None:
        return random.Random()
    if not 0 <= seed < SEED_MAX:
        raise ValueError(f"seed must be an unsigned 64-bit integer: {seed}")
    return random.Random(seed)
