"""
Seeded randomness.

Engines never touch the module-level `random` functions. Each engine owns a
`random.Random` and passes it to these helpers, so a seed fully determines
card shuffles, word picks, food placement and ball serves.
"""

from __future__ import annotations
import random
from typing import Sequence, TypeVar

T = TypeVar("T")


def new_rng(seed: int | None = None) -> random.Random:
    """Create an independent random source."""
    return random.Random(seed)


def shuffled(rng: random.Random, items: Sequence[T]) -> list[T]:
    """Return a uniformly shuffled copy (Fisher-Yates)."""
    result = list(items)
    rng.shuffle(result)
    return result


def pick(rng: random.Random, items: Sequence[T]) -> T:
    """Pick one item uniformly."""
    if not items:
        raise ValueError("cannot pick from an empty sequence")
    return items[rng.randrange(len(items))]


def random_cell(rng: random.Random, width: int, height: int) -> tuple[int, int]:
    """Pick a grid cell uniformly."""
    return rng.randrange(width), rng.randrange(height)


def random_sign(rng: random.Random) -> int:
    return 1 if rng.random() > 0.5 else -1
