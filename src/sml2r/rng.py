"""Seeded pseudo-random stream shared by every randomization pass.

A 32-bit linear congruential generator. It is not cryptographically secure;
it only needs to be varied and exactly reproducible for a given seed. Every
pass draws from the same instance, so the order of draws across the whole
pipeline is part of the output.
"""

from collections.abc import MutableSequence, Sequence
from typing import Any, TypeVar

T = TypeVar("T")

MULTIPLIER = 1664525
INCREMENT = 1013904223
MODULUS = 2**32

SEED_MIN = 0x10000000
SEED_MAX = 0xFFFFFFFF


class LCG:
    """Linear congruential generator with a ``random.Random``-like surface."""

    def __init__(self, seed: int):
        self.state = seed % MODULUS

    def next(self) -> int:
        """Advance the state and return it."""
        self.state = (self.state * MULTIPLIER + INCREMENT) % MODULUS
        return self.state

    def random(self) -> float:
        """Return a float in [0, 1)."""
        return self.next() / MODULUS

    def randrange(self, limit: int) -> int:
        """Return an int in [0, limit). Always consumes one draw.

        A non-positive limit yields 0; callers are expected to guard it.
        """
        value = self.random()
        if limit <= 0:
            return 0
        return int(value * limit)

    def randbool(self) -> bool:
        return self.random() < 0.5

    def choice(self, seq: Sequence[T]) -> T:
        return seq[self.randrange(len(seq))]

    def shuffle(self, seq: MutableSequence[Any]) -> None:
        """Shuffle in place, walking from the last index down to 1."""
        for i in range(len(seq) - 1, 0, -1):
            j = self.randrange(i + 1)
            seq[i], seq[j] = seq[j], seq[i]

    def shuffle_avoiding(
        self, seq: MutableSequence[Any], forbidden: Any, slot: int = 0
    ) -> None:
        """Shuffle until ``seq[slot]`` no longer holds ``forbidden``.

        A rejected arrangement is reshuffled as a whole, which consumes
        additional draws.
        """
        if seq and all(item == forbidden for item in seq):
            raise ValueError("Every element equals the forbidden value")
        self.shuffle(seq)
        while seq[slot] == forbidden:
            self.shuffle(seq)


def seed_in_range(seed: int | None) -> bool:
    return seed is not None and SEED_MIN <= seed <= SEED_MAX
