"""Seeded random stream.

Linear congruential generator with the constants p5.js uses for
``randomSeed``/``random``. Two streams built from the same seed yield the
same values, which is what lets a thumbnail regenerate the exact pattern of
the full-size artwork from nothing but its hash.
"""

import math

M = 4294967296  # 2^32
A = 1664525
C = 1013904223


class SeededRandom:
    def __init__(self, seed: int) -> None:
        self.reseed(seed)

    def reseed(self, seed: int) -> None:
        self._state = int(seed) % M

    def random(self) -> float:
        """Next value in [0, 1)."""
        self._state = (A * self._state + C) % M
        return self._state / M

    def floor(self, n: int) -> int:
        """Integer in [0, n), consuming one value."""
        return math.floor(self.random() * n)

    def __call__(self) -> float:
        return self.random()
