"""Random sampling helpers with separately seeded integer and real generators."""

from __future__ import annotations

import random
import time


class Sample:
    """Draws uniform integers, uniform reals and Gaussian noise."""

    def __init__(self, seed=None):
        self._gen_real = random.Random(seed)
        self._gen_int = random.Random(seed)

    def set_time_based_seed(self) -> None:
        """Seed both generators from the current time."""
        self.seed(time.time_ns())

    def seed(self, value) -> None:
        """Seed both generators with ``value``."""
        self._gen_real.seed(value)
        self._gen_int.seed(value)

    def uniform_int(self, low: int, high: int) -> int:
        """An integer drawn uniformly from ``low`` to ``high`` inclusive."""
        if low > high:
            raise ValueError(f"empty range [{low}, {high}]")
        return self._gen_int.randint(low, high)

    def uniform(self) -> float:
        """A real drawn uniformly from [0, 1)."""
        return self._gen_real.random()

    def gaussian(self, stddev: float) -> float:
        """A zero-mean normal sample with standard deviation ``stddev``."""
        if stddev < 0:
            raise ValueError("standard deviation must not be negative")
        return self._gen_real.gauss(0.0, stddev)