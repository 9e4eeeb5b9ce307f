"""Outcome sources - the random draws that decide attacks."""

from __future__ import annotations

import os
import random
from typing import Protocol, runtime_checkable

OUTCOME_MIN = 0
OUTCOME_MAX = 100


@runtime_checkable
class OutcomeSource(Protocol):
    def draw(self) -> int:
        """Return a uniform integer in [0, 100], inclusive."""
        ...


class SeededOutcomeSource:
    """Uniform draws from a seedable ``random.Random``.

    Passing an existing ``rng`` shares its stream; otherwise a private
    generator is seeded from *seed* (or the OS when *seed* is None).
    """

    def __init__(self, seed: int | None = None, rng: random.Random | None = None) -> None:
        if rng is None:
            if seed is None:
                seed = int.from_bytes(os.urandom(8))
            rng = random.Random(seed)
        self._seed = seed
        self._rng = rng

    @property
    def seed(self) -> int | None:
        return self._seed

    def draw(self) -> int:
        return self._rng.randint(OUTCOME_MIN, OUTCOME_MAX)


class FixedOutcomeSource:
    """Replays scripted draws; repeats the last one when exhausted."""

    def __init__(self, *values: int) -> None:
        if not values:
            raise ValueError("FixedOutcomeSource requires at least one value")
        for value in values:
            if not OUTCOME_MIN <= value <= OUTCOME_MAX:
                raise ValueError(
                    f"outcome must be in [{OUTCOME_MIN}, {OUTCOME_MAX}], got {value}"
                )
        self._values = list(values)
        self._index = 0
        self.draws = 0

    def draw(self) -> int:
        value = self._values[min(self._index, len(self._values) - 1)]
        self._index += 1
        self.draws += 1
        return value
