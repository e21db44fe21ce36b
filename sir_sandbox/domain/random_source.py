"""Shared pseudo-random source for one simulation run."""

from __future__ import annotations

from random import Random

from sir_sandbox.config.constants import HEADING_RANGE, JITTER_RANGE


class RandomSource:
    """One generator for the whole run; every draw in the simulation goes through it.

    ``seed=None`` seeds from OS entropy, so runs are not reproducible unless
    a seed is given.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._rng = Random(seed)

    def uniform(self, lo: float, hi: float) -> float:
        return self._rng.uniform(lo, hi)

    def trial(self) -> float:
        """Infection-trial draw in ``[0, 1)``."""
        return self._rng.random()

    def heading(self) -> float:
        return self.uniform(*HEADING_RANGE)

    def jitter(self) -> float:
        return self.uniform(*JITTER_RANGE)
