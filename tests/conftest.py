from __future__ import annotations

import pytest

from sir_sandbox.domain.random_source import RandomSource


class FixedRandom(RandomSource):
    """RandomSource with pinned jitter and trial draws; other draws stay seeded."""

    def __init__(self, trial_value: float = 0.0, jitter_value: float = 0.0) -> None:
        super().__init__(seed=0)
        self.trial_value = trial_value
        self.jitter_value = jitter_value
        self.trials = 0

    def trial(self) -> float:
        self.trials += 1
        return self.trial_value

    def jitter(self) -> float:
        return self.jitter_value


@pytest.fixture
def fixed_rng() -> FixedRandom:
    return FixedRandom()


@pytest.fixture
def make_fixed_rng() -> type[FixedRandom]:
    return FixedRandom
