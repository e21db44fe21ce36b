"""History sampling cadence and chart geometry for recorded tallies."""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import numpy as np

from sir_sandbox.config.constants import CHART_SCALE, STATS_INTERVAL
from sir_sandbox.domain.health import HEALTH_STATES, HealthState, Tally
from sir_sandbox.domain.population import Population


class StatsRecorder:
    """Records a population sample every ``interval`` seconds of wall-clock time.

    Samples are scheduled on a fixed grid (``start + k * interval``) so a fast
    tick rate never drifts the cadence; after a stall longer than one interval
    the schedule restarts from the current time instead of bursting.
    """

    def __init__(
        self,
        interval: float = STATS_INTERVAL,
        clock: Callable[[], float] = time.perf_counter,
        start: float | None = None,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be > 0")
        self.interval = interval
        self._clock = clock
        origin = clock() if start is None else start
        self._due = origin + interval
        self.samples = 0

    def maybe_record(self, population: Population, now: float | None = None) -> bool:
        now = self._clock() if now is None else now
        if now < self._due:
            return False
        population.record_stats()
        self.samples += 1
        self._due += self.interval
        if now >= self._due:
            self._due = now + self.interval
        return True


def history_proportions(history: Sequence[Tally], count: int) -> np.ndarray:
    """Return an ``(n_samples, 3)`` array of per-state fractions in palette order."""
    if count < 1:
        raise ValueError("count must be >= 1")
    if not history:
        return np.zeros((0, len(HEALTH_STATES)))
    counts = np.array(
        [[sample.get(state, 0) for state in HEALTH_STATES] for sample in history], dtype=float
    )
    return counts / count


@dataclass(frozen=True)
class ChartBar:
    """One stacked segment of the history chart, in world coordinates."""

    x: float
    y: float
    width: float
    height: float
    state: HealthState


def chart_bars(
    history: Sequence[Tally],
    count: int,
    world_size: float,
    scale: tuple[float, float] = CHART_SCALE,
) -> list[ChartBar]:
    """Stack S/I/R fractions per sample, anchored at the world's top-left corner.

    Sample ``t`` spans ``scale[0]`` units horizontally; a whole population is
    ``scale[1]`` units tall. The y axis grows downward, as on screen.
    """
    sx, sy = scale
    half = world_size / 2
    bars: list[ChartBar] = []
    for t, fractions in enumerate(history_proportions(history, count)):
        offset = 0.0
        for state, fraction in zip(HEALTH_STATES, fractions, strict=True):
            bars.append(
                ChartBar(
                    x=t * sx - half,
                    y=offset * sy - half,
                    width=sx,
                    height=float(fraction) * sy,
                    state=state,
                )
            )
            offset += float(fraction)
    return bars
